import cv2
import numpy as np
import pytest

from smile_detector import sources
from smile_detector.errors import ImageSourceError


class FakeCapture:
    instances = []

    def __init__(self, device, opened=True, frame=None):
        self.device = device
        self.opened = opened
        self.frame = frame
        self.released = False
        FakeCapture.instances.append(self)

    def isOpened(self):
        return self.opened

    def read(self):
        return self.frame is not None, self.frame

    def release(self):
        self.released = True


@pytest.fixture(autouse=True)
def _reset_captures():
    FakeCapture.instances = []


def test_read_image_returns_rgb(tmp_path):
    bgr = np.zeros((12, 16, 3), dtype=np.uint8)
    bgr[:, :, 0] = 255
    path = tmp_path / "blue.png"
    assert cv2.imwrite(str(path), bgr)

    image = sources.read_image(path)

    assert image.shape == (12, 16, 3)
    assert (image[:, :, 2] == 255).all()
    assert (image[:, :, 0] == 0).all()


def test_read_image_missing_file(tmp_path):
    with pytest.raises(ImageSourceError):
        sources.read_image(tmp_path / "nope.jpg")


def test_capture_frame_returns_rgb_and_releases(monkeypatch):
    frame = np.zeros((4, 6, 3), dtype=np.uint8)
    frame[:, :, 0] = 200
    monkeypatch.setattr(cv2, "VideoCapture", lambda device: FakeCapture(device, frame=frame))

    image = sources.capture_frame(2)

    assert (image[:, :, 2] == 200).all()
    assert FakeCapture.instances[0].device == 2
    assert FakeCapture.instances[0].released


@pytest.mark.parametrize("opened", [True, False])
def test_capture_frame_failures(monkeypatch, opened):
    monkeypatch.setattr(cv2, "VideoCapture", lambda device: FakeCapture(device, opened=opened))

    with pytest.raises(ImageSourceError):
        sources.capture_frame()
    assert FakeCapture.instances[0].released


def test_both_sources_feed_the_same_array(tmp_path, monkeypatch):
    bgr = np.random.default_rng(3).integers(0, 256, size=(8, 8, 3), dtype=np.uint8)
    path = tmp_path / "frame.png"
    cv2.imwrite(str(path), bgr)
    monkeypatch.setattr(cv2, "VideoCapture", lambda device: FakeCapture(device, frame=bgr))

    assert np.array_equal(sources.read_image(path), sources.capture_frame())
