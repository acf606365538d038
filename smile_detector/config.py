import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_MODEL_PATH = "smile_detection_model.tflite"


@dataclass(frozen=True)
class Settings:
    model_path: str = DEFAULT_MODEL_PATH
    camera_index: int = 0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            model_path=os.getenv("SMILE_MODEL_PATH", DEFAULT_MODEL_PATH),
            camera_index=int(os.getenv("SMILE_CAMERA_INDEX", "0")),
            log_level=os.getenv("SMILE_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
