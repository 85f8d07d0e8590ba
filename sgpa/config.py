# sgpa/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Allowed drift of the four component weights away from 100
    WEIGHT_TOLERANCE: float = 0.01

    LOG_LEVEL: str = "INFO"

    # Reject completed predictor marks whose obtained exceeds total
    STRICT_PREDICTOR_MARKS: bool = False

    class Config:
        env_prefix = "SGPA_"
        case_sensitive = False


CONFIG = Settings()
