"""
Configuration management for the business card extraction API.

Handles environment variables, the Vision API key, and application settings.
"""

import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Application configuration class.

    Attributes:
        DEBUG: Enable debug mode
        TESTING: Enable testing mode
        SECRET_KEY: Flask secret key
        MAX_CONTENT_LENGTH: Maximum upload file size (16MB default)
        UPLOAD_FOLDER: Directory for uploaded files
        ALLOWED_EXTENSIONS: Allowed image file extensions
        GOOGLE_API_KEY: Cloud Vision API key; Vision OCR is skipped without it
        USE_LOCAL_OCR: Enable the EasyOCR fallback engine
    """

    # Flask Settings
    DEBUG: bool = _env_flag("NAMECARD_DEBUG")
    TESTING: bool = _env_flag("NAMECARD_TESTING")
    SECRET_KEY: str = os.getenv("NAMECARD_SECRET_KEY", "dev-secret-key-change-in-production")

    # File Upload Settings
    MAX_CONTENT_LENGTH: int = 16 * 1024 * 1024  # 16MB max file size
    UPLOAD_FOLDER: str = os.getenv("NAMECARD_UPLOAD_FOLDER", "uploads")
    ALLOWED_EXTENSIONS: set = {"png", "jpg", "jpeg", "webp", "bmp", "gif"}

    # Google Vision
    GOOGLE_API_KEY: Optional[str] = os.getenv("GOOGLE_API_KEY")
    VISION_TIMEOUT: float = float(os.getenv("NAMECARD_VISION_TIMEOUT", "30"))

    # Local OCR fallback
    OCR_LANGUAGES: list = ["ko", "en"]
    USE_LOCAL_OCR: bool = _env_flag("NAMECARD_USE_LOCAL_OCR", "True")
    OCR_GPU: bool = _env_flag("NAMECARD_OCR_GPU")
    OCR_MAX_DIMENSION: int = int(os.getenv("NAMECARD_OCR_MAX_DIMENSION", "2400"))

    # Logging
    LOG_LEVEL: str = os.getenv("NAMECARD_LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def init_app(cls, app) -> None:
        """Initialize Flask app with configuration.

        Args:
            app: Flask application instance
        """
        app.config.from_object(cls)

        os.makedirs(cls.UPLOAD_FOLDER, exist_ok=True)

        logging.basicConfig(
            level=getattr(logging, cls.LOG_LEVEL.upper(), logging.INFO),
            format=cls.LOG_FORMAT
        )

        logger.info("Configuration initialized successfully")

    @classmethod
    def is_allowed_file(cls, filename: str) -> bool:
        """Check if file extension is allowed.

        Args:
            filename: Name of the file to check

        Returns:
            True if file extension is allowed, False otherwise
        """
        return "." in filename and \
            filename.rsplit(".", 1)[1].lower() in cls.ALLOWED_EXTENSIONS

    @classmethod
    def get_api_status(cls) -> dict:
        """Report which OCR engines are configured."""
        return {
            "google_vision": cls.GOOGLE_API_KEY is not None,
            "local_ocr": cls.USE_LOCAL_OCR,
        }


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    LOG_LEVEL = "INFO"


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    LOG_LEVEL = "DEBUG"
    GOOGLE_API_KEY = None
    USE_LOCAL_OCR = False


# Configuration mapping
config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig
}


def get_config(config_name: Optional[str] = None) -> Config:
    """Get configuration class by name.

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Configuration class
    """
    if config_name is None:
        config_name = os.getenv("NAMECARD_ENV", "development")
    return config_by_name.get(config_name, DevelopmentConfig)
