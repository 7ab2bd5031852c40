"""Configuration management"""
import logging
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration"""

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    APP_CONFIG_PATH: Path = Path(os.getenv("RXREMINDER_CONFIG", str(BASE_DIR / "config" / "app_config.yaml")))

    # Load app config
    _app_config: Optional[Dict[str, Any]] = None

    # Storage
    DATA_DIR: Path = Path(os.getenv("RXREMINDER_DATA_DIR", "./data"))

    # Output settings
    OUTPUT_DIR: Path = Path(os.getenv("OUTPUT_DIR", "./results"))
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    @classmethod
    def load_app_config(cls) -> Dict[str, Any]:
        """Load application configuration from YAML file"""
        if cls._app_config is not None:
            return cls._app_config

        try:
            if cls.APP_CONFIG_PATH.exists():
                with open(cls.APP_CONFIG_PATH, "r", encoding="utf-8") as f:
                    cls._app_config = yaml.safe_load(f) or {}
                    return cls._app_config
            else:
                # Return empty dict if config file doesn't exist
                return {}
        except (yaml.YAMLError, IOError) as e:
            raise ValueError(f"Failed to load app config from {cls.APP_CONFIG_PATH}: {e}")

    @classmethod
    def get(cls, *keys, default=None):
        """Get nested config value

        Args:
            *keys: Variable number of keys to traverse nested config
            default: Default value if key not found

        Example:
            Config.get("storage", "reminders_key") -> config["storage"]["reminders_key"]
        """
        config = cls.load_app_config()
        value = config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value if value is not None else default

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values"""
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            raise ValueError(
                f"LOG_LEVEL '{cls.LOG_LEVEL}' is not a valid logging level. "
                "Use DEBUG, INFO, WARNING, ERROR or CRITICAL."
            )

    @classmethod
    def ensure_directories(cls) -> None:
        """Ensure data, output and log directories exist"""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def reminders_path(cls) -> Path:
        """JSON file holding medication reminders"""
        key = cls.get("storage", "reminders_key", default="rxscanner_reminders")
        return cls.DATA_DIR / f"{key}.json"

    @classmethod
    def refill_reminders_path(cls) -> Path:
        """JSON file holding refill reminders"""
        key = cls.get("storage", "refill_reminders_key", default="rxscanner_refill_reminders")
        return cls.DATA_DIR / f"{key}.json"

    @classmethod
    def prescriptions_path(cls) -> Path:
        """JSON file holding saved prescriptions"""
        key = cls.get("storage", "prescriptions_key", default="rxscanner_prescriptions_list")
        return cls.DATA_DIR / f"{key}.json"
