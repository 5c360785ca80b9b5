"""
Configuration management with schema validation.
Settings come from config/settings.yaml with ${VAR:default} substitution.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .exceptions import ConfigError


# Load environment variables
load_dotenv()

CONFIG_DIR = Path("config")
SETTINGS_FILENAME = "settings.yaml"


class AppSettings(BaseModel):
    name: str = "Lisa's Beauty Corner"
    version: str = "1.0.0"
    environment: str = "production"


class StorageSettings(BaseModel):
    data_dir: str = "data"
    key_prefix: str = "lbc"


class BookingSettings(BaseModel):
    max_per_day: int = Field(default=50, ge=1)


class AuthSettings(BaseModel):
    # bcrypt accepts cost factors 4..31
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file_path: Optional[str] = "logs/beauty_booking.log"
    max_bytes: int = 10485760
    backup_count: int = 5


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    booking: BookingSettings = Field(default_factory=BookingSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _substitute_env_vars(value: Any) -> Any:
    """Recursively substitute ${VAR} and ${VAR:default} references"""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            var_expr = value[2:-1]
            if ":" in var_expr:
                var_name, default = var_expr.split(":", 1)
                return os.getenv(var_name.strip(), default.strip())
            env_value = os.getenv(var_expr)
            if env_value is None:
                raise ConfigError(f"Environment variable {var_expr} not found")
            return env_value
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def load_settings(config_dir: Path = CONFIG_DIR) -> Settings:
    """Load and validate settings.yaml from config_dir"""
    settings_path = Path(config_dir) / SETTINGS_FILENAME
    if not settings_path.exists():
        raise ConfigError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {settings_path}: {e}")

    processed_data = _substitute_env_vars(raw_data)
    try:
        return Settings(**processed_data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid settings in {settings_path}: {e}")
