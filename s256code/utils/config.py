import os
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

from .pkce import DEFAULT_ENTROPY

ENV_OVERRIDES = {
    "entropy_bytes": "S256CODE_ENTROPY",
    "log_level": "S256CODE_LOG_LEVEL",
    "log_file": "S256CODE_LOG_FILE",
}

class ToolSettings(BaseModel):
    """Tool settings model"""
    entropy_bytes: int = Field(default=DEFAULT_ENTROPY)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

class ConfigLoader:
    """Configuration loader with environment variable support"""
    def __init__(self, dotenv_path: Optional[str] = None):
        load_dotenv(dotenv_path)  # Load environment variables from .env file if present
        self.config = self._load_config()

    def _load_config(self) -> ToolSettings:
        """Build settings from defaults overridden by environment variables"""
        config_data = {}
        for key, env_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:  # Only override if environment variable is set
                config_data[key] = value

        return ToolSettings(**config_data)

    def get_config(self) -> ToolSettings:
        """Get the loaded configuration"""
        return self.config
