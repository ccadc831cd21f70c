"""
Application settings.

Settings come from a YAML file (config/config.yaml by default). Secrets can be
supplied through the environment so they never have to live in the file.
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Union
import os
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parents[2] / "config" / "config.yaml"

ENV_OVERRIDES = {
    "ADMIN_API_KEY": ("admin", "api_key"),
    "UPLOADTHING_SECRET": ("uploads", "api_key"),
    "SMTP_PASSWORD": ("email", "smtp_password"),
    "ADMIN_EMAIL": ("email", "admin_email"),
}


class AppSection(BaseModel):
    name: str = "Construction Site API"
    version: str = "1.0.0"
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"])


class AdminSection(BaseModel):
    api_key: Optional[str] = None  # admin routes are open when unset (local development)


class UploadSection(BaseModel):
    api_key: Optional[str] = None
    base_url: str = "https://api.uploadthing.com"
    request_timeout_s: float = 30.0
    list_page_size: int = 500


class EmailSection(BaseModel):
    enabled: bool = False
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    use_tls: bool = True
    timeout_s: float = 30.0
    sender: str = "notifications@example.com"
    admin_email: str = "admin@example.com"
    company_name: str = "Construction Co."


class LoggingSection(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    app: AppSection = Field(default_factory=AppSection)
    admin: AdminSection = Field(default_factory=AdminSection)
    uploads: UploadSection = Field(default_factory=UploadSection)
    email: EmailSection = Field(default_factory=EmailSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)
    templates_dir: Optional[str] = None


def _apply_env_overrides(config: dict) -> dict:
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            config.setdefault(section, {})[key] = value
    return config


def load_settings(config_path: Union[Path, str, None] = None) -> Settings:
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    config: dict = {}
    if path.exists():
        with open(path) as f:
            config = yaml.safe_load(f) or {}
        if not isinstance(config, dict):
            raise ValueError(f"Config must be a mapping: {path}")
    elif config_path:
        raise FileNotFoundError(f"Config not found: {path}")
    else:
        logger.warning(f"No config at {path}, using defaults")

    config = _apply_env_overrides(config)
    try:
        return Settings(**config)
    except ValidationError as e:
        raise ValueError(f"Invalid config {path}: {e}") from e
