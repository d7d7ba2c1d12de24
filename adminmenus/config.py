import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")

_config_path_override: Path | None = None


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def set_config_path(path: str | Path | None) -> None:
    """Override the config file location (used by the -f CLI option)."""
    global _config_path_override
    _config_path_override = Path(path) if path is not None else None


def get_config_path() -> Path:
    """Return the config file path.

    Uses the override if one is set, otherwise ``app.<env>.yaml`` when
    ``ADMINMENUS_ENV`` is set and ``app.yaml`` when it is not.
    """
    if _config_path_override is not None:
        return _config_path_override

    env = os.environ.get("ADMINMENUS_ENV", "").strip()
    if env and env != "production":
        return Path.cwd() / f"app.{env}.yaml"
    return Path.cwd() / "app.yaml"


def load_app_config() -> dict:
    """Load and parse the YAML config with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"{config_path.name} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class MenuConfig(BaseModel):
    """An admin menu to register pages under."""

    slug: str
    menu_title: str = ""
    icon_url: str = ""
    position: int | float | None = None

    def menu_args(self) -> dict:
        return {
            "menu_title": self.menu_title,
            "icon_url": self.icon_url,
            "position": self.position,
        }


class PageConfig(BaseModel):
    """An admin page declared in configuration."""

    slug: str
    title: str
    capability: str = "manage_options"
    menu: str = ""
    body: str = ""


class LogfireConfig(BaseModel):
    """Logfire observability configuration."""

    enabled: bool = False
    service_name: str = "adminmenus"
    environment: str | None = None
    console: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ADMINMENUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "INFO"

    # Capabilities granted by the in-memory host
    capabilities: list[str] = ["manage_options", "read"]

    # Loaded from the YAML config
    menus: list[MenuConfig] = []
    pages: list[PageConfig] = []
    logfire: LogfireConfig = LogfireConfig()


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment and the YAML config."""
    base_settings = Settings()

    try:
        app_config = load_app_config()
    except FileNotFoundError:
        return base_settings

    updates = {}

    for key in ("debug", "log_level", "capabilities", "logfire"):
        if key in app_config:
            updates[key] = app_config[key]

    for key in ("menus", "pages"):
        if key in app_config:
            updates[key] = app_config[key] or []

    if updates:
        return Settings.model_validate({**base_settings.model_dump(), **updates})

    return base_settings


def clear_settings_cache() -> None:
    get_settings.cache_clear()
