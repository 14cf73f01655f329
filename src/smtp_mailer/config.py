"""Configuration settings for smtp-mailer using pydantic-settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, SecretStr
from pydantic_core import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from smtp_mailer.exceptions import ConfigError


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. SMTP_MAILER_CONFIG_FILE environment variable
    2. ./smtp-mailer.yaml (current directory)
    3. $XDG_CONFIG_HOME/smtp-mailer/config.yaml (defaults to ~/.config)
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        config_paths = [
            os.environ.get("SMTP_MAILER_CONFIG_FILE"),
            Path.cwd() / "smtp-mailer.yaml",
            Path(xdg_config) / "smtp-mailer" / "config.yaml",
        ]

        for path in config_paths:
            if not path:
                continue
            path_obj = Path(path)
            if not path_obj.exists():
                continue
            try:
                with open(path_obj) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                raise ConfigError(
                    f"Invalid YAML syntax: {getattr(e, 'problem', None) or e}",
                    file_path=str(path_obj),
                    line=mark.line + 1 if mark else None,
                    col=mark.column + 1 if mark else None,
                ) from e
            except OSError as e:
                raise ConfigError(
                    f"Cannot read config file: {e}",
                    file_path=str(path_obj),
                ) from e

            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError("Top level must be a mapping", file_path=str(path_obj))
            return data

        return {}


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    errors = error.errors()
    if not errors:
        return "Unknown validation error"

    err = errors[0]
    loc = err.get("loc", ())
    field_name = ".".join(str(part) for part in loc)
    if err.get("type") == "missing" and loc:
        env_key = f"SMTP_MAILER_{str(loc[-1]).upper()}"
        return f"Missing required setting '{field_name}' (set {env_key} or add it to the config file)"
    if loc:
        return f"Invalid value for '{field_name}': {err.get('msg', '')}"
    return str(error)


class Settings(BaseSettings):
    """SMTP client settings loaded from environment variables with SMTP_MAILER_ prefix.

    The same fields may be set in a YAML file:
        sender_address: "me@example.com"
        host: "smtp.example.com"
        port: 587

    Keep the password in SMTP_MAILER_PASSWORD rather than in the file.
    """

    model_config = SettingsConfigDict(env_prefix="SMTP_MAILER_")

    sender_address: str
    password: SecretStr
    host: str
    port: int = Field(default=587, ge=1, le=65535)
    verify_certificate: bool = False
    timeout: float | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )


def get_settings_eager(**overrides: Any) -> Settings:
    """Load settings, failing fast with a readable message.

    Raises:
        ConfigError: If the configuration is missing or invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e
