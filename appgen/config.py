"""appgen configuration.

Typed, validated configuration for a single scaffolding run.  The
:class:`Configuration` model is frozen: it is built once from the CLI options,
validated before anything touches the file system, and then handed to every
generator unchanged.  Derived values (name variants, time zone) are computed
from the stored fields rather than stored separately.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)

from .errors import ConfigurationError, InvalidAppNameError

# Valid locale codes supported by the generator.
SUPPORTED_LOCALES: tuple[str, ...] = (
    "en", "it", "de", "fr", "es", "pt", "nl", "pl", "ru", "ja", "zh",
)

# Locales that ship translation templates.
LOCALES_WITH_TEMPLATES: tuple[str, ...] = ("en", "it")

LOCALE_TIMEZONES: dict[str, str] = {
    "it": "Europe/Rome",
    "de": "Europe/Berlin",
    "fr": "Europe/Paris",
    "es": "Europe/Madrid",
    "pt": "Europe/Lisbon",
    "nl": "Europe/Amsterdam",
    "pl": "Europe/Warsaw",
    "ru": "Europe/Moscow",
    "ja": "Asia/Tokyo",
    "zh": "Asia/Shanghai",
}

MIN_PORT = 1024
MAX_PORT = 65535

_APP_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


class Configuration(BaseModel):
    """Options describing the application to generate.

    Construction raises :class:`~appgen.errors.ConfigurationError` (never a
    raw pydantic ``ValidationError``) so callers can handle every invalid
    input the same way.
    """

    model_config = ConfigDict(frozen=True)

    app_name: str
    rails_port: int = Field(default=3000)
    vite_port: int = Field(default=5173)
    locale: str = Field(default="en")
    with_simple_form: bool = Field(default=False)
    skip_docker: bool = Field(default=False)
    app_path: Path

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _as_configuration_error(exc) from exc

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @model_validator(mode="before")
    @classmethod
    def _default_app_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("app_path") is None:
            name = data.get("app_name")
            data = {**data, "app_path": Path.cwd() / name if isinstance(name, str) else None}
        return data

    @field_validator("app_name", mode="before")
    @classmethod
    def _check_app_name(cls, value: Any) -> Any:
        if not isinstance(value, str) or not _APP_NAME_PATTERN.fullmatch(value):
            raise InvalidAppNameError(value)
        return value

    @field_validator("locale")
    @classmethod
    def _check_locale(cls, value: str) -> str:
        if value not in SUPPORTED_LOCALES:
            raise ValueError(
                f"Unsupported locale '{value}'. Supported locales: {', '.join(SUPPORTED_LOCALES)}"
            )
        return value

    @field_validator("rails_port", "vite_port")
    @classmethod
    def _check_port_range(cls, value: int, info: ValidationInfo) -> int:
        if not MIN_PORT <= value <= MAX_PORT:
            label = "Rails" if info.field_name == "rails_port" else "Vite"
            raise ValueError(
                f"{label} port must be between {MIN_PORT} and {MAX_PORT} (got {value})"
            )
        return value

    @field_validator("app_path")
    @classmethod
    def _resolve_app_path(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @model_validator(mode="after")
    def _check_ports_differ(self) -> "Configuration":
        if self.rails_port == self.vite_port:
            raise ValueError(
                f"Rails port and Vite port must be different (both are {self.rails_port})"
            )
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @computed_field  # type: ignore[prop-decorator]
    @property
    def app_name_snake(self) -> str:
        """``my-blog`` -> ``my_blog``."""
        return self.app_name.replace("-", "_")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def app_name_pascal(self) -> str:
        """``my-blog`` -> ``MyBlog``."""
        return "".join(part.capitalize() for part in self.app_name_snake.split("_"))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def app_name_dash(self) -> str:
        """``my_blog`` -> ``my-blog``."""
        return self.app_name.replace("_", "-")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def timezone(self) -> str:
        """IANA time zone matching :attr:`locale` (``UTC`` for English)."""
        return LOCALE_TIMEZONES.get(self.locale, "UTC")

    @property
    def has_locale_templates(self) -> bool:
        return self.locale in LOCALES_WITH_TEMPLATES

    def context(self) -> dict[str, Any]:
        """Return the variables exposed to templates."""
        data = self.model_dump()
        data["app_path"] = str(self.app_path)
        return data


def _as_configuration_error(exc: ValidationError) -> ConfigurationError:
    """Unwrap the first validation failure into a ``ConfigurationError``."""
    for error in exc.errors():
        original = (error.get("ctx") or {}).get("error")
        if isinstance(original, ConfigurationError):
            return original
        if isinstance(original, Exception):
            return ConfigurationError(str(original))
        location = ".".join(str(part) for part in error.get("loc", ()))
        return ConfigurationError(f"Invalid value for {location or 'configuration'}: {error['msg']}")
    return ConfigurationError(str(exc))


# environment variable -> Defaults field
_ENV_VARIABLES: dict[str, str] = {
    "APPGEN_RAILS_PORT": "rails_port",
    "APPGEN_VITE_PORT": "vite_port",
    "APPGEN_LOCALE": "locale",
}


class Defaults(BaseModel):
    """CLI defaults, overridable through ``APPGEN_*`` environment variables.

    These are only defaults: whatever ends up on the command line still goes
    through :class:`Configuration` validation.
    """

    rails_port: int = Field(default=3000)
    vite_port: int = Field(default=5173)
    locale: str = Field(default="en")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Defaults":
        """Build ``Defaults`` from environment variables.

        Recognised variables (all optional):
            APPGEN_RAILS_PORT, APPGEN_VITE_PORT, APPGEN_LOCALE.

        Raises:
            ConfigurationError: If a variable holds a value of the wrong type.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {
            field: env[variable] for variable, field in _ENV_VARIABLES.items() if env.get(variable)
        }
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0])
            variable = next(var for var, name in _ENV_VARIABLES.items() if name == field)
            raise ConfigurationError(
                f"Invalid value for {variable}: {kwargs[field]!r} ({error['msg']})"
            ) from exc
