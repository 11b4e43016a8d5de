"""Configuration helpers for the weld quoter."""
from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

RESOURCE_DIR = Path(__file__).resolve().parent / "resources"
DEFAULT_VERSION = 1
APP_SETTINGS_ENV_VAR = "WELD_QUOTER_APP_SETTINGS"
_APP_SETTINGS_CACHE: dict[str, Any] | None = None

LOGGER_NAME = "weld_quoter"


def get_logger(*names: str) -> logging.Logger:
    """Return a logger under the shared weld quoter namespace."""

    if not names:
        return logging.getLogger(LOGGER_NAME)
    qualified = ".".join((LOGGER_NAME, *names))
    return logging.getLogger(qualified)


logger = get_logger()


def configure_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Initialise a basic logging configuration if none is present."""

    root = logging.getLogger()
    if root.handlers and not force:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        force=force,
    )


class ConfigError(RuntimeError):
    """Raised when configuration data cannot be loaded or validated."""


def _load_json_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed JSON in {path.name}: {exc}") from exc

    if not isinstance(raw, Mapping):
        raise ConfigError(f"Configuration root must be an object in {path.name}")

    return dict(raw)


def _merge_mappings(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        if key in base and isinstance(base[key], Mapping) and isinstance(value, Mapping):
            base[key] = _merge_mappings(dict(base[key]), value)
        else:
            base[key] = value
    return base


def _load_app_settings_raw() -> dict[str, Any]:
    base = _load_json_mapping(RESOURCE_DIR / "app_settings.json")

    override_raw = os.getenv(APP_SETTINGS_ENV_VAR)
    if override_raw:
        override_path = Path(override_raw).expanduser()
        if override_path.exists():
            try:
                override = _load_json_mapping(override_path)
            except ConfigError as exc:
                raise ConfigError(f"Failed to load override settings: {exc}") from exc
            base = _merge_mappings(base, override)
        else:
            logger.warning("Override settings path does not exist: %s", override_path)

    return base


def load_app_settings(
    *, reload: bool = False, override_path: str | Path | None = None
) -> dict[str, Any]:
    """Return the merged application settings, applying optional overrides.

    ``override_path`` names a JSON file merged over the cached settings for this
    call only.
    """

    global _APP_SETTINGS_CACHE
    if reload or _APP_SETTINGS_CACHE is None:
        _APP_SETTINGS_CACHE = _load_app_settings_raw()

    settings = copy.deepcopy(_APP_SETTINGS_CACHE)
    if override_path is not None:
        settings = _merge_mappings(settings, _load_json_mapping(Path(override_path).expanduser()))
    return settings


def load_named_config(name: str, version: int = DEFAULT_VERSION) -> dict[str, Any]:
    """Return one top-level section of the merged application settings."""

    if version != DEFAULT_VERSION:
        raise ConfigError(
            f"Unsupported version requested: {version!r}; expected {DEFAULT_VERSION}"
        )

    settings = load_app_settings()
    section = settings.get(name)
    if not isinstance(section, Mapping):
        raise ConfigError(f"Missing configuration section in app settings: {name}")

    return dict(section)


def load_weld_settings(*, reload: bool = False, override_path: str | Path | None = None):
    """Return the engine settings bundle built from the merged app settings."""

    from weld_quoter.engine.settings import WeldSettings

    return WeldSettings.from_mapping(
        load_app_settings(reload=reload, override_path=override_path)
    )


def load_item_defaults(weld_type: str) -> dict[str, Any]:
    """Return the default geometry, layers and activity times for ``weld_type``."""

    defaults = load_named_config("defaults")
    section = defaults.get(weld_type)
    if not isinstance(section, Mapping):
        raise ConfigError(f"No defaults configured for weld type: {weld_type}")
    return copy.deepcopy(dict(section))


def save_named_config(
    data: Mapping[str, Any],
    path: str | Path,
    *,
    version: int = DEFAULT_VERSION,
    indent: int = 2,
) -> Path:
    """Persist configuration data with version metadata.

    The output format is inferred from the destination suffix. JSON is used when
    the suffix is unrecognised.
    """

    destination = Path(path)
    payload: dict[str, Any] = {"version": version, "data": dict(data)}

    suffix = destination.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ConfigError(
                "PyYAML is required to save YAML configuration files"
            ) from exc
        text = yaml.safe_dump(payload, sort_keys=False)
    else:
        text = json.dumps(payload, indent=indent, sort_keys=True)

    destination.write_text(text, encoding="utf-8")
    return destination


__all__ = [
    "APP_SETTINGS_ENV_VAR",
    "ConfigError",
    "DEFAULT_VERSION",
    "LOGGER_NAME",
    "RESOURCE_DIR",
    "configure_logging",
    "get_logger",
    "load_app_settings",
    "load_item_defaults",
    "load_named_config",
    "load_weld_settings",
    "logger",
    "save_named_config",
]
