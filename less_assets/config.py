"""Load and save the pipeline configuration (JSON file + environment + overrides)."""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from pathlib import Path
from typing import Any

from less_assets.models import CompileConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("less-assets.json")
ENV_PREFIX = "LESS_ASSETS_"

_FIELDS = {f.name: f for f in dataclasses.fields(CompileConfig)}
_BOOL_FIELDS = {"check_dates", "use_compression", "check_dependencies", "strict", "strip_comments"}
_PATH_FIELDS = {"source_root", "artifact_root", "base_dir"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _coerce(name: str, value: Any) -> Any:
    if name in _BOOL_FIELDS:
        return _parse_bool(name, value)
    if name in _PATH_FIELDS:
        return Path(value)
    if name == "compiler_timeout":
        return None if value in (None, "") else float(value)
    if name == "skip_dirs":
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return list(value)
    return value


def _check_keys(data: dict, origin: str) -> None:
    unknown = sorted(set(data) - set(_FIELDS))
    if unknown:
        raise ValueError(f"Unknown configuration key(s) in {origin}: {', '.join(unknown)}")


def _read_file(path: Path) -> dict:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    _check_keys(data, str(path))
    return data


def _read_env(environ: dict[str, str]) -> dict:
    data = {}
    for name in _FIELDS:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            data[name] = environ[key]
    return data


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
    **overrides: Any,
) -> CompileConfig:
    """Build a CompileConfig.

    Precedence, lowest first: dataclass defaults, the JSON file,
    ``LESS_ASSETS_*`` environment variables, keyword overrides. Overrides
    set to None are ignored so unset CLI flags fall through.

    Relative roots in the JSON file are taken relative to the file's directory.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    config_path = Path(path) if path is not None else DEFAULT_CONFIG_FILE
    if config_path.is_file():
        file_data = _read_file(config_path)
        for name in _PATH_FIELDS & set(file_data):
            p = Path(file_data[name])
            if not p.is_absolute():
                file_data[name] = config_path.parent / p
        values.update(file_data)
        logger.debug("Loaded configuration from %s", config_path)
    elif path is not None:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    values.update(_read_env(env))

    given = {k: v for k, v in overrides.items() if v is not None}
    _check_keys(given, "overrides")
    values.update(given)

    return CompileConfig(**{name: _coerce(name, value) for name, value in values.items()})


def save_config(config: CompileConfig, path: str | Path = DEFAULT_CONFIG_FILE) -> Path:
    """Write *config* as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    return path
