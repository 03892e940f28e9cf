"""Settings loading for callqueue.

Registry behaviour can be tuned from a TOML file in the working directory
or from environment variables.

Settings precedence (highest to lowest):
1. Settings passed explicitly to QueueRegistry(settings=...)
2. CALLQUEUE_ON_ERROR / CALLQUEUE_DROP_EMPTY environment variables
3. [registry] table of callqueue.toml
4. [tool.callqueue] table of pyproject.toml
5. Model defaults
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib

from .errors import ConfigError

CONFIG_FILENAME = "callqueue.toml"
PYPROJECT_FILENAME = "pyproject.toml"

ENV_ON_ERROR = "CALLQUEUE_ON_ERROR"
ENV_DROP_EMPTY = "CALLQUEUE_DROP_EMPTY"

_ENV_FIELDS = {
    ENV_ON_ERROR: "on_error",
    ENV_DROP_EMPTY: "drop_empty",
}


class RegistrySettings(BaseModel):
    """Behaviour switches for a QueueRegistry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    on_error: Literal["raise", "log"] = Field(
        default="raise",
        description="'raise' propagates callback errors and aborts the pass; "
        "'log' logs them and continues with the next callback.",
    )
    drop_empty: bool = Field(
        default=False,
        description="Delete a queue once remove() or execute_and_clear() leaves it empty.",
    )


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _validate(data: Dict[str, Any], source: str) -> RegistrySettings:
    try:
        return RegistrySettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid callqueue settings from {source}: {exc}") from exc


def _file_settings(base_dir: Path) -> tuple[Dict[str, Any], Optional[Path]]:
    """Return the raw settings table and the file it came from, if any."""
    candidate = base_dir / CONFIG_FILENAME
    if candidate.exists():
        data = _read_toml(candidate).get("registry", {})
        return _table(data, "[registry]", candidate), candidate

    pyproject = base_dir / PYPROJECT_FILENAME
    if pyproject.exists():
        tool = _table(_read_toml(pyproject).get("tool", {}), "[tool]", pyproject)
        data = tool.get("callqueue")
        if data is not None:
            return _table(data, "[tool.callqueue]", pyproject), pyproject

    return {}, None


def _table(data: Any, label: str, path: Path) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigError(f"Expected {label} to be a table in {path}, got {type(data).__name__}")
    return dict(data)


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    overrides = {}
    for env_name, field_name in _ENV_FIELDS.items():
        value = environ.get(env_name)
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_settings(
    base_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RegistrySettings:
    """Load registry settings from config files and the environment.

    Args:
        base_dir: Directory to look for callqueue.toml / pyproject.toml in.
            Defaults to the current working directory.
        environ: Environment mapping to read overrides from. Defaults to
            os.environ.

    Returns:
        Validated RegistrySettings

    Raises:
        ConfigError: If a config file or environment variable holds an
            invalid value
    """
    base_dir = Path.cwd() if base_dir is None else Path(base_dir)
    environ = os.environ if environ is None else environ

    data, path = _file_settings(base_dir)
    if path is not None:
        _validate(data, str(path))

    overrides = _env_overrides(environ)
    if not overrides:
        return _validate(data, str(path) if path else "defaults")

    sources = ", ".join(
        env_name for env_name, field_name in _ENV_FIELDS.items() if field_name in overrides
    )
    return _validate({**data, **overrides}, sources)
