"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for peergen:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.peergen/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~peergen.models.GlobalConfig`
  JSON file storing output defaults and naming conventions.
* **Project config** -- An optional ``peergen.json`` in the working
  directory that pins the project model source and overrides conventions
  for one repository.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config and global config into the
  effective :class:`~peergen.models.Conventions`.

All file writes go through :func:`atomic_write` (temp file then rename),
which the descriptor and scaffold writers reuse.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from peergen.exceptions import ConfigError
from peergen.models import Conventions, GlobalConfig

_APP_NAME = "peergen"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "peergen.json"

ENV_PROJECT = "PEERGEN_PROJECT"
ENV_LINKS_ROOT = "PEERGEN_LINKS_ROOT"
ENV_OUTPUT_BASE = "PEERGEN_OUTPUT_BASE"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    return Path.home().joinpath(*default_segments)


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/peergen/`` (default ``~/.config/peergen/``).
    On macOS/Windows: ``~/.peergen/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/peergen/`` (default ``~/.local/share/peergen/``).
    On macOS/Windows: ``~/.peergen/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    """Write *data* to *path* atomically using a temp file and rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX. Newlines are written
    untranslated. On any failure the temp file is removed and the error
    propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding=encoding,
            newline="",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~peergen.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically."""
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``peergen.json`` from *directory* (default: the working directory).

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not a valid JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_project: Optional[str] = None,
) -> tuple[GlobalConfig, Conventions, Optional[str]]:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_project``)
        2. Environment variables (``PEERGEN_PROJECT``, ``PEERGEN_LINKS_ROOT``,
           ``PEERGEN_OUTPUT_BASE``)
        3. Project config (``./peergen.json``)
        4. User config (``~/.config/peergen/config.json``)
        5. Defaults

    Returns:
        A ``(global_config, conventions, project_source)`` tuple.
        ``project_source`` is ``None`` when nothing names a project model.

    Raises:
        ConfigError: If a config file is invalid or names an unknown
            convention.
    """
    global_cfg = load_global_config()
    merged: dict[str, Any] = global_cfg.conventions.model_dump()
    project_source = global_cfg.project

    project = load_project_config()
    if project is not None:
        overrides = project.get("conventions") or {}
        if not isinstance(overrides, dict):
            raise ConfigError("Project config 'conventions' must be a JSON object")
        merged.update(overrides)
        if project.get("project"):
            project_source = str(project["project"])

    if os.environ.get(ENV_LINKS_ROOT):
        merged["links_root"] = os.environ[ENV_LINKS_ROOT]
    if os.environ.get(ENV_OUTPUT_BASE):
        merged["output_base"] = os.environ[ENV_OUTPUT_BASE]
    if os.environ.get(ENV_PROJECT):
        project_source = os.environ[ENV_PROJECT]

    if cli_project is not None:
        project_source = cli_project

    try:
        conventions = Conventions.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid conventions: {exc}") from exc

    return global_cfg, conventions, project_source
