"""Configuration loading from Cargo.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from crate_release.config.models import CrateReleaseConfig
from crate_release.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"
CONFIG_TABLE = "crate-release"


def find_cargo_toml(start: Path | None = None) -> Path:
    """Find Cargo.toml in ``start`` or any of its parents.

    Raises:
        ConfigNotFoundError: If no Cargo.toml is found
    """
    start = (start or Path.cwd()).resolve()
    for directory in [start, *start.parents]:
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No {MANIFEST_NAME} found in {start} or any parent directory")


def load_cargo_toml(path: Path) -> dict[str, Any]:
    """Parse a Cargo.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"{path} does not exist")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_crate_release_config(cargo: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[package.metadata.crate-release]`` table, or an empty dict."""
    return cargo.get("package", {}).get("metadata", {}).get(CONFIG_TABLE, {})


def get_package_name(cargo: dict[str, Any]) -> str | None:
    return cargo.get("package", {}).get("name")


def load_config(path: Path | None = None) -> CrateReleaseConfig:
    """Load configuration for the project at ``path``.

    The executable name defaults to the package name.

    Raises:
        ConfigNotFoundError: If no Cargo.toml is found
        ConfigValidationError: If the configuration is invalid
    """
    cargo_path = find_cargo_toml(path)
    cargo = load_cargo_toml(cargo_path)
    raw = extract_crate_release_config(cargo)

    try:
        config = CrateReleaseConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [package.metadata.{CONFIG_TABLE}] in {cargo_path}:\n{e}"
        ) from e

    if config.executable is None:
        config = config.model_copy(update={"executable": get_package_name(cargo)})
    logger.debug("Loaded config from %s: %s", cargo_path, config)
    return config
