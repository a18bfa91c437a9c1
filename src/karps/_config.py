"""Configuration loading from pyproject.toml."""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

from ._cache import UpdatePolicy
from ._errors import ConfigError


@dataclass(slots=True, frozen=True)
class KarpsConfig:
    """Configuration loaded from the ``[tool.karps]`` section of pyproject.toml."""

    update_policy: UpdatePolicy = UpdatePolicy.OVERWRITE
    log_level: int | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_update_policy(value: object) -> UpdatePolicy:
    if not isinstance(value, str):
        msg = "Invalid [tool.karps].update-policy: expected string"
        raise ConfigError(msg)
    try:
        return UpdatePolicy(value.lower())
    except ValueError:
        choices = ", ".join(f"'{p}'" for p in UpdatePolicy)
        msg = f"Invalid [tool.karps].update-policy '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def _parse_log_level(value: object) -> int:
    if not isinstance(value, str):
        msg = "Invalid [tool.karps].log-level: expected string"
        raise ConfigError(msg)
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        msg = f"Invalid [tool.karps].log-level '{value}'"
        raise ConfigError(msg)
    return level


def load_config(pyproject_path: Path) -> KarpsConfig:
    """Load and validate [tool.karps] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed KarpsConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    tool_section = data.get("tool", {})
    karps_section = tool_section.get("karps", {})

    if not karps_section:
        return KarpsConfig(project_root=project_root)

    update_policy = UpdatePolicy.OVERWRITE
    if "update-policy" in karps_section:
        update_policy = _parse_update_policy(karps_section["update-policy"])

    log_level: int | None = None
    if "log-level" in karps_section:
        log_level = _parse_log_level(karps_section["log-level"])

    return KarpsConfig(
        update_policy=update_policy,
        log_level=log_level,
        project_root=project_root,
    )


def get_config() -> KarpsConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        KarpsConfig (defaults if no pyproject.toml or no [tool.karps] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return KarpsConfig()
    return load_config(pyproject_path)
