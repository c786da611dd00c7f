"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from depsort._enums import DuplicatePolicy


class ConfigError(Exception):
    """Error in depsort configuration."""


@dataclass(slots=True, frozen=True)
class DepsortConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    input: Path | None = None
    target: str | None = None
    duplicates: DuplicatePolicy = DuplicatePolicy.ERROR
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


def _parse_duplicates(value: object) -> DuplicatePolicy:
    if not isinstance(value, str):
        msg = "Invalid [tool.depsort].duplicates: expected string"
        raise ConfigError(msg)
    try:
        return DuplicatePolicy(value)
    except ValueError as e:
        choices = ", ".join(f"'{p}'" for p in DuplicatePolicy)
        msg = f"Invalid [tool.depsort].duplicates '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from e


def load_config(pyproject_path: Path) -> DepsortConfig:
    """Load and validate [tool.depsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DepsortConfig

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

    depsort_section = data.get("tool", {}).get("depsort", {})

    if not depsort_section:
        return DepsortConfig(project_root=project_root)

    input_path: Path | None = None
    if "input" in depsort_section:
        input_value = depsort_section["input"]
        if not isinstance(input_value, str):
            msg = "Invalid [tool.depsort].input: expected string path"
            raise ConfigError(msg)
        input_path = Path(input_value)
        if not input_path.is_absolute():
            input_path = project_root / input_path

    target: str | None = None
    if "target" in depsort_section:
        target = depsort_section["target"]
        if not isinstance(target, str):
            msg = "Invalid [tool.depsort].target: expected string"
            raise ConfigError(msg)

    duplicates = DuplicatePolicy.ERROR
    if "duplicates" in depsort_section:
        duplicates = _parse_duplicates(depsort_section["duplicates"])

    return DepsortConfig(
        input=input_path,
        target=target,
        duplicates=duplicates,
        project_root=project_root,
    )


def get_config() -> DepsortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DepsortConfig (may be empty if no pyproject.toml or no [tool.depsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DepsortConfig()
    return load_config(pyproject_path)
