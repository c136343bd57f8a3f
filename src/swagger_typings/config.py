"""
Configuration loading for swagger-typings.
"""

import json
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

CONFIG_FILENAMES = ("swagger-typings.yaml", "swagger-typings.yml", "package.json")
PACKAGE_KEY = "swagger"


class ResourceGroup(BaseModel):
    """A service whose ``/swagger-resources`` catalog is polled."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class StyleOptions(BaseModel):
    """Formatting options handed to the formatter."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    semi: bool = False
    single_quote: bool = Field(True, alias="singleQuote")


class SwaggerTypingsConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    output: str = "definitions"
    ext: Literal["d.ts", "ts"] = "d.ts"
    resources: List[ResourceGroup] = Field(default_factory=list)
    style: StyleOptions = Field(
        default_factory=StyleOptions,
        validation_alias=AliasChoices("style", "prettier"),
    )
    formatter: Literal["builtin", "prettier"] = "builtin"
    prettier_command: List[str] = Field(
        default_factory=lambda: ["npx", "--no-install", "prettier"],
        alias="prettierCommand",
    )
    workers: int = Field(4, ge=1)
    timeout: float = Field(30.0, gt=0)


def _read(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def _has_package_section(path: Path) -> bool:
    try:
        data = _read(path)
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and isinstance(data.get(PACKAGE_KEY), dict)


def find_config(search_dir: Union[str, Path]) -> Optional[Path]:
    """Return the first known config file in ``search_dir``, if any.

    A ``package.json`` only counts when it carries a ``swagger`` object.
    """
    for filename in CONFIG_FILENAMES:
        candidate = Path(search_dir) / filename
        if not candidate.is_file():
            continue
        if candidate.suffix == ".json" and not _has_package_section(candidate):
            continue
        return candidate
    return None


def load_config(
    path: Optional[Union[str, Path]] = None,
    search_dir: Optional[Union[str, Path]] = None,
) -> SwaggerTypingsConfig:
    """Load and validate the configuration.

    Args:
        path: Explicit config file (YAML, or a JSON file such as
              ``package.json``). If not provided, ``search_dir`` is searched
        search_dir: Directory to search for a config file, defaults to the cwd

    Returns:
        SwaggerTypingsConfig: The resolved configuration

    Raises:
        ConfigError: If no file is found or its content is invalid
    """
    if path is None:
        path = find_config(search_dir or Path.cwd())
        if path is None:
            raise ConfigError(
                f"No configuration file found (looked for {', '.join(CONFIG_FILENAMES)})"
            )

    path = Path(path)
    try:
        data = _read(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read configuration {path}: {e}")
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {path} must be a mapping")
    if isinstance(data.get(PACKAGE_KEY), dict):
        data = data[PACKAGE_KEY]
    elif path.suffix == ".json":
        raise ConfigError(f"Configuration {path} has no {PACKAGE_KEY!r} object")

    try:
        return SwaggerTypingsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration {path}: {e}")
