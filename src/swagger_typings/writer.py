"""
Writing generated declarations to disk.
"""

import os
import tempfile
from pathlib import Path
from typing import Union

from .compiler import CompileResult
from .config import SwaggerTypingsConfig
from .models import Resource

_SEPARATORS = ("/", "\\")


def _path_component(value: str, field: str) -> str:
    """Refuse names that would escape their output directory."""
    if value in ("", ".", "..") or any(sep in value for sep in _SEPARATORS) or "\0" in value:
        raise ValueError(f"Resource {field} {value!r} cannot be used as a file name")
    return value


def artifact_path(
    config: SwaggerTypingsConfig, resource: Resource, root: Union[str, Path]
) -> Path:
    """Output location ``<root>/<output>/<source>/<name>.<ext>``.

    Raises:
        ValueError: If the source or name contains path separators
    """
    source = _path_component(resource.source, "source")
    name = _path_component(resource.name, "name")
    return Path(root) / config.output / source / f"{name}.{config.ext}"


def write_artifact(
    result: CompileResult, config: SwaggerTypingsConfig, root: Union[str, Path]
) -> Path:
    """Write a successful result, replacing any previous file in one step.

    Args:
        result: The compiled document
        config: Supplies the output directory and extension
        root: Directory the output directory is relative to

    Returns:
        Path: The written file

    Raises:
        ValueError: If the result carries an error instead of text, or its
            resource names are not usable as file names
        OSError: If the directory or file cannot be written
    """
    if not result.ok:
        raise ValueError(f"Cannot write failed result for {result.key}: {result.error}")

    path = artifact_path(config, result.resource, root)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(result.text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path
