"""Swagger to TypeScript declaration compiler."""

from .compiler import CompileResult, compile_document, compile_documents
from .config import SwaggerTypingsConfig, load_config
from .exceptions import (
    ConfigError,
    FetchError,
    FormatError,
    NamespaceCollisionError,
    SwaggerTypingsError,
)
from .models import Document, Resource

__version__ = "0.1.0"
__all__ = [
    "CompileResult",
    "compile_document",
    "compile_documents",
    "SwaggerTypingsConfig",
    "load_config",
    "ConfigError",
    "FetchError",
    "FormatError",
    "NamespaceCollisionError",
    "SwaggerTypingsError",
    "Document",
    "Resource",
]
