"""
Compilation of Swagger documents into TypeScript declaration source.
"""

import logging
import time
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .actions import emit_actions
from .config import StyleOptions, SwaggerTypingsConfig
from .declarations import render_interface
from .definitions import emit_definitions
from .exceptions import NamespaceCollisionError, SwaggerTypingsError
from .formatter import Formatter, create_formatter
from .models import Document, Resource
from .naming import derive_namespace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compiling one document: either ``text`` or ``error`` is set."""

    resource: Resource
    title: str
    description: str
    text: Optional[str] = None
    error: Optional[str] = None
    elapsed_ms: int = 0

    @property
    def key(self) -> Tuple[str, str]:
        return (self.resource.source, self.resource.name)

    @property
    def ok(self) -> bool:
        return self.error is None


def document_namespace(document: Document) -> str:
    return derive_namespace(document.resource.source, document.resource.name)


def build_source(document: Document, namespace: str) -> str:
    """Render the unformatted declarations of a document, definitions first."""
    interfaces = (
        emit_definitions(document, namespace),
        emit_actions(document, namespace),
    )
    return "\n\n".join(render_interface(interface) for interface in interfaces) + "\n"


def compile_document(
    document: Document, formatter: Formatter, style: StyleOptions
) -> CompileResult:
    """Compile and format one document.

    Errors are captured in the result so that a failing document never
    prevents the others from being generated.
    """
    started = time.perf_counter()
    resource = document.resource
    try:
        text = formatter.format(build_source(document, document_namespace(document)), style)
    except SwaggerTypingsError as e:
        logger.error("Failed to generate %s/%s: %s", resource.source, resource.name, e)
        return CompileResult(
            resource, document.title, document.description, error=str(e)
        )
    elapsed_ms = round((time.perf_counter() - started) * 1000)
    return CompileResult(
        resource, document.title, document.description, text=text, elapsed_ms=elapsed_ms
    )


def find_namespace_collisions(documents: Sequence[Document]) -> Dict[str, List[Resource]]:
    """Group the resources that share a namespace with at least one other resource."""
    owners: Dict[str, List[Resource]] = defaultdict(list)
    for document in documents:
        owners[document_namespace(document)].append(document.resource)
    return {namespace: resources for namespace, resources in owners.items() if len(resources) > 1}


def _collision_result(document: Document, resources: Sequence[Resource]) -> CompileResult:
    namespace = document_namespace(document)
    shared = ", ".join(f"{r.source}/{r.name}" for r in resources)
    error = NamespaceCollisionError(f"Namespace {namespace!r} is shared by {shared}")
    logger.error("Failed to generate %s/%s: %s", document.resource.source, document.resource.name, error)
    return CompileResult(
        document.resource, document.title, document.description, error=str(error)
    )


def compile_documents(
    documents: Sequence[Document],
    config: Optional[SwaggerTypingsConfig] = None,
    formatter: Optional[Formatter] = None,
) -> List[CompileResult]:
    """Compile every document, returning results in input order.

    Args:
        documents: Fetched documents with their resources attached
        config: Resolved configuration; defaults apply when omitted
        formatter: Formatter override, otherwise chosen from ``config``

    Returns:
        List[CompileResult]: One result per document
    """
    config = config or SwaggerTypingsConfig()
    formatter = formatter or create_formatter(config)
    collisions = find_namespace_collisions(documents)

    def run(document: Document) -> CompileResult:
        shared = collisions.get(document_namespace(document))
        if shared:
            return _collision_result(document, shared)
        return compile_document(document, formatter, config.style)

    if config.workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            return list(pool.map(run, documents))
    return [run(document) for document in documents]
