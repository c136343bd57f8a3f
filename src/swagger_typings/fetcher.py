"""
Retrieval of resource catalogs and Swagger documents over HTTP.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

import requests
from pydantic import ValidationError

from .config import ResourceGroup, SwaggerTypingsConfig
from .exceptions import FetchError
from .models import Document, Resource

logger = logging.getLogger(__name__)

RESOURCES_ENDPOINT = "/swagger-resources"

T = TypeVar("T")
R = TypeVar("R")


def _get_json(session: requests.Session, url: str, timeout: float) -> Any:
    logger.debug("GET %s", url)
    try:
        response = session.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}")
    except ValueError as e:
        raise FetchError(f"Invalid JSON from {url}: {e}")


def fetch_resources(
    group: ResourceGroup, session: requests.Session, timeout: float = 30.0
) -> List[Resource]:
    """Read the resource catalog of one group.

    Args:
        group: The configured resource group
        session: HTTP session to use
        timeout: Request timeout in seconds

    Returns:
        List[Resource]: Resources with ``source`` and absolute ``url`` filled in

    Raises:
        FetchError: If the catalog cannot be retrieved or is malformed
    """
    base_url = group.url.rstrip("/")
    catalog = _get_json(session, base_url + RESOURCES_ENDPOINT, timeout)
    if not isinstance(catalog, list):
        raise FetchError(f"Resource catalog of {group.name} is not a list")

    try:
        return [
            Resource.model_validate(dict(item, source=group.name, url=base_url + item.get("url", "")))
            for item in catalog
        ]
    except (AttributeError, TypeError, ValueError) as e:
        raise FetchError(f"Malformed resource catalog of {group.name}: {e}")


def fetch_document(
    resource: Resource, session: requests.Session, timeout: float = 30.0
) -> Document:
    """Download one Swagger document and attach its resource.

    Raises:
        FetchError: If the document cannot be retrieved or validated
    """
    data = _get_json(session, resource.url, timeout)
    if not isinstance(data, dict):
        raise FetchError(f"Document of {resource.source}/{resource.name} is not an object")
    try:
        return Document.model_validate(dict(data, resource=resource))
    except ValidationError as e:
        raise FetchError(f"Malformed document of {resource.source}/{resource.name}: {e}")


def _fan_out(
    pool: ThreadPoolExecutor, func: Callable[[T], R], items: Sequence[T]
) -> Tuple[List[R], List[FetchError]]:
    results, failures = [], []
    for future in [pool.submit(func, item) for item in items]:
        try:
            results.append(future.result())
        except FetchError as e:
            logger.warning("%s", e)
            failures.append(e)
    return results, failures


def fetch_documents(
    config: SwaggerTypingsConfig, session: Optional[requests.Session] = None
) -> Tuple[List[Document], List[FetchError]]:
    """Fetch every document of every configured resource group.

    Returns:
        Tuple of the documents (in catalog order) and the failures encountered
    """
    own_session = session is None
    session = session or requests.Session()
    try:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            catalogs, failures = _fan_out(
                pool,
                lambda group: fetch_resources(group, session, config.timeout),
                config.resources,
            )
            resources = [resource for catalog in catalogs for resource in catalog]
            documents, document_failures = _fan_out(
                pool,
                lambda resource: fetch_document(resource, session, config.timeout),
                resources,
            )
    finally:
        if own_session:
            session.close()
    return documents, failures + document_failures
