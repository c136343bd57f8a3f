"""
Mapping of Swagger field shapes to TypeScript type fragments.
"""

import logging

from .declarations import literal_union, quote_string
from .models import Parameter, PropertyDescriptor
from .naming import definitions_name, strip_ref

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
ID_TYPE = "string | number"

_SCALAR_PARAMETER_TYPES = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
}


def is_identifier_name(name: str) -> bool:
    """Identifier-like fields are serialized inconsistently across services."""
    return "id" in name.lower()


def reference_type(namespace: str, ref: str) -> str:
    """Indexed access into the document's own Definitions interface."""
    return f"{definitions_name(namespace)}[{quote_string(strip_ref(ref))}]"


def map_property_type(name: str, descriptor: PropertyDescriptor, namespace: str) -> str:
    """Map a model property (or a response/body schema) to a type fragment.

    Args:
        name: Field name, used for the identifier widening rule
        descriptor: The property's shape
        namespace: Namespace of the document being compiled

    Returns:
        str: Type fragment; unrecognized shapes become ``unknown``
    """
    kind = descriptor.type
    if kind == "string":
        return "string"
    if kind in ("integer", "number"):
        return ID_TYPE if is_identifier_name(name) else "number"
    if kind == "array":
        items = descriptor.items
        if items is not None and items.ref:
            return f"{reference_type(namespace, items.ref)}[]"
        return f"{UNKNOWN}[]"
    if kind is None and descriptor.ref:
        return reference_type(namespace, descriptor.ref)

    logger.info("Unrecognized shape for field %r (type=%r), using %s", name, kind, UNKNOWN)
    return UNKNOWN


def map_parameter_type(parameter: Parameter, widen_ids: bool = True) -> str:
    """Map a query or path parameter to a type fragment.

    Args:
        parameter: The parameter to map
        widen_ids: Apply the identifier widening rule to the parameter name
    """
    kind = parameter.type
    if isinstance(kind, str) and kind in _SCALAR_PARAMETER_TYPES:
        if widen_ids and is_identifier_name(parameter.name):
            return ID_TYPE
        if kind == "string" and parameter.enum:
            return literal_union(parameter.enum)
        return _SCALAR_PARAMETER_TYPES[kind]

    if kind == "array":
        item_kind = parameter.items.type if parameter.items else None
        if item_kind == "string":
            if parameter.items.enum:
                return literal_union(parameter.items.enum)
            return "string[]"
        if item_kind in ("integer", "number"):
            return "number[]"
        return f"{UNKNOWN}[]"

    logger.info(
        "Unrecognized shape for parameter %r (type=%r), using %s",
        parameter.name,
        kind,
        UNKNOWN,
    )
    return UNKNOWN
