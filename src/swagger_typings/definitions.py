"""
Emission of the ``<Namespace>Definitions`` interface.
"""

import logging

from .declarations import Interface, Member, ObjectType, quote_string
from .models import Document, ModelSchema
from .naming import definitions_name
from .typemap import map_property_type

logger = logging.getLogger(__name__)


def _model_type(schema: ModelSchema, namespace: str) -> ObjectType:
    required = set(schema.required)
    return ObjectType(
        tuple(
            Member(
                key=quote_string(name),
                type=map_property_type(name, descriptor, namespace),
                optional=name not in required,
                comment=descriptor.description,
            )
            for name, descriptor in schema.properties.items()
        )
    )


def emit_definitions(document: Document, namespace: str) -> Interface:
    """Build one interface holding every object model of the document.

    Models are keyed by their raw (quoted) names in document order. Scalar
    models such as ``type: string`` enums are not emitted.
    """
    members = []
    for name, schema in (document.definitions or {}).items():
        if not schema.is_object:
            logger.debug("Skipping non-object model %r (type=%r)", name, schema.type)
            continue
        members.append(
            Member(
                key=quote_string(name),
                type=_model_type(schema, namespace),
                comment=schema.description,
            )
        )
    return Interface(definitions_name(namespace), tuple(members))
