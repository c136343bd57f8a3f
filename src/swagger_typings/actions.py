"""
Emission of the ``<Namespace>Actions`` interface.

Every public operation becomes one field keyed by ``"<VERB> <route>"``
whose type describes the operation's parameters and responses.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from .declarations import Interface, Member, ObjectType, quote_string
from .models import Document, Operation, Parameter
from .naming import action_key, actions_name
from .typemap import UNKNOWN, map_parameter_type, map_property_type, reference_type

logger = logging.getLogger(__name__)

INTERNAL_PATH_PREFIX = "/api"
ERROR_TUPLE_SUFFIXES = (".code", ".type", ".message", ".description")
FIELD_LOCATIONS = ("query", "body", "path")


@dataclass(frozen=True)
class ParameterGroup:
    """``X.code``/``X.type``/``X.message``/``X.description`` collapsed into ``X``."""

    name: str
    code: Parameter
    parameters: Tuple[Parameter, ...]


@dataclass(frozen=True)
class SingleParameter:
    parameter: Parameter


GroupedParameter = Union[ParameterGroup, SingleParameter]


def is_internal_path(path: str) -> bool:
    return path.startswith(INTERNAL_PATH_PREFIX)


def _is_error_tuple(window: Sequence[Parameter]) -> bool:
    return len(window) == len(ERROR_TUPLE_SUFFIXES) and all(
        parameter.name.endswith(suffix)
        for parameter, suffix in zip(window, ERROR_TUPLE_SUFFIXES)
    )


def group_parameters(parameters: Sequence[Parameter]) -> List[GroupedParameter]:
    """Tag each parameter as standalone or as part of a collapsed error tuple.

    Args:
        parameters: Parameters of one location, in document order

    Returns:
        List of ``ParameterGroup`` and ``SingleParameter`` in document order
    """
    grouped: List[GroupedParameter] = []
    size = len(ERROR_TUPLE_SUFFIXES)
    index = 0
    while index < len(parameters):
        window = parameters[index:index + size]
        if _is_error_tuple(window):
            code = window[0]
            name = code.name[: -len(ERROR_TUPLE_SUFFIXES[0])]
            grouped.append(ParameterGroup(name, code, tuple(window)))
            index += size
        else:
            grouped.append(SingleParameter(parameters[index]))
            index += 1
    return grouped


def _parameter_member(entry: GroupedParameter) -> Member:
    if isinstance(entry, ParameterGroup):
        # Typed by the code parameter alone, whatever the prefix is called
        name, parameter, widen_ids = entry.name, entry.code, False
    else:
        name, parameter, widen_ids = entry.parameter.name, entry.parameter, True
    return Member(
        key=quote_string(name),
        type=map_parameter_type(parameter, widen_ids=widen_ids),
        optional=not parameter.required,
        comment=parameter.description,
    )


def _body_type(parameters: Sequence[Parameter], namespace: str) -> str:
    body = parameters[0]
    if len(parameters) > 1:
        logger.info(
            "Operation declares %d body parameters, only %r is used",
            len(parameters),
            body.name,
        )
    schema = body.schema_
    if schema is None:
        return UNKNOWN
    if schema.ref:
        return reference_type(namespace, schema.ref)
    return map_property_type(body.name, schema, namespace)


def _parameters_type(operation: Operation, namespace: str) -> ObjectType:
    by_location = {location: [] for location in FIELD_LOCATIONS}
    for parameter in operation.parameters:
        if parameter.location in by_location:
            by_location[parameter.location].append(parameter)
        else:
            logger.debug("Ignoring %s parameter %r", parameter.location, parameter.name)

    members = []
    for location in FIELD_LOCATIONS:
        parameters = by_location[location]
        if not parameters:
            continue
        if location == "body":
            members.append(Member("body", _body_type(parameters, namespace)))
        else:
            fields = tuple(_parameter_member(entry) for entry in group_parameters(parameters))
            members.append(Member(location, ObjectType(fields)))
    return ObjectType(tuple(members))


def _responses_type(operation: Operation, namespace: str) -> ObjectType:
    members = []
    for status, response in operation.responses.items():
        type_ = UNKNOWN
        if status == "200" and response.schema_ is not None:
            type_ = map_property_type("", response.schema_, namespace)
        members.append(Member(quote_string(status), type_))
    return ObjectType(tuple(members))


def _operation_type(operation: Operation, namespace: str) -> ObjectType:
    members = []
    if operation.parameters:
        members.append(Member("parameters", _parameters_type(operation, namespace)))
    if operation.responses:
        members.append(Member("responses", _responses_type(operation, namespace)))
    return ObjectType(tuple(members))


def emit_actions(document: Document, namespace: str) -> Interface:
    """Build one interface describing every public operation of the document."""
    members = []
    for path, operations in (document.paths or {}).items():
        if is_internal_path(path):
            logger.debug("Skipping internal path %s", path)
            continue
        for verb, operation in operations.items():
            members.append(
                Member(
                    key=quote_string(action_key(verb, path)),
                    type=_operation_type(operation, namespace),
                    comment=operation.comment,
                )
            )
    return Interface(actions_name(namespace), tuple(members))
