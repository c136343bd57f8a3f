"""
Identifier and path derivation for generated declarations.
"""

import re

DEFINITIONS_REF_PREFIX = "#/definitions/"

_PATH_PARAMETER = re.compile(r"\{([^}]*)\}")


def pascal_case(text: str) -> str:
    """Uppercase the first letter of each hyphen-delimited segment and join them."""
    return "".join(segment[:1].upper() + segment[1:] for segment in text.split("-"))


def derive_namespace(source: str, resource_name: str) -> str:
    """Build the prefix shared by a resource's generated interface names.

    Args:
        source: Name of the resource group the resource was discovered in
        resource_name: Name of the resource within that group

    Returns:
        str: e.g. ``UserCenterOrders`` for ``("user-center", "orders")``
    """
    return pascal_case(source) + pascal_case(resource_name)


def definitions_name(namespace: str) -> str:
    return f"{namespace}Definitions"


def actions_name(namespace: str) -> str:
    return f"{namespace}Actions"


def strip_ref(ref: str) -> str:
    if ref.startswith(DEFINITIONS_REF_PREFIX):
        return ref[len(DEFINITIONS_REF_PREFIX):]
    return ref


def action_key(verb: str, path: str) -> str:
    """Key of an action field, e.g. ``GET /users/:id`` for ``get /users/{id}``."""
    route = _PATH_PARAMETER.sub(r":\1", path)
    return f"{verb.upper()} {route}"
