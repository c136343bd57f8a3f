"""
Minimal declaration tree produced by the emitters.

Emitters only build these values; text is produced at the end by
``render_interface`` as unformatted, single-line candidate source.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class ObjectType:
    members: Tuple["Member", ...] = ()


@dataclass(frozen=True)
class Member:
    """One field of an interface or object type.

    ``key`` is the already rendered key (bare identifier or quoted string)
    and ``type`` is either a type fragment or a nested ``ObjectType``.
    """

    key: str
    type: Union[str, ObjectType]
    optional: bool = False
    comment: Optional[str] = None


@dataclass(frozen=True)
class Interface:
    name: str
    members: Tuple[Member, ...] = ()


def quote_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def literal_union(values) -> str:
    return " | ".join(quote_string(str(value)) for value in values)


def _comment(text: str) -> str:
    body = " ".join(text.split()).replace("*/", "*\\/")
    return f"/** {body} */ "


def render_type(node: Union[str, ObjectType]) -> str:
    if isinstance(node, ObjectType):
        return render_object(node.members)
    return node


def render_member(member: Member) -> str:
    prefix = _comment(member.comment) if member.comment else ""
    mark = "?" if member.optional else ""
    return f"{prefix}{member.key}{mark}: {render_type(member.type)};"


def render_object(members: Tuple[Member, ...]) -> str:
    if not members:
        return "{}"
    return "{ " + " ".join(render_member(member) for member in members) + " }"


def render_interface(interface: Interface) -> str:
    return f"export interface {interface.name} {render_object(interface.members)}"
