from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol, Sequence, TypeAlias

LISTENER_PREFIX = "on"
FORCE_UPDATE = "forceUpdate"
CLASS_NAME = "className"


@dataclass(slots=True, frozen=True)
class Attr:
    value: str


@dataclass(slots=True, frozen=True)
class Flag:
    value: bool


@dataclass(slots=True, frozen=True)
class Listener:
    value: Callable[[Any], None]


PropValue = Attr | Flag | Listener
Props: TypeAlias = Mapping[str, PropValue]


@dataclass(slots=True, frozen=True)
class PatchAppendChild:
    child: Any


@dataclass(slots=True, frozen=True)
class PatchReplaceChild:
    index: int
    child: Any


@dataclass(slots=True, frozen=True)
class PatchRemoveChild:
    index: int


@dataclass(slots=True, frozen=True)
class PatchSetAttribute:
    name: str
    value: str


@dataclass(slots=True, frozen=True)
class PatchRemoveAttribute:
    name: str


@dataclass(slots=True, frozen=True)
class PatchSetBooleanProperty:
    """Sets the live flag only; the attribute mirror arrives as its own patch."""

    name: str
    value: bool


@dataclass(slots=True, frozen=True)
class PatchAddListener:
    event: str
    handler: Callable[[Any], None]


@dataclass(slots=True, frozen=True)
class PatchRemoveListener:
    event: str
    handler: Callable[[Any], None]


Patch = (
    PatchAppendChild
    | PatchReplaceChild
    | PatchRemoveChild
    | PatchSetAttribute
    | PatchRemoveAttribute
    | PatchSetBooleanProperty
    | PatchAddListener
    | PatchRemoveListener
)


class Node(Protocol):
    def apply(self, patch: Patch) -> None:
        ...

    def child_at(self, index: int) -> "Node":
        ...


@dataclass(slots=True, frozen=True)
class VDomElement:
    tag: str
    props: Props
    children: Sequence["VDom"]


VDom = VDomElement | str


def to_prop(value: Any) -> PropValue:
    match value:
        case Attr() | Flag() | Listener():
            return value
        case bool():
            return Flag(value)
        case str():
            return Attr(value)
        case _ if callable(value):
            return Listener(value)
        case _:
            return Attr(str(value))


def el(
    tag: str,
    props: Mapping[str, Any] | None = None,
    children: Sequence[VDom] | None = None,
) -> VDomElement:
    if props is None:
        props = {}
    if children is None:
        children = []
    return VDomElement(
        tag=tag,
        props=MappingProxyType(
            {k: to_prop(v) for k, v in props.items() if v is not None}
        ),
        children=tuple(children),
    )


def h(tag: str, props: Mapping[str, Any] | None, *children: VDom) -> VDomElement:
    return el(tag, props, children)
