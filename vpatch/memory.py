from html import escape
from typing import Any, Callable

from vpatch.reconciler import Reconciler
from vpatch.vdom import (
    Node,
    Patch,
    PatchAddListener,
    PatchAppendChild,
    PatchRemoveAttribute,
    PatchRemoveChild,
    PatchRemoveListener,
    PatchReplaceChild,
    PatchSetAttribute,
    PatchSetBooleanProperty,
)

VOID_TAGS = frozenset(["br", "hr", "img", "input", "meta", "link"])


class MemoryText(Node):
    text: str

    def __init__(self, text: str) -> None:
        self.text = text

    def apply(self, patch: Patch) -> None:
        raise ValueError(f"Invalid patch for a text node: {patch}")

    def child_at(self, index: int) -> Node:
        raise ValueError("text nodes have no children")

    def to_html(self) -> str:
        return escape(self.text)

    def __repr__(self) -> str:
        return f"MemoryText({self.text!r})"


class MemoryElement(Node):
    tag: str
    attributes: dict[str, str]
    properties: dict[str, bool]
    listeners: dict[str, list[Callable[[Any], None]]]
    children: list["MemoryText | MemoryElement"]

    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.attributes = {}
        self.properties = {}
        self.listeners = {}
        self.children = []

    def apply(self, patch: Patch) -> None:
        match patch:
            case PatchAppendChild(child) if isinstance(
                child, (MemoryText, MemoryElement)
            ):
                self.children.append(child)
            case PatchReplaceChild(index, child) if isinstance(
                child, (MemoryText, MemoryElement)
            ):
                self.children[index] = child
            case PatchRemoveChild(index):
                del self.children[index]
            case PatchSetAttribute(name, value):
                self.attributes[name] = value
            case PatchRemoveAttribute(name):
                self.attributes.pop(name, None)
            case PatchSetBooleanProperty(name, value):
                self.properties[name] = value
            case PatchAddListener(event, handler):
                self.listeners.setdefault(event, []).append(handler)
            case PatchRemoveListener(event, handler):
                handlers = self.listeners.get(event, [])
                if handler in handlers:
                    handlers.remove(handler)
                if not handlers:
                    self.listeners.pop(event, None)
            case _:
                raise ValueError(f"Unknown patch: {patch}")

    def child_at(self, index: int) -> "MemoryText | MemoryElement":
        return self.children[index]

    def dispatch(self, event: str, payload: Any = None) -> None:
        for handler in list(self.listeners.get(event, [])):
            handler(payload)

    def to_html(self) -> str:
        attrs = "".join(
            f' {name}="{escape(value)}"' for name, value in self.attributes.items()
        )
        if self.tag in VOID_TAGS and not self.children:
            return f"<{self.tag}{attrs}>"
        inner = "".join(c.to_html() for c in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"

    def __repr__(self) -> str:
        return f"MemoryElement({self.tag!r})"


class MemoryReconciler(Reconciler[MemoryText | MemoryElement]):
    def create_container(self, tag: str) -> MemoryElement:
        return MemoryElement(tag)

    def create_leaf(self, text: str) -> MemoryText:
        return MemoryText(text)
