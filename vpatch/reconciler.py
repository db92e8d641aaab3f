import logging
from abc import abstractmethod
from itertools import zip_longest
from typing import Generic, Sequence, TypeVar

from vpatch.props import remove_event_listeners, set_props, update_props
from vpatch.vdom import (
    FORCE_UPDATE,
    Attr,
    Flag,
    Node,
    PatchAppendChild,
    PatchRemoveChild,
    PatchReplaceChild,
    VDom,
    VDomElement,
)

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


def _children(vdom: VDomElement) -> Sequence[VDom]:
    if not isinstance(vdom.children, Sequence) or isinstance(vdom.children, str):
        raise ValueError(f"children of <{vdom.tag}> must be a sequence: {vdom!r}")
    return vdom.children


def is_forced(vdom: VDomElement) -> bool:
    match vdom.props.get(FORCE_UPDATE):
        case Flag(value) | Attr(value):
            return bool(value)
        case None:
            return False
        case _:
            return True


def changed(new_vdom: VDom, old_vdom: VDom) -> bool:
    match (new_vdom, old_vdom):
        case (str(), str()):
            return new_vdom != old_vdom
        case (VDomElement(), VDomElement()):
            return new_vdom.tag != old_vdom.tag or is_forced(old_vdom)
        case _:
            return True


class Reconciler(Generic[N]):
    """Builds live nodes from virtual nodes and patches them in place.

    Subclasses bind a rendering backend by implementing the two node
    factories. Every other mutation goes through ``Node.apply``.
    """

    @abstractmethod
    def create_container(self, tag: str) -> N:
        ...

    @abstractmethod
    def create_leaf(self, text: str) -> N:
        ...

    def materialize(self, vdom: VDom) -> N:
        match vdom:
            case str():
                return self.create_leaf(vdom)
            case VDomElement(tag, props):
                node = self.create_container(tag)
                set_props(node, props)
                for child in _children(vdom):
                    node.apply(PatchAppendChild(child=self.materialize(child)))
                return node
            case _:
                raise ValueError(f"Not a virtual node: {vdom!r}")

    def _detach_listeners(self, node: Node, vdom: VDom) -> None:
        if not isinstance(vdom, VDomElement):
            return
        remove_event_listeners(node, vdom.props)
        for i, child in enumerate(_children(vdom)):
            if isinstance(child, VDomElement):
                self._detach_listeners(node.child_at(i), child)

    def reconcile(
        self,
        parent: Node,
        new_vdom: VDom | None,
        old_vdom: VDom | None,
        index: int = 0,
    ) -> None:
        """Bring the live child of ``parent`` at ``index`` in line with ``new_vdom``.

        ``old_vdom`` must describe what is currently rendered at that slot.
        Children are matched by position only.
        """
        if old_vdom is None:
            if new_vdom is None:
                return
            logger.debug(f"insert {new_vdom!r} into {parent!r}")
            parent.apply(PatchAppendChild(child=self.materialize(new_vdom)))
        elif new_vdom is None:
            logger.debug(f"remove child {index} of {parent!r}")
            parent.apply(PatchRemoveChild(index=index))
        elif changed(new_vdom, old_vdom):
            logger.debug(f"replace child {index} of {parent!r} with {new_vdom!r}")
            self._detach_listeners(parent.child_at(index), old_vdom)
            parent.apply(
                PatchReplaceChild(index=index, child=self.materialize(new_vdom))
            )
        elif isinstance(new_vdom, VDomElement) and isinstance(old_vdom, VDomElement):
            node = parent.child_at(index)
            update_props(node, new_vdom.props, old_vdom.props)

            new_children = _children(new_vdom)
            old_children = _children(old_vdom)
            for i, (new_child, old_child) in enumerate(
                zip_longest(new_children, old_children)
            ):
                # removals past the new length all land on the same live slot
                self.reconcile(node, new_child, old_child, min(i, len(new_children)))
