import logging
from typing import Generic, TypeVar

from vpatch.reconciler import Reconciler
from vpatch.vdom import Node, VDom

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Node)


class Renderer(Generic[N]):
    """Keeps one live root container in sync with successive virtual trees."""

    _reconciler: Reconciler[N]
    _root: Node
    _current: VDom | None
    _rendering: bool

    def __init__(self, reconciler: Reconciler[N], root: Node) -> None:
        self._reconciler = reconciler
        self._root = root
        self._current = None
        self._rendering = False

    @property
    def root(self) -> Node:
        return self._root

    @property
    def current(self) -> VDom | None:
        return self._current

    def render(self, vdom: VDom | None) -> None:
        if self._rendering:
            raise RuntimeError("render() called while a render is in progress")

        logger.debug(f"render {vdom!r} into {self._root!r}")
        self._rendering = True
        try:
            self._reconciler.reconcile(self._root, vdom, self._current, 0)
        finally:
            self._rendering = False
        self._current = vdom
