from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:
    __version__: str = "unknown"

from .reconciler import Reconciler, changed
from .renderer import Renderer
from .vdom import Attr, Flag, Listener, Node, VDom, VDomElement, el, h

__all__ = [
    "Attr",
    "Flag",
    "Listener",
    "Node",
    "Reconciler",
    "Renderer",
    "VDom",
    "VDomElement",
    "changed",
    "el",
    "h",
]
