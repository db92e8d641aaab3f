import logging
from typing import Any

from vpatch import Renderer, VDom, h
from vpatch.memory import MemoryElement, MemoryReconciler
from vpatch.vdom import PatchAddListener


def view(items: list[str]) -> VDom:
    return h("ul", {"className": "list"}, *[h("li", None, item) for item in items])


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    root = MemoryElement("div")
    reload = MemoryElement("button")
    renderer = Renderer(MemoryReconciler(), root)

    a = view(["item 1", "item 2"])
    b = view(["item 1", "hello!"])

    def on_reload(_: Any) -> None:
        renderer.render(b)

    renderer.render(a)
    print(root.to_html())

    reload.apply(PatchAddListener(event="click", handler=on_reload))
    reload.dispatch("click")
    print(root.to_html())


if __name__ == "__main__":
    main()
