"""Attribute, boolean property and listener reconciliation for a single live node.

Listeners and the ``forceUpdate`` control flag are "custom" props: they are
never diffed key by key. Listeners are attached when a node is created and
detached when it is replaced.
"""

from vpatch.vdom import (
    CLASS_NAME,
    FORCE_UPDATE,
    LISTENER_PREFIX,
    Attr,
    Flag,
    Listener,
    Node,
    PatchAddListener,
    PatchRemoveAttribute,
    PatchRemoveListener,
    PatchSetAttribute,
    PatchSetBooleanProperty,
    PropValue,
    Props,
)


def is_listener_prop(name: str) -> bool:
    return name.startswith(LISTENER_PREFIX)


def is_custom_prop(name: str) -> bool:
    return is_listener_prop(name) or name == FORCE_UPDATE


def event_name(name: str) -> str:
    return name[len(LISTENER_PREFIX) :].lower()


def _attribute_name(name: str) -> str:
    return "class" if name == CLASS_NAME else name


def _listener(name: str, value: PropValue) -> Listener:
    if not isinstance(value, Listener):
        raise ValueError(f"{name} must hold a listener: {value!r}")
    return value


def set_prop(node: Node, name: str, value: PropValue) -> None:
    if is_custom_prop(name):
        return
    attr = _attribute_name(name)
    match value:
        case Flag(True):
            node.apply(PatchSetAttribute(name=attr, value="true"))
            node.apply(PatchSetBooleanProperty(name=attr, value=True))
        case Flag(False):
            # attribute left untouched
            node.apply(PatchSetBooleanProperty(name=attr, value=False))
        case Attr(text):
            node.apply(PatchSetAttribute(name=attr, value=text))
        case _:
            raise ValueError(f"Unexpected value for {name}: {value!r}")


def set_props(node: Node, props: Props) -> None:
    for name, value in props.items():
        set_prop(node, name, value)
    add_event_listeners(node, props)


def remove_prop(node: Node, name: str, old: PropValue) -> None:
    if is_custom_prop(name):
        return
    attr = _attribute_name(name)
    node.apply(PatchRemoveAttribute(name=attr))
    if isinstance(old, Flag):
        node.apply(PatchSetBooleanProperty(name=attr, value=False))


def update_prop(
    node: Node, name: str, new: PropValue | None, old: PropValue | None
) -> None:
    if new == old:
        return
    if old is not None and (new is None or new == Flag(False)):
        remove_prop(node, name, old)
    elif new is not None:
        set_prop(node, name, new)


def update_props(node: Node, new_props: Props, old_props: Props) -> None:
    for name in dict.fromkeys([*new_props, *old_props]):
        if is_custom_prop(name):
            continue
        update_prop(node, name, new_props.get(name), old_props.get(name))


def add_event_listeners(node: Node, props: Props) -> None:
    for name, value in props.items():
        if is_listener_prop(name):
            handler = _listener(name, value).value
            node.apply(PatchAddListener(event=event_name(name), handler=handler))


def remove_event_listeners(node: Node, props: Props) -> None:
    for name, value in props.items():
        if is_listener_prop(name):
            handler = _listener(name, value).value
            node.apply(PatchRemoveListener(event=event_name(name), handler=handler))
