"""
Accessor Handles for Binding Endpoints.

Names in a binding descriptor are resolved once, when the binding is made,
into small accessor objects that every later transfer reuses.

Provides:
- resolve_property(): Getter/setter pair for a (dotted) property path
- resolve_event(): Subscribe handle for a named control event
- read_indexed() / write_indexed(): Indexed access on collection-like values
- supports_change_notification() / subscribe_property_changed(): The
  model-side change-notification interface
"""
import inspect
from typing import Any, Callable, Optional, Sequence, Tuple

from databinding.core.errors import BindingResolutionError

Unsubscribe = Callable[[], None]


def _setter_name(prop_name: str) -> str:
    return f"set{prop_name[0].upper()}{prop_name[1:]}"


def _qt_getter_name(owner: Any, prop_name: str) -> Optional[str]:
    """
    Getter method name for widget properties exposed as `text()` / `setText()`
    or `isChecked()` / `setChecked()` pairs, else None.
    """
    if not callable(getattr(owner, _setter_name(prop_name), None)):
        return None
    for getter_name in (prop_name, f"is{prop_name[0].upper()}{prop_name[1:]}"):
        if inspect.isroutine(getattr(owner, getter_name, None)):
            return getter_name
    return None


def _is_read_only(owner: Any, prop_name: str) -> bool:
    static = inspect.getattr_static(type(owner), prop_name, None)
    return isinstance(static, property) and static.fset is None


class PropertyAccessor:
    """
    Get/set handle for one property path on one object.

    The path is walked again on every call, so replacing an intermediate
    object (e.g. `model.settings`) is honored by later transfers.
    """

    def __init__(self, root: Any, path: str, qt_getter: Optional[str] = None, read_only: bool = False):
        self.root = root
        self.path = path
        self._parts = path.split(".")
        self._qt_getter = qt_getter
        self.read_only = read_only

    @property
    def name(self) -> str:
        """First path segment, the name change notifications carry."""
        return self._parts[0]

    def _owner(self) -> Any:
        obj = self.root
        for part in self._parts[:-1]:
            obj = getattr(obj, part)
        return obj

    def get(self) -> Any:
        owner = self._owner()
        if self._qt_getter:
            return getattr(owner, self._qt_getter)()
        return getattr(owner, self._parts[-1])

    def set(self, value: Any) -> None:
        if self.read_only:
            raise BindingResolutionError(f"Property '{self.path}' on {type(self.root).__name__} is read-only")
        owner = self._owner()
        leaf = self._parts[-1]
        if self._qt_getter:
            getattr(owner, _setter_name(leaf))(value)
        else:
            setattr(owner, leaf, value)

    def __repr__(self) -> str:
        return f"<PropertyAccessor {type(self.root).__name__}.{self.path}>"


def resolve_property(obj: Any, path: str, writable: bool = False) -> PropertyAccessor:
    """
    Resolve a property path on an object.

    Args:
        obj: Object owning the path.
        path: Attribute name, or dotted path such as "settings.theme".
        writable: Require the leaf property to accept assignment.

    Raises:
        BindingResolutionError: If a segment does not exist, or the leaf is
            read-only while `writable` is requested.
    """
    if not path:
        raise BindingResolutionError(f"Empty property path on {type(obj).__name__}")

    owner = obj
    parts = path.split(".")
    for part in parts[:-1]:
        if not hasattr(owner, part):
            raise BindingResolutionError(f"{type(obj).__name__} has no property '{path}' (missing '{part}')")
        owner = getattr(owner, part)

    leaf = parts[-1]
    qt_getter = _qt_getter_name(owner, leaf)
    if qt_getter is None and not hasattr(owner, leaf):
        raise BindingResolutionError(f"{type(obj).__name__} has no property '{path}'")

    read_only = qt_getter is None and _is_read_only(owner, leaf)
    if writable and read_only:
        raise BindingResolutionError(f"Property '{path}' on {type(obj).__name__} is read-only")
    return PropertyAccessor(obj, path, qt_getter, read_only)


# --- Indexed access ---

def _index_key(index: Sequence[Any]) -> Any:
    index = tuple(index)
    return index[0] if len(index) == 1 else index


def read_indexed(value: Any, index: Optional[Tuple[Any, ...]], path: str = "") -> Any:
    """Apply `index` to `value`, or return `value` when there is no index."""
    if index is None:
        return value
    if not hasattr(type(value), "__getitem__"):
        raise BindingResolutionError(
            f"Property '{path}' holds {type(value).__name__}, which does not support indexed reads"
        )
    try:
        return value[_index_key(index)]
    except (IndexError, KeyError) as e:
        raise BindingResolutionError(f"Index {index!r} not found in '{path}'") from e


def write_indexed(container: Any, index: Tuple[Any, ...], value: Any, path: str = "") -> None:
    """Store `value` at `index` inside `container`."""
    if not hasattr(type(container), "__setitem__"):
        raise BindingResolutionError(
            f"Property '{path}' holds {type(container).__name__}, which does not support indexed writes"
        )
    try:
        container[_index_key(index)] = value
    except IndexError as e:
        raise BindingResolutionError(f"Index {index!r} not found in '{path}'") from e


# --- Control events ---

class EventAccessor:
    """Subscribe handle for one named event on one control."""

    def __init__(self, control: Any, name: str, subscribe: Callable[[Callable], Unsubscribe]):
        self.control = control
        self.name = name
        self._subscribe = subscribe

    def subscribe(self, handler: Callable[..., Any]) -> Unsubscribe:
        return self._subscribe(handler)

    def __repr__(self) -> str:
        return f"<EventAccessor {type(self.control).__name__}.{self.name}>"


def _ignore_event(*args, **kwargs) -> None:
    pass


def _is_signal_like(obj: Any) -> bool:
    return callable(getattr(obj, "connect", None)) and callable(getattr(obj, "disconnect", None))


def resolve_event(control: Any, name: str) -> EventAccessor:
    """
    Resolve a named event on a control.

    Signal-like attributes (anything with connect/disconnect, including Qt
    signals) are used directly. Otherwise the control may expose
    `subscribe(event_name, handler) -> unsubscribe`. Such controls are
    checked with `has_event(event_name)` when they provide it, otherwise
    with a trial subscribe/unsubscribe, so unknown names fail before the
    binding transfers anything.

    Raises:
        BindingResolutionError: If the control has no such event.
    """
    if not name:
        raise BindingResolutionError(f"Empty event name on {type(control).__name__}")

    signal = getattr(control, name, None)
    if signal is not None and _is_signal_like(signal):
        def subscribe_signal(handler):
            signal.connect(handler)
            return lambda: signal.disconnect(handler)
        return EventAccessor(control, name, subscribe_signal)

    subscribe = getattr(control, "subscribe", None)
    if callable(subscribe):
        has_event = getattr(control, "has_event", None)
        if callable(has_event) and not has_event(name):
            raise BindingResolutionError(f"{type(control).__name__} has no event '{name}'")

        def subscribe_named(handler):
            try:
                return subscribe(name, handler)
            except (KeyError, TypeError) as e:
                raise BindingResolutionError(f"{type(control).__name__} has no event '{name}'") from e

        if not callable(has_event):
            # No up-front lookup: a trial subscription validates the name
            subscribe_named(_ignore_event)()
        return EventAccessor(control, name, subscribe_named)

    raise BindingResolutionError(f"{type(control).__name__} has no event '{name}'")


# --- Model change notification ---

def supports_change_notification(model: Any) -> bool:
    """True if the model can tell subscribers which property changed."""
    if model is None:
        return False
    if callable(getattr(model, "subscribe", None)):
        return True
    return _is_signal_like(getattr(model, "propertyChanged", None))


def subscribe_property_changed(model: Any, handler: Callable[[str], None]) -> Unsubscribe:
    """
    Subscribe `handler(property_name)` to the model's change notifications.

    Models either implement `subscribe(handler) -> unsubscribe`, or expose a
    Qt-style `propertyChanged(name, value)` signal.
    """
    subscribe = getattr(model, "subscribe", None)
    if callable(subscribe):
        return subscribe(handler)

    signal = getattr(model, "propertyChanged", None)
    if not _is_signal_like(signal):
        raise BindingResolutionError(f"{type(model).__name__} does not support change notification")

    def on_property_changed(property_name, *args):
        handler(property_name)

    signal.connect(on_property_changed)
    return lambda: signal.disconnect(on_property_changed)
