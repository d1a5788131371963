"""
PySide6 Bridge.

Provides:
- QtBindableBase: QObject model with a `propertyChanged(str, object)` signal
  that satisfies the binder's change-notification interface
- WIDGET_PROPERTY_EVENTS: Default change signal for common widget properties
- widget_binding(): Descriptor factory that fills in the control event

Qt widget properties (`text()` / `setText()`, `isChecked()` / `setChecked()`)
and Qt signals are resolved by the generic accessors, so any widget can be
bound without an adapter.

Usage:
    class LoginViewModel(QtBindableBase):
        username = BindableProperty(default="")

    @bindings({"name_edit": widget_binding(QLineEdit, "text", "username")})
    class LoginView(QWidget):
        ...
"""
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QCheckBox, QComboBox, QLabel, QLineEdit, QSlider, QSpinBox, QDoubleSpinBox

from databinding.core.errors import ConfigurationError
from databinding.mvvm.binding import BindingDescriptor, BindingMode, DESCRIPTOR_TYPES


# Widget property -> signal emitted when the user changes it
WIDGET_PROPERTY_EVENTS = {
    QLineEdit: {"text": "textChanged"},
    QLabel: {"text": None},
    QCheckBox: {"checked": "toggled"},
    QSpinBox: {"value": "valueChanged"},
    QDoubleSpinBox: {"value": "valueChanged"},
    QSlider: {"value": "valueChanged"},
    QComboBox: {"currentIndex": "currentIndexChanged", "currentText": "currentTextChanged"},
}


class QtBindableBase(QObject):
    """
    Base class for Qt ViewModels with WPF-style property change notification.

    Works with `BindableProperty` descriptors, which emit `propertyChanged`
    on every change.

    Example:
        class MainViewModel(QtBindableBase):
            username = BindableProperty(default="")
    """

    # Generic signal emitted for any property change: (property_name, new_value)
    propertyChanged = Signal(str, object)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

    def subscribe(self, handler: Callable[[str], None]) -> Callable[[], None]:
        """Subscribe `handler(property_name)` to property changes."""
        def on_property_changed(property_name: str, value: Any) -> None:
            handler(property_name)

        self.propertyChanged.connect(on_property_changed)
        return lambda: self.propertyChanged.disconnect(on_property_changed)

    def notify_property_changed(self, property_name: str, value: Any = None) -> None:
        """Manually emit a property changed notification."""
        if value is None:
            value = getattr(self, property_name, None)
        self.propertyChanged.emit(property_name, value)


def widget_event(widget_type: type, prop_name: str) -> Optional[str]:
    """Default change signal for a widget property, or None if read-only."""
    for wtype, props in WIDGET_PROPERTY_EVENTS.items():
        if issubclass(widget_type, wtype) and prop_name in props:
            return props[prop_name]
    return f"{prop_name}Changed"


def widget_binding(
    widget_type: type,
    prop_name: str,
    model_property: str,
    mode: BindingMode = BindingMode.TWO_WAY,
    **kwargs: Any,
) -> BindingDescriptor:
    """
    Build a descriptor for a widget property, filling in its change signal.

    Args:
        widget_type: Widget class the member holds (e.g. QLineEdit).
        prop_name: Widget property (e.g. "text", "checked", "value").
        model_property: Model property to bind to.
        mode: Binding mode; the event is only attached for modes that use it.
        **kwargs: Remaining descriptor fields (converter, indices, ...).

    Example:
        widget_binding(QSpinBox, "value", "age")
    """
    event = kwargs.pop("control_event", None)
    if mode.needs_event:
        event = event or widget_event(widget_type, prop_name)
        if event is None:
            raise ConfigurationError(
                f"{widget_type.__name__}.{prop_name} has no change signal for {mode.value} bindings"
            )
    return DESCRIPTOR_TYPES[mode](
        model_property=model_property,
        control_property=prop_name,
        control_event=event,
        **kwargs,
    )
