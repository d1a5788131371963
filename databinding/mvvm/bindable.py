"""
WPF-Style Bindable Property Descriptor.

Provides automatic change notification on property assignment, so models
satisfy the binder's change-notification interface without boilerplate.

Usage:
    class MyViewModel(BindableBase):
        username = BindableProperty(default="")
        age = BindableProperty(default=0)

    # Changing the property notifies every subscriber with "username"
    vm.username = "Alice"
"""
from typing import Any, Optional, Callable, TypeVar, Generic

from databinding.core.events import Signal

T = TypeVar('T')


class BindableProperty(Generic[T]):
    """
    Descriptor that emits a notification when the property value changes.

    Inspired by WPF's DependencyProperty / INotifyPropertyChanged pattern.

    Args:
        default: Default value for the property.
        coerce: Optional callable to coerce/validate the value before setting.

    Example:
        class UserViewModel(BindableBase):
            name = BindableProperty(default="")
            age = BindableProperty(default=0, coerce=lambda x: max(0, int(x)))
    """

    def __init__(
        self,
        default: T = None,
        coerce: Optional[Callable[[Any], T]] = None
    ):
        self.default = default
        self.coerce = coerce
        self._attr_name: str = ""
        self._public_name: str = ""

    def __set_name__(self, owner: type, name: str) -> None:
        """Called when the descriptor is assigned to a class attribute."""
        self._public_name = name
        self._attr_name = f"_bindable_{name}"

    def __get__(self, obj: Any, objtype: type = None) -> T:
        """Get the property value."""
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self._attr_name, self.default)

    def __set__(self, obj: Any, value: Any) -> None:
        """Set the property value and notify if different."""
        if self.coerce is not None:
            value = self.coerce(value)

        old_value = getattr(obj, self._attr_name, self.default)

        if old_value != value:
            setattr(obj, self._attr_name, value)

            # Works for both the core Signal and a Qt propertyChanged signal
            for signal_name in ("property_changed", "propertyChanged"):
                signal = getattr(obj, signal_name, None)
                if signal is not None and callable(getattr(signal, 'emit', None)):
                    signal.emit(self._public_name, value)
                    break


class BindableBase:
    """
    Base class for models with WPF-style property change notification.

    Provides:
    - A `property_changed` signal emitting (property_name, new_value).
    - `subscribe()`, the change-notification interface the Binder looks for.
    - Works with `BindableProperty` descriptors for automatic notification.

    Example:
        class MainViewModel(BindableBase):
            username = BindableProperty(default="")

        vm = MainViewModel()
        unsubscribe = vm.subscribe(lambda name: print(name, "changed"))
    """

    def __init__(self):
        self.property_changed = Signal(f"{self.__class__.__name__}.property_changed")

    def subscribe(self, handler: Callable[[str], None]) -> Callable[[], None]:
        """
        Subscribe to property change notifications.

        Args:
            handler: Called with the name of each changed property.

        Returns:
            A zero-argument function that removes the subscription.
        """
        def on_property_changed(property_name: str, value: Any) -> None:
            handler(property_name)

        return self.property_changed.connect(on_property_changed)

    def notify_property_changed(self, property_name: str, value: Any = None) -> None:
        """
        Manually emit a property changed notification.

        Use this for properties not using BindableProperty descriptor, and
        after mutating a collection held by a property in place.
        """
        if value is None:
            value = getattr(self, property_name, None)
        self.property_changed.emit(property_name, value)
