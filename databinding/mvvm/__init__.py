"""
MVVM Package - WPF-Style Declarative Data Binding.

Provides:
- BindableProperty / BindableBase: Models with change notification.
- Binding descriptors: OneTime, OneWay, OneWayToSource, TwoWay, Command.
- Value converters and commands.
- bindings() / register_bindings(): Explicit binding registration on views.
- Binder: Applies and detaches all of a view's bindings as a unit.

The PySide6 bridge lives in `databinding.mvvm.qt` and is imported on demand.
"""
from databinding.mvvm.bindable import BindableProperty, BindableBase
from databinding.mvvm.binding import (
    Binding,
    BindingDescriptor,
    BindingDirection,
    BindingMode,
    CommandBinding,
    OneTimeBinding,
    OneWayBinding,
    OneWayToSourceBinding,
    TwoWayBinding,
    descriptor,
)
from databinding.mvvm.binder import Binder
from databinding.mvvm.command import Command, RelayCommand
from databinding.mvvm.converters import (
    ValueConverter,
    IdentityConverter,
    StringFormatConverter,
    InverseBooleanConverter,
    DoubleToIntegerConverter,
    EnumToIntConverter,
    FunctionConverter,
)
from databinding.mvvm.registry import BoundMember, bindings, register_bindings, discover_bindings

__all__ = [
    # Models
    "BindableProperty",
    "BindableBase",

    # Bindings
    "Binding",
    "BindingDescriptor",
    "BindingDirection",
    "BindingMode",
    "OneTimeBinding",
    "OneWayBinding",
    "OneWayToSourceBinding",
    "TwoWayBinding",
    "CommandBinding",
    "descriptor",

    # Orchestration
    "Binder",
    "BoundMember",
    "bindings",
    "register_bindings",
    "discover_bindings",

    # Commands
    "Command",
    "RelayCommand",

    # Converters
    "ValueConverter",
    "IdentityConverter",
    "StringFormatConverter",
    "InverseBooleanConverter",
    "DoubleToIntegerConverter",
    "EnumToIntConverter",
    "FunctionConverter",
]
