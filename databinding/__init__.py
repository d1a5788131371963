"""
databinding - Declarative view/model property synchronization.

Usage:
    from databinding import Binder, BindableBase, BindableProperty, TwoWayBinding, bindings

    class PersonViewModel(BindableBase):
        name = BindableProperty(default="")

    @bindings({"name_edit": TwoWayBinding(model_property="name",
                                          control_property="text",
                                          control_event="changed")})
    class PersonView:
        ...

    with Binder(view, vm):
        ...
"""
from databinding.core import (
    Signal,
    BinderSettings,
    ConfigManager,
    setup_logging,
    BindingError,
    BindingResolutionError,
    ConversionError,
    ConfigurationError,
    TeardownError,
)
from databinding.mvvm import *  # noqa: F401,F403
from databinding.mvvm import __all__ as _mvvm_all

__version__ = "0.1.0"

__all__ = [
    "Signal",
    "BinderSettings",
    "ConfigManager",
    "setup_logging",
    "BindingError",
    "BindingResolutionError",
    "ConversionError",
    "ConfigurationError",
    "TeardownError",
] + list(_mvvm_all)
