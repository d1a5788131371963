"""
Binding Error Taxonomy.

All errors raised by the binding engine derive from BindingError, so callers
can catch the whole family. Each concrete error also derives from the
builtin it most resembles.
"""


class BindingError(Exception):
    """Base class for all data binding errors."""
    pass


class BindingResolutionError(BindingError, LookupError):
    """A property, event, or indexer named by a binding does not exist."""
    pass


class ConversionError(BindingError, TypeError, ValueError):
    """
    A value converter could not transform a value.

    Raised at transfer time. The binding that hit it stays subscribed, so a
    later well-formed value can still get through.
    """
    pass


class ConfigurationError(BindingError, ValueError):
    """A binding descriptor is missing a field its mode requires."""
    pass


class TeardownError(BindingError):
    """One or more teardown handles failed while detaching bindings."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])
