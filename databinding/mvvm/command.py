"""
Bindable Commands.

Provides:
- Command: Interface for behavior a view can invoke through a CommandBinding
- RelayCommand: Command built from an action and an optional predicate
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from loguru import logger

from databinding.core.events import Signal


class Command(ABC):
    """
    Capability object a CommandBinding invokes when its control event fires.

    The binder always checks can_execute() before calling execute().
    Producers fire `can_execute_changed` when executability may have changed;
    nothing recomputes it automatically.

    Example:
        class SaveCommand(Command):
            def can_execute(self, parameter) -> bool:
                return self.document.is_dirty

            def execute(self, parameter) -> None:
                self.document.save()
    """

    def __init__(self):
        self.can_execute_changed = Signal(f"{self.__class__.__name__}.can_execute_changed")

    @abstractmethod
    def can_execute(self, parameter: Any) -> bool:
        """Return True if the command may run with this parameter."""
        pass

    @abstractmethod
    def execute(self, parameter: Any) -> None:
        """
        Run the command.

        Must be a no-op, not an error, when can_execute() would be False.
        """
        pass

    def raise_can_execute_changed(self) -> None:
        """Notify listeners that can_execute() may now answer differently."""
        self.can_execute_changed.emit(self)


class RelayCommand(Command):
    """
    Command that relays to closures.

    Args:
        execute: Action called with the command parameter.
        can_execute: Optional predicate; defaults to always executable.

    Example:
        vm.save = RelayCommand(lambda _: vm.save_document(),
                               lambda _: vm.is_dirty)
    """

    def __init__(self, execute: Callable[[Any], None],
                 can_execute: Optional[Callable[[Any], bool]] = None):
        super().__init__()
        self._execute = execute
        self._can_execute = can_execute or (lambda parameter: True)

    def can_execute(self, parameter: Any = None) -> bool:
        return bool(self._can_execute(parameter))

    def execute(self, parameter: Any = None) -> None:
        if not self._can_execute(parameter):
            logger.debug(f"{self.__class__.__name__}: execute skipped, not executable")
            return
        self._execute(parameter)


def is_command(obj: Any) -> bool:
    """Structural check for the Command capability."""
    return callable(getattr(obj, "can_execute", None)) and callable(getattr(obj, "execute", None))
