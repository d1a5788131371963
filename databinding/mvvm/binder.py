"""
Binder - Glues a view and a model together.

Discovers the bindings declared on a view, binds each one against the model,
and keeps the teardown handles so all of them can be detached as a unit.
"""
from typing import Any, Callable, List, Optional

from loguru import logger

from databinding.core.config import BinderSettings
from databinding.core.errors import TeardownError
from databinding.mvvm.accessors import supports_change_notification
from databinding.mvvm.registry import BoundMember, discover_bindings

Teardown = Callable[[], None]


class Binder:
    """
    Applies and detaches every binding declared on a view.

    apply() is a no-op when already applied or when the model cannot notify
    changes; detach() is a no-op when nothing is applied.

    Usage:
        binder = Binder(view, vm)
        binder.apply()
        ...
        binder.detach()

        # or
        with Binder(view, vm):
            ...
    """

    def __init__(
        self,
        view: Any,
        model: Any,
        discover: Callable[[Any], List[BoundMember]] = discover_bindings,
        settings: Optional[BinderSettings] = None,
    ):
        self._view = view
        self._model = model
        self._discover = discover
        self._settings = settings or BinderSettings()
        self._teardowns: List[Teardown] = []
        self._bindings_applied = False

    @property
    def view(self) -> Any:
        return self._view

    @property
    def model(self) -> Any:
        return self._model

    @property
    def bindings_applied(self) -> bool:
        return self._bindings_applied

    def apply(self) -> None:
        """
        Bind every discovered descriptor, in discovery order.

        If any binding fails, the ones already made by this call are torn
        down and the error propagates; the Binder stays unapplied.
        """
        if self._bindings_applied:
            logger.debug(f"Binder({type(self._view).__name__}): already applied")
            return
        if not supports_change_notification(self._model):
            logger.debug(f"Binder({type(self._view).__name__}): "
                         f"{type(self._model).__name__} does not notify changes, nothing applied")
            return

        teardowns: List[Teardown] = []
        try:
            for member in self._discover(self._view):
                control = member.accessor()
                teardowns.append(member.descriptor.bind(control, self._model, culture=self._settings.culture))
        except Exception as e:
            logger.error(f"Binder({type(self._view).__name__}): bind failed ({e}), "
                         f"rolling back {len(teardowns)} binding(s)")
            self._run_teardowns(reversed(teardowns))
            raise

        self._teardowns = teardowns
        self._bindings_applied = True
        logger.debug(f"Binder({type(self._view).__name__}): applied {len(teardowns)} binding(s)")

    def detach(self) -> None:
        """
        Tear down every applied binding.

        All handles run even if some fail. With `strict_teardown` the
        failures are then raised together as a TeardownError.
        """
        if not self._bindings_applied:
            return

        teardowns, self._teardowns = self._teardowns, []
        self._bindings_applied = False
        errors = self._run_teardowns(teardowns)
        logger.debug(f"Binder({type(self._view).__name__}): detached {len(teardowns)} binding(s)")

        if errors and self._settings.strict_teardown:
            raise TeardownError(f"{len(errors)} teardown handle(s) failed", errors)

    def set_data_context(self, model: Any) -> None:
        """
        Swap the model, re-applying bindings if they were applied.

        Args:
            model: The new model.
        """
        was_applied = self._bindings_applied
        self.detach()
        self._model = model
        if was_applied:
            self.apply()

    @staticmethod
    def _run_teardowns(teardowns) -> List[Exception]:
        errors = []
        for teardown in teardowns:
            try:
                teardown()
            except Exception as e:
                logger.exception(f"Teardown {teardown!r} failed: {e}")
                errors.append(e)
        return errors

    @property
    def binding_count(self) -> int:
        return len(self._teardowns)

    def __enter__(self) -> 'Binder':
        self.apply()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()
