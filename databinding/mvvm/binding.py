"""
WPF-Style Binding Descriptors.

A descriptor declares one binding: its mode, the model and control property
paths, optional indices, the control event that triggers reverse transfers,
and an optional converter. `descriptor.bind(control, model)` wires it to
concrete objects and returns the live Binding, which doubles as the
teardown handle.

Usage:
    from databinding.mvvm.binding import TwoWayBinding

    binding = TwoWayBinding(model_property="username",
                            control_property="text",
                            control_event="textChanged").bind(line_edit, vm)
    ...
    binding()  # unbind
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from loguru import logger

from databinding.core.errors import BindingResolutionError, ConfigurationError, TeardownError
from databinding.mvvm.accessors import (
    EventAccessor,
    PropertyAccessor,
    read_indexed,
    resolve_event,
    resolve_property,
    subscribe_property_changed,
    write_indexed,
)
from databinding.mvvm.command import is_command
from databinding.mvvm.converters import ValueConverter, make_converter


class BindingMode(Enum):
    """Binding direction modes, inspired by WPF."""
    ONE_TIME = "OneTime"         # Initial sync (see OneTimeBinding.track_changes)
    ONE_WAY = "OneWay"           # Source -> Target (Model -> Control)
    ONE_WAY_TO_SOURCE = "OneWayToSource"  # Target -> Source (Control -> Model)
    TWO_WAY = "TwoWay"           # Source <-> Target (bidirectional)
    COMMAND = "Command"          # Control event -> Model command

    @property
    def needs_event(self) -> bool:
        """Modes driven by a control event."""
        return self in (BindingMode.ONE_WAY_TO_SOURCE, BindingMode.TWO_WAY, BindingMode.COMMAND)


class BindingDirection(Enum):
    FORWARD = "forward"   # Model -> Control, uses convert()
    REVERSE = "reverse"   # Control -> Model, uses convert_back()


def _as_index(index: Any) -> Optional[Tuple[Any, ...]]:
    if index is None:
        return None
    if isinstance(index, (list, tuple)):
        return tuple(index)
    return (index,)


class Binding:
    """
    Live pairing of one descriptor with one (control, model) pair.

    Unbound -> Bound when created by `BindingDescriptor.bind`, Bound ->
    Unbound when torn down. Terminal once unbound; bind the descriptor again
    for a new Binding.

    Calling the Binding tears it down.
    """

    def __init__(self, descriptor: 'BindingDescriptor', control: Any, model: Any,
                 converter: ValueConverter, culture: Optional[str] = None):
        self.descriptor = descriptor
        self.control = control
        self.model = model
        self.converter = converter
        self.culture = culture
        self.model_accessor: Optional[PropertyAccessor] = None
        self.control_accessor: Optional[PropertyAccessor] = None
        self.event_accessor: Optional[EventAccessor] = None
        self._subscriptions: List[Callable[[], None]] = []
        self._bound = False
        self._torn_down = False
        self._updating = False

    @property
    def bound(self) -> bool:
        return self._bound

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    # --- Transfers ---

    def push_forward(self) -> None:
        """Copy the model value to the control through convert()."""
        d = self.descriptor
        self._transfer(BindingDirection.FORWARD,
                       self.model_accessor, self.control_accessor,
                       d.model_index, d.control_index)

    def push_reverse(self) -> None:
        """Copy the control value to the model through convert_back()."""
        d = self.descriptor
        self._transfer(BindingDirection.REVERSE,
                       self.control_accessor, self.model_accessor,
                       d.control_index, d.model_index)

    def _transfer(self, direction: BindingDirection,
                  source: PropertyAccessor, target: PropertyAccessor,
                  source_index: Optional[Tuple[Any, ...]],
                  target_index: Optional[Tuple[Any, ...]]) -> None:
        value = read_indexed(source.get(), source_index, source.path)

        if direction is BindingDirection.FORWARD:
            converted = self.converter.convert(value, None, self.descriptor.converter_parameter, self.culture)
        else:
            converted = self.converter.convert_back(value, None, self.descriptor.converter_parameter, self.culture)

        if target_index is None:
            target.set(converted)
        else:
            write_indexed(target.get(), target_index, converted, target.path)

        logger.trace(f"{self.descriptor.mode.value} {direction.value}: {source.path} -> {target.path} = {converted!r}")

    def invoke_command(self) -> None:
        """Run the model's command if it can execute."""
        command = self.model_accessor.get()
        parameter = self.descriptor.command_parameter
        if command is None:
            logger.debug(f"Command '{self.model_accessor.path}' is None, event ignored")
            return
        if is_command(command):
            if command.can_execute(parameter):
                command.execute(parameter)
        elif callable(command):
            command()
        else:
            raise BindingResolutionError(
                f"Property '{self.model_accessor.path}' holds {type(command).__name__}, not a command"
            )

    # --- Subscriptions ---

    def register_forward(self, on_model_changed: Callable[[], None]) -> None:
        """Run `on_model_changed` whenever the model notifies the bound property."""
        watched = self.model_accessor.name

        def handler(property_name: str) -> None:
            if property_name == watched:
                on_model_changed()

        self._subscriptions.append(subscribe_property_changed(self.model, handler))

    def register_reverse(self, on_control_event: Callable[[], None]) -> None:
        """Run `on_control_event` whenever the control fires the bound event."""
        def handler(*args, **kwargs) -> None:
            on_control_event()

        self._subscriptions.append(self.event_accessor.subscribe(handler))

    def guarded(self, action: Callable[[], None]) -> Callable[[], None]:
        """Wrap `action` so it does not re-enter itself through this binding."""
        def run() -> None:
            if self._updating:
                return
            self._updating = True
            try:
                action()
            finally:
                self._updating = False
        return run

    # --- Lifecycle ---

    def mark_bound(self) -> None:
        self._bound = True

    def unbind(self) -> None:
        """
        Remove every subscription this binding created.

        Every unsubscribe handle runs even if an earlier one fails. A single
        failure is re-raised afterwards; several are raised together as a
        TeardownError.
        """
        if self._torn_down:
            logger.warning(f"{self!r} torn down twice, ignoring")
            return
        self._torn_down = True
        self._bound = False

        subscriptions, self._subscriptions = self._subscriptions, []
        errors = []
        for unsubscribe in subscriptions:
            try:
                unsubscribe()
            except Exception as e:
                logger.exception(f"{self!r}: unsubscribe failed: {e}")
                errors.append(e)
        logger.debug(f"Unbound {self!r}")

        # Every handle has run; report what failed
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise TeardownError(f"{len(errors)} unsubscribe handle(s) failed for {self!r}", errors)

    def __call__(self) -> None:
        self.unbind()

    def __repr__(self) -> str:
        d = self.descriptor
        state = "bound" if self._bound else "unbound"
        return (f"<Binding {d.mode.value} {type(self.model).__name__}.{d.model_property} "
                f"<-> {type(self.control).__name__}.{d.control_property} ({state})>")


@dataclass(frozen=True)
class BindingDescriptor:
    """
    Immutable declaration of one binding.

    Attributes:
        model_property: Property path on the model (required).
        control_property: Property path on the control.
        control_event: Control event that triggers reverse transfers.
        model_index: Index into the model property's value.
        control_index: Index into the control property's value.
        converter: ValueConverter instance, subclass, or zero-arg factory.
        converter_parameter: Passed to every converter call.
    """
    model_property: str = ""
    control_property: Optional[str] = None
    control_event: Optional[str] = None
    model_index: Optional[Tuple[Any, ...]] = None
    control_index: Optional[Tuple[Any, ...]] = None
    converter: Any = None
    converter_parameter: Any = None

    mode = None  # type: BindingMode

    def __post_init__(self):
        object.__setattr__(self, "model_index", _as_index(self.model_index))
        object.__setattr__(self, "control_index", _as_index(self.control_index))

    def validate(self) -> None:
        """
        Check the fields this mode requires.

        Raises:
            ConfigurationError: On a missing or malformed field.
        """
        name = type(self).__name__
        if self.mode is None:
            raise ConfigurationError(f"{name} does not declare a binding mode")
        if not self.model_property:
            raise ConfigurationError(f"{name}: model_property is required")
        if self.mode is not BindingMode.COMMAND and not self.control_property:
            raise ConfigurationError(f"{name}: control_property is required")
        if self.mode.needs_event and not self.control_event:
            raise ConfigurationError(f"{name}: control_event is required for {self.mode.value} bindings")
        if not self.mode.needs_event and self.control_event:
            raise ConfigurationError(f"{name}: control_event is not used by {self.mode.value} bindings")
        for label, index in (("model_index", self.model_index), ("control_index", self.control_index)):
            if index is not None and len(index) == 0:
                raise ConfigurationError(f"{name}: {label} must not be empty")

    def bind(self, control: Any, model: Any, culture: Optional[str] = None) -> Binding:
        """
        Wire this descriptor to a control and a model.

        Everything is resolved before the first transfer or subscription, so
        a failure leaves nothing subscribed.

        Returns:
            The live Binding. Call it to tear the binding down.

        Raises:
            ConfigurationError: If the descriptor is incomplete for its mode.
            BindingResolutionError: If a property, event, or indexer is missing.
            ConversionError: If the initial transfer cannot convert the value.
        """
        self.validate()
        binding = Binding(self, control, model, make_converter(self.converter), culture)
        self._resolve(binding)
        try:
            self._connect(binding)
        except Exception:
            try:
                binding.unbind()
            except Exception as cleanup_error:
                logger.error(f"Cleanup of failed bind {binding!r} raised: {cleanup_error}")
            raise
        binding.mark_bound()
        logger.debug(f"Bound {binding!r}")
        return binding

    def _resolve(self, binding: Binding) -> None:
        binding.model_accessor = resolve_property(binding.model, self.model_property,
                                                  writable=self.writes_model)
        if self.control_property:
            binding.control_accessor = resolve_property(binding.control, self.control_property,
                                                        writable=self.writes_control)
        if self.control_event:
            binding.event_accessor = resolve_event(binding.control, self.control_event)

    @property
    def writes_model(self) -> bool:
        return self.mode in (BindingMode.ONE_WAY_TO_SOURCE, BindingMode.TWO_WAY) and self.model_index is None

    @property
    def writes_control(self) -> bool:
        return self.mode in (BindingMode.ONE_TIME, BindingMode.ONE_WAY, BindingMode.TWO_WAY) \
            and self.control_index is None

    def _connect(self, binding: Binding) -> None:
        """Initial transfer and subscriptions for this mode."""
        raise NotImplementedError


@dataclass(frozen=True)
class OneTimeBinding(BindingDescriptor):
    """
    Copies the model value to the control when the binding is made.

    Suited to snapshot or static data. With `track_changes=True` (default)
    later model changes are still pushed, exactly like OneWayBinding; set it
    to False for a true push-once binding with no subscription.
    """
    track_changes: bool = True

    mode = BindingMode.ONE_TIME

    def _connect(self, binding: Binding) -> None:
        binding.push_forward()
        if self.track_changes:
            binding.register_forward(binding.push_forward)


@dataclass(frozen=True)
class OneWayBinding(BindingDescriptor):
    """
    Updates the control whenever the model property changes.

    Appropriate for controls that are implicitly read-only.
    """
    mode = BindingMode.ONE_WAY

    def _connect(self, binding: Binding) -> None:
        binding.push_forward()
        binding.register_forward(binding.push_forward)


@dataclass(frozen=True)
class OneWayToSourceBinding(BindingDescriptor):
    """Updates the model property whenever the control fires its event."""
    mode = BindingMode.ONE_WAY_TO_SOURCE

    def _connect(self, binding: Binding) -> None:
        binding.push_reverse()
        binding.register_reverse(binding.push_reverse)


@dataclass(frozen=True)
class TwoWayBinding(BindingDescriptor):
    """
    Keeps model and control in sync in both directions.

    The model value wins on bind. Appropriate for editable forms.
    """
    mode = BindingMode.TWO_WAY

    def _connect(self, binding: Binding) -> None:
        forward = binding.guarded(binding.push_forward)
        reverse = binding.guarded(binding.push_reverse)
        forward()
        binding.register_forward(forward)
        binding.register_reverse(reverse)


@dataclass(frozen=True)
class CommandBinding(BindingDescriptor):
    """
    Invokes the model's command when the control fires its event.

    The model property should hold a Command; execute() runs only when
    can_execute(command_parameter) is True. A plain callable is invoked
    with no arguments.
    """
    command_parameter: Any = None

    mode = BindingMode.COMMAND

    def _connect(self, binding: Binding) -> None:
        binding.register_reverse(binding.invoke_command)


DESCRIPTOR_TYPES = {
    BindingMode.ONE_TIME: OneTimeBinding,
    BindingMode.ONE_WAY: OneWayBinding,
    BindingMode.ONE_WAY_TO_SOURCE: OneWayToSourceBinding,
    BindingMode.TWO_WAY: TwoWayBinding,
    BindingMode.COMMAND: CommandBinding,
}


def descriptor(mode: BindingMode, model_property: str, **kwargs: Any) -> BindingDescriptor:
    """
    Build the descriptor class for `mode`.

    Example:
        descriptor(BindingMode.TWO_WAY, "text",
                   control_property="text", control_event="textChanged")
    """
    return DESCRIPTOR_TYPES[mode](model_property=model_property, **kwargs)
