"""
Explicit Binding Registration.

Views declare their bindings in a table keyed by member name instead of
relying on runtime metadata scanning. The Binder asks `discover_bindings`
for the resulting (member, accessor, descriptor) list.

Usage:
    @bindings({
        "name_edit": TwoWayBinding(model_property="name",
                                   control_property="text",
                                   control_event="textChanged"),
        "save_button": [CommandBinding(model_property="save",
                                       control_event="clicked")],
    })
    class EditorView:
        ...

    # Or, equivalently, without the decorator:
    class EditorView:
        __bindings__ = {"name_edit": [...]}
"""
from typing import Any, Callable, Iterator, List, Mapping, NamedTuple, Sequence, Tuple, Type, TypeVar, Union

from databinding.core.errors import ConfigurationError
from databinding.mvvm.accessors import resolve_property
from databinding.mvvm.binding import BindingDescriptor

T = TypeVar('T')

BINDINGS_ATTR = "__bindings__"

DescriptorSpec = Union[BindingDescriptor, Sequence[BindingDescriptor]]


class BoundMember(NamedTuple):
    """One discovered binding: the view member, its accessor, and the descriptor."""
    member: str
    accessor: Callable[[], Any]
    descriptor: BindingDescriptor


def _as_list(spec: DescriptorSpec) -> List[BindingDescriptor]:
    items = [spec] if isinstance(spec, BindingDescriptor) else list(spec or [])
    for item in items:
        if not isinstance(item, BindingDescriptor):
            raise ConfigurationError(f"Expected a BindingDescriptor, got {type(item).__name__}")
    return items


def register_bindings(view_type: type, member: str, *descriptors: BindingDescriptor) -> None:
    """
    Attach descriptors to a member of a view class.

    Declarations accumulate: registering the same member twice keeps both
    sets, in registration order.

    Args:
        view_type: The view class.
        member: Attribute (or dotted path) holding the control.
        *descriptors: Bindings for that control.
    """
    own = view_type.__dict__.get(BINDINGS_ATTR)
    if own is None:
        own = {}
        setattr(view_type, BINDINGS_ATTR, own)
    own[member] = _as_list(own.get(member, [])) + _as_list(descriptors)


def bindings(table: Mapping[str, DescriptorSpec]):
    """
    Class decorator declaring a view's bindings.

    Args:
        table: Member name -> descriptor or list of descriptors.
    """
    def decorator(cls: Type[T]) -> Type[T]:
        for member, spec in table.items():
            register_bindings(cls, member, *_as_list(spec))
        return cls
    return decorator


def declared_bindings(view_type: type) -> Iterator[Tuple[str, BindingDescriptor]]:
    """Yield (member, descriptor) pairs, base classes first, in declaration order."""
    for klass in reversed(view_type.__mro__):
        table = klass.__dict__.get(BINDINGS_ATTR)
        if not table:
            continue
        for member, spec in table.items():
            for descriptor in _as_list(spec):
                yield member, descriptor


def discover_bindings(view: Any) -> List[BoundMember]:
    """
    List every binding declared on the view's class hierarchy.

    Raises:
        BindingResolutionError: If a declared member does not exist on the view.
    """
    discovered = []
    for member, descriptor in declared_bindings(type(view)):
        accessor = resolve_property(view, member)
        discovered.append(BoundMember(member, accessor.get, descriptor))
    return discovered
