"""Declarations that features are made of.

A feature groups three kinds of declaration (extension units, content modules and
dependencies) and may need further sub-features. Nothing here traverses anything;
see :mod:`featurekit.resolution` for that.

Every declaration carries a ``kind`` tag. Two declarations with the same kind are
duplicates, whatever their state, and only the first one encountered is used.
"""

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Hashable,
    Iterable,
    Protocol,
    Sequence,
    TypeVar,
)

if TYPE_CHECKING:
    from featurekit.registry import Registry

__all__ = ["Module", "Feature", "DeclaredFeature", "Dependency", "Kind"]

T = TypeVar("T")

Kind = Hashable
"""Type alias for the tag declarations are deduplicated by."""


class Module(Protocol):
    """A self-contained registration unit, used both for extensions and content modules.

    The registry calls :meth:`load` when the unit is installed. Units that list
    ``Module`` as a base get ``kind`` defaulting to their concrete class.
    """

    @property
    def kind(self) -> Kind:
        return type(self)

    def load(self, registry: "Registry") -> None:
        ...


class Feature(Protocol):
    """The contract every feature implements.

    Each accessor returns an ordered iterable and may be evaluated more than once;
    generators yielding fresh objects on every call are fine. Features that list
    ``Feature`` as a base inherit empty defaults for all four accessors.

    Example:
        >>> class Persistence(Feature):
        ...     def modules(self):
        ...         yield DatabaseModule()
        ...
        ...     def needed_extensions(self):
        ...         yield TransactionsExtension()
    """

    @property
    def kind(self) -> Kind:
        return type(self)

    def needed_extensions(self) -> Iterable[Module]:
        return ()

    def modules(self) -> Iterable[Module]:
        return ()

    def dependencies(self) -> Sequence["Dependency"]:
        return ()

    def needed_features(self) -> Iterable["Feature"]:
        return ()


@dataclass(frozen=True)
class Dependency(Generic[T]):
    """A request to bind ``interface`` in the registry.

    Attributes:
        interface: The capability type the dependency binds.
        action: Called with the registry to perform the actual binding.

    Two dependencies on the same interface are duplicates even when their actions
    differ: the kind is the dependency class parameterised by its interface.
    """

    interface: type[T]
    action: Callable[["Registry"], Any] = field(compare=False)

    @property
    def kind(self) -> Kind:
        return type(self), self.interface

    def bind(self, registry: "Registry") -> None:
        self.action(registry)

    @classmethod
    def to_constant(cls, interface: type[T], value: T) -> "Dependency[T]":
        """Bind ``interface`` to ``value`` via ``registry.bind``."""
        return cls(interface, lambda registry: registry.bind(interface, to=value))

    @classmethod
    def to_factory(
        cls, interface: type[T], factory: Callable[[], T]
    ) -> "Dependency[T]":
        """Bind ``interface`` to ``factory`` via ``registry.bind``."""
        return cls(
            interface, lambda registry: registry.bind(interface, factory=factory)
        )


@dataclass(frozen=True)
class DeclaredFeature(Feature):
    """A feature assembled from explicit declarations rather than a subclass.

    Its kind is its name, which is what log events report for it.
    """

    name: str
    declared_dependencies: tuple[Dependency, ...] = ()
    extensions: tuple[Module, ...] = ()
    contents: tuple[Module, ...] = ()
    features: tuple[Feature, ...] = ()

    @property
    def kind(self) -> Kind:
        return DeclaredFeature, self.name

    def needed_extensions(self) -> Iterable[Module]:
        return self.extensions

    def modules(self) -> Iterable[Module]:
        return self.contents

    def dependencies(self) -> Sequence[Dependency]:
        return self.declared_dependencies

    def needed_features(self) -> Iterable[Feature]:
        return self.features
