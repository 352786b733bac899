from typing import Any, Callable, Hashable, Optional, Protocol, Sequence

from featurekit.domain import Kind, Module
from featurekit.errors import RegistrationError
from featurekit.logging import get_logger

__all__ = ["Registry", "ModuleRegistry"]

log = get_logger(__name__)

_MISSING: Any = object()


class Registry(Protocol):
    """What the loader needs from a dependency-injection container.

    ``load`` is called once with the extension units and once with the content
    modules. Dependencies' binding actions receive the registry itself and may use
    whatever binding API the concrete registry offers.
    """

    def load(self, units: Sequence[Module]) -> None:
        ...


class ModuleRegistry:
    """In-memory registry that installs modules and holds interface bindings.

    Scoping is out of scope: a constant binding always returns the same object and a
    factory binding calls the factory on every lookup.
    """

    def __init__(self):
        self._modules: dict[Kind, Module] = {}
        self._bindings: dict[Hashable, Callable[[], Any]] = {}

    def load(self, units: Sequence[Module]) -> None:
        """Install each unit in order by calling its ``load`` hook.

        Args:
            units: The modules to install.

        Raises:
            RegistrationError: If a module of the same kind is already loaded.
        """
        for unit in units:
            if unit.kind in self._modules:
                log.error("module_already_loaded", kind=repr(unit.kind))
                raise RegistrationError(
                    f"A module of kind {unit.kind!r} has already been loaded"
                )
            self._modules[unit.kind] = unit
            unit.load(self)
            log.debug("module_loaded", kind=repr(unit.kind))

    def has_module(self, kind: Kind) -> bool:
        return kind in self._modules

    @property
    def modules(self) -> list[Module]:
        return list(self._modules.values())

    @property
    def bindings(self) -> list[Hashable]:
        return list(self._bindings)

    def bind(
        self,
        interface: Hashable,
        *,
        to: Any = _MISSING,
        factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        """Bind ``interface`` to a constant or to a factory.

        Args:
            interface: The key later passed to :meth:`get`, usually a type.
            to: The constant to return for ``interface``.
            factory: A zero-argument callable invoked on every lookup.

        Raises:
            RegistrationError: If neither or both of ``to`` and ``factory`` are
                given, or if ``interface`` is already bound.
        """
        if (to is _MISSING) == (factory is None):
            raise RegistrationError(
                f"Binding for {interface!r} needs exactly one of 'to' or 'factory'"
            )
        if interface in self._bindings:
            log.error("interface_already_bound", interface=repr(interface))
            raise RegistrationError(f"{interface!r} is already bound")

        self._bindings[interface] = factory if factory is not None else (lambda: to)
        log.debug("interface_bound", interface=repr(interface))

    def get(self, interface: Hashable) -> Any:
        try:
            provider = self._bindings[interface]
        except KeyError:
            raise RegistrationError(f"No binding for {interface!r}") from None
        return provider()
