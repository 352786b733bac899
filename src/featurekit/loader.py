"""
Loading resolved features onto a registry.

The registry is driven through three phases, always in this order:

1. the extension units are loaded as one batch,
2. the content modules are loaded as one batch,
3. each dependency's binding action runs against the registry.

Extensions may install capabilities that content modules rely on, and bindings may
need types the modules establish. Failures propagate as raised; earlier phases are
not undone.
"""

from typing import Optional, Sequence

from featurekit.domain import Dependency, Feature, Module
from featurekit.logging import get_logger
from featurekit.registry import Registry
from featurekit.resolution import Resolution, resolve_features
from featurekit.settings import LoaderSettings

__all__ = ["FeatureModuleLoader", "load_features"]

log = get_logger(__name__)


class FeatureModuleLoader:
    """Resolves features and applies them to ``registry``. Holds no state between loads."""

    def __init__(self, registry: Registry, settings: Optional[LoaderSettings] = None):
        self._registry = registry
        self._settings = settings or LoaderSettings()

    def load(self, *features: Feature) -> None:
        self.apply(resolve_features(features, self._settings))

    def apply(self, resolution: Resolution) -> None:
        """Apply an already resolved set of declarations to the registry."""
        self._load_units(resolution.extensions)
        self._load_units(resolution.modules)
        self._bind(resolution.dependencies)

        log.info(
            "features_loaded",
            visited=resolution.visited,
            extensions=len(resolution.extensions),
            modules=len(resolution.modules),
            dependencies=len(resolution.dependencies),
        )

    def _load_units(self, units: Sequence[Module]) -> None:
        if units:
            self._registry.load(list(units))

    def _bind(self, dependencies: Sequence[Dependency]) -> None:
        for dependency in dependencies:
            dependency.bind(self._registry)


def load_features(
    registry: Registry,
    *features: Feature,
    settings: Optional[LoaderSettings] = None,
) -> Resolution:
    """
    Resolve ``features`` and load them onto ``registry``.

    Args:
        registry: The container receiving extensions, modules and bindings.
        *features: The root features, visited in the given order.
        settings: Optional traversal settings.

    Returns:
        The :class:`Resolution` that was applied.

    Raises:
        FeatureCycleError: If cycle detection is on and a feature instance needs itself.
        TraversalLimitError: If ``settings.max_visits`` is exceeded.

    Example:
        >>> registry = ModuleRegistry()
        >>> load_features(registry, WebFeature(), PersistenceFeature())
        >>> registry.get(Database)
    """
    resolution = resolve_features(features, settings)
    FeatureModuleLoader(registry, settings).apply(resolution)
    return resolution
