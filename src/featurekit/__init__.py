"""Feature-based module loading for dependency-injection registries.

A feature declares the extension units it needs, the content modules it contributes,
the dependencies it binds and the sub-features it builds on. featurekit walks a graph
of features breadth-first, keeps the first declaration of every kind, and applies
the result to a registry: extensions first, then modules, then bindings.

Basic Usage:
    >>> from featurekit.domain import Dependency, Feature
    >>> from featurekit.loader import load_features
    >>> from featurekit.registry import ModuleRegistry
    >>>
    >>> class Storage(Feature):
    ...     def modules(self):
    ...         yield SqliteModule()
    ...
    ...     def dependencies(self):
    ...         return (Dependency.to_constant(Clock, SystemClock()),)
    >>>
    >>> registry = ModuleRegistry()
    >>> load_features(registry, Storage())
    >>> registry.get(Clock)

Library modules log through structlog but never configure it. Applications should
call featurekit.logging.configure_logging at startup; otherwise structlog's defaults
print the loader's debug events too.

The package consists of:
    - domain: Feature, Module and Dependency declarations
    - resolution: breadth-first traversal and deduplication by kind
    - loader: applying a resolution to a registry in phase order
    - registry: the Registry protocol and an in-memory ModuleRegistry
    - settings: traversal configuration
    - errors: framework-specific exceptions
"""
