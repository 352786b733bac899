"""Breadth-first resolution of a feature graph into distinct declarations."""

from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TypeVar

from featurekit.domain import Dependency, Feature, Kind, Module
from featurekit.errors import FeatureCycleError, TraversalLimitError
from featurekit.logging import get_logger
from featurekit.settings import LoaderSettings

__all__ = ["Resolution", "resolve_features"]

log = get_logger(__name__)

D = TypeVar("D", Module, Dependency)


@dataclass(frozen=True)
class Resolution:
    """
    The distinct declarations collected from a feature graph, in first-encounter order.

    Attributes:
        extensions: Extension units, to be registered before anything else.
        modules: Content modules, registered after the extensions.
        dependencies: Dependencies whose binding actions run last.
        visited: How many features were dequeued, counting repeats.
    """

    extensions: tuple[Module, ...]
    modules: tuple[Module, ...]
    dependencies: tuple[Dependency, ...]
    visited: int


class _Declarations:
    """Ordered declarations of one sort, keeping only the first of each kind."""

    def __init__(self, sort: str):
        self._sort = sort
        self._items: list = []
        self._kinds: set[Kind] = set()

    def add_all(self, declarations: Iterable[D], source: Feature) -> None:
        for declaration in declarations:
            kind = declaration.kind
            if kind in self._kinds:
                log.debug(
                    "duplicate_skipped",
                    sort=self._sort,
                    kind=repr(kind),
                    feature=repr(source.kind),
                )
                continue
            self._kinds.add(kind)
            self._items.append(declaration)

    def as_tuple(self) -> tuple:
        return tuple(self._items)


class _FeatureQueue:
    """
    FIFO queue of features still to visit.

    Each entry carries the feature instances that led to it, so an instance that
    needs itself, directly or through its sub-features, can be reported instead of
    looping forever. Nested features of the same class are not cycles, and shared
    sub-features (diamonds) are still visited once per parent. Graphs that recurse
    through fresh instances are bounded by ``max_visits`` only.
    """

    def __init__(self, roots: Sequence[Feature], detect_cycles: bool):
        self._detect_cycles = detect_cycles
        self._queue: deque[tuple[Feature, tuple[Feature, ...]]] = deque(
            (root, ()) for root in roots
        )

    def __len__(self) -> int:
        return len(self._queue)

    def popleft(self) -> tuple[Feature, tuple[Feature, ...]]:
        return self._queue.popleft()

    def extend(self, parent: Feature, ancestry: tuple[Feature, ...]) -> None:
        path = ancestry + (parent,)
        for needed in parent.needed_features():
            if self._detect_cycles:
                self._check_not_ancestor(needed, path)
            self._queue.append((needed, path))

    @staticmethod
    def _check_not_ancestor(needed: Feature, path: tuple[Feature, ...]) -> None:
        for index, ancestor in enumerate(path):
            if ancestor is needed:
                cycle = [repr(feature.kind) for feature in path[index:]]
                cycle.append(repr(needed.kind))
                log.error("feature_cycle", path=cycle)
                raise FeatureCycleError(
                    "Feature graph contains a cycle: " + " -> ".join(cycle)
                )


def resolve_features(
    features: Sequence[Feature], settings: Optional[LoaderSettings] = None
) -> Resolution:
    """
    Traverse ``features`` breadth-first and collect their distinct declarations.

    Roots are visited in the given order, then their sub-features level by level.
    From every dequeued feature the extensions, modules and dependencies are taken,
    in that order, keeping a declaration only if none of the same kind was seen
    before; then its sub-features are queued.

    Args:
        features: The root features.
        settings: Traversal settings; defaults to :class:`LoaderSettings` defaults.

    Returns:
        The collected :class:`Resolution`.

    Raises:
        FeatureCycleError: If cycle detection is on and a feature instance needs itself.
        TraversalLimitError: If more than ``settings.max_visits`` features are dequeued.
    """
    settings = settings or LoaderSettings()

    extensions = _Declarations("extension")
    modules = _Declarations("module")
    dependencies = _Declarations("dependency")
    queue = _FeatureQueue(features, settings.detect_cycles)
    visited = 0

    while len(queue) > 0:
        feature, ancestry = queue.popleft()
        visited += 1
        if settings.max_visits is not None and visited > settings.max_visits:
            log.error("traversal_limit_exceeded", max_visits=settings.max_visits)
            raise TraversalLimitError(
                f"Visited more than {settings.max_visits} features"
            )
        log.debug("feature_dequeued", feature=repr(feature.kind), depth=len(ancestry))

        extensions.add_all(feature.needed_extensions(), feature)
        modules.add_all(feature.modules(), feature)
        dependencies.add_all(feature.dependencies(), feature)

        queue.extend(feature, ancestry)

    return Resolution(
        extensions.as_tuple(),
        modules.as_tuple(),
        dependencies.as_tuple(),
        visited,
    )
