__all__ = [
    "FeatureError",
    "FeatureCycleError",
    "TraversalLimitError",
    "RegistrationError",
]


class FeatureError(Exception):
    """Base class for errors raised while resolving or loading features."""

    pass


class FeatureCycleError(FeatureError):
    """Raised when a feature instance transitively needs itself."""

    pass


class TraversalLimitError(FeatureError):
    """Raised when traversal visits more features than the configured limit."""

    pass


class RegistrationError(FeatureError):
    """Raised when a registry rejects a module or binding."""

    pass
