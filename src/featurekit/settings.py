"""
Typed loader configuration using Pydantic.

Settings may come from the environment (``FEATUREKIT_*`` variables) or be passed
explicitly; explicit values win.
"""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["LoaderSettings", "load_settings"]

ENV_PREFIX = "FEATUREKIT_"


class LoaderSettings(BaseModel):
    """How feature graphs are traversed."""

    model_config = ConfigDict(frozen=True)

    detect_cycles: bool = Field(
        default=True,
        description="Raise FeatureCycleError when a feature instance transitively needs itself",
    )
    max_visits: int | None = Field(
        default=None,
        gt=0,
        description="Upper bound on the number of features dequeued in one traversal",
    )


def load_settings(**overrides: Any) -> LoaderSettings:
    """
    Build settings from ``FEATUREKIT_DETECT_CYCLES`` / ``FEATUREKIT_MAX_VISITS``.

    Args:
        **overrides: Field values taking precedence over the environment.

    Returns:
        Validated loader settings.

    Raises:
        pydantic.ValidationError: If a value cannot be converted or is out of range.
    """
    values: dict[str, Any] = {}
    for name in LoaderSettings.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw not in (None, ""):
            values[name] = raw
    values.update(overrides)
    return LoaderSettings.model_validate(values)
