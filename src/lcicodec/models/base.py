"""Base model class and lcicodec-specific Pydantic configuration.

Every record type derives from LciModel. Known subelement models declare
their wire ID as a ``subelement_id`` class variable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class LciModel(BaseModel):
    """Base class for all lcicodec record models.

    Example:
        >>> from typing import ClassVar
        >>> class Azimuth(LciModel):
        ...     subelement_id: ClassVar[int] = 1
        ...     azimuth: int = 0
    """

    model_config = ConfigDict(
        # Accept ints for floats, IntEnum members for ints
        strict=False,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )
