"""Base model for route store records.

Every record model inherits from :class:`EbulaBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase store keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips placeholder
  values (``None``, ``""``, ``"--"``, NaN) so the field default is used.
* Frozen instances: the core only ever reads store snapshots.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Placeholder strings editors leave behind for "not set".
_SENTINELS = frozenset({"", "--", "NaN", "nan"})


class EbulaBaseModel(BaseModel):
    """Base for route, trip, track-object and timetable records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_placeholders(cls, values: Any) -> Any:
        """Drop placeholder values so field defaults apply."""
        if not isinstance(values, dict):
            return values
        return EbulaBaseModel._clean_dict(values)
