"""Normalization of loosely-typed boolean input.

Web forms and CSV imports send flags as strings ("true", "1", "on"). They are
converted once, at the serializer boundary, so the rest of the code only ever
sees real booleans.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

TRUTHY_STRINGS = frozenset({"true", "1", "yes", "on"})


def coerce_bool(value: Any) -> bool:
    """Return True for True, 1, "1" and "true"/"yes"/"on" in any case."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return False


class CoercedBooleanField(serializers.BooleanField):
    """BooleanField that never rejects input; unknown values read as False."""

    def to_internal_value(self, data):
        return coerce_bool(data)
