"""Event type as a closed set of well-known kinds plus a custom label.

On the wire the type is a single string: ``"dinner"``, ``"cultural"`` or the
custom label itself (``"Boat trip"``). ``"other"`` and blank strings are
rejected so every event carries a meaningful type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

KIND_DINNER = "dinner"
KIND_CULTURAL = "cultural"
KIND_CUSTOM = "custom"

WELL_KNOWN_KINDS = (KIND_DINNER, KIND_CULTURAL)
REJECTED_LABELS = frozenset({"other"})
MAX_LABEL_LENGTH = 50


class InvalidEventTypeError(ValueError):
    pass


@dataclass(frozen=True)
class EventType:
    kind: str
    label: str = ""

    @classmethod
    def custom(cls, label: str) -> EventType:
        return cls.parse(label)

    @classmethod
    def parse(cls, raw: Any) -> EventType:
        if isinstance(raw, EventType):
            return raw
        if isinstance(raw, dict):
            kind = str(raw.get("kind", "")).strip().lower()
            if kind == KIND_CUSTOM:
                raw = raw.get("label", "")
            else:
                raw = kind
        if not isinstance(raw, str):
            msg = "Event type must be a string."
            raise InvalidEventTypeError(msg)

        text = " ".join(raw.split())
        lowered = text.lower()
        if not text:
            msg = "Event type may not be blank."
            raise InvalidEventTypeError(msg)
        if lowered in REJECTED_LABELS:
            msg = f'"{text}" is not a valid event type; name the type instead.'
            raise InvalidEventTypeError(msg)
        if lowered in WELL_KNOWN_KINDS:
            return cls(kind=lowered)
        if len(text) > MAX_LABEL_LENGTH:
            msg = f"Event type must be at most {MAX_LABEL_LENGTH} characters."
            raise InvalidEventTypeError(msg)
        return cls(kind=KIND_CUSTOM, label=text)

    @property
    def is_custom(self) -> bool:
        return self.kind == KIND_CUSTOM

    @property
    def value(self) -> str:
        return self.label if self.is_custom else self.kind

    def __str__(self) -> str:
        return self.value
