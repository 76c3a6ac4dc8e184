from __future__ import annotations

from django.http import QueryDict


class InputAliasMixin:
    """Accept alternative (camelCase) input keys on a serializer.

    ``input_aliases`` maps the incoming name to the field name, for example
    ``{"startTime": "start_time"}``. The field name wins when both are sent.
    """

    input_aliases: dict[str, str] = {}

    def to_internal_value(self, data):
        if hasattr(data, "keys") and any(alias in data for alias in self.input_aliases):
            if isinstance(data, QueryDict):
                renamed = data.copy()
                for alias, field in self.input_aliases.items():
                    if alias in renamed:
                        values = renamed.getlist(alias)
                        del renamed[alias]
                        if field not in renamed:
                            renamed.setlist(field, values)
            else:
                renamed = dict(data)
                for alias, field in self.input_aliases.items():
                    if alias in renamed:
                        value = renamed.pop(alias)
                        renamed.setdefault(field, value)
            data = renamed
        return super().to_internal_value(data)
