"""drf-spectacular hooks.

Only the versioned API is documented, and every operation is filed under one
feature tag so Swagger UI stays partitioned.
"""

from __future__ import annotations

from typing import Any

# Method names that contain operations in the OpenAPI path item
_HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options", "head"}

VERSIONED_PREFIX = "/api/v1/"

PATTERN_TAGS = [
    ("/api/v1/auth/jwt", "JWT Authentication"),
    ("/api/v1/auth/", "Authentication"),
    ("/api/v1/users", "Users"),
    ("/api/v1/halls", "Halls"),
    ("/api/v1/schedules", "Schedules"),
    ("/api/v1/announcements", "Announcements"),
    ("/api/v1/events", "Events"),
    ("/api/v1/complaints", "Complaints"),
    ("/api/v1/menus", "Menus"),
    ("/api/v1/audit", "Audit"),
    ("/api/v1/export", "Exports"),
]

ALL_TAGS = list(dict.fromkeys(t for _, t in PATTERN_TAGS))


def only_versioned_endpoints(endpoints, **kwargs):
    """Drop the unversioned ``/api/`` aliases from the generated schema."""

    return [e for e in endpoints if e[0].startswith(VERSIONED_PREFIX)]


def assign_group_tag(path: str) -> str | None:
    """Return the first matching tag name for a given path."""
    for prefix, tag in PATTERN_TAGS:
        if path.startswith(prefix):
            return tag
    return None


def group_tags(result: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Post-processing hook to force consistent tag grouping."""
    paths = result.get("paths", {})
    for path, path_item in paths.items():
        tag = assign_group_tag(path)
        if not tag:
            continue
        for method, op_obj in path_item.items():
            if method.lower() not in _HTTP_METHODS:
                continue
            if not isinstance(op_obj, dict):
                continue
            op_obj["tags"] = [tag]

    existing = {t.get("name") for t in result.get("tags", [])}
    tag_list = result.setdefault("tags", [])
    for tag in ALL_TAGS:
        if tag not in existing:
            tag_list.append({"name": tag})
    return result
