from __future__ import annotations


def client_ip(request) -> str:
    """Best-effort client address, honouring reverse proxy headers."""

    meta = getattr(request, "META", None) or {}
    forwarded = meta.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = meta.get("HTTP_X_REAL_IP", "")
    if real_ip:
        return real_ip.strip()
    return meta.get("REMOTE_ADDR", "") or ""


def user_agent(request) -> str:
    meta = getattr(request, "META", None) or {}
    return meta.get("HTTP_USER_AGENT", "")[:512]
