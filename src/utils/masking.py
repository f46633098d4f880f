"""Helpers for keeping personal data out of logs."""


def mask_email(email: str) -> str:
    """Mask the local part of an address, e.g. ``ali***@example.com``."""
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:3]}***@{domain}"
