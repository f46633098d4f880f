from __future__ import annotations

"""Subpackage aggregating individual auth route modules."""

__all__ = [
    "register",
    "login",
    "forgot_password",
    "reset_password",
]
