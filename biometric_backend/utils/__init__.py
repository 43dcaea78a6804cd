"""Utility modules for the biometric enrollment backend."""

from .datetime_utils import utc_now, ensure_utc

__all__ = ["utc_now", "ensure_utc"]
