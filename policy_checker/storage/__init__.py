"""Persistence helpers for account-level state."""

from .quota import JsonQuotaStore, QuotaRecord

__all__ = ["JsonQuotaStore", "QuotaRecord"]
