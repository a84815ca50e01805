"""
File-backed persistence for the free-check counter.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger("policy_checker.storage.quota")


@dataclass(slots=True)
class QuotaRecord:
    """Persisted counter state."""

    remaining: int
    updated_at: str


class JsonQuotaStore:
    """Keeps the remaining-checks counter in a small JSON file."""

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> Optional[int]:
        """Return the stored counter, or None when nothing usable is stored."""
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return int(payload["remaining"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Ignoring unreadable quota file", extra={"path": str(self.path)})
            return None

    def write(self, remaining: int) -> None:
        record = QuotaRecord(
            remaining=remaining,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(record), ensure_ascii=False), encoding="utf-8")


__all__ = ["JsonQuotaStore", "QuotaRecord"]
