"""
Audit log adapter for unexpected onboarding failures.

Every report is written to the `asset_onboarding.audit` logger and, when a
path is configured, appended as one JSON line to an audit file. Reporting is
best-effort: a failing write is logged and never raised.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..application.domain import AuditLog

logger = logging.getLogger("asset_onboarding.audit")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonlAuditLog(AuditLog):
    """An AuditLog that logs and optionally appends to a JSONL file."""

    def __init__(self, jsonl_path: Optional[str] = None):
        self.jsonl_path = Path(jsonl_path) if jsonl_path else None

    def _write_jsonl(self, record: dict):
        try:
            self.jsonl_path.parent.mkdir(parents=True, exist_ok=True)
            with self.jsonl_path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.warning(f"Audit JSONL write failed: {e}")

    def record_unexpected(self, action: str, error: BaseException):
        record = {
            "type": "unexpected_failure",
            "timestamp": _now(),
            "action": action,
            "error_type": type(error).__name__,
            "error": str(error),
            "traceback": "".join(
                traceback.format_exception(
                    type(error), error, error.__traceback__
                )
            ),
        }

        logger.error(
            f"{action} failed unexpectedly: {record['error_type']}: "
            f"{record['error']}"
        )

        if self.jsonl_path is not None:
            self._write_jsonl(record)
