"""
Best-effort audit recorder.

Audit writes must never fail the operation that triggered them. A write
that raises is logged as a warning, counted, and parked in a bounded
in-memory buffer. The next successful write in the same process drains
that buffer.
"""
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional

from django.utils import timezone

from accounts.infrastructure.models import CommandLog
from audit.infrastructure.models import AdminAction, ApiAccessLog, LicenseGenerationBatch
from core.metrics import audit_write_failures_total

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 1000

RECORD_MODELS = {
    "admin_action": AdminAction,
    "generation_batch": LicenseGenerationBatch,
    "api_access": ApiAccessLog,
    "command": CommandLog,
}


@dataclass
class FallbackRecord:
    """An audit write that could not reach its store."""

    kind: str
    fields: Dict[str, Any]
    failed_at: datetime
    error: str = ""


@dataclass
class AuditRecorder:
    """Writes audit rows, falling back to a ring buffer on failure."""

    buffer_size: int = DEFAULT_BUFFER_SIZE
    clock: Callable[[], datetime] = timezone.now
    _fallback: Deque[FallbackRecord] = field(init=False, repr=False)
    _lock: threading.Lock = field(init=False, repr=False, default_factory=threading.Lock)

    def __post_init__(self):
        self._fallback = deque(maxlen=self.buffer_size)

    @property
    def fallback_records(self) -> List[FallbackRecord]:
        with self._lock:
            return list(self._fallback)

    def _write(self, kind: str, fields: Dict[str, Any], drain: bool = True) -> bool:
        fields.setdefault("created_at", self.clock())
        try:
            RECORD_MODELS[kind].objects.create(**fields)
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._buffer(kind, fields, e)
            return False

        if drain and self._fallback:
            self.replay_fallback()
        return True

    def _buffer(self, kind: str, fields: Dict[str, Any], error: Exception) -> None:
        logger.warning(
            "Audit write failed, buffering in memory: %s",
            error,
            extra={"kind": kind, "buffered": len(self._fallback) + 1},
        )
        audit_write_failures_total.labels(kind=kind).inc()
        with self._lock:
            self._fallback.append(
                FallbackRecord(kind=kind, fields=fields, failed_at=self.clock(), error=str(error))
            )

    def record_admin_action(
        self,
        admin_id: str,
        admin_username: str,
        action_type: str,
        target_type: Optional[str] = None,
        target_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> bool:
        return self._write(
            "admin_action",
            {
                "admin_id": admin_id,
                "admin_username": admin_username,
                "action_type": action_type,
                "target_type": target_type,
                "target_id": target_id,
                "details": details or {},
                "ip_address": ip_address,
            },
        )

    def record_generation_batch(
        self,
        admin_id: str,
        admin_username: str,
        license_type: str,
        amount: int,
        duration_hours: Optional[int],
    ) -> bool:
        return self._write(
            "generation_batch",
            {
                "admin_id": admin_id,
                "admin_username": admin_username,
                "license_type": license_type,
                "amount": amount,
                "duration_hours": duration_hours,
            },
        )

    def record_api_access(
        self,
        endpoint: str,
        method: str,
        license_key: Optional[str],
        ip_address: Optional[str],
        user_agent: Optional[str],
        response_status: int,
        response_time_ms: int,
    ) -> bool:
        return self._write(
            "api_access",
            {
                "endpoint": endpoint,
                "method": method,
                "license_key": license_key,
                "ip_address": ip_address,
                "user_agent": user_agent,
                "response_status": response_status,
                "response_time_ms": response_time_ms,
            },
        )

    def record_command(
        self,
        external_id: str,
        username: str,
        command: str,
        success: bool,
        error_message: Optional[str] = None,
    ) -> bool:
        return self._write(
            "command",
            {
                "external_id": external_id,
                "username": username,
                "command": command,
                "success": success,
                "error_message": error_message,
            },
        )

    def replay_fallback(self) -> int:
        """
        Retry every buffered write once.

        Returns:
            Number of records written; failures go back into the buffer
        """
        with self._lock:
            pending = list(self._fallback)
            self._fallback.clear()

        written = 0
        for record in pending:
            if self._write(record.kind, dict(record.fields), drain=False):
                written += 1
        if pending:
            logger.info("Replayed %d of %d buffered audit records", written, len(pending))
        return written
