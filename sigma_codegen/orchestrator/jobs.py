"""Generation job records and the job store.

A ``GenerationJob`` is an immutable snapshot; every change produces a new
snapshot that replaces the old one in the ``JobStore``. Workers only ever
touch the store through ``update``/``compare_and_swap`` so concurrent status
queries never observe a half-applied checkpoint.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from sigma_codegen.utils import iso_timestamp, utc_now


class JobStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def active(self) -> bool:
        """True while a worker still owns the job."""
        return self in (JobStatus.PENDING, JobStatus.GENERATING)


def log_line(message: str, moment: datetime | None = None) -> str:
    """Format a job log entry as ``[<ISO timestamp>] <message>``."""
    return f"[{iso_timestamp(moment)}] {message}"


class GenerationJob(BaseModel):
    """Snapshot of one generation run for one app."""

    model_config = ConfigDict(frozen=True)

    job_id: str
    app_id: str
    status: JobStatus = JobStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100)
    started_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None
    logs: tuple[str, ...] = ()
    error_message: str | None = None

    @classmethod
    def start(cls, job_id: str, app_id: str, message: str) -> "GenerationJob":
        now = utc_now()
        return cls(
            job_id=job_id,
            app_id=app_id,
            started_at=now,
            updated_at=now,
            logs=(log_line(message, now),),
        )

    def advance(self, message: str, **changes: Any) -> "GenerationJob":
        """Return a copy with *changes* applied and *message* appended to the log."""
        now = utc_now()
        return self.model_copy(
            update={
                **changes,
                "updated_at": now,
                "logs": self.logs + (log_line(message, now),),
            }
        )

    @property
    def last_log(self) -> str | None:
        return self.logs[-1] if self.logs else None


class GenerationLogs(BaseModel):
    """Log view returned by ``GenerationOrchestrator.get_logs``."""

    model_config = ConfigDict(frozen=True)

    app_id: str
    job_id: str
    status: JobStatus
    logs: list[str]


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class JobStore(ABC):
    """Keyed store of the latest ``GenerationJob`` per app id."""

    @abstractmethod
    def get(self, app_id: str) -> GenerationJob | None:
        ...

    @abstractmethod
    def put(self, job: GenerationJob) -> None:
        ...

    @abstractmethod
    def compare_and_swap(
        self, app_id: str, expected: GenerationJob | None, new: GenerationJob
    ) -> bool:
        """Store *new* only if the current record is still *expected*."""

    @abstractmethod
    def update(
        self,
        app_id: str,
        fn: Callable[[GenerationJob], GenerationJob],
        *,
        job_id: str | None = None,
    ) -> GenerationJob | None:
        """Atomically replace the record with ``fn(record)``.

        When *job_id* is given and the stored record belongs to a different
        run, nothing changes and ``None`` is returned.
        """


class InMemoryJobStore(JobStore):
    """Process-local job store guarded by a lock.

    A ``threading.Lock`` rather than an ``asyncio.Lock`` since rendering runs
    in worker threads and the store may be read from them.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, GenerationJob] = {}
        self._lock = threading.Lock()

    def get(self, app_id: str) -> GenerationJob | None:
        with self._lock:
            return self._jobs.get(app_id)

    def put(self, job: GenerationJob) -> None:
        with self._lock:
            self._jobs[job.app_id] = job

    def compare_and_swap(
        self, app_id: str, expected: GenerationJob | None, new: GenerationJob
    ) -> bool:
        with self._lock:
            if self._jobs.get(app_id) is not expected:
                return False
            self._jobs[app_id] = new
            return True

    def update(
        self,
        app_id: str,
        fn: Callable[[GenerationJob], GenerationJob],
        *,
        job_id: str | None = None,
    ) -> GenerationJob | None:
        with self._lock:
            current = self._jobs.get(app_id)
            if current is None:
                return None
            if job_id is not None and current.job_id != job_id:
                return None
            updated = fn(current)
            self._jobs[app_id] = updated
            return updated

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)
