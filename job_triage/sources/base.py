from __future__ import annotations

from abc import ABC, abstractmethod

from job_triage.models import RawJobRecord


class SourceAdapter(ABC):
    """One job origin. ``fetch_raw`` may raise; the aggregator isolates it.

    Implementations catch their own per-request failures, log them and
    append a short message to ``errors`` instead of raising.
    """

    name: str = "unknown"
    id_prefix: str = "job"

    def __init__(self) -> None:
        self.errors: list[str] = []

    def record_error(self, message: str) -> None:
        self.errors.append(message)

    @abstractmethod
    def fetch_raw(self) -> list[RawJobRecord]:
        pass
