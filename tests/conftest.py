from __future__ import annotations

import os
import threading
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("JOB_TRIAGE_LOG_FILE", "false")

from job_triage.config import CandidateProfile
from job_triage.models import JobOffer, RawJobRecord
from job_triage.sources.base import SourceAdapter
from job_triage.status_store import StatusStore


class StaticSource(SourceAdapter):
    """Adapter returning a fixed list of records."""

    def __init__(self, name: str, id_prefix: str, records: list[RawJobRecord]) -> None:
        super().__init__()
        self.name = name
        self.id_prefix = id_prefix
        self.records = records

    def fetch_raw(self) -> list[RawJobRecord]:
        return list(self.records)


class FailingSource(SourceAdapter):
    name = "Broken"
    id_prefix = "broken"

    def fetch_raw(self) -> list[RawJobRecord]:
        raise RuntimeError("upstream exploded")


class HangingSource(SourceAdapter):
    """Blocks until *release* is set; the test releases it on teardown."""

    name = "Hanging"
    id_prefix = "hang"

    def __init__(self, release: threading.Event) -> None:
        super().__init__()
        self.release = release

    def fetch_raw(self) -> list[RawJobRecord]:
        self.release.wait(10)
        return [RawJobRecord(source=self.name, id_prefix=self.id_prefix, native_id="late", title="Late")]


def make_records(name: str, prefix: str, count: int, start: int = 0) -> list[RawJobRecord]:
    now = datetime.now(timezone.utc)
    return [
        RawJobRecord(
            source=name,
            id_prefix=prefix,
            native_id=str(i),
            title=f"Category Manager {i}",
            company="ACME",
            location="Mons",
            description=f"Offre {i}",
            date=now - timedelta(hours=i),
        )
        for i in range(start, start + count)
    ]


def make_offer(**overrides) -> JobOffer:
    values = dict(
        id="test-1",
        title="Category Manager",
        company="ACME",
        location="Mons",
        description="Pilotage de la catégorie.",
        date=datetime.now(timezone.utc),
        url="https://example.com/jobs/1",
        source="Test",
    )
    values.update(overrides)
    return JobOffer(**values)


@pytest.fixture()
def profile() -> CandidateProfile:
    return CandidateProfile()


@pytest.fixture()
def store(tmp_path) -> StatusStore:
    return StatusStore(tmp_path / "job_status.csv")


@pytest.fixture()
def release():
    event = threading.Event()
    yield event
    event.set()


@pytest.fixture()
def no_sleep(monkeypatch):
    monkeypatch.setattr("job_triage.retry.time.sleep", lambda _s: None)
