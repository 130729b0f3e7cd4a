"""Data models for raw source records, job offers and score results."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class JobStatus(str, Enum):
    NEW = "NEW"
    INTERESTED = "INTERESTED"
    APPLIED = "APPLIED"
    REJECTED = "REJECTED"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"


class Scope(str, Enum):
    NATIONAL = "NATIONAL"
    INTERNATIONAL = "INTERNATIONAL"


@dataclass
class RawJobRecord:
    """Source-native job as emitted by an adapter, before normalization.

    Only ``source`` is mandatory; everything else is best-effort and gets a
    default in :func:`job_triage.aggregator.normalize_record`.
    ``seed_score`` is on the legacy 1-5 scale.
    """

    source: str
    id_prefix: str
    native_id: str | None = None
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    date: datetime | str | None = None
    url: str = ""
    summary: str | None = None
    requirements: list[str] = field(default_factory=list)
    seed_score: float | None = None
    is_search_intent: bool = False


@dataclass
class JobOffer:
    id: str
    title: str
    company: str
    location: str
    description: str
    date: datetime
    url: str
    source: str
    scope: Scope = Scope.INTERNATIONAL
    is_search_intent: bool = False
    ai_fit_score: float | None = None
    status: JobStatus = JobStatus.NEW
    requirements: list[str] = field(default_factory=list)
    summary: str = ""
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Wire shape used by the HTTP interface (camelCase keys)."""
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "date": self.date.isoformat(),
            "url": self.url,
            "source": self.source,
            "scope": self.scope.value,
            "isSearchIntent": self.is_search_intent,
            "aiFitScore": self.ai_fit_score,
            "status": self.status.value,
            "requirements": list(self.requirements),
            "summary": self.summary,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
        }


@dataclass(frozen=True)
class MatchResult:
    score: float
    strengths: list[str]
    weaknesses: list[str]


@dataclass(frozen=True)
class KeywordFit:
    score: float
    matched_keywords: list[str]
    missing_keywords: list[str]


def parse_status(value: JobStatus | str) -> JobStatus:
    """Case-insensitive JobStatus lookup; ValueError for anything else."""
    if isinstance(value, JobStatus):
        return value
    return JobStatus(str(value).strip().upper())
