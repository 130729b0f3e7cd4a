"""Select recent interesting jobs and hand a digest to a notifier."""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from job_triage.config import DigestConfig, NotificationSettings
from job_triage.log import get_logger
from job_triage.models import JobOffer, JobStatus

log = get_logger(__name__)


class Notifier(ABC):
    """Delivery channel for digests (email, chat, ...)."""

    @abstractmethod
    def send(self, subject: str, body: str) -> None:
        pass


class LogNotifier(Notifier):
    """Writes the digest to the log; the default when no channel is configured."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send(self, subject: str, body: str) -> None:
        self.sent.append((subject, body))
        log.info("Digest: %s\n%s", subject, body)


def digest_predicate(
    now: datetime, window_hours: float, min_score: float
) -> Callable[[JobOffer], bool]:
    """Posted within the window AND (score >= min_score OR still NEW)."""
    since = now - timedelta(hours=window_hours)

    def keep(job: JobOffer) -> bool:
        if job.date <= since:
            return False
        high = job.ai_fit_score is not None and job.ai_fit_score >= min_score
        return high or job.status is JobStatus.NEW

    return keep


def select_digest_jobs(
    jobs: Sequence[JobOffer],
    now: datetime | None = None,
    window_hours: float = 14.0,
    min_score: float = 80.0,
) -> list[JobOffer]:
    now = now or datetime.now(timezone.utc)
    keep = digest_predicate(now, window_hours, min_score)
    return [j for j in jobs if keep(j)]


def build_digest(jobs: Sequence[JobOffer], now: datetime | None = None) -> tuple[str, str]:
    """Return (subject, markdown body) for the selected jobs."""
    now = now or datetime.now(timezone.utc)
    subject = f"{len(jobs)} nouvelles offres pour toi"
    lines: list[str] = [
        f"# Rapport de {now.strftime('%Hh%M')} — {now.strftime('%Y-%m-%d')}",
        "",
        f"**{len(jobs)}** opportunités intéressantes détectées",
        "",
    ]
    for job in jobs:
        fit = f"{job.ai_fit_score:.0f}%" if job.ai_fit_score is not None else "—"
        lines.append(f"### [{job.date.strftime('%d/%m %H:%M')}] {job.title}")
        lines.append(f"- **Entreprise :** {job.company}")
        lines.append(f"- **Lieu :** {job.location} (Fit : {fit})")
        if job.url:
            lines.append(f"- **Lien :** {job.url}")
        lines.append("")
    return subject, "\n".join(lines)


def run_digest(
    fetch_jobs: Callable[[], Sequence[JobOffer]],
    notifier: Notifier,
    settings: NotificationSettings,
    digest_config: DigestConfig | None = None,
    *,
    force: bool = False,
    now: datetime | None = None,
) -> int:
    """Send one digest; returns the number of jobs reported.

    Skipped when the daily digest toggle is off, unless *force* is set.
    Notifier errors propagate so the caller can report them.
    """
    digest_config = digest_config or DigestConfig()
    if not settings.daily_digest and not force:
        log.info("Daily digest skipped (disabled in settings)")
        return 0

    jobs = fetch_jobs()
    selected = select_digest_jobs(
        jobs, now=now, window_hours=digest_config.window_hours, min_score=digest_config.min_score
    )
    if not selected:
        log.info("Digest: no new jobs to report (%d fetched)", len(jobs))
        return 0

    subject, body = build_digest(selected, now)
    notifier.send(subject, body)
    log.info("Digest sent: %d job(s)", len(selected))
    return len(selected)
