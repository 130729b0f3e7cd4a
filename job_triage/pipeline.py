"""
Job triage pipeline.

Runs: load statuses → fan-out fetch → score/classify/summarize → status overlay → sort by recency.
"""
from __future__ import annotations

from typing import Sequence

from job_triage import config
from job_triage.aggregator import collect_with_report
from job_triage.config import CandidateProfile
from job_triage.geo import GeoResolver
from job_triage.log import get_logger
from job_triage.models import JobOffer, JobStatus, parse_status
from job_triage.scope import classify_scope
from job_triage.scorer import score
from job_triage.sources import SampleSource, SourceAdapter, build_sources
from job_triage.status_store import StatusStore
from job_triage.text import truncate

log = get_logger(__name__)

SUMMARY_CHARS = 150
NO_DESCRIPTION = "Aucune description disponible."


def enrich(job: JobOffer, profile: CandidateProfile, geo: GeoResolver) -> JobOffer:
    """Fill scope, fit score, strengths/weaknesses and summary in place."""
    job.scope = classify_scope(job)
    if job.ai_fit_score is None:
        result = score(job, profile, geo)
        job.ai_fit_score = result.score
        job.strengths = list(result.strengths)
        job.weaknesses = list(result.weaknesses)
    if not job.summary:
        job.summary = truncate(job.description, SUMMARY_CHARS) if job.description else NO_DESCRIPTION
    return job


def overlay_status(jobs: Sequence[JobOffer], status_map: dict[str, str]) -> None:
    for job in jobs:
        persisted = status_map.get(job.id)
        job.status = JobStatus(persisted) if persisted in JobStatus.__members__ else JobStatus.NEW


def run_pipeline(
    adapters: Sequence[SourceAdapter] | None = None,
    *,
    store: StatusStore | None = None,
    profile: CandidateProfile | None = None,
    timeout_s: float | None = None,
    fallback: Sequence[SourceAdapter] | None = None,
) -> list[JobOffer]:
    """Return the enriched job list, newest first.

    An empty list is a valid result when every source fails. *fallback*
    adapters are only consulted in that case.
    """
    store = store or StatusStore()
    profile = profile or config.load_profile()
    timeout_s = timeout_s if timeout_s is not None else config.source_timeout_s()
    if adapters is None:
        adapters = build_sources(config.enabled_source_names())

    # 1. Persisted decisions
    status_map = store.load()

    # 2. Fetch
    log.info("Fetching from %d source(s) (timeout %.1fs)...", len(adapters), timeout_s)
    jobs, outcomes = collect_with_report(adapters, timeout_s)
    failed = [o.name for o in outcomes if o.state in ("failed", "timeout")]
    if failed:
        log.warning("Sources without results this run: %s", ", ".join(failed))
    degraded = [f"{o.name} ({o.error})" for o in outcomes if o.state == "degraded"]
    if degraded:
        log.warning("Sources with request errors this run: %s", ", ".join(degraded))

    if not jobs and fallback:
        log.warning("No live records — falling back to %d offline source(s)", len(fallback))
        jobs, _ = collect_with_report(fallback, timeout_s)

    # 3. Enrich
    geo = GeoResolver(home=profile.home)
    for job in jobs:
        enrich(job, profile, geo)

    # 4. Status overlay
    overlay_status(jobs, status_map)

    # 5. Newest first
    jobs.sort(key=lambda j: j.date, reverse=True)
    log.info(
        "Pipeline complete — jobs=%d, scored=%d, tracked=%d",
        len(jobs),
        sum(1 for j in jobs if j.strengths or j.weaknesses),
        sum(1 for j in jobs if j.status is not JobStatus.NEW),
    )
    return jobs


def default_fallback() -> list[SourceAdapter]:
    return [SampleSource()] if config.offline_fallback_enabled() else []


def update_status(job_id: str, status: JobStatus | str, store: StatusStore | None = None) -> bool:
    """Record a triage decision; ValueError for values outside JobStatus."""
    store = store or StatusStore()
    value = parse_status(status)
    ok = store.save(job_id, value)
    if ok:
        log.info("Status %s → %s", job_id, value.value)
    return ok


if __name__ == "__main__":
    result = run_pipeline(fallback=default_fallback())
    log.info("Jobs: %d", len(result))
