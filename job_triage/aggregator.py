"""Fan out to all sources, normalize their records and drop duplicates."""
from __future__ import annotations

import time
import uuid
import threading
from concurrent.futures import Future, wait
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, Sequence

from job_triage.log import get_logger
from job_triage.models import JobOffer, RawJobRecord
from job_triage.sources.base import SourceAdapter
from job_triage.text import strip_markup

log = get_logger(__name__)

UNSPECIFIED_LOCATION = "Non précisé (national)"
LEGACY_SCALE_MAX = 5.0

# degraded: finished, but the adapter recorded per-request errors.
OutcomeState = Literal["ok", "degraded", "failed", "timeout"]
MAX_REPORTED_ERRORS = 3


@dataclass
class SourceOutcome:
    name: str
    state: OutcomeState
    count: int = 0
    error: str = ""
    duration_s: float = 0.0


def _parse_date(value: datetime | str | None, fallback: datetime) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            log.debug("Unparseable date %r — using fetch time", value)
            return fallback
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return fallback


def seed_to_percent(seed: float | None) -> float | None:
    """Adapter seeds use the legacy 1-5 scale; the pipeline uses 0-100."""
    if seed is None:
        return None
    pct = float(seed) * 100.0 / LEGACY_SCALE_MAX if seed <= LEGACY_SCALE_MAX else float(seed)
    return max(0.0, min(100.0, pct))


def normalize_record(record: RawJobRecord, fetched_at: datetime | None = None) -> JobOffer:
    fetched_at = fetched_at or datetime.now(timezone.utc)
    native = (record.native_id or "").strip() or uuid.uuid4().hex
    return JobOffer(
        id=f"{record.id_prefix}-{native}",
        title=strip_markup(record.title) or "Poste sans titre",
        company=strip_markup(record.company),
        location=strip_markup(record.location) or UNSPECIFIED_LOCATION,
        description=strip_markup(record.description),
        date=_parse_date(record.date, fetched_at),
        url=record.url or "",
        source=record.source,
        is_search_intent=record.is_search_intent,
        ai_fit_score=seed_to_percent(record.seed_score),
        requirements=[r.strip() for r in record.requirements if r and r.strip()],
        summary=strip_markup(record.summary) if record.summary else "",
    )


def dedupe(offers: Sequence[JobOffer]) -> list[JobOffer]:
    """First-seen wins; later offers with the same id are dropped whole."""
    seen: set[str] = set()
    out: list[JobOffer] = []
    for offer in offers:
        if offer.id in seen:
            continue
        seen.add(offer.id)
        out.append(offer)
    return out


def _fetch(adapter: SourceAdapter) -> tuple[list[RawJobRecord], float]:
    start = time.perf_counter()
    records = adapter.fetch_raw()
    return list(records or []), time.perf_counter() - start


def _run_adapter(adapter: SourceAdapter, future: Future) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        future.set_result(_fetch(adapter))
    except Exception as exc:
        future.set_exception(exc)


def _start(adapter: SourceAdapter) -> Future:
    """Run one adapter on a daemon thread so a hung source cannot block exit."""
    future: Future = Future()
    threading.Thread(
        target=_run_adapter, args=(adapter, future), name=f"source-{adapter.name}", daemon=True
    ).start()
    return future


def _error_summary(errors: Sequence[str]) -> str:
    shown = "; ".join(errors[:MAX_REPORTED_ERRORS])
    extra = len(errors) - MAX_REPORTED_ERRORS
    return f"{shown} (+{extra} more)" if extra > 0 else shown


def collect_with_report(
    adapters: Sequence[SourceAdapter], timeout_s: float
) -> tuple[list[JobOffer], list[SourceOutcome]]:
    """Run every adapter concurrently; never raises.

    A source that raises or does not finish within *timeout_s* contributes
    nothing. Output order is adapter registration order, then each adapter's
    own emission order. Errors an adapter recorded on its ``errors`` list
    mark its outcome ``degraded``.
    """
    if not adapters:
        log.info("No sources configured — nothing to collect")
        return [], []

    futures: list[Future] = [_start(adapter) for adapter in adapters]
    # Late finishers are abandoned; their results are never read.
    wait(futures, timeout=timeout_s)

    fetched_at = datetime.now(timezone.utc)
    outcomes: list[SourceOutcome] = []
    candidates: list[JobOffer] = []
    for adapter, future in zip(adapters, futures):
        name = adapter.name
        if not future.done():
            log.error("[%s] timed out after %.1fs", name, timeout_s)
            outcomes.append(SourceOutcome(name, "timeout", error=f"timeout after {timeout_s:.1f}s"))
            continue
        exc = future.exception()
        if exc is not None:
            log.error("[%s] FAILED: %s", name, exc)
            outcomes.append(SourceOutcome(name, "failed", error=str(exc)))
            continue

        records, duration = future.result()
        offers: list[JobOffer] = []
        for record in records:
            try:
                offers.append(normalize_record(record, fetched_at))
            except (TypeError, ValueError, AttributeError) as e:
                log.warning("[%s] dropped malformed record: %s", name, e)
        candidates.extend(offers)

        errors = list(adapter.errors)
        if errors:
            log.warning("[%s] %d request error(s): %s", name, len(errors), _error_summary(errors))
            outcomes.append(
                SourceOutcome(
                    name, "degraded", count=len(offers), error=_error_summary(errors), duration_s=duration
                )
            )
        else:
            outcomes.append(SourceOutcome(name, "ok", count=len(offers), duration_s=duration))
        log.info("[%s] returned %d records in %.2fs", name, len(offers), duration)

    unique = dedupe(candidates)
    log.info(
        "Collected %d unique records from %d source(s) (%d duplicates dropped)",
        len(unique), len(adapters), len(candidates) - len(unique),
    )
    return unique, outcomes


def collect(adapters: Sequence[SourceAdapter], timeout_s: float) -> list[JobOffer]:
    offers, _ = collect_with_report(adapters, timeout_s)
    return offers
