from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_offer
from job_triage.config import DigestConfig, NotificationSettings
from job_triage.digest import LogNotifier, Notifier, build_digest, run_digest, select_digest_jobs
from job_triage.models import JobStatus

NOW = datetime(2024, 6, 3, 17, 30, tzinfo=timezone.utc)


def _jobs():
    return [
        make_offer(id="fresh-new", date=NOW - timedelta(hours=2), ai_fit_score=40.0),
        make_offer(id="fresh-high", date=NOW - timedelta(hours=3), ai_fit_score=85.0, status=JobStatus.APPLIED),
        make_offer(id="fresh-low-seen", date=NOW - timedelta(hours=1), ai_fit_score=30.0, status=JobStatus.REJECTED),
        make_offer(id="stale", date=NOW - timedelta(hours=20), ai_fit_score=95.0),
    ]


def test_selection_window_and_score_rules() -> None:
    selected = select_digest_jobs(_jobs(), now=NOW, window_hours=14, min_score=80)

    assert [j.id for j in selected] == ["fresh-new", "fresh-high"]


def test_build_digest_lists_jobs() -> None:
    subject, body = build_digest(_jobs()[:2], now=NOW)

    assert subject == "2 nouvelles offres pour toi"
    assert body.count("### ") == 2
    assert "Fit : 85%" in body


def test_run_digest_skips_when_disabled() -> None:
    notifier = LogNotifier()

    sent = run_digest(_jobs, notifier, NotificationSettings(daily_digest=False), now=NOW)

    assert sent == 0
    assert notifier.sent == []


def test_run_digest_forced_sends_selection() -> None:
    notifier = LogNotifier()

    sent = run_digest(_jobs, notifier, NotificationSettings(), DigestConfig(), force=True, now=NOW)

    assert sent == 2
    assert notifier.sent[0][0] == "2 nouvelles offres pour toi"


def test_run_digest_nothing_to_report() -> None:
    notifier = LogNotifier()

    sent = run_digest(lambda: [], notifier, NotificationSettings(daily_digest=True), now=NOW)

    assert sent == 0
    assert notifier.sent == []


def test_notifier_errors_propagate() -> None:
    class Broken(Notifier):
        def send(self, subject: str, body: str) -> None:
            raise ConnectionError("smtp down")

    with pytest.raises(ConnectionError):
        run_digest(_jobs, Broken(), NotificationSettings(daily_digest=True), now=NOW)
