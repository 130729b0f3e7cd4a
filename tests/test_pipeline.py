from __future__ import annotations

import logging

import pytest

from conftest import FailingSource, StaticSource, make_records
from job_triage.models import JobStatus, RawJobRecord, Scope
from job_triage.pipeline import run_pipeline, update_status
from job_triage.sources import SampleSource


def test_pipeline_scores_classifies_and_sorts(store, profile) -> None:
    records = make_records("Good", "good", 3)
    src = StaticSource("Good", "good", list(reversed(records)))

    jobs = run_pipeline([src], store=store, profile=profile, timeout_s=5)

    assert [j.id for j in jobs] == ["good-0", "good-1", "good-2"]
    for job in jobs:
        assert job.scope is Scope.NATIONAL
        assert job.status is JobStatus.NEW
        assert job.ai_fit_score is not None and 0 <= job.ai_fit_score <= 100
        assert job.strengths
        assert job.summary.startswith("Offre")


def test_persisted_status_is_overlaid(store, profile) -> None:
    src = StaticSource("Good", "good", make_records("Good", "good", 2))
    assert update_status("good-1", "applied", store=store)

    jobs = {j.id: j for j in run_pipeline([src], store=store, profile=profile, timeout_s=5)}

    assert jobs["good-1"].status is JobStatus.APPLIED
    assert jobs["good-0"].status is JobStatus.NEW


def test_seeded_score_is_kept(store, profile) -> None:
    record = RawJobRecord(source="Meta", id_prefix="meta", native_id="1", title="Acheteur", seed_score=4.5)

    (job,) = run_pipeline([StaticSource("Meta", "meta", [record])], store=store, profile=profile, timeout_s=5)

    assert job.ai_fit_score == 90.0
    assert job.strengths == []
    assert job.summary == "Aucune description disponible."


def test_all_sources_failing_gives_empty_list(store, profile) -> None:
    assert run_pipeline([FailingSource()], store=store, profile=profile, timeout_s=5) == []
    assert run_pipeline([], store=store, profile=profile, timeout_s=5) == []


def test_fallback_only_used_when_live_sources_are_empty(store, profile) -> None:
    jobs = run_pipeline([FailingSource()], store=store, profile=profile, timeout_s=5, fallback=[SampleSource()])
    assert jobs and all(j.source == "Sample" for j in jobs)

    live = StaticSource("Good", "good", make_records("Good", "good", 1))
    jobs = run_pipeline([live], store=store, profile=profile, timeout_s=5, fallback=[SampleSource()])
    assert [j.id for j in jobs] == ["good-0"]


def test_update_status_rejects_unknown_values(store) -> None:
    with pytest.raises(ValueError):
        update_status("good-1", "MAYBE", store=store)


def test_request_errors_are_surfaced_in_the_run_log(store, profile, caplog) -> None:
    class Partial(StaticSource):
        def fetch_raw(self):
            self.errors = ["Buyer: 503 error"]
            return super().fetch_raw()

    src = Partial("Partial", "part", make_records("Partial", "part", 1))

    with caplog.at_level(logging.WARNING, logger="job_triage.pipeline"):
        jobs = run_pipeline([src], store=store, profile=profile, timeout_s=5)

    assert len(jobs) == 1
    assert "Partial (Buyer: 503 error)" in caplog.text
