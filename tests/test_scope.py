from __future__ import annotations

from conftest import make_offer
from job_triage.aggregator import UNSPECIFIED_LOCATION, normalize_record
from job_triage.models import RawJobRecord, Scope
from job_triage.scope import classify_scope


def test_belgian_city_in_location_is_national() -> None:
    assert classify_scope(make_offer(location="Liège")) is Scope.NATIONAL


def test_gazetteer_also_checks_description_and_title() -> None:
    job = make_offer(location="", title="Buyer", description="Poste basé à Namur.")
    assert classify_scope(job) is Scope.NATIONAL

    job = make_offer(location="", title="Head of Sales Belgium", description="")
    assert classify_scope(job) is Scope.NATIONAL


def test_foreign_location_is_international() -> None:
    job = make_offer(location="Paris", title="Category Manager", description="Poste à Paris.")
    assert classify_scope(job) is Scope.INTERNATIONAL


def test_missing_location_is_nationwide() -> None:
    job = normalize_record(RawJobRecord(source="X", id_prefix="x", native_id="1", title="Buyer"))

    assert job.location == UNSPECIFIED_LOCATION
    assert classify_scope(job) is Scope.NATIONAL
