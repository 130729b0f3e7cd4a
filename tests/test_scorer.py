from __future__ import annotations

import pytest

from conftest import make_offer
from job_triage.config import Coordinate
from job_triage.geo import GeoResolver
from job_triage.models import KeywordFit, MatchResult
from job_triage.scorer import (
    keyword_fit_score,
    match_score,
    requirement_matches,
    score_with,
    skill_tokens,
)

HOME = Coordinate(50.0, 4.0)
# Testville sits ~15 km north of HOME.
GEO = GeoResolver(home=HOME, cities={"testville": Coordinate(50.1349, 4.0)})


def test_close_location_full_match_and_target_title_clamps_to_100(profile) -> None:
    job = make_offer(
        title="Category Manager",
        location="Testville",
        requirements=["Négociation", "Achats", "Leadership", "Retail", "Python"],
    )

    result = match_score(job, profile, GEO)

    assert result.score == 100
    assert any("15" in s for s in result.strengths)
    assert any("parfaitement" in s for s in result.strengths)
    assert "Le titre du poste est dans votre cible prioritaire." in result.strengths


def test_unknown_location_wrong_title_and_poor_match(profile) -> None:
    job = make_offer(
        title="Développeur Backend",
        location="Atlantis",
        requirements=["Python", "Kubernetes", "Docker", "Rust"],
    )

    result = match_score(job, profile, GEO)

    # 50 - 20 (distance) - 10 (requirements) - 10 (title)
    assert result.score == 10
    assert "Localisation non reconnue (distance inconnue)" in result.weaknesses
    assert "Compétences à valider : Python, Kubernetes, Docker" in result.weaknesses
    assert any("intitulé" in w for w in result.weaknesses)


def test_no_requirements_gives_small_bonus(profile) -> None:
    job = make_offer(title="Buyer", location="Testville", requirements=[])

    result = match_score(job, profile, GEO)

    assert result.score == 95


def test_medium_match_lists_missing_without_penalty(profile) -> None:
    job = make_offer(
        title="Buyer",
        location="Atlantis",
        requirements=["Négociation", "Python"],
    )

    result = match_score(job, profile, GEO)

    assert result.score == 50 - 20 + 0 + 20
    assert "Compétences à valider : Python" in result.weaknesses


def test_score_never_increases_with_distance(profile) -> None:
    geo = GeoResolver(home=profile.home)
    scores = [
        match_score(make_offer(location=city, requirements=[]), profile, geo).score
        for city in ("Mons", "Bruxelles", "Antwerpen", "Atlantis")
    ]

    assert scores == sorted(scores, reverse=True)
    assert scores[0] > scores[-1]


def test_scoring_is_idempotent(profile) -> None:
    job = make_offer(location="Bruxelles", requirements=["Négociation", "Python"])

    assert match_score(job, profile) == match_score(job, profile)


def test_scores_stay_in_range(profile) -> None:
    for location in ("Mons", "Atlantis", "Remote"):
        for title in ("Category Manager", "Stagiaire"):
            result = match_score(make_offer(location=location, title=title), profile)
            assert 0 <= result.score <= 100


def test_aliases_count_as_profile_skills(profile) -> None:
    tokens = skill_tokens(profile)

    assert "catman" in tokens
    assert requirement_matches("Procurement", tokens)
    assert requirement_matches("negociation", tokens)
    assert not requirement_matches("Python", tokens)
    assert not requirement_matches("", tokens)


def test_keyword_fit_accumulates_weights_and_target_company() -> None:
    job = make_offer(
        title="Head of Category Retail",
        description="Stratégie commerciale à Bruxelles",
        location="Bruxelles",
        company="Delhaize",
    )

    fit = keyword_fit_score(job)

    assert fit.score == 100
    assert "Head of" in fit.matched_keywords
    assert "Target Company" in fit.matched_keywords
    assert fit.missing_keywords == []


def test_keyword_fit_disqualifying_keyword_clamps_at_zero() -> None:
    job = make_offer(title="Stagiaire", description="", location="", company="Inconnue")

    fit = keyword_fit_score(job)

    assert fit.score == 0
    assert fit.missing_keywords == ["Directeur", "Category", "Retail", "Stratégie", "Bruxelles"]


def test_score_with_selects_strategy(profile) -> None:
    job = make_offer()

    assert isinstance(score_with("match", job, profile), MatchResult)
    assert isinstance(score_with("keyword_fit", job, profile), KeywordFit)
    with pytest.raises(ValueError):
        score_with("astrology", job, profile)
