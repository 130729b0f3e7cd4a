"""NATIONAL / INTERNATIONAL classification of a job's location."""
from __future__ import annotations

from job_triage.aggregator import UNSPECIFIED_LOCATION
from job_triage.models import JobOffer, Scope

NATIONAL_KEYWORDS: tuple[str, ...] = (
    "belgium", "belgique", "belgië",
    "bruxelles", "brussels", "brussel",
    "antwerpen", "anvers",
    "gent", "gand",
    "charleroi",
    "liège", "luik",
    "namur", "namen",
    "mons", "bergen",
    "leuven", "louvain",
    "nivelles", "nijvel",
    "wavre", "waver",
    "mechelen", "malines",
    "aalst", "alost",
    "la louvière",
    "kortrijk", "courtrai",
    "hasselt",
    "sint-niklaas", "saint-nicolas",
    "oostende", "ostende",
    "genk",
    "roeselare", "roulers",
    "tournai", "doornik",
)


def classify_scope(job: JobOffer) -> Scope:
    """NATIONAL if any gazetteer entry appears in location, description or title.

    A job without a location is read as nationwide.
    """
    if job.location == UNSPECIFIED_LOCATION:
        return Scope.NATIONAL
    haystacks = (
        (job.location or "").lower(),
        (job.description or "").lower(),
        (job.title or "").lower(),
    )
    for keyword in NATIONAL_KEYWORDS:
        if any(keyword in text for text in haystacks):
            return Scope.NATIONAL
    return Scope.INTERNATIONAL
