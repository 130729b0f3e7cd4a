"""Score jobs against the candidate profile.

Two independent strategies live here:

- ``match``: list-level heuristic. Starts at 50 and adjusts for distance
  from home, requirement overlap with the profile's skills and whether the
  title is one of the target roles. Produces human-readable strengths and
  weaknesses.
- ``keyword_fit``: detail-view breakdown. Starts at 0 and adds weighted
  buckets for seniority / function / sector / skill / location keywords
  found anywhere in the text, a bonus for target companies and a flat
  penalty for junior or operational roles.

Both are pure functions of their inputs and clamp to [0, 100].
"""
from __future__ import annotations

from typing import Callable

from job_triage.config import CandidateProfile
from job_triage.geo import UNKNOWN_DISTANCE_KM, GeoResolver
from job_triage.models import JobOffer, KeywordFit, MatchResult
from job_triage.text import canonical

# ── match strategy ──────────────────────────────────────────────────────

BASE_SCORE = 50
FAR_PENALTY = -20
CLOSE_BONUS = 20  # (0, 20] km
NEAR_BONUS = 10  # (20, 50] km
CLOSE_KM = 20.0
NEAR_KM = 50.0

HIGH_MATCH_RATIO = 0.7
HIGH_MATCH_BONUS = 20
LOW_MATCH_RATIO = 0.3
LOW_MATCH_PENALTY = -10
NO_REQUIREMENTS_BONUS = 5

ROLE_BONUS = 20
ROLE_PENALTY = -10

MAX_LISTED_MISSING = 3


def _role_implied_skills(roles: tuple[str, ...]) -> set[str]:
    """Skills a target role title implies even if not listed explicitly."""
    implied: set[str] = set()
    for role in roles:
        norm = canonical(role)
        if "categorymanager" in norm:
            implied.update({"catman", "categorymanagement"})
        if "buyer" in norm or "acheteur" in norm:
            implied.update({"achats", "buying", "purchasing"})
    return implied


def skill_tokens(profile: CandidateProfile) -> set[str]:
    """Canonical skills of the profile, expanded with their aliases."""
    aliases = {canonical(k): v for k, v in profile.skill_aliases.items()}
    tokens: set[str] = set()
    for skill in profile.skills:
        norm = canonical(skill)
        if not norm:
            continue
        tokens.add(norm)
        for alias in aliases.get(norm, ()):
            alias_norm = canonical(alias)
            if alias_norm:
                tokens.add(alias_norm)
    tokens |= _role_implied_skills(profile.roles)
    return tokens


def requirement_matches(requirement: str, tokens: set[str]) -> bool:
    req = canonical(requirement)
    if not req:
        return False
    if req in tokens:
        return True
    return any(req in tok or tok in req for tok in tokens)


def _distance_factor(
    distance: float, max_km: float, strengths: list[str], weaknesses: list[str]
) -> int:
    if distance > max_km:
        if distance >= UNKNOWN_DISTANCE_KM:
            weaknesses.append("Localisation non reconnue (distance inconnue)")
        else:
            weaknesses.append(f"Localisation éloignée ({round(distance)} km)")
        return FAR_PENALTY
    if 0 < distance <= CLOSE_KM:
        strengths.append(f"Proximité idéale ({round(distance)} km)")
        return CLOSE_BONUS
    if CLOSE_KM < distance <= NEAR_KM:
        strengths.append(f"Distance raisonnable ({round(distance)} km)")
        return NEAR_BONUS
    return 0


def _requirements_factor(
    requirements: list[str], tokens: set[str], strengths: list[str], weaknesses: list[str]
) -> int:
    if not requirements:
        return NO_REQUIREMENTS_BONUS

    missing = [r for r in requirements if not requirement_matches(r, tokens)]
    ratio = (len(requirements) - len(missing)) / len(requirements)
    if ratio > HIGH_MATCH_RATIO:
        strengths.append("Vos compétences correspondent parfaitement aux attentes.")
        return HIGH_MATCH_BONUS
    if missing:
        weaknesses.append(f"Compétences à valider : {', '.join(missing[:MAX_LISTED_MISSING])}")
        if ratio < LOW_MATCH_RATIO:
            return LOW_MATCH_PENALTY
    return 0


def _title_factor(
    title: str, roles: tuple[str, ...], strengths: list[str], weaknesses: list[str]
) -> int:
    title_norm = canonical(title)
    if any(canonical(role) and canonical(role) in title_norm for role in roles):
        strengths.append("Le titre du poste est dans votre cible prioritaire.")
        return ROLE_BONUS
    weaknesses.append("L'intitulé du poste semble s'éloigner de vos cibles habituelles.")
    return ROLE_PENALTY


def match_score(
    job: JobOffer, profile: CandidateProfile, geo: GeoResolver | None = None
) -> MatchResult:
    geo = geo or GeoResolver(home=profile.home)
    strengths: list[str] = []
    weaknesses: list[str] = []

    total = BASE_SCORE
    total += _distance_factor(
        geo.distance_from_home(job.location), profile.max_distance_km, strengths, weaknesses
    )
    total += _requirements_factor(job.requirements, skill_tokens(profile), strengths, weaknesses)
    total += _title_factor(job.title, profile.roles, strengths, weaknesses)

    return MatchResult(
        score=float(min(100, max(0, total))),
        strengths=strengths,
        weaknesses=weaknesses,
    )


# ── keyword_fit strategy ────────────────────────────────────────────────

# (category, weight, keywords); the first keyword is suggested when missing.
KEYWORD_RULES: list[tuple[str, int, tuple[str, ...]]] = [
    ("Seniority", 35, ("Directeur", "Director", "Head of", "VP", "Chief", "Partner", "Responsable")),
    ("Function", 40, ("Category", "Acheteur", "Buyer", "Purchasing", "Marketing", "Commercial",
                      "Sales", "Operating", "COO")),
    ("Sector", 20, ("Retail", "Distribution", "FMCG", "Luxe", "Food", "Non-Food", "Marketplace",
                    "Automobile")),
    ("Skills", 15, ("Stratégie", "Strategy", "Management", "Team", "P&L", "Négociation",
                    "Partenariats", "Leadership")),
    ("Location", 5, ("Bruxelles", "Halle", "Zellik", "Zaventem", "Gand", "Nivelles")),
]

TARGET_COMPANIES: tuple[str, ...] = ("amazon", "mckinsey", "google", "colruyt", "delhaize", "lvmh")
TARGET_COMPANY_BONUS = 10

DISQUALIFYING_KEYWORDS: tuple[str, ...] = (
    "Stagiaire", "Intern", "Student", "Ouvrier", "Operator", "Opérateur", "Technicien",
    "Junior", "Assistant(e)", "Vendeur",
)
DISQUALIFYING_PENALTY = -50


def keyword_fit_score(job: JobOffer) -> KeywordFit:
    full_text = f"{job.title or ''} {job.description or ''} {job.location or ''}".lower()
    matched: list[str] = []
    missing: list[str] = []
    score = 0

    for _category, weight, keywords in KEYWORD_RULES:
        hit = next((kw for kw in keywords if kw.lower() in full_text), None)
        if hit is not None:
            matched.append(hit)
            score += weight
        else:
            missing.append(keywords[0])

    if any(tc in (job.company or "").lower() for tc in TARGET_COMPANIES):
        score = min(score + TARGET_COMPANY_BONUS, 100)
        matched.append("Target Company")

    if any(kw.lower() in full_text for kw in DISQUALIFYING_KEYWORDS):
        score += DISQUALIFYING_PENALTY

    return KeywordFit(
        score=float(max(0, min(score, 100))),
        matched_keywords=list(dict.fromkeys(matched)),
        missing_keywords=list(dict.fromkeys(missing)),
    )


# ── strategy selection ──────────────────────────────────────────────────


def _keyword_fit_strategy(job: JobOffer, profile: CandidateProfile) -> KeywordFit:
    return keyword_fit_score(job)


# name -> (job, profile) -> result
STRATEGIES: dict[str, Callable[[JobOffer, CandidateProfile], MatchResult | KeywordFit]] = {
    "match": match_score,
    "keyword_fit": _keyword_fit_strategy,
}


def score(
    job: JobOffer, profile: CandidateProfile, geo: GeoResolver | None = None
) -> MatchResult:
    """Default list-level score used by the pipeline."""
    return match_score(job, profile, geo)


def score_with(strategy: str, job: JobOffer, profile: CandidateProfile) -> MatchResult | KeywordFit:
    fn = STRATEGIES.get(strategy)
    if fn is None:
        raise ValueError(f"Unknown scoring strategy {strategy!r}; expected one of {sorted(STRATEGIES)}")
    return fn(job, profile)
