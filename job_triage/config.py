"""Load the candidate profile and env configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from job_triage.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
PROFILE_PATH: Path = Path(os.environ.get("JOB_TRIAGE_PROFILE", str(CONFIG_DIR / "profile.yaml")))
DATA_DIR: Path = Path(os.environ.get("JOB_TRIAGE_DATA_DIR", str(ROOT_DIR / "data")))


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_bool(key: str, default: bool) -> bool:
    raw = get_env(key)
    if not raw:
        return default
    return raw.lower() in ("1", "true", "yes", "on")


def get_float(key: str, default: float) -> float:
    raw = get_env(key)
    try:
        return float(raw) if raw else default
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def get_list(key: str, default: list[str]) -> list[str]:
    raw = get_env(key)
    if not raw:
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def status_file() -> Path:
    return Path(get_env("JOB_TRIAGE_STATUS_FILE") or str(DATA_DIR / "job_status.csv"))


def source_timeout_s() -> float:
    return get_float("JOB_TRIAGE_SOURCE_TIMEOUT_S", 10.0)


def request_timeout_s() -> float:
    return get_float("JOB_TRIAGE_REQUEST_TIMEOUT_S", 8.0)


def offline_fallback_enabled() -> bool:
    return get_bool("JOB_TRIAGE_OFFLINE_FALLBACK", True)


def enabled_source_names() -> list[str]:
    return [n.lower() for n in get_list("JOB_TRIAGE_SOURCES", ["forem", "leonidas", "linkedin", "metasearch"])]


# ── Candidate profile ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


# Obourg (Mons), the candidate's home base.
DEFAULT_HOME = Coordinate(lat=50.4981, lng=4.0628)

DEFAULT_SKILLS: tuple[str, ...] = (
    "Négociation", "Achats", "Leadership", "Français", "Anglais", "Néerlandais",
    "Category Management", "Retail", "FMCG", "Stratégie",
)

DEFAULT_SKILL_ALIASES: dict[str, tuple[str, ...]] = {
    "Category Management": ("catman", "cm", "category"),
    "Négociation": ("sales", "vente", "commercial", "selling", "negotiation"),
    "Achats": ("buying", "buyer", "procurement", "purchasing"),
    "Leadership": ("management", "people management", "team lead"),
    "FMCG": ("cpg", "consumer goods", "grande conso"),
    "Retail": ("distribution", "magasin"),
}

DEFAULT_ROLES: tuple[str, ...] = (
    "Category Manager", "Buyer", "Acheteur", "Head of", "Directeur", "Manager",
)


@dataclass(frozen=True)
class CandidateProfile:
    """Static candidate description; immutable for the life of the process."""

    name: str = ""
    home: Coordinate = DEFAULT_HOME
    skills: tuple[str, ...] = DEFAULT_SKILLS
    skill_aliases: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_SKILL_ALIASES))
    )
    roles: tuple[str, ...] = DEFAULT_ROLES
    max_distance_km: float = 60.0


def profile_from_dict(data: dict[str, Any]) -> CandidateProfile:
    home = data.get("home") or {}
    aliases = data.get("skill_aliases") or DEFAULT_SKILL_ALIASES
    return CandidateProfile(
        name=str(data.get("name", "")),
        home=Coordinate(
            lat=float(home.get("lat", DEFAULT_HOME.lat)),
            lng=float(home.get("lng", DEFAULT_HOME.lng)),
        ),
        skills=tuple(data.get("skills") or DEFAULT_SKILLS),
        skill_aliases=MappingProxyType(
            {str(k): tuple(v or ()) for k, v in aliases.items()}
        ),
        roles=tuple(data.get("roles") or DEFAULT_ROLES),
        max_distance_km=float(data.get("max_distance_km", 60.0)),
    )


def load_profile(path: Path | None = None) -> CandidateProfile:
    path = path or PROFILE_PATH
    if not path.exists():
        log.info("No profile at %s — using built-in default profile", path)
        return CandidateProfile()
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile {path} must be a mapping, got {type(data).__name__}")
    return profile_from_dict(data)


# ── Digest / notification settings ───────────────────────────────────────


@dataclass
class NotificationSettings:
    new_offers: bool = True
    application_updates: bool = True
    daily_digest: bool = False
    email_alerts: bool = True

    def update(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            if hasattr(self, key):
                setattr(self, key, bool(value))


@dataclass(frozen=True)
class DigestConfig:
    run_times: tuple[str, ...] = ("05:30", "17:30")
    window_hours: float = 14.0
    min_score: float = 80.0
    check_interval_s: float = 60.0


def load_digest_config() -> DigestConfig:
    return DigestConfig(
        run_times=tuple(get_list("DIGEST_RUN_TIMES", ["05:30", "17:30"])),
        window_hours=get_float("DIGEST_WINDOW_HOURS", 14.0),
        min_score=get_float("DIGEST_MIN_SCORE", 80.0),
        check_interval_s=get_float("DIGEST_CHECK_INTERVAL_S", 60.0),
    )
