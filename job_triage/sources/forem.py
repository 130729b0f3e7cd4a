"""Le Forem — open data job offers for Wallonia/Brussels (no API key required).

Dataset: https://odwb.be/explore/dataset/offres-d-emploi-forem/
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any

import requests

from job_triage.config import get_bool, request_timeout_s
from job_triage.log import get_logger
from job_triage.models import RawJobRecord
from job_triage.retry import retry
from job_triage.sources.base import SourceAdapter
from job_triage.text import extract_requirements

log = get_logger(__name__)

API_URL = "https://odwb.be/api/explore/v2.1/catalog/datasets/offres-d-emploi-forem/records"
SEARCH_URL = "https://www.leforem.be/recherche-offres-emploi/resultats?ref={ref}"

# Title searches restricted to senior / management roles.
KEYWORDS: tuple[str, ...] = (
    "Directeur", "Manager", "Head of", "Category Manager", "Purchasing", "Acheteur",
    "Buyer", "Responsable", "Supply Chain", "Logistics", "Business Unit", "Commercial",
    "Account Manager", "Sales Manager", "Store Manager", "Gerant", "Superviseur",
)

# The API search has no reliable NOT; filter titles after fetching.
NEGATIVE_KEYWORDS: tuple[str, ...] = (
    "junior", "stagiaire", "student", "chauffeur", "nettoyeur", "ouvrier", "technicien",
)

PER_KEYWORD_LIMIT = 20
MAX_WORKERS = 6


def is_relevant_title(title: str) -> bool:
    low = (title or "").lower()
    return not any(neg in low for neg in NEGATIVE_KEYWORDS)


class ForemSource(SourceAdapter):
    name = "Le Forem"
    id_prefix = "forem"

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        keywords: tuple[str, ...] = KEYWORDS,
        timeout_s: float | None = None,
        verify_tls: bool | None = None,
    ) -> None:
        super().__init__()
        self.session = session or requests.Session()
        self.keywords = keywords
        self.timeout_s = timeout_s if timeout_s is not None else request_timeout_s()
        self.verify_tls = verify_tls if verify_tls is not None else get_bool("FOREM_VERIFY_TLS", True)

    @retry(max_attempts=2, base_delay=1.0, retryable=(requests.RequestException, OSError))
    def _fetch(self, keyword: str) -> list[dict[str, Any]]:
        params = {
            "limit": str(PER_KEYWORD_LIMIT),
            "where": f'search(titre, "{keyword}")',
            "order_by": "date_creation desc",
        }
        r = self.session.get(API_URL, params=params, timeout=self.timeout_s, verify=self.verify_tls)
        r.raise_for_status()
        payload = r.json()
        results = payload.get("results") if isinstance(payload, dict) else None
        if results is None:
            return []
        if not isinstance(results, list):
            raise ValueError(f"unexpected results type {type(results).__name__}")
        return results

    def _search(self, keyword: str) -> list[dict[str, Any]]:
        try:
            hits = self._fetch(keyword)
            log.debug("Forem keyword=%r returned %d records", keyword, len(hits))
            return hits
        except (requests.RequestException, OSError, ValueError) as exc:
            log.warning("Forem keyword=%r error: %s", keyword, exc)
            self.record_error(f"{keyword}: {exc}")
            return []

    def fetch_raw(self) -> list[RawJobRecord]:
        self.errors = []
        with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(self.keywords) or 1)) as pool:
            batches = list(pool.map(self._search, self.keywords))

        records: list[RawJobRecord] = []
        seen: set[str] = set()
        for hit in (h for batch in batches for h in batch):
            record = to_record(hit)
            if record is None or not is_relevant_title(record.title):
                continue
            key = record.native_id or ""
            if key and key in seen:
                continue
            seen.add(key)
            records.append(record)

        log.info("Forem: %d relevant records from %d keyword searches", len(records), len(self.keywords))
        return records


def to_record(hit: dict[str, Any]) -> RawJobRecord | None:
    if not isinstance(hit, dict):
        return None
    title = hit.get("intitule") or hit.get("titre") or "Poste sans titre"
    ref = hit.get("reference_offre") or hit.get("id_offre")
    desc = hit.get("description_de_l_offre") or hit.get("description") or ""
    url = hit.get("url_offre") or (SEARCH_URL.format(ref=ref) if ref else "")
    return RawJobRecord(
        source=ForemSource.name,
        id_prefix=ForemSource.id_prefix,
        native_id=str(ref) if ref else None,
        title=str(title),
        # Employer names are usually withheld by Forem.
        company="Le Forem Network",
        location=hit.get("commune_lieu_de_travail") or hit.get("localite") or "Belgique",
        description=desc,
        date=hit.get("date_creation"),
        url=url,
        requirements=extract_requirements(desc),
    )
