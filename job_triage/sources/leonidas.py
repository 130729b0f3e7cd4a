"""Leonidas careers page — HTML scrape of the public job list."""
from __future__ import annotations

import re

import requests
from bs4 import BeautifulSoup

from job_triage.config import request_timeout_s
from job_triage.log import get_logger
from job_triage.models import RawJobRecord
from job_triage.retry import retry
from job_triage.sources.base import SourceAdapter

log = get_logger(__name__)

BASE_URL = "https://jobs.leonidas.com"
JOBS_URL = f"{BASE_URL}/jobs"
DEFAULT_LOCATION = "National (See details)"

_APPLY_SUFFIX_RE = re.compile(r"postuler$", re.IGNORECASE)


def parse_jobs_page(html: str) -> list[RawJobRecord]:
    soup = BeautifulSoup(html, "html.parser")
    records: list[RawJobRecord] = []
    seen: set[str] = set()
    for a in soup.select('a[href^="/jobs/"]'):
        href = (a.get("href") or "").strip()
        slug = href.rstrip("/").rsplit("/", 1)[-1]
        if href.rstrip("/") == "/jobs" or not slug or slug in seen:
            continue
        title = _APPLY_SUFFIX_RE.sub("", a.get_text(" ", strip=True)).strip()
        if not title:
            continue
        seen.add(slug)
        records.append(
            RawJobRecord(
                source=LeonidasSource.name,
                id_prefix=LeonidasSource.id_prefix,
                native_id=slug,
                title=title,
                company="Leonidas",
                location=DEFAULT_LOCATION,
                url=f"{BASE_URL}{href}",
            )
        )
    return records


class LeonidasSource(SourceAdapter):
    name = "Leonidas"
    id_prefix = "leo"

    def __init__(self, session: requests.Session | None = None, *, timeout_s: float | None = None) -> None:
        super().__init__()
        self.session = session or requests.Session()
        self.timeout_s = timeout_s if timeout_s is not None else request_timeout_s()

    @retry(max_attempts=2, base_delay=1.5, retryable=(requests.RequestException, OSError))
    def _fetch_page(self) -> str:
        r = self.session.get(JOBS_URL, timeout=self.timeout_s)
        r.raise_for_status()
        return r.text

    def fetch_raw(self) -> list[RawJobRecord]:
        self.errors = []
        try:
            html = self._fetch_page()
        except (requests.RequestException, OSError) as exc:
            log.warning("Leonidas fetch error: %s", exc)
            self.record_error(str(exc))
            return []
        records = parse_jobs_page(html)
        log.info("Leonidas: found %d jobs", len(records))
        return records
