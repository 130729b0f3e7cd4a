"""Search intents: pre-built job-board queries presented as jobs.

These are not real postings. They give one-click access to live results
on boards that cannot be scraped reliably.
"""
from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import quote

from job_triage.log import get_logger
from job_triage.models import RawJobRecord
from job_triage.sources.base import SourceAdapter

log = get_logger(__name__)

LINKEDIN_QUERIES: tuple[str, ...] = (
    "Directeur Commercial", "Purchasing Manager", "Category Manager", "Head of Sales",
)
LINKEDIN_URL = "https://www.linkedin.com/jobs/search?keywords={q}&location=Belgium"

META_QUERIES: tuple[str, ...] = ("Category Manager", "Purchasing Manager", "Acheteur", "Head of Sales")

# {q} is the URL-encoded query, {len} its encoded length (Glassdoor needs it).
PLATFORMS: tuple[tuple[str, str], ...] = (
    ("Indeed", "https://be.indeed.com/jobs?q={q}&l=Belgique"),
    ("Jobat", "https://www.jobat.be/fr/emplois?q={q}&l=Belgique"),
    ("StepStone", "https://www.stepstone.be/en/jobs--{q}--en.html"),
    ("LinkedIn", "https://www.linkedin.com/jobs/search?keywords={q}&location=Belgium"),
    ("Glassdoor", "https://fr.glassdoor.be/Emploi/belgique-{q}-emplois-SRCH_IL.0,8_IN25_KO9,{len}.htm"),
    ("Google Jobs", "https://www.google.com/search?q={q}+jobs+belgium&ibp=htl;jobs"),
)

META_SEED_SCORE = 4.5


class LinkedInIntentSource(SourceAdapter):
    name = "LinkedIn Search"
    id_prefix = "li-intent"

    def __init__(self, queries: tuple[str, ...] = LINKEDIN_QUERIES) -> None:
        super().__init__()
        self.queries = queries

    def fetch_raw(self) -> list[RawJobRecord]:
        now = datetime.now(timezone.utc)
        return [
            RawJobRecord(
                source=self.name,
                id_prefix=self.id_prefix,
                native_id=str(i),
                title=f'Rechercher "{q}" sur LinkedIn',
                company="LinkedIn (Search)",
                location="Belgium / International",
                description="Cliquez pour voir les résultats en temps réel sur LinkedIn.",
                url=LINKEDIN_URL.format(q=quote(q)),
                date=now,
                is_search_intent=True,
            )
            for i, q in enumerate(self.queries)
        ]


class MetaSearchSource(SourceAdapter):
    name = "MetaSearch"
    id_prefix = "meta"

    def __init__(
        self,
        queries: tuple[str, ...] = META_QUERIES,
        platforms: tuple[tuple[str, str], ...] = PLATFORMS,
    ) -> None:
        super().__init__()
        self.queries = queries
        self.platforms = platforms

    def fetch_raw(self) -> list[RawJobRecord]:
        now = datetime.now(timezone.utc)
        records: list[RawJobRecord] = []
        counter = 0
        for platform, template in self.platforms:
            for query in self.queries:
                encoded = quote(query)
                records.append(
                    RawJobRecord(
                        source=self.name,
                        id_prefix=self.id_prefix,
                        native_id=f"{platform}-{counter}",
                        title=query,
                        company=f"{platform} (Recherche)",
                        location="Belgique",
                        description=f"Voir les offres pour {query} sur {platform}.",
                        url=template.replace("{q}", encoded).replace("{len}", str(len(encoded))),
                        date=now,
                        summary=f"Accès direct aux offres {platform}.",
                        seed_score=META_SEED_SCORE,
                        is_search_intent=True,
                    )
                )
                counter += 1
        log.info("Generated %d meta-search intents", len(records))
        return records
