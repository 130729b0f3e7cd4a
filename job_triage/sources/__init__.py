from .base import SourceAdapter
from .forem import ForemSource
from .leonidas import LeonidasSource
from .sample import SampleSource
from .search_intents import LinkedInIntentSource, MetaSearchSource

from job_triage.log import get_logger

log = get_logger(__name__)

__all__ = [
    "SourceAdapter", "ForemSource", "LeonidasSource", "LinkedInIntentSource",
    "MetaSearchSource", "SampleSource", "SOURCE_FACTORIES", "build_sources",
]

SOURCE_FACTORIES = {
    "forem": ForemSource,
    "leonidas": LeonidasSource,
    "linkedin": LinkedInIntentSource,
    "metasearch": MetaSearchSource,
    "sample": SampleSource,
}


def build_sources(names: list[str]) -> list[SourceAdapter]:
    """Instantiate adapters in the given order; order decides dedup winners."""
    sources: list[SourceAdapter] = []
    for name in names:
        factory = SOURCE_FACTORIES.get(name.lower())
        if factory is None:
            log.warning("Unknown source %r — skipped (known: %s)", name, ", ".join(SOURCE_FACTORIES))
            continue
        sources.append(factory())
        log.info("Registered source: %s", factory.name)
    return sources
