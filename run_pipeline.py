#!/usr/bin/env python3
"""Run one aggregation pass and print what came back (debug tooling)."""
from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from job_triage.log import get_logger

log = get_logger(__name__)


if __name__ == "__main__":
    from job_triage.pipeline import default_fallback, run_pipeline

    use_fallback = "--no-fallback" not in sys.argv
    jobs = run_pipeline(fallback=default_fallback() if use_fallback else None)

    log.info("Total job count: %d", len(jobs))
    if not jobs:
        log.warning("No jobs returned.")
        sys.exit(1)
    print(json.dumps(jobs[0].to_dict(), ensure_ascii=False, indent=2))
