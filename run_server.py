#!/usr/bin/env python3
"""Serve the job triage API with the digest scheduler running."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

import uvicorn

from job_triage.api import create_app
from job_triage.config import get_env
from job_triage.log import get_logger

log = get_logger(__name__)


if __name__ == "__main__":
    host = get_env("JOB_TRIAGE_HOST", "127.0.0.1")
    port = int(get_env("JOB_TRIAGE_PORT", "3001"))
    log.info("Server running at http://%s:%d", host, port)
    uvicorn.run(create_app(start_scheduler=True), host=host, port=port, log_config=None)
