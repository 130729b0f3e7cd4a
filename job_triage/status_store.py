"""Persist job triage decisions (job id -> status) in a CSV table.

The table only grows or changes: ids that no longer come back from any
source keep their row. Writes go through a temp file and ``os.replace`` under
a process-wide lock plus an advisory ``fcntl`` lock, so concurrent status
updates cannot lose each other's rows.
"""
from __future__ import annotations

import csv
import fcntl
import os
import tempfile
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from job_triage.config import status_file
from job_triage.log import get_logger
from job_triage.models import JobStatus, parse_status

log = get_logger(__name__)

HEADERS: list[str] = ["job_id", "status", "updated_at"]


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class StatusStore:
    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else status_file()
        self._lock_path = self.path.with_name(self.path.name + ".lock")
        self._mutex = threading.Lock()

    @contextmanager
    def _locked(self, exclusive: bool) -> Iterator[None]:
        with self._mutex:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._lock_path, "a", encoding="utf-8") as lf:
                _lock(lf, exclusive=exclusive)
                try:
                    yield
                finally:
                    _unlock(lf)

    def ensure(self) -> None:
        """Create an empty table on first use."""
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write_rows({})
        log.info("Created status store → %s", self.path)

    def _read_rows(self) -> dict[str, tuple[str, str]]:
        rows: dict[str, tuple[str, str]] = {}
        with open(self.path, "r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                return rows
            if "job_id" not in reader.fieldnames or "status" not in reader.fieldnames:
                raise ValueError(f"unexpected header {reader.fieldnames}")
            for r in reader:
                job_id = (r.get("job_id") or "").strip()
                status = (r.get("status") or "").strip().upper()
                if not job_id:
                    continue
                if status not in JobStatus.__members__:
                    log.warning("Ignoring unknown status %r for %s in %s", status, job_id, self.path.name)
                    continue
                rows[job_id] = (status, r.get("updated_at") or "")
        return rows

    def _write_rows(self, rows: dict[str, tuple[str, str]]) -> None:
        fd, tmp = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
                w = csv.writer(f)
                w.writerow(HEADERS)
                for job_id, (status, updated_at) in rows.items():
                    w.writerow([job_id, status, updated_at])
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise

    def load(self) -> dict[str, str]:
        """Current id -> status map; any read problem degrades to ``{}``."""
        try:
            with self._locked(exclusive=False):
                self.ensure()
                rows = self._read_rows()
        except (csv.Error, UnicodeDecodeError, ValueError) as exc:
            log.warning("Corrupt status store %s (%s) — treating as empty", self.path, exc)
            return {}
        except OSError as exc:
            log.error("Could not read status store %s: %s", self.path, exc)
            return {}
        return {job_id: status for job_id, (status, _) in rows.items()}

    def save(self, job_id: str, status: JobStatus | str) -> bool:
        """Last write wins per id. Returns False if the table cannot be written."""
        value = parse_status(status).value
        if not job_id:
            raise ValueError("job_id must not be empty")
        try:
            with self._locked(exclusive=True):
                self.ensure()
                try:
                    rows = self._read_rows()
                except (csv.Error, UnicodeDecodeError, ValueError) as exc:
                    log.warning("Rewriting corrupt status store %s (%s)", self.path, exc)
                    rows = {}
                rows[job_id] = (value, datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"))
                self._write_rows(rows)
        except OSError as exc:
            log.error("Failed to save status %s=%s: %s", job_id, value, exc)
            return False
        log.debug("Saved %s → %s", job_id, value)
        return True
