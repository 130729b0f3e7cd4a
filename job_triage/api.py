"""HTTP interface: job list, status updates and notification settings."""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from job_triage import config
from job_triage.config import DigestConfig, NotificationSettings
from job_triage.digest import LogNotifier, Notifier, run_digest
from job_triage.log import get_logger
from job_triage.models import JobOffer, JobStatus
from job_triage.pipeline import default_fallback, run_pipeline, update_status
from job_triage.scheduler import DigestScheduler
from job_triage.status_store import StatusStore

log = get_logger(__name__)


class StatusUpdate(BaseModel):
    status: JobStatus


class NotificationSettingsPatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    new_offers: Optional[bool] = Field(default=None, alias="newOffers")
    application_updates: Optional[bool] = Field(default=None, alias="applicationUpdates")
    daily_digest: Optional[bool] = Field(default=None, alias="dailyDigest")
    email_alerts: Optional[bool] = Field(default=None, alias="emailAlerts")


def _settings_payload(settings: NotificationSettings) -> dict[str, bool]:
    return {
        "newOffers": settings.new_offers,
        "applicationUpdates": settings.application_updates,
        "dailyDigest": settings.daily_digest,
        "emailAlerts": settings.email_alerts,
    }


@dataclass
class AppState:
    store: StatusStore
    fetch_jobs: Callable[[], Sequence[JobOffer]]
    notifier: Notifier
    settings: NotificationSettings = field(default_factory=NotificationSettings)
    digest_config: DigestConfig = field(default_factory=DigestConfig)

    def send_digest(self, force: bool = False) -> int:
        return run_digest(
            self.fetch_jobs, self.notifier, self.settings, self.digest_config, force=force
        )


def create_app(
    *,
    store: StatusStore | None = None,
    fetch_jobs: Callable[[], Sequence[JobOffer]] | None = None,
    notifier: Notifier | None = None,
    settings: NotificationSettings | None = None,
    digest_config: DigestConfig | None = None,
    start_scheduler: bool = False,
) -> FastAPI:
    store = store or StatusStore()
    if fetch_jobs is None:
        def _live_jobs() -> list[JobOffer]:
            return run_pipeline(store=store, fallback=default_fallback())

        fetch_jobs = _live_jobs

    state = AppState(
        store=store,
        fetch_jobs=fetch_jobs,
        notifier=notifier or LogNotifier(),
        settings=settings or NotificationSettings(),
        digest_config=digest_config or config.load_digest_config(),
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        store.ensure()
        scheduler = DigestScheduler(state.send_digest, state.digest_config) if start_scheduler else None
        if scheduler is not None:
            scheduler.start()
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.stop()

    app = FastAPI(title="Job Triage API", lifespan=lifespan)
    app.state.triage = state
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_list("JOB_TRIAGE_CORS_ORIGINS", ["http://localhost:5173"]),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/jobs")
    def list_jobs() -> list[dict]:
        try:
            jobs = state.fetch_jobs()
        except Exception as exc:
            log.exception("Job fetch failed")
            raise HTTPException(status_code=500, detail="Erreur lors de la recherche") from exc
        return [job.to_dict() for job in jobs]

    @app.api_route("/api/jobs/{job_id}/status", methods=["PATCH", "POST"])
    def set_status(job_id: str, payload: StatusUpdate) -> dict:
        if not update_status(job_id, payload.status, store=state.store):
            raise HTTPException(status_code=500, detail={"success": False, "error": "status not saved"})
        return {"success": True, "id": job_id, "status": payload.status.value}

    @app.get("/api/settings/notifications")
    def get_notifications() -> dict[str, bool]:
        return _settings_payload(state.settings)

    @app.post("/api/settings/notifications")
    def set_notifications(payload: NotificationSettingsPatch) -> dict:
        state.settings.update(payload.model_dump(exclude_none=True))
        log.info("Notification settings updated")
        return {"success": True, "settings": _settings_payload(state.settings)}

    @app.post("/api/settings/test-email")
    def test_email() -> dict:
        log.info("Triggering test digest...")
        try:
            count = state.send_digest(force=True)
        except Exception as exc:
            log.error("Test digest failed: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {"success": True, "jobs": count}

    return app
