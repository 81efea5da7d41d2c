"""FastAPI server exposing the assessment, journal, burnout and action engine.

Every handler is a thin shell: validate the request shape, call the engine
with an explicit Redis client, serialise the result. Engine errors map to
status codes in one place (see ``_engine_error``).
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Optional

import redis
from fastapi import FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from founder_pulse.config.settings import (
    CRON_SECRET,
    DEFAULT_ARCHETYPE,
    SERVER_HOST,
    SERVER_PORT,
    STATS_WINDOW_DAYS,
)
from founder_pulse.engine import store
from founder_pulse.engine.action_selector import ensure_daily_actions, get_actions_for_date
from founder_pulse.engine.assessments import (
    assessment_stats,
    attach_insights,
    get_latest_assessment,
    submit_assessment,
)
from founder_pulse.engine.burnout import get_latest_burnout_score, risk_guidance
from founder_pulse.engine.journal import check_in_and_score, delete_entry, get_history
from founder_pulse.engine.streaks import complete_action, compute_completion_stats
from founder_pulse.engine.trends import compute_trends
from founder_pulse.engine.user_data import cleanup_old_data, delete_all_user_data, export_user_data
from founder_pulse.errors import (
    FounderPulseError,
    NotFoundError,
    ValidationError,
    sanitize_error_for_user,
)
from founder_pulse.models.action import ActionItem
from founder_pulse.services.insights import fetch_insights

logger = logging.getLogger(__name__)

app = FastAPI(title="Founder Pulse", description="Founder wellbeing assessment and daily check-ins")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

HISTORY_DAY_OPTIONS = (7, 14, 30)
MIN_TREND_ENTRIES = 3

DISCLAIMER = (
    "This is not a medical diagnosis. If you are struggling, please seek professional help."
)


def _get_redis() -> redis.Redis:
    return store.connect()


def _require_user_id(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise ValidationError("User ID is required")
    return user_id


@app.exception_handler(FounderPulseError)
async def _engine_error(request: Request, exc: FounderPulseError):
    if isinstance(exc, ValidationError):
        status = 400
    elif isinstance(exc, NotFoundError):
        status = 404
    else:
        status = 500
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": sanitize_error_for_user(exc)})


def _daily_summary(actions: list[ActionItem], user_id: str, r: redis.Redis) -> dict:
    stats = compute_completion_stats(user_id, STATS_WINDOW_DAYS, r=r)
    return {
        "actions": [asdict(a) for a in actions],
        "completed_today": sum(1 for a in actions if a.completed),
        "total_today": len(actions),
        "completion_stats": stats.to_dict(),
    }


# ── Health ───────────────────────────────────────────────────────────────

@app.get("/api/health")
async def health():
    r = _get_redis()
    try:
        r.ping()
        redis_ok = True
    except redis.RedisError:
        redis_ok = False
    return {"status": "ok", "redis": redis_ok}


# ── Assessment ───────────────────────────────────────────────────────────

class SubmitAssessmentRequest(BaseModel):
    user_id: str = ""
    answers: Any = None


@app.post("/api/assessment/submit")
async def submit(req: SubmitAssessmentRequest):
    """Score a completed questionnaire and store it.

    Insight text is requested afterwards and attached when the optional
    collaborator returns some; otherwise ``insights`` is null.
    """
    r = _get_redis()
    outcome = submit_assessment(_require_user_id(req.user_id), req.answers, r)

    insights = await fetch_insights(outcome.scores, outcome.archetype.name)
    if insights:
        attach_insights(outcome.assessment_id, insights, r)

    result = outcome.to_dict()
    result["insights"] = insights
    return result


@app.get("/api/assessment/stats")
async def get_assessment_stats(user_id: str = Query("")):
    return assessment_stats(_require_user_id(user_id), _get_redis())


# ── Journal ──────────────────────────────────────────────────────────────

class CheckInRequest(BaseModel):
    user_id: str = ""
    mood: Any = None
    energy: Any = None
    stress: Any = None
    notes: Any = None


@app.post("/api/journal/entry")
async def create_entry(req: CheckInRequest):
    """Record today's check-in and recompute the burnout score."""
    r = _get_redis()
    entry, result = check_in_and_score(
        _require_user_id(req.user_id), req.mood, req.energy, req.stress, req.notes, r=r,
    )
    return {"success": True, "entry": entry.to_dict(), "burnout_score": result.to_dict()}


@app.get("/api/journal/history")
async def journal_history(user_id: str = Query(""), days: int = Query(7)):
    user_id = _require_user_id(user_id)
    if days not in HISTORY_DAY_OPTIONS:
        raise ValidationError("Days must be 7, 14, or 30")

    entries = get_history(user_id, days, r=_get_redis())
    enough = len(entries) >= MIN_TREND_ENTRIES
    response = {
        "entries": [e.to_dict() for e in entries],
        "total": len(entries),
        "trends": compute_trends(entries).to_dict() if enough else None,
    }
    if entries and not enough:
        response["message"] = (
            f"Keep logging to see your trends! At least {MIN_TREND_ENTRIES} entries needed."
        )
    return response


@app.delete("/api/journal/{entry_id}")
async def remove_entry(entry_id: str, user_id: str = Query("")):
    delete_entry(entry_id, _require_user_id(user_id), _get_redis())
    return {"success": True, "entry_id": entry_id}


# ── Burnout ──────────────────────────────────────────────────────────────

@app.get("/api/burnout/score")
async def burnout_score(user_id: str = Query("")):
    record = get_latest_burnout_score(_require_user_id(user_id), _get_redis())
    if record is None:
        raise NotFoundError(
            "No burnout score found. Complete a journal entry first to calculate your burnout risk score."
        )

    response = record.to_dict()
    response.update(risk_guidance(record.result))
    response["disclaimer"] = DISCLAIMER
    return response


# ── Daily Actions ────────────────────────────────────────────────────────

class GenerateActionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = ""
    force_regenerate: bool = Field(False, alias="forceRegenerate")


@app.post("/api/actions/generate")
async def generate_actions(req: GenerateActionsRequest):
    """Return today's actions, generating them if none exist yet."""
    r = _get_redis()
    user_id = _require_user_id(req.user_id)

    assessment = get_latest_assessment(user_id, r)
    archetype = assessment.archetype if assessment else DEFAULT_ARCHETYPE
    record = get_latest_burnout_score(user_id, r)

    actions, generated = ensure_daily_actions(
        user_id,
        store.utc_today(),
        archetype,
        burnout=record.result if record else None,
        assessment=assessment,
        force=req.force_regenerate,
        r=r,
    )

    response = {"success": True, **_daily_summary(actions, user_id, r)}
    if not generated:
        response["message"] = (
            "Actions already exist for today. Use forceRegenerate: true to regenerate."
        )
    return response


@app.get("/api/actions/daily")
async def daily_actions(user_id: str = Query("")):
    r = _get_redis()
    user_id = _require_user_id(user_id)
    actions = get_actions_for_date(user_id, store.utc_today(), r)
    return _daily_summary(actions, user_id, r)


class CompleteActionRequest(BaseModel):
    user_id: str = ""


@app.post("/api/actions/{action_id}/complete")
async def complete(action_id: str, req: CompleteActionRequest):
    action = complete_action(action_id, _require_user_id(req.user_id), _get_redis())
    return {"success": True, "action": asdict(action)}


# ── User Data ────────────────────────────────────────────────────────────

@app.get("/api/user/data")
async def export_data(user_id: str = Query("")):
    """Download everything stored for a user as a JSON attachment."""
    data = export_user_data(_require_user_id(user_id), _get_redis())
    filename = f"founder-pulse-export-{store.utc_today().isoformat()}.json"
    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.delete("/api/user/data")
async def erase_data(user_id: str = Query(""), confirm: str = Query("")):
    user_id = _require_user_id(user_id)
    if confirm != "true":
        raise ValidationError("Confirmation required. Add ?confirm=true to proceed.")

    counts = delete_all_user_data(user_id, _get_redis())
    return {"success": True, "message": "All your data has been deleted", "details": counts}


# ── Scheduled Jobs ───────────────────────────────────────────────────────

@app.api_route("/api/cron/cleanup", methods=["GET", "POST"])
async def cron_cleanup(x_cron_secret: Optional[str] = Header(None)):
    """Retention sweep, called daily by an external scheduler."""
    if not CRON_SECRET or x_cron_secret != CRON_SECRET:
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    counts = cleanup_old_data(r=_get_redis())
    return {
        "success": True,
        "message": "Data cleanup completed",
        **counts,
        "executed_at": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
