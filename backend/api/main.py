"""
FastAPI backend for the Games Zone.
Provides REST endpoints for the game catalog, recorded scores and the active game session of each user.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from .database import SessionLocal, get_db, init_db
from .models import create_score, delete_scores, list_scores

from backend import config
from backend.engine.actions import Action
from backend.engine.clock import AsyncioScheduler, Scheduler
from backend.engine.queries import get_available_actions, get_game_summary
from backend.engine.scoring import round_half_up
from backend.engine.zone import (
    ENGINE_TYPES,
    GamesZone,
    ScoreSink,
    SessionManager,
    UnknownGameError,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Games Zone API",
    description="Backend API for the dashboard Games Zone - five mini games and their scores",
    version="1.0.0",
)

# CORS configuration for frontend
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:5174,http://localhost:3000"
    ).split(",")
    if o.strip()
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            logger.error("[500] %s %s", method, path)
        return response
    except Exception:
        logger.exception("[500] %s %s (exception)", method, path)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    """Return 500 with CORS headers so the frontend can read the error."""
    origin = request.headers.get("origin")
    allow_origin = origin if origin in CORS_ORIGINS else CORS_ORIGINS[0]
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
        headers={
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Credentials": "true",
        },
    )


# ===== Pydantic Models =====

class ScoreRequest(BaseModel):
    user_id: int
    game_name: str
    score: int
    stars: int = Field(ge=1, le=5)


class ActionRequest(BaseModel):
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)


# ===== Sessions =====

# One worker keeps a user's writes in finish order and off the event-loop thread
score_writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="score-writer")


def make_scheduler() -> Scheduler:
    """Timers run on the server's event loop, the same thread that handles engine requests."""
    return AsyncioScheduler()


def write_score(user_id: int, game_id: str, score: int, stars: int) -> None:
    db = SessionLocal()
    try:
        create_score(db, user_id, game_id, score, stars)
    finally:
        db.close()


def _log_failed_write(future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Saving score failed: %s", exc, exc_info=exc)


def database_score_sink(user_id: int) -> ScoreSink:
    """Score sink that hands each finished session to the writer thread and returns at once."""
    def sink(game_id: str, score: int, stars: int) -> None:
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(score_writer, write_score, user_id, game_id, score, stars)
        future.add_done_callback(_log_failed_write)
    return sink


def flush_score_writes() -> None:
    """Block until every queued score write has been committed."""
    score_writer.submit(lambda: None).result()


def make_zone(user_id: int) -> GamesZone:
    return GamesZone(database_score_sink(user_id), make_scheduler())


sessions = SessionManager(make_zone)


# ===== Helper Functions =====

def average_stars(scores: list, game_name: str) -> int:
    """Rounded mean of the stars recorded for one game; 0 if it was never finished."""
    stars = [s.stars or 0 for s in scores if s.game_name == game_name]
    if not stars:
        return 0
    return round_half_up(sum(stars) / len(stars))


def session_for_response(zone: GamesZone | None) -> dict[str, Any]:
    """Active engine state plus available input and events since the last response."""
    engine = zone.active if zone is not None else None
    if engine is None:
        return {"active": False, "game_id": None}
    return {
        "active": True,
        "game_id": engine.game_id,
        "game": engine.to_dict(),
        "summary": get_game_summary(engine),
        "available_actions": get_available_actions(engine),
        "events": [e.to_dict() for e in engine.drain_events()],
    }


def require_active(user_id: int) -> GamesZone:
    zone = sessions.find_zone(user_id)
    if zone is None or zone.active is None:
        raise HTTPException(status_code=409, detail="No game is open")
    return zone


@app.on_event("startup")
def on_startup():
    init_db()


@app.on_event("shutdown")
def on_shutdown():
    sessions.end_all()
    flush_score_writes()


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": "Games Zone API", "version": "1.0.0"}


@app.get("/games")
def get_catalog():
    """Games shown in the Games Zone grid."""
    return {"games": config.GAME_CATALOG}


# ----- Scores -----

@app.get("/game-scores/{user_id}")
def get_scores(user_id: int, db: Session = Depends(get_db)):
    return [row.to_dict() for row in list_scores(db, user_id)]


@app.post("/game-scores")
def post_score(request: ScoreRequest, db: Session = Depends(get_db)):
    """Record a score directly (the session endpoints record finished games themselves)."""
    if request.game_name not in ENGINE_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown game {request.game_name}")
    row = create_score(db, request.user_id, request.game_name, request.score, request.stars)
    return row.to_dict()


@app.delete("/game-scores/{user_id}")
def remove_scores(user_id: int, db: Session = Depends(get_db)):
    deleted = delete_scores(db, user_id)
    logger.info("Deleted %s scores for user %s", deleted, user_id)
    return {"deleted": deleted}


@app.get("/game-scores/{user_id}/stars")
def get_star_ratings(user_id: int, db: Session = Depends(get_db)):
    """Average star rating per game, as shown on the game tiles."""
    scores = list_scores(db, user_id)
    return {game["id"]: average_stars(scores, game["id"]) for game in config.GAME_CATALOG}


# ----- Active session -----
# Engine endpoints are async so they run on the event loop thread, serialized with timer callbacks.

@app.post("/users/{user_id}/games/{game_id}/open")
async def open_game(user_id: int, game_id: str):
    """Open a game for the user, discarding whatever game was open before."""
    zone = sessions.get_zone(user_id)
    try:
        zone.open(game_id)
    except UnknownGameError:
        sessions.release(user_id)
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return session_for_response(zone)


@app.get("/users/{user_id}/session")
async def get_session(user_id: int):
    return session_for_response(sessions.find_zone(user_id))


@app.post("/users/{user_id}/session/actions")
async def post_action(user_id: int, request: ActionRequest):
    """Send player input to the open game. Illegal moves are ignored (applied is false)."""
    zone = require_active(user_id)
    try:
        applied, events = zone.dispatch(Action(type=request.type, payload=request.payload))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    out = session_for_response(zone)
    out["applied"] = applied
    out["events"] = [e.to_dict() for e in events] + out["events"]
    return out


@app.post("/users/{user_id}/session/finish")
async def finish_session(user_id: int):
    """Finish the open game and record its score."""
    zone = require_active(user_id)
    result = zone.finish()
    if result is None:
        raise HTTPException(status_code=409, detail="Start the game before finishing it, or close it")
    sessions.release(user_id)
    return {"result": result.to_dict(), "session": session_for_response(zone)}


@app.post("/users/{user_id}/session/close")
async def close_session(user_id: int):
    """Close the open game without recording a score."""
    zone = require_active(user_id)
    zone.close()
    sessions.release(user_id)
    return session_for_response(zone)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
