# API status, endpoint catalogue and cache contents
from fastapi import APIRouter, Depends
from bball_api.api.deps import get_cache
from bball_api.core.config import settings
from bball_api.core.constants import API_NAME, API_VERSION
from bball_api.services.cache import TTLCache
from bball_api.services.response import json_response, utc_now_iso

router = APIRouter()

ENDPOINTS = [
    {"path": "/api/health", "description": "This endpoint: API status and info"},
    {"path": "/api/games", "description": "All games for a season", "params": "season, code, seasonCode"},
    {"path": "/api/game", "description": "Single game data", "params": "season, code, seasonCode, gameNumber*"},
    {"path": "/api/boxscore", "description": "Game box score", "params": "season, code, seasonCode, gameNumber*"},
    {"path": "/api/pbp", "description": "Play-by-play", "params": "season, code, seasonCode, gameNumber*"},
    {"path": "/api/standings", "description": "Competition standings", "params": "season, code, seasonCode"},
    {"path": "/api/rounds", "description": "Round/gameday data", "params": "season, code, seasonCode, round"},
    {"path": "/api/player", "description": "Player profile & stats", "params": "code, personCode*, season, seasonCode, stats"},
    {"path": "/api/sync", "description": "Sync games + boxscores to Supabase", "params": "code, season, seasonCode, games, skipBoxscores"},
]

SEASON_CODE_EXAMPLES = {
    "EuroLeague": "code=E -> season auto-builds E2025",
    "EuroCup": "code=U -> season auto-builds U2025",
    "NextGen Abu Dhabi": "code=J&seasonCode=JA25",
    "NextGen Qualifier": "code=J&seasonCode=JU25",
    "NextGen Bologna": "code=J&seasonCode=JBO25",
    "NextGen Belgrade": "code=J&seasonCode=JB25",
}


@router.get("/health")
async def health(cache: TTLCache = Depends(get_cache)):
    return json_response(
        {
            "status": "ok",
            "name": API_NAME,
            "version": API_VERSION,
            "description": "Basketball data API",
            "apiBase": settings.EUROLEAGUE_BASE_URL,
            "timestamp": utc_now_iso(),
            "endpoints": ENDPOINTS,
            "seasonCodeExamples": SEASON_CODE_EXAMPLES,
            "cache": cache.stats(),
            "notes": "Use seasonCode param to override auto-built season (required for NextGen). "
            "Params marked with * are required.",
        }
    )
