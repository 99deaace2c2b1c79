# Sync games + boxscores to supabase
# e.g. /api/sync?code=J&seasonCode=JTA25
#      /api/sync?code=E&season=2025
#      /api/sync?code=J&seasonCode=JTA25&games=1,2,3
#      /api/sync?code=J&seasonCode=JTA25&skipBoxscores=true
import logging
from fastapi import APIRouter, Depends
from bball_api.api.deps import get_euroleague_client, get_supabase_store
from bball_api.core.constants import TRUTHY_FLAGS
from bball_api.core.errors import ApiError
from bball_api.db.supabase import SupabaseStore
from bball_api.services.euroleague_client import EuroLeagueClient
from bball_api.services.response import json_response
from bball_api.services.season import build_season_code, resolve_competition
from bball_api.services.sync_service import SyncPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/sync")
async def run_sync(
    code: str | None = None,
    season: str | None = None,
    seasonCode: str | None = None,
    games: str | None = None,
    skipBoxscores: str | None = None,
    client: EuroLeagueClient = Depends(get_euroleague_client),
    store: SupabaseStore = Depends(get_supabase_store),
):
    competition = resolve_competition(code)
    season_code = build_season_code(competition, season, seasonCode)
    skip_boxscores = (skipBoxscores or "").lower() in TRUTHY_FLAGS

    try:
        result = await SyncPipeline(client, store).run(
            competition,
            season_code,
            games_filter=games,
            skip_boxscores=skip_boxscores,
        )
    except Exception as e:
        logger.exception(f"Sync failed for {season_code}")
        message = e.message if isinstance(e, ApiError) else str(e)
        raise ApiError(f"Sync failed: {message}", status_code=500) from e

    return json_response(result.summary())
