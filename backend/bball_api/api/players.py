# Player profile, optionally with season stats
# e.g. /api/player?code=E&personCode=ABC
#      /api/player?code=J&personCode=ABC&seasonCode=JA25&stats=true
import logging
from fastapi import APIRouter, Depends
from bball_api.api.deps import get_cache, get_euroleague_client, require, serve_cached
from bball_api.core.constants import PLAYER_CACHE_TTL, TRUTHY_FLAGS
from bball_api.core.errors import UpstreamError
from bball_api.services.cache import TTLCache, make_cache_key
from bball_api.services.euroleague_client import EuroLeagueClient
from bball_api.services.season import build_season_code, resolve_competition

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/player")
async def get_player(
    personCode: str | None = None,
    code: str | None = None,
    season: str | None = None,
    seasonCode: str | None = None,
    stats: str | None = None,
    cache: TTLCache = Depends(get_cache),
    client: EuroLeagueClient = Depends(get_euroleague_client),
):
    require(personCode, "personCode")
    competition = resolve_competition(code)
    include_stats = (stats or "").lower() in TRUTHY_FLAGS
    # season stats need an explicit season; there is no default here
    season_code = build_season_code(competition, season, seasonCode) if (season or seasonCode) else None

    async def fetch_player():
        result = {"profile": await client.get_person(competition, personCode)}
        if include_stats and season_code:
            try:
                result["seasonStats"] = await client.get_person_stats(competition, season_code, personCode)
            except UpstreamError as e:
                # the profile is still worth returning
                logger.warning(f"Season stats unavailable for {personCode} {season_code}: {e}")
                result["seasonStats"] = None
                result["_warnings"] = ["Season stats not available for this player/season"]
        return result

    return await serve_cached(
        cache,
        make_cache_key("player", competition, personCode, season_code or "none", include_stats),
        PLAYER_CACHE_TTL,
        fetch_player,
        {"code": competition, "personCode": personCode, "seasonCode": season_code, "includeStats": include_stats},
        "Failed to fetch player data",
    )
