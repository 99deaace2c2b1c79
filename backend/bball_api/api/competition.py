# Competition-wide endpoints: standings and rounds
from fastapi import APIRouter, Depends
from bball_api.api.deps import get_cache, get_euroleague_client, serve_cached
from bball_api.core.constants import ROUNDS_CACHE_TTL, STANDINGS_CACHE_TTL
from bball_api.services.cache import TTLCache, make_cache_key
from bball_api.services.euroleague_client import EuroLeagueClient
from bball_api.services.season import build_season_code, resolve_competition

router = APIRouter()


@router.get("/standings")
async def get_standings(
    season: str | None = None,
    code: str | None = None,
    seasonCode: str | None = None,
    cache: TTLCache = Depends(get_cache),
    client: EuroLeagueClient = Depends(get_euroleague_client),
):
    competition = resolve_competition(code)
    season_code = build_season_code(competition, season, seasonCode)

    return await serve_cached(
        cache,
        make_cache_key("standings", competition, season_code),
        STANDINGS_CACHE_TTL,
        lambda: client.get_standings(competition, season_code),
        {"season": season, "code": competition, "seasonCode": season_code},
        "Failed to fetch standings",
    )


# every round of the season, or one round with ?round=N
@router.get("/rounds")
async def get_rounds(
    season: str | None = None,
    code: str | None = None,
    seasonCode: str | None = None,
    round: str | None = None,
    cache: TTLCache = Depends(get_cache),
    client: EuroLeagueClient = Depends(get_euroleague_client),
):
    competition = resolve_competition(code)
    season_code = build_season_code(competition, season, seasonCode)

    return await serve_cached(
        cache,
        make_cache_key("rounds", competition, season_code, round or "all"),
        ROUNDS_CACHE_TTL,
        lambda: client.get_rounds(competition, season_code, round),
        {"code": competition, "seasonCode": season_code, "round": round or "all"},
        "Failed to fetch rounds",
    )
