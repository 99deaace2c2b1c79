# Game endpoints: season schedule, single game, boxscore, play-by-play
from fastapi import APIRouter, Depends
from bball_api.api.deps import get_cache, get_euroleague_client, require, serve_cached
from bball_api.core.constants import (
    BOXSCORE_CACHE_TTL,
    GAME_CACHE_TTL,
    GAMES_CACHE_TTL,
    PBP_CACHE_TTL,
)
from bball_api.services.cache import TTLCache, make_cache_key
from bball_api.services.euroleague_client import EuroLeagueClient
from bball_api.services.season import build_season_code, resolve_competition

router = APIRouter()


# all games for a season
# e.g. /api/games?season=2025&code=E  or  /api/games?code=J&seasonCode=JA25
@router.get("/games")
async def get_games(
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
        make_cache_key("games", competition, season_code),
        GAMES_CACHE_TTL,
        lambda: client.get_games(competition, season_code),
        {"code": competition, "seasonCode": season_code},
        "Failed to fetch games",
    )


# single game
@router.get("/game")
async def get_game(
    gameNumber: str | None = None,
    season: str | None = None,
    code: str | None = None,
    seasonCode: str | None = None,
    cache: TTLCache = Depends(get_cache),
    client: EuroLeagueClient = Depends(get_euroleague_client),
):
    require(gameNumber, "gameNumber")
    competition = resolve_competition(code)
    season_code = build_season_code(competition, season, seasonCode)

    return await serve_cached(
        cache,
        make_cache_key("game", competition, season_code, gameNumber),
        GAME_CACHE_TTL,
        lambda: client.get_game(competition, season_code, gameNumber),
        {"season": season, "code": competition, "seasonCode": season_code, "gameNumber": gameNumber},
        "Failed to fetch game data",
    )


@router.get("/boxscore")
async def get_boxscore(
    gameNumber: str | None = None,
    season: str | None = None,
    code: str | None = None,
    seasonCode: str | None = None,
    cache: TTLCache = Depends(get_cache),
    client: EuroLeagueClient = Depends(get_euroleague_client),
):
    require(gameNumber, "gameNumber")
    competition = resolve_competition(code)
    season_code = build_season_code(competition, season, seasonCode)

    return await serve_cached(
        cache,
        make_cache_key("boxscore", competition, season_code, gameNumber),
        BOXSCORE_CACHE_TTL,
        lambda: client.get_boxscore(competition, season_code, gameNumber),
        {"season": season, "code": competition, "seasonCode": season_code, "gameNumber": gameNumber},
        "Failed to fetch boxscore",
    )


def _play_count(data) -> dict:
    plays = data.get("data") if isinstance(data, dict) else None
    return {"totalPlays": len(plays) if isinstance(plays, list) else None}


# play-by-play, with the number of plays in _meta
@router.get("/pbp")
async def get_play_by_play(
    gameNumber: str | None = None,
    season: str | None = None,
    code: str | None = None,
    seasonCode: str | None = None,
    cache: TTLCache = Depends(get_cache),
    client: EuroLeagueClient = Depends(get_euroleague_client),
):
    require(gameNumber, "gameNumber")
    competition = resolve_competition(code)
    season_code = build_season_code(competition, season, seasonCode)

    return await serve_cached(
        cache,
        make_cache_key("pbp", competition, season_code, gameNumber),
        PBP_CACHE_TTL,
        lambda: client.get_play_by_play(competition, season_code, gameNumber),
        {"code": competition, "seasonCode": season_code, "gameNumber": gameNumber},
        "Failed to fetch play-by-play",
        extra_meta=_play_count,
    )
