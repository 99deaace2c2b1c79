from bball_api.core.constants import GAMES_TABLE, GAMES_CONFLICT_KEY
from bball_api.db.supabase import UpsertResult
from bball_api.services.transformers import transform_game


# Transform upstream games and merge them into live_games.
# Keyed on (season_code, game_code) so re-syncing overwrites rows instead of duplicating.
async def save_games(store, games: list[dict], season_code: str, competition: str) -> UpsertResult:
    rows = [transform_game(g, season_code, competition) for g in games]
    return await store.upsert(GAMES_TABLE, rows, GAMES_CONFLICT_KEY)
