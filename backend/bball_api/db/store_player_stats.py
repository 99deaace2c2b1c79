from bball_api.core.constants import PLAYER_STATS_TABLE, PLAYER_STATS_CONFLICT_KEY
from bball_api.db.supabase import UpsertResult


# Merge player stat lines into player_stats.
# Keyed on (season_code, game_code, person_code): one row per player per game.
async def save_player_stats(store, rows: list[dict]) -> UpsertResult:
    return await store.upsert(PLAYER_STATS_TABLE, rows, PLAYER_STATS_CONFLICT_KEY)
