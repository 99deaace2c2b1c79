API_NAME = "bball-api"
API_VERSION = "1.2.0"

# tag attached to every _meta block
SOURCE_TAG = API_NAME

# cache ttls (seconds)
GAMES_CACHE_TTL = 60 * 5
GAME_CACHE_TTL = 60
BOXSCORE_CACHE_TTL = 60
PBP_CACHE_TTL = 60
STANDINGS_CACHE_TTL = 60 * 5  # standings don't change mid-game
ROUNDS_CACHE_TTL = 60 * 5
PLAYER_CACHE_TTL = 60 * 5

# supabase tables and their conflict keys
GAMES_TABLE = "live_games"
GAMES_CONFLICT_KEY = ("season_code", "game_code")
PLAYER_STATS_TABLE = "player_stats"
PLAYER_STATS_CONFLICT_KEY = ("season_code", "game_code", "person_code")

# statuses for which a boxscore exists
ELIGIBLE_GAME_STATUSES = frozenset({"Played", "Live", "Playing"})

# only the first N error strings per stage go into the sync summary
MAX_REPORTED_ERRORS = 5

TRUTHY_FLAGS = frozenset({"true", "1"})
