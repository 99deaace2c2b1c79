"""
Sync pipeline: EuroLeague -> Supabase.

    1. fetch the season's game list
    2. optionally keep only the requested game numbers
    3. upsert games into live_games
    4. for played/live games, fetch boxscores (a few at a time) and upsert
       the flattened player lines into player_stats

Per-batch and per-game failures are collected into the result instead of
aborting the run; the sync is meant to be re-run on a schedule, and the
next run picks up whatever failed. Only a failed/unrecognised game list
(step 1) aborts.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field

from bball_api.core.config import settings
from bball_api.core.constants import MAX_REPORTED_ERRORS
from bball_api.core.errors import PartialBatchError
from bball_api.db.store_games import save_games
from bball_api.db.store_player_stats import save_player_stats
from bball_api.services.response import utc_now_iso
from bball_api.services.transformers import (
    GameInfo,
    extract_game_list,
    extract_players,
    filter_games,
    is_eligible,
)

logger = logging.getLogger(__name__)


def _capped(errors: list[str]) -> list[str] | None:
    return errors[:MAX_REPORTED_ERRORS] if errors else None


@dataclass
class SyncResult:
    season_code: str
    competition: str
    games_found: int = 0
    games_upserted: int = 0
    game_errors: list[str] = field(default_factory=list)
    boxscores_skipped: bool = False
    eligible: int = 0
    fetched: int = 0
    players_upserted: int = 0
    boxscore_errors: list[str] = field(default_factory=list)
    elapsed_ms: int = 0

    def summary(self) -> dict:
        games = {
            "found": self.games_found,
            "upserted": self.games_upserted,
        }
        if self.game_errors:
            games["errors"] = _capped(self.game_errors)
            games["errorCount"] = len(self.game_errors)

        if self.boxscores_skipped:
            boxscores = "skipped"
        else:
            boxscores = {
                "eligible": self.eligible,
                "fetched": self.fetched,
                "playersUpserted": self.players_upserted,
            }
            if self.boxscore_errors:
                boxscores["errors"] = _capped(self.boxscore_errors)
                boxscores["errorCount"] = len(self.boxscore_errors)

        return {
            "success": True,
            "seasonCode": self.season_code,
            "competition": self.competition,
            "games": games,
            "boxscores": boxscores,
            "elapsed": f"{self.elapsed_ms}ms",
            "timestamp": utc_now_iso(),
        }


class SyncPipeline:
    def __init__(self, client, store, concurrency: int | None = None, stats_endpoint: str | None = None):
        self.client = client
        self.store = store
        self.concurrency = concurrency or settings.SYNC_CONCURRENCY
        self.stats_endpoint = stats_endpoint or settings.SYNC_STATS_ENDPOINT

    async def _fetch_stats(self, code: str, season_code: str, game_code):
        if self.stats_endpoint == "stats":
            return await self.client.get_game_stats(code, season_code, game_code)
        return await self.client.get_boxscore(code, season_code, game_code)

    # one game's boxscore; any failure becomes a PartialBatchError naming the game
    async def _fetch_one(self, code: str, season_code: str, game: dict):
        game_code = game.get("gameCode")
        try:
            boxscore = await self._fetch_stats(code, season_code, game_code)
        except Exception as e:
            raise PartialBatchError(f"Game {game_code}: {e}") from e
        return game, boxscore

    async def collect_player_rows(self, games: list[dict], code: str, season_code: str, result: SyncResult) -> list[dict]:
        """
        Fetch boxscores in windows of `concurrency` games.

        Calls inside a window run together; the next window starts once the
        whole window has settled.
        """
        rows = []
        for start in range(0, len(games), self.concurrency):
            window = games[start : start + self.concurrency]
            outcomes = await asyncio.gather(
                *(self._fetch_one(code, season_code, g) for g in window),
                return_exceptions=True,
            )

            for outcome in outcomes:
                if isinstance(outcome, PartialBatchError):
                    logger.warning(f"Boxscore fetch failed: {outcome}")
                    result.boxscore_errors.append(str(outcome))
                    continue
                if isinstance(outcome, BaseException):
                    raise outcome

                game, boxscore = outcome
                result.fetched += 1
                try:
                    rows.extend(extract_players(boxscore, GameInfo.from_game(game, season_code, code)))
                except Exception as e:
                    logger.warning(f"Boxscore extraction failed for game {game.get('gameCode')}: {e}")
                    result.boxscore_errors.append(f"Game {game.get('gameCode')}: {e}")

        return rows

    async def run(self, code: str, season_code: str, games_filter: str | None = None, skip_boxscores: bool = False) -> SyncResult:
        started = time.perf_counter()
        competition = code.upper()
        result = SyncResult(season_code=season_code, competition=competition)
        logger.info(f"Sync started: {competition} {season_code} games={games_filter or 'all'}")

        # step 1: game list (fatal on failure)
        payload = await self.client.get_games(competition, season_code)
        games = filter_games(extract_game_list(payload), games_filter)
        result.games_found = len(games)

        # step 2: games
        games_result = await save_games(self.store, games, season_code, competition)
        result.games_upserted = games_result.count
        result.game_errors.extend(games_result.errors)

        # step 3: boxscores -> player lines
        if skip_boxscores:
            result.boxscores_skipped = True
        else:
            eligible = [g for g in games if is_eligible(g)]
            result.eligible = len(eligible)

            player_rows = await self.collect_player_rows(eligible, competition, season_code, result)
            if player_rows:
                players_result = await save_player_stats(self.store, player_rows)
                result.players_upserted = players_result.count
                result.boxscore_errors.extend(players_result.errors)

        result.elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Sync finished: {competition} {season_code} games={result.games_upserted}/{result.games_found} "
            f"boxscores={result.fetched}/{result.eligible} players={result.players_upserted} "
            f"errors={len(result.game_errors) + len(result.boxscore_errors)} in {result.elapsed_ms}ms"
        )
        return result
