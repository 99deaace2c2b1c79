# Client for the EuroLeague live API (api-live.euroleague.net/v2)
import httpx
import logging
from bball_api.core.config import settings
from bball_api.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class EuroLeagueClient:
    def __init__(self, base_url: str | None = None, timeout: float | None = None, transport=None):
        self.base_url = (base_url or settings.EUROLEAGUE_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.UPSTREAM_TIMEOUT
        # injected in tests (httpx.MockTransport)
        self.transport = transport

    # GET base_url + path, raise UpstreamError on non-2xx or bad json
    async def fetch(self, path: str):
        logger.info(f"EUROLEAGUE API CALLED: {path}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                res = await client.get(
                    f"{self.base_url}{path}",
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            raise UpstreamError(f"EuroLeague API request failed for {path}: {e}", path=path) from e

        if not res.is_success:
            raise UpstreamError(
                f"EuroLeague API returned {res.status_code} for {path}",
                status=res.status_code,
                path=path,
            )

        try:
            return res.json()
        except ValueError as e:
            raise UpstreamError(
                f"EuroLeague API returned invalid JSON for {path}",
                status=res.status_code,
                path=path,
            ) from e

    # /competitions/{code}/seasons/{seasonCode}/...
    @staticmethod
    def season_path(code: str, season_code: str) -> str:
        return f"/competitions/{code.upper()}/seasons/{season_code}"

    async def get_games(self, code: str, season_code: str):
        return await self.fetch(f"{self.season_path(code, season_code)}/games")

    async def get_game(self, code: str, season_code: str, game_number):
        return await self.fetch(f"{self.season_path(code, season_code)}/games/{game_number}")

    async def get_boxscore(self, code: str, season_code: str, game_number):
        return await self.fetch(
            f"{self.season_path(code, season_code)}/games/{game_number}/boxscore"
        )

    async def get_game_stats(self, code: str, season_code: str, game_number):
        return await self.fetch(
            f"{self.season_path(code, season_code)}/games/{game_number}/stats"
        )

    async def get_play_by_play(self, code: str, season_code: str, game_number):
        return await self.fetch(
            f"{self.season_path(code, season_code)}/games/{game_number}/playbyplay"
        )

    async def get_standings(self, code: str, season_code: str):
        return await self.fetch(f"{self.season_path(code, season_code)}/standings")

    # all rounds, or a single round when given
    async def get_rounds(self, code: str, season_code: str, round_number=None):
        round_path = f"/{round_number}" if round_number else ""
        return await self.fetch(f"{self.season_path(code, season_code)}/rounds{round_path}")

    async def get_person(self, code: str, person_code: str):
        return await self.fetch(f"/competitions/{code.upper()}/persons/{person_code}")

    async def get_person_stats(self, code: str, season_code: str, person_code: str):
        return await self.fetch(
            f"{self.season_path(code, season_code)}/people/{person_code}/stats"
        )
