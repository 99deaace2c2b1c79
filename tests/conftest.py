"""Shared pytest fixtures for bball-api tests."""
import json
import sys
from collections import defaultdict
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

# Add project root and backend to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "backend"))

UPSTREAM_URL = "https://upstream.test"
SUPABASE_URL = "https://store.test"


class FakeUpstream:
    """Routes EuroLeague paths to canned JSON bodies (or httpx.Response objects)."""

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        body = self.routes.get(path)
        if body is None:
            return httpx.Response(404, json={"message": f"{path} not found"})
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    def client(self):
        from bball_api.services.euroleague_client import EuroLeagueClient

        return EuroLeagueClient(base_url=UPSTREAM_URL, transport=httpx.MockTransport(self.handler))


class FakeSupabase:
    """
    In-memory PostgREST stand-in.

    Rows are merged on the on_conflict columns, like resolution=merge-duplicates.
    Request numbers listed in fail_requests (1-based) answer 500.
    """

    def __init__(self, fail_requests=()):
        self.tables: dict[str, dict[tuple, dict]] = defaultdict(dict)
        self.requests: list[httpx.Request] = []
        self.fail_requests = set(fail_requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.requests) in self.fail_requests:
            return httpx.Response(500, text="database unavailable")

        table = request.url.path.rsplit("/", 1)[-1]
        conflict_cols = request.url.params["on_conflict"].split(",")
        for row in json.loads(request.content):
            self.tables[table][tuple(row[c] for c in conflict_cols)] = row
        return httpx.Response(201)

    def store(self, batch_size: int = 50):
        from bball_api.db.supabase import SupabaseStore

        return SupabaseStore(
            "service-key",
            base_url=SUPABASE_URL,
            batch_size=batch_size,
            transport=httpx.MockTransport(self.handler),
        )


def season_path(code="E", season_code="E2025"):
    return f"/competitions/{code}/seasons/{season_code}"


def make_game(game_code, status="Played", played=True, **extra):
    game = {
        "gameCode": game_code,
        "gameStatus": status,
        "played": played,
        "round": 1,
        "utcDate": "2025-10-02T18:00:00Z",
        "local": {
            "club": {"code": "MAD", "editorialName": "Real Madrid", "name": "Real Madrid", "tvCode": "RMB"},
            "score": 88,
            "partials": {"partials1": 20, "partials2": 22, "partials3": 25, "partials4": 21, "extraPeriods": {}},
        },
        "road": {
            "club": {"code": "ULK", "abbreviatedName": "Fenerbahce", "name": "Fenerbahce Beko Istanbul", "tvCode": "FBB"},
            "score": 80,
            "partials": {"partials1": 18, "partials2": 20, "partials3": 22, "partials4": 20},
        },
    }
    game.update(extra)
    return game


def make_boxscore(local_codes=("P001", "P002"), road_codes=("P101",)):
    def player(code):
        return {
            "personCode": code,
            "name": f"Player {code}",
            "minutes": "20:30",
            "score": 10,
            "fieldGoalsMade2": 3,
            "fieldGoalsAttempted2": 5,
            "fieldGoalsMade3": 1,
            "fieldGoalsAttempted3": 4,
            "offensiveRebounds": 1,
            "defensiveRebounds": 4,
            "valuation": 12,
        }

    return {
        "local": {"club": {"code": "MAD", "editorialName": "Real Madrid"}, "players": [player(c) for c in local_codes]},
        "road": {"club": {"code": "ULK", "editorialName": "Fenerbahce"}, "players": [player(c) for c in road_codes]},
    }


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def app():
    from bball_api.main import create_app

    return create_app()


@pytest.fixture
def client(app, upstream, supabase):
    """TestClient with the upstream and supabase replaced by fakes."""
    from bball_api.api.deps import get_euroleague_client, get_supabase_store

    app.dependency_overrides[get_euroleague_client] = lambda: upstream.client()
    app.dependency_overrides[get_supabase_store] = lambda: supabase.store()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
