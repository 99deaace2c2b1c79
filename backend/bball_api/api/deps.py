import logging
from typing import Awaitable, Callable

from fastapi import Request

from bball_api.core.errors import ApiError, ConfigurationError, UpstreamError, ValidationError
from bball_api.db.supabase import SupabaseStore, get_service_key
from bball_api.services.cache import TTLCache
from bball_api.services.euroleague_client import EuroLeagueClient
from bball_api.services.response import cached_response, wrap_payload

logger = logging.getLogger(__name__)


# the process-wide cache created by create_app()
def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_euroleague_client() -> EuroLeagueClient:
    return EuroLeagueClient()


# only /sync writes to supabase, so a missing key fails the sync
def get_supabase_store() -> SupabaseStore:
    try:
        return SupabaseStore(get_service_key())
    except ConfigurationError as e:
        raise ApiError(f"Sync failed: {e.message}", status_code=500) from e


def require(value: str | None, name: str) -> str:
    if not value:
        raise ValidationError(f"Missing required param: {name}")
    return value


async def serve_cached(
    cache: TTLCache,
    cache_key: str,
    ttl: int,
    fetch: Callable[[], Awaitable],
    params: dict,
    error_message: str,
    extra_meta: Callable[[object], dict] | None = None,
):
    """Cache hit -> stored body; miss -> fetch, wrap with _meta, store, return."""
    cached = cache.get(cache_key)
    if cached is not None:
        return cached_response(cached, hit=True)

    logger.info(f"Cache miss: {cache_key}")
    try:
        data = await fetch()
    except UpstreamError as e:
        raise UpstreamError(f"{error_message}: {e.message}", status=e.status, path=e.path) from e

    body = wrap_payload(data, params, **(extra_meta(data) if extra_meta else {}))
    cache.set(cache_key, body, ttl)
    return cached_response(body, hit=False)
