# Batched upserts into supabase through its PostgREST endpoint
import httpx
import logging
from dataclasses import dataclass, field
from typing import Sequence
from bball_api.core.config import settings
from bball_api.core.errors import ConfigurationError, PartialBatchError

logger = logging.getLogger(__name__)


@dataclass
class UpsertResult:
    count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def get_service_key() -> str:
    key = settings.SUPABASE_SERVICE_KEY
    if not key:
        raise ConfigurationError(
            "SUPABASE_SERVICE_KEY env var not set. Add it to the environment or the .env file."
        )
    return key


class SupabaseStore:
    def __init__(
        self,
        service_key: str,
        base_url: str | None = None,
        batch_size: int | None = None,
        timeout: float = 30,
        transport=None,
    ):
        self.base_url = (base_url or settings.SUPABASE_URL).rstrip("/")
        self.service_key = service_key
        self.batch_size = batch_size or settings.SYNC_BATCH_SIZE
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Prefer": "resolution=merge-duplicates",
        }

    # post one batch, raise PartialBatchError if it doesn't land
    async def _post_batch(self, client: httpx.AsyncClient, table: str, batch: list[dict], on_conflict: str, number: int):
        try:
            res = await client.post(
                f"{self.base_url}/rest/v1/{table}",
                params={"on_conflict": on_conflict},
                headers=self._headers(),
                json=batch,
            )
        except httpx.HTTPError as e:
            raise PartialBatchError(f"{table} batch {number}: {e}") from e

        if not res.is_success:
            raise PartialBatchError(f"{table} batch {number}: {res.status_code} {res.text}")

    # Insert-or-merge rows in fixed-size batches.
    # A failed batch is recorded and the remaining batches still run.
    async def upsert(self, table: str, rows: list[dict], on_conflict: Sequence[str]) -> UpsertResult:
        result = UpsertResult()
        if not rows:
            return result

        conflict_cols = ",".join(on_conflict)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            for start in range(0, len(rows), self.batch_size):
                batch = rows[start : start + self.batch_size]
                number = start // self.batch_size + 1
                try:
                    await self._post_batch(client, table, batch, conflict_cols, number)
                except PartialBatchError as e:
                    logger.error(f"Upsert failed: {e}")
                    result.errors.append(str(e))
                    continue
                result.count += len(batch)

        logger.info(f"Upserted {result.count}/{len(rows)} rows into {table}")
        return result
