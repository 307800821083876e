# services/repository.py

"""
Profile Repository: one uniform async CRUD wrapper per Supabase table.

Every Supabase / PostgREST failure is logged here and re-raised as a
RepositoryError; callers decide on the user-facing fallback.
"""

from typing import Dict, Iterable, List, Optional

from supabase import AsyncClient

from core.errors import RecordNotFound, RepositoryError, extract_supabase_error
from core.logging_config import logger
from core.utils import clean_row


class TableRepository:
    def __init__(self, client: AsyncClient, table: str):
        self.client = client
        self.table = table

    def _failure(self, operation: str, error: Exception) -> RepositoryError:
        detail = extract_supabase_error(error)
        logger.error(f"{operation} on {self.table} failed: {detail}")
        return RepositoryError(f"{operation} {self.table}", detail)

    # -------------------------------------------------
    # LIST
    # -------------------------------------------------
    async def list(
        self,
        filters: Optional[Dict[str, object]] = None,
        in_filters: Optional[Dict[str, Iterable]] = None,
        order: Optional[str] = None,
    ) -> List[dict]:
        try:
            query = self.client.table(self.table).select("*")
            for key, val in (filters or {}).items():
                query = query.eq(key, val)
            for key, values in (in_filters or {}).items():
                query = query.in_(key, list(values))
            if order:
                query = query.order(order)

            result = await query.execute()
            return result.data or []

        except Exception as e:
            raise self._failure("List", e)

    # -------------------------------------------------
    # GET
    # -------------------------------------------------
    async def get_by_id(self, record_id: str) -> Optional[dict]:
        try:
            result = await (
                self.client.table(self.table)
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise self._failure("Fetch", e)

        return result.data[0] if result.data else None

    # -------------------------------------------------
    # CREATE
    # -------------------------------------------------
    async def create(self, row: dict) -> dict:
        try:
            result = await (
                self.client.table(self.table)
                .insert(clean_row(row))
                .execute()
            )
        except Exception as e:
            raise self._failure("Create", e)

        if not result.data:
            raise RepositoryError(f"Create {self.table}", "insert returned no data")
        return result.data[0]

    # -------------------------------------------------
    # UPDATE
    # -------------------------------------------------
    async def update(self, record_id: str, partial: dict) -> dict:
        try:
            result = await (
                self.client.table(self.table)
                .update(clean_row(partial))
                .eq("id", record_id)
                .execute()
            )
        except Exception as e:
            raise self._failure("Update", e)

        if not result.data:
            raise RecordNotFound(self.table, record_id)
        return result.data[0]

    # -------------------------------------------------
    # DELETE
    # -------------------------------------------------
    async def delete(self, record_id: str) -> None:
        try:
            await self.client.table(self.table).delete().eq("id", record_id).execute()
        except Exception as e:
            raise self._failure("Delete", e)


class Repositories:
    """The four dashboard tables, bound to one session's client."""

    def __init__(self, client: AsyncClient):
        self.properties = TableRepository(client, "properties")
        self.units = TableRepository(client, "property_units")
        self.tenants = TableRepository(client, "tenants")
        self.profiles = TableRepository(client, "profiles")
