"""Look up a client's contact details on behalf of the owning lawyer."""

from __future__ import annotations

from lawconnect.clients.supabase import ScopedAccessor
from lawconnect.core.errors import NotFoundError
from lawconnect.models import ClientContact


class ClientDirectory:
    def __init__(self, *, accessor: ScopedAccessor, table_name: str) -> None:
        self._table = accessor.table(table_name)

    async def get_contact(self, *, cliente_id: str, user_id: str) -> ClientContact:
        """Fetch ``nombre``/``email`` for a client owned by ``user_id``."""
        rows = await self._table.select(
            "nombre,email",
            filters={"id": cliente_id, "user_id": user_id},
            limit=1,
        )
        if not rows:
            raise NotFoundError("Cliente no encontrado")
        return ClientContact.model_validate(rows[0])


__all__ = ["ClientDirectory"]
