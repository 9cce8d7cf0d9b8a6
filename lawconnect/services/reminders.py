"""
Reminder audit rows: insertion by the dispatch flow, plus history and
cancellation for the owning user.
"""

from __future__ import annotations

import logging

from lawconnect.clients.supabase import ScopedAccessor
from lawconnect.core.errors import NotFoundError, PersistenceError, PreconditionError
from lawconnect.models import ReminderRecord, ReminderStatus

logger = logging.getLogger(__name__)


class ReminderRepository:
    """Caller-scoped access to the reminders table."""

    def __init__(
        self,
        *,
        accessor: ScopedAccessor,
        table_name: str,
        clients_table: str = "clientes",
    ) -> None:
        self._table = accessor.table(table_name)
        # History rows embed the recipient name through the cliente_id foreign key.
        self._history_columns = f"*,cliente:{clients_table}(nombre)"

    async def insert(self, record: ReminderRecord) -> ReminderRecord:
        rows = await self._table.insert(record.to_row())
        if not rows:
            return record
        return ReminderRecord.model_validate(rows[0])

    async def list_for_user(self, user_id: str) -> list[ReminderRecord]:
        rows = await self._table.select(
            self._history_columns,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
        )
        return [ReminderRecord.model_validate(row) for row in rows]

    async def cancel(self, *, reminder_id: str, user_id: str) -> ReminderRecord:
        """Move a pending reminder to ``cancelled``."""
        rows = await self._table.select(
            filters={"id": reminder_id, "user_id": user_id}, limit=1
        )
        if not rows:
            raise NotFoundError("Recordatorio no encontrado")
        current = ReminderRecord.model_validate(rows[0])
        if current.status is not ReminderStatus.PENDING:
            raise PreconditionError(
                f"Solo se pueden cancelar recordatorios pendientes (estado actual: {current.status.value})"
            )

        updated = await self._table.update(
            {"status": ReminderStatus.CANCELLED.value},
            filters={
                "id": reminder_id,
                "user_id": user_id,
                "status": ReminderStatus.PENDING.value,
            },
        )
        if not updated:
            # Picked up by the scheduler between the read and the write.
            raise PersistenceError("Error cancelando recordatorio")
        logger.info("Cancelled reminder %s for user %s", reminder_id, user_id)
        return ReminderRecord.model_validate(updated[0])


__all__ = ["ReminderRepository"]
