"""Activity events."""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from .handle import Handle
from .models import EventData

if TYPE_CHECKING:
    from .accounts import Account

logger = logging.getLogger(__name__)


class Event(Handle[EventData]):
    """An entry of an account's public activity stream."""

    async def get_owner(self) -> "Account | None":
        """The account that triggered the event, populated."""
        await self.await_ready()
        actor = self.data.actor
        if actor is None or not actor.login:
            logger.warning("Event %s has no actor", self.data.id)
            return None
        return await self._hub.get_user_by_name(actor.login).await_ready()

    def get_date(self) -> datetime | None:
        """Creation time; a timestamp without offset is taken as UTC."""
        created_at = self.data.created_at
        if created_at is not None and created_at.tzinfo is None:
            return created_at.replace(tzinfo=timezone.utc)
        return created_at
