"""Key-value persistence for the events collection."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from event_reminder.db import get_session, Setting
from event_reminder.errors import StorageError

logger = logging.getLogger(__name__)


class PersistenceCollaborator(ABC):
    """Stores one serialized value per key."""

    @abstractmethod
    async def load(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None if there is none."""

    @abstractmethod
    async def save(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""


class SettingStorage(PersistenceCollaborator):
    """Persist values in the ``settings`` table."""

    async def load(self, key: str) -> Optional[str]:
        try:
            with get_session() as session:
                setting = session.query(Setting).filter_by(key=key).first()
                return setting.value if setting else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load '{key}': {e}")
            raise StorageError(f"Cannot load '{key}': {e}") from e

    async def save(self, key: str, value: str) -> None:
        try:
            with get_session() as session:
                setting = session.query(Setting).filter_by(key=key).first()
                if setting:
                    setting.value = value
                else:
                    session.add(Setting(key=key, value=value))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save '{key}': {e}")
            raise StorageError(f"Cannot save '{key}': {e}") from e

        logger.debug(f"Saved '{key}' ({len(value)} bytes)")
