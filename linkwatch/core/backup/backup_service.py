"""Offline data backup and restore.

Keeps a small ``dict[str, int]`` payload safe across restarts while the
device is offline. Backups are tagged with an owner id so that data saved for
one user is never restored for another.
"""

import json
import logging
from collections.abc import Callable

from linkwatch.ports.persistence import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_KEY = "linkwatch.offline_backup"
DEFAULT_OWNER_KEY = "linkwatch.offline_backup.owner"


class OfflineBackupService:
    """Saves and restores an offline backup through a KeyValueStore.

    Persistence errors never propagate: a failed save returns False and a
    failed restore returns None, with a warning logged in both cases.
    """

    def __init__(
        self,
        store: KeyValueStore,
        is_online: Callable[[], bool],
        on_restored: Callable[[], None],
    ) -> None:
        """Initialize the backup service.

        Args:
            store: Key-value store holding the backup blob and owner id.
            is_online: Supplier of current connectivity; backups are only
                written while offline.
            on_restored: Called after a non-empty backup is restored, so the
                caller can mark a sync as pending.
        """
        self._store = store
        self._is_online = is_online
        self._on_restored = on_restored

    def save_backup(
        self,
        data: dict[str, int] | None,
        backup_key: str,
        owner_key: str,
        owner_id: str,
    ) -> bool:
        """Back up data if offline.

        Args:
            data: Payload to back up. Empty or None payloads are skipped.
            backup_key: Store key for the serialized payload.
            owner_key: Store key for the owner id.
            owner_id: Id of the user the payload belongs to.

        Returns:
            True if the backup was written.
        """
        if self._is_online() or not data:
            return False

        try:
            self._store.save(backup_key, json.dumps(data))
            self._store.save(owner_key, owner_id)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Backup failed: %s", e)
            return False

        logger.debug("Backed up %d items", len(data))
        return True

    def restore_backup(
        self,
        backup_key: str,
        owner_key: str,
        owner_id: str,
    ) -> dict[str, int] | None:
        """Restore a previously saved backup owned by ``owner_id``.

        The stored keys are removed once the payload has been read back.

        Args:
            backup_key: Store key for the serialized payload.
            owner_key: Store key for the owner id.
            owner_id: Id of the current user; must match the backup owner.

        Returns:
            The restored payload, or None if there is no usable backup.
        """
        try:
            if not self._store.contains(backup_key):
                return None

            if (self._store.load(owner_key) or "") != owner_id:
                logger.debug("Backup from different user - ignoring")
                return None

            blob = self._store.load(backup_key)
            if not blob:
                return None

            raw = json.loads(blob)
            if not isinstance(raw, dict):
                raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
            backup = {str(key): int(value) for key, value in raw.items()}

            self._store.delete(backup_key)
            self._store.delete(owner_key)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Restore failed: %s", e)
            return None

        if not backup:
            return None

        self._on_restored()
        logger.debug("Restored %d items", len(backup))
        return backup
