"""Offline backup of pending data across restarts."""

from linkwatch.core.backup.backup_service import OfflineBackupService

__all__ = ["OfflineBackupService"]
