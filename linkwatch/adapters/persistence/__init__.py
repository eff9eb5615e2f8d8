"""Key-value persistence adapters."""

from linkwatch.adapters.persistence.json_store import JsonFileStore

__all__ = ["JsonFileStore"]
