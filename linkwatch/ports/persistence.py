"""Key-value persistence port interface.

Defines the storage used by the offline backup service.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """Protocol for string key-value storage."""

    def save(self, key: str, blob: str) -> None:
        """Store a value, replacing any existing one.

        Raises:
            OSError: If the value could not be persisted.
        """
        ...

    def load(self, key: str) -> str | None:
        """Load a value.

        Returns:
            Stored value, or None if the key is absent.

        Raises:
            OSError: If the store could not be read.
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...

    def contains(self, key: str) -> bool:
        """Check whether a key is present."""
        ...
