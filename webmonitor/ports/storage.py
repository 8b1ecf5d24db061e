from typing import Protocol


class TokenStoragePort(Protocol):
    """Client-local persistent key/value storage (localStorage semantics)."""

    def get(self, key: str) -> str | None:
        """Return the stored value or None."""
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        """Remove the key. Missing keys are ignored."""
        ...
