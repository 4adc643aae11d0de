"""Store client contract used by the read-modify-write engine."""
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union, runtime_checkable

Key = Union[str, bytes]


@dataclass(frozen=True)
class KeyRef:
    """A flat key, or a field inside a hash container."""

    key: Key
    field: Optional[Key] = None

    @classmethod
    def flat(cls, key: Key) -> "KeyRef":
        return cls(key)

    @classmethod
    def in_hash(cls, container: Key, field: Key) -> "KeyRef":
        return cls(container, field)

    @property
    def is_hash(self) -> bool:
        return self.field is not None

    def __str__(self) -> str:
        key = self.key.decode("utf-8", "replace") if isinstance(self.key, bytes) else self.key
        if not self.is_hash:
            return key
        field = self.field.decode("utf-8", "replace") if isinstance(self.field, bytes) else self.field
        return f"{key}[{field}]"


@runtime_checkable
class StoreClient(Protocol):
    """Capabilities the engine requires from its backing store.

    ``update`` must run ``compute`` against the current value and write its
    result without any other writer touching the key in between; the store
    owns any retry policy needed to guarantee that. Failures are raised as
    ``StoreError`` carrying the store's own message.
    """

    def fetch(self, ref: KeyRef) -> Optional[str]:
        ...

    def store(self, ref: KeyRef, value: str) -> None:
        ...

    def update(self, ref: KeyRef, compute: Callable[[Optional[str]], str]) -> str:
        ...
