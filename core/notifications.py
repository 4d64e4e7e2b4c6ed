"""Change notifications published by the prompt vault.

Presentation layers subscribe to the vault instead of being called by it; each
successful mutation publishes one :class:`VaultChange`.

Updates:
  v0.2.0 - 2026-10-11 - Publish typed vault change events instead of task notifications.
  v0.1.0 - 2026-10-04 - Introduce subscription handles and bounded event history.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("prompt_vault.notifications")


class ChangeKind(str, Enum):
    """Kinds of state change a subscriber can react to."""
    PROMPT_CREATED = "prompt_created"
    PROMPT_UPDATED = "prompt_updated"
    PROMPTS_DELETED = "prompts_deleted"
    FAVORITE_TOGGLED = "favorite_toggled"
    SELECTION_CHANGED = "selection_changed"
    CATEGORY_CREATED = "category_created"
    CATEGORY_RENAMED = "category_renamed"
    CATEGORY_DELETED = "category_deleted"
    HISTORY_RESTORED = "history_restored"
    CATALOG_IMPORTED = "catalog_imported"
    CACHE_CLEARED = "cache_cleared"


def _empty_metadata() -> dict[str, Any]:
    return {}


@dataclass(slots=True, frozen=True)
class VaultChange:
    """Immutable payload describing a single vault change."""
    kind: ChangeKind
    prompt_ids: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=_empty_metadata)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Return a serialisable representation of the change."""
        return {
            "kind": self.kind.value,
            "prompt_ids": list(self.prompt_ids),
            "metadata": dict(self.metadata),
            "timestamp": self.timestamp.isoformat(),
        }


class ChangeSubscription:
    """Disposable handle that removes its callback when closed."""
    def __init__(
        self,
        notifier: ChangeNotifier,
        callback: Callable[[VaultChange], None],
    ) -> None:
        self._notifier = notifier
        self._callback = callback
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Detach the stored callback if it is still active."""
        if self._closed:
            return
        self._closed = True
        self._notifier.unsubscribe(self._callback)

    def __enter__(self) -> ChangeSubscription:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class ChangeNotifier:
    """Publish/subscribe hub delivering vault changes to listeners."""
    def __init__(self, history_limit: int = 100) -> None:
        self._subscribers: list[Callable[[VaultChange], None]] = []
        self._history: deque[VaultChange] = deque(maxlen=history_limit)

    def subscribe(self, callback: Callable[[VaultChange], None]) -> ChangeSubscription:
        """Register *callback* to receive future changes."""
        self._subscribers.append(callback)
        return ChangeSubscription(self, callback)

    def unsubscribe(self, callback: Callable[[VaultChange], None]) -> None:
        """Remove a previously subscribed callback if present."""
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def publish(self, change: VaultChange) -> None:
        """Deliver *change* to all registered subscribers."""
        self._history.append(change)
        logger.debug("Vault change %s (%d prompts)", change.kind.value, len(change.prompt_ids))
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:  # noqa: BLE001 - listener failures are logged only
                logger.exception("Change subscriber raised an exception")

    def history(self) -> tuple[VaultChange, ...]:
        """Return a snapshot of recently published changes."""
        return tuple(self._history)


__all__ = [
    "ChangeKind",
    "ChangeNotifier",
    "ChangeSubscription",
    "VaultChange",
]
