import logging
import threading
from datetime import datetime
from typing import Optional, Sequence

from .schemas import InventoryRecord, InventorySnapshot
from .stats import compute_stats

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Single owner of the current inventory collection.

    Every fetch takes a ticket from begin_fetch(). A result is applied only if
    its ticket is newer than the last applied one, so a slow, older fetch can
    never overwrite fresher data. The collection is always replaced whole.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._next_ticket = 0
        self._snapshot = InventorySnapshot()

    def begin_fetch(self) -> int:
        with self._lock:
            self._next_ticket += 1
            return self._next_ticket

    def publish(self, ticket: int, records: Sequence[InventoryRecord]) -> bool:
        stats = compute_stats(records)
        with self._lock:
            if ticket <= self._snapshot.ticket:
                logger.warning(
                    f"⚠️ Discarding stale fetch #{ticket} (already at #{self._snapshot.ticket})."
                )
                return False
            self._snapshot = InventorySnapshot(
                records=tuple(records),
                stats=stats,
                last_updated=datetime.now(),
                error=None,
                ticket=ticket,
            )
        return True

    def fail(self, ticket: int, error: str) -> None:
        """Records a failed fetch. The previously published records stay in place."""
        with self._lock:
            if ticket <= self._snapshot.ticket:
                return
            self._snapshot = self._snapshot.model_copy(update={"error": error})

    def snapshot(self) -> InventorySnapshot:
        with self._lock:
            return self._snapshot

    @property
    def records(self) -> tuple[InventoryRecord, ...]:
        return self.snapshot().records

    @property
    def error(self) -> Optional[str]:
        return self.snapshot().error
