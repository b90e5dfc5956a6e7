"""
Unit of work shared by the ledger and the award registry

Every mutating operation runs inside ``UnitOfWork.transaction()``:

- mutations are serialized by one asyncio lock, giving a single total order
- each enlisted participant is snapshotted on entry and restored if the
  operation raises, so a failure anywhere (including a nested mint) leaves
  no trace
- events are staged while the operation runs and published only after it
  commits

A transaction entered again from the task that already holds it joins the
outer transaction instead of waiting on the lock.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional, Protocol, Tuple, runtime_checkable

from .nats_client import Event

logger = logging.getLogger(__name__)


@runtime_checkable
class TransactionParticipant(Protocol):
    """State holder that can be rolled back"""

    def snapshot(self) -> Any:
        """Capture current state"""
        ...

    def restore(self, state: Any) -> None:
        """Return to a previously captured state"""
        ...


class TransactionError(RuntimeError):
    """Raised when transactional API is misused"""
    pass


class UnitOfWork:
    """Serial execution context with all-or-nothing commit"""

    def __init__(self):
        self._lock: Optional[asyncio.Lock] = None
        self._participants: List[TransactionParticipant] = []
        self._owner: Optional[asyncio.Task] = None
        self._depth = 0
        self._staged: List[Tuple[Any, Event]] = []

    def enlist(self, participant: TransactionParticipant) -> None:
        """Register state that must roll back with the transaction"""
        if not isinstance(participant, TransactionParticipant):
            raise TypeError(f"{type(participant).__name__} cannot take part in a transaction")
        if any(p is participant for p in self._participants):
            return
        self._participants.append(participant)

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0 and self._owner is asyncio.current_task()

    def emit(self, event: Event, event_bus: Any) -> None:
        """Stage an event for publication after commit"""
        if self._depth == 0:
            raise TransactionError("Events can only be emitted inside a transaction")
        self._staged.append((event_bus, event))

    @asynccontextmanager
    async def transaction(self):
        if self.in_transaction:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            self._owner = asyncio.current_task()
            self._depth = 1
            self._staged = []
            snapshots = [(p, p.snapshot()) for p in self._participants]
            try:
                yield self
            except BaseException as e:
                for participant, state in snapshots:
                    participant.restore(state)
                discarded = len(self._staged)
                self._staged = []
                logger.error(f"Transaction rolled back ({type(e).__name__}), {discarded} staged events discarded")
                raise
            finally:
                self._depth = 0
                self._owner = None
            staged, self._staged = self._staged, []

        for event_bus, event in staged:
            if event_bus is None:
                continue
            try:
                await event_bus.publish_event(event)
            except Exception as e:
                logger.error(f"Failed to publish event {event.type}: {e}")
