"""
Transaction Store Module
Holds the latest imported transaction list and notifies subscribers on change.

The store is an explicit object handed to whoever needs it. Writes are meant
to come only from import completion (see pipeline.import_into_store).
"""

import logging
from collections.abc import Callable, Iterable

from .models import TransactionRecord

logger = logging.getLogger(__name__)

Listener = Callable[[list[TransactionRecord]], None]


class TransactionStore:
    """In-memory replace-and-notify store for the current transaction list."""

    def __init__(self):
        self._transactions: tuple[TransactionRecord, ...] = ()
        # dict as an insertion-ordered set
        self._listeners: dict[Listener, None] = {}

    def set_transactions(self, transactions: Iterable[TransactionRecord]):
        """Replace the whole list and notify every listener."""
        self._transactions = tuple(transactions)
        logger.debug(f"Store updated: {len(self._transactions)} transactions, {len(self._listeners)} listeners")
        self._emit()

    def get_transactions(self) -> list[TransactionRecord]:
        """Return a snapshot of the current list."""
        return list(self._transactions)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener. It is called once immediately with the current
        snapshot, then on every change.

        Returns:
            Callable that removes the listener
        """
        self._listeners[listener] = None
        listener(self.get_transactions())

        def unsubscribe():
            self._listeners.pop(listener, None)

        return unsubscribe

    def _emit(self):
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(self.get_transactions())
