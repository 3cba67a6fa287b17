"""In-memory storage, for tests and throwaway sessions."""

from collections.abc import Sequence

from ledger.models.transaction import Transaction
from ledger.services.storage.interface import (
    DestinationNotFoundError,
    StorageError,
    TransactionStorageInterface,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Keeps each destination's history as a tuple in a dict."""

    def __init__(self):
        self._destinations: dict[str, tuple[Transaction, ...]] = {}

    def save_transactions(
        self,
        destination: str,
        transactions: Sequence[Transaction],
    ) -> bool:
        if not destination.strip():
            raise StorageError("Destination name cannot be empty")
        self._destinations[destination] = tuple(transactions)
        return True

    def load_transactions(self, destination: str) -> list[Transaction]:
        try:
            return list(self._destinations[destination])
        except KeyError:
            raise DestinationNotFoundError(f"Nothing saved under {destination!r}")

    def destinations(self) -> list[str]:
        return sorted(self._destinations)
