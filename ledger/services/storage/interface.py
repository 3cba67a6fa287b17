"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for transaction storage.
This allows us to:
1. Swap the JSON file backend for Google Sheets (or anything else)
2. Use in-memory storage for testing
3. Keep the ledger decoupled from any encoding

The interface is intentionally tiny: the ledger saves its whole history
to a named destination and loads a whole history back.

CONTRACT: load_transactions(d) after a successful save_transactions(d, T),
with nothing else touching d in between, returns a list equal to T.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ledger.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction history storage.

    Any storage implementation (JSON file, Google Sheets, etc.)
    must implement these methods.
    """

    @abstractmethod
    def save_transactions(
        self,
        destination: str,
        transactions: Sequence[Transaction],
    ) -> bool:
        """
        Save an ordered transaction history to a destination.

        Args:
            destination: Backend-specific name (file name, worksheet title)
            transactions: The history to store, in order

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def load_transactions(self, destination: str) -> list[Transaction]:
        """
        Load an ordered transaction history from a destination.

        Args:
            destination: Backend-specific name (file name, worksheet title)

        Returns:
            The stored history, in the order it was saved

        Raises:
            DestinationNotFoundError: If nothing was ever saved there
            CorruptDataError: If the stored data cannot be decoded
            StorageError: For any other failure
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DestinationNotFoundError(StorageError):
    """Nothing stored under the requested destination."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but does not decode to a transaction history."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
