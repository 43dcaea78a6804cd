from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager

# Opaque handle for an open transaction. Repositories receive it on every
# call; only the infrastructure layer knows what is inside.
TransactionHandle = Any


class UnitOfWork(ABC):
    """Unit of work interface - one all-or-nothing database transaction"""

    @abstractmethod
    def begin(self) -> AsyncContextManager[TransactionHandle]:
        """
        Open a transaction.

        Commits when the block exits normally and rolls back when it exits
        with any exception (including cancellation). The underlying
        connection is released on every path.
        """
        pass
