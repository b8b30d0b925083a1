"""
Result views shared by the transaction-backed policies.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from ..models import DecodedEvent, MinedTransaction, ReconciliationResult, Status

T = TypeVar('T')


@dataclass(frozen=True)
class TransactionData:
    """
    Transaction facts shown for a request.

    Once the transaction is mined the chain's values are shown, otherwise the
    expected ones.
    """
    tx_hash: Optional[str]
    from_address: Optional[str]
    to_address: str
    data: Optional[str]
    value: int
    block_confirmations: Optional[int] = None
    timestamp: Optional[datetime] = None
    events: Optional[List[DecodedEvent]] = None

    @classmethod
    def build(
        cls,
        tx_hash: Optional[str],
        mined_transaction: Optional[MinedTransaction],
        from_address: Optional[str],
        to_address: str,
        data: Optional[str],
        value: Optional[int]
    ) -> "TransactionData":
        if mined_transaction is None:
            return cls(
                tx_hash=tx_hash,
                from_address=from_address,
                to_address=to_address,
                data=data,
                value=value or 0
            )

        return cls(
            tx_hash=tx_hash,
            from_address=mined_transaction.from_address,
            to_address=mined_transaction.to_address,
            data=mined_transaction.data,
            value=mined_transaction.value,
            block_confirmations=mined_transaction.block_confirmations,
            timestamp=mined_transaction.timestamp,
            events=list(mined_transaction.events)
        )


@dataclass(frozen=True)
class WithFunctionData(Generic[T]):
    """A stored request together with the call data a wallet should send."""
    value: T
    function_data: str


@dataclass(frozen=True)
class WithTransactionData(Generic[T]):
    value: T
    status: Status
    transaction_data: TransactionData
    mined_transaction: Optional[MinedTransaction] = None


@dataclass(frozen=True)
class WithTransactionAndFunctionData(Generic[T]):
    value: T
    status: Status
    function_data: str
    transaction_data: TransactionData
    mined_transaction: Optional[MinedTransaction] = None


def with_transaction_data(
    request: T,
    result: ReconciliationResult,
    tx_hash: Optional[str],
    from_address: Optional[str],
    to_address: str,
    data: Optional[str],
    value: Optional[int]
) -> WithTransactionData[T]:
    return WithTransactionData(
        value=request,
        status=result.status,
        transaction_data=TransactionData.build(
            tx_hash, result.mined_transaction, from_address, to_address, data, value
        ),
        mined_transaction=result.mined_transaction
    )
