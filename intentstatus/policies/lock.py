"""
ERC-20 lock policy.

The lock transaction calls the lock contract's
``lock(address token, uint256 amount, uint256 duration, string id, address zero)``.
"""
from typing import List

from ..encoding import FunctionEncoder
from ..models import Checked, ExpectedTransaction, ReconciliationResult, checked_if_set
from ..records.types import Erc20LockRequest, FunctionArgument
from ..utils import ZERO_ADDRESS
from .common import WithTransactionData, with_transaction_data

LOCK_FUNCTION_NAME = "lock"


def lock_arguments(request: Erc20LockRequest) -> List[FunctionArgument]:
    return [
        FunctionArgument("address", request.token_address),
        FunctionArgument("uint256", request.token_amount),
        FunctionArgument("uint256", request.lock_duration_seconds),
        FunctionArgument("string", request.id),
        FunctionArgument("address", ZERO_ADDRESS),
    ]


def encode_lock_call(encoder: FunctionEncoder, request: Erc20LockRequest) -> str:
    return encoder.encode(LOCK_FUNCTION_NAME, lock_arguments(request))


def expected_transaction(request: Erc20LockRequest, data: str) -> ExpectedTransaction:
    """
    Args:
        request: Stored lock request
        data: Lock call data, encoded from the stored request at read time
    """
    return ExpectedTransaction(
        tx_hash=request.tx_hash,
        to=request.lock_contract_address,
        sender=checked_if_set(request.token_sender_address),
        data=Checked(data),
        value=Checked(request.token_amount)
    )


def to_view(
    request: Erc20LockRequest,
    result: ReconciliationResult,
    data: str
) -> WithTransactionData[Erc20LockRequest]:
    return with_transaction_data(
        request,
        result,
        tx_hash=request.tx_hash,
        from_address=request.token_sender_address,
        to_address=request.lock_contract_address,
        data=data,
        value=request.token_amount
    )
