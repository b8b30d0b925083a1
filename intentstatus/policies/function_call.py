"""
Contract function call policy.
"""
from ..encoding import FunctionEncoder
from ..models import Checked, ExpectedTransaction, ReconciliationResult, checked_if_set
from ..records.types import ContractFunctionCallRequest
from .common import TransactionData, WithTransactionAndFunctionData


def encode_call(encoder: FunctionEncoder, request: ContractFunctionCallRequest) -> str:
    return encoder.encode(request.function_name, request.function_params)


def expected_transaction(request: ContractFunctionCallRequest, data: str) -> ExpectedTransaction:
    return ExpectedTransaction(
        tx_hash=request.tx_hash,
        to=request.contract_address,
        sender=checked_if_set(request.caller_address),
        data=Checked(data),
        value=Checked(request.eth_amount)
    )


def to_view(
    request: ContractFunctionCallRequest,
    result: ReconciliationResult,
    data: str
) -> WithTransactionAndFunctionData[ContractFunctionCallRequest]:
    return WithTransactionAndFunctionData(
        value=request,
        status=result.status,
        function_data=data,
        transaction_data=TransactionData.build(
            tx_hash=request.tx_hash,
            mined_transaction=result.mined_transaction,
            from_address=request.caller_address,
            to_address=request.contract_address,
            data=data,
            value=request.eth_amount
        ),
        mined_transaction=result.mined_transaction
    )
