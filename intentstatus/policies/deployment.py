"""
Contract deployment policy.

A deployment transaction has no destination and must report the created
contract address. Imported contracts have no deployment transaction and are
always successful.
"""
from ..models import PRESENT, Checked, ExpectedTransaction, ReconciliationResult, Status, checked_if_set
from ..records.types import ContractDeploymentRequest
from ..utils import ZERO_ADDRESS
from .common import WithTransactionData, with_transaction_data


def expected_transaction(request: ContractDeploymentRequest) -> ExpectedTransaction:
    """
    Expected deployment transaction. The bytecode is compared as stored,
    constructor arguments included.

    The transaction must have created a contract. Once its address is
    cached on the record, it must be that contract.
    """
    return ExpectedTransaction(
        tx_hash=request.tx_hash,
        to=ZERO_ADDRESS,
        sender=checked_if_set(request.deployer_address),
        data=Checked(request.contract_data),
        value=Checked(request.initial_eth_amount),
        deployed_contract=PRESENT if request.contract_address is None else Checked(request.contract_address)
    )


def apply_imported(request: ContractDeploymentRequest, result: ReconciliationResult) -> ReconciliationResult:
    if request.imported:
        return ReconciliationResult(status=Status.SUCCESS, mined_transaction=result.mined_transaction)
    return result


def to_view(
    request: ContractDeploymentRequest,
    result: ReconciliationResult
) -> WithTransactionData[ContractDeploymentRequest]:
    return with_transaction_data(
        request,
        result,
        tx_hash=request.tx_hash,
        from_address=request.deployer_address,
        to_address=ZERO_ADDRESS,
        data=request.contract_data,
        value=request.initial_eth_amount
    )
