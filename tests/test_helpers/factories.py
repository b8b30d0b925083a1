"""
Factories for records and chain data with consistent test defaults.
"""
from datetime import datetime, timedelta, timezone

from intentstatus.models import MinedTransaction
from intentstatus.records.types import (
    AssetBalanceRequest, ContractDeploymentRequest, ContractFunctionCallRequest, Erc20LockRequest,
    FunctionArgument, Project, WalletLoginRequest
)
from intentstatus.utils import ZERO_ADDRESS

# Test constants used throughout tests
CHAIN_ID = 31337
PROJECT_ID = "project-1"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TX_HASH = "0x" + "ab" * 32
CALLER_ADDRESS = "0x1234567890123456789012345678901234567890"
OTHER_ADDRESS = "0x000000000000000000000000000000000000dead"
CONTRACT_ADDRESS = "0x2345678901234567890123456789012345678901"
LOCK_CONTRACT_ADDRESS = "0x3456789012345678901234567890123456789012"
TOKEN_ADDRESS = "0x4567890123456789012345678901234567890123"
DEPLOYED_CONTRACT_ADDRESS = "0x5678901234567890123456789012345678901234"
CREATED_AT = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock that returns a settable time."""

    def __init__(self, now: datetime = CREATED_AT):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class SequentialIds:
    """Id provider returning request-1, request-2, ..."""

    def __init__(self, prefix: str = "request"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


def make_project(**overrides) -> Project:
    values = dict(id=PROJECT_ID, chain_id=CHAIN_ID, base_redirect_url="https://example.com")
    values.update(overrides)
    return Project(**values)


def make_mined_transaction(**overrides) -> MinedTransaction:
    values = dict(
        hash=TX_HASH,
        from_address=CALLER_ADDRESS,
        to_address=CONTRACT_ADDRESS,
        deployed_contract_address=None,
        data="0x",
        value=0,
        block_confirmations=12,
        timestamp=CREATED_AT + timedelta(minutes=1),
        success=True,
    )
    values.update(overrides)
    return MinedTransaction(**values)


def make_balance_request(**overrides) -> AssetBalanceRequest:
    values = dict(
        id="balance-1",
        project_id=PROJECT_ID,
        chain_id=CHAIN_ID,
        redirect_url="https://example.com/request-balance/balance-1/action",
        token_address=None,
        block_number=None,
        requested_wallet_address=None,
        actual_wallet_address=None,
        signed_message=None,
        arbitrary_data=None,
        created_at=CREATED_AT,
    )
    values.update(overrides)
    return AssetBalanceRequest(**values)


def make_lock_request(**overrides) -> Erc20LockRequest:
    values = dict(
        id="lock-1",
        project_id=PROJECT_ID,
        chain_id=CHAIN_ID,
        redirect_url="https://example.com/request-lock/lock-1/action",
        token_address=TOKEN_ADDRESS,
        token_amount=10,
        lock_duration_seconds=3600,
        lock_contract_address=LOCK_CONTRACT_ADDRESS,
        token_sender_address=None,
        tx_hash=None,
        arbitrary_data=None,
        created_at=CREATED_AT,
    )
    values.update(overrides)
    return Erc20LockRequest(**values)


def make_function_call_request(**overrides) -> ContractFunctionCallRequest:
    values = dict(
        id="call-1",
        project_id=PROJECT_ID,
        chain_id=CHAIN_ID,
        redirect_url="https://example.com/request-function-call/call-1/action",
        deployed_contract_id=None,
        contract_address=CONTRACT_ADDRESS,
        function_name="transfer",
        function_params=(FunctionArgument("address", OTHER_ADDRESS), FunctionArgument("uint256", 5)),
        eth_amount=0,
        caller_address=None,
        tx_hash=None,
        arbitrary_data=None,
        created_at=CREATED_AT,
    )
    values.update(overrides)
    return ContractFunctionCallRequest(**values)


def make_deployment_request(**overrides) -> ContractDeploymentRequest:
    values = dict(
        id="deploy-1",
        project_id=PROJECT_ID,
        chain_id=CHAIN_ID,
        redirect_url="https://example.com/request-deploy/deploy-1/action",
        alias="my-contract",
        contract_id="dummy-contract",
        contract_data="0x6080604052",
        constructor_params=(),
        initial_eth_amount=0,
        contract_address=None,
        deployer_address=None,
        tx_hash=None,
        arbitrary_data=None,
        created_at=CREATED_AT,
    )
    values.update(overrides)
    return ContractDeploymentRequest(**values)


def make_login_request(**overrides) -> WalletLoginRequest:
    values = dict(
        id="login-1",
        wallet_address=CALLER_ADDRESS,
        message_to_sign="Sign this message",
        signed_message=None,
        created_at=CREATED_AT,
    )
    values.update(overrides)
    return WalletLoginRequest(**values)


def deployment_mined_transaction(**overrides) -> MinedTransaction:
    values = dict(
        to_address=ZERO_ADDRESS,
        deployed_contract_address=DEPLOYED_CONTRACT_ADDRESS,
        data="0x6080604052",
    )
    values.update(overrides)
    return make_mined_transaction(**values)
