"""
Stored request records and creation parameters.

Records are immutable snapshots of a stored row. Repositories return a new
record after every write; the only fields written after creation are the
attached transaction hash / signature and the cached contract address.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..models import EventDecoder


@dataclass(frozen=True)
class FunctionArgument:
    """One typed argument of a contract function or constructor call."""
    abi_type: str
    value: Any


@dataclass(frozen=True)
class Project:
    """
    Owner of requests.

    Attributes:
        id: Project id
        chain_id: Chain every request of the project targets
        base_redirect_url: Prefix of generated redirect URLs
        custom_rpc_url: RPC endpoint overriding the network default
    """
    id: str
    chain_id: int
    base_redirect_url: str = ""
    custom_rpc_url: Optional[str] = None

    def create_redirect_url(self, redirect_url: Optional[str], request_id: str, path: str) -> str:
        """Explicit redirect URL or ``base_redirect_url + path``, with ``${id}`` filled in."""
        return (redirect_url or self.base_redirect_url + path).replace("${id}", request_id)


@dataclass(frozen=True)
class AssetBalanceRequest:
    id: str
    project_id: str
    chain_id: int
    redirect_url: str
    token_address: Optional[str]
    block_number: Optional[int]
    requested_wallet_address: Optional[str]
    actual_wallet_address: Optional[str]
    signed_message: Optional[str]
    arbitrary_data: Optional[Dict[str, Any]]
    created_at: datetime

    @property
    def message_to_sign(self) -> str:
        return f"Verification message ID to sign: {self.id}"


@dataclass(frozen=True)
class Erc20LockRequest:
    id: str
    project_id: str
    chain_id: int
    redirect_url: str
    token_address: str
    token_amount: int
    lock_duration_seconds: int
    lock_contract_address: str
    token_sender_address: Optional[str]
    tx_hash: Optional[str]
    arbitrary_data: Optional[Dict[str, Any]]
    created_at: datetime


@dataclass(frozen=True)
class ContractFunctionCallRequest:
    id: str
    project_id: str
    chain_id: int
    redirect_url: str
    deployed_contract_id: Optional[str]
    contract_address: str
    function_name: str
    function_params: Tuple[FunctionArgument, ...]
    eth_amount: int
    caller_address: Optional[str]
    tx_hash: Optional[str]
    arbitrary_data: Optional[Dict[str, Any]]
    created_at: datetime
    events: Tuple[EventDecoder, ...] = ()


@dataclass(frozen=True)
class ContractDeploymentRequest:
    """
    Contract deployment request.

    ``contract_data`` is the deployment bytecode with the encoded constructor
    appended. ``imported`` deployments were registered for an existing
    contract and have no deployment transaction of their own.
    """
    id: str
    project_id: str
    chain_id: int
    redirect_url: str
    alias: str
    contract_id: str
    contract_data: str
    constructor_params: Tuple[FunctionArgument, ...]
    initial_eth_amount: int
    contract_address: Optional[str]
    deployer_address: Optional[str]
    tx_hash: Optional[str]
    arbitrary_data: Optional[Dict[str, Any]]
    created_at: datetime
    imported: bool = False
    name: Optional[str] = None
    description: Optional[str] = None
    events: Tuple[EventDecoder, ...] = ()


@dataclass(frozen=True)
class WalletLoginRequest:
    id: str
    wallet_address: str
    message_to_sign: str
    signed_message: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CreateAssetBalanceRequestParams:
    redirect_url: Optional[str] = None
    token_address: Optional[str] = None
    block_number: Optional[int] = None
    requested_wallet_address: Optional[str] = None
    arbitrary_data: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CreateErc20LockRequestParams:
    token_address: str
    token_amount: int
    lock_duration_seconds: int
    lock_contract_address: str
    token_sender_address: Optional[str] = None
    redirect_url: Optional[str] = None
    arbitrary_data: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CreateContractFunctionCallRequestParams:
    """
    The target contract is given by address, or by the id or alias of a
    deployment in the same project.
    """
    function_name: str
    function_params: Tuple[FunctionArgument, ...] = ()
    contract_address: Optional[str] = None
    deployed_contract_id: Optional[str] = None
    deployed_contract_alias: Optional[str] = None
    eth_amount: int = 0
    caller_address: Optional[str] = None
    redirect_url: Optional[str] = None
    arbitrary_data: Optional[Dict[str, Any]] = None
    events: Tuple[EventDecoder, ...] = ()


@dataclass(frozen=True)
class CreateContractDeploymentRequestParams:
    """``bytecode`` is the contract creation code without constructor arguments."""
    alias: str
    contract_id: str
    bytecode: str
    constructor_params: Tuple[FunctionArgument, ...] = ()
    initial_eth_amount: int = 0
    deployer_address: Optional[str] = None
    redirect_url: Optional[str] = None
    arbitrary_data: Optional[Dict[str, Any]] = None
    name: Optional[str] = None
    description: Optional[str] = None
    events: Tuple[EventDecoder, ...] = ()


@dataclass(frozen=True)
class ImportContractParams:
    """Registers an already deployed contract; no transaction is expected."""
    alias: str
    contract_id: str
    contract_address: str
    redirect_url: Optional[str] = None
    arbitrary_data: Optional[Dict[str, Any]] = None
    name: Optional[str] = None
    description: Optional[str] = None
    events: Tuple[EventDecoder, ...] = ()
