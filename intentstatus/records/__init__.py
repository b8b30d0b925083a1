"""
Stored request records and the repositories that hold them.
"""
from .repository import (
    AssetBalanceRequestRepository, ContractDeploymentRequestRepository, ContractFunctionCallRequestRepository,
    Erc20LockRequestRepository, InMemoryAssetBalanceRequestRepository, InMemoryContractDeploymentRequestRepository,
    InMemoryContractFunctionCallRequestRepository, InMemoryErc20LockRequestRepository, InMemoryProjectRepository,
    InMemoryWalletLoginRequestRepository, ProjectRepository, WalletLoginRequestRepository
)
from .types import (
    AssetBalanceRequest, ContractDeploymentRequest, ContractFunctionCallRequest, CreateAssetBalanceRequestParams,
    CreateContractDeploymentRequestParams, CreateContractFunctionCallRequestParams, CreateErc20LockRequestParams,
    Erc20LockRequest, FunctionArgument, ImportContractParams, Project, WalletLoginRequest
)

__all__ = [
    'AssetBalanceRequest', 'AssetBalanceRequestRepository', 'ContractDeploymentRequest',
    'ContractDeploymentRequestRepository', 'ContractFunctionCallRequest', 'ContractFunctionCallRequestRepository',
    'CreateAssetBalanceRequestParams', 'CreateContractDeploymentRequestParams',
    'CreateContractFunctionCallRequestParams', 'CreateErc20LockRequestParams', 'Erc20LockRequest',
    'Erc20LockRequestRepository', 'FunctionArgument', 'ImportContractParams',
    'InMemoryAssetBalanceRequestRepository', 'InMemoryContractDeploymentRequestRepository',
    'InMemoryContractFunctionCallRequestRepository', 'InMemoryErc20LockRequestRepository',
    'InMemoryProjectRepository', 'InMemoryWalletLoginRequestRepository', 'Project', 'ProjectRepository',
    'WalletLoginRequest', 'WalletLoginRequestRepository',
]
