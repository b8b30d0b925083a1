"""
Caller-facing services, one per request type.
"""
from .balance import AssetBalanceRequestService
from .deployment import ContractDeploymentRequestService
from .function_call import ContractFunctionCallRequestService
from .lock import Erc20LockRequestService
from .wallet_login import WalletLoginRequestService

__all__ = [
    'AssetBalanceRequestService', 'ContractDeploymentRequestService', 'ContractFunctionCallRequestService',
    'Erc20LockRequestService', 'WalletLoginRequestService',
]
