"""
intentstatus - live status reconciliation for blockchain-backed requests.
"""
from .version import __version__
from .models import (
    LATEST, ActualSignature, ChainSpec, Checked, DecodedEvent, EventDecoder, EventInput, ExpectedTransaction,
    MessageChallenge, MinedTransaction, PRESENT, Present, ReconciliationResult, Status, UNCHECKED, Unchecked,
    checked_if_set
)
from .exceptions import (
    AttachFailedError, CannotAttachSignedMessageError, CannotAttachTxInfoError, ContractNotYetDeployedError,
    ErrorCode, IntentStatusError, JwtTokenError, LoginExpiredError, LoginVerificationFailedError,
    ResourceNotFoundError, UnsupportedChainIdError, WalletLoginFailedError
)
from .signature import SignatureVerifier
from .reconciler import SignatureReconciler, TransactionReconciler
from .encoding import AbiFunctionEncoder, FunctionEncoder
from .chain import ChainQueryGateway, StubChainGateway, Web3ChainGateway
from .config import NetworkConfig, Settings
from .services import (
    AssetBalanceRequestService, ContractDeploymentRequestService, ContractFunctionCallRequestService,
    Erc20LockRequestService, WalletLoginRequestService
)

__all__ = [
    '__version__',
    'LATEST', 'ActualSignature', 'ChainSpec', 'Checked', 'DecodedEvent', 'EventDecoder', 'EventInput',
    'ExpectedTransaction', 'MessageChallenge', 'MinedTransaction', 'ReconciliationResult', 'Status',
    'PRESENT', 'Present', 'UNCHECKED', 'Unchecked', 'checked_if_set',
    'AttachFailedError', 'CannotAttachSignedMessageError', 'CannotAttachTxInfoError', 'ContractNotYetDeployedError',
    'ErrorCode', 'IntentStatusError', 'JwtTokenError', 'LoginExpiredError', 'LoginVerificationFailedError',
    'ResourceNotFoundError', 'UnsupportedChainIdError', 'WalletLoginFailedError',
    'SignatureVerifier', 'SignatureReconciler', 'TransactionReconciler',
    'AbiFunctionEncoder', 'FunctionEncoder',
    'ChainQueryGateway', 'StubChainGateway', 'Web3ChainGateway',
    'NetworkConfig', 'Settings',
    'AssetBalanceRequestService', 'ContractDeploymentRequestService', 'ContractFunctionCallRequestService',
    'Erc20LockRequestService', 'WalletLoginRequestService',
]
