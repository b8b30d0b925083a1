"""
Exceptions for the intentstatus SDK.

Only lookup, attach and expiry failures are raised. A transaction or
signature that does not match what was expected is not an error: it is the
``FAILED`` status of a reconciliation result.
"""
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """
    Machine-readable error codes carried by every ``IntentStatusError``.

    The API layer maps these onto its own response bodies.
    """
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    TX_INFO_ALREADY_SET = "TX_INFO_ALREADY_SET"
    SIGNED_MESSAGE_ALREADY_SET = "SIGNED_MESSAGE_ALREADY_SET"
    CONTRACT_NOT_DEPLOYED = "CONTRACT_NOT_DEPLOYED"
    WALLET_LOGIN_FAILED = "WALLET_LOGIN_FAILED"
    WALLET_LOGIN_EXPIRED = "WALLET_LOGIN_EXPIRED"
    UNSUPPORTED_CHAIN_ID = "UNSUPPORTED_CHAIN_ID"
    BAD_AUTHENTICATION = "BAD_AUTHENTICATION"


class IntentStatusError(Exception):
    """Base exception for all intentstatus errors."""

    error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    http_status: int = 500

    def __init__(self, message: str, error_code: Optional[ErrorCode] = None):
        if error_code is not None:
            self.error_code = error_code
        self.message = message
        super().__init__(message)


class ResourceNotFoundError(IntentStatusError):
    """Raised when no record exists for the requested id."""
    error_code = ErrorCode.RESOURCE_NOT_FOUND
    http_status = 404


class AttachFailedError(IntentStatusError):
    """
    Raised when an attach write reports that no row changed.

    The record may exist with the field already set, or the id may be stale;
    both cases look the same to the conditional write.
    """
    http_status = 400


class CannotAttachTxInfoError(AttachFailedError):
    """Raised when a transaction hash cannot be attached to a request."""
    error_code = ErrorCode.TX_INFO_ALREADY_SET


class CannotAttachSignedMessageError(AttachFailedError):
    """Raised when a signed message cannot be attached to a request."""
    error_code = ErrorCode.SIGNED_MESSAGE_ALREADY_SET


class ContractNotYetDeployedError(IntentStatusError):
    """Raised when a deployment has no confirmed contract address yet. Callers may retry."""
    error_code = ErrorCode.CONTRACT_NOT_DEPLOYED
    http_status = 400

    def __init__(self, deployment_id: str, alias: str):
        self.deployment_id = deployment_id
        self.alias = alias
        super().__init__(
            f"Contract with ID: {deployment_id} and alias: {alias} is not yet deployed"
        )


class WalletLoginFailedError(IntentStatusError):
    """Base class for wallet login failures."""
    error_code = ErrorCode.WALLET_LOGIN_FAILED
    http_status = 401


class LoginExpiredError(WalletLoginFailedError):
    """Raised when the login challenge validity window has elapsed."""
    error_code = ErrorCode.WALLET_LOGIN_EXPIRED


class LoginVerificationFailedError(WalletLoginFailedError):
    """Raised when the login signature does not match the challenge or signer."""
    pass


class UnsupportedChainIdError(IntentStatusError):
    """Raised when no RPC endpoint is known for a chain and none was supplied."""
    error_code = ErrorCode.UNSUPPORTED_CHAIN_ID
    http_status = 400

    def __init__(self, chain_id: int, message: Optional[str] = None):
        self.chain_id = chain_id
        super().__init__(message or f"Blockchain id: {chain_id} not supported")


class JwtTokenError(IntentStatusError):
    """Raised when a login token cannot be issued or validated."""
    error_code = ErrorCode.BAD_AUTHENTICATION
    http_status = 401
