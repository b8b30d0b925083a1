"""
Wallet login service.

A wallet proves ownership by signing a one-time challenge; a valid
signature within the validity window is exchanged for a login token.
"""
import logging
from typing import Optional

from ..config import Settings
from ..exceptions import CannotAttachSignedMessageError, LoginExpiredError, LoginVerificationFailedError
from ..jwt_util import JwtAuthToken, encode_login_token
from ..models import ActualSignature, Checked, MessageChallenge, Status
from ..reconciler import SignatureReconciler
from ..records.repository import WalletLoginRequestRepository
from ..records.types import WalletLoginRequest
from ..signature import SignatureVerifier
from ..utils import redact
from .common import Clock, IdProvider, fetch_resource, random_id, utc_now

logger = logging.getLogger(__name__)


def login_message(wallet_address: str, request_id: str, timestamp: str) -> str:
    return (
        f"Sign this message to confirm that you are the owner of the wallet: {wallet_address}\n"
        f"ID to sign: {request_id}, timestamp: {timestamp}"
    )


class WalletLoginRequestService:

    def __init__(
        self,
        repository: WalletLoginRequestRepository,
        settings: Optional[Settings] = None,
        verifier: Optional[SignatureVerifier] = None,
        id_provider: IdProvider = random_id,
        clock: Clock = utc_now
    ):
        self.repository = repository
        self.settings = settings or Settings.from_env()
        self.reconciler = SignatureReconciler(verifier)
        self.id_provider = id_provider
        self.clock = clock

    def create_wallet_login_request(self, wallet_address: str) -> WalletLoginRequest:
        logger.info(f"Creating wallet login request, wallet_address: {wallet_address}")
        request_id = self.id_provider()
        created_at = self.clock()

        return self.repository.store(WalletLoginRequest(
            id=request_id,
            wallet_address=wallet_address,
            message_to_sign=login_message(wallet_address, request_id, created_at.isoformat()),
            signed_message=None,
            created_at=created_at
        ))

    def attach_signed_message_and_verify_login(self, request_id: str, signed_message: str) -> JwtAuthToken:
        """
        Attach the signed challenge and log the wallet in.

        Args:
            request_id: Wallet login request id
            signed_message: Signature over the challenge message

        Returns:
            Login token for the wallet

        Raises:
            ResourceNotFoundError: If no request exists for the id
            LoginExpiredError: If the challenge is older than the login validity
            CannotAttachSignedMessageError: If a signature was already attached
            LoginVerificationFailedError: If the signature does not match
            JwtTokenError: If no token can be issued
        """
        logger.debug(f"Fetching wallet login request, id: {request_id}")
        request = fetch_resource(
            self.repository.get_by_id(request_id),
            f"Wallet login request not found for ID: {request_id}"
        )

        valid_until = request.created_at + self.settings.wallet_login_validity
        if valid_until < self.clock():
            logger.warning(f"Wallet login request {request_id} has expired")
            raise LoginExpiredError("Wallet login request has expired")

        logger.info(
            f"Attach signed_message to wallet login request, id: {request_id}, "
            f"signed_message: {redact(signed_message)}"
        )
        if not self.repository.set_signed_message(request_id, signed_message):
            raise CannotAttachSignedMessageError(
                f"Unable to attach signed message to wallet login request with ID: {request_id}"
            )

        result = self.reconciler.reconcile(
            MessageChallenge(expected_message=request.message_to_sign, expected_signer=Checked(request.wallet_address)),
            ActualSignature(actual_signer_address=request.wallet_address, signed_message=signed_message)
        )
        if result.status != Status.SUCCESS:
            logger.warning(f"Wallet login signature verification failed for request {request_id}")
            raise LoginVerificationFailedError("Signature does not match expected signature")

        return encode_login_token(
            wallet_address=request.wallet_address,
            secret=self.settings.jwt_secret,
            validity=self.settings.jwt_token_validity,
            algorithm=self.settings.jwt_algorithm
        )
