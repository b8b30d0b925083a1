"""
Signature verification for message-signing flows.
"""
import logging

from eth_account import Account
from eth_account.messages import encode_defunct

from .utils import HexLike, addresses_equal, to_hex

logger = logging.getLogger(__name__)

# 0x + r (32 bytes) + s (32 bytes) + v (1 byte), hex encoded
SIGNATURE_LENGTH = 132
R_START, R_END = 2, 66
S_START, S_END = 66, 130
V_START, V_END = 130, 132

# Ledger and some hardware wallets report the recovery id as 0/1
V_OFFSET = 27


class SignatureVerifier:
    """
    Checks that a message was signed by a given wallet.

    Signatures are personal-sign (EIP-191) signatures as produced by
    wallets such as MetaMask or Ledger. The verifier holds no state and
    performs no I/O.
    """

    def matches(self, message: str, signed_message: HexLike, signer: str) -> bool:
        """
        Check that ``signed_message`` is ``signer``'s signature over ``message``.

        Args:
            message: Plaintext that was presented for signing
            signed_message: 65-byte signature, raw or hex encoded with 0x prefix
            signer: Address expected to have produced the signature

        Returns:
            True if the recovered signer equals ``signer``. Malformed,
            truncated or non-hex signatures never raise, they return False.
        """
        if isinstance(signed_message, (bytes, bytearray)):
            signed_message = to_hex(signed_message)

        vrs = self._split_signature(signed_message)
        if vrs is None:
            return False

        try:
            recovered = Account.recover_message(encode_defunct(text=message), vrs=vrs)
        except Exception as e:
            # eth_keys rejects out-of-range r/s/v with several exception types
            logger.debug(f"Signature recovery failed: {e}")
            return False

        return addresses_equal(recovered, signer)

    @staticmethod
    def _split_signature(signature: str):
        if not isinstance(signature, str) or len(signature) != SIGNATURE_LENGTH or signature[:2] != "0x":
            return None

        try:
            r = int(signature[R_START:R_END], 16)
            s = int(signature[S_START:S_END], 16)
            v = int(signature[V_START:V_END], 16)
        except ValueError:
            return None

        if v in (0, 1):
            v += V_OFFSET

        return v, r, s
