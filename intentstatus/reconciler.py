"""
Status reconciliation.

Turns what a request expects plus what the chain (or a signature) actually
shows into a PENDING / FAILED / SUCCESS result. Results are recomputed on
every call; nothing read from the chain is kept between calls.
"""
import logging
from typing import Callable, Optional, Sequence

from .chain.gateway import ChainQueryGateway
from .models import (
    LATEST, ActualSignature, BlockRef, ChainSpec, Checked, EventDecoder, ExpectedTransaction,
    FieldCheck, MessageChallenge, MinedTransaction, Present, ReconciliationResult
)
from .signature import SignatureVerifier
from .utils import addresses_equal, normalize_data, normalize_hash

logger = logging.getLogger(__name__)

# (wallet address, block) -> balance
BalanceProbe = Callable[[str, BlockRef], int]


def _check_passes(check: FieldCheck, actual: object, equal: Callable[[object, object], bool]) -> bool:
    if isinstance(check, Checked):
        return equal(check.value, actual)
    if isinstance(check, Present):
        return actual is not None
    return True


def find_mismatch(expected: ExpectedTransaction, mined: MinedTransaction) -> Optional[str]:
    """
    Compare a mined transaction against the expected fields.

    Fields are compared in a fixed order and the first mismatch wins:
    hash, destination (``to`` and created contract), ``from``, ``data``, ``value``.

    Args:
        expected: Fields the request expects
        mined: Transaction as read from the chain

    Returns:
        Name of the first mismatching field, or None if every checked field matches
    """
    if expected.tx_hash is None or normalize_hash(expected.tx_hash) != mined.hash:
        return "hash"

    if not addresses_equal(expected.to, mined.to_address):
        return "to"
    if not _check_passes(expected.deployed_contract, mined.deployed_contract_address, addresses_equal):
        return "deployed_contract"

    if not _check_passes(expected.sender, mined.from_address, addresses_equal):
        return "from"
    if not _check_passes(expected.data, mined.data, lambda data, actual: normalize_data(data) == actual):
        return "data"
    if not _check_passes(expected.value, mined.value, lambda value, actual: int(value) == actual):
        return "value"

    return None


class TransactionReconciler:
    """
    Reconciles requests that are fulfilled by a single on-chain transaction.
    """

    def __init__(self, gateway: ChainQueryGateway):
        self.gateway = gateway

    def reconcile(
        self,
        chain_spec: ChainSpec,
        expected: ExpectedTransaction,
        event_decoders: Sequence[EventDecoder] = ()
    ) -> ReconciliationResult:
        """
        Compute the current status of an expected transaction.

        Args:
            chain_spec: Network to read from
            expected: Fields the request expects
            event_decoders: Decoders applied to the receipt logs

        Returns:
            PENDING if no hash is attached or the transaction is not mined yet,
            FAILED (with the mined transaction) on any field mismatch or reverted
            execution, SUCCESS (with the mined transaction) otherwise
        """
        if expected.tx_hash is None:
            return ReconciliationResult.pending()

        mined = self.gateway.fetch_transaction(chain_spec, expected.tx_hash, event_decoders)
        if mined is None:
            logger.debug(f"Transaction {expected.tx_hash} not mined yet on chain {chain_spec.chain_id}")
            return ReconciliationResult.pending()

        mismatch = find_mismatch(expected, mined)
        if mismatch is not None:
            logger.debug(f"Transaction {mined.hash} does not match expected field: {mismatch}")
            return ReconciliationResult.failed(mined)

        if not mined.success:
            logger.debug(f"Transaction {mined.hash} matches but execution failed")
            return ReconciliationResult.failed(mined)

        return ReconciliationResult.success(mined)


class SignatureReconciler:
    """
    Reconciles requests that are fulfilled by a wallet signing a message.
    """

    def __init__(self, verifier: Optional[SignatureVerifier] = None):
        self.verifier = verifier or SignatureVerifier()

    def reconcile(
        self,
        challenge: MessageChallenge,
        actual: ActualSignature,
        balance_probe: Optional[BalanceProbe] = None,
        block_ref: BlockRef = LATEST
    ) -> ReconciliationResult:
        """
        Compute the current status of a signing challenge.

        The balance is read first, whenever the signer is known and a probe is
        given, so that every status carries it.

        Args:
            challenge: Message to sign and the optional expected signer
            actual: Signer address and signature attached so far
            balance_probe: Reads the balance of a wallet at a block
            block_ref: Block to read the balance at

        Returns:
            Reconciliation result with the balance attached when it was read
        """
        signer = actual.actual_signer_address
        balance = None
        if signer is not None and balance_probe is not None:
            balance = balance_probe(signer, block_ref)

        if signer is None or actual.signed_message is None:
            return ReconciliationResult.pending(balance)

        if not _check_passes(challenge.expected_signer, signer, addresses_equal):
            logger.debug(f"Signer {signer} is not the expected signer")
            return ReconciliationResult.failed(balance=balance)

        if not self.verifier.matches(challenge.expected_message, actual.signed_message, signer):
            logger.debug(f"Signature by {signer} does not match the expected message")
            return ReconciliationResult.failed(balance=balance)

        return ReconciliationResult.success(balance=balance)
