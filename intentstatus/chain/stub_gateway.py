"""
In-memory implementation of the chain query gateway.

Useful for development and tests: transactions and balances are registered
up front and served back exactly as given. Nothing touches a network.
"""
import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from ..models import LATEST, BlockRef, ChainSpec, EventDecoder, MinedTransaction
from ..utils import normalize_address, normalize_hash
from .gateway import ChainQueryGateway

logger = logging.getLogger(__name__)


class StubChainGateway(ChainQueryGateway):
    """
    A simple in-memory gateway.

    Every call is recorded in ``calls`` as ``(method, chain_spec, args)`` so
    tests can assert how many chain round trips a reconciliation made.
    """

    def __init__(self):
        self._transactions: Dict[Tuple[int, str], MinedTransaction] = {}
        self._native_balances: Dict[Tuple[int, str, BlockRef], int] = {}
        self._token_balances: Dict[Tuple[int, str, str, BlockRef], int] = {}
        self._lock = threading.Lock()
        self.calls: List[Tuple[str, ChainSpec, tuple]] = []

    def add_transaction(self, chain_id: int, transaction: MinedTransaction) -> None:
        """
        Register a mined transaction.

        Args:
            chain_id: Chain the transaction was mined on
            transaction: Transaction to serve for its hash
        """
        with self._lock:
            self._transactions[(chain_id, transaction.hash)] = transaction
        logger.debug(f"Stub gateway registered transaction {transaction.hash} on chain {chain_id}")

    def set_native_balance(self, chain_id: int, wallet_address: str, amount: int, block: BlockRef = LATEST) -> None:
        with self._lock:
            self._native_balances[(chain_id, normalize_address(wallet_address), block)] = amount

    def set_token_balance(
        self,
        chain_id: int,
        token_address: str,
        wallet_address: str,
        amount: int,
        block: BlockRef = LATEST
    ) -> None:
        with self._lock:
            key = (chain_id, normalize_address(token_address), normalize_address(wallet_address), block)
            self._token_balances[key] = amount

    def fetch_transaction(
        self,
        chain_spec: ChainSpec,
        tx_hash: str,
        event_decoders: Sequence[EventDecoder] = ()
    ) -> Optional[MinedTransaction]:
        with self._lock:
            self.calls.append(("fetch_transaction", chain_spec, (tx_hash, tuple(event_decoders))))
            return self._transactions.get((chain_spec.chain_id, normalize_hash(tx_hash)))

    def fetch_native_balance(
        self,
        chain_spec: ChainSpec,
        wallet_address: str,
        block: BlockRef = LATEST
    ) -> int:
        with self._lock:
            self.calls.append(("fetch_native_balance", chain_spec, (wallet_address, block)))
            return self._native_balances.get((chain_spec.chain_id, normalize_address(wallet_address), block), 0)

    def fetch_token_balance(
        self,
        chain_spec: ChainSpec,
        token_address: str,
        wallet_address: str,
        block: BlockRef = LATEST
    ) -> int:
        with self._lock:
            self.calls.append(("fetch_token_balance", chain_spec, (token_address, wallet_address, block)))
            key = (chain_spec.chain_id, normalize_address(token_address), normalize_address(wallet_address), block)
            return self._token_balances.get(key, 0)
