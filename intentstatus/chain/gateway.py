"""
Chain query gateway interface.

This module defines the contract the reconcilers use to read chain state,
independent of the client library behind it (web3, a stub, a cache, ...).
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..models import LATEST, BlockRef, ChainSpec, EventDecoder, MinedTransaction


class ChainQueryGateway(ABC):
    """
    Abstract base class for chain query gateways.

    Implementations read current chain state on every call; nothing read
    here is cached across calls. Deadlines on the underlying RPC calls are
    the implementation's responsibility.
    """

    @abstractmethod
    def fetch_transaction(
        self,
        chain_spec: ChainSpec,
        tx_hash: str,
        event_decoders: Sequence[EventDecoder] = ()
    ) -> Optional[MinedTransaction]:
        """
        Fetch a mined transaction together with its receipt facts.

        Args:
            chain_spec: Network (and optional custom endpoint) to query
            tx_hash: Transaction hash
            event_decoders: Decoders applied to the receipt logs

        Returns:
            The mined transaction, or None if it is unknown or not yet mined
        """
        pass

    @abstractmethod
    def fetch_native_balance(
        self,
        chain_spec: ChainSpec,
        wallet_address: str,
        block: BlockRef = LATEST
    ) -> int:
        """
        Fetch the native asset balance of a wallet.

        Args:
            chain_spec: Network (and optional custom endpoint) to query
            wallet_address: Wallet to query
            block: Block number or tag

        Returns:
            Balance in wei
        """
        pass

    @abstractmethod
    def fetch_token_balance(
        self,
        chain_spec: ChainSpec,
        token_address: str,
        wallet_address: str,
        block: BlockRef = LATEST
    ) -> int:
        """
        Fetch the ERC-20 token balance of a wallet.

        Args:
            chain_spec: Network (and optional custom endpoint) to query
            token_address: ERC-20 contract address
            wallet_address: Wallet to query
            block: Block number or tag

        Returns:
            Balance in the token's smallest unit
        """
        pass
