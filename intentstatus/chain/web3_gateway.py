"""
web3-backed implementation of the chain query gateway.
"""
import logging
import threading
import urllib.parse
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from requests.adapters import HTTPAdapter
from web3 import Web3
from web3.exceptions import TransactionNotFound

from ..config import NetworkConfig, Settings
from ..models import LATEST, BlockRef, ChainSpec, DecodedEvent, EventDecoder, EventInput, MinedTransaction
from ..utils import ZERO_ADDRESS, to_hex
from ._rate_limited_log import rate_limited_log
from .gateway import ChainQueryGateway

logger = logging.getLogger(__name__)

Web3Factory = Callable[[str], Web3]


def _is_dynamic_type(abi_type: str) -> bool:
    # Indexed dynamic values are stored as their keccak hash in the topic
    return (
        abi_type in ("string", "bytes")
        or abi_type.endswith("]")
        or abi_type.startswith("(")
        or abi_type.startswith("tuple")
    )


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class Web3ChainGateway(ChainQueryGateway):
    """
    Reads transactions and balances through web3 HTTP providers.

    One ``Web3`` client is kept per RPC endpoint; clients hold connection
    pools only, never chain data. RPC failures are not retried and
    propagate to the caller as web3 or requests exceptions.
    """

    ERC20_BALANCE_ABI = [
        {
            "constant": True,
            "inputs": [{"name": "owner", "type": "address"}],
            "name": "balanceOf",
            "outputs": [{"name": "balance", "type": "uint256"}],
            "stateMutability": "view",
            "type": "function"
        }
    ]

    def __init__(
        self,
        timeout: Optional[int] = None,
        web3_factory: Optional[Web3Factory] = None,
        pool_size: int = 10
    ):
        """
        Initialize the gateway

        Args:
            timeout: Timeout for a single RPC request in seconds
                (defaults to INTENTSTATUS_RPC_TIMEOUT)
            web3_factory: Callable building a Web3 client for an RPC URL
            pool_size: HTTP connection pool size per endpoint
        """
        self.timeout = timeout or Settings.from_env().rpc_timeout
        self.pool_size = pool_size
        self._web3_factory = web3_factory or self._create_web3
        self._clients: Dict[str, Web3] = {}
        self._clients_lock = threading.RLock()

    def _create_web3(self, rpc_url: str) -> Web3:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=self.pool_size,
            pool_maxsize=self.pool_size,
            max_retries=0
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        provider = Web3.HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": self.timeout},
            session=session,
            exception_retry_configuration=None
        )
        return Web3(provider)

    def resolve_rpc_url(self, chain_spec: ChainSpec) -> str:
        """
        RPC endpoint for a chain spec. A custom URL takes precedence.

        Raises:
            UnsupportedChainIdError: If no custom URL is given and the chain is unknown
        """
        if not chain_spec.custom_rpc_url:
            return NetworkConfig.rpc_url(chain_spec.chain_id)

        parsed = urllib.parse.urlparse(chain_spec.custom_rpc_url)
        is_local = (parsed.hostname or "") in ("localhost", "127.0.0.1", "::1")
        if parsed.scheme != "https" and not is_local:
            rate_limited_log(
                f"Custom RPC URL for chain {chain_spec.chain_id} does not use https: "
                f"{parsed.scheme}://{parsed.hostname}",
                logger_instance=logger
            )
        return chain_spec.custom_rpc_url

    def web3_for(self, chain_spec: ChainSpec) -> Web3:
        """Get or create the Web3 client for a chain spec."""
        rpc_url = self.resolve_rpc_url(chain_spec)
        with self._clients_lock:
            client = self._clients.get(rpc_url)
            if client is None:
                client = self._web3_factory(rpc_url)
                self._clients[rpc_url] = client
                logger.debug(f"Created web3 client for chain {chain_spec.chain_id}")
            return client

    def fetch_transaction(
        self,
        chain_spec: ChainSpec,
        tx_hash: str,
        event_decoders: Sequence[EventDecoder] = ()
    ) -> Optional[MinedTransaction]:
        logger.debug(f"Fetching transaction, chain_spec: {chain_spec}, tx_hash: {tx_hash}")
        w3 = self.web3_for(chain_spec)

        try:
            transaction = w3.eth.get_transaction(tx_hash)
            receipt = w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            logger.debug(f"Transaction not found or not yet mined: {tx_hash}")
            return None

        tx_block_number = transaction.get("blockNumber")
        if tx_block_number is None:
            return None

        current_block_number = w3.eth.block_number
        block = w3.eth.get_block(tx_block_number)

        return MinedTransaction(
            hash=transaction["hash"],
            from_address=transaction["from"],
            to_address=transaction.get("to") or ZERO_ADDRESS,
            deployed_contract_address=receipt.get("contractAddress"),
            data=transaction.get("input") or "0x",
            value=transaction.get("value", 0),
            block_confirmations=current_block_number - tx_block_number,
            timestamp=datetime.fromtimestamp(block["timestamp"], tz=timezone.utc),
            success=receipt.get("status") == 1,
            events=self._decode_events(receipt.get("logs") or [], event_decoders)
        )

    def fetch_native_balance(
        self,
        chain_spec: ChainSpec,
        wallet_address: str,
        block: BlockRef = LATEST
    ) -> int:
        logger.debug(f"Fetching native balance, chain_spec: {chain_spec}, wallet: {wallet_address}, block: {block}")
        w3 = self.web3_for(chain_spec)
        return w3.eth.get_balance(Web3.to_checksum_address(wallet_address), block_identifier=block)

    def fetch_token_balance(
        self,
        chain_spec: ChainSpec,
        token_address: str,
        wallet_address: str,
        block: BlockRef = LATEST
    ) -> int:
        logger.debug(
            f"Fetching ERC-20 balance, chain_spec: {chain_spec}, token: {token_address}, "
            f"wallet: {wallet_address}, block: {block}"
        )
        w3 = self.web3_for(chain_spec)
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=self.ERC20_BALANCE_ABI
        )
        return contract.functions.balanceOf(
            Web3.to_checksum_address(wallet_address)
        ).call(block_identifier=block)

    def _decode_events(
        self,
        logs: Sequence[Dict[str, Any]],
        event_decoders: Sequence[EventDecoder]
    ) -> List[DecodedEvent]:
        if not event_decoders:
            return []

        decoders_by_topic = {
            to_hex(Web3.keccak(text=decoder.signature)): decoder for decoder in event_decoders
        }
        events = []

        for log in logs:
            topics = log.get("topics") or []
            if not topics:
                continue
            decoder = decoders_by_topic.get(to_hex(topics[0]))
            if decoder is None:
                continue

            try:
                arguments = self._decode_arguments(decoder, topics[1:], log.get("data") or "0x")
            except (DecodingError, ValueError) as e:
                rate_limited_log(
                    f"Unable to decode event {decoder.signature}: {e}",
                    logger_instance=logger
                )
                continue

            events.append(DecodedEvent(
                signature=decoder.signature,
                contract_address=log["address"],
                log_index=log.get("logIndex", 0),
                arguments=arguments
            ))

        return events

    @staticmethod
    def _decode_arguments(decoder: EventDecoder, topics: Sequence[Any], data: Any) -> Dict[str, Any]:
        indexed: List[EventInput] = decoder.indexed_inputs
        if len(topics) != len(indexed):
            raise ValueError(f"expected {len(indexed)} indexed topics, got {len(topics)}")

        decoded: Dict[str, Any] = {}

        for event_input, topic in zip(indexed, topics):
            topic_bytes = bytes.fromhex(to_hex(topic)[2:])
            if _is_dynamic_type(event_input.abi_type):
                decoded[event_input.name] = to_hex(topic_bytes)
            else:
                decoded[event_input.name] = _jsonable(abi_decode([event_input.abi_type], topic_bytes)[0])

        regular = decoder.regular_inputs
        if regular:
            data_bytes = bytes.fromhex(to_hex(data)[2:])
            values = abi_decode([i.abi_type for i in regular], data_bytes)
            for event_input, value in zip(regular, values):
                decoded[event_input.name] = _jsonable(value)

        # Keep declaration order
        return {i.name: decoded[i.name] for i in decoder.inputs}
