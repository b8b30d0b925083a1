"""
Solidity ABI encoding of function calls and constructor arguments.
"""
import logging
from typing import Any, List, Protocol, Sequence

from eth_abi import encode as abi_encode
from web3 import Web3

from .records.types import FunctionArgument

logger = logging.getLogger(__name__)


class FunctionEncoder(Protocol):
    """Protocol for function call encoders"""

    def encode(self, function_name: str, arguments: Sequence[FunctionArgument]) -> str:
        """Encode a call as 0x-prefixed call data"""
        ...

    def encode_constructor(self, arguments: Sequence[FunctionArgument]) -> str:
        """Encode constructor arguments as 0x-prefixed hex"""
        ...


def _coerce(abi_type: str, value: Any) -> Any:
    # Stored arguments come from JSON: byte strings as hex, big numbers as strings
    if abi_type.endswith("]") and isinstance(value, (list, tuple)):
        element_type = abi_type[:abi_type.rindex("[")]
        return [_coerce(element_type, v) for v in value]
    if abi_type.startswith("bytes") and isinstance(value, str):
        return bytes.fromhex(value[2:] if value[:2].lower() == "0x" else value)
    if abi_type.startswith(("uint", "int")) and isinstance(value, str):
        return int(value, 0)
    return value


class AbiFunctionEncoder:
    """
    Encodes calls the way the EVM expects them: a 4-byte selector of the
    canonical signature followed by the ABI-encoded arguments.
    """

    @staticmethod
    def function_signature(function_name: str, arguments: Sequence[FunctionArgument]) -> str:
        types = ",".join(arg.abi_type for arg in arguments)
        return f"{function_name}({types})"

    def encode(self, function_name: str, arguments: Sequence[FunctionArgument]) -> str:
        """
        Encode a function call.

        Args:
            function_name: Solidity function name
            arguments: Ordered, typed arguments

        Returns:
            0x-prefixed lowercase call data
        """
        signature = self.function_signature(function_name, arguments)
        selector = Web3.keccak(text=signature)[:4]
        encoded_args = self._encode_arguments(arguments)
        logger.debug(f"Encoded function call {signature}")
        return "0x" + bytes(selector).hex() + encoded_args.hex()

    def encode_constructor(self, arguments: Sequence[FunctionArgument]) -> str:
        """Encode constructor arguments, to be appended to contract bytecode."""
        return "0x" + self._encode_arguments(arguments).hex()

    @staticmethod
    def _encode_arguments(arguments: Sequence[FunctionArgument]) -> bytes:
        if not arguments:
            return b""
        types: List[str] = [arg.abi_type for arg in arguments]
        values = [_coerce(arg.abi_type, arg.value) for arg in arguments]
        return abi_encode(types, values)
