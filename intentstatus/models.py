"""
Data models for the intentstatus SDK.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, Field, field_validator

from .utils import normalize_address, normalize_data, normalize_hash, normalize_optional_address

T = TypeVar('T')

# Block number, or one of the JSON-RPC block tags ("latest", "pending", ...)
BlockRef = Union[int, str]
LATEST: BlockRef = "latest"


class Status(str, Enum):
    """Outcome of a reconciliation."""
    PENDING = "PENDING"
    FAILED = "FAILED"
    SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class ChainSpec:
    """Identifies the network, and optionally a custom endpoint, to query."""
    chain_id: int
    custom_rpc_url: Optional[str] = None


@dataclass(frozen=True)
class Checked(Generic[T]):
    """An expected field that must equal ``value``."""
    value: T


@dataclass(frozen=True)
class Unchecked:
    """An expected field that is intentionally not compared."""

    def __repr__(self) -> str:
        return "UNCHECKED"


UNCHECKED = Unchecked()


@dataclass(frozen=True)
class Present:
    """An expected field that must be set on chain, with any value."""

    def __repr__(self) -> str:
        return "PRESENT"


PRESENT = Present()

FieldCheck = Union[Checked, Unchecked, Present]


def checked_if_set(value: Optional[T]) -> FieldCheck:
    """
    ``Checked(value)`` when a value is recorded, ``UNCHECKED`` otherwise.

    Used where a missing value means "unconstrained", e.g. a caller address
    that the request did not record.
    """
    return UNCHECKED if value is None else Checked(value)


@dataclass(frozen=True)
class ExpectedTransaction:
    """
    Transaction fields a policy expects to find on chain.

    Attributes:
        tx_hash: Attached transaction hash, None if not submitted yet
        to: Destination address (zero address for contract creation)
        sender: Expected ``from`` address
        data: Expected call data
        value: Expected native amount in wei
        deployed_contract: Expected contract address created by the
            transaction; ``Checked(None)`` requires that none was created,
            ``PRESENT`` that some contract was created
    """
    tx_hash: Optional[str]
    to: str
    sender: FieldCheck = UNCHECKED
    data: FieldCheck = UNCHECKED
    value: FieldCheck = UNCHECKED
    deployed_contract: FieldCheck = Checked(None)


@dataclass(frozen=True)
class EventInput:
    """One input of a Solidity event."""
    name: str
    abi_type: str
    indexed: bool = False


@dataclass(frozen=True)
class EventDecoder:
    """
    Describes how to decode one event from receipt logs.

    Attributes:
        signature: Canonical event signature, e.g. ``Transfer(address,address,uint256)``
        inputs: Event inputs in declaration order
    """
    signature: str
    inputs: Tuple[EventInput, ...] = ()

    @property
    def indexed_inputs(self) -> List[EventInput]:
        return [i for i in self.inputs if i.indexed]

    @property
    def regular_inputs(self) -> List[EventInput]:
        return [i for i in self.inputs if not i.indexed]


class DecodedEvent(BaseModel):
    """Event decoded from a transaction receipt log"""
    signature: str
    contract_address: str
    log_index: int
    arguments: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("contract_address", mode="before")
    @classmethod
    def _normalize_address(cls, value):
        return normalize_address(value)


class MinedTransaction(BaseModel):
    """Transaction as seen on chain once it has been mined"""
    hash: str
    from_address: str = Field(..., alias="from")
    to_address: str = Field(..., alias="to")
    deployed_contract_address: Optional[str] = Field(None, alias="contractAddress")
    data: str
    value: int
    block_confirmations: int
    timestamp: datetime
    success: bool
    events: List[DecodedEvent] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("hash", mode="before")
    @classmethod
    def _normalize_hash(cls, value):
        return normalize_hash(value)

    @field_validator("from_address", "to_address", mode="before")
    @classmethod
    def _normalize_address(cls, value):
        return normalize_address(value)

    @field_validator("deployed_contract_address", mode="before")
    @classmethod
    def _normalize_optional_address(cls, value):
        return normalize_optional_address(value)

    @field_validator("data", mode="before")
    @classmethod
    def _normalize_data(cls, value):
        return normalize_data(value)


@dataclass(frozen=True)
class MessageChallenge:
    """
    Message a wallet is asked to sign.

    ``expected_signer`` is ``UNCHECKED`` when any wallet may answer the
    challenge, as long as its signature verifies.
    """
    expected_message: str
    expected_signer: FieldCheck = UNCHECKED


@dataclass
class ActualSignature:
    """Signer address and signature attached to a request after creation."""
    actual_signer_address: Optional[str] = None
    signed_message: Optional[str] = None


@dataclass(frozen=True)
class ReconciliationResult:
    """
    Live status of a request. Never persisted, recomputed on every read.
    """
    status: Status
    mined_transaction: Optional[MinedTransaction] = None
    balance: Optional[int] = None

    @classmethod
    def pending(cls, balance: Optional[int] = None) -> "ReconciliationResult":
        return cls(status=Status.PENDING, balance=balance)

    @classmethod
    def failed(
        cls,
        mined_transaction: Optional[MinedTransaction] = None,
        balance: Optional[int] = None
    ) -> "ReconciliationResult":
        return cls(status=Status.FAILED, mined_transaction=mined_transaction, balance=balance)

    @classmethod
    def success(
        cls,
        mined_transaction: Optional[MinedTransaction] = None,
        balance: Optional[int] = None
    ) -> "ReconciliationResult":
        return cls(status=Status.SUCCESS, mined_transaction=mined_transaction, balance=balance)
