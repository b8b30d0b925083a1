"""
Persistence contracts and in-memory implementations.

The attach writes are conditional: they only change a record whose attached
field is still unset, and report through their boolean result whether a
record changed. ``False`` covers both "no such id" and "already attached".
"""
import dataclasses
import logging
import threading
from typing import Dict, Generic, List, Optional, Protocol, TypeVar

from .types import (
    AssetBalanceRequest, ContractDeploymentRequest, ContractFunctionCallRequest, Erc20LockRequest,
    Project, WalletLoginRequest
)

logger = logging.getLogger(__name__)

R = TypeVar('R')


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: str) -> Optional[Project]:
        ...

    def store(self, project: Project) -> Project:
        ...


class AssetBalanceRequestRepository(Protocol):
    def get_by_id(self, request_id: str) -> Optional[AssetBalanceRequest]:
        ...

    def get_all_by_project_id(self, project_id: str) -> List[AssetBalanceRequest]:
        ...

    def store(self, request: AssetBalanceRequest) -> AssetBalanceRequest:
        ...

    def set_signed_message(self, request_id: str, wallet_address: str, signed_message: str) -> bool:
        ...


class Erc20LockRequestRepository(Protocol):
    def get_by_id(self, request_id: str) -> Optional[Erc20LockRequest]:
        ...

    def get_all_by_project_id(self, project_id: str) -> List[Erc20LockRequest]:
        ...

    def store(self, request: Erc20LockRequest) -> Erc20LockRequest:
        ...

    def set_tx_info(self, request_id: str, tx_hash: str, caller: str) -> bool:
        ...


class ContractFunctionCallRequestRepository(Protocol):
    def get_by_id(self, request_id: str) -> Optional[ContractFunctionCallRequest]:
        ...

    def get_all_by_project_id(self, project_id: str) -> List[ContractFunctionCallRequest]:
        ...

    def store(self, request: ContractFunctionCallRequest) -> ContractFunctionCallRequest:
        ...

    def set_tx_info(self, request_id: str, tx_hash: str, caller: str) -> bool:
        ...


class ContractDeploymentRequestRepository(Protocol):
    def get_by_id(self, request_id: str) -> Optional[ContractDeploymentRequest]:
        ...

    def get_by_alias_and_project_id(self, alias: str, project_id: str) -> Optional[ContractDeploymentRequest]:
        ...

    def get_all_by_project_id(self, project_id: str) -> List[ContractDeploymentRequest]:
        ...

    def store(self, request: ContractDeploymentRequest) -> ContractDeploymentRequest:
        ...

    def set_tx_info(self, request_id: str, tx_hash: str, deployer: str) -> bool:
        ...

    def set_contract_address(self, request_id: str, contract_address: str) -> bool:
        ...


class WalletLoginRequestRepository(Protocol):
    def get_by_id(self, request_id: str) -> Optional[WalletLoginRequest]:
        ...

    def store(self, request: WalletLoginRequest) -> WalletLoginRequest:
        ...

    def set_signed_message(self, request_id: str, signed_message: str) -> bool:
        ...


class _InMemoryRecords(Generic[R]):
    """Thread-safe dictionary of records keyed by id"""

    def __init__(self):
        self._records: Dict[str, R] = {}
        self._lock = threading.RLock()

    def get_by_id(self, request_id: str) -> Optional[R]:
        with self._lock:
            return self._records.get(request_id)

    def get_all_by_project_id(self, project_id: str) -> List[R]:
        with self._lock:
            return [r for r in self._records.values() if getattr(r, "project_id", None) == project_id]

    def store(self, record: R) -> R:
        with self._lock:
            self._records[record.id] = record
        logger.debug(f"Stored {type(record).__name__} with ID: {record.id}")
        return record

    def _update_if_unset(self, request_id: str, field_name: str, **changes) -> bool:
        """Apply ``changes`` only if ``field_name`` of the record is still None."""
        with self._lock:
            record = self._records.get(request_id)
            if record is None or getattr(record, field_name) is not None:
                return False
            self._records[request_id] = dataclasses.replace(record, **changes)
            return True


class InMemoryProjectRepository(_InMemoryRecords[Project]):
    pass


class InMemoryAssetBalanceRequestRepository(_InMemoryRecords[AssetBalanceRequest]):

    def set_signed_message(self, request_id: str, wallet_address: str, signed_message: str) -> bool:
        return self._update_if_unset(
            request_id,
            "signed_message",
            actual_wallet_address=wallet_address,
            signed_message=signed_message
        )


class InMemoryErc20LockRequestRepository(_InMemoryRecords[Erc20LockRequest]):

    def set_tx_info(self, request_id: str, tx_hash: str, caller: str) -> bool:
        with self._lock:
            record = self._records.get(request_id)
            if record is None:
                return False
            # A sender recorded at creation is kept
            sender = record.token_sender_address or caller
            return self._update_if_unset(request_id, "tx_hash", tx_hash=tx_hash, token_sender_address=sender)


class InMemoryContractFunctionCallRequestRepository(_InMemoryRecords[ContractFunctionCallRequest]):

    def set_tx_info(self, request_id: str, tx_hash: str, caller: str) -> bool:
        with self._lock:
            record = self._records.get(request_id)
            if record is None:
                return False
            return self._update_if_unset(
                request_id, "tx_hash", tx_hash=tx_hash, caller_address=record.caller_address or caller
            )


class InMemoryContractDeploymentRequestRepository(_InMemoryRecords[ContractDeploymentRequest]):

    def get_by_alias_and_project_id(self, alias: str, project_id: str) -> Optional[ContractDeploymentRequest]:
        with self._lock:
            for record in self._records.values():
                if record.alias == alias and record.project_id == project_id:
                    return record
            return None

    def set_tx_info(self, request_id: str, tx_hash: str, deployer: str) -> bool:
        with self._lock:
            record = self._records.get(request_id)
            if record is None:
                return False
            return self._update_if_unset(
                request_id, "tx_hash", tx_hash=tx_hash, deployer_address=record.deployer_address or deployer
            )

    def set_contract_address(self, request_id: str, contract_address: str) -> bool:
        """
        Cache the address a deployment created.

        Returns:
            True if the record exists; setting an address a second time leaves
            the first one in place
        """
        with self._lock:
            record = self._records.get(request_id)
            if record is None:
                return False
            if record.contract_address is None:
                self._records[request_id] = dataclasses.replace(record, contract_address=contract_address)
            return True


class InMemoryWalletLoginRequestRepository(_InMemoryRecords[WalletLoginRequest]):

    def set_signed_message(self, request_id: str, signed_message: str) -> bool:
        return self._update_if_unset(request_id, "signed_message", signed_message=signed_message)
