"""
Asset balance policy.

A balance request is answered by a wallet signing the request's verification
message; the wallet's native or ERC-20 balance is shown alongside.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..chain.gateway import ChainQueryGateway
from ..models import (
    LATEST, ActualSignature, BlockRef, ChainSpec, MessageChallenge, ReconciliationResult, Status, checked_if_set
)
from ..reconciler import BalanceProbe
from ..records.types import AssetBalanceRequest


@dataclass(frozen=True)
class AssetBalance:
    """Balance of a wallet at a block. ``token_address`` is None for the native asset."""
    wallet: str
    block: BlockRef
    token_address: Optional[str]
    amount: int


@dataclass(frozen=True)
class FullAssetBalanceRequest:
    id: str
    project_id: str
    status: Status
    chain_id: int
    redirect_url: str
    token_address: Optional[str]
    block_number: Optional[int]
    requested_wallet_address: Optional[str]
    arbitrary_data: Optional[Dict[str, Any]]
    balance: Optional[AssetBalance]
    message_to_sign: str
    signed_message: Optional[str]
    created_at: datetime


def challenge(request: AssetBalanceRequest) -> MessageChallenge:
    return MessageChallenge(
        expected_message=request.message_to_sign,
        expected_signer=checked_if_set(request.requested_wallet_address)
    )


def actual_signature(request: AssetBalanceRequest) -> ActualSignature:
    return ActualSignature(
        actual_signer_address=request.actual_wallet_address,
        signed_message=request.signed_message
    )


def block_ref(request: AssetBalanceRequest) -> BlockRef:
    return request.block_number if request.block_number is not None else LATEST


def balance_probe(gateway: ChainQueryGateway, chain_spec: ChainSpec, request: AssetBalanceRequest) -> BalanceProbe:
    """Probe reading the request's token balance, or the native balance when no token is set."""
    if request.token_address is None:
        return lambda wallet, block: gateway.fetch_native_balance(chain_spec, wallet, block)
    return lambda wallet, block: gateway.fetch_token_balance(chain_spec, request.token_address, wallet, block)


def to_view(request: AssetBalanceRequest, result: ReconciliationResult) -> FullAssetBalanceRequest:
    balance = None
    if result.balance is not None and request.actual_wallet_address is not None:
        balance = AssetBalance(
            wallet=request.actual_wallet_address,
            block=block_ref(request),
            token_address=request.token_address,
            amount=result.balance
        )

    return FullAssetBalanceRequest(
        id=request.id,
        project_id=request.project_id,
        status=result.status,
        chain_id=request.chain_id,
        redirect_url=request.redirect_url,
        token_address=request.token_address,
        block_number=request.block_number,
        requested_wallet_address=request.requested_wallet_address,
        arbitrary_data=request.arbitrary_data,
        balance=balance,
        message_to_sign=request.message_to_sign,
        signed_message=request.signed_message,
        created_at=request.created_at
    )
