"""
Tests for the asset balance request service.
"""
import logging

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from intentstatus.exceptions import CannotAttachSignedMessageError, ResourceNotFoundError
from intentstatus.models import Status
from intentstatus.records.repository import InMemoryAssetBalanceRequestRepository
from intentstatus.records.types import CreateAssetBalanceRequestParams
from intentstatus.services.balance import AssetBalanceRequestService

from tests.test_helpers import CHAIN_ID, OTHER_ADDRESS, PROJECT_ID, TEST_PRIV_KEY, TOKEN_ADDRESS, make_balance_request

ACCOUNT = Account.from_key(TEST_PRIV_KEY)


def _sign(message: str) -> str:
    return "0x" + bytes(ACCOUNT.sign_message(encode_defunct(text=message)).signature).hex()


@pytest.fixture
def repository():
    return InMemoryAssetBalanceRequestRepository()


@pytest.fixture
def service(repository, project_repository, gateway, ids, clock):
    return AssetBalanceRequestService(repository, project_repository, gateway, id_provider=ids, clock=clock)


def test_create_builds_verification_message(service, project):
    request = service.create_asset_balance_request(
        CreateAssetBalanceRequestParams(redirect_url="https://app.example.com/${id}"), project
    )

    assert request.id == "request-1"
    assert request.message_to_sign == "Verification message ID to sign: request-1"
    assert request.redirect_url == "https://app.example.com/request-1"
    assert request.signed_message is None


def test_without_signer_is_pending_and_reads_no_balance(service, repository, gateway):
    repository.store(make_balance_request())

    view = service.get_asset_balance_request("balance-1")

    assert view.status == Status.PENDING
    assert view.balance is None
    assert gateway.calls == []


def test_native_balance_is_read_for_signed_request(service, repository, gateway):
    request = make_balance_request(requested_wallet_address=ACCOUNT.address.lower())
    repository.store(request)
    service.attach_wallet_address_and_signed_message("balance-1", ACCOUNT.address, _sign(request.message_to_sign))
    gateway.set_native_balance(CHAIN_ID, ACCOUNT.address, 1000)

    view = service.get_asset_balance_request("balance-1")

    assert view.status == Status.SUCCESS
    assert view.balance.amount == 1000
    assert view.balance.token_address is None
    assert view.balance.block == "latest"
    assert view.signed_message == _sign(request.message_to_sign)


def test_token_balance_at_requested_block(service, repository, gateway):
    request = make_balance_request(
        token_address=TOKEN_ADDRESS,
        block_number=15,
        actual_wallet_address=ACCOUNT.address,
    )
    repository.store(request)
    gateway.set_token_balance(CHAIN_ID, TOKEN_ADDRESS, ACCOUNT.address, 77, block=15)

    view = service.get_asset_balance_request("balance-1")

    # Signer known, signature not attached yet
    assert view.status == Status.PENDING
    assert view.balance.amount == 77
    assert view.balance.block == 15
    assert gateway.calls[0][0] == "fetch_token_balance"


def test_wrong_wallet_fails_with_balance(service, repository, gateway):
    request = make_balance_request(requested_wallet_address=OTHER_ADDRESS)
    repository.store(request)
    service.attach_wallet_address_and_signed_message("balance-1", ACCOUNT.address, _sign(request.message_to_sign))
    gateway.set_native_balance(CHAIN_ID, ACCOUNT.address, 5)

    view = service.get_asset_balance_request("balance-1")

    assert view.status == Status.FAILED
    assert view.balance.amount == 5


def test_bad_signature_fails(service, repository):
    repository.store(make_balance_request())
    service.attach_wallet_address_and_signed_message("balance-1", ACCOUNT.address, _sign("something else"))

    assert service.get_asset_balance_request("balance-1").status == Status.FAILED


def test_second_attach_fails(service, repository):
    repository.store(make_balance_request())
    service.attach_wallet_address_and_signed_message("balance-1", ACCOUNT.address, "0x1234")

    with pytest.raises(CannotAttachSignedMessageError):
        service.attach_wallet_address_and_signed_message("balance-1", ACCOUNT.address, "0x1234")


def test_signed_message_is_not_logged(service, repository, caplog):
    repository.store(make_balance_request())
    signature = _sign("secret")

    with caplog.at_level(logging.INFO):
        service.attach_wallet_address_and_signed_message("balance-1", ACCOUNT.address, signature)

    assert signature not in caplog.text
    assert "[REDACTED - 132 chars]" in caplog.text


def test_unknown_request_is_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        service.get_asset_balance_request("missing")


def test_list_by_project(service, repository):
    repository.store(make_balance_request())
    repository.store(make_balance_request(id="balance-2"))

    assert [v.id for v in service.get_asset_balance_requests_by_project_id(PROJECT_ID)] == ["balance-1", "balance-2"]
    assert service.get_asset_balance_requests_by_project_id("unknown") == []
