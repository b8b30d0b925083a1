"""
Tests for the in-memory repositories and their conditional writes.
"""
import threading

from intentstatus.records.repository import (
    InMemoryAssetBalanceRequestRepository, InMemoryContractDeploymentRequestRepository,
    InMemoryContractFunctionCallRequestRepository, InMemoryErc20LockRequestRepository,
    InMemoryWalletLoginRequestRepository
)

from tests.test_helpers import (
    CALLER_ADDRESS, DEPLOYED_CONTRACT_ADDRESS, OTHER_ADDRESS, PROJECT_ID, TX_HASH, make_balance_request,
    make_deployment_request, make_function_call_request, make_lock_request, make_login_request
)


class TestSetTxInfo:

    def test_first_attach_wins(self):
        repository = InMemoryErc20LockRequestRepository()
        repository.store(make_lock_request())

        assert repository.set_tx_info("lock-1", TX_HASH, CALLER_ADDRESS) is True
        assert repository.set_tx_info("lock-1", "0x" + "cd" * 32, OTHER_ADDRESS) is False

        stored = repository.get_by_id("lock-1")
        assert stored.tx_hash == TX_HASH
        assert stored.token_sender_address == CALLER_ADDRESS

    def test_unknown_id_reports_no_change(self):
        assert InMemoryErc20LockRequestRepository().set_tx_info("missing", TX_HASH, CALLER_ADDRESS) is False

    def test_recorded_sender_is_kept(self):
        repository = InMemoryContractFunctionCallRequestRepository()
        repository.store(make_function_call_request(caller_address=CALLER_ADDRESS))

        repository.set_tx_info("call-1", TX_HASH, OTHER_ADDRESS)

        assert repository.get_by_id("call-1").caller_address == CALLER_ADDRESS

    def test_concurrent_attach_succeeds_once(self):
        repository = InMemoryContractDeploymentRequestRepository()
        repository.store(make_deployment_request())
        results = []
        barrier = threading.Barrier(10)

        def attach(i):
            barrier.wait()
            results.append(repository.set_tx_info("deploy-1", "0x%064x" % i, CALLER_ADDRESS))

        threads = [threading.Thread(target=attach, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 1


class TestSetSignedMessage:

    def test_balance_request_signature_attached_once(self):
        repository = InMemoryAssetBalanceRequestRepository()
        repository.store(make_balance_request())

        assert repository.set_signed_message("balance-1", CALLER_ADDRESS, "0xsig") is True
        assert repository.set_signed_message("balance-1", OTHER_ADDRESS, "0xother") is False

        stored = repository.get_by_id("balance-1")
        assert stored.actual_wallet_address == CALLER_ADDRESS
        assert stored.signed_message == "0xsig"

    def test_login_request_signature_attached_once(self):
        repository = InMemoryWalletLoginRequestRepository()
        repository.store(make_login_request())

        assert repository.set_signed_message("login-1", "0xsig") is True
        assert repository.set_signed_message("login-1", "0xsig") is False


class TestDeploymentRepository:

    def test_set_contract_address_is_idempotent(self):
        repository = InMemoryContractDeploymentRequestRepository()
        repository.store(make_deployment_request())

        assert repository.set_contract_address("deploy-1", DEPLOYED_CONTRACT_ADDRESS) is True
        assert repository.set_contract_address("deploy-1", DEPLOYED_CONTRACT_ADDRESS) is True
        assert repository.get_by_id("deploy-1").contract_address == DEPLOYED_CONTRACT_ADDRESS

    def test_lookup_by_alias_is_scoped_to_project(self):
        repository = InMemoryContractDeploymentRequestRepository()
        repository.store(make_deployment_request())
        repository.store(make_deployment_request(id="deploy-2", project_id="project-2"))

        assert repository.get_by_alias_and_project_id("my-contract", PROJECT_ID).id == "deploy-1"
        assert repository.get_by_alias_and_project_id("my-contract", "project-2").id == "deploy-2"
        assert repository.get_by_alias_and_project_id("other", PROJECT_ID) is None

    def test_get_all_by_project_id(self):
        repository = InMemoryContractDeploymentRequestRepository()
        repository.store(make_deployment_request())
        repository.store(make_deployment_request(id="deploy-2", project_id="project-2"))

        assert [r.id for r in repository.get_all_by_project_id(PROJECT_ID)] == ["deploy-1"]
        assert repository.get_all_by_project_id("unknown") == []
