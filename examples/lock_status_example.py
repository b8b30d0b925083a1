#!/usr/bin/env python3
"""
Example: track an ERC-20 lock request against a live chain.
"""
import logging
import os

from intentstatus import Erc20LockRequestService, Web3ChainGateway
from intentstatus.records import (
    CreateErc20LockRequestParams, InMemoryErc20LockRequestRepository, InMemoryProjectRepository, Project
)


def main():
    """
    Create a lock request, attach the transaction a wallet sent for it and
    print its live status.

    Configuration is read from the environment:
    CHAIN_ID, TOKEN_ADDRESS, LOCK_CONTRACT_ADDRESS and, once the wallet has
    sent the transaction, TX_HASH and CALLER_ADDRESS.
    """
    logging.basicConfig(level=logging.INFO)

    chain_id = int(os.environ.get("CHAIN_ID", "11155111"))
    token_address = os.environ.get("TOKEN_ADDRESS")
    lock_contract_address = os.environ.get("LOCK_CONTRACT_ADDRESS")

    if not token_address or not lock_contract_address:
        print("ERROR: TOKEN_ADDRESS and LOCK_CONTRACT_ADDRESS environment variables are required")
        return

    project = Project(id="example-project", chain_id=chain_id, base_redirect_url="https://example.com")
    projects = InMemoryProjectRepository()
    projects.store(project)

    service = Erc20LockRequestService(InMemoryErc20LockRequestRepository(), projects, Web3ChainGateway())

    created = service.create_erc20_lock_request(
        CreateErc20LockRequestParams(
            token_address=token_address,
            token_amount=10**18,
            lock_duration_seconds=86400,
            lock_contract_address=lock_contract_address
        ),
        project
    )
    print(f"Lock request created: {created.value.id}")
    print(f"Send a transaction to {lock_contract_address} with data: {created.function_data}")

    tx_hash = os.environ.get("TX_HASH")
    caller = os.environ.get("CALLER_ADDRESS")
    if tx_hash and caller:
        service.attach_tx_info(created.value.id, tx_hash, caller)

    view = service.get_erc20_lock_request(created.value.id)
    print(f"Status: {view.status.value}")
    if view.mined_transaction is not None:
        print(f"Block confirmations: {view.mined_transaction.block_confirmations}")


if __name__ == "__main__":
    main()
