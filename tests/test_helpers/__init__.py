"""
Shared constants and factories for the intentstatus tests.
"""
from .factories import (
    CALLER_ADDRESS, CHAIN_ID, CONTRACT_ADDRESS, CREATED_AT, DEPLOYED_CONTRACT_ADDRESS, LOCK_CONTRACT_ADDRESS,
    OTHER_ADDRESS, PROJECT_ID, TEST_PRIV_KEY, TOKEN_ADDRESS, TX_HASH, FixedClock, SequentialIds,
    deployment_mined_transaction, make_balance_request, make_deployment_request, make_function_call_request,
    make_lock_request,
    make_login_request, make_mined_transaction, make_project
)

__all__ = [
    'CALLER_ADDRESS', 'CHAIN_ID', 'CONTRACT_ADDRESS', 'CREATED_AT', 'DEPLOYED_CONTRACT_ADDRESS',
    'LOCK_CONTRACT_ADDRESS', 'OTHER_ADDRESS', 'PROJECT_ID', 'TEST_PRIV_KEY', 'TOKEN_ADDRESS', 'TX_HASH',
    'FixedClock', 'SequentialIds', 'deployment_mined_transaction', 'make_balance_request', 'make_deployment_request',
    'make_function_call_request', 'make_lock_request', 'make_login_request', 'make_mined_transaction',
    'make_project',
]
