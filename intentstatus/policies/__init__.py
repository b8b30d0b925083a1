"""
Per-request-type policies.

Each policy turns a stored request into the expected transaction or signing
challenge the reconcilers check, and maps the result into a typed view.
"""
from . import balance, deployment, function_call, lock
from .common import TransactionData, WithFunctionData, WithTransactionAndFunctionData, WithTransactionData

__all__ = [
    'balance', 'deployment', 'function_call', 'lock',
    'TransactionData', 'WithFunctionData', 'WithTransactionAndFunctionData', 'WithTransactionData',
]
