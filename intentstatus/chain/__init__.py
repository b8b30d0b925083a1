"""
Chain access for the intentstatus SDK.

``ChainQueryGateway`` is the only view of the chain the reconcilers have;
``Web3ChainGateway`` talks to JSON-RPC endpoints and ``StubChainGateway``
serves registered data from memory.
"""
from .gateway import ChainQueryGateway
from .stub_gateway import StubChainGateway
from .web3_gateway import Web3ChainGateway

__all__ = ['ChainQueryGateway', 'StubChainGateway', 'Web3ChainGateway']
