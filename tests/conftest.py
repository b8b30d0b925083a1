"""
Pytest fixtures for the intentstatus tests.
"""
import pytest

from intentstatus.chain._rate_limited_log import reset_rate_limited_log
from intentstatus.chain.stub_gateway import StubChainGateway
from intentstatus.config import NetworkConfig
from intentstatus.records.repository import InMemoryProjectRepository

from tests.test_helpers import FixedClock, SequentialIds, make_project


@pytest.fixture(autouse=True)
def _reset_module_state():
    """Rate-limited log history and the network cache are module level."""
    reset_rate_limited_log()
    NetworkConfig._networks_cache = None
    yield
    reset_rate_limited_log()
    NetworkConfig._networks_cache = None


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("INTENTSTATUS_RPC_TIMEOUT", "INTENTSTATUS_WALLET_LOGIN_VALIDITY",
                 "INTENTSTATUS_JWT_TOKEN_VALIDITY", "INTENTSTATUS_JWT_SECRET", "INTENTSTATUS_JWT_ALGORITHM"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gateway():
    return StubChainGateway()


@pytest.fixture
def project():
    return make_project()


@pytest.fixture
def project_repository(project):
    repository = InMemoryProjectRepository()
    repository.store(project)
    return repository


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def ids():
    return SequentialIds()
