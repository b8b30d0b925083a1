"""
Configuration for the intentstatus SDK.

Network endpoints come from the bundled ``networks.json``; everything else
is read from ``INTENTSTATUS_*`` environment variables.
"""
import importlib.resources
import json
import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from .exceptions import UnsupportedChainIdError

logger = logging.getLogger(__name__)

ENV_PREFIX = "INTENTSTATUS_"


class NetworkConfig:
    """Lookup of known networks by chain id."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions, keyed by chain id as a string.

        Returns:
            Dictionary of network definitions
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("intentstatus").joinpath("networks.json")
            with resource.open("r", encoding="utf-8") as f:
                cls._networks_cache = json.load(f)
            logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, chain_id: int) -> Dict[str, Any]:
        """
        Get the definition of one network.

        Args:
            chain_id: Chain id

        Returns:
            Network definition with at least ``name`` and ``rpc``

        Raises:
            UnsupportedChainIdError: If the chain is unknown
        """
        networks = cls.load_networks()
        network = networks.get(str(chain_id))
        if network is None:
            available = ", ".join(sorted(networks.keys(), key=int))
            raise UnsupportedChainIdError(
                chain_id,
                f"Blockchain id: {chain_id} not supported. Available chain ids: {available}"
            )
        return network

    @classmethod
    def rpc_url(cls, chain_id: int) -> str:
        """
        RPC endpoint for a chain, honouring ``INTENTSTATUS_RPC_URL_<chainId>``.

        Raises:
            UnsupportedChainIdError: If the chain is unknown and not overridden
        """
        override = os.environ.get(f"{ENV_PREFIX}RPC_URL_{chain_id}")
        if override:
            return override
        return cls.get_network(chain_id)["rpc"]


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid {ENV_PREFIX}{name} value: {raw!r}, using default {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings.

    Attributes:
        rpc_timeout: Timeout for a single RPC request in seconds
        wallet_login_validity: How long a wallet login challenge may be answered
        jwt_token_validity: Lifetime of issued login tokens
        jwt_secret: Key used to sign login tokens
        jwt_algorithm: Signing algorithm for login tokens
    """
    rpc_timeout: int = 30
    wallet_login_validity: timedelta = timedelta(minutes=10)
    jwt_token_validity: timedelta = timedelta(hours=1)
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``INTENTSTATUS_*`` environment variables."""
        return cls(
            rpc_timeout=_env_int("RPC_TIMEOUT", 30),
            wallet_login_validity=timedelta(seconds=_env_int("WALLET_LOGIN_VALIDITY", 600)),
            jwt_token_validity=timedelta(seconds=_env_int("JWT_TOKEN_VALIDITY", 3600)),
            jwt_secret=os.environ.get(f"{ENV_PREFIX}JWT_SECRET"),
            jwt_algorithm=os.environ.get(f"{ENV_PREFIX}JWT_ALGORITHM", "HS256"),
        )
