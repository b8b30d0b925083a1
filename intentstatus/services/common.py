"""
Helpers shared by the request services.
"""
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from ..exceptions import ResourceNotFoundError
from ..models import ChainSpec
from ..records.types import Project

R = TypeVar('R')

IdProvider = Callable[[], str]
Clock = Callable[[], datetime]


def random_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fetch_resource(resource: Optional[R], message: str) -> R:
    """
    Return ``resource``, or raise if the lookup found nothing.

    Raises:
        ResourceNotFoundError: If ``resource`` is None
    """
    if resource is None:
        raise ResourceNotFoundError(message)
    return resource


def chain_spec_for(chain_id: int, project: Project) -> ChainSpec:
    return ChainSpec(chain_id=chain_id, custom_rpc_url=project.custom_rpc_url)
