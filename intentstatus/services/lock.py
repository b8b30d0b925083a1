"""
ERC-20 lock request service.
"""
import logging
from typing import List, Optional

from ..chain.gateway import ChainQueryGateway
from ..encoding import AbiFunctionEncoder, FunctionEncoder
from ..exceptions import CannotAttachTxInfoError
from ..policies import lock as policy
from ..policies.common import WithFunctionData, WithTransactionData
from ..reconciler import TransactionReconciler
from ..records.repository import Erc20LockRequestRepository, ProjectRepository
from ..records.types import CreateErc20LockRequestParams, Erc20LockRequest, Project
from .common import Clock, IdProvider, chain_spec_for, fetch_resource, random_id, utc_now

logger = logging.getLogger(__name__)

REDIRECT_PATH = "/request-lock/${id}/action"


class Erc20LockRequestService:
    """
    Creates ERC-20 lock requests and reports their live status.

    The lock call data is encoded again from the stored request on every
    read and compared with the mined transaction.
    """

    def __init__(
        self,
        repository: Erc20LockRequestRepository,
        project_repository: ProjectRepository,
        gateway: ChainQueryGateway,
        encoder: Optional[FunctionEncoder] = None,
        id_provider: IdProvider = random_id,
        clock: Clock = utc_now
    ):
        self.repository = repository
        self.project_repository = project_repository
        self.encoder = encoder or AbiFunctionEncoder()
        self.reconciler = TransactionReconciler(gateway)
        self.id_provider = id_provider
        self.clock = clock

    def create_erc20_lock_request(
        self,
        params: CreateErc20LockRequestParams,
        project: Project
    ) -> WithFunctionData[Erc20LockRequest]:
        logger.info(f"Creating ERC20 lock request, params: {params}, project: {project.id}")
        request_id = self.id_provider()

        request = self.repository.store(Erc20LockRequest(
            id=request_id,
            project_id=project.id,
            chain_id=project.chain_id,
            redirect_url=project.create_redirect_url(params.redirect_url, request_id, REDIRECT_PATH),
            token_address=params.token_address,
            token_amount=params.token_amount,
            lock_duration_seconds=params.lock_duration_seconds,
            lock_contract_address=params.lock_contract_address,
            token_sender_address=params.token_sender_address,
            tx_hash=None,
            arbitrary_data=params.arbitrary_data,
            created_at=self.clock()
        ))
        return WithFunctionData(value=request, function_data=policy.encode_lock_call(self.encoder, request))

    def get_erc20_lock_request(self, request_id: str) -> WithTransactionData[Erc20LockRequest]:
        """
        Get a lock request with its current status.

        Raises:
            ResourceNotFoundError: If no request exists for the id
        """
        logger.debug(f"Fetching ERC20 lock request, id: {request_id}")
        request = fetch_resource(
            self.repository.get_by_id(request_id),
            f"ERC20 lock request not found for ID: {request_id}"
        )
        project = fetch_resource(
            self.project_repository.get_by_id(request.project_id),
            f"Project not found for ID: {request.project_id}"
        )
        return self._reconcile(request, project)

    def get_erc20_lock_requests_by_project_id(self, project_id: str) -> List[WithTransactionData[Erc20LockRequest]]:
        logger.debug(f"Fetching ERC20 lock requests for project_id: {project_id}")
        project = self.project_repository.get_by_id(project_id)
        if project is None:
            return []
        return [self._reconcile(r, project) for r in self.repository.get_all_by_project_id(project_id)]

    def attach_tx_info(self, request_id: str, tx_hash: str, caller: str) -> None:
        """
        Attach the lock transaction hash. Only the first attach succeeds.

        Raises:
            CannotAttachTxInfoError: If nothing was attached
        """
        logger.info(f"Attach tx_info to ERC20 lock request, id: {request_id}, tx_hash: {tx_hash}, caller: {caller}")

        if not self.repository.set_tx_info(request_id, tx_hash, caller):
            raise CannotAttachTxInfoError(
                f"Unable to attach transaction info to ERC20 lock request with ID: {request_id}"
            )

    def _reconcile(self, request: Erc20LockRequest, project: Project) -> WithTransactionData[Erc20LockRequest]:
        data = policy.encode_lock_call(self.encoder, request)
        result = self.reconciler.reconcile(
            chain_spec_for(request.chain_id, project),
            policy.expected_transaction(request, data)
        )
        return policy.to_view(request, result, data)
