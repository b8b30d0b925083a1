"""
Asset balance request service.
"""
import logging
from typing import List, Optional

from ..chain.gateway import ChainQueryGateway
from ..exceptions import CannotAttachSignedMessageError
from ..policies import balance as policy
from ..policies.balance import FullAssetBalanceRequest
from ..reconciler import SignatureReconciler
from ..records.repository import AssetBalanceRequestRepository, ProjectRepository
from ..records.types import AssetBalanceRequest, CreateAssetBalanceRequestParams, Project
from ..signature import SignatureVerifier
from ..utils import redact
from .common import Clock, IdProvider, chain_spec_for, fetch_resource, random_id, utc_now

logger = logging.getLogger(__name__)

REDIRECT_PATH = "/request-balance/${id}/action"


class AssetBalanceRequestService:
    """
    Creates asset balance requests and reports their live status.
    """

    def __init__(
        self,
        repository: AssetBalanceRequestRepository,
        project_repository: ProjectRepository,
        gateway: ChainQueryGateway,
        verifier: Optional[SignatureVerifier] = None,
        id_provider: IdProvider = random_id,
        clock: Clock = utc_now
    ):
        self.repository = repository
        self.project_repository = project_repository
        self.gateway = gateway
        self.reconciler = SignatureReconciler(verifier)
        self.id_provider = id_provider
        self.clock = clock

    def create_asset_balance_request(
        self,
        params: CreateAssetBalanceRequestParams,
        project: Project
    ) -> AssetBalanceRequest:
        logger.info(f"Creating asset balance request, params: {params}, project: {project.id}")
        request_id = self.id_provider()

        return self.repository.store(AssetBalanceRequest(
            id=request_id,
            project_id=project.id,
            chain_id=project.chain_id,
            redirect_url=project.create_redirect_url(params.redirect_url, request_id, REDIRECT_PATH),
            token_address=params.token_address,
            block_number=params.block_number,
            requested_wallet_address=params.requested_wallet_address,
            actual_wallet_address=None,
            signed_message=None,
            arbitrary_data=params.arbitrary_data,
            created_at=self.clock()
        ))

    def get_asset_balance_request(self, request_id: str) -> FullAssetBalanceRequest:
        """
        Get a balance request with its current status and balance.

        Raises:
            ResourceNotFoundError: If no request exists for the id
        """
        logger.debug(f"Fetching asset balance request, id: {request_id}")
        request = fetch_resource(
            self.repository.get_by_id(request_id),
            f"Asset balance check request not found for ID: {request_id}"
        )
        project = fetch_resource(
            self.project_repository.get_by_id(request.project_id),
            f"Project not found for ID: {request.project_id}"
        )
        return self._reconcile(request, project)

    def get_asset_balance_requests_by_project_id(self, project_id: str) -> List[FullAssetBalanceRequest]:
        logger.debug(f"Fetching asset balance requests for project_id: {project_id}")
        project = self.project_repository.get_by_id(project_id)
        if project is None:
            return []
        return [self._reconcile(r, project) for r in self.repository.get_all_by_project_id(project_id)]

    def attach_wallet_address_and_signed_message(
        self,
        request_id: str,
        wallet_address: str,
        signed_message: str
    ) -> None:
        """
        Attach the answering wallet and its signature. Only the first attach succeeds.

        Raises:
            CannotAttachSignedMessageError: If nothing was attached
        """
        logger.info(
            f"Attach wallet_address and signed_message to asset balance request, id: {request_id}, "
            f"wallet_address: {wallet_address}, signed_message: {redact(signed_message)}"
        )

        if not self.repository.set_signed_message(request_id, wallet_address, signed_message):
            raise CannotAttachSignedMessageError(
                f"Unable to attach signed message to asset balance request with ID: {request_id}"
            )

    def _reconcile(self, request: AssetBalanceRequest, project: Project) -> FullAssetBalanceRequest:
        chain_spec = chain_spec_for(request.chain_id, project)
        result = self.reconciler.reconcile(
            challenge=policy.challenge(request),
            actual=policy.actual_signature(request),
            balance_probe=policy.balance_probe(self.gateway, chain_spec, request),
            block_ref=policy.block_ref(request)
        )
        return policy.to_view(request, result)
