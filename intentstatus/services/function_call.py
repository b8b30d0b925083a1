"""
Contract function call request service.
"""
import logging
from typing import List, Optional

from ..chain.gateway import ChainQueryGateway
from ..encoding import AbiFunctionEncoder, FunctionEncoder
from ..exceptions import CannotAttachTxInfoError
from ..policies import function_call as policy
from ..policies.common import WithFunctionData, WithTransactionAndFunctionData
from ..reconciler import TransactionReconciler
from ..records.repository import ContractFunctionCallRequestRepository, ProjectRepository
from ..records.types import ContractFunctionCallRequest, CreateContractFunctionCallRequestParams, Project
from .common import Clock, IdProvider, chain_spec_for, fetch_resource, random_id, utc_now
from .deployment import ContractDeploymentRequestService

logger = logging.getLogger(__name__)

REDIRECT_PATH = "/request-function-call/${id}/action"


class ContractFunctionCallRequestService:
    """
    Creates contract function call requests and reports their live status.
    """

    def __init__(
        self,
        repository: ContractFunctionCallRequestRepository,
        project_repository: ProjectRepository,
        gateway: ChainQueryGateway,
        deployment_service: Optional[ContractDeploymentRequestService] = None,
        encoder: Optional[FunctionEncoder] = None,
        id_provider: IdProvider = random_id,
        clock: Clock = utc_now
    ):
        self.repository = repository
        self.project_repository = project_repository
        self.deployment_service = deployment_service
        self.encoder = encoder or AbiFunctionEncoder()
        self.reconciler = TransactionReconciler(gateway)
        self.id_provider = id_provider
        self.clock = clock

    def create_contract_function_call_request(
        self,
        params: CreateContractFunctionCallRequestParams,
        project: Project
    ) -> WithFunctionData[ContractFunctionCallRequest]:
        """
        Store a function call request.

        Raises:
            ResourceNotFoundError: If the referenced deployment does not exist
            ContractNotYetDeployedError: If the referenced deployment has no contract yet
            ValueError: If no target contract is given
        """
        logger.info(f"Creating contract function call request, params: {params}, project: {project.id}")
        deployed_contract_id, contract_address = self._resolve_target(params, project)
        request_id = self.id_provider()

        request = self.repository.store(ContractFunctionCallRequest(
            id=request_id,
            project_id=project.id,
            chain_id=project.chain_id,
            redirect_url=project.create_redirect_url(params.redirect_url, request_id, REDIRECT_PATH),
            deployed_contract_id=deployed_contract_id,
            contract_address=contract_address,
            function_name=params.function_name,
            function_params=tuple(params.function_params),
            eth_amount=params.eth_amount,
            caller_address=params.caller_address,
            tx_hash=None,
            arbitrary_data=params.arbitrary_data,
            created_at=self.clock(),
            events=tuple(params.events)
        ))
        return WithFunctionData(value=request, function_data=policy.encode_call(self.encoder, request))

    def get_contract_function_call_request(
        self,
        request_id: str
    ) -> WithTransactionAndFunctionData[ContractFunctionCallRequest]:
        """
        Get a function call request with its current status.

        Raises:
            ResourceNotFoundError: If no request exists for the id
        """
        logger.debug(f"Fetching contract function call request, id: {request_id}")
        request = fetch_resource(
            self.repository.get_by_id(request_id),
            f"Contract function call request not found for ID: {request_id}"
        )
        project = fetch_resource(
            self.project_repository.get_by_id(request.project_id),
            f"Project not found for ID: {request.project_id}"
        )
        return self._reconcile(request, project)

    def get_contract_function_call_requests_by_project_id(
        self,
        project_id: str
    ) -> List[WithTransactionAndFunctionData[ContractFunctionCallRequest]]:
        logger.debug(f"Fetching contract function call requests for project_id: {project_id}")
        project = self.project_repository.get_by_id(project_id)
        if project is None:
            return []
        return [self._reconcile(r, project) for r in self.repository.get_all_by_project_id(project_id)]

    def attach_tx_info(self, request_id: str, tx_hash: str, caller: str) -> None:
        """
        Attach the call transaction hash. Only the first attach succeeds.

        Raises:
            CannotAttachTxInfoError: If nothing was attached
        """
        logger.info(
            f"Attach tx_info to contract function call request, id: {request_id}, tx_hash: {tx_hash}, caller: {caller}"
        )

        if not self.repository.set_tx_info(request_id, tx_hash, caller):
            raise CannotAttachTxInfoError(
                f"Unable to attach transaction info to contract function call request with ID: {request_id}"
            )

    def _resolve_target(self, params: CreateContractFunctionCallRequestParams, project: Project):
        if params.deployed_contract_id is None and params.deployed_contract_alias is None:
            if params.contract_address is None:
                raise ValueError("One of contract_address, deployed_contract_id or deployed_contract_alias is required")
            return None, params.contract_address

        if self.deployment_service is None:
            raise ValueError("Resolving a deployed contract requires a deployment service")

        return self.deployment_service.resolve_deployed_contract(
            project.id,
            deployment_id=params.deployed_contract_id,
            alias=params.deployed_contract_alias
        )

    def _reconcile(
        self,
        request: ContractFunctionCallRequest,
        project: Project
    ) -> WithTransactionAndFunctionData[ContractFunctionCallRequest]:
        data = policy.encode_call(self.encoder, request)
        result = self.reconciler.reconcile(
            chain_spec_for(request.chain_id, project),
            policy.expected_transaction(request, data),
            request.events
        )
        return policy.to_view(request, result, data)
