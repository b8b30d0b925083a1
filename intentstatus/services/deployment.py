"""
Contract deployment request service.
"""
import dataclasses
import logging
from typing import List, Optional, Tuple

from ..chain.gateway import ChainQueryGateway
from ..encoding import AbiFunctionEncoder, FunctionEncoder
from ..exceptions import CannotAttachTxInfoError, ContractNotYetDeployedError
from ..models import Status
from ..policies import deployment as policy
from ..policies.common import WithTransactionData
from ..reconciler import TransactionReconciler
from ..records.repository import ContractDeploymentRequestRepository, ProjectRepository
from ..records.types import (
    ContractDeploymentRequest, CreateContractDeploymentRequestParams, ImportContractParams, Project
)
from .common import Clock, IdProvider, chain_spec_for, fetch_resource, random_id, utc_now

logger = logging.getLogger(__name__)

REDIRECT_PATH = "/request-deploy/${id}/action"


class ContractDeploymentRequestService:
    """
    Creates contract deployment requests, reports their live status and
    resolves the addresses of deployed contracts.

    Reading a deployment whose transaction created a contract caches the
    contract address on the stored request.
    """

    def __init__(
        self,
        repository: ContractDeploymentRequestRepository,
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

    def create_contract_deployment_request(
        self,
        params: CreateContractDeploymentRequestParams,
        project: Project
    ) -> ContractDeploymentRequest:
        logger.info(f"Creating contract deployment request, params: {params}, project: {project.id}")
        request_id = self.id_provider()
        encoded_constructor = self.encoder.encode_constructor(params.constructor_params)

        return self.repository.store(ContractDeploymentRequest(
            id=request_id,
            project_id=project.id,
            chain_id=project.chain_id,
            redirect_url=project.create_redirect_url(params.redirect_url, request_id, REDIRECT_PATH),
            alias=params.alias,
            contract_id=params.contract_id,
            contract_data=params.bytecode + encoded_constructor[2:],
            constructor_params=tuple(params.constructor_params),
            initial_eth_amount=params.initial_eth_amount,
            contract_address=None,
            deployer_address=params.deployer_address,
            tx_hash=None,
            arbitrary_data=params.arbitrary_data,
            created_at=self.clock(),
            imported=False,
            name=params.name,
            description=params.description,
            events=tuple(params.events)
        ))

    def import_contract(self, params: ImportContractParams, project: Project) -> ContractDeploymentRequest:
        """Register a contract that was deployed elsewhere."""
        logger.info(f"Importing contract, params: {params}, project: {project.id}")
        request_id = self.id_provider()

        return self.repository.store(ContractDeploymentRequest(
            id=request_id,
            project_id=project.id,
            chain_id=project.chain_id,
            redirect_url=project.create_redirect_url(params.redirect_url, request_id, REDIRECT_PATH),
            alias=params.alias,
            contract_id=params.contract_id,
            contract_data="0x",
            constructor_params=(),
            initial_eth_amount=0,
            contract_address=params.contract_address,
            deployer_address=None,
            tx_hash=None,
            arbitrary_data=params.arbitrary_data,
            created_at=self.clock(),
            imported=True,
            name=params.name,
            description=params.description,
            events=tuple(params.events)
        ))

    def get_contract_deployment_request(self, request_id: str) -> WithTransactionData[ContractDeploymentRequest]:
        """
        Get a deployment request with its current status.

        Raises:
            ResourceNotFoundError: If no request exists for the id
        """
        logger.debug(f"Fetching contract deployment request, id: {request_id}")
        request = fetch_resource(
            self.repository.get_by_id(request_id),
            f"Contract deployment request not found for ID: {request_id}"
        )
        return self._reconcile(request, self._project_of(request))

    def get_contract_deployment_requests_by_project_id(
        self,
        project_id: str,
        deployed_only: bool = False
    ) -> List[WithTransactionData[ContractDeploymentRequest]]:
        """
        List the deployment requests of a project.

        Args:
            project_id: Project id; an unknown project yields an empty list
            deployed_only: Keep only successful deployments
        """
        logger.debug(f"Fetching contract deployment requests for project_id: {project_id}, deployed_only: {deployed_only}")
        project = self.project_repository.get_by_id(project_id)
        if project is None:
            return []

        results = [self._reconcile(r, project) for r in self.repository.get_all_by_project_id(project_id)]
        if deployed_only:
            return [r for r in results if r.status == Status.SUCCESS]
        return results

    def get_contract_deployment_request_by_project_id_and_alias(
        self,
        project_id: str,
        alias: str
    ) -> WithTransactionData[ContractDeploymentRequest]:
        logger.debug(f"Fetching contract deployment request for project_id: {project_id}, alias: {alias}")
        request = fetch_resource(
            self.repository.get_by_alias_and_project_id(alias, project_id),
            f"Contract deployment request not found for project_id: {project_id} and alias: {alias}"
        )
        return self._reconcile(request, self._project_of(request))

    def attach_tx_info(self, request_id: str, tx_hash: str, deployer: str) -> None:
        """
        Attach the deployment transaction hash. Only the first attach succeeds.

        Raises:
            CannotAttachTxInfoError: If nothing was attached
        """
        logger.info(
            f"Attach tx_info to contract deployment request, id: {request_id}, tx_hash: {tx_hash}, deployer: {deployer}"
        )

        if not self.repository.set_tx_info(request_id, tx_hash, deployer):
            raise CannotAttachTxInfoError(
                f"Unable to attach transaction info to contract deployment request with ID: {request_id}"
            )

    def resolve_deployed_contract(
        self,
        project_id: str,
        deployment_id: Optional[str] = None,
        alias: Optional[str] = None
    ) -> Tuple[str, str]:
        """
        Resolve a deployment to the address of its contract.

        Args:
            project_id: Project owning the deployment
            deployment_id: Deployment request id
            alias: Deployment alias, used when no id is given

        Returns:
            Tuple of (deployment id, contract address)

        Raises:
            ResourceNotFoundError: If no such deployment exists in the project
            ContractNotYetDeployedError: If the deployment has no contract address yet
            ValueError: If neither deployment_id nor alias is given
        """
        if deployment_id is not None:
            request = self.repository.get_by_id(deployment_id)
            if request is not None and request.project_id != project_id:
                request = None
            message = f"Contract deployment request not found for ID: {deployment_id}"
        elif alias is not None:
            request = self.repository.get_by_alias_and_project_id(alias, project_id)
            message = f"Contract deployment request not found for project_id: {project_id} and alias: {alias}"
        else:
            raise ValueError("Either deployment_id or alias must be provided")

        request = fetch_resource(request, message)

        if request.contract_address is None:
            # Reading the deployment caches the address once it is mined
            request = self._reconcile(request, self._project_of(request)).value

        if request.contract_address is None:
            raise ContractNotYetDeployedError(request.id, request.alias)

        return request.id, request.contract_address

    def _project_of(self, request: ContractDeploymentRequest) -> Project:
        return fetch_resource(
            self.project_repository.get_by_id(request.project_id),
            f"Project not found for ID: {request.project_id}"
        )

    def _reconcile(
        self,
        request: ContractDeploymentRequest,
        project: Project
    ) -> WithTransactionData[ContractDeploymentRequest]:
        result = self.reconciler.reconcile(
            chain_spec_for(request.chain_id, project),
            policy.expected_transaction(request),
            request.events
        )

        mined = result.mined_transaction
        if request.contract_address is None and mined is not None and mined.deployed_contract_address is not None:
            logger.info(f"Caching contract address {mined.deployed_contract_address} for deployment {request.id}")
            self.repository.set_contract_address(request.id, mined.deployed_contract_address)
            request = dataclasses.replace(request, contract_address=mined.deployed_contract_address)

        return policy.to_view(request, policy.apply_imported(request, result))
