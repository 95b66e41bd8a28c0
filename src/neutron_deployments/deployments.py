"""Main API for neutron-deployments library."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .artifacts import ArtifactLoader, make_artifact_loader
from .balances import format_amount, is_low_balance
from .chain import ChainClient, connect
from .config import DeployConfig, NetworkConfig
from .exceptions import (
    DeploymentError,
    EmptyArtifactError,
    InstantiateFailedError,
    MissingContractAddressError,
    PersistenceFailedError,
    TransportError,
    UploadFailedError,
    WalletUnavailableError,
)
from .sinks import ResultSink, make_sink
from .types import (
    Balance,
    ContractArtifact,
    DeploymentRecord,
    InstantiateResult,
    UploadResult,
    WalletIdentity,
)
from .wallets import WalletProvider

logger = logging.getLogger(__name__)

ClientFactory = Callable[[NetworkConfig, WalletIdentity], ChainClient]


class DeploymentState(Enum):
    """
    Deployment workflow states, in the only order they can be visited.

    FAILED is terminal and reachable from every state except DONE.
    """

    INIT = "init"
    WALLET_READY = "wallet-ready"
    BALANCE_CHECKED = "balance-checked"
    ARTIFACT_LOADED = "artifact-loaded"
    UPLOADED = "uploaded"
    INSTANTIATED = "instantiated"
    PERSISTED = "persisted"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class DeploymentOutcome:
    """Result of a deployment that reached the chain."""

    record: DeploymentRecord
    persisted: bool
    persistence_error: Optional[DeploymentError] = None
    balance: Optional[Balance] = None  # None if the balance check failed
    history: Tuple[DeploymentState, ...] = ()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    # Same shape as JavaScript's Date.toISOString()
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DeploymentOrchestrator:
    """Runs the upload-and-instantiate workflow once."""

    def __init__(
        self,
        config: DeployConfig,
        wallet_provider: WalletProvider,
        artifact_loader: ArtifactLoader,
        sink: ResultSink,
        client_factory: ClientFactory = connect,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Deployment configuration
            wallet_provider: Source of the signing identity
            artifact_loader: Source of the contract bytecode
            sink: Where the deployment record is saved
            client_factory: Builds a chain client for the signer
            clock: Time source for the deployment timestamp
        """
        self.config = config
        self.wallet_provider = wallet_provider
        self.artifact_loader = artifact_loader
        self.sink = sink
        self.client_factory = client_factory
        self.clock = clock

        self.state = DeploymentState.INIT
        self.history: List[DeploymentState] = [DeploymentState.INIT]
        self.failure: Optional[BaseException] = None

    def _advance(self, state: DeploymentState) -> None:
        logger.debug("Deployment state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def run(self) -> DeploymentOutcome:
        """
        Deploy the contract.

        Returns:
            DeploymentOutcome; persisted is False if the record could not be saved

        Raises:
            DeploymentError: On any fatal step failure; state is FAILED
            RuntimeError: If the orchestrator was already run
        """
        if self.state is not DeploymentState.INIT:
            raise RuntimeError(f"Deployment already run (state: {self.state.value})")

        try:
            return self._run()
        except BaseException as e:
            self.failure = e
            self._advance(DeploymentState.FAILED)
            raise

    def _run(self) -> DeploymentOutcome:
        network = self.config.network

        identity = self._obtain_wallet(network)
        self._advance(DeploymentState.WALLET_READY)

        client = self._connect(network, identity)

        balance = self._check_balance(client, identity)
        self._advance(DeploymentState.BALANCE_CHECKED)

        artifact = self._load_artifact()
        self._advance(DeploymentState.ARTIFACT_LOADED)

        upload = self._upload(client, identity, artifact)
        self._advance(DeploymentState.UPLOADED)

        instance = self._instantiate(client, identity, upload)
        self._advance(DeploymentState.INSTANTIATED)

        record = DeploymentRecord(
            network=network.name,
            code_id=upload.code_id,
            contract_address=instance.contract_address,
            deployer=identity.address,
            upload_tx_hash=upload.transaction_hash,
            instantiate_tx_hash=instance.transaction_hash,
            deployed_at=_iso_timestamp(self.clock()),
        )

        persistence_error = self._persist(record)
        self._advance(DeploymentState.PERSISTED)
        self._advance(DeploymentState.DONE)

        return DeploymentOutcome(
            record=record,
            persisted=persistence_error is None,
            persistence_error=persistence_error,
            balance=balance,
            history=tuple(self.history),
        )

    def _obtain_wallet(self, network: NetworkConfig) -> WalletIdentity:
        try:
            identity = self.wallet_provider.obtain(network.chain_id)
        except DeploymentError:
            raise
        except Exception as e:
            raise WalletUnavailableError(f"Failed to obtain wallet: {e}") from e

        logger.info("Deployer: %s", identity.address)
        return identity

    def _connect(self, network: NetworkConfig, identity: WalletIdentity) -> ChainClient:
        try:
            return self.client_factory(network, identity)
        except DeploymentError:
            raise
        except Exception as e:
            raise TransportError(f"Failed to connect to {network.rest_endpoint}: {e}") from e

    def _check_balance(self, client: ChainClient, identity: WalletIdentity) -> Optional[Balance]:
        network = self.config.network
        try:
            balance = client.get_balance(identity.address, network.fee_denom)
        except Exception as e:
            # Advisory only
            logger.warning("Could not check balance, continuing without it: %s", e)
            return None

        logger.info(
            "Balance: %s %s (%s)",
            balance.amount,
            balance.denom,
            format_amount(balance.amount, network.coin_decimals, network.coin_denom),
        )
        if is_low_balance(balance):
            logger.warning(
                "Low balance - you may need more %s for deployment", network.coin_denom
            )
        return balance

    def _load_artifact(self) -> ContractArtifact:
        artifact = self.artifact_loader.load()
        if artifact.size == 0:
            raise EmptyArtifactError(f"File is empty: {artifact.name}")

        logger.info("WASM file loaded: %d bytes (sha256 %s)", artifact.size, artifact.checksum)
        return artifact

    def _upload(
        self, client: ChainClient, identity: WalletIdentity, artifact: ContractArtifact
    ) -> UploadResult:
        logger.info("Uploading contract...")
        try:
            result = client.upload(identity.address, artifact.data, memo=self.config.upload_memo)
        except Exception as e:
            raise UploadFailedError(f"Failed to upload contract: {e}") from e

        if result.code_id <= 0:
            raise UploadFailedError(f"Upload returned invalid code ID: {result.code_id}")

        logger.info("Code uploaded with ID: %d", result.code_id)
        logger.info("Upload transaction: %s", result.transaction_hash)
        return result

    def _instantiate(
        self, client: ChainClient, identity: WalletIdentity, upload: UploadResult
    ) -> InstantiateResult:
        logger.info("Instantiating contract...")
        admin = identity.address if self.config.set_admin else None
        try:
            result = client.instantiate(
                identity.address,
                upload.code_id,
                self.config.init_msg,
                self.config.label,
                admin=admin,
                memo=self.config.instantiate_memo,
            )
        except Exception as e:
            raise InstantiateFailedError(f"Failed to instantiate contract: {e}") from e

        if not result.contract_address:
            raise MissingContractAddressError("Contract address not returned from instantiation!")

        logger.info("Contract instantiated at: %s", result.contract_address)
        logger.info("Instantiate transaction: %s", result.transaction_hash)
        return result

    def _persist(self, record: DeploymentRecord) -> Optional[DeploymentError]:
        try:
            self.sink.save(record)
        except DeploymentError as e:
            if e.fatal:
                raise
            error = e
        except Exception as e:
            error = PersistenceFailedError(f"Failed to save deployment record: {e}")
            error.__cause__ = e
        else:
            return None

        # Contract exists on-chain regardless
        logger.warning("Deployment succeeded but the record was not saved: %s", error)
        return error


def deploy(
    config: DeployConfig,
    wallet_provider: WalletProvider,
    client_factory: ClientFactory = connect,
) -> DeploymentOutcome:
    """
    Deploy a contract with the artifact loader and sink the config describes.

    Args:
        config: Deployment configuration
        wallet_provider: Source of the signing identity
        client_factory: Builds a chain client for the signer

    Returns:
        DeploymentOutcome

    Raises:
        DeploymentError: On any fatal step failure
    """
    orchestrator = DeploymentOrchestrator(
        config,
        wallet_provider,
        make_artifact_loader(config.artifact),
        make_sink(config.output),
        client_factory=client_factory,
    )
    return orchestrator.run()


_DIAGNOSES = [
    ("insufficient funds", "Not enough NTRN tokens for deployment"),
    ("gas", "Gas estimation failed - try again"),
    ("rejected", "Transaction rejected by user"),
]


def diagnose_failure(error: BaseException) -> Optional[str]:
    """
    Explain common failure causes from the error message chain.

    Args:
        error: Raised exception; its __cause__ chain is searched too

    Returns:
        Advice string, or None if the failure is not recognized
    """
    messages = []
    current: Optional[BaseException] = error
    while current is not None:
        messages.append(str(current).lower())
        current = current.__cause__

    text = " ".join(messages)
    for needle, advice in _DIAGNOSES:
        if needle in text:
            return advice
    return None
