"""Chain client for contract upload and instantiation."""

import gzip
import logging
from datetime import timedelta
from typing import Any, Dict, Optional, Protocol

from cosmpy.aerial.client import LedgerClient
from cosmpy.aerial.client import NetworkConfig as LedgerNetworkConfig
from cosmpy.aerial.client.utils import prepare_and_broadcast_basic_transaction
from cosmpy.aerial.contract.cosmwasm import create_cosmwasm_instantiate_msg
from cosmpy.aerial.tx import Transaction
from cosmpy.crypto.address import Address
from cosmpy.protos.cosmwasm.wasm.v1.tx_pb2 import MsgStoreCode

from .balances import query_balance
from .config import NetworkConfig
from .exceptions import TransportError
from .types import Balance, InstantiateResult, UploadResult, WalletIdentity

logger = logging.getLogger(__name__)


class ChainClient(Protocol):
    """Operations the deployment workflow needs from the chain."""

    def get_balance(self, address: str, denom: str) -> Balance: ...

    def upload(self, sender: str, wasm: bytes, memo: Optional[str] = None) -> UploadResult: ...

    def instantiate(
        self,
        sender: str,
        code_id: int,
        init_msg: Dict[str, Any],
        label: str,
        admin: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> InstantiateResult: ...


def _event_attribute(response: Any, event: str, attribute: str) -> Optional[str]:
    return response.events.get(event, {}).get(attribute)


class CosmpyChainClient:
    """
    ChainClient backed by cosmpy.

    Fees are always "auto": gas is simulated by cosmpy and priced at the
    network's gas price.
    """

    def __init__(self, network: NetworkConfig, signer: Any):
        """
        Connect to the network with a signer.

        Args:
            network: Target network
            signer: cosmpy Wallet used to sign transactions
        """
        self._network = network
        self._signer = signer
        self._client = LedgerClient(
            LedgerNetworkConfig(
                chain_id=network.chain_id,
                url=f"rest+{network.rest_endpoint}",
                fee_minimum_gas_price=float(network.gas_price.amount),
                fee_denomination=network.gas_price.denom,
                staking_denomination=network.fee_denom,
            )
        )
        self._timeout = timedelta(milliseconds=network.broadcast_timeout_ms)
        self._poll_period = timedelta(milliseconds=network.broadcast_poll_interval_ms)

    def get_balance(self, address: str, denom: str) -> Balance:
        return query_balance(self._network.rest_endpoint, address, denom)

    def _broadcast(self, message: Any, memo: Optional[str]) -> Any:
        tx = Transaction()
        tx.add_message(message)

        submitted = prepare_and_broadcast_basic_transaction(
            self._client, tx, self._signer, memo=memo
        )
        logger.debug("Broadcast transaction %s", submitted.tx_hash)
        submitted.wait_to_complete(timeout=self._timeout, poll_period=self._poll_period)
        submitted.response.ensure_successful()
        return submitted

    def upload(self, sender: str, wasm: bytes, memo: Optional[str] = None) -> UploadResult:
        """
        Store contract code on chain.

        Raises:
            TransportError: If signing, broadcast or inclusion fails
        """
        message = MsgStoreCode(sender=sender, wasm_byte_code=gzip.compress(wasm))
        try:
            submitted = self._broadcast(message, memo)
            code_id = _event_attribute(submitted.response, "store_code", "code_id")
            if code_id is None:
                raise ValueError("store_code event has no code_id")
            return UploadResult(code_id=int(code_id), transaction_hash=submitted.tx_hash)
        except Exception as e:
            raise TransportError(str(e)) from e

    def instantiate(
        self,
        sender: str,
        code_id: int,
        init_msg: Dict[str, Any],
        label: str,
        admin: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> InstantiateResult:
        """
        Instantiate stored contract code.

        The returned contract address is empty if the chain reported none;
        callers must check it.

        Raises:
            TransportError: If signing, broadcast or inclusion fails
        """
        try:
            message = create_cosmwasm_instantiate_msg(
                code_id,
                init_msg,
                label,
                Address(sender),
                admin_address=Address(admin) if admin else None,
            )
            submitted = self._broadcast(message, memo)
            contract_address = _event_attribute(
                submitted.response, "instantiate", "_contract_address"
            )
            return InstantiateResult(
                contract_address=contract_address or "",
                transaction_hash=submitted.tx_hash,
            )
        except Exception as e:
            raise TransportError(str(e)) from e


def connect(network: NetworkConfig, identity: WalletIdentity) -> CosmpyChainClient:
    """Connect a cosmpy client with the identity's signer."""
    return CosmpyChainClient(network, identity.signer)
