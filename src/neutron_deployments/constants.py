"""Configuration constants for neutron-deployments library."""

DEFAULT_NETWORK = "neutron-testnet"

# Network configuration based on the chain registry entry for Neutron testnet
# Shape follows the wallet extension's chain-suggestion payload
NETWORK_CONFIG = {
    "neutron-testnet": {
        "chain_id": "pion-1",
        "chain_name": "Neutron Testnet",
        "rpc_endpoint": "https://rpc-palvus.pion-1.ntrn.tech:443",
        "rest_endpoint": "https://rest-palvus.pion-1.ntrn.tech",
        "bech32_prefix": "neutron",
        "coin_type": 118,  # BIP-44
        "coin_denom": "NTRN",
        "fee_denom": "untrn",
        "coin_decimals": 6,
        "gas_price": "0.025untrn",
        "gas_price_step": {
            "low": 0.01,
            "average": 0.025,
            "high": 0.05,
        },
        "features": ["stargate", "ibc-transfer", "cosmwasm"],
        "broadcast_timeout_ms": 10000,
        "broadcast_poll_interval_ms": 500,
    },
}

# Environment variables that override the static network table
# RPC URL only reaches the extension chain suggestion; transactions and
# balance queries always go through the REST endpoint.
RPC_URL_ENV = "NEUTRON_RPC_URL"
REST_URL_ENV = "NEUTRON_REST_URL"
GAS_PRICE_ENV = "NEUTRON_GAS_PRICE"
MNEMONIC_ENV = "NEUTRON_MNEMONIC"

DEFAULT_WASM_PATH = "artifacts/contract.wasm"
WASM_EXTENSION = ".wasm"

DEFAULT_LABEL = "My Contract"
UPLOAD_MEMO = "Contract upload"
INSTANTIATE_MEMO = "Contract instantiation"

# Key the deployment record is stored under in local storage
STORAGE_KEY = "neutron-deployment"

# 1 NTRN in untrn
LOW_BALANCE_THRESHOLD = 1_000_000

EXTENSION_ENTRY_POINT_GROUP = "neutron_deployments.extensions"

TROUBLESHOOTING_HINTS = [
    "Check your network connection and that the RPC endpoint is reachable",
    "Check that the WASM artifact path is correct and the file is not empty",
    "Check that the deployer account holds enough NTRN to pay for gas",
    "Try again later if the network is congested",
]
