"""Account balance queries for neutron-deployments library."""

from decimal import Decimal

import requests

from .constants import LOW_BALANCE_THRESHOLD
from .exceptions import TransportError
from .types import Balance


def query_balance(rest_endpoint: str, address: str, denom: str, timeout: float = 30) -> Balance:
    """
    Query an account balance through the chain's REST (LCD) endpoint.

    Args:
        rest_endpoint: REST endpoint URL
        address: Bech32 account address
        denom: Minimal denomination (e.g. "untrn")
        timeout: Request timeout in seconds

    Returns:
        Balance in the requested denomination (zero if the account holds none)

    Raises:
        TransportError: If the request fails or the response is malformed
    """
    url = f"{rest_endpoint.rstrip('/')}/cosmos/bank/v1beta1/balances/{address}/by_denom"

    try:
        response = requests.get(url, params={"denom": denom}, timeout=timeout)
    except requests.RequestException as e:
        raise TransportError(f"Network error during balance query: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise TransportError(f"Balance query failed with status {response.status_code}")

    try:
        balance = response.json()["balance"]
        return Balance(amount=int(balance["amount"]), denom=balance["denom"])
    except (ValueError, KeyError, TypeError) as e:
        raise TransportError(f"Malformed balance response: {e}") from e


def format_amount(amount: int, decimals: int, coin_denom: str) -> str:
    """
    Format a minimal-denomination amount in display units.

    Args:
        amount: Amount in minimal denomination (e.g. 1500000 untrn)
        decimals: Display decimals (6 for NTRN)
        coin_denom: Display denomination (e.g. "NTRN")

    Returns:
        Human readable amount, e.g. "1.5 NTRN"
    """
    value = Decimal(amount).scaleb(-decimals).normalize()
    # normalize() turns 10 into 1E+1
    return f"{value:f} {coin_denom}"


def is_low_balance(balance: Balance, threshold: int = LOW_BALANCE_THRESHOLD) -> bool:
    return balance.amount < threshold
