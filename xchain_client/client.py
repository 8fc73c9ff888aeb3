"""
XChain API client.

Every endpoint method maps its arguments to (method, path, data) and goes
through transport.pipeline.execute(). Methods return the decoded payload
and raise XChainError subclasses on failure; request() returns the raw
ApiOutcome for callers that want to branch on it.

Usage:
    from xchain_client import XChainClient
    client = XChainClient("https://xchain.example.com", "TOKEN", "SECRET")
    address = client.new_payment_address()
    client.send(address["id"], "1DestinationAddr", 0.25, "TOKENLY")
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

import requests

from xchain_client.config.env import describe_xchain_env, get_request_timeout
from xchain_client.core.json_shape import as_list, as_object, require, require_number
from xchain_client.core.models import Credentials
from xchain_client.core.outcome import ApiOutcome, ServiceError
from xchain_client.quantity import Quantity
from xchain_client.transport.pipeline import execute
from xchain_client.xchain_logging import get_logger

ERR_INSUFFICIENT_FUNDS = "ERR_INSUFFICIENT_FUNDS"
MULTISIG_TYPES = ("2of2", "2of3")
SWEEP_ALL_ASSETS = "ALLASSETS"

logger = get_logger(__name__)


def _segment(value: Any) -> str:
    """Percent-encode one path segment (ids, addresses, asset names)."""
    return quote(str(value), safe="")


def _with_optional(body: dict[str, Any], **optional: Any) -> dict[str, Any]:
    """Add each optional field whose value is not None."""
    for key, value in optional.items():
        if value is not None:
            body[key] = value
    return body


class XChainClient:
    """Client for the XChain payment API (addresses, sends, multisig, monitors, accounts)."""

    def __init__(
        self,
        xchain_url: str,
        api_token: str,
        api_secret_key: str,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.credentials = Credentials(
            base_url=xchain_url,
            api_token=api_token,
            api_secret_key=api_secret_key,
        )
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_env(cls, *, session: requests.Session | None = None) -> "XChainClient":
        """Build from XCHAIN_* environment variables (see config.env)."""
        creds = Credentials.from_env()
        logger.debug("xchain_client_from_env", **describe_xchain_env())
        return cls(
            creds.base_url,
            creds.api_token,
            creds.api_secret_key,
            timeout=get_request_timeout(),
            session=session,
        )

    def request(self, method: str, path: str, data: Mapping[str, Any] | None = None) -> ApiOutcome:
        """Run one signed API call and return its ApiOutcome without raising on API errors."""
        return execute(
            self.credentials,
            method,
            path,
            data,
            session=self._session,
            timeout=self.timeout,
        )

    def call(self, method: str, path: str, data: Mapping[str, Any] | None = None) -> Any:
        """Run one signed API call and return the decoded payload ([] for 204)."""
        return self.request(method, path, data).unwrap()

    # ------------------------------------------------------------------
    # Addresses

    def new_payment_address(self) -> dict[str, Any]:
        """Create a managed payment address. Returns {id, address}."""
        return self.call("POST", "/addresses", {})

    def new_unmanaged_payment_address(self, address: str) -> dict[str, Any]:
        """Track an address whose private key XChain does not hold."""
        return self.call("POST", "/unmanaged/addresses", {"address": address})

    def get_payment_address(self, uuid: str) -> dict[str, Any]:
        return self.call("GET", f"/addresses/{_segment(uuid)}")

    def destroy_payment_address(self, uuid: str) -> Any:
        return self.call("DELETE", f"/addresses/{_segment(uuid)}")

    def validate_address(self, address: str) -> dict[str, Any]:
        """Returns {result: bool, is_mine: bool}."""
        return self.call("GET", f"/validate/{_segment(address)}")

    # ------------------------------------------------------------------
    # Multisig

    def new_multisig_payment_address(
        self,
        wallet_name: str,
        multisig_type: str,
        webhook_endpoint: str | None = None,
        copayer_name: str | None = None,
    ) -> dict[str, Any]:
        """
        Create a multisig address. Returns {id, invitationCode} for joining in Pockets.

        Args:
            wallet_name: Wallet name shown in Pockets.
            multisig_type: "2of2" or "2of3".
            webhook_endpoint: Callback URL for the joined event.
            copayer_name: Name of the cosigning application.
        """
        if multisig_type not in MULTISIG_TYPES:
            raise ValueError(f"Invalid multisig type: {multisig_type!r}")
        body = _with_optional(
            {"name": wallet_name, "multisigType": multisig_type},
            webhookEndpoint=webhook_endpoint,
            copayerName=copayer_name,
        )
        return self.call("POST", "/multisig/addresses", body)

    def send_from_multisig_address(
        self,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        fee_rate: str = "medium",
        message: str | None = None,
        dust_size: Any = None,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        body = _with_optional(
            {"destination": destination, "quantity": quantity, "asset": asset, "feeRate": fee_rate},
            dust_size=dust_size,
            requestId=request_id,
            message=message,
        )
        return self.call("POST", f"/multisig/sends/{_segment(payment_address_id)}", body)

    def destroy_multisig_send(self, send_id: str) -> Any:
        return self.call("DELETE", f"/multisig/sends/{_segment(send_id)}")

    def get_multisig_send(self, send_id: str) -> dict[str, Any]:
        """Send details; copayStatus is copied up from copayTransaction.status (or None)."""
        result = as_object(self.call("GET", f"/multisig/sends/{_segment(send_id)}"), where="multisig send")
        copay = result.get("copayTransaction")
        status = copay.get("status") if isinstance(copay, dict) else None
        result["copayStatus"] = status or None
        return result

    def create_issuance_from_multisig_address(
        self,
        payment_address_id: str,
        quantity: Any,
        asset: str,
        divisible: bool,
        description: str | None = "",
        fee_rate: str | None = "medium",
        request_id: str | None = None,
        fee_satoshis: int | None = None,
    ) -> dict[str, Any]:
        body = _with_optional(
            {"quantity": quantity, "asset": asset, "divisible": divisible},
            feeRate=fee_rate,
            feeSat=fee_satoshis,
            requestId=request_id,
            description=description,
        )
        return self.call("POST", f"/multisig/issuances/{_segment(payment_address_id)}", body)

    def create_issuance_from_multisig_address_with_exact_fee(
        self,
        payment_address_id: str,
        quantity: Any,
        asset: str,
        divisible: bool,
        description: str | None,
        fee_satoshis: int,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        return self.create_issuance_from_multisig_address(
            payment_address_id,
            quantity,
            asset,
            divisible,
            description=description,
            fee_rate=None,
            request_id=request_id,
            fee_satoshis=fee_satoshis,
        )

    # ------------------------------------------------------------------
    # Monitors

    def new_address_monitor(
        self,
        address: str,
        webhook_endpoint: str,
        monitor_type: str = "receive",
        active: bool = True,
    ) -> dict[str, Any]:
        body = {
            "address": address,
            "webhookEndpoint": webhook_endpoint,
            "monitorType": monitor_type,
            "active": active,
        }
        return self.call("POST", "/monitors", body)

    def update_address_monitor_active_state(self, monitor_id: str, active: bool = True) -> dict[str, Any]:
        return self.call("PATCH", f"/monitors/{_segment(monitor_id)}", {"active": active})

    def get_address_monitor(self, monitor_id: str) -> dict[str, Any]:
        return self.call("GET", f"/monitors/{_segment(monitor_id)}")

    def destroy_address_monitor(self, monitor_id: str) -> Any:
        return self.call("DELETE", f"/monitors/{_segment(monitor_id)}")

    def new_event_monitor(self, webhook_endpoint: str, event_type: str) -> dict[str, Any]:
        """event_type: block, issuance or broadcast."""
        body = {"monitorType": event_type, "webhookEndpoint": webhook_endpoint}
        return self.call("POST", "/event_monitors", body)

    def update_event_monitor(self, monitor_id: str, webhook_endpoint: str, event_type: str) -> dict[str, Any]:
        body = {"monitorType": event_type, "webhookEndpoint": webhook_endpoint}
        return self.call("PATCH", f"/event_monitors/{_segment(monitor_id)}", body)

    def get_event_monitor(self, monitor_id: str) -> dict[str, Any]:
        return self.call("GET", f"/event_monitors/{_segment(monitor_id)}")

    def destroy_event_monitor(self, monitor_id: str) -> Any:
        return self.call("DELETE", f"/event_monitors/{_segment(monitor_id)}")

    # ------------------------------------------------------------------
    # Sends

    def send_from_account(
        self,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        account: str = "default",
        unconfirmed: bool = False,
        fee: Any = None,
        dust_size: Any = None,
        request_id: str | None = None,
        custom_inputs: list[dict[str, Any]] | bool = False,
        fee_rate: str | None = None,
    ) -> dict[str, Any]:
        """
        Send funds from an account of a payment address. Confirmed funds go first.

        Args:
            fee: Exact BTC fee (deprecated; prefer fee_rate).
            custom_inputs: UTXOs to build the transaction from, [{"txid": ..., "n": 0}, ...].
            fee_rate: "low", "lowmed", "medium", "medhigh", "high", "6 blocks" or satoshis per byte.
        """
        body = _with_optional(
            {
                "destination": destination,
                "quantity": quantity,
                "asset": asset,
                "sweep": False,
                "unconfirmed": unconfirmed,
                "account": account,
                "utxo_override": custom_inputs,
            },
            fee=fee,
            dust_size=dust_size,
            requestId=request_id,
            feeRate=fee_rate,
        )
        return self.call("POST", f"/sends/{_segment(payment_address_id)}", body)

    def send_with_fee_rate(
        self,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        fee_rate: str = "medium",
        request_id: str | None = None,
    ) -> dict[str, Any]:
        return self.send_from_account(
            payment_address_id,
            destination,
            quantity,
            asset,
            unconfirmed=True,
            request_id=request_id,
            fee_rate=fee_rate,
        )

    def send(
        self,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        fee: Any = None,
        dust_size: Any = None,
        request_id: str | None = None,
        custom_inputs: list[dict[str, Any]] | bool = False,
    ) -> dict[str, Any]:
        """Send confirmed and unconfirmed funds. Prefer send_with_fee_rate()."""
        return self.send_from_account(
            payment_address_id,
            destination,
            quantity,
            asset,
            unconfirmed=True,
            fee=fee,
            dust_size=dust_size,
            request_id=request_id,
            custom_inputs=custom_inputs,
        )

    def send_confirmed(
        self,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        fee: Any = None,
        dust_size: Any = None,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        """Send only confirmed funds."""
        return self.send_from_account(
            payment_address_id,
            destination,
            quantity,
            asset,
            unconfirmed=False,
            fee=fee,
            dust_size=dust_size,
            request_id=request_id,
        )

    def create_unsigned_send(
        self,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        account: str = "default",
        unconfirmed: bool = False,
        fee: Any = None,
        dust_size: Any = None,
        request_id: str | None = None,
        custom_inputs: list[dict[str, Any]] | bool = False,
    ) -> dict[str, Any]:
        body = _with_optional(
            {
                "destination": destination,
                "quantity": quantity,
                "asset": asset,
                "unconfirmed": unconfirmed,
                "account": account,
                "utxo_override": custom_inputs,
            },
            fee=fee,
            dust_size=dust_size,
            requestId=request_id,
        )
        return self.call("POST", f"/unsigned/sends/{_segment(payment_address_id)}", body)

    def send_btc_to_multiple_destinations(
        self,
        payment_address_id: str,
        destinations: list[dict[str, Any]],
        account: str = "default",
        unconfirmed: bool = False,
        fee: Any = None,
        request_id: str | None = None,
        fee_rate: str | None = None,
    ) -> dict[str, Any]:
        """destinations: [{"address": "1XXX...", "amount": 0.001}, ...]"""
        body = _with_optional(
            {
                "destinations": destinations,
                "sweep": False,
                "unconfirmed": unconfirmed,
                "account": account,
            },
            fee=fee,
            requestId=request_id,
            feeRate=fee_rate,
        )
        return self.call("POST", f"/multisends/{_segment(payment_address_id)}", body)

    def sweep_all_assets(
        self,
        payment_address_id: str,
        destination: str,
        fee: Any = None,
        dust_size: Any = None,
        request_id: str | None = None,
        fee_rate: str | None = None,
    ) -> dict[str, Any]:
        """Send every asset and all BTC held by the address to destination."""
        body = _with_optional(
            {"destination": destination, "quantity": None, "asset": SWEEP_ALL_ASSETS, "sweep": True},
            fee=fee,
            dust_size=dust_size,
            requestId=request_id,
            feeRate=fee_rate,
        )
        return self.call("POST", f"/sends/{_segment(payment_address_id)}", body)

    # ------------------------------------------------------------------
    # Balances and assets

    def get_balances(self, address: str, as_satoshis: bool = False) -> dict[str, Any]:
        """Balances of any address as {"ASSET": value}. For payment addresses prefer get_account_balances()."""
        result = self.call("GET", f"/balances/{_segment(address)}")
        key = "balancesSat" if as_satoshis else "balances"
        return require(result, key, where="balances")

    def get_asset(self, asset: str) -> dict[str, Any]:
        return self.call("GET", f"/assets/{_segment(asset)}")

    def get_assets(self, assets: list[str]) -> list[dict[str, Any]]:
        return self.call("GET", "/assets", {"assets": list(assets)})

    # ------------------------------------------------------------------
    # Accounts

    def create_account(
        self,
        payment_address_uuid: str,
        account_name: str,
        meta_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body = _with_optional({"addressId": payment_address_uuid, "name": account_name}, meta=meta_data)
        return self.call("POST", "/accounts", body)

    def update_account(
        self,
        account_uuid: str,
        account_name: str | None = None,
        meta_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        body = _with_optional({}, name=account_name, meta=meta_data)
        return self.call("PATCH", f"/accounts/{_segment(account_uuid)}", body)

    def get_accounts(self, payment_address_uuid: str, active: bool = True) -> list[dict[str, Any]]:
        return self.call("GET", f"/accounts/{_segment(payment_address_uuid)}", {"active": active})

    def get_account(self, account_uuid: str) -> dict[str, Any]:
        return self.call("GET", f"/account/{_segment(account_uuid)}")

    def get_account_balances(
        self,
        payment_address_uuid: str,
        account_name: str,
        balance_type: str | None = None,
    ) -> Any:
        """
        Balances of one named account; the fastest way to read payment address balances.

        Without balance_type: {"confirmed": {...}, "unconfirmed": {...}, "sending": {...}}.
        With balance_type (confirmed, unconfirmed, sending): {"BTC": 10, "TOKENLY": 4}.
        Returns the empty result unchanged when no account matches.
        """
        params = _with_optional({"name": account_name}, type=balance_type)
        result = self.call("GET", f"/accounts/balances/{_segment(payment_address_uuid)}", params)
        if not result:
            return result
        accounts = as_list(result, where="account balances")
        return require(accounts[0], "balances", where="account balances[0]")

    def get_all_accounts_with_balances(self, payment_address_uuid: str) -> list[dict[str, Any]]:
        return self.call("GET", f"/accounts/balances/{_segment(payment_address_uuid)}")

    def transfer(
        self,
        payment_address_uuid: str,
        from_account: str,
        to_account: str,
        quantity: Any,
        asset: str,
        txid: str | None = None,
    ) -> bool:
        """
        Move funds between two accounts of one payment address.

        The destination account is created if it does not exist. Pass txid to
        move unconfirmed funds tagged with that transaction.

        Returns:
            True on success, False when the service reports ERR_INSUFFICIENT_FUNDS.

        Raises:
            XChainError: any other failure.
        """
        body = _with_optional(
            {"from": from_account, "to": to_account, "quantity": quantity, "asset": asset},
            txid=txid,
        )
        outcome = self.request("POST", f"/accounts/transfer/{_segment(payment_address_uuid)}", body)
        return transfer_succeeded(outcome)

    def transfer_all_by_transaction_id(
        self,
        payment_address_uuid: str,
        from_account: str,
        to_account: str,
        txid: str,
    ) -> Any:
        body = {"from": from_account, "to": to_account, "txid": txid}
        return self.call("POST", f"/accounts/transfer/{_segment(payment_address_uuid)}", body)

    def close_account(self, payment_address_uuid: str, from_account: str, to_account: str) -> bool:
        """Move everything from from_account to to_account and close from_account."""
        body = {"from": from_account, "to": to_account, "close": True}
        self.call("POST", f"/accounts/transfer/{_segment(payment_address_uuid)}", body)
        return True

    # ------------------------------------------------------------------
    # UTXOs and fees

    def check_primed_utxos(self, payment_address_uuid: str, utxo_size: Any) -> dict[str, Any]:
        """Returns {primedCount, totalCount, utxos: [...]}."""
        return self.call("GET", f"/primes/{_segment(payment_address_uuid)}", {"size": utxo_size})

    def prime_utxos_with_fee_rate(
        self,
        payment_address_uuid: str,
        utxo_size: Any,
        desired_count: int,
        fee_rate: str = "medium",
    ) -> dict[str, Any]:
        """Ensure the address holds desired_count UTXOs of utxo_size. Returns {primedCount, totalCount, txid, primed}."""
        body = {"size": utxo_size, "count": desired_count, "feeRate": fee_rate}
        return self.call("POST", f"/primes/{_segment(payment_address_uuid)}", body)

    def prime_utxos(
        self,
        payment_address_uuid: str,
        utxo_size: Any,
        desired_count: int,
        fee: Any = None,
    ) -> dict[str, Any]:
        """Deprecated form of prime_utxos_with_fee_rate() taking an exact fee."""
        body = _with_optional({"size": utxo_size, "count": desired_count}, fee=fee)
        return self.call("POST", f"/primes/{_segment(payment_address_uuid)}", body)

    def cleanup_utxos(
        self,
        payment_address_uuid: str,
        utxos_to_consolidate: int,
        priority: Any = None,
    ) -> dict[str, Any]:
        """Consolidate up to utxos_to_consolidate (max 150) UTXOs into one."""
        body = _with_optional({"max_utxos": utxos_to_consolidate}, priority=priority)
        return self.call("POST", f"/cleanup/{_segment(payment_address_uuid)}", body)

    def estimate_fee(
        self,
        priority: str | int,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        dust_size: Any = None,
    ) -> Quantity:
        return self.estimate_fee_from_account(
            priority,
            payment_address_id,
            destination,
            quantity,
            asset,
            unconfirmed=True,
            dust_size=dust_size,
        )

    def estimate_fee_from_account(
        self,
        priority: str | int,
        payment_address_id: str,
        destination: str,
        quantity: Any,
        asset: str,
        account: str = "default",
        unconfirmed: bool = False,
        dust_size: Any = None,
    ) -> Quantity:
        """
        Estimate the fee of a send.

        priority is a named level (low, med, high) or a number of satoshis per
        byte; numbers are multiplied by the estimated transaction size.
        """
        body = _with_optional(
            {
                "destination": destination,
                "quantity": quantity,
                "asset": asset,
                "sweep": False,
                "unconfirmed": unconfirmed,
                "account": account,
            },
            dust_size=dust_size,
        )
        result = self.call("POST", f"/estimatefee/{_segment(payment_address_id)}", body)
        return fee_from_estimate(result, priority)

    def get_fee_rates(self) -> dict[str, Any]:
        """Fee per byte estimates: {"low": 5, "medlow": 84, "medium": 118, "medhigh": 151, "high": 201}."""
        return self.call("GET", "/feerates")

    # ------------------------------------------------------------------
    # Messages

    def verify_message(self, address: str, sig: str, message: str) -> dict[str, Any]:
        return self.call("GET", f"/message/verify/{_segment(address)}", {"sig": sig, "message": message})

    def sign_message(self, address: str, message: str) -> dict[str, Any]:
        return self.call("POST", f"/message/sign/{_segment(address)}", {"message": message})


def transfer_succeeded(outcome: ApiOutcome) -> bool:
    """True on success, False on ERR_INSUFFICIENT_FUNDS, raise for anything else."""
    if isinstance(outcome, ServiceError) and outcome.error_name == ERR_INSUFFICIENT_FUNDS:
        return False
    outcome.unwrap()
    return True


def fee_from_estimate(result: Any, priority: str | int) -> Quantity:
    """Pick the fee for priority out of an /estimatefee response."""
    estimate = as_object(result, where="fee estimate")
    fees = estimate.get("fees")
    key = str(priority)
    if isinstance(fees, dict) and key in fees:
        return Quantity(require_number(fees, f"{key}Sat", where="fee estimate.fees"))
    try:
        # numeric strings such as "5.5" truncate to whole satoshis per byte
        per_byte = int(float(priority))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Unknown fee priority: {priority!r}") from None
    size = require_number(estimate, "size", where="fee estimate")
    return Quantity(per_byte * int(size))
