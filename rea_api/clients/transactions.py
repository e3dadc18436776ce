from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from rea_api.domain.constants import REQUEST_ID_HEADER
from rea_api.domain.errors import TransactionGatewayError, TransactionNotFoundError
from rea_api.domain.models import Transaction, TransactionResource

logger = logging.getLogger("rea_api.transactions")


def transaction_from_json(payload: dict[str, Any]) -> Transaction:
    raw_resources = payload.get("resources") or {}
    resources = {
        str(uri): TransactionResource(
            kind=str(item.get("kind") or ""),
            links={str(key): str(value) for key, value in (item.get("links") or {}).items()},
        )
        for uri, item in raw_resources.items()
    }
    return Transaction(
        id=str(payload["id"]),
        company_number=payload.get("company_number"),
        status=payload.get("status"),
        resources=resources,
    )


def resources_to_json(resources: dict[str, TransactionResource]) -> dict[str, dict[str, object]]:
    return {uri: {"kind": item.kind, "links": dict(item.links)} for uri, item in resources.items()}


@dataclass
class HttpTransactionGateway:
    """Transactions service client over HTTP.

    `read_resources` re-reads the transaction so the merge in the workflow is
    applied to the current resource map, not the one captured with the request.
    """

    base_url: str
    api_key: str | None = None
    timeout_seconds: float = 10.0
    client: httpx.AsyncClient | None = None

    async def startup(self) -> None:
        if self.client is None:
            self.client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout_seconds)

    async def shutdown(self) -> None:
        if self.client is None:
            return
        await self.client.aclose()
        self.client = None

    def _client(self) -> httpx.AsyncClient:
        if self.client is None:
            raise TransactionGatewayError("transactions client is not initialized")
        return self.client

    def _headers(self, request_id: str) -> dict[str, str]:
        headers = {REQUEST_ID_HEADER: request_id}
        if self.api_key:
            headers["Authorization"] = self.api_key
        return headers

    async def get_transaction(self, *, transaction_id: str, request_id: str) -> Transaction:
        try:
            response = await self._client().get(
                f"/transactions/{transaction_id}",
                headers=self._headers(request_id),
            )
        except httpx.HTTPError as exc:
            raise TransactionGatewayError(f"transactions service unavailable: {exc}") from exc
        if response.status_code == 404:
            raise TransactionNotFoundError(f"transaction is not found: {transaction_id}")
        if response.status_code >= 400:
            raise TransactionGatewayError(
                f"transactions service returned {response.status_code} for {transaction_id}"
            )
        try:
            return transaction_from_json(response.json())
        except (ValueError, KeyError, AttributeError) as exc:
            raise TransactionGatewayError(f"malformed transaction payload for {transaction_id}") from exc

    async def read_resources(
        self,
        *,
        transaction: Transaction,
        request_id: str,
    ) -> dict[str, TransactionResource]:
        current = await self.get_transaction(transaction_id=transaction.id, request_id=request_id)
        return dict(current.resources)

    async def update_resources(
        self,
        *,
        transaction: Transaction,
        resources: dict[str, TransactionResource],
        request_id: str,
    ) -> None:
        try:
            response = await self._client().patch(
                f"/private/transactions/{transaction.id}",
                headers=self._headers(request_id),
                json={"resources": resources_to_json(resources)},
            )
        except httpx.HTTPError as exc:
            raise TransactionGatewayError(f"transactions service unavailable: {exc}") from exc
        if response.status_code >= 400:
            raise TransactionGatewayError(
                f"transactions service returned {response.status_code} updating {transaction.id}"
            )
        logger.debug(
            "transaction resources updated",
            extra={"request_id": request_id, "transaction_id": transaction.id},
        )
