# app/client/api.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class OrdersApiError(Exception):
    """Falha de rede ou resposta não-2xx da API de ordens."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class OrdersClient:
    """Cliente HTTP da API: login, lista de ordens e troca de estado.

    A sessão é o cookie ``AuthToken`` guardado no cookie jar do ``httpx``;
    quando o servidor renova o token, o jar recebe o cookie novo sozinho.
    Sem retry: o erro sobe como ``OrdersApiError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url or settings.ORDERS_API_URL,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "OrdersClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            r = self._http.request(method, url, **kwargs)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise OrdersApiError(
                f"{method} {url} -> {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise OrdersApiError(f"{method} {url} failed: {e}") from e
        return r

    def _json(self, r: httpx.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise OrdersApiError(
                f"{r.request.method} {r.request.url.path} returned a non-JSON body",
                status_code=r.status_code,
            ) from e

    def login(self, email: str, password: str) -> Dict[str, Any]:
        r = self._request("POST", "/auth/login", json={"email": email, "password": password})
        logger.info("client.login", extra={"email": email})
        return self._json(r)

    def logout(self) -> None:
        self._request("POST", "/auth/logout")
        self._http.cookies.clear()

    def list(self) -> List[Dict[str, Any]]:
        r = self._request("GET", "/orders")
        rows = self._json(r)
        if not isinstance(rows, list):
            raise OrdersApiError("GET /orders returned a non-list body", status_code=r.status_code)
        return rows

    def change_status(self, order_id: int, status_code: int) -> None:
        # 2xx basta: o corpo (pode vir vazio ou 204) não é usado
        self._request("PUT", f"/orders/{order_id}/status/{status_code}")
