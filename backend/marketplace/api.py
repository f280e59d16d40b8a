"""
REST client for the tutors/clients/admin backend.

Why: Keep HTTP details (envelopes, status handling, admin header) out of the
session resolver and the view-models. Each public method is one request with
no retry; failures surface as `NetworkFailure` or `NotFound`.

Security: Admin calls identify the caller via the `X-User-Email` header; the
backend enforces the allow-list. Request bodies and addresses are not logged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import logging

import httpx

# Small indirection to ease monkeypatching in tests
import requests as http

from identity_access.domain import Role, mask_email

from .config import get_api_base_url, get_health_url, get_request_timeout
from .errors import ApiError, NetworkFailure, NotFound
from .models import AdminStats, ApiResponse, Client, HealthStatus, Tutor

logger = logging.getLogger("tutormatch.marketplace.api")

ADMIN_HEADER = "X-User-Email"


@dataclass(frozen=True)
class ProfileCheck:
    has_profile: bool
    role: Optional[Role] = None
    profile: Tutor | Client | None = None


def _envelope_message(body: Any) -> str:
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or "")
    return ""


class MarketplaceClient:
    """Async client; use as `async with MarketplaceClient() as api: ...`.

    Parameters
    ----------
    base_url:
        API root such as `http://localhost:8080/api`. Defaults to config.
    timeout:
        Per-request timeout in seconds. Defaults to config.
    transport:
        Optional httpx transport (tests pass `httpx.MockTransport`).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_request_timeout()
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._http

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "MarketplaceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        admin_email: str | None = None,
    ) -> Dict[str, Any]:
        headers = {ADMIN_HEADER: admin_email} if admin_email else None
        try:
            resp = await self._client().request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path.split("/")[1], exc.__class__.__name__)
            raise NetworkFailure("request_failed", message=str(exc) or exc.__class__.__name__) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code == 404:
            raise NotFound("not_found", status_code=404, message=_envelope_message(body) or "not_found")
        if not resp.is_success:
            raise NetworkFailure(
                f"http_{resp.status_code}",
                status_code=resp.status_code,
                message=f"HTTP error! status: {resp.status_code}",
            )
        if not isinstance(body, dict):
            raise NetworkFailure("invalid_body", status_code=resp.status_code)
        return body

    @staticmethod
    def _wrap(body: Dict[str, Any], data: Any) -> ApiResponse:
        return ApiResponse(data=data, message=str(body.get("message") or ""), status=str(body.get("status") or ""))

    # --- Tutors -----------------------------------------------------------

    async def get_tutors(self) -> ApiResponse[List[Tutor]]:
        body = await self._request("GET", "/tutors")
        rows = body.get("data") or []
        return self._wrap(body, [Tutor.from_dict(r) for r in rows if isinstance(r, dict)])

    async def get_tutor_by_email(self, email: str) -> ApiResponse[Optional[Tutor]]:
        body = await self._request("GET", f"/tutors/by-email/{quote(email, safe='')}")
        data = body.get("data")
        return self._wrap(body, Tutor.from_dict(data) if isinstance(data, dict) else None)

    async def create_tutor(self, tutor: Tutor) -> ApiResponse[Tutor]:
        body = await self._request("POST", "/tutors", json=tutor.to_payload())
        data = body.get("data")
        return self._wrap(body, Tutor.from_dict(data) if isinstance(data, dict) else tutor)

    # --- Clients (students) -----------------------------------------------

    async def get_clients(self) -> ApiResponse[List[Client]]:
        body = await self._request("GET", "/clients")
        rows = body.get("data") or []
        return self._wrap(body, [Client.from_dict(r) for r in rows if isinstance(r, dict)])

    async def get_client_by_email(self, email: str) -> ApiResponse[Optional[Client]]:
        body = await self._request("GET", f"/clients/by-email/{quote(email, safe='')}")
        data = body.get("data")
        return self._wrap(body, Client.from_dict(data) if isinstance(data, dict) else None)

    async def create_client(self, client: Client) -> ApiResponse[Client]:
        body = await self._request("POST", "/clients", json=client.to_payload())
        data = body.get("data")
        return self._wrap(body, Client.from_dict(data) if isinstance(data, dict) else client)

    # --- Admin ------------------------------------------------------------

    async def update_tutor(self, tutor_id: int, tutor: Tutor, admin_email: str) -> ApiResponse[Tutor]:
        body = await self._request("PUT", f"/admin/tutors/{int(tutor_id)}", json=tutor.to_payload(), admin_email=admin_email)
        data = body.get("data")
        return self._wrap(body, Tutor.from_dict(data) if isinstance(data, dict) else tutor)

    async def delete_tutor(self, tutor_id: int, admin_email: str) -> ApiResponse[None]:
        body = await self._request("DELETE", f"/admin/tutors/{int(tutor_id)}", admin_email=admin_email)
        return self._wrap(body, None)

    async def update_client(self, client_id: int, client: Client, admin_email: str) -> ApiResponse[Client]:
        body = await self._request("PUT", f"/admin/clients/{int(client_id)}", json=client.to_payload(), admin_email=admin_email)
        data = body.get("data")
        return self._wrap(body, Client.from_dict(data) if isinstance(data, dict) else client)

    async def delete_client(self, client_id: int, admin_email: str) -> ApiResponse[None]:
        body = await self._request("DELETE", f"/admin/clients/{int(client_id)}", admin_email=admin_email)
        return self._wrap(body, None)

    async def get_admin_stats(self, admin_email: str) -> ApiResponse[AdminStats]:
        body = await self._request("GET", "/admin/stats", admin_email=admin_email)
        data = body.get("data")
        return self._wrap(body, AdminStats.from_dict(data if isinstance(data, dict) else {}))

    # --- Composite --------------------------------------------------------

    async def check_user_profile(self, email: str) -> ProfileCheck:
        """Look for an existing profile, Student (client) first, never raising."""
        for role, lookup in ((Role.STUDENT, self.get_client_by_email), (Role.TUTOR, self.get_tutor_by_email)):
            try:
                response = await lookup(email)
            except NotFound:
                continue
            except ApiError as exc:
                logger.warning("Profile check failed for %s: %s", mask_email(email), exc.code)
                break
            if response.data:
                return ProfileCheck(has_profile=True, role=role, profile=response.data)
        return ProfileCheck(has_profile=False)


def check_backend_health(url: str | None = None, *, timeout: float | None = None) -> HealthStatus:
    """Synchronous readiness probe against `GET /health`.

    Raises `NetworkFailure` when the backend is unreachable or answers with a
    non-success status.
    """
    target = url or get_health_url()
    try:
        resp = http.get(target, timeout=timeout if timeout is not None else get_request_timeout())
    except http.RequestException as exc:
        raise NetworkFailure("health_unreachable", message=exc.__class__.__name__) from exc
    if resp.status_code != 200:
        raise NetworkFailure(f"http_{resp.status_code}", status_code=resp.status_code)
    try:
        body = resp.json()
    except ValueError as exc:
        raise NetworkFailure("invalid_body", status_code=resp.status_code) from exc
    if not isinstance(body, dict):
        raise NetworkFailure("invalid_body", status_code=resp.status_code)
    return HealthStatus(status=str(body.get("status") or ""), message=str(body.get("message") or ""))


__all__ = ["ADMIN_HEADER", "MarketplaceClient", "ProfileCheck", "check_backend_health"]
