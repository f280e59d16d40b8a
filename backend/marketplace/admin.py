"""
Admin console: platform stats plus edit/delete of tutor and student records.

Permissions:
    Caller must be signed in with an address on the admin allow-list
    (`SessionState.is_admin`). The backend re-checks via `X-User-Email`.
"""
from __future__ import annotations

from typing import List, Optional
import asyncio
import logging

from identity_access.domain import SessionState

from .api import MarketplaceClient
from .errors import ApiError
from .models import AdminStats, Client, Tutor

logger = logging.getLogger("tutormatch.marketplace.admin")


class AdminAccessDenied(PermissionError):
    pass


class AdminConsole:
    def __init__(self, client: MarketplaceClient, session: SessionState) -> None:
        principal = session.principal
        if not session.is_admin or principal is None or not principal.email:
            raise AdminAccessDenied("admin_required")
        self._client = client
        self._admin_email = principal.email
        self.stats: Optional[AdminStats] = None
        self.tutors: List[Tutor] = []
        self.clients: List[Client] = []
        self.loading = False
        self.error: Optional[str] = None

    async def load(self) -> bool:
        self.loading = True
        try:
            results = await asyncio.gather(
                self._client.get_admin_stats(self._admin_email),
                self._client.get_tutors(),
                self._client.get_clients(),
                return_exceptions=True,
            )
        finally:
            self.loading = False
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for failure in failures:
                if not isinstance(failure, ApiError):
                    raise failure
            self.error = "Failed to load admin data"
            logger.warning("Admin load failed: %s", ", ".join(f.code for f in failures))
            return False
        stats, tutors, clients = results
        self.stats = stats.data
        self.tutors = list(tutors.data)
        self.clients = list(clients.data)
        return True

    async def _mutate(self, action, failure: str) -> bool:
        try:
            await action
        except ApiError as exc:
            self.error = failure
            logger.warning("%s: %s", failure, exc.code)
            return False
        return await self.load()

    async def save_tutor(self, tutor_id: int, tutor: Tutor) -> bool:
        return await self._mutate(self._client.update_tutor(tutor_id, tutor, self._admin_email), "Failed to update tutor")

    async def save_client(self, client_id: int, client: Client) -> bool:
        return await self._mutate(self._client.update_client(client_id, client, self._admin_email), "Failed to update client")

    async def delete_tutor(self, tutor_id: int) -> bool:
        return await self._mutate(self._client.delete_tutor(tutor_id, self._admin_email), "Failed to delete tutor")

    async def delete_client(self, client_id: int) -> bool:
        return await self._mutate(self._client.delete_client(client_id, self._admin_email), "Failed to delete client")

    def dismiss_error(self) -> None:
        self.error = None


__all__ = ["AdminAccessDenied", "AdminConsole"]
