"""
Listing directories shown on the dashboards.

Why:
    Tutors browse students and students browse tutors. Both views load the
    counterpart listings once, show an inline message plus a "Try Again"
    action when the load fails, and filter the cached listings per category
    tab. This module is that behavior without any rendering.
"""
from __future__ import annotations

from typing import Awaitable, Callable, Generic, Iterator, List, Optional, TypeVar
import logging

from matching.categories import Category, filter_listings

from .api import MarketplaceClient
from .errors import ApiError
from .models import ApiResponse, Client, Tutor

logger = logging.getLogger("tutormatch.marketplace.directory")

L = TypeVar("L")


class ListingDirectory(Generic[L]):
    """Holds the last successfully loaded listings and the load status.

    Parameters
    ----------
    fetch:
        Coroutine function returning an `ApiResponse` with a list of records.
    noun:
        Plural used in the failure message ("tutors", "clients").
    """

    def __init__(self, fetch: Callable[[], Awaitable[ApiResponse[List[L]]]], *, noun: str) -> None:
        self._fetch = fetch
        self.noun = noun
        self.listings: List[L] = []
        self.loading = False
        self.error: Optional[str] = None

    @property
    def failure_message(self) -> str:
        return f"Failed to load {self.noun}. Please try again."

    async def load(self) -> bool:
        """Fetch listings; return False (and set `error`) on failure."""
        self.loading = True
        try:
            response = await self._fetch()
        except ApiError as exc:
            self.error = self.failure_message
            logger.warning("Loading %s failed: %s", self.noun, exc.code)
            return False
        finally:
            self.loading = False
        self.listings = list(response.data or [])
        self.error = None
        return True

    async def retry(self) -> bool:
        return await self.load()

    def filtered(self, category: Category | str = Category.ALL) -> Iterator[L]:
        return filter_listings(category, self.listings)

    @property
    def is_empty(self) -> bool:
        return not self.listings


def TutorDirectory(client: MarketplaceClient) -> ListingDirectory[Tutor]:
    """Directory of tutors, browsed by students."""
    return ListingDirectory(client.get_tutors, noun="tutors")


def StudentDirectory(client: MarketplaceClient) -> ListingDirectory[Client]:
    """Directory of students (clients), browsed by tutors."""
    return ListingDirectory(client.get_clients, noun="clients")


__all__ = ["ListingDirectory", "StudentDirectory", "TutorDirectory"]
