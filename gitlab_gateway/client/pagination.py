"""
Pagination Helper.

Walks every page of a GitLab list endpoint and exposes the items as one
lazily fetched async sequence. GitLab reports the next page in the
X-Next-Page header (empty on the last page). When that header is absent,
as with keyset pagination, the URL of the RFC 5988 `next` Link relation is
requested as-is.

Usage:
    result = client.paginate("/groups", {"owned": True})
    async for group in result:
        ...
    groups = await client.paginate("/groups").to_list()
"""

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from gitlab_gateway.client.client import GitLabClient


def next_page(response: httpx.Response) -> str | None:
    """
    Read the next page number from the X-Next-Page header.

    Returns:
        Next page number as a string, or None when the header is absent or empty
    """
    return response.headers.get("X-Next-Page", "").strip() or None


def next_link(response: httpx.Response) -> str | None:
    """Read the URL of the `next` Link relation, if any."""
    link = response.links.get("next")
    if link and link.get("url"):
        return link["url"]
    return None


class PaginatedResult:
    """
    Lazy sequence over every item of every page.

    Nothing is fetched until iteration starts. Pages are requested one at a
    time; a page whose body is not a list is yielded as a single item and
    ends the iteration.
    """

    def __init__(
        self,
        client: "GitLabClient",
        path: str,
        params: dict[str, Any] | None = None,
        per_page: int = 100,
    ) -> None:
        self.client = client
        self.path = path
        self.params = dict(params or {})
        self.per_page = self.params.pop("per_page", per_page)
        self.start_page = self.params.pop("page", 1)

    def _page_params(self, page: str | int) -> dict[str, Any]:
        return {**self.params, "page": page, "per_page": self.per_page}

    def _next_request(self, response: httpx.Response) -> tuple[str, dict[str, Any] | None] | None:
        """Where the following page lives: (path or absolute URL, query params)."""
        if "X-Next-Page" in response.headers:
            page = next_page(response)
            return (self.path, self._page_params(page)) if page else None

        url = next_link(response)
        # The link already carries every query parameter
        return (url, None) if url else None

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Any]:
        request: tuple[str, dict[str, Any] | None] | None = (self.path, self._page_params(self.start_page))
        while request is not None:
            path, params = request
            response = await self.client.request("GET", path, params=params)
            body = self.client.decode(response)

            if not isinstance(body, list):
                yield body
                return

            for item in body:
                yield item

            request = self._next_request(response)

    async def to_list(self) -> list[Any]:
        """Fetch every page and return all items."""
        return [item async for item in self]
