"""
OurNotes — Note Service HTTP Client
=====================================

What:  Thin async wrapper around the /api/{kind} endpoints.
How:   httpx.AsyncClient with the service base URL. Every failure (transport
       error, non-2xx status, body that is not JSON) is raised as a
       NetworkError whose message names the action, e.g.
       "Failed to add map note". The HTTP status is kept on the exception so
       callers can tell a 404 apart from an outage.
Who:   Used by NoteCache.

No retries and no explicit deadlines: timeouts are httpx's defaults.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ournotes.exceptions import NetworkError
from ournotes.kinds import NoteKind

logger = logging.getLogger(__name__)


class NotesApiClient:
    """
    Calls the Note Service for one base URL.

    Args:
        base_url: Service root, e.g. "http://localhost:8787"
        http:     Pre-built AsyncClient (tests pass one with a MockTransport);
                  its own base_url is used as-is when given.
    """

    def __init__(self, base_url: str, http: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url
        self._http = http or httpx.AsyncClient(base_url=base_url)

    async def list_notes(self, kind: NoteKind) -> List[Dict[str, Any]]:
        return await self._request(
            "GET", f"/api/{kind.slug}", failure=kind.failure_message("fetch", many=True)
        )

    async def create_note(self, kind: NoteKind, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "POST", f"/api/{kind.slug}", json=payload, failure=kind.failure_message("add")
        )

    async def update_note(
        self, kind: NoteKind, note_id: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            f"/api/{kind.slug}/{note_id}",
            json=payload,
            failure=kind.failure_message("update"),
        )

    async def delete_note(self, kind: NoteKind, note_id: str) -> None:
        await self._request(
            "DELETE", f"/api/{kind.slug}/{note_id}", failure=kind.failure_message("delete")
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            NetworkError: status_code None for transport failures, the HTTP
                status for non-2xx responses and undecodable bodies.
        """
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise NetworkError(
                message=failure,
                context={"method": method, "path": path, "reason": str(e)},
            ) from e

        if response.is_error:
            raise NetworkError(
                message=failure,
                status_code=response.status_code,
                context={"method": method, "path": path, "body": response.text[:200]},
            )

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(
                message=failure,
                status_code=response.status_code,
                context={"method": method, "path": path, "reason": "body is not JSON"},
            ) from e
