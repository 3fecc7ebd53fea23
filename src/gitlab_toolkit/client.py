"""GitLab API client using httpx."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from .config import GitLabConfig
from .errors import extract_error_message
from .exceptions import (
    GitLabApiError,
    GitLabAuthError,
    GitLabNotFoundError,
    InvalidResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


def encode_path(value: str) -> str:
    """Percent-encode a nested identifier (file path, branch) as one path segment."""
    return quote(value, safe="")


class GitLabClient:
    """Async HTTP client for the GitLab REST API v4.

    Every call opens its own ``httpx.AsyncClient``; nothing is pooled or kept
    between requests.
    """

    def __init__(
        self,
        config: GitLabConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or GitLabConfig.from_env()
        self.config.validate()
        self._transport = transport

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _encode_id(project_id: str | int) -> str:
        """Encode a project ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        try:
            return str(int(project_id))
        except ValueError:
            return quote(project_id, safe="")

    def build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Join the API root, a resource path and query params (in the order given)."""
        url = f"{self.config.api_url}/{path.lstrip('/')}"
        if params:
            url += "?" + urlencode([(k, str(v)) for k, v in params.items()])
        return url

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
        raw: bool = False,
    ) -> Any:
        """Make an API request and return parsed JSON (or raw text if raw=True)."""
        url = self.build_url(path, params)
        headers = {"PRIVATE-TOKEN": self.config.token}

        kwargs: dict[str, Any] = {"headers": headers}
        if json_data is not None:
            headers["Content-Type"] = "application/json"
            kwargs["json"] = json_data

        logger.debug("%s %s", method, url)
        async with httpx.AsyncClient(
            timeout=self.config.timeout,
            verify=self.config.ssl_verify,
            transport=self._transport,
        ) as http:
            resp = await http.request(method, url, **kwargs)
        logger.debug("%s %s -> %s", method, url, resp.status_code)

        if resp.status_code == 204:
            return None

        if not resp.is_success:
            raise self._error_for(resp)

        if raw:
            return resp.text

        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as e:
            msg = f"Invalid JSON response from {method} {path}"
            raise InvalidResponseError(msg) from e

    @staticmethod
    def _error_for(resp: httpx.Response) -> GitLabApiError:
        status_text = resp.reason_phrase or ""
        message = extract_error_message(resp.status_code, status_text, resp.text)
        if resp.status_code in (401, 403):
            return GitLabAuthError(resp.status_code, message, resp.text)
        if resp.status_code == 404:
            return GitLabNotFoundError(message, resp.text)
        return GitLabApiError(resp.status_code, status_text, message, resp.text)

    async def get(
        self, path: str, params: dict[str, Any] | None = None, *, raw: bool = False
    ) -> Any:
        return await self.request("GET", path, params=params, raw=raw)

    async def post(self, path: str, json_data: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, json_data=json_data, **kwargs)

    async def put(self, path: str, json_data: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, json_data=json_data, **kwargs)

    async def paginate(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> list[Any]:
        """Fetch every page of a list endpoint, starting from page 1.

        Stops on an empty or non-list page, or on a page shorter than ``per_page``.
        """
        params = dict(params or {})
        try:
            requested = int(params.get("per_page", per_page))
        except (TypeError, ValueError):
            requested = per_page
        if requested > 0:
            per_page = requested

        results: list[Any] = []
        page = 1
        while True:
            batch = await self.get(path, params={**params, "page": page, "per_page": per_page})
            if not isinstance(batch, list) or not batch:
                break
            results.extend(batch)
            if len(batch) < per_page:
                break
            page += 1
        return results

    # ── Repository files ──────────────────────────────────────────

    async def get_file_raw(self, project_id: str | int, file_path: str, ref: str = "") -> str:
        enc = self._encode_id(project_id)
        params = {"ref": ref} if ref else None
        return await self.get(
            f"/projects/{enc}/repository/files/{encode_path(file_path)}/raw",
            params=params,
            raw=True,
        )

    # ── Merge Requests ────────────────────────────────────────────

    async def get_merge_request(self, project_id: str | int, mr_iid: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/merge_requests/{mr_iid}")

    async def create_merge_request(self, project_id: str | int, params: dict[str, Any]) -> dict:
        enc = self._encode_id(project_id)
        return await self.post(f"/projects/{enc}/merge_requests", params)

    async def update_merge_request(
        self, project_id: str | int, mr_iid: int, params: dict[str, Any]
    ) -> dict:
        enc = self._encode_id(project_id)
        return await self.put(f"/projects/{enc}/merge_requests/{mr_iid}", params)

    # ── MR Discussions ────────────────────────────────────────────

    async def list_mr_discussions(self, project_id: str | int, mr_iid: int) -> list[dict]:
        enc = self._encode_id(project_id)
        return await self.paginate(f"/projects/{enc}/merge_requests/{mr_iid}/discussions")

    async def create_mr_discussion(
        self, project_id: str | int, mr_iid: int, params: dict[str, Any]
    ) -> dict:
        enc = self._encode_id(project_id)
        return await self.post(f"/projects/{enc}/merge_requests/{mr_iid}/discussions", params)

    async def reply_to_discussion(
        self, project_id: str | int, mr_iid: int, discussion_id: str, body: str
    ) -> dict:
        enc = self._encode_id(project_id)
        return await self.post(
            f"/projects/{enc}/merge_requests/{mr_iid}/discussions/{discussion_id}/notes",
            {"body": body},
        )

    # ── Pipelines ─────────────────────────────────────────────────

    async def list_pipelines(
        self, project_id: str | int, params: dict[str, Any] | None = None
    ) -> list[dict]:
        enc = self._encode_id(project_id)
        p = {"per_page": 20, **(params or {})}
        return await self.get(f"/projects/{enc}/pipelines", params=p)

    async def list_pipeline_jobs(self, project_id: str | int, pipeline_id: int) -> list[dict]:
        enc = self._encode_id(project_id)
        return await self.get(
            f"/projects/{enc}/pipelines/{pipeline_id}/jobs",
            params={"per_page": DEFAULT_PER_PAGE},
        )

    # ── Jobs ──────────────────────────────────────────────────────

    async def get_job(self, project_id: str | int, job_id: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.get(f"/projects/{enc}/jobs/{job_id}")

    async def retry_job(self, project_id: str | int, job_id: int) -> dict:
        enc = self._encode_id(project_id)
        return await self.post(f"/projects/{enc}/jobs/{job_id}/retry")

    async def get_job_log(self, project_id: str | int, job_id: int) -> str:
        enc = self._encode_id(project_id)
        return await self.get(
            f"/projects/{enc}/jobs/{job_id}/trace",
            raw=True,
        )
