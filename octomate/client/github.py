"""GitHub REST API client.

Async implementation of ``RemoteClient`` on top of httpx.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from octomate import __version__
from octomate.client.base import RemoteClient
from octomate.config import GitHubSettings
from octomate.exceptions import RemoteError
from octomate.models import CreateGist, CreateIssue, CreateLabel, CreateTeam, RepositoryRef
from octomate.utils.logger import get_logger

logger = get_logger(__name__)

ME = "me"


@dataclass
class GitHubClientConfig:
    """Configuration for the GitHub client.

    Attributes:
        token: Personal access token
        base_url: REST API base URL
        api_version: Value of the X-GitHub-Api-Version header
        user_agent: User-Agent header
        timeout: Request timeout in seconds
        retry_count: Number of retries on transport errors and 5xx responses
        retry_delay: Base delay between retries in seconds
    """

    token: str
    base_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"
    user_agent: str = "octomate"
    timeout: float = 30.0
    retry_count: int = 3
    retry_delay: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.token:
            raise ValueError("GitHub token is required")
        if not self.base_url:
            raise ValueError("GitHub base URL is required")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")
        if self.retry_count < 0:
            raise ValueError("Retry count must be non-negative")

    @classmethod
    def from_settings(cls, settings: GitHubSettings, token: str | None = None) -> "GitHubClientConfig":
        """Build a config from settings, ``token`` taking precedence."""
        return cls(
            token=token or settings.token or "",
            base_url=settings.base_url,
            api_version=settings.api_version,
            user_agent=settings.user_agent,
            timeout=settings.timeout,
            retry_count=settings.retry_count,
            retry_delay=settings.retry_delay,
        )


class GitHubClient(RemoteClient):
    """Async GitHub client.

    Usage:
        async with GitHubClient(config) as client:
            number = await client.create_issue(repository, issue)
    """

    def __init__(
        self,
        config: GitHubClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Client configuration
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport
        self._http: httpx.AsyncClient | None = None
        self._login: str | None = None
        self._login_lock = asyncio.Lock()

    async def __aenter__(self) -> "GitHubClient":
        self._http = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={
                "Authorization": f"Bearer {self.config.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": self.config.api_version,
                "User-Agent": f"{self.config.user_agent}/{__version__}",
            },
            timeout=self.config.timeout,
            transport=self._transport,
        )
        logger.debug(f"GitHub client ready: {self.config.base_url}")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.debug("GitHub client closed")

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            RemoteError: On a non-2xx response or when retries are exhausted.
        """
        if self._http is None:
            raise RemoteError("Client not initialized. Use 'async with' context manager.")

        attempts = self.config.retry_count + 1
        last_error: str | None = None

        for attempt in range(attempts):
            try:
                logger.debug(f"{method} {path}")
                response = await self._http.request(method, path, json=payload)
            except httpx.TransportError as e:
                last_error = f"{type(e).__name__}: {e}"
                logger.warning(f"{method} {path} failed (attempt {attempt + 1}/{attempts}): {last_error}")
            else:
                if response.status_code < 500:
                    return self._decode(method, path, response)
                last_error = f"HTTP {response.status_code}"
                logger.warning(
                    f"{method} {path} returned {response.status_code} (attempt {attempt + 1}/{attempts})"
                )

            if attempt < self.config.retry_count:
                delay = self.config.retry_delay * (2**attempt)
                logger.debug(f"Retrying in {delay} seconds...")
                await asyncio.sleep(delay)

        raise RemoteError(
            f"{method} {path} failed after {attempts} attempts: {last_error}",
            details={"last_error": last_error},
        )

    def _decode(self, method: str, path: str, response: httpx.Response) -> Any:
        try:
            body = response.json() if response.content else None
        except ValueError:
            body = {"message": response.text}

        if response.is_success:
            return body

        details: dict[str, Any] = {}
        message = response.reason_phrase
        if isinstance(body, dict):
            message = body.get("message") or message
            if body.get("errors"):
                details["errors"] = body["errors"]
            if body.get("documentation_url"):
                details["documentation_url"] = body["documentation_url"]

        raise RemoteError(
            f"{method} {path} failed ({response.status_code}): {message}",
            status_code=response.status_code,
            details=details,
        )

    @staticmethod
    def _field(body: Any, key: str, request: str) -> Any:
        """Return ``body[key]`` from a 2xx response, or raise RemoteError if absent."""
        if not isinstance(body, dict) or key not in body:
            raise RemoteError(
                f"{request} succeeded but the response has no '{key}'",
                details={"body": body},
            )
        return body[key]

    async def resolve_owner(self, owner: str) -> str:
        """Replace the ``me`` placeholder with the authenticated login."""
        if owner != ME:
            return owner

        async with self._login_lock:
            if self._login is None:
                user = await self._request("GET", "/user")
                self._login = self._field(user, "login", "GET /user")
                logger.debug(f"Resolved '{ME}' to {self._login}")
        return self._login

    async def _repo_path(self, repository: RepositoryRef) -> str:
        owner = await self.resolve_owner(repository.owner)
        return f"/repos/{owner}/{repository.name}"

    async def create_issue(self, repository: RepositoryRef, fields: CreateIssue) -> int:
        payload: dict[str, Any] = {
            "title": fields.title,
            "body": fields.body,
            "assignees": list(fields.assignees),
            "labels": list(fields.labels),
        }
        if fields.milestone is not None:
            payload["milestone"] = fields.milestone

        path = f"{await self._repo_path(repository)}/issues"
        issue = await self._request("POST", path, payload)
        return self._field(issue, "number", f"POST {path}")

    async def create_gist(self, fields: CreateGist) -> str:
        payload = {
            "description": fields.description or "",
            "public": fields.public,
            "files": {fields.title: {"content": fields.content}},
        }
        gist = await self._request("POST", "/gists", payload)
        return self._field(gist, "id", "POST /gists")

    async def create_team(
        self,
        owner: str,
        fields: CreateTeam,
        repositories: Sequence[RepositoryRef] = (),
    ) -> int:
        org = await self.resolve_owner(owner)
        repo_names = []
        for repository in repositories:
            repo_owner = await self.resolve_owner(repository.owner)
            repo_names.append(f"{repo_owner}/{repository.name}")

        payload: dict[str, Any] = {
            "name": fields.name,
            "maintainers": list(fields.maintainers),
            "repo_names": repo_names,
        }
        if fields.description is not None:
            payload["description"] = fields.description

        path = f"/orgs/{org}/teams"
        team = await self._request("POST", path, payload)
        return self._field(team, "id", f"POST {path}")

    async def create_label(self, repository: RepositoryRef, fields: CreateLabel) -> None:
        payload = {"name": fields.name, "color": fields.color}
        if fields.description is not None:
            payload["description"] = fields.description

        await self._request("POST", f"{await self._repo_path(repository)}/labels", payload)
