"""Pytest configuration and shared fixtures."""

import asyncio
from collections.abc import Sequence
from pathlib import Path

import pytest

from octomate.client import RemoteClient
from octomate.exceptions import RemoteError
from octomate.models import CreateGist, CreateIssue, CreateLabel, CreateTeam, RepositoryRef


class FakeClient(RemoteClient):
    """In-memory remote client recording every call.

    ``failures`` maps ``(operation, target)`` to the error raised for that
    call, where target is the repository full name, ``"gist"`` for gists
    and the first repository for teams.
    """

    def __init__(self, failures: dict[tuple[str, str], Exception] | None = None):
        self.calls: list[tuple[str, str, str]] = []
        self.failures = failures or {}
        self.entered = False
        self.exited = False
        self._next_id = 0

    def _record(self, operation: str, target: str, label: str) -> int:
        self.calls.append((operation, target, label))
        error = self.failures.get((operation, target))
        if error is not None:
            raise error
        self._next_id += 1
        return self._next_id

    async def create_issue(self, repository: RepositoryRef, fields: CreateIssue) -> int:
        await asyncio.sleep(0)
        return self._record("create_issue", repository.full_name, fields.title)

    async def create_gist(self, fields: CreateGist) -> str:
        await asyncio.sleep(0)
        return f"gist-{self._record('create_gist', 'gist', fields.title)}"

    async def create_team(
        self,
        owner: str,
        fields: CreateTeam,
        repositories: Sequence[RepositoryRef] = (),
    ) -> int:
        await asyncio.sleep(0)
        target = repositories[0].full_name if repositories else owner
        return self._record("create_team", target, fields.name)

    async def create_label(self, repository: RepositoryRef, fields: CreateLabel) -> None:
        await asyncio.sleep(0)
        self._record("create_label", repository.full_name, fields.name)

    async def __aenter__(self) -> "FakeClient":
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.exited = True

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def fake_client_cls() -> type[FakeClient]:
    """The FakeClient class, for tests that subclass it."""
    return FakeClient


@pytest.fixture
def fake_client() -> FakeClient:
    """Remote client that succeeds for every call."""
    return FakeClient()


@pytest.fixture
def failing_client_factory():
    """Build a FakeClient with the given failures."""

    def factory(failures: dict[tuple[str, str], Exception]) -> FakeClient:
        return FakeClient(failures)

    return factory


@pytest.fixture
def remote_error():
    """Build a RemoteError the way GitHubClient reports a 422."""

    def factory(message: str = "Validation Failed", errors: list | None = None) -> RemoteError:
        return RemoteError(
            f"POST /orgs/me/teams failed (422): {message}",
            status_code=422,
            details={"errors": errors or []},
        )

    return factory


SAMPLE_BATCH = """
version: "1.0"
name: Test
jobs:
  - name: "Perform some basics things for some repos"
    on-repositories:
      - owner: me
        name: repo1
      - owner: octo-org
        name: repo2
    steps:
      - name: Labels
        runs:
          - create-label:
              name: "bug"
              color: "f29513"
              description: "Something isn't working"
      - name: Issues
        runs:
          - create-issue:
              title: "Hello world"
              body: "First issue"
              labels: ["bug"]
"""


@pytest.fixture
def sample_batch_text() -> str:
    """Valid batch document with two repositories and two steps."""
    return SAMPLE_BATCH


@pytest.fixture
def sample_batch_file(tmp_path: Path) -> Path:
    """Valid batch document written to disk."""
    batch_file = tmp_path / "batch.yaml"
    batch_file.write_text(SAMPLE_BATCH)
    return batch_file


@pytest.fixture
def sample_config(tmp_path: Path) -> Path:
    """Create a sample configuration file."""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
version: "1.0"

github:
  base_url: "https://github.example.com/api/v3"
  timeout: 10
  retry_count: 1

batch:
  max_concurrent: 2
""")
    return config_file
