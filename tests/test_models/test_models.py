"""Tests for data models."""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from octomate.models import (
    COMMAND_TYPES,
    Batch,
    BatchReport,
    CreateGist,
    CreateIssue,
    CreateLabel,
    CreateTeam,
    ExecutionResult,
    ExecutionStatus,
    Job,
    RepositoryRef,
    Step,
)


def _result(status: ExecutionStatus = ExecutionStatus.SUCCESS, **kwargs) -> ExecutionResult:
    values = {
        "job_index": 0,
        "repository_index": 0,
        "repository": RepositoryRef(owner="me", name="repo1"),
        "step_index": 0,
        "command_index": 0,
        "command": "create-label",
        "status": status,
    }
    values.update(kwargs)
    return ExecutionResult(**values)


class TestRepositoryRef:
    """Tests for RepositoryRef model."""

    def test_full_name(self):
        repo = RepositoryRef(owner="octocat", name="hello-world")
        assert repo.full_name == "octocat/hello-world"
        assert str(repo) == "octocat/hello-world"

    def test_immutable(self):
        repo = RepositoryRef(owner="octocat", name="hello-world")
        with pytest.raises(ValidationError):
            repo.name = "other"

    def test_empty_owner_rejected(self):
        with pytest.raises(ValidationError):
            RepositoryRef(owner="", name="repo")


class TestCommandModels:
    """Tests for command payload models."""

    def test_command_types(self):
        assert COMMAND_TYPES == {
            "create-issue": CreateIssue,
            "create-gist": CreateGist,
            "create-team": CreateTeam,
            "create-label": CreateLabel,
        }

    def test_issue_defaults(self):
        issue = CreateIssue(title="t", body="b")
        assert issue.milestone is None
        assert issue.assignees == ()
        assert issue.labels == ()

    def test_issue_milestone_positive(self):
        with pytest.raises(ValidationError):
            CreateIssue(title="t", body="b", milestone=0)

    def test_label_color_pattern(self):
        assert CreateLabel(name="bug", color="aBc123").color == "aBc123"
        with pytest.raises(ValidationError):
            CreateLabel(name="bug", color="#abc123")

    def test_commands_are_hashable(self):
        """Test frozen commands can be used in sets."""
        labels = {CreateLabel(name="bug", color="ff0000"), CreateLabel(name="bug", color="ff0000")}
        assert len(labels) == 1

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            CreateTeam(name="n", owner="o", privacy="secret")


class TestBatchModels:
    """Tests for Batch, Job and Step models."""

    @pytest.fixture
    def batch(self) -> Batch:
        step = Step(
            name="labels",
            runs=(CreateLabel(name="bug", color="ff0000"), CreateLabel(name="doc", color="00ff00")),
        )
        job = Job(
            on_repositories=(RepositoryRef(owner="me", name="a"), RepositoryRef(owner="me", name="b")),
            steps=(step, Step(runs=(CreateIssue(title="t", body="b"),))),
        )
        return Batch(version="1.0", jobs=(job,))

    def test_command_count(self, batch: Batch):
        assert batch.jobs[0].command_count == 6
        assert batch.command_count == 6

    def test_display_names(self, batch: Batch):
        assert batch.display_name == "UNNAMED"
        assert batch.jobs[0].display_name == "UNNAMED"
        assert batch.jobs[0].steps[0].display_name == "labels"

    def test_empty_collections_rejected(self):
        with pytest.raises(ValidationError):
            Batch(version="1.0", jobs=())
        with pytest.raises(ValidationError):
            Step(runs=())

    def test_runs_accept_plain_data(self):
        """Test a step built from dicts resolves each command variant."""
        step = Step.model_validate(
            {"runs": [{"name": "bug", "color": "ff0000"}, {"title": "t", "content": "c"}]}
        )
        assert isinstance(step.runs[0], CreateLabel)
        assert isinstance(step.runs[1], CreateGist)


class TestBatchReport:
    """Tests for BatchReport dataclass."""

    def test_default_values(self):
        report = BatchReport()
        assert report.total == 0
        assert report.succeeded == 0
        assert report.failed == 0
        assert report.success is True
        assert report.exit_code == 0
        assert report.duration_seconds is None

    def test_counts(self):
        report = BatchReport(
            results=[
                _result(),
                _result(ExecutionStatus.FAILURE, error="boom", command_index=1),
                _result(step_index=1),
            ]
        )
        assert report.total == 3
        assert report.succeeded == 2
        assert report.failed == 1
        assert report.failures[0].error == "boom"
        assert report.success is False
        assert report.exit_code == 1

    def test_cancelled_is_not_success(self):
        report = BatchReport(
            results=[_result()],
            cancelled=[RepositoryRef(owner="me", name="repo2")],
        )
        assert report.success is False
        assert report.exit_code == 1

    def test_duration(self):
        start = datetime(2024, 1, 1, 12, 0, 0)
        report = BatchReport(start_time=start, end_time=start + timedelta(seconds=90))
        assert report.duration_seconds == 90.0

    def test_to_dict(self):
        report = BatchReport(
            batch_name="Test",
            version="1.0",
            results=[_result(resource_id=7)],
            cancelled=[RepositoryRef(owner="me", name="repo2")],
        )
        data = report.to_dict()

        assert data["batch"] == "Test"
        assert data["total"] == 1
        assert data["cancelled"] == ["me/repo2"]
        assert data["results"][0]["status"] == "success"
        assert data["results"][0]["repository"] == {"owner": "me", "name": "repo1"}
        assert data["results"][0]["resource_id"] == 7


class TestExecutionResult:
    """Tests for ExecutionResult model."""

    def test_success_flag(self):
        assert _result().success is True
        assert _result(ExecutionStatus.FAILURE).success is False

    def test_immutable(self):
        result = _result()
        with pytest.raises(ValidationError):
            result.status = ExecutionStatus.FAILURE

    def test_sort_key(self):
        result = _result(job_index=1, repository_index=2, step_index=3, command_index=4)
        assert result.sort_key == (1, 2, 3, 4)
