"""Batch executor.

Runs every job of a batch against each of its repositories. Steps and
commands keep document order within a repository; repositories of the
same job may run concurrently. A failed command is recorded and never
stops the rest of the run.
"""

import asyncio
import time
from collections.abc import Callable
from datetime import datetime

from octomate.client.base import RemoteClient
from octomate.commands import CommandRegistry, ExecutionContext
from octomate.config import Settings
from octomate.exceptions import RemoteError
from octomate.models import (
    BaseCommand,
    Batch,
    BatchReport,
    ExecutionResult,
    ExecutionStatus,
    Job,
    RepositoryRef,
)
from octomate.utils import get_logger

logger = get_logger(__name__)

# Type alias for result callback
ResultCallback = Callable[[ExecutionResult], None]


class BatchExecutor:
    """Executor for validated batches."""

    def __init__(
        self,
        client: RemoteClient,
        registry: CommandRegistry | None = None,
        settings: Settings | None = None,
    ):
        """Initialize executor.

        Args:
            client: Remote client every command is sent through.
            registry: Command registry (defaults to the built-in commands).
            settings: Application settings.
        """
        self.client = client
        self.registry = registry or CommandRegistry.default()
        self.settings = settings
        self._cancelled = False

    async def execute(
        self,
        batch: Batch,
        *,
        max_concurrent: int | None = None,
        on_result: ResultCallback | None = None,
    ) -> BatchReport:
        """Execute all jobs of a batch.

        Args:
            batch: Validated batch.
            max_concurrent: Max repositories run at once (overrides settings).
            on_result: Callback invoked for every recorded result.

        Returns:
            BatchReport with one result per executed command.
        """
        self._cancelled = False

        _max_concurrent = max_concurrent
        if _max_concurrent is None and self.settings:
            _max_concurrent = self.settings.batch.max_concurrent
        _max_concurrent = max(1, _max_concurrent or 1)

        logger.info(
            f"Running batch: {batch.display_name} version {batch.version} "
            f"({len(batch.jobs)} jobs, max_concurrent={_max_concurrent})"
        )

        report = BatchReport(
            batch_name=batch.name,
            version=batch.version,
            start_time=datetime.now(),
        )
        lock = asyncio.Lock()

        try:
            for job_index, job in enumerate(batch.jobs):
                await self._execute_job(batch, job_index, job, report, lock, _max_concurrent, on_result)
        finally:
            report.end_time = datetime.now()
            report.results.sort(key=lambda r: r.sort_key)

        logger.info(
            f"Batch execution completed: {report.succeeded} succeeded, "
            f"{report.failed} failed, {len(report.cancelled)} repositories cancelled"
        )

        return report

    async def _execute_job(
        self,
        batch: Batch,
        job_index: int,
        job: Job,
        report: BatchReport,
        lock: asyncio.Lock,
        max_concurrent: int,
        on_result: ResultCallback | None,
    ) -> None:
        logger.info(f"Job: {job.display_name} ({len(job.on_repositories)} repositories)")

        if max_concurrent <= 1:
            for repository_index, repository in enumerate(job.on_repositories):
                await self._execute_repository(
                    batch, job_index, job, repository_index, repository, report, lock, on_result
                )
            return

        semaphore = asyncio.Semaphore(max_concurrent)

        async def execute_with_semaphore(repository_index: int, repository: RepositoryRef) -> None:
            async with semaphore:
                await self._execute_repository(
                    batch, job_index, job, repository_index, repository, report, lock, on_result
                )

        await asyncio.gather(
            *(
                execute_with_semaphore(repository_index, repository)
                for repository_index, repository in enumerate(job.on_repositories)
            )
        )

    async def _execute_repository(
        self,
        batch: Batch,
        job_index: int,
        job: Job,
        repository_index: int,
        repository: RepositoryRef,
        report: BatchReport,
        lock: asyncio.Lock,
        on_result: ResultCallback | None,
    ) -> None:
        """Replay the job's steps against one repository."""
        if self._cancelled:
            logger.warning(f"Skipping {repository} (cancelled)")
            async with lock:
                report.cancelled.append(repository)
            return

        logger.info(f"Repository: {repository}")

        for step_index, step in enumerate(job.steps):
            logger.info(f"Step: {step.display_name} ({repository})")
            context = ExecutionContext(batch=batch, job=job, repository=repository, step=step)

            for command_index, command in enumerate(step.runs):
                result = await self._execute_command(
                    command,
                    context,
                    job_index=job_index,
                    repository_index=repository_index,
                    step_index=step_index,
                    command_index=command_index,
                )
                async with lock:
                    report.results.append(result)
                    if on_result:
                        on_result(result)

    async def _execute_command(
        self,
        command: BaseCommand,
        context: ExecutionContext,
        *,
        job_index: int,
        repository_index: int,
        step_index: int,
        command_index: int,
    ) -> ExecutionResult:
        """Execute a single command and record its outcome."""
        start = time.perf_counter()
        outcome: dict = {}

        try:
            handler = self.registry.resolve(command)
            resource_id = await handler.run(command, self.client, context)
            outcome = {"status": ExecutionStatus.SUCCESS, "resource_id": resource_id}
            logger.info(f"{command.command_name} on {context.repository}: ok")
        except RemoteError as e:
            details = dict(e.details)
            if e.status_code is not None:
                details["status_code"] = e.status_code
            outcome = {"status": ExecutionStatus.FAILURE, "error": e.message, "error_details": details}
            logger.warning(f"{command.command_name} on {context.repository} failed: {e}")
        except Exception as e:
            outcome = {
                "status": ExecutionStatus.FAILURE,
                "error": str(e) or type(e).__name__,
                "error_details": {"type": type(e).__name__},
            }
            logger.error(f"{command.command_name} on {context.repository} failed: {e}")

        return ExecutionResult(
            job_index=job_index,
            job_name=context.job.name,
            repository_index=repository_index,
            repository=context.repository,
            step_index=step_index,
            step_name=context.step.name,
            command_index=command_index,
            command=command.command_name,
            duration_seconds=time.perf_counter() - start,
            **outcome,
        )

    def cancel(self) -> None:
        """Stop before the next repository starts.

        Commands already in flight are allowed to finish.
        """
        self._cancelled = True
        logger.info("Batch execution cancellation requested")

    @property
    def is_cancelled(self) -> bool:
        """Check if execution is cancelled."""
        return self._cancelled
