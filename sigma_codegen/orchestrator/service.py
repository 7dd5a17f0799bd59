"""Generation orchestrator.

Runs code generation as a tracked background job:

1. ``request_generation`` validates the app id, records a ``pending`` job and
   enqueues it, returning a ``JobHandle`` immediately.
2. A pool of asyncio worker tasks drains the queue. Each run moves the job to
   ``generating`` and through the checkpoints 10/25/50/75/90/100, each one a
   single atomic store update carrying the progress and a log line.
3. Status, logs, previews and download references are served from the job
   store while runs are in flight.

At most one run per app is in flight; a second request for an app whose job
is still pending or generating is coalesced onto the running one.

Usage::

    async with GenerationOrchestrator(store, Config()) as orchestrator:
        handle = await orchestrator.request_generation("app-1")
        bundle = await handle.result()
"""

from __future__ import annotations

import asyncio
import dataclasses
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sigma_codegen.config import Config
from sigma_codegen.errors import GenerationFailed, JobConflict, JobNotFound, NotAvailable
from sigma_codegen.generators.backend import AmplifyGenerator
from sigma_codegen.generators.dashboard_gen import (
    DASHBOARD_PATH,
    README_PATH,
    DashboardGenerator,
    ReadmeGenerator,
)
from sigma_codegen.generators.mobile import FlutterGenerator
from sigma_codegen.generators.workflow_gen import WORKFLOW_PATH, WorkflowGenerator
from sigma_codegen.orchestrator.jobs import (
    GenerationJob,
    GenerationLogs,
    InMemoryJobStore,
    JobStatus,
    JobStore,
)
from sigma_codegen.orchestrator.publisher import Publisher
from sigma_codegen.spec.models import AppSpecification
from sigma_codegen.spec.store import ProjectStore
from sigma_codegen.templating.engine import TemplateEngine
from sigma_codegen.utils import print_log, utc_now

START_MESSAGE = "Code generation started"
COALESCED_MESSAGE = "Code generation already in progress"

# (progress, log message) for each step of a run, in order.
CHECKPOINTS: dict[str, tuple[int, str]] = {
    "fetch": (10, "Fetching app configuration..."),
    "mobile": (25, "Generating Flutter application..."),
    "backend": (50, "Generating Amplify backend..."),
    "workflow": (75, "Generating GitHub Actions workflows..."),
    "dashboard": (90, "Generating admin dashboard..."),
    "done": (100, "Code generation completed successfully!"),
}


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


class GeneratedBundle(BaseModel):
    """Every artifact of one successful run, keyed by relative path."""

    model_config = ConfigDict(frozen=True)

    app_id: str
    files: dict[str, str] = Field(default_factory=dict)
    generated_at: datetime = Field(default_factory=utc_now)

    @property
    def paths(self) -> list[str]:
        return sorted(self.files)

    def __getitem__(self, path: str) -> str:
        return self.files[path]

    def __contains__(self, path: object) -> bool:
        return path in self.files


@dataclass(frozen=True)
class PreviewResult:
    preview_reference: str
    source: str


@dataclass(frozen=True)
class DownloadReference:
    app_id: str
    reference: str


@dataclass(frozen=True)
class JobHandle:
    """Returned by ``request_generation``; awaiting ``result()`` yields the bundle."""

    message: str
    job_id: str
    app_id: str
    _future: asyncio.Future = field(repr=False, compare=False)

    async def result(self) -> GeneratedBundle:
        """Wait for the run to finish.

        Raises:
            GenerationFailed: The run ended in the ``failed`` state.
        """
        return await asyncio.shield(self._future)

    def done(self) -> bool:
        return self._future.done()


def _mark_retrieved(future: asyncio.Future) -> None:
    # Failed runs are reported through the job record; nobody has to await them.
    if not future.cancelled():
        future.exception()


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class GenerationOrchestrator:
    """Queue plus worker pool driving generation runs.

    Attributes:
        store: Source of app specifications.
        config: Global configuration (worker count, reference prefixes).
        engine: Compiled template set shared by every generator.
        jobs: Latest ``GenerationJob`` per app id.
    """

    def __init__(
        self,
        store: ProjectStore,
        config: Config | None = None,
        *,
        engine: TemplateEngine | None = None,
        job_store: JobStore | None = None,
    ) -> None:
        self.store = store
        self.config = config or Config()
        self.engine = engine or TemplateEngine.create(self.config.template_dir)
        self.jobs = job_store or InMemoryJobStore()

        self.flutter = FlutterGenerator(self.engine)
        self.amplify = AmplifyGenerator(self.engine)
        self.workflow = WorkflowGenerator(
            self.engine,
            flutter_version=self.config.ci.flutter_version,
            aws_region=self.config.ci.aws_region,
        )
        self.dashboard = DashboardGenerator(self.engine)
        self.readme = ReadmeGenerator(self.engine)

        self._queue: asyncio.Queue[tuple[str, str]] | None = None
        self._workers: list[asyncio.Task] = []
        self._handles: dict[str, JobHandle] = {}
        self._bundles: dict[str, GeneratedBundle] = {}

    # ------------------------------------------------------------------
    # Worker pool lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._workers)

    def start(self) -> None:
        """Spawn the worker tasks. Must be called with a running event loop."""
        if self.running:
            return
        if self._queue is None:
            self._queue = asyncio.Queue()
        self._workers = [
            asyncio.create_task(self._worker(), name=f"sigma-generation-worker-{index}")
            for index in range(self.config.orchestrator.workers)
        ]

    async def stop(self) -> None:
        """Cancel the worker tasks. Queued jobs stay ``pending``."""
        workers, self._workers = self._workers, []
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        if self._queue is not None:
            await self._queue.join()

    async def __aenter__(self) -> "GenerationOrchestrator":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def _worker(self) -> None:
        assert self._queue is not None
        while True:
            app_id, job_id = await self._queue.get()
            try:
                await self._process(app_id, job_id)
            finally:
                self._queue.task_done()

    async def _process(self, app_id: str, job_id: str) -> None:
        try:
            await self.run_generation(app_id, job_id)
        except JobConflict as exc:
            print_log(f"{app_id}: skipped queued run: {exc}")
        except GenerationFailed:
            # Already on the job record and the request handle.
            return

    def _settle(
        self,
        app_id: str,
        job_id: str,
        bundle: GeneratedBundle | None = None,
        error: BaseException | None = None,
    ) -> None:
        handle = self._handles.get(app_id)
        if handle is None or handle.job_id != job_id or handle._future.done():
            return
        if error is not None:
            handle._future.set_exception(error)
        else:
            handle._future.set_result(bundle)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request_generation(self, app_id: str) -> JobHandle:
        """Start (or join) a generation run for *app_id*.

        Raises:
            AppNotFound: The project store has no such app. No job record is
                created in that case.
            JobConflict: The job store holds an active job for *app_id* that
                this orchestrator did not schedule (a shared ``job_store``).
        """
        await self.store.get_app(app_id)
        self.start()
        assert self._queue is not None

        while True:
            current = self.jobs.get(app_id)
            if current is not None and current.status.active:
                handle = self._handles.get(app_id)
                if handle is not None and handle.job_id == current.job_id:
                    return dataclasses.replace(handle, message=COALESCED_MESSAGE)
                # Active records are never replaced.
                raise JobConflict(
                    app_id, current.job_id, f"is already {current.status.value} elsewhere"
                )

            job = GenerationJob.start(uuid.uuid4().hex, app_id, "Generation started...")
            if self.jobs.compare_and_swap(app_id, current, job):
                break

        future: asyncio.Future = asyncio.get_running_loop().create_future()
        future.add_done_callback(_mark_retrieved)
        handle = JobHandle(
            message=START_MESSAGE, job_id=job.job_id, app_id=app_id, _future=future
        )
        self._handles[app_id] = handle
        print_log(f"{app_id}: {job.last_log}")
        await self._queue.put((app_id, job.job_id))
        return handle

    async def run_generation(self, app_id: str, job_id: str | None = None) -> GeneratedBundle:
        """Execute one run for the job currently recorded for *app_id*.

        This is the worker body; calling it directly runs the job inline. The
        run first claims the job by moving it from ``pending`` to
        ``generating`` in one compare-and-swap, so a job is run at most once.

        Raises:
            JobNotFound: No job has been recorded for *app_id*.
            JobConflict: The recorded job is not *job_id*, is no longer
                ``pending``, or was replaced before the run finished.
            GenerationFailed: Any step failed; the job is left ``failed``.
        """
        job_id = self._claim(app_id, job_id)
        try:
            bundle = await self._generate(app_id, job_id)
        except (GenerationFailed, JobConflict) as exc:
            self._settle(app_id, job_id, error=exc)
            raise
        self._settle(app_id, job_id, bundle=bundle)
        return bundle

    def _claim(self, app_id: str, job_id: str | None) -> str:
        current = self.get_status(app_id)
        if job_id is None:
            job_id = current.job_id
        if current.job_id != job_id:
            raise JobConflict(app_id, job_id, f"was superseded by job {current.job_id}")
        if current.status is not JobStatus.PENDING:
            raise JobConflict(app_id, job_id, f"is already {current.status.value}")

        progress, message = CHECKPOINTS["fetch"]
        claimed = current.advance(message, status=JobStatus.GENERATING, progress=progress)
        if not self.jobs.compare_and_swap(app_id, current, claimed):
            raise JobConflict(app_id, job_id, "was claimed by another run")
        print_log(f"{app_id}: {claimed.last_log}")
        return job_id

    async def _generate(self, app_id: str, job_id: str) -> GeneratedBundle:
        try:
            app = await self.store.get_app(app_id)

            self._checkpoint(app_id, job_id, "mobile")
            files = dict(await asyncio.to_thread(self.flutter.generate, app))

            self._checkpoint(app_id, job_id, "backend")
            files.update(await asyncio.to_thread(self.amplify.generate, app))

            self._checkpoint(app_id, job_id, "workflow")
            files[WORKFLOW_PATH] = await asyncio.to_thread(self.workflow.generate, app)

            self._checkpoint(app_id, job_id, "dashboard")
            files[DASHBOARD_PATH] = await asyncio.to_thread(self.dashboard.generate, app)
            files[README_PATH] = await asyncio.to_thread(self.readme.generate, app)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            self._record(
                app_id,
                job_id,
                f"Generation failed: {message}",
                status=JobStatus.FAILED,
                progress=0,
                error_message=message,
            )
            raise GenerationFailed(app_id, message) from exc

        bundle = GeneratedBundle(app_id=app_id, files=files)
        finished = self._checkpoint(
            app_id, job_id, "done", status=JobStatus.COMPLETED, completed_at=utc_now()
        )
        if finished is None:
            raise JobConflict(app_id, job_id, "was replaced before it finished")
        self._bundles[app_id] = bundle
        return bundle

    def _checkpoint(
        self, app_id: str, job_id: str, step: str, **changes: object
    ) -> GenerationJob | None:
        progress, message = CHECKPOINTS[step]
        return self._record(app_id, job_id, message, progress=progress, **changes)

    def _record(
        self, app_id: str, job_id: str, message: str, **changes: object
    ) -> GenerationJob | None:
        updated = self.jobs.update(
            app_id, lambda job: job.advance(message, **changes), job_id=job_id
        )
        if updated is not None:
            print_log(f"{app_id}: {updated.last_log}")
        return updated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_status(self, app_id: str) -> GenerationJob:
        """Latest job snapshot for *app_id*.

        Raises:
            JobNotFound: Generation was never requested for *app_id*.
        """
        job = self.jobs.get(app_id)
        if job is None:
            raise JobNotFound(app_id)
        return job

    def get_logs(self, app_id: str) -> GenerationLogs:
        job = self.get_status(app_id)
        return GenerationLogs(
            app_id=app_id, job_id=job.job_id, status=job.status, logs=list(job.logs)
        )

    def get_bundle(self, app_id: str) -> GeneratedBundle:
        """Bundle of the last completed run.

        Raises:
            JobNotFound: Generation was never requested.
            NotAvailable: The latest run has not completed.
        """
        job = self.get_status(app_id)
        bundle = self._bundles.get(app_id)
        if job.status is not JobStatus.COMPLETED or bundle is None:
            raise NotAvailable(app_id, job.status.value)
        return bundle

    async def wait(self, app_id: str) -> GeneratedBundle:
        """Await the latest run requested for *app_id*."""
        handle = self._handles.get(app_id)
        if handle is None:
            raise JobNotFound(app_id)
        return await handle.result()

    async def generate_preview(self, app_id: str) -> PreviewResult:
        """Render the default screen without touching the job record.

        Raises:
            AppNotFound: The project store has no such app.
        """
        app = await self.store.get_app(app_id)
        source = await asyncio.to_thread(self.flutter.generate_main_screen, app)
        base = self.config.orchestrator.preview_base_url.rstrip("/")
        return PreviewResult(
            preview_reference=f"{base}/preview_{app_id}_{_millis()}",
            source=source,
        )

    def get_download_reference(self, app_id: str) -> DownloadReference:
        """Reference for downloading the completed bundle.

        Raises:
            JobNotFound: Generation was never requested.
            NotAvailable: The latest run is not ``completed``.
        """
        job = self.get_status(app_id)
        if job.status is not JobStatus.COMPLETED:
            raise NotAvailable(app_id, job.status.value)
        base = self.config.orchestrator.download_base_url.rstrip("/")
        return DownloadReference(
            app_id=app_id, reference=f"{base}/download_{app_id}_{_millis()}.zip"
        )

    async def publish(self, app_id: str, publisher: Publisher) -> str:
        """Hand the completed bundle for *app_id* to *publisher*."""
        bundle = self.get_bundle(app_id)
        app: AppSpecification = await self.store.get_app(app_id)
        return await publisher.publish(app, bundle)


def _millis() -> int:
    return int(time.time() * 1000)
