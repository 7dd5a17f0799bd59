"""Generation orchestrator: job tracking, worker pool and publishing.

Quick usage::

    from sigma_codegen.orchestrator import GenerationOrchestrator

    async with GenerationOrchestrator(store) as orchestrator:
        handle = await orchestrator.request_generation("app-1")
        bundle = await handle.result()
"""

from sigma_codegen.orchestrator.jobs import (
    GenerationJob,
    GenerationLogs,
    InMemoryJobStore,
    JobStatus,
    JobStore,
)
from sigma_codegen.orchestrator.publisher import DirectoryPublisher, Publisher
from sigma_codegen.orchestrator.service import (
    DownloadReference,
    GeneratedBundle,
    GenerationOrchestrator,
    JobHandle,
    PreviewResult,
)

__all__ = [
    "DirectoryPublisher",
    "DownloadReference",
    "GeneratedBundle",
    "GenerationJob",
    "GenerationLogs",
    "GenerationOrchestrator",
    "InMemoryJobStore",
    "JobHandle",
    "JobStatus",
    "JobStore",
    "PreviewResult",
    "Publisher",
]
