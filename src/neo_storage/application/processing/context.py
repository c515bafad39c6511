"""Processing context.

ONLY pipeline state - the per-upload state shared by the orchestrator and
the processing branches.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from enum import Enum

from ...core.entities.resolved_file import ResolvedFile
from ...core.entities.upload_result import UploadResult
from ...core.value_objects.storage_key import StorageKey
from ...core.value_objects.upload_options import UploadOptions


class PipelineStage(str, Enum):
    """Upload pipeline states; ``FAILED`` is reachable from any state."""
    INTROSPECTING = "introspecting"
    VALIDATING = "validating"
    SCANNING = "scanning"
    NAMING = "naming"
    PATH_RESOLVING = "path_resolving"
    PROCESSING = "processing"
    SECONDARY_SCANNING = "secondary_scanning"
    UPLOADING = "uploading"
    RESULT_ASSEMBLED = "result_assembled"
    FAILED = "failed"


@dataclass
class ProcessingContext:
    """State of one upload invocation, never shared across calls."""
    
    resolved: ResolvedFile
    key: StorageKey
    options: UploadOptions
    result: UploadResult = field(default_factory=UploadResult)
    stage: PipelineStage = PipelineStage.PROCESSING
