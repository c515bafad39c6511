"""Passthrough branch.

ONLY verbatim upload - stores the original bytes as the single artifact.

Following maximum separation architecture - one file = one purpose.
"""

from ...core.entities.upload_result import MAIN, UploadResult
from ..services.storage_gateway import StorageGateway
from .base import ProcessingBranch
from .context import PipelineStage, ProcessingContext


class PassthroughBranch(ProcessingBranch):
    name = "passthrough"
    
    def __init__(self, gateway: StorageGateway):
        self._gateway = gateway
    
    async def run(self, context: ProcessingContext) -> UploadResult:
        context.stage = PipelineStage.UPLOADING
        record = await self._gateway.upload_file(
            context.key,
            context.resolved.content,
            context.resolved.mime_type,
            context.options.url,
            context.resolved.original_name,
        )
        context.result.add(MAIN, record)
        return context.result
