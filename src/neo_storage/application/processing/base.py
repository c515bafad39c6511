"""Processing branch base.

ONLY branch contract - the capability every MIME-family branch exposes
to the orchestrator.

Following maximum separation architecture - one file = one purpose.
"""

from abc import ABC, abstractmethod

from ...core.entities.upload_result import UploadResult
from .context import ProcessingContext


class ProcessingBranch(ABC):
    """Turns a resolved, validated and scanned file into stored artifacts."""
    
    name: str = "branch"
    
    @abstractmethod
    async def run(self, context: ProcessingContext) -> UploadResult:
        """Process and upload every artifact for ``context``.
        
        Artifacts are uploaded sequentially; an artifact already uploaded is
        not rolled back when a later one fails.
        """
        ...
