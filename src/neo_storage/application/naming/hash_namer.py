"""Hash naming strategy.

ONLY hash naming - content-addressed filenames from SHA-256.

Following maximum separation architecture - one file = one purpose.
"""

import hashlib


class HashNamer:
    """Name files by the SHA-256 of their content.
    
    Identical content always yields the identical name.
    """
    
    def generate(self, original_name: str, content: bytes, extension: str) -> str:
        digest = hashlib.sha256(content).hexdigest()
        extension = extension.lstrip('.')
        return f"{digest}.{extension}" if extension else digest
