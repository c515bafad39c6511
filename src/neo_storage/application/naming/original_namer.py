"""Original naming strategy.

ONLY original naming - keeps the source's display name.

Following maximum separation architecture - one file = one purpose.
"""


class OriginalNamer:
    def generate(self, original_name: str, content: bytes, extension: str) -> str:
        return original_name
