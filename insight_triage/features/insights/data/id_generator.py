import hashlib
from ..domain.interfaces import IIdGenerator


class ContentHashIdGenerator(IIdGenerator):
    """
    Hex digest of url + content + creation time.
    Truncated to 32 chars, the width of the ids already found in stored data.
    """

    def __init__(self, length: int = 32):
        self.length = length

    def generate(self, source_url: str, raw_content: str, timestamp: str) -> str:
        digest = hashlib.sha256()
        digest.update(f"{source_url}{raw_content}{timestamp}".encode("utf-8"))
        return digest.hexdigest()[:self.length]
