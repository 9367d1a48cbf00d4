import sys
from typing import Iterator, Optional, TextIO


class StreamAdapter:
    """Adapter for reading BOM lines from standard input ("-")."""

    def __init__(self, stream: Optional[TextIO] = None):
        # Resolved lazily so tests can swap sys.stdin
        self.stream = stream

    def can_handle(self, file_path: str) -> bool:
        return file_path == "-"

    def read(self, file_path: str = "-") -> Iterator[str]:
        stream = self.stream if self.stream is not None else sys.stdin
        for line in stream:
            yield line.rstrip('\r\n')
