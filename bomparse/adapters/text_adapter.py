import chardet
from pathlib import Path
from typing import Iterator, Optional


class TextAdapter:
    """Text adapter for reading BOM line files reliably.

    Handles:
    - Multiple encodings (UTF-8, UTF-8-BOM, Windows-1252, ISO-8859-1, etc.)
    - Any line ending (LF, CRLF, CR)
    - Empty files
    """

    def __init__(self, encoding: Optional[str] = None):
        """Initialize the adapter.

        Args:
            encoding: Force this encoding instead of detecting it (optional)
        """
        self.encoding = encoding

    def can_handle(self, file_path: str) -> bool:
        """Any path except "-" (standard input) is read as a line file."""
        return file_path != "-"

    def _detect_encoding(self, file_path: str) -> str:
        """Detect file encoding using chardet with fallback."""
        with open(file_path, 'rb') as f:
            raw_data = f.read(10000)  # Read first 10KB for detection

        # Check for BOM first
        if raw_data.startswith(b'\xef\xbb\xbf'):
            return 'utf-8-sig'

        result = chardet.detect(raw_data)
        encoding = result.get('encoding') or 'utf-8'

        # Plain ASCII is reported as 'ascii'; read it as UTF-8
        encoding_lower = encoding.lower()
        if 'utf-8' in encoding_lower or 'utf8' in encoding_lower or encoding_lower == 'ascii':
            return 'utf-8'

        return encoding

    def read(self, file_path: str) -> Iterator[str]:
        """Read a text file line by line.

        Args:
            file_path: Path to the BOM line file

        Yields:
            Each line without its line terminator

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file cannot be decoded
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if path.stat().st_size == 0:
            return

        encoding = self.encoding or self._detect_encoding(file_path)

        try:
            with open(file_path, 'r', encoding=encoding, newline=None) as f:
                for line in f:
                    yield line.rstrip('\n')
        except (UnicodeDecodeError, LookupError) as e:
            raise ValueError(f"Could not decode file {file_path}: {e}")
