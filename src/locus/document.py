"""Immutable source documents read once from disk."""

import logging
from dataclasses import dataclass
from pathlib import Path

from locus.uris import path_to_uri

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when the content of a source document cannot be read."""
    pass


@dataclass(frozen=True)
class SourceDocument:
    """Text content of one compilation unit plus its URI and file name."""
    uri: str
    content: str
    file_name: str = ""

    @classmethod
    def from_text(cls, content: str, file_name: str) -> "SourceDocument":
        """Create a document for content that is already in memory."""
        return cls(uri=path_to_uri(file_name), content=content, file_name=file_name)

    @classmethod
    def from_path(cls, path: Path, encoding: str = "utf-8") -> "SourceDocument":
        """Read a document eagerly.

        Args:
            path: File to read
            encoding: Text encoding of the file

        Returns:
            SourceDocument with the full file content

        Raises:
            DocumentLoadError: If the file cannot be read or decoded
        """
        file_name = str(path)
        try:
            # Line endings are kept as written; offsets count every character.
            with open(path, "r", encoding=encoding, newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logger.error(f"Unable to extract content of {file_name}: {e}")
            raise DocumentLoadError(f"Unable to read {file_name}: {e}") from e
        return cls(uri=path_to_uri(file_name), content=content, file_name=file_name)

    def __len__(self) -> int:
        return len(self.content)
