from pathlib import Path

from locus.parsers.base import BaseParser
from locus.parsers.java_parser import JavaParser

_PARSERS = {
    ".java": JavaParser,
}


def get_parser_for_file(file_path: Path) -> BaseParser | None:
    """Return a parser for the file's extension, or None if unsupported."""
    parser_class = _PARSERS.get(file_path.suffix.lower())
    if parser_class is None:
        return None
    return parser_class()
