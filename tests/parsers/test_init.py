from pathlib import Path

from locus.parsers import get_parser_for_file
from locus.parsers.java_parser import JavaParser


def test_get_parser_for_java_file():
    parser = get_parser_for_file(Path("Foo.java"))

    assert parser is not None
    assert isinstance(parser, JavaParser)


def test_get_parser_for_uppercase_extension():
    parser = get_parser_for_file(Path("Foo.JAVA"))

    assert isinstance(parser, JavaParser)


def test_get_parser_for_unsupported_file():
    assert get_parser_for_file(Path("test.txt")) is None


def test_get_parser_for_python_file():
    # Python sources are not analyzed
    assert get_parser_for_file(Path("test.py")) is None
