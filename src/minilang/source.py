"""
Character Sources
=================

The lexer consumes an abstract "next character" source rather than a
string, so a file is read incrementally and never has to be loaded whole.

A CharSource hands out one character per read() call and an empty string
at end of input. A single pushed-back character is supported, which is
all the lexer needs to stop a run without losing the character that
ended it.

Sources are context managers; FileSource releases its handle on every
exit path:

    with FileSource.open("program.ml") as source:
        lexer = Lexer(source)
        ...
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

from minilang.errors import SourceError

logger = logging.getLogger(__name__)


class CharSource:
    """
    Base class for character sources.

    Subclasses implement _read_raw(); pushback and end-of-input
    stickiness are handled here.
    """

    def __init__(self, name: str = "<input>"):
        self.name = name
        self._pushed: Optional[str] = None
        self._exhausted = False

    def read(self) -> str:
        """Return the next character, or "" once the input is exhausted."""
        if self._pushed is not None:
            char = self._pushed
            self._pushed = None
            return char
        if self._exhausted:
            return ""
        char = self._read_raw()
        if char == "":
            self._exhausted = True
        return char

    def unread(self, char: str) -> None:
        """
        Push one character back so the next read() returns it.

        Pushing back "" (end of input) is a no-op.
        """
        if char == "":
            return
        if self._pushed is not None:
            raise RuntimeError("only one character of pushback is supported")
        self._pushed = char

    def close(self) -> None:
        """Release any underlying resource."""
        pass

    def _read_raw(self) -> str:
        raise NotImplementedError

    def __enter__(self) -> "CharSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class StringSource(CharSource):
    """Characters of an in-memory string."""

    def __init__(self, text: str, name: str = "<input>"):
        super().__init__(name)
        self._text = text
        self._pos = 0

    def _read_raw(self) -> str:
        if self._pos >= len(self._text):
            return ""
        char = self._text[self._pos]
        self._pos += 1
        return char


class FileSource(CharSource):
    """
    Characters of an open text stream.

    Use FileSource.open() to open a path; the source then owns the
    handle and closes it in close().
    """

    def __init__(self, stream: TextIO, name: str = "<input>", owns_stream: bool = False):
        super().__init__(name)
        self._stream = stream
        self._owns_stream = owns_stream

    @classmethod
    def open(cls, path, encoding: str = "utf-8") -> "FileSource":
        """
        Open a source file for reading.

        Args:
            path: Path of the file to open
            encoding: Text encoding of the file

        Returns:
            A FileSource owning the file handle

        Raises:
            SourceError: If the file cannot be opened
        """
        path = Path(path)
        try:
            stream = open(path, "r", encoding=encoding)
        except OSError as e:
            raise SourceError(str(path), e.strerror or str(e)) from e
        except LookupError as e:
            raise SourceError(str(path), str(e)) from e
        logger.debug(f"Opened source file {path} ({encoding})")
        return cls(stream, str(path), owns_stream=True)

    def _read_raw(self) -> str:
        try:
            return self._stream.read(1)
        except UnicodeDecodeError as e:
            raise SourceError(self.name, f"cannot decode input: {e.reason}") from e

    def close(self) -> None:
        if self._owns_stream and not self._stream.closed:
            self._stream.close()
            logger.debug(f"Closed source file {self.name}")
