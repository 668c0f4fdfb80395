"""Tokenizer - normalizes raw text into a list of lowercase words.

A word is a run of ASCII letters, lowercased. Apostrophes and hyphens inside
a run are dropped without ending it, so ``isn't`` becomes ``isnt``. Any other
character, backslash included, ends the current word.

Example:
    Tokenizer(["Hello, it's a well-known test!"]).word_list()
    # ['hello', 'its', 'a', 'wellknown', 'test']
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import string
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_logger = logging.getLogger(__name__)

# Characters skipped inside a word without splitting it
INTRA_WORD_CHARS = frozenset({"'", "-"})

_LETTERS = frozenset(string.ascii_letters)


def normalize(chunks: Iterable[str]) -> Iterator[str]:
    """Yield normalized words from a sequence of text chunks.

    Chunks are treated as one continuous character stream: a word may start
    in one chunk and end in the next.

    Args:
        chunks: Strings (or single characters) to scan in order.

    Yields:
        Non-empty lowercase words.
    """
    buffer: list[str] = []
    for chunk in chunks:
        for ch in chunk:
            if ch in _LETTERS:
                buffer.append(ch.lower())
            elif ch in INTRA_WORD_CHARS:
                continue
            elif buffer:
                yield "".join(buffer)
                buffer = []
    if buffer:
        yield "".join(buffer)


def read_file(filepath: str | os.PathLike[str], encoding: str | None = None) -> str:
    """Read the whole text of a file.

    Args:
        filepath: Path to the file to read.
        encoding: Text encoding; None uses the platform default.

    Returns:
        The file contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        UnicodeDecodeError: If the file can't be decoded.
    """
    return Path(filepath).read_text(encoding=encoding)  # noqa: PLW1514


class Tokenizer:
    """Word list built from a file path or from a sequence of strings."""

    def __init__(
        self,
        source: str | os.PathLike[str] | Iterable[str],
        *,
        encoding: str | None = None,
        split_lines: bool = False,
    ) -> None:
        """Read and normalize the whole source.

        Args:
            source: A file path, or an iterable of strings processed in order.
            encoding: Encoding of the file form; None uses the platform default.
            split_lines: For the iterable form, end any word in progress at the
                end of each string instead of joining it to the next one.

        Raises:
            OSError: If the file can't be opened or read.
            UnicodeDecodeError: If the file can't be decoded.
            TypeError: If source is neither a path nor an iterable of strings.
        """
        if isinstance(source, (str, os.PathLike)):
            text = read_file(source, encoding)
            self._words = list(normalize(text))
            _logger.debug("Read %d words from %s", len(self._words), source)
        else:
            try:
                lines = list(source)
            except TypeError as e:
                raise TypeError(
                    f"source must be a path or an iterable of strings, "
                    f"not {type(source).__name__}"
                ) from e
            for line in lines:
                if not isinstance(line, str):
                    raise TypeError(
                        f"source items must be strings, not {type(line).__name__}"
                    )
            if split_lines:
                self._words = [word for line in lines for word in normalize(line)]
            else:
                self._words = list(normalize(lines))
            _logger.debug("Read %d words from %d strings", len(self._words), len(lines))

    def word_list(self) -> list[str]:
        """Return the normalized words in the order they appeared."""
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)
