#!/usr/bin/env python3
"""Word statistics - frequencies, ranks and collocations over a text.

Usage:
    # From raw text
    python -m wordstat.word_stat --text "Hello world hello"

    # From a file, top 20 words only
    python -m wordstat.word_stat --file path/to/file.txt --top 20

    # From several strings, joined without separators
    python -m wordstat.word_stat --lines "hello wor" "ld again"

    # Single-word queries
    python -m wordstat.word_stat --file text.txt --count the --rank the

    # Most common words after the first "me"
    python -m wordstat.word_stat --file text.txt --collocations 3 me
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from wordstat.hash_table import DEFAULT_CAPACITY, Entry, HashTable
from wordstat.tokenizer import Tokenizer

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    import os

_logger = logging.getLogger(__name__)


def _count_words(words: Sequence[str]) -> tuple[HashTable[str], list[Entry[str]]]:
    """Count words and list their entries in order of first appearance.

    The table is sized so that it never rehashes while counting, since a
    rehash would reset the occurrence counters.
    """
    table: HashTable[str] = HashTable(max(DEFAULT_CAPACITY, len(words) + 1))
    first_seen: list[Entry[str]] = []
    for word in words:
        is_new = word not in table
        table.put(word, word)
        if is_new:
            first_seen.append(table._get_entry(word))
    return table, first_seen


def _check_k(k: int) -> None:
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")


def _most_common(entries: list[Entry[str]], k: int) -> list[str]:
    """Top k keys by occurrences from entries listed in first-appearance order."""
    ranked = sorted(entries, key=lambda e: e.occurrences, reverse=True)
    return [entry.key for entry in ranked[:k]]


class WordStat:
    """Frequency, rank and collocation queries over a fixed input text."""

    def __init__(
        self,
        source: str | os.PathLike[str] | Iterable[str],
        *,
        encoding: str | None = None,
        split_lines: bool = False,
    ) -> None:
        """Tokenize the source and build the frequency and rank tables.

        Args:
            source: A file path, or an iterable of strings processed in order.
            encoding: Encoding of the file form; None uses the platform default.
            split_lines: For the iterable form, treat each string end as a word
                boundary.

        Raises:
            OSError: If the file can't be opened or read.
            UnicodeDecodeError: If the file can't be decoded.
        """
        self._tokenizer = Tokenizer(source, encoding=encoding, split_lines=split_lines)
        words = self._tokenizer.word_list()

        self._table, self._first_seen = _count_words(words)
        # Stable: equal counts stay in first-appearance order
        self._sorted_entries = sorted(self._first_seen, key=lambda e: e.occurrences)

        # Competition ranking: 1, 2, 2, 4
        self._ranks: HashTable[int] = HashTable(
            max(DEFAULT_CAPACITY, len(self._sorted_entries) + 1)
        )
        rank = 0
        last_occurrences = None
        for position, entry in enumerate(reversed(self._sorted_entries), start=1):
            if entry.occurrences != last_occurrences:
                rank = position
                last_occurrences = entry.occurrences
            self._ranks.put(entry.key, rank)

        _logger.info(
            "Built word statistics: %d words, %d distinct",
            len(words),
            len(self._sorted_entries),
        )

    @property
    def total_words(self) -> int:
        """Number of words in the input, repeats included."""
        return len(self._tokenizer)

    @property
    def distinct_words(self) -> int:
        """Number of distinct words in the input."""
        return len(self._sorted_entries)

    def word_list(self) -> list[str]:
        """Return the tokenized input in order."""
        return self._tokenizer.word_list()

    def word_count(self, word: str) -> int:
        """Return how many times word appears, or 0 if it never does."""
        try:
            return self._table._get_entry(word).occurrences
        except KeyError:
            return 0

    def word_rank(self, word: str) -> int:
        """Return the 1-based frequency rank of word; ties share a rank.

        Raises:
            KeyError: If word does not appear in the input.
        """
        return self._ranks.get(word)

    def most_common_words(self, k: int) -> list[str]:
        """Return up to k words, most frequent first.

        Words with equal counts keep the order they first appeared in.

        Raises:
            ValueError: If k is negative.
        """
        _check_k(k)
        return _most_common(self._first_seen, k)

    def least_common_words(self, k: int) -> list[str]:
        """Return up to k words, least frequent first.

        Raises:
            ValueError: If k is negative.
        """
        _check_k(k)
        return [entry.key for entry in self._sorted_entries[:k]]

    def most_common_collocations(self, k: int, base_word: str, precede: bool) -> list[str]:
        """Return the k most common words before or after the first base_word.

        Args:
            k: Maximum number of words to return.
            base_word: Word whose first occurrence splits the input.
            precede: If True, look at the words before base_word (the whole
                input when it never appears). If False, look at the words
                after it (nothing when it never appears).

        Returns:
            Words of the window, most frequent first, ties in order of first
            appearance within the window.

        Raises:
            ValueError: If k is negative.
        """
        _check_k(k)
        words = self._tokenizer.word_list()
        try:
            boundary = words.index(base_word)
        except ValueError:
            window = words if precede else []
        else:
            window = words[:boundary] if precede else words[boundary + 1 :]

        _, first_seen = _count_words(window)
        return _most_common(first_seen, k)

    def frequencies(self) -> list[tuple[str, int]]:
        """Return (word, count) pairs, most frequent first."""
        return [
            (word, self.word_count(word))
            for word in self.most_common_words(self.distinct_words)
        ]


def format_report(stats: WordStat, *, top_n: int | None = None) -> str:
    """Format word statistics as a table.

    Args:
        stats: Statistics to report.
        top_n: If provided, only show the top N words.

    Returns:
        Formatted string table with results.
    """
    if stats.total_words == 0:
        return "No words found in input."

    items = stats.frequencies()
    if top_n is not None:
        items = items[:top_n]

    max_word_len = max((len(word) for word, _ in items), default=4)
    max_word_len = max(max_word_len, 4)  # Minimum width for "Word" header
    max_count = max((count for _, count in items), default=0)
    count_width = max(len(str(max_count)), 5)  # Minimum width for "Count" header
    rank_width = max(len(str(stats.distinct_words)), 4)

    lines = [
        f"Total words: {stats.total_words}",
        f"Unique words: {stats.distinct_words}",
        "",
    ]

    header = (
        f"{'Rank':>{rank_width}}  {'Word':<{max_word_len}}  "
        f"{'Count':>{count_width}}  {'Percentage':>10}"
    )
    lines.append(header)
    lines.append("-" * len(header))

    for word, count in items:
        percentage = (count / stats.total_words) * 100
        rank = stats.word_rank(word)
        lines.append(
            f"{rank:>{rank_width}}  {word:<{max_word_len}}  "
            f"{count:>{count_width}}  {percentage:>9.2f}%"
        )

    return "\n".join(lines)


def _format_queries(stats: WordStat, args: argparse.Namespace) -> list[str]:
    """Answer the single-word and top-k queries requested on the command line."""
    lines: list[str] = []
    if args.count is not None:
        lines.append(f"Count of '{args.count}': {stats.word_count(args.count.lower())}")
    if args.rank is not None:
        lines.append(f"Rank of '{args.rank}': {stats.word_rank(args.rank.lower())}")
    if args.least is not None:
        words = stats.least_common_words(args.least)
        lines.append(f"Least common words: {', '.join(words)}")
    if args.collocations is not None:
        k_text, base_word = args.collocations
        try:
            k = int(k_text)
        except ValueError as e:
            raise ValueError(f"collocation count must be an integer, got {k_text!r}") from e
        words = stats.most_common_collocations(k, base_word.lower(), args.precede)
        side = "before" if args.precede else "after"
        lines.append(f"Most common words {side} '{base_word}': {', '.join(words)}")
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the word statistics tool.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="Word frequency, rank and collocation statistics.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        "--text",
        "-t",
        type=str,
        help="Raw text to analyze",
    )
    input_group.add_argument(
        "--file",
        "-f",
        type=str,
        help="Path to a file to analyze",
    )
    input_group.add_argument(
        "--lines",
        "-l",
        nargs="+",
        type=str,
        help="Strings to analyze, processed in order",
    )

    parser.add_argument(
        "--top",
        "-n",
        type=int,
        default=None,
        help="Show only the top N most frequent words",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="Encoding of --file (default: platform default)",
    )
    parser.add_argument(
        "--split-lines",
        action="store_true",
        help="End words at the end of each --lines string",
    )
    parser.add_argument("--count", metavar="WORD", help="Print how often WORD appears")
    parser.add_argument("--rank", metavar="WORD", help="Print the frequency rank of WORD")
    parser.add_argument(
        "--least",
        metavar="K",
        type=int,
        help="Print the K least common words",
    )
    parser.add_argument(
        "--collocations",
        nargs=2,
        metavar=("K", "BASE"),
        help="Print the K most common words after the first BASE",
    )
    parser.add_argument(
        "--precede",
        action="store_true",
        help="With --collocations, look before BASE instead of after it",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        if args.text is not None:
            stats = WordStat([args.text])
        elif args.file:
            stats = WordStat(args.file, encoding=args.encoding)
        else:  # args.lines
            stats = WordStat(args.lines, split_lines=args.split_lines)

        query_lines = _format_queries(stats, args)
        if query_lines:
            sys.stdout.write("\n".join(query_lines) + "\n")
        else:
            sys.stdout.write(format_report(stats, top_n=args.top) + "\n")

    except FileNotFoundError as e:
        sys.stderr.write(f"Error: File not found - {e}\n")
        return 1
    except UnicodeDecodeError as e:
        sys.stderr.write(f"Error: Could not decode file - {e}\n")
        return 1
    except KeyError as e:
        sys.stderr.write(f"Error: Word not found in input - {e}\n")
        return 1
    except (OSError, ValueError) as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
