"""Word statistics package.

This package provides:
1. Text normalization into lowercase words (tokenizer module)
2. A counting hash table with separate chaining (hash_table module)
3. Frequency, rank and collocation queries (word_stat module)

Example usage:
    from wordstat import WordStat

    stats = WordStat(["the cat and the hat"])
    print(stats.word_count("the"))  # 2
    print(stats.word_rank("cat"))  # 2
    print(stats.most_common_collocations(1, "and", precede=False))  # ['the']
"""

from __future__ import annotations

from wordstat.hash_table import DEFAULT_CAPACITY, HashTable
from wordstat.tokenizer import Tokenizer
from wordstat.word_stat import WordStat

__all__ = ["DEFAULT_CAPACITY", "HashTable", "Tokenizer", "WordStat"]
