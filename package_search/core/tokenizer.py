"""Word extraction for package names and descriptions."""

import re
from typing import FrozenSet, Iterable, List, Optional, Set

# Words too common in package descriptions to be worth indexing
STOP_WORDS: FrozenSet[str] = frozenset({"for", "and", "the", "with", "from", "that", "your"})

MIN_WORD_LENGTH = 3

LEADING_PUNCTUATION = '("*'
TRAILING_PUNCTUATION = '.,!?:)";*'
POSSESSIVE_SUFFIX = "'s"


class Tokenizer:
    """Turns a package's name and description into a set of searchable words."""

    def __init__(self) -> None:
        """Initialize the tokenizer."""
        # ASCII whitespace only (no vertical tab), unlike str.split()
        self.whitespace_regex = re.compile(r"[ \t\n\r\f]+")
        self.name_delimiter_regex = re.compile(r"[-_]")

    def normalize_token(self, raw: str) -> str:
        """
        Normalize one raw description token.

        Lower-cases the token, strips surrounding punctuation and any
        trailing possessive. Trailing stripping repeats until the token stops
        changing, so normalizing an already-normalized word is a no-op.

        Args:
            raw: A whitespace-delimited piece of text

        Returns:
            The normalized token, possibly empty
        """
        token = raw.lower().lstrip(LEADING_PUNCTUATION)

        while True:
            stripped = token.rstrip(TRAILING_PUNCTUATION)
            if stripped.endswith(POSSESSIVE_SUFFIX):
                stripped = stripped[: -len(POSSESSIVE_SUFFIX)]
            if stripped == token:
                return token
            token = stripped

    def split_name(self, name: str) -> List[str]:
        """Split a package name on hyphens and underscores."""
        return [piece for piece in self.name_delimiter_regex.split(name) if piece]

    def split_description(self, description: Optional[str]) -> List[str]:
        """Split a description on ASCII whitespace."""
        if not description:
            return []
        return [token for token in self.whitespace_regex.split(description) if token]

    def is_indexable(self, word: str) -> bool:
        """Whether a normalized word is long enough and not a stop word."""
        return len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS

    def tokenize(self, name: str, description: Optional[str] = None) -> FrozenSet[str]:
        """
        Extract the indexable words of a package.

        Args:
            name: Package name, also split on '-' and '_'
            description: Free-text description; None is treated as empty

        Returns:
            Set of lower-cased words, without stop words or words of two
            characters or fewer
        """
        raw_tokens: Iterable[str] = self.split_description(description) + self.split_name(name)

        words: Set[str] = set()
        for raw in raw_tokens:
            word = self.normalize_token(raw)
            if self.is_indexable(word):
                words.add(word)

        return frozenset(words)
