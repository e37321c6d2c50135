# Text tokenization
# Shared by the embedding model and the lexical store

import re

STOPWORDS = frozenset({
    "a", "an", "and", "are", "as",
    "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it",
    "its", "of", "on", "that", "the",
    "this", "to", "was", "will", "with",
})

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def tokenize(text: str) -> list[str]:
    """Split text into lowercase alphanumeric tokens.

    Tokens of a single character and stopwords are dropped.
    """
    return [
        token
        for token in _TOKEN_RE.findall(text.lower())
        if len(token) > 1 and token not in STOPWORDS
    ]


def query_words(query: str) -> list[str]:
    """Whitespace-split lowercase words, no stopword filtering."""
    return query.lower().split()
