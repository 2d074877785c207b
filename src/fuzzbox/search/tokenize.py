"""Whitespace tokenization of query text."""


def tokenize(text: str) -> list[str]:
    """Split text into whitespace-delimited tokens.

    Casing and left-to-right order are preserved. Empty or whitespace-only
    input yields an empty list.
    """
    return text.split()
