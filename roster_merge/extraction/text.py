"""Whitespace canonicalization shared by every parser."""

import re

# \s covers tabs, newlines, NBSP and the full-width space U+3000
_WHITESPACE_RUN = re.compile(r"\s+")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs into one ASCII space and trim the ends."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def split_lines(text: str) -> list[str]:
    """Split text into normalized, non-empty lines."""
    lines = (normalize_text(line) for line in _LINE_BREAK.split(text))
    return [line for line in lines if line]
