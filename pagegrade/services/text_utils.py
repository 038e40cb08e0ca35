"""
pagegrade/services/text_utils.py
Tokenizing helpers shared by the content battery and the humanizer.
Word boundaries are ASCII-only.
"""
import re
from typing import List

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_TERMINATORS = re.compile(r"[.!?]+")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def split_words(text: str) -> List[str]:
    """Whitespace split that keeps a leading empty token, like a plain regex split."""
    return _WHITESPACE.split(text)


def count_words(text: str) -> int:
    """Number of non-empty whitespace-separated tokens."""
    return len([w for w in split_words(text) if w])


def split_sentences(text: str) -> List[str]:
    """Segments between runs of . ! ? with blank segments dropped (not stripped)."""
    return [s for s in _SENTENCE_TERMINATORS.split(text) if s.strip()]


def split_sentences_keep_punctuation(text: str) -> List[str]:
    """Split after terminal punctuation followed by whitespace; punctuation stays attached."""
    return [s for s in _SENTENCE_BREAK.split(text) if s.strip()]


def split_paragraphs(text: str) -> List[str]:
    return [p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]


def lowercase_tokens(text: str, min_length: int = 1) -> List[str]:
    """Lowercased runs of ASCII letters at least `min_length` long, bounded by word edges."""
    pattern = r"\b[a-z]{%d,}\b" % min_length
    return re.findall(pattern, text.lower(), re.ASCII)
