# File: site_vectorizer/chunker.py
"""site_vectorizer.chunker: sentence-aware packing of text into token-bounded chunks.

The token count is a rough estimate (four characters per token); it is only
used to keep chunks near the embedding model's input size.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Sequence

__all__: Sequence[str] = ("TextChunk", "estimate_tokens", "split_sentences", "chunk_text")

DEFAULT_MAX_TOKENS = 400

# a sentence runs up to and including a run of terminal punctuation;
# the unterminated tail of the text is its own span
_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+\Z")


@dataclass(frozen=True, slots=True)
class TextChunk:
    """Contiguous run of sentences and the sum of their token estimates."""

    text: str
    tokens: int


def estimate_tokens(text: str) -> int:
    """Approximate token count: ``ceil(len(text) / 4)``."""
    return math.ceil(len(text) / 4)


def split_sentences(text: str) -> List[str]:
    """Split *text* into sentence spans, keeping punctuation and leading whitespace."""
    spans = [s for s in _SENTENCE_RE.findall(text) if s.strip()]
    if not spans and text.strip():
        return [text]
    return spans


def chunk_text(text: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> List[TextChunk]:
    """Greedily pack sentences into chunks of at most *max_tokens* estimated tokens.

    A sentence is never split: one longer than the budget becomes its own
    oversized chunk. Each chunk reports the running sum of its sentences'
    estimates, not a fresh estimate of the trimmed chunk text.
    """
    if max_tokens < 1:
        raise ValueError(f"max_tokens must be >= 1, got {max_tokens}")

    chunks: List[TextChunk] = []
    current = ""
    current_tokens = 0

    for sentence in split_sentences(text):
        sentence_tokens = estimate_tokens(sentence)
        if current_tokens + sentence_tokens > max_tokens and current:
            chunks.append(TextChunk(text=current.strip(), tokens=current_tokens))
            current = sentence
            current_tokens = sentence_tokens
        else:
            current += " " + sentence
            current_tokens += sentence_tokens

    if current.strip():
        chunks.append(TextChunk(text=current.strip(), tokens=current_tokens))
    return chunks
