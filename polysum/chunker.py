import re
from typing import List

# run of non-terminators (possibly empty) closed by one or more terminators
_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+")


def split_sentences(text: str) -> List[str]:
    """Split text into sentence fragments, keeping terminators and inner whitespace.

    Concatenating the fragments gives back ``text`` exactly. A trailing run
    without a terminator becomes its own fragment; text with no terminators
    at all is a single fragment.
    """
    if not text:
        return []
    fragments = []
    end = 0
    for m in _SENTENCE_RE.finditer(text):
        fragments.append(m.group(0))
        end = m.end()
    if end < len(text):
        fragments.append(text[end:])
    return fragments


def chunk_text(text: str, max_chars: int = 1000) -> List[str]:
    """Greedily pack sentence fragments into chunks of at most ``max_chars`` characters.

    A single sentence longer than the budget is kept whole as its own chunk.
    Chunks are stripped and blank ones dropped.
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be >= 1, got {max_chars}")

    chunks: List[str] = []
    current = ""
    for fragment in split_sentences(text):
        if current and len(current) + len(fragment) > max_chars:
            chunks.append(current)
            current = fragment
        else:
            current += fragment
    if current:
        chunks.append(current)

    return [c.strip() for c in chunks if c.strip()]
