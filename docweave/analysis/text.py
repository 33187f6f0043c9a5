"""Text and vector helpers shared by the relationship signals."""

from collections.abc import Iterable, Set

import numpy as np

from docweave.domain.document import DocumentSection

STOP_WORDS = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "this", "that", "these", "those", "is", "are", "was", "were", "be", "been",
        "have", "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "may", "might", "can", "shall", "must", "need", "want", "like", "make", "take",
        "get", "give", "go", "come", "see", "know", "think", "feel", "find", "tell",
        "ask", "try", "seem", "turn", "put", "set", "become", "leave", "call", "keep",
        "let", "begin", "help", "talk", "start", "show", "hear", "play", "run", "move",
        "live", "believe", "hold", "bring", "happen", "write", "provide", "sit",
        "stand", "lose", "pay", "meet", "include", "continue", "learn", "change",
        "lead", "understand", "watch", "follow", "stop", "create", "speak", "read",
        "allow", "add", "spend", "grow", "open", "walk", "win", "offer", "remember",
        "love", "consider", "appear", "buy", "wait", "serve", "die", "send", "expect",
        "build", "stay", "fall", "cut", "reach", "kill", "remain",
    }
)  # fmt: skip

MIN_CONCEPT_LENGTH = 3


def is_stop_word(word: str) -> bool:
    return word in STOP_WORDS


def extract_concepts(title: str, content: str) -> set[str]:
    """Extract key concepts (single words and two-word phrases) from a document.

    Words shorter than four characters are dropped before phrases are formed,
    so phrases join words that were separated only by short words.

    Args:
        title: Document title
        content: Full document content

    Returns:
        Set of lowercased concepts
    """
    words = [word for word in f"{title} {content}".split() if len(word) > MIN_CONCEPT_LENGTH]

    concepts = set()

    for word in words:
        clean_word = "".join(c for c in word.lower() if c.isalnum())
        if len(clean_word) > MIN_CONCEPT_LENGTH and not is_stop_word(clean_word):
            concepts.add(clean_word)

    for first, second in zip(words, words[1:]):
        phrase = "".join(c for c in f"{first} {second}".lower() if c.isalnum() or c.isspace())
        if len(phrase.split()) == 2:
            concepts.add(phrase)

    return concepts


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    """Intersection size over union size, 0.0 when both sets are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def section_title_similarity(
    sections_a: Iterable[DocumentSection], sections_b: Iterable[DocumentSection]
) -> float:
    """Jaccard similarity of lowercased section titles."""
    titles_a = {section.title.lower() for section in sections_a}
    titles_b = {section.title.lower() for section in sections_b}
    if not titles_a or not titles_b:
        return 0.0
    return jaccard_similarity(titles_a, titles_b)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two vectors, 0.0 if either has zero norm."""
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def truncate(text: str, max_chars: int = 100) -> str:
    return text[:max_chars]
