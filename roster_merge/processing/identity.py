"""Identity Matcher: resolve a chat speaker token to a roster name.

Similarity is the bigram Dice coefficient. Candidate selection runs through
``rapidfuzz.process.extractOne`` with the Dice scorer plugged in, which keeps
the highest score and, on ties, the earliest candidate.
"""

from collections import Counter
from typing import Iterable, Optional

from rapidfuzz import process

# Observed acceptance threshold for fuzzy speaker matches
DEFAULT_MATCH_THRESHOLD = 0.85


def bigrams(text: str) -> list[str]:
    """All length-2 substrings, in order, repeats kept."""
    return [text[i:i + 2] for i in range(len(text) - 1)]


def similarity(a: str, b: str) -> float:
    """Bigram Dice similarity in [0, 1].

    The intersection is multiset-aware: a bigram occurring m times in one
    string and n times in the other contributes min(m, n).
    """
    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    pairs_a = Counter(bigrams(a))
    pairs_b = Counter(bigrams(b))
    shared = sum((pairs_a & pairs_b).values())
    total = (len(a) - 1) + (len(b) - 1)
    return 2 * shared / total


def dice_scorer(s1: str, s2: str, *, processor=None, score_cutoff=None, **kwargs) -> float:
    """``similarity`` with the keyword signature rapidfuzz passes to scorers."""
    if processor is not None:
        s1, s2 = processor(s1), processor(s2)
    return similarity(s1, s2)


def best_match(
    speaker: str,
    candidates: Iterable[str],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> Optional[tuple[str, float]]:
    """Resolve a speaker token to the most similar candidate name.

    Args:
        speaker: Free-text speaker token from a chat line.
        candidates: Roster names, in roster order.
        threshold: Minimum similarity for a fuzzy match to be accepted.

    Returns:
        ``(name, score)`` for an exact match (score 1.0) or the best fuzzy
        match scoring at least ``threshold``; None otherwise.
    """
    names = list(candidates)
    if not speaker or not names:
        return None

    if speaker in names:
        return speaker, 1.0

    result = process.extractOne(
        speaker,
        names,
        scorer=dice_scorer,
        score_cutoff=threshold,
    )
    if result is None:
        return None

    name, score, _ = result
    return name, float(score)
