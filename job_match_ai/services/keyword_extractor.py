"""Keyword and skill features for matching free text and skill lists."""

import re
from typing import Iterable, List, Optional, Set

# Common English function words excluded from keyword overlap
STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
    "be", "been", "being", "to", "of", "for", "with", "by", "about",
    "against", "between", "into", "through", "during", "before", "after",
    "above", "below", "from", "up", "down", "in", "out", "on", "off",
    "over", "under", "again", "further", "then", "once", "here", "there",
    "when", "where", "why", "how", "all", "any", "both", "each", "few",
    "more", "most", "other", "some", "such", "no", "nor", "not", "only",
    "own", "same", "so", "than", "too", "very", "s", "t", "can", "will",
    "just", "don", "should", "now",
})

MIN_KEYWORD_LENGTH = 3

# Punctuation removed before tokenizing; "-" and "_" join words ("full-time" -> "fulltime")
_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")


def extract_keywords(text: Optional[str]) -> Set[str]:
    """
    Normalize free text into a set of keyword tokens.
    Lowercases, strips punctuation, splits on whitespace, drops stop words
    and tokens shorter than 3 characters.
    """
    if not text:
        return set()
    cleaned = _PUNCTUATION_RE.sub("", text.lower())
    return {
        word for word in cleaned.split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    }


def keyword_overlap(reference_text: Optional[str], other_text: Optional[str]) -> float:
    """Share of the reference text's keywords that also appear in the other text (0 if none)."""
    reference = extract_keywords(reference_text)
    if not reference:
        return 0.0
    return len(reference & extract_keywords(other_text)) / len(reference)


def normalize_skills(skills: Optional[Iterable[str]]) -> List[str]:
    """Strip and lowercase skills, dropping blanks. Order and duplicates are kept."""
    return [(s or "").strip().lower() for s in (skills or []) if (s or "").strip()]


def skill_matches(skill: str, requirement: str) -> bool:
    """
    Case-insensitive bidirectional substring containment ("react" ~ "React.js").
    Short skills can match unrelated requirements ("java" ~ "javascript"); accepted approximation.
    """
    s = skill.strip().lower()
    r = requirement.strip().lower()
    if not s or not r:
        return False
    return s in r or r in s


def matching_skills(skills: Iterable[str], requirements: Iterable[str]) -> List[str]:
    """Candidate skills that match at least one requirement."""
    reqs = normalize_skills(requirements)
    return [s for s in normalize_skills(skills) if any(skill_matches(s, r) for r in reqs)]
