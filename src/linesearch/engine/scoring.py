"""Relevance heuristic for a matching line."""

from __future__ import annotations

import re

OCCURRENCE_WEIGHT = 10.0
WORD_BOUNDARY_BOOST = 5.0
SHORT_QUERY_BOOST = 2.0
SHORT_QUERY_MAX_LEN = 4


def _matches_whole_word(text: str, query: str) -> bool:
    try:
        pattern = re.compile(r"\b" + re.escape(query) + r"\b")
    except re.error:
        return False
    return pattern.search(text) is not None


def score(text: str, query: str) -> float:
    """Score an already-lowercased line against an already-lowercased query.

    Each non-overlapping occurrence is worth 10. A whole-word match of a
    query of two or more bytes adds 5. Queries of four bytes or fewer get
    a flat 2 on top. Lengths are measured in UTF-8 bytes.
    """
    query_bytes = len(query.encode("utf-8"))
    value = text.count(query) * OCCURRENCE_WEIGHT
    if query_bytes >= 2 and _matches_whole_word(text, query):
        value += WORD_BOUNDARY_BOOST
    if query_bytes <= SHORT_QUERY_MAX_LEN:
        value += SHORT_QUERY_BOOST
    return value
