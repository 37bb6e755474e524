"""Matching of natural language and SQL text to canonical queries."""

import re
from typing import Optional, Sequence

from dbchat.constants import SQL_MATCH_PREFIX
from dbchat.datasets import CanonicalQuery

_WHITESPACE = re.compile(r"\s+")


def match(queries: Sequence[CanonicalQuery], text: str) -> Optional[CanonicalQuery]:
    """Find the canonical query for a natural language request.

    Tiers are tried in order over all queries and the first hit wins:
    exact phrasing, then substring in either direction (or the input inside
    the query name), then keywords (tokens longer than two characters found
    in the query's name or description). Within a tier, declaration order
    decides.

    Args:
        queries: Canonical queries of a dataset
        text: User's request

    Returns:
        Matching CanonicalQuery or None
    """
    normalized = text.strip().lower()
    if not normalized:
        return None

    for query in queries:
        if any(normalized == p.strip().lower() for p in query.natural_language_patterns):
            return query

    for query in queries:
        for pattern in query.natural_language_patterns:
            phrase = pattern.strip().lower()
            if phrase and (phrase in normalized or normalized in phrase):
                return query
        if normalized in query.name.lower():
            return query

    keywords = [w for w in normalized.split() if len(w) > 2]
    for query in queries:
        name = query.name.lower()
        description = query.description.lower()
        if any(kw in name or kw in description for kw in keywords):
            return query

    return None


def match_sql(queries: Sequence[CanonicalQuery], sql: str) -> Optional[CanonicalQuery]:
    """Find the canonical query whose SQL starts like the submitted SQL.

    Args:
        queries: Canonical queries of a dataset
        sql: Submitted SQL text

    Returns:
        First CanonicalQuery with the same normalized prefix, or None
    """
    prefix = normalize_sql(sql)
    if not prefix:
        return None

    for query in queries:
        if normalize_sql(query.sql) == prefix:
            return query
    return None


def normalize_sql(sql: str) -> str:
    """Lower-case SQL, drop all whitespace and keep the comparison prefix."""
    return _WHITESPACE.sub("", sql.lower())[:SQL_MATCH_PREFIX]
