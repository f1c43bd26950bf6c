"""
Core Utilities - Helpers shared by the extraction boundary and the CLI.

Score averaging over AniList-style histograms, season-aware episode
numbers, and post-processing of summary lists (title filters, fuzzy
matching and result limits).
"""

import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Union

from anisources.core.models import AnimeSummary, ScoreBucket


logger = logging.getLogger(__name__)

_SEASON_EPISODE = re.compile(r"^(?:S\d*|F)E(\d+)$", re.IGNORECASE)


def average_score(buckets: Iterable[Union[ScoreBucket, Mapping[str, Any]]]) -> Optional[float]:
    """
    Weighted average of a score distribution.
    
    Args:
        buckets: ScoreBucket instances or dicts with 'score' and 'amount'
        
    Returns:
        sum(score * amount) / sum(amount), or None when no votes were cast
    """
    normalized = [
        bucket if isinstance(bucket, ScoreBucket) else ScoreBucket.model_validate(bucket)
        for bucket in buckets
    ]
    
    total = sum(bucket.amount for bucket in normalized)
    if total == 0:
        return None
    
    return sum(bucket.score * bucket.amount for bucket in normalized) / total


def average_score_label(buckets: Iterable[Union[ScoreBucket, Mapping[str, Any]]]) -> str:
    """Average score with one decimal, or 'N/A'."""
    score = average_score(buckets)
    return "N/A" if score is None else f"{score:.1f}"


def season_episode(number: str) -> int:
    """
    Episode number of a label, aware of season-prefixed labels.
    
    'S2E05' -> 5, 'FE01' -> 1, '12' -> 12, anything else -> 0.
    """
    number = (number or "").strip()
    match = _SEASON_EPISODE.match(number)
    if match:
        return int(match.group(1))
    
    try:
        return int(number)
    except ValueError:
        return 0


def fuzzy_filter(query: str, results: List[AnimeSummary]) -> List[AnimeSummary]:
    """
    Keep results whose title loosely matches the query.
    
    A result matches when the query is a substring of its title, or when
    any query word and any title word contain one another. Matching is
    case-insensitive; a blank query keeps everything.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(results)
    
    query_words = needle.split()
    matched = []
    
    for result in results:
        title = result.title.lower()
        if needle in title:
            matched.append(result)
            continue
        
        title_words = title.split()
        if any(q in t or t in q for q in query_words for t in title_words):
            matched.append(result)
    
    logger.debug(f"Fuzzy filter '{query}': {len(matched)}/{len(results)} results kept")
    return matched


def limit_results(results: List[Any], max_results: int) -> List[Any]:
    """Truncate a list; 0 means unlimited."""
    if max_results and max_results > 0:
        return results[:max_results]
    return results


def filter_results(results: List[AnimeSummary], option: Any, source: Any) -> List[AnimeSummary]:
    """
    Apply a dub/sub/ita title filter using a source's markers.
    
    Args:
        results: Summaries to filter
        option: FilterOption or its string value
        source: Adapter whose dub marker applies
    """
    return source.filter_results(results, option)


# Export utility functions
__all__ = [
    "average_score",
    "average_score_label",
    "season_episode",
    "fuzzy_filter",
    "limit_results",
    "filter_results",
]
