"""Pipeline components for rewriting mentions in rendered markup."""

from sitementions.pipeline.body import (
    FALLBACK_MENTION_PATTERN,
    BodyRewrite,
    BodySplit,
    rewrite_body,
    split_body,
)
from sitementions.pipeline.caching import FilterCacheConfig, InMemoryFilterCache
from sitementions.pipeline.interfaces import (
    FilterCacheInterface,
    MentionRewriterInterface,
    RewriteResult,
)
from sitementions.pipeline.mention_filter import USERNAME_PATTERN, MentionFilter

__all__ = [
    # Interfaces
    "MentionRewriterInterface",
    "FilterCacheInterface",
    "RewriteResult",
    # Filter
    "MentionFilter",
    "USERNAME_PATTERN",
    # Caching
    "FilterCacheConfig",
    "InMemoryFilterCache",
    # Body-scoped rewriting
    "BodySplit",
    "BodyRewrite",
    "split_body",
    "rewrite_body",
    "FALLBACK_MENTION_PATTERN",
]
