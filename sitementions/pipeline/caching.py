"""Caching of configured mention filters.

Building a filter is cheap but not free (it compiles the mention pattern and
sets up link targets), and a site usually links every page to the same base
URL. The cache keeps one filter per base URL for the length of a run:

    ```python
    cache = InMemoryFilterCache()
    f1 = cache.get_or_create("https://github.com")   # built
    f2 = cache.get_or_create("https://github.com")   # same object
    assert f1 is f2
    ```

Entries are never evicted or replaced. The cache is owned by a
`MentionSession`, so its lifetime is one site build.
"""

from typing import Callable, Optional

from pydantic import BaseModel, Field

from sitementions.pipeline.interfaces import FilterCacheInterface, MentionRewriterInterface
from sitementions.pipeline.mention_filter import USERNAME_PATTERN, MentionFilter


class FilterCacheConfig(BaseModel):
    """Settings applied to every filter the cache builds.

    Attributes:
        username_pattern: Regex fragment a username must match.
        info_url: Link target for the reserved ``@mention`` logins.
    """

    model_config = {"frozen": True}

    username_pattern: str = Field(USERNAME_PATTERN, min_length=1, description="Username regex fragment")
    info_url: str | None = Field(None, description="Link target for @mention/@mentions")


RewriterFactory = Callable[[str, FilterCacheConfig], MentionRewriterInterface]


def _default_factory(base_url: str, config: FilterCacheConfig) -> MentionRewriterInterface:
    return MentionFilter(base_url=base_url, username_pattern=config.username_pattern, info_url=config.info_url)


class InMemoryFilterCache(FilterCacheInterface):
    """Dict-backed filter cache.

    Thread safety: Not thread-safe. Two threads seeing the same new base URL
    at once may both build a filter; use external locking if documents are
    rendered in parallel.
    """

    def __init__(
        self,
        config: FilterCacheConfig | None = None,
        factory: RewriterFactory | None = None,
    ):
        """Initialize an empty cache.

        Args:
            config: Settings for built filters. If None, uses default config.
            factory: Builds a rewriter from a base URL and the config.
                Defaults to `MentionFilter`.
        """
        self.config = config or FilterCacheConfig()
        self._factory = factory or _default_factory
        self._filters: dict[str, MentionRewriterInterface] = {}
        self._hits = 0
        self._misses = 0

    def get(self, base_url: str) -> Optional[MentionRewriterInterface]:
        return self._filters.get(base_url)

    def get_or_create(self, base_url: str) -> MentionRewriterInterface:
        mention_filter = self._filters.get(base_url)
        if mention_filter is not None:
            self._hits += 1
            return mention_filter

        self._misses += 1
        mention_filter = self._factory(base_url, self.config)
        self._filters[base_url] = mention_filter
        return mention_filter

    def get_stats(self) -> dict[str, int]:
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._filters),
        }

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, base_url: object) -> bool:
        return base_url in self._filters
