"""Tests for the per-base-URL filter cache."""

import pytest

from sitementions.pipeline.caching import FilterCacheConfig, InMemoryFilterCache
from sitementions.pipeline.mention_filter import USERNAME_PATTERN, MentionFilter

from tests.conftest import RecordingRewriter


class TestFilterCacheConfig:
    """Test FilterCacheConfig model."""

    def test_default_config(self):
        config = FilterCacheConfig()

        assert config.username_pattern == USERNAME_PATTERN
        assert config.info_url is None

    def test_config_immutability(self):
        config = FilterCacheConfig()

        with pytest.raises(Exception):  # Pydantic ValidationError
            config.username_pattern = "[a-z]+"

    def test_empty_username_pattern_rejected(self):
        with pytest.raises(Exception):  # Pydantic ValidationError
            FilterCacheConfig(username_pattern="")


class TestInMemoryFilterCache:
    """Test InMemoryFilterCache implementation."""

    def test_get_or_create_builds_mention_filter(self):
        cache = InMemoryFilterCache()

        mention_filter = cache.get_or_create("https://github.com")

        assert isinstance(mention_filter, MentionFilter)
        assert mention_filter.base_url == "https://github.com"
        assert mention_filter.username_pattern == USERNAME_PATTERN

    def test_same_base_url_reuses_filter(self):
        cache = InMemoryFilterCache()

        first = cache.get_or_create("https://github.com")
        second = cache.get_or_create("https://github.com")

        assert first is second
        assert len(cache) == 1

    def test_distinct_base_urls_get_distinct_filters(self):
        cache = InMemoryFilterCache()

        github = cache.get_or_create("https://github.com")
        gitlab = cache.get_or_create("https://gitlab.com")

        assert github is not gitlab
        assert gitlab.base_url == "https://gitlab.com"
        assert "https://github.com" in cache
        assert "https://gitlab.com" in cache

    def test_get_does_not_create(self):
        cache = InMemoryFilterCache()

        assert cache.get("https://github.com") is None
        assert len(cache) == 0

        created = cache.get_or_create("https://github.com")
        assert cache.get("https://github.com") is created

    def test_stats(self):
        cache = InMemoryFilterCache()

        cache.get_or_create("https://github.com")  # Miss
        cache.get_or_create("https://github.com")  # Hit
        cache.get_or_create("https://gitlab.com")  # Miss

        assert cache.get_stats() == {"hits": 1, "misses": 2, "size": 2}

    def test_config_passed_to_filters(self):
        config = FilterCacheConfig(username_pattern=r"[a-z]+", info_url="https://example.org/help")
        cache = InMemoryFilterCache(config=config)

        mention_filter = cache.get_or_create("https://github.com")

        assert mention_filter.username_pattern == r"[a-z]+"
        assert mention_filter.info_url == "https://example.org/help"

    def test_custom_factory(self):
        built: list[str] = []

        def factory(base_url, config):
            built.append(base_url)
            return RecordingRewriter(base_url=base_url)

        cache = InMemoryFilterCache(factory=factory)
        cache.get_or_create("https://example.test")
        cache.get_or_create("https://example.test")

        assert built == ["https://example.test"]
        assert isinstance(cache.get("https://example.test"), RecordingRewriter)
