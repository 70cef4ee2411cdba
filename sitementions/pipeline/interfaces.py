"""Pipeline interface definitions for mention rewriting.

The post-render step treats the component that turns ``@login`` tokens into
links as a pluggable capability:

- **MentionRewriterInterface** rewrites a fragment of HTML and reports which
  usernames it linked.
- **FilterCacheInterface** hands out one configured rewriter per base URL so
  documents sharing a base URL share a rewriter.

Typical flow:
    1. The session resolves the base URL for a document
    2. FilterCacheInterface returns the rewriter for that URL
    3. The body-scoped rewriter applies it to the document's body markup
"""

import re
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, Field


class RewriteResult(BaseModel):
    """Result of running a mention rewriter over a piece of markup.

    Attributes:
        output: The rewritten markup.
        mentioned_usernames: Usernames turned into links, each once, in the
            order they were first linked.
    """

    model_config = {"frozen": True}

    output: str
    mentioned_usernames: list[str] = Field(default_factory=list)


class MentionRewriterInterface(ABC):
    """Convert ``@login`` tokens in HTML into profile links.

    Implementations decide which tokens qualify (for example skipping ones
    inside code spans), so the usernames reported may be a subset of every
    ``@`` token in the input.
    """

    @property
    @abstractmethod
    def base_url(self) -> str:
        """The URL prefix profile links are built from."""

    @property
    @abstractmethod
    def mention_pattern(self) -> re.Pattern[str]:
        """The compiled pattern used to detect mentions."""

    @abstractmethod
    def apply(self, text: str) -> RewriteResult:
        """Rewrite mentions in `text`.

        Args:
            text: An HTML fragment or document.

        Returns:
            The rewritten markup and the usernames that were linked. Text
            without any mention is returned unchanged.
        """


class FilterCacheInterface(ABC):
    """Cache of configured rewriters keyed by base URL.

    Entries are created on first use and live as long as the cache. Nothing
    is evicted: the number of distinct base URLs in a run is small.
    """

    @abstractmethod
    def get(self, base_url: str) -> Optional[MentionRewriterInterface]:
        """Return the cached rewriter for `base_url`, or None."""

    @abstractmethod
    def get_or_create(self, base_url: str) -> MentionRewriterInterface:
        """Return the rewriter for `base_url`, building and storing it if needed."""

    @abstractmethod
    def get_stats(self) -> dict[str, int]:
        """Return cache statistics ("hits", "misses", "size")."""
