"""Test fixtures for the mention pipeline.

This module provides:
- Factory helpers for pages, posts and collection documents
- A session with no environment signals, so the default base URL is
  https://github.com regardless of the machine's environment
- A small site with a page, two posts and a collection document
- A recording rewriter for tests that only care about what the rewriter saw
"""

import re

import pytest

from sitementions.config import EnvSignals
from sitementions.document import CollectionDocument, Page, Post
from sitementions.mentions import MentionSession
from sitementions.pipeline.interfaces import MentionRewriterInterface, RewriteResult
from sitementions.site import Site

LAYOUT = '<html><head><meta name="twitter:site" content="@site"></head><body class="post">{body}</body></html>'


def make_page(output: str | None = None, content: str | None = None, **kwargs) -> Page:
    return Page(relative_path=kwargs.pop("relative_path", "index.md"), output=output, content=content, **kwargs)


def make_post(content: str | None = None, output: str | None = None, **kwargs) -> Post:
    return Post(
        relative_path=kwargs.pop("relative_path", "_posts/2024-01-01-hello.md"),
        content=content,
        output=output,
        **kwargs,
    )


class RecordingRewriter(MentionRewriterInterface):
    """Rewriter that uppercases its input and remembers every call."""

    def __init__(self, base_url: str = "https://example.test", mentioned: list[str] | None = None):
        self._base_url = base_url
        self.mentioned = mentioned or []
        self.calls: list[str] = []

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def mention_pattern(self) -> re.Pattern[str]:
        return re.compile(r"@\w+")

    def apply(self, text: str) -> RewriteResult:
        self.calls.append(text)
        return RewriteResult(output=text.upper(), mentioned_usernames=self.mentioned)


@pytest.fixture
def no_env() -> EnvSignals:
    """Environment without SSL/GITHUB_HOSTNAME."""
    return EnvSignals()


@pytest.fixture
def session(no_env: EnvSignals) -> MentionSession:
    """Session with an empty site config and no environment signals."""
    return MentionSession(env=no_env)


@pytest.fixture
def site() -> Site:
    """Site with one page, two posts and one collection document."""
    return Site(
        config={"title": "Test site"},
        pages=[make_page(relative_path="about.md", content="Maintained by @alice.")],
        posts=[
            make_post(content="Thanks @alice and @bob!", relative_path="_posts/2024-01-01-a.md"),
            make_post(content="Ping @carol, @alice", relative_path="_posts/2024-01-02-b.md"),
        ],
        documents=[CollectionDocument(relative_path="_docs/setup.md", collection="docs", content="Ask @dave")],
    )
