"""Mention steps of a site build.

This module wires the scanner, base URL resolution, filter cache and
body-scoped rewriter into the hooks a site build calls:

**Before rendering:**
    - `MentionsGenerator` records the usernames each post mentions under
      ``post.data["mentions"]``.
    - `pre_render` / `pre_render_posts` collect mentioned usernames into the
      shared render payload under ``payload["page"]["mentions"]``.

**After rendering** (`mentionify`, once per eligible page or document):
    1. Overlay the document's front matter on the site config when it sets
       ``mention-config``
    2. Resolve the base URL
    3. Fetch the filter for that URL from the session's cache
    4. Rewrite mentions inside the body of the rendered output
    5. Merge the linked usernames into ``doc.data["people"]``

Example usage:
    ```python
    site = Site(config=load_site_config(), pages=[...], posts=[...])
    session = MentionSession.for_site(site)
    hooks = HookRegistry()
    register_hooks(hooks, session)

    # ... host renders each page, then:
    hooks.trigger("pages", HookRegistry.POST_RENDER, page)
    ```
"""

import re
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from sitementions.config import MENTION_CONFIG_KEY, EnvSignals, effective_config, mention_base
from sitementions.document import BaseDocument
from sitementions.hooks import HookRegistry
from sitementions.logging import setup_logging
from sitementions.pipeline.body import FALLBACK_MENTION_PATTERN, rewrite_body
from sitementions.pipeline.caching import FilterCacheConfig, InMemoryFilterCache
from sitementions.pipeline.interfaces import FilterCacheInterface
from sitementions.pipeline.mention_filter import USERNAME_PATTERN, MentionFilter
from sitementions.scanner import merge_usernames, scan_usernames
from sitementions.site import Site

PEOPLE_KEY = "people"
MENTIONS_KEY = "mentions"

logger = setup_logging()


class MentionSession(BaseModel):
    """State shared by the mention steps of one site build.

    The session owns the filter cache, so filters are reused across every
    document of the build and dropped with the session.

    Attributes:
        site_config: Site-wide configuration.
        env: Environment signals for the default base URL.
        username_pattern: Regex fragment a username must match.
        info_url: Link target for ``@mention``/``@mentions``.
        filter_cache: Cache of filters per base URL. Built from
            `username_pattern` and `info_url` when omitted.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    site_config: dict[str, Any] = Field(default_factory=dict)
    env: EnvSignals = Field(default_factory=EnvSignals.from_environ)
    username_pattern: str = USERNAME_PATTERN
    info_url: str | None = None
    filter_cache: FilterCacheInterface | None = None

    _filter_regex: re.Pattern[str] | None = PrivateAttr(default=None)

    @field_validator("username_pattern")
    @classmethod
    def username_pattern_compiles(cls, v: str) -> str:
        try:
            MentionFilter.mention_patterns[v]
        except re.error as e:
            raise ValueError(f"username_pattern {v!r} is not a valid regex: {e}") from e
        return v

    def model_post_init(self, __context: Any) -> None:
        if self.filter_cache is None:
            self.filter_cache = InMemoryFilterCache(
                config=FilterCacheConfig(username_pattern=self.username_pattern, info_url=self.info_url)
            )

    @classmethod
    def for_site(cls, site: Site, **kwargs: Any) -> "MentionSession":
        """Create a session for `site`, using its config."""
        return cls(site_config=site.config, **kwargs)

    @property
    def filter_regex(self) -> re.Pattern[str]:
        """Pattern telling whether a region is worth handing to the filter.

        Taken from the filter's own pattern table so both agree on what a
        mention is.
        """
        if self._filter_regex is None:
            try:
                self._filter_regex = MentionFilter.mention_patterns[self.username_pattern]
            except (TypeError, KeyError, re.error) as e:
                logger.warning(
                    {
                        "message": "Could not derive mention pattern, using fallback",
                        "username_pattern": self.username_pattern,
                        "fallback": FALLBACK_MENTION_PATTERN.pattern,
                        "error": str(e),
                    },
                    pprint=True,
                )
                self._filter_regex = FALLBACK_MENTION_PATTERN
        return self._filter_regex

    def post_render(self, doc: BaseDocument) -> None:
        """Post-render hook: link mentions in `doc` if it is eligible."""
        if mentionable(doc):
            mentionify(doc, self)

    def site_pre_render(self, site: Site, payload: dict[str, Any]) -> None:
        """Site pre-render hook: collect the posts' mentions into `payload`."""
        pre_render_posts(site.posts, payload)


def mentionable(doc: BaseDocument) -> bool:
    """Return True if `doc` is written, renders to HTML and has not opted out."""
    written = doc.is_always_written() or doc.write
    html = doc.output_ext == ".html" or (doc.permalink or "").endswith("/")
    return written and html and doc.data.get(MENTION_CONFIG_KEY) is not False


def mentionify(doc: BaseDocument, session: MentionSession) -> None:
    """Link the mentions in `doc.output` and record who was mentioned.

    Raises:
        InvalidConfig: If the effective mention config has an unsupported type.
    """
    content = doc.output
    if not content or "@" not in content:
        return

    config = effective_config(session.site_config, doc.data)
    base_url = mention_base(config, session.env)
    mention_filter = session.filter_cache.get_or_create(base_url)

    outcome = rewrite_body(content, mention_filter, session.filter_regex)
    if not outcome.changed:
        return

    people = doc.data.get(PEOPLE_KEY)
    if people is None:
        doc.data[PEOPLE_KEY] = list(outcome.mentioned_usernames)
    else:
        doc.data[PEOPLE_KEY] = merge_usernames(people, outcome.mentioned_usernames)
    doc.output = outcome.output

    logger.debug(
        {
            "message": f"Linked mentions in {doc.relative_path}",
            "base_url": base_url,
            "mentioned": outcome.mentioned_usernames,
            "people": doc.data[PEOPLE_KEY],
        },
        pprint=True,
    )


def pre_render(doc: BaseDocument, payload: dict[str, Any]) -> None:
    """Add the usernames `doc.content` mentions to ``payload["page"]["mentions"]``."""
    found = scan_usernames(doc.content)
    if not found:
        return
    page = payload.setdefault("page", {})
    page[MENTIONS_KEY] = merge_usernames(page.get(MENTIONS_KEY), found)


def pre_render_posts(posts: Iterable[BaseDocument], payload: dict[str, Any]) -> None:
    """Run `pre_render` over every post in `posts`."""
    for post in posts:
        pre_render(post, payload)


class MentionsGenerator:
    """Record the usernames each post mentions in its own metadata.

    Runs before rendering, on the posts' source text, so templates can list
    who a post mentions.
    """

    def generate(self, site: Site) -> None:
        scanned = 0
        for post in site.posts:
            found = scan_usernames(post.content)
            if not found:
                continue
            post.data[MENTIONS_KEY] = merge_usernames(post.data.get(MENTIONS_KEY), found)
            scanned += 1
        logger.debug(f"Recorded mentions for {scanned} of {len(site.posts)} posts")


def register_hooks(registry: HookRegistry, session: MentionSession) -> None:
    """Register the mention hooks on `registry`."""
    registry.register(["pages", "documents"], HookRegistry.POST_RENDER, session.post_render, name="mentionify")
    registry.register("site", HookRegistry.PRE_RENDER, session.site_pre_render, name="mentions_pre_render")
