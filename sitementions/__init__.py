"""
sitementions - Link @username mentions in rendered site pages.

After a page renders, `@login` tokens in its body become links to
`<base_url>/<login>`, and the linked usernames are stored under the page's
``people`` metadata. Before rendering, the posts' source text can be scanned
to expose who each post mentions.

    from sitementions import HookRegistry, MentionSession, register_hooks

    session = MentionSession(site_config={"mention-config": "https://gitlab.example.com"})
    hooks = HookRegistry()
    register_hooks(hooks, session)
"""

from sitementions.config import (
    GITHUB_DOT_COM,
    MENTION_CONFIG_KEY,
    EnvSignals,
    default_mention_base,
    effective_config,
    load_site_config,
    mention_base,
)
from sitementions.document import BaseDocument, CollectionDocument, Page, Post
from sitementions.errors import InvalidConfig
from sitementions.hooks import HookRegistry
from sitementions.mentions import (
    MentionSession,
    MentionsGenerator,
    mentionable,
    mentionify,
    pre_render,
    pre_render_posts,
    register_hooks,
)
from sitementions.pipeline import InMemoryFilterCache, MentionFilter, RewriteResult
from sitementions.scanner import merge_usernames, scan_usernames
from sitementions.site import Site

__all__ = [
    "BaseDocument",
    "Page",
    "Post",
    "CollectionDocument",
    "Site",
    "EnvSignals",
    "GITHUB_DOT_COM",
    "MENTION_CONFIG_KEY",
    "default_mention_base",
    "effective_config",
    "load_site_config",
    "mention_base",
    "InvalidConfig",
    "HookRegistry",
    "MentionSession",
    "MentionsGenerator",
    "mentionable",
    "mentionify",
    "pre_render",
    "pre_render_posts",
    "register_hooks",
    "InMemoryFilterCache",
    "MentionFilter",
    "RewriteResult",
    "merge_usernames",
    "scan_usernames",
]

__version__ = "0.1.0"
