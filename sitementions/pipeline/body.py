"""Rewrite mentions inside the ``<body>`` of rendered markup only.

Layouts put navigation, scripts and meta tags in the head; rewriting an
``@`` there would corrupt things like ``<meta content="@site">``. When the
markup has a body tag the mention filter only sees what lies between the
opening tag and the first ``</body>``, and everything around it is copied
through byte for byte:

    head | opener | body content | rest
    <html><head>..</head> | <body class="x"> | Hi @alice | </body></html>

Markup without a body tag (a fragment, or a page without a layout) is
rewritten as a whole.
"""

import logging
import re

from pydantic import BaseModel, Field

from sitementions.pipeline.interfaces import MentionRewriterInterface

logger = logging.getLogger(__name__)

OPENING_BODY_TAG = re.compile(r"<body(.*?)>\s*", re.DOTALL)
CLOSING_BODY_TAG = "</body>"

# Used when the filter's own pattern cannot be derived
FALLBACK_MENTION_PATTERN = re.compile(r"@\w+", re.ASCII)


class BodySplit(BaseModel):
    """Markup cut around the body element.

    ``head + opener + body_content + rest`` always equals the input.
    """

    model_config = {"frozen": True}

    head: str
    opener: str
    body_content: str
    rest: str


class BodyRewrite(BaseModel):
    """Outcome of a body-scoped rewrite.

    Attributes:
        output: The full markup after rewriting (the input when unchanged).
        mentioned_usernames: Usernames the filter linked.
        changed: Whether the filter was applied at all.
    """

    model_config = {"frozen": True}

    output: str
    mentioned_usernames: list[str] = Field(default_factory=list)
    changed: bool = False


def split_body(markup: str) -> BodySplit | None:
    """Split `markup` around its body element, or return None without one."""
    opening = OPENING_BODY_TAG.search(markup)
    if opening is None:
        return None
    body_content, closing, after = markup[opening.end():].partition(CLOSING_BODY_TAG)
    return BodySplit(
        head=markup[: opening.start()],
        opener=opening.group(0),
        body_content=body_content,
        rest=closing + after,
    )


def rewrite_body(
    markup: str,
    mention_filter: MentionRewriterInterface,
    worth_pattern: re.Pattern[str] = FALLBACK_MENTION_PATTERN,
) -> BodyRewrite:
    """Apply `mention_filter` to the body region of `markup`.

    Args:
        markup: Full rendered markup.
        mention_filter: The rewriter to apply.
        worth_pattern: Cheap test for "this region may contain a mention".

    Returns:
        The new markup and the usernames linked. When there is nothing to do
        the input comes back with ``changed=False``.
    """
    if "@" not in markup:
        return BodyRewrite(output=markup)

    parts = split_body(markup)
    if parts is None:
        if not worth_pattern.search(markup):
            return BodyRewrite(output=markup)
        result = mention_filter.apply(markup)
        return BodyRewrite(output=result.output, mentioned_usernames=result.mentioned_usernames, changed=True)

    if not worth_pattern.search(parts.body_content):
        logger.debug("Body has no mentions; leaving markup untouched")
        return BodyRewrite(output=markup)

    result = mention_filter.apply(parts.body_content)
    return BodyRewrite(
        output=parts.head + parts.opener + result.output + parts.rest,
        mentioned_usernames=result.mentioned_usernames,
        changed=True,
    )
