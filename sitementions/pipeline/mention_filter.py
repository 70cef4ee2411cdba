"""HTML mention filter: turns ``@login`` tokens into profile links.

The filter parses the markup with BeautifulSoup and only rewrites text nodes,
so tag names and attribute values are never touched. Text inside ``pre``,
``code``, ``a``, ``style`` and ``script`` elements is left alone, which keeps
code samples and existing links intact.

Example:
    ```python
    mention_filter = MentionFilter(base_url="https://github.com")
    result = mention_filter.apply("<p>Thanks @alice!</p>")
    result.output
    # '<p>Thanks <a class="user-mention" href="https://github.com/alice">@alice</a>!</p>'
    result.mentioned_usernames
    # ['alice']
    ```
"""

import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString

from sitementions.pipeline.interfaces import MentionRewriterInterface, RewriteResult

# ASCII word character followed by word characters or hyphens
USERNAME_PATTERN = r"\w[\w-]*"

IGNORE_PARENTS = frozenset({"pre", "code", "a", "style", "script"})

# Reserved logins that point at the mention help page instead of a profile
MENTION_LOGINS = frozenset({"mention", "mentions"})


def _build_mention_pattern(username_pattern: str) -> re.Pattern[str]:
    return re.compile(
        rf"""
        (?:^|\W)                        # beginning of line or non-word char
        @((?>{username_pattern}))       # @username
        (?!/)                           # without a trailing slash
        (?=
            \.+[ \t\W]|                 # dots followed by space or non-word character
            \.+$|                       # dots at end of line
            [^0-9a-zA-Z_.]|             # non-word character except dot
            $                           # end of line
        )
        """,
        re.ASCII | re.IGNORECASE | re.MULTILINE | re.VERBOSE,
    )


class MentionPatterns(dict):
    """Mention regexes keyed by username pattern, compiled on first lookup."""

    def __missing__(self, username_pattern: str) -> re.Pattern[str]:
        if not isinstance(username_pattern, str):
            raise TypeError(f"username pattern must be a str, not {type(username_pattern).__name__}")
        pattern = _build_mention_pattern(username_pattern)
        self[username_pattern] = pattern
        return pattern


class MentionFilter(MentionRewriterInterface):
    """Mention rewriter bound to one base URL and username pattern.

    Attributes:
        info_url: Optional link target for the reserved ``@mention`` and
            ``@mentions`` logins. Without it those tokens stay plain text.
    """

    mention_patterns = MentionPatterns()

    def __init__(
        self,
        base_url: str,
        username_pattern: str = USERNAME_PATTERN,
        info_url: Optional[str] = None,
    ):
        self._base_url = base_url
        self.username_pattern = username_pattern
        self.info_url = info_url
        self._pattern = self.mention_patterns[username_pattern]

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def mention_pattern(self) -> re.Pattern[str]:
        return self._pattern

    def apply(self, text: str) -> RewriteResult:
        """Link every eligible mention in `text`.

        Markup is only re-serialized when at least one text node changed;
        otherwise the input is returned as is. Re-serializing uses the html5
        formatter, so void elements stay ``<br>`` and non-breaking spaces
        stay ``&nbsp;``.
        """
        if "@" not in text or not self._pattern.search(text):
            return RewriteResult(output=text)

        soup = BeautifulSoup(text, "html.parser")
        mentioned: list[str] = []
        changed = False
        for node in soup.find_all(string=True):
            if isinstance(node, PreformattedString) or "@" not in node:
                continue
            if any(parent.name in IGNORE_PARENTS for parent in node.parents):
                continue
            pieces = self._link_mentions(soup, str(node), mentioned)
            if pieces:
                node.replace_with(*pieces)
                changed = True

        if not changed:
            return RewriteResult(output=text)
        return RewriteResult(output=soup.decode(formatter="html5"), mentioned_usernames=mentioned)

    def profile_url(self, login: str) -> str:
        """Return the profile link for `login`."""
        url = self._base_url
        if not url.endswith(("/", "~")):
            url += "/"
        return url + login

    def _link_mentions(self, soup: BeautifulSoup, text: str, mentioned: list[str]) -> list[PageElement]:
        """Split one text node into text and link elements.

        Returns an empty list when nothing in `text` was linked.
        """
        pieces: list[PageElement] = []
        last = 0
        for match in self._pattern.finditer(text):
            login = match.group(1)
            if login.lower() in MENTION_LOGINS:
                if self.info_url is None:
                    continue
                href = self.info_url
            else:
                href = self.profile_url(login)
                if login not in mentioned:
                    mentioned.append(login)

            at = match.start(1) - 1
            if at > last:
                pieces.append(NavigableString(text[last:at]))
            link = soup.new_tag("a", attrs={"href": href, "class": "user-mention"})
            link.string = f"@{login}"
            pieces.append(link)
            last = match.end(1)

        if pieces and last < len(text):
            pieces.append(NavigableString(text[last:]))
        return pieces
