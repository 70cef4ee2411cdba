"""The site container handed to generators and hooks."""

from typing import Any, Iterator

from pydantic import BaseModel, Field

from sitementions.document import BaseDocument, CollectionDocument, Page, Post


class Site(BaseModel):
    """A site's configuration and the documents it renders.

    Attributes:
        config: Site-wide configuration mapping (already loaded).
        pages: Standalone pages.
        posts: Blog posts.
        documents: Documents from the remaining collections.
    """

    config: dict[str, Any] = Field(default_factory=dict)
    pages: list[Page] = Field(default_factory=list)
    posts: list[Post] = Field(default_factory=list)
    documents: list[CollectionDocument] = Field(default_factory=list)

    def each_document(self) -> Iterator[BaseDocument]:
        """Yield every page, post and collection document, in that order."""
        yield from self.pages
        yield from self.posts
        yield from self.documents
