"""Document representation for the mention pipeline.

This module defines `BaseDocument`, the abstract base class for the pages and
documents a site renders, and its concrete kinds:

    - **Page**: a standalone page. Pages are always written to the output.
    - **Post**: a dated blog post. Written unless `write` is turned off.
    - **CollectionDocument**: a document from any other collection.

A document carries:
    - **content**: the pre-render source text (front matter already stripped)
    - **output**: the rendered markup, filled in by the host renderer
    - **data**: front matter and other metadata, including the mention keys
      this package maintains (``people`` and ``mentions``)

Unlike most pipeline models, documents are mutable: the post-render step
rewrites `output` and extends `data` in place.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BaseDocument(ABC, BaseModel):
    """Abstract base class for rendered site documents.

    Subclasses must implement:
        - `get_document_type()`: Return the kind of document
        - `is_always_written()`: Whether the kind is written regardless of `write`

    Example:
        ```python
        page = Page(relative_path="about.md", content="Ask @alice.")
        page.output = "<p>Ask @alice.</p>"
        ```
    """

    model_config = ConfigDict(validate_assignment=True)

    relative_path: str = Field(description="Path of the source file relative to the site root.")
    content: str | None = Field(default=None, description="Pre-render source text.")
    output: str | None = Field(default=None, description="Rendered markup.")
    data: dict[str, Any] = Field(default_factory=dict, description="Front matter and page metadata.")
    output_ext: str = Field(default=".html", description="Extension of the rendered file, with the dot.")
    permalink: str | None = Field(default=None, description="Permalink from front matter, if any.")
    write: bool = Field(default=True, description="Whether the host writes this document to disk.")

    @abstractmethod
    def get_document_type(self) -> str:
        """Return the document kind, e.g. 'page' or 'post'."""

    @abstractmethod
    def is_always_written(self) -> bool:
        """Return True if documents of this kind are written regardless of `write`."""


class Page(BaseDocument):
    """A standalone site page."""

    def get_document_type(self) -> str:
        return "page"

    def is_always_written(self) -> bool:
        return True


class Post(BaseDocument):
    """A blog post from the posts collection."""

    def get_document_type(self) -> str:
        return "post"

    def is_always_written(self) -> bool:
        return False


class CollectionDocument(BaseDocument):
    """A document belonging to a named collection other than posts."""

    collection: str = Field(default="documents", description="Label of the owning collection.")

    def get_document_type(self) -> str:
        return self.collection

    def is_always_written(self) -> bool:
        return False
