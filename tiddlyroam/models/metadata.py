"""
Metadata models for Tiddlyroam.

These hold the values derived for a document's frontmatter and the edges
read from the link graph.
"""

from typing import List, Union
from pydantic import BaseModel, Field


class LinkGraphRecord(BaseModel):
    """
    A directed edge in the link graph: source links to dest.
    """

    source: str = Field(
        ...,
        description="Identity of the linking document"
    )

    dest: str = Field(
        ...,
        description="Identity of the linked document"
    )


class Metadata(BaseModel):
    """
    Frontmatter values for one exported document.

    Timestamps are already formatted as 17-digit UTC strings and
    backlinks as display text.
    """

    title: str = Field(
        ...,
        description="Display title of the document"
    )

    tags: Union[str, List[str]] = Field(
        default_factory=list,
        description="Tags attached to the document, as a list or a preformatted string"
    )

    references: str = Field(
        default="",
        description="Reference string, empty when none"
    )

    created: str = Field(
        ...,
        description="Earliest revision timestamp"
    )

    modified: str = Field(
        ...,
        description="Latest revision timestamp"
    )

    backlinks: str = Field(
        default="",
        description="Space-separated display titles of linking documents"
    )

    model_config = {"frozen": True}
