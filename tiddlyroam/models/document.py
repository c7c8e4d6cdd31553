"""
Document tree models for Tiddlyroam.

This module defines the parsed outline document that the exporter walks.
Parsers hand trees over either as Node objects or as JSON documents that
validate into them.
"""

from enum import Enum
from typing import Any, Dict, List, Union
from pydantic import BaseModel, Field, model_validator


class NodeKind(str, Enum):
    """The fixed set of node kinds the transcoder knows how to render."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE_THROUGH = "strike-through"
    CODE = "code"
    VERBATIM = "verbatim"
    LINK = "link"
    PARAGRAPH = "paragraph"
    SECTION = "section"
    HEADLINE = "headline"
    HORIZONTAL_RULE = "horizontal-rule"
    SRC_BLOCK = "src-block"
    TEMPLATE = "template"


# Leaf kinds carry a literal value and never have children
LEAF_KINDS = frozenset({NodeKind.CODE, NodeKind.VERBATIM})


class Node(BaseModel):
    """
    A single node of a parsed outline document.

    Container nodes hold an ordered mix of child nodes and plain text
    strings; plain text renders verbatim.
    """

    kind: NodeKind = Field(
        ...,
        description="The node kind used for dispatch"
    )

    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Kind-specific properties (value, language, type, path, level)"
    )

    children: List[Union['Node', str]] = Field(
        default_factory=list,
        description="Ordered child nodes and plain text fragments"
    )

    title: List[Union['Node', str]] = Field(
        default_factory=list,
        description="Inline title content, used by headlines"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_leaf(self) -> 'Node':
        if self.kind in LEAF_KINDS and self.children:
            raise ValueError(f"{self.kind.value} nodes carry a literal value and cannot have children")
        return self

    @classmethod
    def container(cls, kind: NodeKind, *children: Union['Node', str], **properties: Any) -> 'Node':
        """Build a container node from positional children."""
        return cls(kind=kind, properties=properties, children=list(children))

    @classmethod
    def leaf(cls, kind: NodeKind, value: str, **properties: Any) -> 'Node':
        """Build a leaf node carrying a literal value."""
        return cls(kind=kind, properties={"value": value, **properties})

    @classmethod
    def headline(cls, level: int, title: List[Union['Node', str]], *children: Union['Node', str]) -> 'Node':
        """Build a headline with an absolute outline level."""
        return cls(kind=NodeKind.HEADLINE, properties={"level": level},
                   title=list(title), children=list(children))

    def get(self, key: str, default: Any = None) -> Any:
        """Read a property, treating missing keys as the default."""
        return self.properties.get(key, default)

    def iter_nodes(self):
        """Yield this node and every descendant node, pre-order."""
        yield self
        for child in [*self.title, *self.children]:
            if isinstance(child, Node):
                yield from child.iter_nodes()


# Enable forward references for self-referencing model
Node.model_rebuild()
