"""
Node transcoding for Tiddlyroam.

A dispatch table maps every node kind to a rule that turns the node and
its already-rendered contents into TiddlyWiki markup. The walk renders
children before their parent.
"""

import logging
import textwrap
from typing import Callable, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field

from ..models import Node, NodeKind
from .links import LinkRenderer


class ExportContext(BaseModel):
    """
    Per-export information available to every rule.
    """

    path: str = Field(
        default="",
        description="Path of the source document"
    )

    title: Optional[str] = Field(
        default=None,
        description="Title supplied by the parser"
    )

    tags: Union[str, List[str]] = Field(
        default_factory=list,
        description="Tags supplied by the parser, as a list or a space-separated string"
    )

    references: str = Field(
        default="",
        description="Reference string supplied by the parser"
    )

    headline_offset: int = Field(
        default=0,
        description="Added to every relative headline level"
    )

    min_headline_level: int = Field(
        default=1,
        description="Shallowest headline level in the document"
    )


Rule = Callable[[Node, str, ExportContext], str]
Template = Callable[[str, ExportContext], str]

# Block elements are separated from their siblings by a blank line
BLOCK_KINDS = frozenset({
    NodeKind.PARAGRAPH,
    NodeKind.SECTION,
    NodeKind.HEADLINE,
    NodeKind.SRC_BLOCK,
    NodeKind.HORIZONTAL_RULE,
})

CODE_DELIMITER = "``"
HORIZONTAL_RULE = "---\n"


def wrap(delimiter: str) -> Rule:
    """Rule wrapping the rendered contents in a delimiter."""
    def rule(node: Node, contents: str, context: ExportContext) -> str:
        return f"{delimiter}{contents}{delimiter}"
    return rule


def literal(node: Node, contents: str, context: ExportContext) -> str:
    return f"{CODE_DELIMITER}{node.get('value', '')}{CODE_DELIMITER}"


def src_block(node: Node, contents: str, context: ExportContext) -> str:
    # The language tag is not carried into the output
    return f"{CODE_DELIMITER}{format_code(node.get('value', ''))}{CODE_DELIMITER}"


def passthrough(node: Node, contents: str, context: ExportContext) -> str:
    return contents


def horizontal_rule(node: Node, contents: str, context: ExportContext) -> str:
    return HORIZONTAL_RULE


def headline_level(node: Node) -> int:
    """Absolute level of a headline; unreadable levels count as 1."""
    level = node.get("level", 1)
    try:
        return int(level)
    except (TypeError, ValueError):
        logging.warning(f"Headline has invalid level {level!r}, using 1")
        return 1


def format_code(value: str) -> str:
    """Strip common indentation and end the code with a single newline."""
    code = textwrap.dedent(value).rstrip("\n")
    return f"{code}\n" if code else ""


class NodeTranscoder:
    """
    Renders document trees to TiddlyWiki markup.

    Every kind has exactly one rule. The template rule applies to the
    document root and receives the rendered body.
    """

    def __init__(self, link_renderer: Optional[LinkRenderer] = None,
                 template: Optional[Template] = None):
        """
        Initialize the transcoder.

        Args:
            link_renderer: Renderer for link nodes
            template: Wraps the rendered body of the root node; without one
                the body is returned as is
        """
        self.link_renderer = link_renderer or LinkRenderer()
        self.template = template
        self.rules: Dict[NodeKind, Rule] = {
            NodeKind.BOLD: wrap("''"),
            NodeKind.ITALIC: wrap("//"),
            NodeKind.UNDERLINE: wrap("__"),
            NodeKind.STRIKE_THROUGH: wrap("~~"),
            NodeKind.CODE: literal,
            NodeKind.VERBATIM: literal,
            NodeKind.SRC_BLOCK: src_block,
            NodeKind.PARAGRAPH: passthrough,
            NodeKind.SECTION: passthrough,
            NodeKind.HORIZONTAL_RULE: horizontal_rule,
            NodeKind.HEADLINE: self._headline,
            NodeKind.LINK: self._link,
            NodeKind.TEMPLATE: self._template,
        }

    def render(self, node: Node, contents: str, context: ExportContext) -> str:
        """Apply the rule for node's kind to its rendered contents."""
        return self.rules[node.kind](node, contents, context)

    def transcode(self, content: Union[Node, str], context: ExportContext) -> str:
        """Render a node after rendering its children; plain text is returned unchanged."""
        if isinstance(content, str):
            return content
        return self.render(content, self.transcode_all(content.children, context), context)

    def transcode_all(self, contents: Iterable[Union[Node, str]], context: ExportContext) -> str:
        """
        Render a sequence of siblings.

        Inline content is concatenated; block elements start after a blank
        line so paragraphs and headline directives never share a line.
        """
        parts: List[str] = []
        previous_block = False
        for content in contents:
            block = isinstance(content, Node) and content.kind in BLOCK_KINDS
            if parts and (block or previous_block):
                parts[-1] = parts[-1].rstrip("\n")
                parts.append("\n\n")
            parts.append(self.transcode(content, context))
            previous_block = block
        return "".join(parts)

    def export(self, tree: Node, context: Optional[ExportContext] = None) -> str:
        """
        Render a whole document.

        Headline levels are made relative to the shallowest headline in
        the tree before rendering starts.
        """
        context = context or ExportContext()
        levels = [headline_level(node) for node in tree.iter_nodes()
                  if node.kind == NodeKind.HEADLINE]
        if levels:
            context = context.model_copy(update={"min_headline_level": min(levels)})
        return self.transcode(tree, context)

    def relative_level(self, node: Node, context: ExportContext) -> int:
        level = headline_level(node) - context.min_headline_level + 1 + context.headline_offset
        return max(level, 1)

    def _headline(self, node: Node, contents: str, context: ExportContext) -> str:
        title = self.transcode_all(node.title, context)
        return f'<<heading {self.relative_level(node, context)} "{title}">>\n{contents}'

    def _link(self, node: Node, contents: str, context: ExportContext) -> str:
        return self.link_renderer.render(node, contents)

    def _template(self, node: Node, contents: str, context: ExportContext) -> str:
        if self.template is None:
            return contents
        return self.template(contents, context)
