"""
Link rendering for Tiddlyroam.

Resolves a link's target according to its type and writes it in
TiddlyWiki's [[...]] syntax.
"""

import logging
import os
from typing import Optional

from ..database import LinkGraphIndex
from ..models import Node


WEB_SCHEMES = frozenset({"http", "https", "ftp", "mailto", "doi"})


def file_uri(path: str) -> str:
    """
    Canonical form of a file link target.

    Absolute paths (after ~ expansion) become file:// URIs; relative paths
    are kept as written.
    """
    expanded = os.path.expanduser(path)
    if not os.path.isabs(expanded):
        return path
    return f"file://{os.path.normpath(expanded)}"


def format_link(path: Optional[str], description: Optional[str]) -> str:
    """
    Write a resolved link target and its description as wiki link syntax.

    Args:
        path: Resolved target, None or empty when unresolved
        description: Rendered description, None or empty when absent

    Returns:
        [[path]], [[description|path]], or the bare description
    """
    if path and description:
        if path == description:
            return f"[[{path}]]"
        return f"[[{description}|{path}]]"
    if path:
        return f"[[{path}]]"
    return description or ""


class LinkRenderer:
    """
    Renders link nodes.

    id links are looked up in the link graph and rendered with the linked
    note's title as target.
    """

    def __init__(self, graph: Optional[LinkGraphIndex] = None):
        self.graph = graph

    def resolve(self, link_type: str, path: str) -> Optional[str]:
        """
        Resolve a link path to the target written in the output.

        Args:
            link_type: Link type such as "https", "file" or "id"
            path: Raw link path

        Returns:
            The target, or None when an id link cannot be resolved
        """
        if link_type in WEB_SCHEMES:
            return f"{link_type}:{path}"
        if link_type == "file":
            return file_uri(path)
        if link_type == "id":
            return self._resolve_id(path)
        return path

    def _resolve_id(self, identity: str) -> Optional[str]:
        if self.graph is None:
            logging.warning(f"No link graph available to resolve id link {identity}")
            return None

        title = self.graph.title_for_identity(identity)
        if not title:
            logging.warning(f"Unresolved id link: {identity}")
            return None
        return title

    def render(self, node: Node, contents: str) -> str:
        """Render a link node whose description renders to contents."""
        target = self.resolve(node.get("type", ""), node.get("path", ""))
        return format_link(target, contents)
