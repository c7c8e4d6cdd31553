"""
Frontmatter metadata for exported documents.

Derives a document's title, revision timestamps and backlinks from the
link graph and version history. Missing information degrades to empty
values; nothing here raises for a lookup miss.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..database import LinkGraphIndex
from ..models import Metadata
from ..versioning import VersionHistoryResolver
from .assembler import format_title_list


class MetadataResolver:
    """
    Resolves the Metadata of a document identified by its path.
    """

    def __init__(self, graph: LinkGraphIndex, history: VersionHistoryResolver):
        """
        Initialize the resolver.

        Args:
            graph: Link graph used for identities, titles and backlinks
            history: Resolver for creation and modification timestamps
        """
        self.graph = graph
        self.history = history

    def resolve(self, path: str, title: Optional[str] = None, tags: Union[str, Sequence[str]] = (),
                references: str = "") -> Metadata:
        """
        Build the metadata for one document.

        Args:
            path: Path of the source document
            title: Title supplied by the parser, if any
            tags: Tag names, or a space-separated tag string passed through as is
            references: Reference string supplied by the parser

        Returns:
            The resolved Metadata
        """
        identity = self.graph.identity_for_path(path)
        if identity is None:
            logging.warning(f"No link graph identity for {path}")

        return Metadata(
            title=title or self._graph_title(identity) or Path(path).stem,
            tags=tags if isinstance(tags, str) else list(tags),
            references=references or "",
            created=self.history.earliest(path),
            modified=self.history.latest(path),
            backlinks=self.backlinks(identity) if identity else ""
        )

    def _graph_title(self, identity: Optional[str]) -> Optional[str]:
        if identity is None:
            return None
        return self.graph.title_for_identity(identity)

    def backlink_titles(self, identity: str) -> List[str]:
        """
        Titles of the distinct documents linking to identity.

        Each source appears once however many links it has; sources without
        a title are skipped.
        """
        titles = []
        for source in dict.fromkeys(self.graph.sources_linking_to(identity)):
            title = self.graph.title_for_identity(source)
            if not title:
                logging.warning(f"Backlink source {source} has no title")
                continue
            titles.append(title)
        return titles

    def backlinks(self, identity: str) -> str:
        """Backlink titles formatted for the backlinks header field."""
        return format_title_list(self.backlink_titles(identity))
