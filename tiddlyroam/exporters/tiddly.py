"""
TiddlyWiki exporter for Tiddlyroam.

Wires the transcoder, metadata resolution and document assembly together
for one document at a time. Writing the result anywhere is left to the
caller.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Union

from ..config import ConfigManager
from ..database import LinkGraphIndex
from ..models import Node, NodeKind
from ..versioning import VersionHistoryResolver
from .assembler import DocumentAssembler
from .links import LinkRenderer
from .metadata import MetadataResolver
from .transcoder import ExportContext, NodeTranscoder


class TiddlyExporter:
    """
    Exports parsed documents as TiddlyWiki text.
    """

    def __init__(self, graph: LinkGraphIndex, history: VersionHistoryResolver,
                 config: Optional[ConfigManager] = None):
        """
        Initialize the exporter.

        Args:
            graph: Link graph for id links, titles and backlinks
            history: Resolver for creation and modification timestamps
            config: Configuration, defaults when None
        """
        self.config = config or ConfigManager()
        self.assembler = DocumentAssembler.from_config(self.config)
        self.metadata = MetadataResolver(graph, history)
        self.transcoder = NodeTranscoder(LinkRenderer(graph), template=self._apply_template)

    def _apply_template(self, body: str, context: ExportContext) -> str:
        metadata = self.metadata.resolve(
            context.path,
            title=context.title,
            tags=context.tags,
            references=context.references
        )
        return self.assembler.assemble_metadata(metadata, body)

    def export(self, tree: Node, path: Union[str, Path], title: Optional[str] = None,
               tags: Union[str, Sequence[str]] = (), references: str = "") -> str:
        """
        Export one document tree.

        Args:
            tree: Parsed document; roots other than a template node are wrapped in one
            path: Path of the source document
            title: Title supplied by the parser
            tags: Tag names, or a space-separated tag string passed through as is
            references: Reference string supplied by the parser

        Returns:
            The complete TiddlyWiki document
        """
        source = os.path.abspath(os.path.expanduser(str(path)))
        context = ExportContext(
            path=source,
            title=title,
            tags=tags if isinstance(tags, str) else list(tags),
            references=references,
            headline_offset=self.config.headline_offset
        )

        if tree.kind != NodeKind.TEMPLATE:
            tree = Node.container(NodeKind.TEMPLATE, tree)

        logging.info(f"Exporting {source}")
        return self.transcoder.export(tree, context)

    def export_file(self, tree_path: Union[str, Path], path: Union[str, Path], **kwargs) -> str:
        """Export a document tree stored as JSON at tree_path."""
        with open(tree_path, 'r', encoding='utf-8') as f:
            tree = Node.model_validate_json(f.read())
        return self.export(tree, path, **kwargs)

    def output_filename(self, path: Union[str, Path]) -> str:
        """File name the exported document should be saved under."""
        return self.assembler.output_filename(path)
