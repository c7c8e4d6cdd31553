"""
TiddlyWiki document assembly.

Combines the rendered body with its metadata into a .tid file. The header
fields and macro lines are what the wiki's note macros expect, so their
order and spelling must not change.
"""

from pathlib import Path
from typing import Sequence, Union

from ..config import ConfigManager
from ..models import Metadata


CONTENT_TYPE = "text/vnd.tiddlywiki"
IMPORT_DIRECTIVE = "\\import [[$:/org-roam/NoteMacros]]"
REFERENCES_MACRO = "<<references>>"
BACKLINKS_MACRO = "<<backlinks>>"


def display_title(title: str) -> str:
    """Bracket a title containing whitespace so it reads as one wiki link."""
    if any(character.isspace() for character in title):
        return f"[[{title}]]"
    return title


def format_title_list(titles: Sequence[str]) -> str:
    """Join titles with single spaces, bracketing multi-word ones."""
    return " ".join(display_title(title) for title in titles)


class DocumentAssembler:
    """
    Builds the final .tid text for a document.
    """

    def __init__(self, file_extension: str = "tid"):
        """
        Initialize the assembler.

        Args:
            file_extension: Extension of exported files, with or without a dot
        """
        self.file_extension = file_extension.lstrip('.')

    @classmethod
    def from_config(cls, config: ConfigManager) -> 'DocumentAssembler':
        """Build an assembler from the export section of a configuration."""
        return cls(config.file_extension)

    def assemble(self, title: str, tags: Union[str, Sequence[str]], references: str,
                 created: str, modified: str, backlinks: str, body: str) -> str:
        """
        Assemble header fields and body into a TiddlyWiki document.

        Args:
            title: Document title
            tags: Tags, as a formatted string or a list of tag names
            references: Reference string, may be empty
            created: 17-digit creation timestamp
            modified: 17-digit modification timestamp
            backlinks: Formatted backlink titles, may be empty
            body: Rendered document body

        Returns:
            The complete document text
        """
        if not isinstance(tags, str):
            tags = format_title_list(tags)

        lines = [
            f"title: {title}",
            f"created: {created}",
            f"modified: {modified}",
            f"tags: {tags}",
            f"references: {references or ''}",
            f"backlinks: {backlinks}",
            f"type: {CONTENT_TYPE}",
            "",
            IMPORT_DIRECTIVE,
            "",
            REFERENCES_MACRO,
            "",
            body,
            "",
            BACKLINKS_MACRO,
        ]
        return "\n".join(lines) + "\n"

    def assemble_metadata(self, metadata: Metadata, body: str) -> str:
        """Assemble a document from resolved metadata."""
        return self.assemble(
            metadata.title,
            metadata.tags,
            metadata.references,
            metadata.created,
            metadata.modified,
            metadata.backlinks,
            body
        )

    def output_filename(self, path: Union[str, Path]) -> str:
        """File name for the exported form of a source document."""
        return f"{Path(path).stem}.{self.file_extension}"
