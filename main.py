#!/usr/bin/env python3
"""
Tiddlyroam - outline notes to TiddlyWiki

Main entry point. Exports one parsed document tree, stored as JSON, and
prints the TiddlyWiki document to stdout.
"""

import logging
import sys
import argparse
from pathlib import Path

import duckdb
from pydantic import ValidationError

from tiddlyroam.config import ConfigManager
from tiddlyroam.database import RoamDatabase
from tiddlyroam.exporters import TiddlyExporter
from tiddlyroam.versioning import GitHistoryResolver


def setup_logging(config: ConfigManager):
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # stdout carries the exported document
    handlers = [logging.StreamHandler(sys.stderr)]
    if config.log_filename:
        handlers.append(logging.FileHandler(config.log_filename))

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=handlers
    )


def run_export(config: ConfigManager, tree_path: str, source_path: str, title=None,
               tags=(), references: str = "") -> str:
    """
    Export one document tree with the configured link graph and repository.

    Args:
        config: Loaded configuration
        tree_path: JSON file holding the parsed document tree
        source_path: Path of the source document the tree was parsed from
        title: Title supplied by the parser
        tags: Tags supplied by the parser
        references: Reference string supplied by the parser

    Returns:
        The exported TiddlyWiki document
    """
    history = GitHistoryResolver.from_config(config)

    database = Path(config.database_filename)
    if not database.is_file():
        raise FileNotFoundError(f"Link graph database not found: {database}")

    with RoamDatabase(str(database), read_only=True) as db:
        exporter = TiddlyExporter(db, history, config)
        document = exporter.export_file(
            tree_path,
            source_path,
            title=title,
            tags=tags,
            references=references
        )
        logging.info(f"Exported {source_path} as {exporter.output_filename(source_path)}")

    return document


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tiddlyroam - export outline notes to TiddlyWiki",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py note.json --source notes/graph.org
  python main.py note.json --source notes/graph.org --tags math "graph theory"
  python main.py note.json --source notes/graph.org --config config.yaml --database org-roam.db
        """
    )

    parser.add_argument(
        "tree",
        help="JSON file holding the parsed document tree"
    )

    parser.add_argument(
        "--source",
        required=True,
        help="Path of the source document, used for history and link graph lookups"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a YAML configuration file (default: built-in defaults)"
    )

    parser.add_argument(
        "--database",
        type=str,
        help="Link graph database file (overrides the configuration)"
    )

    parser.add_argument(
        "--title",
        type=str,
        help="Document title (default: title from the link graph, then file name)"
    )

    parser.add_argument(
        "--tags",
        nargs="*",
        default=[],
        help="Document tags"
    )

    parser.add_argument(
        "--references",
        type=str,
        default="",
        help="Reference string for the references header"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Tiddlyroam 0.1.0"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    config = ConfigManager(args.config)
    setup_logging(config)

    if args.database:
        config.set("database.filename", args.database)

    try:
        document = run_export(
            config,
            args.tree,
            args.source,
            title=args.title,
            tags=args.tags,
            references=args.references
        )
    except (OSError, ValidationError, duckdb.Error) as e:
        logging.error(f"Export failed: {e}")
        sys.exit(1)

    sys.stdout.write(document)


if __name__ == "__main__":
    main()
