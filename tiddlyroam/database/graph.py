"""
Link graph access for Tiddlyroam.

The exporter only reads the link graph. LinkGraphIndex is the interface it
depends on; RoamDatabase answers it from a DuckDB database holding the
note and link tables of the knowledge base.
"""

import duckdb
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import LinkGraphRecord


class LinkGraphIndex(ABC):
    """
    Query interface over the knowledge base's link graph.

    Lookups that match several rows return the first one; which row comes
    first is not otherwise specified.
    """

    @abstractmethod
    def identity_for_path(self, path: str) -> Optional[str]:
        """Identity of the document stored at path, or None."""
        pass

    @abstractmethod
    def title_for_identity(self, identity: str) -> Optional[str]:
        """Display title of a document, or None."""
        pass

    @abstractmethod
    def sources_linking_to(self, identity: str) -> List[str]:
        """Identities of documents linking to identity, duplicates included."""
        pass


class RoamDatabase(LinkGraphIndex):
    """
    Reads the link graph from a DuckDB database.
    """

    def __init__(self, db_path: str = "org-roam.db", read_only: bool = False):
        """
        Initialize the database.

        Args:
            db_path: Path to the DuckDB database file
            read_only: Open an existing database for queries only
        """
        self.db_path = db_path
        self.read_only = read_only
        self.connection = None

    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path, read_only=self.read_only)

    def disconnect(self):
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()

    def initialize_database(self):
        """
        Create the node and link tables if they don't exist.
        """
        if not self.connection:
            raise RuntimeError("Database connection not established")

        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS nodes (
                id VARCHAR PRIMARY KEY,
                file VARCHAR NOT NULL,
                title VARCHAR,
                level INTEGER DEFAULT 0
            )
        """)

        # Links may repeat between the same pair of notes
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS links (
                source VARCHAR NOT NULL,
                dest VARCHAR NOT NULL,
                type VARCHAR DEFAULT 'id'
            )
        """)

    def add_node(self, identity: str, file: str, title: Optional[str], level: int = 0) -> bool:
        """
        Add a note to the graph.

        Args:
            identity: Stable key of the note
            file: Path of the file holding the note
            title: Display title
            level: Outline level, 0 for a file-level note

        Returns:
            True if the note was added, False if it already existed
        """
        if not self.connection:
            raise RuntimeError("Database connection not established")

        try:
            self.connection.execute("""
                INSERT INTO nodes (id, file, title, level)
                VALUES (?, ?, ?, ?)
            """, [identity, file, title, level])
            return True
        except duckdb.IntegrityError:
            # Note already exists
            return False

    def add_link(self, record: LinkGraphRecord, link_type: str = "id"):
        """Record one link occurrence from record.source to record.dest."""
        if not self.connection:
            raise RuntimeError("Database connection not established")

        self.connection.execute("""
            INSERT INTO links (source, dest, type)
            VALUES (?, ?, ?)
        """, [record.source, record.dest, link_type])

    def identity_for_path(self, path: str) -> Optional[str]:
        # File-level notes sort first
        return self._first("""
            SELECT id FROM nodes WHERE file = ? ORDER BY level LIMIT 1
        """, path)

    def title_for_identity(self, identity: str) -> Optional[str]:
        return self._first("""
            SELECT title FROM nodes WHERE id = ? LIMIT 1
        """, identity)

    def sources_linking_to(self, identity: str) -> List[str]:
        return [record.source for record in self.links_to(identity)]

    def links_to(self, identity: str) -> List[LinkGraphRecord]:
        """
        Get every link occurrence pointing at a note.

        Args:
            identity: Identity of the linked note

        Returns:
            One record per occurrence, duplicates included
        """
        if not self.connection:
            raise RuntimeError("Database connection not established")

        try:
            rows = self.connection.execute("""
                SELECT source, dest FROM links WHERE dest = ?
            """, [identity]).fetchall()
        except duckdb.Error as e:
            logging.error(f"Failed to query links to {identity}: {e}")
            return []

        return [LinkGraphRecord(source=row[0], dest=row[1]) for row in rows]

    def _first(self, query: str, parameter: str) -> Optional[str]:
        """Run a single-parameter query and return the first column of the first row."""
        if not self.connection:
            raise RuntimeError("Database connection not established")

        try:
            result = self.connection.execute(query, [parameter]).fetchone()
        except duckdb.Error as e:
            logging.error(f"Link graph lookup failed for {parameter}: {e}")
            return None

        return result[0] if result else None
