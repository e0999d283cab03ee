"""
Database manager for the Notion importer.

This module dry-loads generated import scripts into a scratch DuckDB database
whose tables mirror the destination schema, so a script can be checked before
it is run against the real database.
"""

import duckdb
import logging
from typing import Dict


class DatabaseManager:
    """
    Manages a scratch DuckDB database holding the Folders and Notes tables.
    """
    
    def __init__(self, db_path: str = ":memory:"):
        """
        Initialize the database manager.
        
        Args:
            db_path: Path to the DuckDB database file
        """
        self.db_path = db_path
        self.connection = None
        
    def connect(self):
        """Establish connection to the database."""
        self.connection = duckdb.connect(self.db_path)
        
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
        Create the destination tables if they don't exist.
        """
        if not self.connection:
            raise RuntimeError("Database connection not established")
            
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS "Folders" (
                "Id" VARCHAR PRIMARY KEY,
                "Name" VARCHAR NOT NULL,
                "ParentId" VARCHAR,
                "Color" VARCHAR,
                "Order" INTEGER NOT NULL,
                "CreatedAt" BIGINT NOT NULL,
                "UpdatedAt" BIGINT NOT NULL,
                "UserId" VARCHAR NOT NULL
            )
        """)
        
        self.connection.execute("""
            CREATE TABLE IF NOT EXISTS "Notes" (
                "Id" VARCHAR PRIMARY KEY,
                "Title" VARCHAR NOT NULL,
                "Content" VARCHAR NOT NULL,
                "FolderId" VARCHAR,
                "IsPinned" BOOLEAN NOT NULL,
                "IsDeleted" BOOLEAN NOT NULL,
                "Order" INTEGER NOT NULL,
                "CreatedAt" BIGINT NOT NULL,
                "UpdatedAt" BIGINT NOT NULL,
                "UserId" VARCHAR NOT NULL
            )
        """)
        
    def apply_script(self, script: str) -> None:
        """
        Execute a generated import script.
        
        Args:
            script: SQL text including its BEGIN/COMMIT wrapper
            
        Raises:
            duckdb.Error: If any statement fails
        """
        if not self.connection:
            raise RuntimeError("Database connection not established")
            
        self.connection.execute(script)
        logging.info("Import script applied to scratch database")
        
    def count_folders(self) -> int:
        if not self.connection:
            raise RuntimeError("Database connection not established")
            
        return self.connection.execute('SELECT COUNT(*) FROM "Folders"').fetchone()[0]
        
    def count_notes(self) -> int:
        if not self.connection:
            raise RuntimeError("Database connection not established")
            
        return self.connection.execute('SELECT COUNT(*) FROM "Notes"').fetchone()[0]
        
    def count_dangling_references(self) -> int:
        """
        Count folder parents and note folders that name no existing folder.
        
        Returns:
            Number of broken references
        """
        if not self.connection:
            raise RuntimeError("Database connection not established")
            
        folders = self.connection.execute("""
            SELECT COUNT(*) FROM "Folders" f
            WHERE f."ParentId" IS NOT NULL
              AND f."ParentId" NOT IN (SELECT "Id" FROM "Folders")
        """).fetchone()[0]
        
        notes = self.connection.execute("""
            SELECT COUNT(*) FROM "Notes" n
            WHERE n."FolderId" IS NOT NULL
              AND n."FolderId" NOT IN (SELECT "Id" FROM "Folders")
        """).fetchone()[0]
        
        return folders + notes
        
    def verify_script(self, script: str) -> Dict[str, int]:
        """
        Load a script into fresh tables and summarize the result.
        
        Args:
            script: Generated import script
            
        Returns:
            Dictionary with folder, note and dangling reference counts
        """
        self.initialize_database()
        self.apply_script(script)
        
        report = {
            "folders": self.count_folders(),
            "notes": self.count_notes(),
            "dangling_references": self.count_dangling_references()
        }
        logging.info(f"Verification report: {report}")
        return report
