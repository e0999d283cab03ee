"""
Notion importer: converts a Notion markdown export into a SQL import script.

Rebuilds the export's folder hierarchy, converts every page into the editor's
block JSON and emits parent-ordered inserts wrapped in one transaction.
"""

__version__ = "0.1.0"
__author__ = "Notion Importer Project"

# Import main components
from .database import DatabaseManager, SQLScriptWriter
from .models import ContentBlock, FolderRecord, ImportResult, NoteRecord
from .importers import BaseImporter, NotionExportImporter
from .parsing import canonicalize_name, parse_blocks, parse_inline

__all__ = [
    "DatabaseManager",
    "SQLScriptWriter",
    "ContentBlock",
    "FolderRecord",
    "ImportResult",
    "NoteRecord",
    "BaseImporter",
    "NotionExportImporter",
    "canonicalize_name",
    "parse_blocks",
    "parse_inline"
]
