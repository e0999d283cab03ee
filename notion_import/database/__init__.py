"""SQL script generation and scratch-database verification."""

from .manager import DatabaseManager
from .script import SQLScriptWriter, escape_sql, order_folders

__all__ = ["DatabaseManager", "SQLScriptWriter", "escape_sql", "order_folders"]
