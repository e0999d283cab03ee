"""
Base importer interface for the Notion importer.

This module defines the abstract interface that all export importers must implement.
"""

from abc import ABC, abstractmethod

from ..models import ImportResult


class BaseImporter(ABC):
    """
    Abstract base class for all export importers.
    
    Each importer converts an export from a specific source tool into
    FolderRecord and NoteRecord collections ready for script generation.
    """
    
    @abstractmethod
    def import_export(self) -> ImportResult:
        """
        Read the whole export.
        
        Returns:
            ImportResult holding folders and notes in discovery order
        """
        pass
