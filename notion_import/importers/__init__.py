"""Importers for note-taking tool exports."""

from .base import BaseImporter
from .classify import DirectoryKind, FileKind, classify_directory, classify_file
from .notion_export import NotionExportImporter

__all__ = [
    "BaseImporter",
    "DirectoryKind",
    "FileKind",
    "classify_directory",
    "classify_file",
    "NotionExportImporter"
]
