#!/usr/bin/env python3
"""
Notion Importer

Main entry point. Walks a Notion markdown export, converts it into folders and
notes and writes a SQL script that inserts them for one user in a single
transaction.
"""

import logging
import sys
import argparse
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from notion_import.database import DatabaseManager, SQLScriptWriter
from notion_import.importers import NotionExportImporter
from notion_import.models import ImportResult
from notion_import.config import config


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def run_import(export_path: str, user_id: str, output_file: str) -> ImportResult:
    """
    Import an export and write the SQL script.

    Args:
        export_path: Root folder of the Notion export
        user_id: Owner of the imported folders and notes
        output_file: Where to write the script

    Returns:
        The imported folders and notes
    """
    started_at = datetime.now(timezone.utc)
    logging.info(f"Scanning export folder: {export_path}")
    logging.info(f"User ID: {user_id}")

    importer = NotionExportImporter(export_path)
    result = importer.import_export()

    writer = SQLScriptWriter(user_id, generated_at=started_at, title=config.script_title)
    writer.write(result, output_file)
    logging.info(f"SQL written to: {output_file}")

    return result


def verify_output(output_file: str) -> Dict[str, int]:
    """
    Dry-load a written script into a scratch database.

    Args:
        output_file: Script to load

    Returns:
        Verification report from the database manager
    """
    script = Path(output_file).read_text(encoding='utf-8')
    with DatabaseManager(config.verify_database) as db:
        return db.verify_script(script)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Notion Importer - convert a Notion markdown export into a SQL import script",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py ~/Downloads/Export-xxx "user-uuid"               # Write import.sql
  python main.py ~/Downloads/Export-xxx "user-uuid" notes.sql     # Custom output file
  python main.py ~/Downloads/Export-xxx "user-uuid" --verify      # Dry-load the script afterwards
        """
    )

    parser.add_argument(
        "export_folder",
        help="Path to the Notion export root folder"
    )

    parser.add_argument(
        "user_id",
        help="Identifier of the user who will own the imported notes"
    )

    parser.add_argument(
        "output_file",
        nargs="?",
        default=None,
        help="Output SQL file (default: import.default_output from config)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--verify",
        action="store_true",
        help="Load the generated script into a scratch DuckDB database and check references"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Notion Importer 0.1.0"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_arguments(argv)

    if args.config:
        config.config_path = Path(args.config)
        config.reload()

    setup_logging()

    output_file = args.output_file or config.default_output

    try:
        result = run_import(args.export_folder, args.user_id, output_file)
    except KeyboardInterrupt:
        logging.info("Import interrupted by user")
        print("\nImport interrupted.")
        sys.exit(1)
    except OSError as e:
        logging.error(f"Import failed: {e}")
        print(f"\nImport failed: {e}")
        sys.exit(1)

    print(f"Found {len(result.folders)} folders and {len(result.notes)} notes")
    print(f"SQL written to: {output_file}")

    if args.verify:
        report = verify_output(output_file)
        print(f"Verified: {report['folders']} folders, {report['notes']} notes, "
              f"{report['dangling_references']} dangling references")
        if report["dangling_references"]:
            logging.error("Generated script contains dangling folder references")
            sys.exit(1)

    print("\nTo import, run the script against the destination database, e.g.:")
    print(f"  psql -U postgres <database> < {output_file}")


if __name__ == "__main__":
    main()
