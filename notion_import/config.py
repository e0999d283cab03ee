"""
Configuration management for the Notion importer.

This module handles loading and accessing configuration values from config.yaml.
Every value has a built-in default, so the importer also runs without a
configuration file.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List
import logging


class ConfigManager:
    """
    Manages configuration loading and access for the importer.
    """
    
    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.
        
        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()
    
    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
                
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
                
            logging.info(f"Configuration loaded from {self.config_path}")
            
        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()
            
    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "import": {
                "default_output": "import.sql",
                "skip_extensions": [".html"],
                "script_title": "Notion export import"
            },
            "database": {
                "verify_path": ":memory:"
            },
            "paths": {
                "log_file": "notion_import.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }
    
    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.
        
        Args:
            key_path: Dot-separated path to the configuration value (e.g., "import.default_output")
            default: Default value if key is not found
            
        Returns:
            The configuration value
            
        Examples:
            config.get("import.default_output")  # Returns "import.sql"
            config.get("logging.level")  # Returns "INFO"
        """
        keys = key_path.split('.')
        value = self._config
        
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
                
        return value
    
    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.
        
        Args:
            section: Name of the configuration section
            
        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})
    
    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
    
    # Convenience properties for commonly used values
    
    @property
    def default_output(self) -> str:
        """Get the default SQL output file."""
        return self.get("import.default_output", "import.sql")
    
    @property
    def skip_extensions(self) -> List[str]:
        """Get file extensions that are never imported."""
        extensions = self.get("import.skip_extensions", [".html"])
        return [ext.lower() for ext in extensions]
    
    @property
    def script_title(self) -> str:
        """Get the title line of the generated script header."""
        return self.get("import.script_title", "Notion export import")
    
    @property
    def verify_database(self) -> str:
        """Get the DuckDB path used to dry-load generated scripts."""
        return self.get("database.verify_path", ":memory:")
    
    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "notion_import.log")


# Global configuration instance
config = ConfigManager()

