"""
Configuration Loader

Reads the adapter's YAML configuration, substituting ${VAR_NAME} references
from the environment.
"""

import yaml
import os
from pathlib import Path
from typing import Dict, Any
import re
import logging


REQUIRED_SECTIONS = ['source', 'normalization', 'transport']


class ConfigLoader:

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from file.

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is not valid YAML
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, 'r') as f:
            content = f.read()

        content = self._substituteEnvVars(content)

        try:
            self.config = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing configuration {self.config_path}: {e}")
            raise

        self.logger.info(f"Configuration loaded from {self.config_path}")
        return self.config

    def _substituteEnvVars(self, content: str) -> str:
        pattern = r'\$\{([^}]+)\}'

        def replacer(match):
            var_name = match.group(1)
            value = os.environ.get(var_name)
            if value is None:
                self.logger.warning(f"Environment variable not found: {var_name}")
                return match.group(0)  # Keep original if not found
            return value

        return re.sub(pattern, replacer, content)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key, dot notation for nested sections
            default: Default value if key not found
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def validate(self) -> bool:
        for section in REQUIRED_SECTIONS:
            if not isinstance(self.config.get(section), dict):
                self.logger.error(f"Missing required configuration section: {section}")
                return False

        policy = self.get('normalization.scalar_policy', 'convert')
        if policy not in ('convert', 'reject'):
            self.logger.error(f"Invalid normalization.scalar_policy: {policy}")
            return False

        return True
