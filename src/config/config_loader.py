"""
Configuration loader for the snapshot ETL framework.

This module provides the ConfigLoader class that handles loading and validating
JSON configuration files for multi-environment deployments.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional
from functools import lru_cache

from ..exceptions import ETLConfigurationError, ETLValidationError
from ..utils import get_logger


class ConfigLoader:
    """
    Configuration loader and validator for the ETL system.
    
    This class handles loading environment-specific configuration from JSON files,
    validating required fields, and providing access to configuration sections.
    """
    
    REQUIRED_ENVIRONMENT_KEYS = ["input_dir", "output_dir", "logging", "processing"]
    
    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the configuration loader.
        
        Args:
            config_dir: Directory containing configuration files (defaults to 'config/')
        """
        self.logger = get_logger(__name__)
        self.config_dir = Path(config_dir) if config_dir else Path("config")
    
    @lru_cache(maxsize=2)
    def load_environment_config(self, environment: str) -> Dict[str, Any]:
        """
        Load configuration for a specific environment.
        
        Args:
            environment: Environment name (development/production)
            
        Returns:
            Dictionary containing environment-specific configuration merged with shared config
            
        Raises:
            ETLConfigurationError: If configuration cannot be loaded or validated
        """
        env_config_path = self.config_dir / "environment_config.json"
        
        if not env_config_path.exists():
            raise ETLConfigurationError(
                f"Environment configuration file not found: {env_config_path}"
            )
        
        try:
            with open(env_config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ETLConfigurationError(
                f"Invalid JSON in environment configuration: {str(e)}",
                {"config_file": str(env_config_path)}
            ) from e
        except OSError as e:
            raise ETLConfigurationError(
                f"Failed to read environment configuration: {str(e)}",
                {"config_file": str(env_config_path)}
            ) from e
        
        # Shared values are merged first so that the validation below sees
        # the effective configuration
        env_config = self._merge_shared(config_data, environment)
        self._validate_environment_config(env_config, environment)
        
        env_config["_validation"] = config_data.get("validation", {})
        
        self.logger.info(f"Loaded configuration for environment: {environment}")
        return env_config
    
    def get_section(self, environment: str, section: str) -> Dict[str, Any]:
        """
        Get a named configuration section for an environment.
        
        Args:
            environment: Environment name
            section: Section key (e.g., 'processing', 'logging', 'file_prefixes')
            
        Returns:
            Dictionary containing the section, or an empty dictionary if absent
            
        Raises:
            ETLConfigurationError: If the section exists but is not an object
        """
        value = self.load_environment_config(environment).get(section, {})
        if not isinstance(value, dict):
            raise ETLConfigurationError(
                f"Configuration section '{section}' must be an object",
                {"environment": environment}
            )
        return value
    
    def validate_directories(self, environment: str) -> None:
        """
        Validate that the configured input and output directories exist.
        
        Args:
            environment: Environment name to validate
            
        Raises:
            ETLValidationError: If a configured directory is missing
        """
        env_config = self.load_environment_config(environment)
        
        missing = []
        for key in ("input_dir", "output_dir"):
            if not Path(env_config[key]).is_dir():
                missing.append(f"{key}={env_config[key]}")
        
        if missing:
            raise ETLValidationError(
                f"Configured directories do not exist: {', '.join(missing)}"
            )
        
        self.logger.info(f"Directories validated for: {environment}")
    
    def _merge_shared(self, config_data: Dict[str, Any], environment: str) -> Dict[str, Any]:
        """
        Merge the shared configuration block under the environment block.
        
        Nested objects are merged one level deep; environment values win.
        
        Raises:
            ETLValidationError: If the environment is not defined
        """
        if "environments" not in config_data:
            raise ETLValidationError("Missing 'environments' key in configuration")
        
        if environment not in config_data["environments"]:
            available_envs = list(config_data["environments"].keys())
            raise ETLValidationError(
                f"Environment '{environment}' not found. Available: {available_envs}"
            )
        
        env_config = dict(config_data["environments"][environment])
        
        for key, shared_value in config_data.get("shared", {}).items():
            if key not in env_config:
                env_config[key] = shared_value
            elif isinstance(shared_value, dict) and isinstance(env_config[key], dict):
                merged = dict(shared_value)
                merged.update(env_config[key])
                env_config[key] = merged
        
        return env_config
    
    def _validate_environment_config(self, env_config: Dict[str, Any], environment: str) -> None:
        """
        Validate merged environment configuration structure.
        
        Args:
            env_config: Merged configuration data to validate
            environment: Environment name (for error messages)
            
        Raises:
            ETLValidationError: If configuration is invalid
        """
        for key in self.REQUIRED_ENVIRONMENT_KEYS:
            if key not in env_config:
                raise ETLValidationError(
                    f"Missing required key '{key}' in {environment} configuration"
                )
        
        for key in ("logging", "processing"):
            if not isinstance(env_config[key], dict):
                raise ETLValidationError(
                    f"Key '{key}' in {environment} configuration must be an object"
                )
    
    def clear_cache(self) -> None:
        """Clear the configuration cache."""
        self.load_environment_config.cache_clear()
        self.logger.info("Configuration cache cleared")
