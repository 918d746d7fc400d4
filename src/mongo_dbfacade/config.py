"""
Configuration management for the Mongo DB Facade.

This module provides configuration utilities for controlling behavior
of the facade and its HTTP service, including the connection string,
development/production modes and logging.
"""

import logging
import os
import sys
from copy import deepcopy
from pathlib import Path

import yaml


logger = logging.getLogger(__name__)

# Values accepted for documents.by_names_filter
BY_NAMES_FILTER_COLLECTION_NAME = "collection_name"
BY_NAMES_FILTER_MATCH_ALL = "match_all"


class MongoFacadeConfig:
    """
    Configuration for the Mongo DB Facade.

    Values are layered: built-in defaults, then an optional YAML file,
    then environment variables. A secrets file can be merged on top.
    """

    # Default configuration values
    _default_config: dict[str, object] = {
        "mode": "DEV",  # DEV or PROD
        "database": {
            "connection_string": "mongodb://localhost:27017",
            "default_database": "dbfacade",
        },
        "documents": {
            "by_names_filter": BY_NAMES_FILTER_COLLECTION_NAME,
        },
        "logging": {
            "level": "INFO",
        },
        "service": {
            "host": "0.0.0.0",
            "port": 8000,
        },
    }

    # Instance configuration values, loaded from file or environment
    _config: dict[str, object] = {}

    # Flag indicating if the configuration has been initialized
    _initialized: bool = False

    @classmethod
    def initialize(cls, config_path: str | None = None) -> None:
        """
        Initialize the configuration.

        Without an explicit path, ``MONGO_FACADE_CONFIG`` names the config
        file and ``MONGO_FACADE_SECRETS_FILE`` a secrets file, so processes
        spawned by the server reloader see the same configuration.

        Args:
            config_path: Optional path to a YAML configuration file
        """
        # Deep copy so nested sections are never shared with the defaults
        cls._config = deepcopy(cls._default_config)

        config_path = config_path or os.environ.get("MONGO_FACADE_CONFIG")
        if config_path:
            cls._load_from_file(config_path)

        cls._load_from_env()

        cls._initialized = True

        secrets_path = os.environ.get("MONGO_FACADE_SECRETS_FILE")
        if secrets_path:
            cls.load_from_secrets_file(secrets_path)

    @classmethod
    def _merge(cls, values: dict[str, object]) -> None:
        """Merge a mapping into the configuration, section by section."""
        for section, section_values in values.items():
            if isinstance(section_values, dict) and isinstance(cls._config.get(section), dict):
                cls._config[section].update(section_values)
            else:
                cls._config[section] = section_values

    @classmethod
    def _load_from_file(cls, config_path: str) -> None:
        """
        Load configuration from a YAML file.

        A missing or malformed file stops the process.

        Args:
            config_path: Path to the YAML configuration file
        """
        path = Path(config_path)
        if not path.exists():
            logger.error("Configuration file not found: %s", config_path)
            sys.exit(1)

        try:
            with open(path, "r") as f:
                file_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error loading configuration file: %s", e)
            sys.exit(1)

        if file_config:
            cls._merge(file_config)

    @classmethod
    def _load_from_env(cls) -> None:
        """Load configuration from environment variables."""
        env_mode = os.environ.get("MONGO_FACADE_MODE")
        if env_mode in ("DEV", "PROD"):
            cls._config["mode"] = env_mode

        env_connection_string = os.environ.get("MONGO_FACADE_CONNECTION_STRING")
        if env_connection_string:
            cls._config["database"]["connection_string"] = env_connection_string

        env_default_database = os.environ.get("MONGO_FACADE_DEFAULT_DATABASE")
        if env_default_database:
            cls._config["database"]["default_database"] = env_default_database

        env_filter = os.environ.get("MONGO_FACADE_DOCUMENT_FILTER")
        if env_filter in (BY_NAMES_FILTER_COLLECTION_NAME, BY_NAMES_FILTER_MATCH_ALL):
            cls._config["documents"]["by_names_filter"] = env_filter

        env_log_level = os.environ.get("MONGO_FACADE_LOG_LEVEL")
        if env_log_level:
            cls._config["logging"]["level"] = env_log_level.upper()

    @classmethod
    def _ensure_initialized(cls) -> None:
        """Ensure the configuration is initialized."""
        if not cls._initialized:
            cls.initialize()

    @classmethod
    def get(cls, key: str, default: object = None) -> object:
        """
        Get a configuration value.

        Args:
            key: The configuration key to retrieve, dotted for nested keys
            default: Default value to return if key is not found

        Returns:
            The configuration value, or default if not found
        """
        cls._ensure_initialized()

        if "." in key:
            value = cls._config
            for part in key.split("."):
                if isinstance(value, dict) and part in value:
                    value = value[part]
                else:
                    return default
            return value

        return cls._config.get(key, default)

    @classmethod
    def is_dev_mode(cls) -> bool:
        """
        Check if the system is in development mode.

        Returns:
            True if in development mode, False otherwise
        """
        return cls.get("mode") == "DEV"

    @classmethod
    def get_connection_string(cls) -> str:
        """Get the MongoDB connection string."""
        return cls.get("database.connection_string", "mongodb://localhost:27017")

    @classmethod
    def get_default_database(cls) -> str:
        """Get the database used when a caller names none."""
        return cls.get("database.default_database", "dbfacade")

    @classmethod
    def is_match_all_by_name(cls) -> bool:
        """
        Check whether by-names document listing uses an unrestricted filter.

        Returns:
            True for an empty filter, False to pass the collection name
            through as the filter
        """
        return cls.get("documents.by_names_filter") == BY_NAMES_FILTER_MATCH_ALL

    @classmethod
    def get_log_level(cls) -> str:
        return str(cls.get("logging.level", "INFO")).upper()

    @classmethod
    def load_from_secrets_file(cls, file_path: str) -> None:
        """
        Load configuration from a secrets file.

        Connection strings usually embed credentials, so they are
        expected to live here rather than in the main config file.

        Args:
            file_path: Path to the secrets file
        """
        cls._ensure_initialized()

        path = Path(file_path)
        if not path.exists():
            logger.warning("Secrets file not found: %s", file_path)
            return

        try:
            with open(path, "r") as f:
                secrets = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error loading secrets file: %s", e)
            sys.exit(1)

        if secrets:
            cls._merge(secrets)

        logger.info("Loaded configuration from secrets file: %s", file_path)
