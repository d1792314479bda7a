"""
MODGEN Configuration

Central configuration for the module generator.
"""

import os
import logging
from pathlib import PurePath
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class Config:
    """
    Generator configuration settings.

    Organized into:
    - Internal: naming and registry conventions (DO NOT MODIFY)
    - Env: Environment file configuration
    - User Settings: Configurable per project
    """

    class Internal:
        """
        MODGEN Internal Configuration

        WARNING: THESE SETTINGS CANNOT BE OVERRIDDEN FROM THE ENVIRONMENT.
        Generated files and the registry rely on them.
        """
        KNOWN_PREFIXES = ("tm_", "tt_", "th_")
        OPTIONAL_MARKER = "?"
        REGISTRY_MARKER = "export const resourceProviders"
        MODULE_SUBDIRECTORIES = ("domain", "repository", "use-case", "controller", "interface")
        HISTORY_DIR_NAME = ".modgen"

    class Env:
        """Environment file configuration"""
        file = ".env"  # Path to .env file (can be ".env.prod", ".env.dev", etc.)
        auto_load = True  # Automatically load .env file
        override = True  # Override existing environment variables

    # User-Configurable Settings
    # ============================

    # Project layout (relative to PROJECT_ROOT)
    PROJECT_ROOT = "."
    MODULES_DIR = "src/module"
    REGISTRY_FILE = "src/module/resource.provider.ts"
    MODELS_FILE = "model/models.json"

    # Logging
    VERBOSE_LOGGING = False
    LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Undo history
    HISTORY_LIMIT = 50  # Operations kept in .modgen/history.json

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None):
        """
        Load configuration from .env file and environment variables.

        All environment variables must be prefixed with MODGEN_*

        Example .env file:
            MODGEN_MODULES_DIR=src/module
            MODGEN_REGISTRY_FILE=src/module/resource.provider.ts
            MODGEN_LOG_LEVEL=DEBUG
            MODGEN_HISTORY_LIMIT=20

        Example usage:
            Config.load_from_env()  # Uses Config.Env.file
            Config.load_from_env(".env.prod")  # Custom file
        """
        env_file_path = env_file or cls.Env.file

        if cls.Env.auto_load:
            if os.path.exists(env_file_path):
                load_dotenv(env_file_path, override=cls.Env.override)
                if cls.VERBOSE_LOGGING:
                    logger.info(f"Loaded environment from: {env_file_path}")
            elif cls.VERBOSE_LOGGING:
                logger.info(f".env file not found: {env_file_path}")

        VALID_LOG_LEVELS = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}

        def auto_detect(env_value: str):
            """Auto-detect type of an environment value"""
            if env_value.lower() in ('null', 'none', '~', ''):
                return None
            if env_value.lower() in ('true', 'false', 'yes', 'no', 'on', 'off'):
                return env_value.lower() in ('true', 'yes', 'on')
            if env_value.lstrip('-').isdigit():
                return int(env_value)
            return env_value

        for env_key, env_value in os.environ.items():
            if not env_key.startswith('MODGEN_'):
                continue

            attr_name = env_key.replace('MODGEN_', '', 1)

            if attr_name in ('INTERNAL', 'ENV') or hasattr(cls.Internal, attr_name):
                logger.warning(f"Cannot override internal generator setting: {env_key}")
                continue

            parsed_value = auto_detect(env_value)

            if attr_name == 'LOG_LEVEL':
                if not isinstance(parsed_value, str) or parsed_value.upper() not in VALID_LOG_LEVELS:
                    logger.warning(
                        f"Invalid LOG_LEVEL: {env_value}. "
                        f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}. "
                        f"Using default value."
                    )
                    continue
                parsed_value = parsed_value.upper()

            elif attr_name == 'HISTORY_LIMIT':
                if not isinstance(parsed_value, int) or isinstance(parsed_value, bool) or parsed_value < 1:
                    logger.warning(f"Invalid HISTORY_LIMIT: {env_value}. Using default value.")
                    continue

            setattr(cls, attr_name, parsed_value)

            if cls.VERBOSE_LOGGING:
                logger.info(f"Auto-set {attr_name} = {parsed_value} (from {env_key})")

        return cls

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration settings.

        Raises:
            ValueError: If a layout path is absolute or escapes the project root
        """
        for attr_name in ('MODULES_DIR', 'REGISTRY_FILE'):
            value = getattr(cls, attr_name)
            if not value:
                raise ValueError(f"{attr_name} cannot be empty")
            path = PurePath(value)
            if path.is_absolute() or '..' in path.parts:
                raise ValueError(f"{attr_name} must be relative to the project root, got '{value}'")

        if cls.LOG_LEVEL not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ValueError(f"Invalid LOG_LEVEL: {cls.LOG_LEVEL}")

        return True


class DevConfig(Config):
    """Development configuration with chatty logging."""

    class Env:
        """Development environment configuration"""
        file = ".env.dev"
        auto_load = True
        override = True

    VERBOSE_LOGGING = True
    LOG_LEVEL = "DEBUG"


class ProdConfig(Config):
    """Configuration for CI and scripted runs."""

    class Env:
        """Production environment configuration"""
        file = ".env.prod"
        auto_load = True
        override = False  # Don't override system env vars

    VERBOSE_LOGGING = False
    LOG_LEVEL = "WARNING"
