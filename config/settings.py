"""MermaidUI Configuration Module.

This module provides centralized configuration management for the MermaidUI
application. It handles environment variable loading, validation, and provides
a clean interface for accessing configuration values throughout the application.

Features:
- Dynamic environment variable loading with .env support
- Property-based configuration access for real-time updates
- Default values for all configuration options

Environment Variables:
- DATABASE_PATH: Location of the SQLite database file
- See env.example for complete configuration options

Usage:
    from config.settings import config
    db_path = config.DATABASE_PATH

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import logging

from dotenv import load_dotenv

from config.base_config import BaseConfig
from config.storage_config import StorageConfigMixin
from config.export_config import ExportConfigMixin

logger = logging.getLogger(__name__)

load_dotenv()  # Load environment variables from .env file


class Config(
    BaseConfig,
    StorageConfigMixin,
    ExportConfigMixin
):
    """
    Centralized configuration management for MermaidUI application.

    Combines all configuration mixins to provide a unified interface
    for accessing configuration values throughout the application.
    """


# Create global configuration instance
config = Config()
