"""
Configuration Package

Application configuration for MermaidUI:
- settings: Config class (base + storage + export mixins) and the shared ``config``
- database: SQLAlchemy engine, session dependency and default collection seeding

The database module opens the engine on import; import it explicitly:
    from config.database import get_db, init_db

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from .export_config import DEFAULT_MERMAID_SCRIPT_URL, VALID_MERMAID_THEMES
from .settings import Config, config

__all__ = [
    'Config',
    'config',
    'DEFAULT_MERMAID_SCRIPT_URL',
    'VALID_MERMAID_THEMES',
]
