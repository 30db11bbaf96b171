"""Declarative base shared by all MermaidUI tables.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from sqlalchemy.orm import declarative_base


Base = declarative_base()
