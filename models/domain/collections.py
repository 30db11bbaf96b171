"""
Collection Storage Model for MermaidUI
======================================

A named group of diagrams. Deleting a collection deletes every diagram in it.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from models.domain.base import Base


class Collection(Base):
    """
    User-defined group of Mermaid diagrams.

    The store assigns ids; timestamps are stamped server-side.
    """
    __tablename__ = "collections"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # ORM-side cascade mirrors the ON DELETE CASCADE foreign key
    diagrams = relationship(
        "Diagram",
        back_populates="collection",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<Collection {self.id}: {self.name}>"
