"""
Diagram Storage Models for MermaidUI
====================================

Database model for Mermaid diagrams with persistent storage.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.domain.base import Base


class Diagram(Base):
    """
    A Mermaid diagram belonging to exactly one collection.

    Stores the Mermaid source text verbatim in ``content``.
    """
    __tablename__ = "diagrams"

    id = Column(Integer, primary_key=True, index=True)
    collection_id = Column(
        Integer,
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False
    )

    name = Column(String, nullable=False)

    # Mermaid source text
    content = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationship
    collection = relationship("Collection", back_populates="diagrams")

    __table_args__ = (
        Index('idx_diagrams_collection', 'collection_id'),
    )

    def __repr__(self):
        return f"<Diagram {self.id}: {self.name} (collection {self.collection_id})>"
