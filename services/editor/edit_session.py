"""
Edit Session
============

In-memory copy of the diagram being edited. It is the only source of
truth for "unsaved changes" and tracks content and name edits with two
separate flags.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
from dataclasses import dataclass
from typing import Any


@dataclass
class EditSession:
    """
    Editor state for one diagram.

    ``persisted_name`` / ``persisted_content`` mirror the last record
    received from the store; ``name`` / ``content`` are the editor copy.
    ``dirty`` is the unsaved-changes indicator shown to the user.
    """
    diagram_id: int
    persisted_name: str
    persisted_content: str
    name: str
    content: str
    content_dirty: bool = False
    name_dirty: bool = False
    dirty: bool = False

    @classmethod
    def from_diagram(cls, diagram: Any) -> "EditSession":
        """Start a clean session from a diagram record (attribute access)."""
        return cls(
            diagram_id=diagram.id,
            persisted_name=diagram.name,
            persisted_content=diagram.content,
            name=diagram.name,
            content=diagram.content,
        )

    def edit_content(self, content: str) -> None:
        self.content = content
        self.content_dirty = True
        self.dirty = True

    def edit_name(self, name: str) -> None:
        self.name = name
        self.name_dirty = True
        self.dirty = True

    @property
    def content_changed(self) -> bool:
        """Editor content differs from what the store last returned."""
        return self.content != self.persisted_content

    def needs_autosave(self, enabled: bool) -> bool:
        return enabled and self.content_dirty and self.content_changed

    def mark_saved(self, name: str, content: str) -> None:
        """A manual save persisted both name and content."""
        self.persisted_name = name
        self.persisted_content = content
        self.content_dirty = False
        self.name_dirty = False
        self.dirty = False

    def mark_autosaved(self, content: str) -> None:
        """
        Content was persisted under the last-persisted name.

        Flags are only cleared if no further content edit arrived while
        the save was in flight; a pending name edit keeps ``dirty`` set.
        """
        self.persisted_content = content
        if self.content != content:
            return
        self.content_dirty = False
        if not self.name_dirty:
            self.dirty = False

    def reset(self, diagram: Any) -> None:
        """Resync from another (or a refreshed) diagram record."""
        self.diagram_id = diagram.id
        self.persisted_name = diagram.name
        self.persisted_content = diagram.content
        self.name = diagram.name
        self.content = diagram.content
        self.content_dirty = False
        self.name_dirty = False
        self.dirty = False
