"""
Workspace Tests
===============

Unit tests for sidebar and selection state over a mocked client.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock, Mock

from services.editor.workspace import (
    INVALID_UPLOAD_MESSAGE,
    NEW_DIAGRAM_TEMPLATE,
    Workspace,
    new_diagram_name,
)


def _item(item_id, name="item", **extra):
    return SimpleNamespace(id=item_id, name=name, **extra)


@pytest.fixture
def api():
    api_mock = Mock()
    api_mock.get_collections = AsyncMock(return_value=[_item(1, "Default"), _item(2, "Other")])
    api_mock.get_diagrams_by_collection = AsyncMock(return_value=[_item(10, "D1")])
    api_mock.create_collection = AsyncMock(return_value=_item(3, "New"))
    api_mock.delete_collection = AsyncMock(return_value=True)
    api_mock.create_diagram = AsyncMock(return_value=_item(11, "New Diagram 2"))
    api_mock.update_diagram = AsyncMock(return_value=_item(10, "Renamed", content="pie"))
    api_mock.delete_diagram = AsyncMock(return_value=True)
    api_mock.upload_diagram = AsyncMock(return_value=_item(12, "foo"))
    return api_mock


@pytest.mark.asyncio
async def test_load_selects_first_collection(api):
    workspace = Workspace(api)

    await workspace.load()

    assert workspace.selected_collection.id == 1
    api.get_diagrams_by_collection.assert_awaited_once_with(1)
    assert [d.id for d in workspace.diagrams] == [10]


@pytest.mark.asyncio
async def test_load_failure_keeps_state(api):
    api.get_collections.side_effect = RuntimeError("offline")
    workspace = Workspace(api)

    await workspace.load()

    assert workspace.collections == []
    assert workspace.selected_collection is None


@pytest.mark.asyncio
async def test_selecting_collection_clears_diagram(api):
    workspace = Workspace(api)
    await workspace.load()
    workspace.select_diagram(workspace.diagrams[0])

    await workspace.select_collection(workspace.collections[1])

    assert workspace.selected_diagram is None
    api.get_diagrams_by_collection.assert_awaited_with(2)


@pytest.mark.asyncio
async def test_create_collection_selects_it(api):
    workspace = Workspace(api)
    await workspace.load()

    created = await workspace.create_collection("New", "")

    api.create_collection.assert_awaited_once_with("New", None)
    assert workspace.selected_collection is created
    assert workspace.collections[-1] is created


@pytest.mark.asyncio
async def test_create_collection_ignores_blank_name(api):
    workspace = Workspace(api)

    assert await workspace.create_collection("  ") is None
    api.create_collection.assert_not_awaited()


@pytest.mark.asyncio
async def test_deleting_selected_collection_selects_first_remaining(api):
    workspace = Workspace(api)
    await workspace.load()
    workspace.select_diagram(workspace.diagrams[0])

    assert await workspace.delete_collection(1) is True

    assert [c.id for c in workspace.collections] == [2]
    assert workspace.selected_collection.id == 2
    assert workspace.selected_diagram is None


@pytest.mark.asyncio
async def test_failed_delete_sets_alert(api):
    api.delete_collection.return_value = False
    workspace = Workspace(api)
    await workspace.load()

    assert await workspace.delete_collection(1) is False
    assert workspace.alert == "Failed to delete collection"
    assert len(workspace.collections) == 2


@pytest.mark.asyncio
async def test_create_diagram_uses_template(api):
    workspace = Workspace(api)
    await workspace.load()

    diagram = await workspace.create_diagram()

    api.create_diagram.assert_awaited_once_with(1, "New Diagram 2", NEW_DIAGRAM_TEMPLATE)
    assert workspace.selected_diagram is diagram


def test_new_diagram_name():
    assert new_diagram_name(0) == "New Diagram 1"


@pytest.mark.asyncio
async def test_update_diagram_refreshes_selection(api):
    workspace = Workspace(api)
    await workspace.load()
    workspace.select_diagram(workspace.diagrams[0])

    updated = await workspace.update_diagram(10, "Renamed", "pie")

    assert workspace.selected_diagram is updated
    assert workspace.diagrams == [updated]


@pytest.mark.asyncio
async def test_update_diagram_propagates_errors(api):
    api.update_diagram.side_effect = RuntimeError("offline")
    workspace = Workspace(api)

    with pytest.raises(RuntimeError):
        await workspace.update_diagram(10, "x", "y")


@pytest.mark.asyncio
async def test_deleting_selected_diagram_clears_selection(api):
    workspace = Workspace(api)
    await workspace.load()
    workspace.select_diagram(workspace.diagrams[0])

    assert await workspace.delete_diagram(10) is True
    assert workspace.selected_diagram is None


@pytest.mark.asyncio
async def test_upload_rejects_other_files(api):
    workspace = Workspace(api)
    await workspace.load()

    assert await workspace.upload("notes.txt", b"graph TD") is None
    assert workspace.alert == INVALID_UPLOAD_MESSAGE
    api.upload_diagram.assert_not_awaited()


@pytest.mark.asyncio
async def test_upload_selects_new_diagram(api):
    workspace = Workspace(api)
    await workspace.load()

    diagram = await workspace.upload("foo.mmd", b"graph TD")

    api.upload_diagram.assert_awaited_once_with(1, "foo.mmd", b"graph TD")
    assert workspace.selected_diagram is diagram


def test_toggle_sidebar(api):
    workspace = Workspace(api)

    assert workspace.toggle_sidebar() is True
    assert workspace.toggle_sidebar() is False
