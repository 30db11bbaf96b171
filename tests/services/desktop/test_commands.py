"""
Desktop Command Tests
=====================

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import pytest

from services.desktop import CommandError, DesktopCommands


@pytest.fixture
def commands(session_factory):
    return DesktopCommands(session_factory)


def test_command_names(commands):
    assert commands.names == sorted([
        "get_collections", "get_collection", "create_collection",
        "update_collection", "delete_collection", "get_diagrams_by_collection",
        "get_diagram", "create_diagram", "update_diagram", "delete_diagram",
    ])


def test_collection_round_trip(commands):
    created = commands.invoke("create_collection", name="Architecture", description="Docs")

    fetched = commands.invoke("get_collection", id=created["id"])

    assert fetched["name"] == "Architecture"
    assert fetched["description"] == "Docs"
    assert isinstance(fetched["created_at"], str)


def test_diagram_commands(commands):
    collection = commands.invoke("create_collection", name="Flows")
    diagram = commands.invoke(
        "create_diagram", collection_id=collection["id"], name="Flow", content="graph TD"
    )

    updated = commands.invoke("update_diagram", id=diagram["id"], name="Flow 2", content="graph LR")
    listed = commands.invoke("get_diagrams_by_collection", collection_id=collection["id"])

    assert updated["name"] == "Flow 2"
    assert [d["content"] for d in listed] == ["graph LR"]
    assert commands.invoke("delete_diagram", id=diagram["id"]) is True
    assert commands.invoke("get_diagram", id=diagram["id"]) is None


def test_missing_records(commands):
    assert commands.invoke("get_collection", id=9999) is None
    assert commands.invoke("delete_collection", id=9999) is False
    assert commands.invoke("update_collection", id=9999, name="x") is None


def test_storage_errors_carry_code(commands):
    with pytest.raises(CommandError) as exc_info:
        commands.invoke("create_diagram", collection_id=9999, name="x", content="y")

    assert exc_info.value.error_code == "NOT_FOUND"


def test_validation_error(commands):
    with pytest.raises(CommandError) as exc_info:
        commands.invoke("create_collection", name="")

    assert exc_info.value.message == "Name is required"
    assert exc_info.value.error_code == "VALIDATION"


def test_unknown_command(commands):
    with pytest.raises(CommandError) as exc_info:
        commands.invoke("drop_database")

    assert exc_info.value.error_code == "UNKNOWN_COMMAND"


def test_bad_arguments(commands):
    with pytest.raises(CommandError) as exc_info:
        commands.invoke("get_collection", collection_id=1)

    assert exc_info.value.error_code == "VALIDATION"
