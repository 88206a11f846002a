import asyncio
from pathlib import Path

import pytest

from adpreview.server import create_mcp_server
from adpreview.storage import SessionStore

from conftest import PNG_BYTES


def call(mcp, name: str, **arguments) -> str:
    """Run a tool and return its text output."""
    result = asyncio.run(mcp.call_tool(name, arguments))
    # Newer 1.x releases return (content, structured_content)
    if isinstance(result, tuple):
        result = result[0]
    if isinstance(result, dict):
        return str(result.get("result", ""))
    return "\n".join(block.text for block in result)


@pytest.fixture
def session(tmp_path: Path) -> Path:
    return tmp_path / "session.db"


@pytest.fixture
def mcp(session: Path):
    return create_mcp_server(session)


@pytest.fixture
def summer_zip(write_zip, creative_entries) -> Path:
    return write_zip("summer.zip", creative_entries)


def _collection(session: Path):
    return SessionStore(session).load_collection()


def test_server_registers_session_tools(mcp, session: Path) -> None:
    tools = asyncio.run(mcp.list_tools())

    assert {tool.name for tool in tools} == {"ls", "read", "add", "remove"}
    assert session.exists()


def test_ls_on_empty_session(mcp) -> None:
    assert call(mcp, "ls") == "No formats uploaded"


def test_add_persists_bundle(mcp, session: Path, summer_zip: Path) -> None:
    output = call(mcp, "add", path=str(summer_zip))

    collection = _collection(session)
    assert "Summer Sale (300×250) loaded with 4 assets!" in output
    assert len(collection) == 1
    bundle = collection.selected
    assert f"Id: {bundle.id}" in output
    assert "Size: 300×250" in output


def test_add_same_archive_twice_gets_distinct_ids(mcp, session: Path, summer_zip: Path) -> None:
    call(mcp, "add", path=str(summer_zip))
    call(mcp, "add", path=str(summer_zip))

    ids = _collection(session).ids()
    assert len(ids) == 2
    assert ids[0] != ids[1]


def test_add_rejects_bad_archives(mcp, session: Path, tmp_path: Path, write_zip) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("x")
    no_document = write_zip("assets.zip", {"logo.png": PNG_BYTES})

    assert call(mcp, "add", path=str(notes)).startswith("Error: ")
    assert "No HTML file found" in call(mcp, "add", path=str(no_document))
    assert len(_collection(session)) == 0


def test_ls_marks_selected_bundle(mcp, session: Path, summer_zip: Path) -> None:
    call(mcp, "add", path=str(summer_zip))
    call(mcp, "add", path=str(summer_zip))
    first, second = _collection(session).ids()

    lines = call(mcp, "ls").splitlines()

    assert len(lines) == 2
    assert lines[0].startswith(f"* {first}")
    assert lines[1].startswith(f"  {second}")
    assert "300×250 4 assets" in lines[0]


def test_read_returns_resolved_html(mcp, session: Path, summer_zip: Path) -> None:
    call(mcp, "add", path=str(summer_zip))
    bundle_id = _collection(session).ids()[0]

    html = call(mcp, "read", bundle_id=bundle_id)

    assert "<title>Summer Sale</title>" in html
    assert "data:image/png;base64," in html
    assert "images/logo.png" not in html


def test_read_unknown_bundle(mcp) -> None:
    assert call(mcp, "read", bundle_id="nope") == "Error: Bundle not found: nope"


def test_remove_repoints_selection(mcp, session: Path, summer_zip: Path) -> None:
    call(mcp, "add", path=str(summer_zip))
    call(mcp, "add", path=str(summer_zip))
    first, second = _collection(session).ids()

    assert call(mcp, "remove", bundle_id=first) == "Format removed"

    collection = _collection(session)
    assert collection.ids() == [second]
    assert collection.selected_id == second


def test_remove_unknown_bundle(mcp, session: Path, summer_zip: Path) -> None:
    call(mcp, "add", path=str(summer_zip))

    assert call(mcp, "remove", bundle_id="nope") == "Error: Bundle not found: nope"
    assert len(_collection(session)) == 1
