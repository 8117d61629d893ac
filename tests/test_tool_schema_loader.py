import pytest

from tools.mcp_tools import ToolSchemaError, load_tool_definitions, to_mcp_tools


def test_load_tool_definitions_rejects_missing_file(tmp_path):
    missing = tmp_path / "missing.json"
    with pytest.raises(ToolSchemaError):
        load_tool_definitions(missing)


def test_load_tool_definitions_rejects_invalid_json(tmp_path):
    path = tmp_path / "tools.json"
    path.write_text("{not valid json", encoding="utf-8")
    with pytest.raises(ToolSchemaError):
        load_tool_definitions(path)


def test_load_tool_definitions_rejects_non_list(tmp_path):
    path = tmp_path / "tools.json"
    path.write_text("{\"type\":\"function\"}", encoding="utf-8")
    with pytest.raises(ToolSchemaError):
        load_tool_definitions(path)


def test_load_tool_definitions_validates_schema(tmp_path):
    path = tmp_path / "tools.json"
    path.write_text(
        '[{"type":"function","function":{"name":"ping","parameters":{}}}]',
        encoding="utf-8",
    )
    tools = load_tool_definitions(path)
    assert isinstance(tools, list)
    assert tools[0]["function"]["name"] == "ping"


def test_load_tool_definitions_rejects_duplicate_names(tmp_path):
    path = tmp_path / "tools.json"
    tool = '{"type":"function","function":{"name":"ping","parameters":{}}}'
    path.write_text(f"[{tool},{tool}]", encoding="utf-8")
    with pytest.raises(ToolSchemaError):
        load_tool_definitions(path)


def test_load_tool_definitions_rejects_undeclared_required(tmp_path):
    path = tmp_path / "tools.json"
    path.write_text(
        '[{"type":"function","function":{"name":"ping",'
        '"parameters":{"properties":{},"required":["search"]}}}]',
        encoding="utf-8",
    )
    with pytest.raises(ToolSchemaError):
        load_tool_definitions(path)


def test_bundled_definitions_convert_to_mcp_shape():
    tools = to_mcp_tools(load_tool_definitions())

    assert len(tools) == 1
    assert tools[0]["name"] == "checkfor"
    assert tools[0]["description"].startswith("Search files in directories")
    assert tools[0]["inputSchema"]["type"] == "object"
