from pathlib import Path

import pytest

from pve_openapi.parser.apidata import ApiDataError, load_apidata

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadApidata:
    def test_load_fixture_top_level_nodes(self):
        nodes = load_apidata(FIXTURES / "apidata.js")
        assert [n.segment for n in nodes] == ["access", "cluster", "nodes", None, "version"]

    def test_load_fixture_nested_info(self):
        nodes = load_apidata(FIXTURES / "apidata.js")
        qemu = nodes[2].children[0].children[0]
        assert qemu.segment == "qemu"
        assert list(qemu.info) == ["GET", "POST"]
        assert qemu.info["POST"].parameters.properties["vmid"].minimum == 100

    def test_let_assignment_with_trailing_code(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text('let apiSchema = [{"path": "version"}];\nexport default apiSchema;\n')
        nodes = load_apidata(f)
        assert nodes[0].segment == "version"

    def test_custom_variable_name(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text('var pveapi = [{"text": "nodes"}];')
        nodes = load_apidata(f, variable="pveapi")
        assert nodes[0].segment == "nodes"

    def test_relaxed_javascript_literal(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text(
            "const apiSchema = [\n"
            "  {path: 'nodes', info: {GET: {name: 'index', returns: {type: 'array'}}}}\n"
            "];\n"
        )
        nodes = load_apidata(f)
        assert nodes[0].segment == "nodes"
        assert nodes[0].info["GET"].name == "index"
        assert nodes[0].info["GET"].returns.type == "array"

    def test_compact_javascript_literal(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text("const apiSchema = [{path:'nodes',info:{GET:{name:'index'}}}];")
        nodes = load_apidata(f)
        assert nodes[0].segment == "nodes"
        assert nodes[0].info["GET"].name == "index"

    def test_relaxed_literal_with_trailing_code(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text("const apiSchema = [{path: 'nodes', info: {GET: {}}}];\nlet x = {a: 1};\n")
        nodes = load_apidata(f)
        assert len(nodes) == 1
        assert nodes[0].segment == "nodes"
        assert list(nodes[0].info) == ["GET"]

    def test_yaml_document_without_assignment(self, tmp_path):
        f = tmp_path / "schema.yaml"
        f.write_text("- path: nodes\n  info:\n    GET:\n      name: index\n")
        nodes = load_apidata(f)
        assert nodes[0].info["GET"].name == "index"

    def test_plain_json_file_without_assignment(self, tmp_path):
        f = tmp_path / "schema.json"
        f.write_text('[{"path": "cluster"}]')
        assert load_apidata(f)[0].segment == "cluster"

    def test_single_node_is_wrapped(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text('const apiSchema = {"path": "nodes"};')
        nodes = load_apidata(f)
        assert len(nodes) == 1
        assert nodes[0].segment == "nodes"


class TestLoadApidataErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ApiDataError, match="Cannot read"):
            load_apidata(tmp_path / "missing.js")

    def test_assignment_without_literal(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text("const apiSchema = undefined;\nlet other = [1, 2];\n")
        with pytest.raises(ApiDataError, match="Cannot parse"):
            load_apidata(f)

    def test_wrong_top_level_shape(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text('const apiSchema = "nodes";')
        with pytest.raises(ApiDataError, match="Expected a list"):
            load_apidata(f)

    def test_empty_file(self, tmp_path):
        f = tmp_path / "apidata.js"
        f.write_text("")
        with pytest.raises(ApiDataError):
            load_apidata(f)
