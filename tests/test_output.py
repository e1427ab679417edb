import json

from api_index.src.api_index.indexer import ApiIndexer
from api_index.src.api_index.main import SAMPLE_FILES, main, write_sample_project
from api_index.src.api_index.outputs.output import print_summary, to_json


def sample_index(tmp_path, sink):
    return ApiIndexer(sink=sink).load(write_sample_project(tmp_path))


def test_to_json(tmp_path, sink):
    data = json.loads(to_json(sample_index(tmp_path, sink)))

    by_fqcn = {c["fqcn"]: c for c in data["classes"]}
    assert set(by_fqcn) == {"com.acme.demo.web.UserController", "com.acme.demo.model.User"}
    controller = by_fqcn["com.acme.demo.web.UserController"]
    assert [m["name"] for m in controller["methods"]] == ["getUser", "addUser"]
    get_user = controller["methods"][0]
    assert get_user["responseType"] == "User"
    assert get_user["responseQualifiedName"] == "com.acme.demo.model.User"
    assert get_user["comment"].startswith("Looks a user up by id.")
    assert get_user["params"] == [
        {"name": "id", "type": "Long", "annotations": [{"name": "PathVariable", "arguments": None}]},
    ]
    assert data["names"]["User"] == ["com.acme.demo.model.User"]
    assert by_fqcn["com.acme.demo.model.User"]["methods"] == []


def test_print_summary(tmp_path, sink, capsys):
    print_summary(sample_index(tmp_path, sink))

    out = capsys.readouterr().out
    assert "[com.acme.demo.web.UserController]" in out
    assert "public ResponseEntity<User> getUser(@PathVariable Long id) -> com.acme.demo.model.User" in out
    assert "notAnEndpoint" not in out


def test_main_with_directory(tmp_path, capsys):
    write_sample_project(tmp_path)
    assert main([str(tmp_path)]) == 0
    assert "=== JSON ===" in capsys.readouterr().out


def test_main_rejects_non_directory(tmp_path):
    assert main([str(tmp_path / "missing")]) == 1


def test_sample_files_are_java():
    assert all(name.endswith(".java") for name in SAMPLE_FILES)
