import json

from workspaces import WorkspaceRegistry


def test_add_persists_and_reloads(tmp_path):
    path = tmp_path / "workspaces.json"
    registry = WorkspaceRegistry(path=str(path))
    registry.add("HelloApp", "/projects/HelloApp")

    assert json.loads(path.read_text()) == {"helloapp": "/projects/HelloApp"}
    assert WorkspaceRegistry(path=str(path)).get_path("helloapp") == "/projects/HelloApp"


def test_defaults_and_resolve(tmp_path):
    registry = WorkspaceRegistry(path=str(tmp_path / "ws.json"))
    registry.add("a", "/p/a")
    assert not registry.set_default(1, "missing")
    assert registry.set_default(1, "A")
    assert registry.resolve(None, 1) == ("a", "/p/a")
    assert registry.resolve("b", 1) == ("b", None)


def test_rename_moves_defaults(tmp_path):
    registry = WorkspaceRegistry(path=str(tmp_path / "ws.json"))
    registry.add("old", "/p/old")
    registry.add("taken", "/p/taken")
    registry.set_default(1, "old")

    assert not registry.rename("old", "taken")
    assert registry.rename("old", "new")
    assert registry.list_keys() == ["new", "taken"]
    assert registry.get_default(1) == "new"


def test_remove_clears_default(tmp_path):
    registry = WorkspaceRegistry(path=str(tmp_path / "ws.json"))
    registry.add("a", "/p/a")
    registry.set_default(1, "a")
    registry.remove("a")
    assert not registry.exists("a")
    assert registry.get_default(1) == registry._global_default
