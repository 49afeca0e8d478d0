from __future__ import annotations

import pytest

from vocab_quiz.core import workspace


def test_ensure_workspace_creates_all_subdirectories(tmp_path, monkeypatch):
    root = tmp_path / "data"
    monkeypatch.setenv(workspace.WORKSPACE_ENV, str(root))

    layout = workspace.ensure_workspace()

    assert layout.home == root.resolve()
    assert {name for name, _ in layout.items()} == {"config", "logs", "topics"}
    for name, path in layout.items():
        assert path.is_dir()
        assert layout.created[name] is True
    assert layout.created["home"] is True


def test_second_run_reports_existing(tmp_path):
    first = workspace.ensure_workspace(path=tmp_path / "ws")
    second = workspace.ensure_workspace(path=tmp_path / "ws")

    assert first.home == second.home
    assert not any(second.created.values())


def test_explicit_path_beats_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(workspace.WORKSPACE_ENV, str(tmp_path / "env"))

    layout = workspace.ensure_workspace(path=tmp_path / "explicit")

    assert layout.home == (tmp_path / "explicit").resolve()
    assert not (tmp_path / "env").exists()


def test_env_mapping_is_honoured(tmp_path):
    layout = workspace.ensure_workspace(
        env={workspace.WORKSPACE_ENV: str(tmp_path / "mapped")}
    )

    assert layout.path_for("topics") == (tmp_path / "mapped").resolve() / "topics"


def test_describe_layout_does_not_create(tmp_path):
    root = tmp_path / "layout"

    mapping = workspace.describe_layout(path=root)

    assert mapping["home"] == root.resolve()
    assert mapping["logs"] == root.resolve() / "logs"
    assert not root.exists()


def test_workspace_that_is_a_file_errors(tmp_path):
    root = tmp_path / "file"
    root.write_text("not a dir", encoding="utf-8")

    with pytest.raises(workspace.WorkspaceError):
        workspace.ensure_workspace(path=root)


def test_subdirectory_that_is_a_file_errors(tmp_path):
    root = tmp_path / "ws"
    root.mkdir()
    (root / "logs").write_text("oops", encoding="utf-8")

    with pytest.raises(workspace.WorkspaceError):
        workspace.ensure_workspace(path=root)
    with pytest.raises(workspace.WorkspaceError):
        workspace.ensure_workspace(path=root, create=False)


def test_default_location_falls_back_to_tempdir(tmp_path, monkeypatch):
    blocked = tmp_path / "blocked"
    fallback = tmp_path / "fallback"
    monkeypatch.setattr(workspace, "DEFAULT_WORKSPACE", blocked)
    monkeypatch.setattr(workspace, "_fallback_base", lambda: fallback)
    original = workspace._materialize_layout

    def fake_materialize(*, base, create, subdirs):
        if base == blocked.resolve():
            raise PermissionError("denied")
        return original(base=base, create=create, subdirs=subdirs)

    monkeypatch.setattr(workspace, "_materialize_layout", fake_materialize)

    layout = workspace.ensure_workspace(env={})

    assert layout.home == fallback


def test_explicit_path_does_not_fall_back(tmp_path, monkeypatch):
    def denied(**_kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(workspace, "_materialize_layout", denied)

    with pytest.raises(workspace.WorkspaceError):
        workspace.ensure_workspace(path=tmp_path / "explicit")


def test_path_for_unknown_key_errors(tmp_path):
    layout = workspace.ensure_workspace(path=tmp_path / "ws", create=False)

    with pytest.raises(KeyError):
        layout.path_for("unknown")
