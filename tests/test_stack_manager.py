"""Tests for the stack manager."""

import asyncio
import os

import pytest

from drop_shelf.models.notification import NotificationKind
from drop_shelf.models.settings import FileSettingsUpdate


async def test_drop_scenario(manager, listener, make_file):
    a = make_file("a.png")
    b = make_file("b.pdf")

    result = await manager.add_files([a, a, b])

    assert [f.name for f in result.added] == ["a.png", "b.pdf"]
    assert result.duplicate_count == 1
    assert listener.notifications[-1].body == "Added 2 files. Skipped 1 duplicate file(s)."
    assert [f.path for f in listener.snapshots[-1]] == [a, b]


async def test_all_duplicates(manager, listener, make_file):
    a = make_file("a.txt")
    await manager.add_files([a])
    pushes = len(listener.snapshots)

    result = await manager.add_files([a])

    assert result.duplicate_count == 1
    assert listener.notifications[-1].kind == NotificationKind.DUPLICATE
    assert listener.notifications[-1].body == "All 1 file(s) already exist."
    assert len(listener.snapshots) == pushes


async def test_empty_drop_is_noop(manager, listener):
    result = await manager.add_files([])
    assert result.added == []
    assert listener.notifications == []
    assert listener.snapshots == []


async def test_clear_is_idempotent(manager, listener, make_file):
    await manager.add_files([make_file("a.txt")])
    assert await manager.clear_stack() == []
    assert await manager.clear_stack() == []
    assert manager.snapshot() == []
    assert listener.notifications[-1].kind == NotificationKind.CLEARED


async def test_move_reports_partial_failure_and_clears(
    manager, listener, settings_provider, make_file, dest_dir
):
    paths = [make_file(n) for n in ("a.txt", "b.txt", "c.txt")]
    await manager.add_files(paths)
    os.remove(paths[2])

    summary = await manager.move_files_to_destination(str(dest_dir))

    assert (summary.successes, summary.failures) == (2, 1)
    assert manager.snapshot() == []
    assert listener.snapshots[-1] == []
    assert listener.notifications[-1].kind == NotificationKind.PARTIAL_MOVED
    assert listener.notifications[-1].body == "Moved 2 files, 1 failed."
    assert settings_provider.get_file_settings().recent_destinations == [str(dest_dir)]


async def test_move_success_message_uses_leaf_name(manager, listener, make_file, dest_dir):
    await manager.add_files([make_file("a.txt")])
    summary = await manager.move_files_to_destination(str(dest_dir))

    assert (summary.successes, summary.failures) == (1, 0)
    assert listener.notifications[-1].kind == NotificationKind.MOVED
    assert listener.notifications[-1].body == "Moved 1 files to dest."


async def test_move_defaults_to_settings_destination(manager, make_file, dest_dir):
    await manager.add_files([make_file("a.png")])
    summary = await manager.move_files_to_destination()
    assert summary.successes == 1
    assert (dest_dir / "image" / "a.png").exists()


async def test_move_respects_categorize_setting(manager, settings_provider, make_file, dest_dir):
    settings_provider.update_file_settings(FileSettingsUpdate(categorize_by_type=False))
    await manager.add_files([make_file("a.png")])
    await manager.move_files_to_destination(str(dest_dir))
    assert (dest_dir / "a.png").exists()


async def test_move_to_uncreatable_destination(
    manager, listener, settings_provider, make_file, tmp_path
):
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    await manager.add_files([make_file("a.txt"), make_file("b.txt")])

    summary = await manager.move_files_to_destination(str(blocker / "out"))

    assert (summary.successes, summary.failures) == (0, 2)
    assert manager.snapshot() == []
    assert listener.notifications[-1].kind == NotificationKind.ERROR
    assert settings_provider.get_file_settings().recent_destinations == []


async def test_move_empty_stack(manager, listener, dest_dir):
    summary = await manager.move_files_to_destination(str(dest_dir))
    assert (summary.successes, summary.failures) == (0, 0)
    assert listener.notifications[-1].kind == NotificationKind.ERROR


async def test_move_never_raises(manager, listener, settings_provider, make_file, dest_dir):
    def broken():
        raise RuntimeError("settings unavailable")

    await manager.add_files([make_file("a.txt"), make_file("b.txt")])
    settings_provider.get_file_settings = broken

    summary = await manager.move_files_to_destination(str(dest_dir))

    assert (summary.successes, summary.failures) == (0, 2)
    assert manager.snapshot() == []
    assert listener.notifications[-1].body == "Failed to move files to destination."


async def test_add_never_raises(manager, listener, make_file, monkeypatch):
    async def broken(paths):
        raise RuntimeError("boom")

    monkeypatch.setattr(manager.store, "add", broken)
    result = await manager.add_files([make_file("a.txt")])

    assert result.failed_count == 1
    assert listener.notifications[-1].body == "Failed to process dropped files."


async def test_concurrent_adds_are_serialized(manager, make_file):
    paths = [make_file(f"f{i}.txt") for i in range(20)]

    results = await asyncio.gather(
        manager.add_files(paths),
        manager.add_files(paths),
        manager.add_files(paths[::-1]),
    )

    assert len(manager.snapshot()) == 20
    assert sum(len(r.added) for r in results) == 20
    assert sum(r.duplicate_count for r in results) == 40


async def test_remove_file(manager, listener, make_file):
    a, b = make_file("a.txt"), make_file("b.txt")
    await manager.add_files([a, b])

    files = await manager.remove_file(a)

    assert [f.path for f in files] == [b]
    assert [f.path for f in listener.snapshots[-1]] == [b]


async def test_selection_fallback(manager, listener, make_file):
    paths = [make_file(f"f{i}.txt") for i in range(5)]
    result = await manager.add_files(paths)

    copied = await manager.copy_file_paths()
    assert copied.paths == paths
    assert copied.text == "\n".join(paths)
    assert listener.notifications[-1].body == "5 file paths copied to clipboard."

    manager.select([result.added[1].id, result.added[3].id])
    copied = await manager.copy_file_paths()
    assert copied.paths == [paths[1], paths[3]]
    assert manager.drag_out_paths() == [paths[1], paths[3]]

    manager.clear_selection()
    assert len((await manager.copy_file_paths()).paths) == 5


async def test_explicit_paths_win_over_selection(manager, make_file):
    paths = [make_file(f"f{i}.txt") for i in range(3)]
    result = await manager.add_files(paths)
    manager.select([result.added[0].id])

    copied = await manager.copy_file_paths(["/some/other/path"])
    assert copied.paths == ["/some/other/path"]


async def test_selection_ignores_unknown_and_removed_ids(manager, make_file):
    paths = [make_file(f"f{i}.txt") for i in range(3)]
    result = await manager.add_files(paths)
    ids = [f.id for f in result.added]

    manager.select([ids[0], "nope"])
    assert [f.id for f in manager.selected_files()] == [ids[0]]

    await manager.remove_file(paths[0])
    assert manager.selected_files() == []
    assert len(manager.dispatch_targets()) == 2


async def test_toggle_select_all(manager, make_file):
    await manager.add_files([make_file("a.txt"), make_file("b.txt")])

    assert len(manager.toggle_select_all()) == 2
    assert manager.toggle_select_all() == []

    first = manager.snapshot()[0]
    assert manager.toggle_selection(first.id) == [first]
    assert manager.toggle_selection(first.id) == []


async def test_drag_out_skips_missing_files(manager, make_file):
    a, b = make_file("a.txt"), make_file("b.txt")
    await manager.add_files([a, b])
    os.remove(a)
    assert manager.drag_out_paths() == [b]


async def test_auto_clear(settings_provider, listener, make_file):
    from drop_shelf.services.stack_manager import StackManager

    settings_provider.update_file_settings(FileSettingsUpdate(auto_clear_timeout=0.0005))
    manager = StackManager(settings_provider)
    manager.subscribe(listener)

    await manager.add_files([make_file("a.txt")])
    assert len(manager.snapshot()) == 1

    await asyncio.sleep(0.2)
    assert manager.snapshot() == []
    assert listener.notifications[-1].kind == NotificationKind.CLEARED


async def test_move_with_empty_default_destination(listener, make_file, tmp_path, monkeypatch):
    from drop_shelf.models.settings import FileSettings
    from drop_shelf.services.settings_provider import InMemorySettingsProvider
    from drop_shelf.services.stack_manager import StackManager

    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    provider = InMemorySettingsProvider(FileSettings(default_destination=""))
    manager = StackManager(provider)
    manager.subscribe(listener)
    await manager.add_files([make_file("a.png")])

    summary = await manager.move_files_to_destination("")

    assert (summary.successes, summary.failures) == (0, 1)
    assert list(cwd.iterdir()) == []
    assert manager.snapshot() == []
    assert listener.notifications[-1].kind == NotificationKind.ERROR
    assert provider.get_file_settings().recent_destinations == []


@pytest.mark.parametrize("move_first", [False, True])
async def test_move_and_add_do_not_interleave(manager, make_file, dest_dir, move_first):
    staged = [make_file(f"s{i}.txt") for i in range(5)]
    late = [make_file(f"late{i}.txt") for i in range(5)]
    await manager.add_files(staged)

    move = manager.move_files_to_destination(str(dest_dir))
    add = manager.add_files(late)
    if move_first:
        summary, _ = await asyncio.gather(move, add)
    else:
        _, summary = await asyncio.gather(add, move)

    moved = {p.name for p in (dest_dir / "document").iterdir()}
    remaining = {f.name for f in manager.snapshot()}
    everything = {os.path.basename(p) for p in staged + late}

    assert summary.failures == 0
    assert summary.successes == len(moved)
    assert moved.isdisjoint(remaining)
    assert moved | remaining == everything
    if move_first:
        assert moved == {os.path.basename(p) for p in staged}
    else:
        assert remaining == set()
