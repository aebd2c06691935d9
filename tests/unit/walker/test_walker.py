"""Tree walker behavior against real temporary directories and a fake backend."""

from __future__ import annotations

import os
import stat
import tempfile
import unittest
from pathlib import Path

from lstree.options import TreeOptions
from lstree.patterns import load_patterns, parse_user_patterns
from lstree.walker import Stats, render_tree, walk


def _touch(path: Path, text: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _render(root: Path, **option_overrides) -> tuple[list[str], Stats]:
    options = TreeOptions(path=root, **option_overrides)
    patterns = load_patterns(root, options.ignore, options.use_gitignore)
    lines: list[str] = []
    stats = render_tree(options, patterns, lines.append)
    return lines, stats


class StatsTests(unittest.TestCase):
    def test_empty_stats_is_identity(self) -> None:
        value = Stats(directories=2, files=5)
        self.assertEqual(Stats() + value, value)
        self.assertEqual(value + Stats(), value)

    def test_addition_is_pointwise_and_associative(self) -> None:
        a, b, c = Stats(1, 2), Stats(3, 4), Stats(5, 6)
        self.assertEqual(a + b, Stats(4, 6))
        self.assertEqual((a + b) + c, a + (b + c))
        self.assertEqual(sum([a, b, c], Stats()), Stats(9, 12))


class WalkScenarioTests(unittest.TestCase):
    def test_mixed_directories_and_files_render_in_name_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "x").mkdir()
            _touch(root / "y" / "f.txt")
            _touch(root / "z.txt")

            lines, stats = _render(root)

            self.assertEqual(
                lines,
                [
                    str(root),
                    "├── x",
                    "├── y",
                    "│   └── f.txt",
                    "└── z.txt",
                ],
            )
            self.assertEqual(stats, Stats(directories=2, files=2))

    def test_entries_sort_by_codepoint_not_grouped_by_type(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "b")
            (root / "a").mkdir()
            _touch(root / "C")

            lines, _stats = _render(root)

            self.assertEqual(lines[1:], ["├── C", "├── a", "└── b"])

    def test_hidden_entries_follow_show_hidden_flag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".env")
            _touch(root / "app.py")

            hidden_off, _ = _render(root)
            hidden_on, stats = _render(root, show_hidden=True)

            self.assertNotIn("├── .env", hidden_off)
            self.assertEqual(hidden_off[1:], ["└── app.py"])
            self.assertEqual(hidden_on[1:], ["├── .env", "└── app.py"])
            self.assertEqual(stats.files, 2)

    def test_hidden_suppression_is_independent_of_patterns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".env")

            lines, _ = _render(root, ignore="*.py")

            self.assertEqual(lines, [str(root)])

    def test_max_depth_limits_descent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a" / "b" / "c").mkdir(parents=True)

            depth_zero, zero_stats = _render(root, max_depth=0)
            depth_one, one_stats = _render(root, max_depth=1)
            depth_two, _ = _render(root, max_depth=2)

            self.assertEqual(depth_zero, [str(root)])
            self.assertEqual(zero_stats, Stats())
            self.assertEqual(depth_one[1:], ["└── a"])
            self.assertEqual(one_stats, Stats(directories=1))
            self.assertEqual(depth_two[1:], ["└── a", "    └── b"])

    def test_last_sibling_is_computed_after_filtering(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "a.txt")
            _touch(root / "z.log")

            lines, _ = _render(root, ignore="*.log")

            self.assertEqual(lines[1:], ["└── a.txt"])

    def test_root_anchored_ignore_line_only_excludes_root_level_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".gitignore", "/secret.txt\n")
            _touch(root / "secret.txt")
            _touch(root / "sub" / "secret.txt")

            lines, stats = _render(root)

            self.assertEqual(lines[1:], ["└── sub", "    └── secret.txt"])
            self.assertEqual(stats, Stats(directories=1, files=1))

    def test_name_anchored_pattern_applies_at_every_depth(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".gitignore", "*.log\n")
            _touch(root / "app.log")
            _touch(root / "a" / "app.log")
            _touch(root / "a" / "b" / "app.log")
            _touch(root / "a" / "b" / "keep.txt")

            lines, _ = _render(root)

            self.assertEqual(lines[1:], ["└── a", "    └── b", "        └── keep.txt"])

    def test_no_gitignore_disables_ignore_file_patterns(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / ".gitignore", "*.log\n")
            _touch(root / "app.log")

            lines, _ = _render(root, use_gitignore=False)

            self.assertEqual(lines[1:], ["└── app.log"])

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks are required")
    def test_symlink_to_directory_is_a_leaf_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "real" / "inner.txt")
            os.symlink("real", root / "alias")

            lines, stats = _render(root)

            self.assertEqual(
                lines[1:],
                ["├── alias -> real", "└── real", "    └── inner.txt"],
            )
            self.assertEqual(stats, Stats(directories=1, files=2))

    def test_executable_file_counts_as_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            script = root / "run.sh"
            _touch(script, "#!/bin/sh\n")
            script.chmod(script.stat().st_mode | stat.S_IXUSR)

            lines, stats = _render(root)

            self.assertEqual(lines[1:], ["└── run.sh"])
            self.assertEqual(stats, Stats(files=1))

    def test_missing_root_yields_only_root_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "gone"

            lines, stats = _render(missing)

            self.assertEqual(lines, [str(missing)])
            self.assertEqual(stats, Stats())

    def test_undecodable_file_name_renders_with_replacement_and_is_counted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            try:
                _touch(root / os.fsdecode(b"bad\xff.txt"))
            except (OSError, UnicodeEncodeError):
                self.skipTest("filesystem rejects non-UTF-8 names")
            _touch(root / "ok.txt")

            lines, stats = _render(root)

            self.assertEqual(lines[1:], ["├── bad\ufffd.txt", "└── ok.txt"])
            self.assertEqual(stats, Stats(files=2))
            for line in lines:
                line.encode("utf-8")

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks are required")
    def test_undecodable_link_target_renders_with_replacement(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            try:
                os.symlink(os.fsdecode(b"gone\xfe"), root / "link")
            except (OSError, UnicodeEncodeError):
                self.skipTest("filesystem rejects non-UTF-8 link targets")

            lines, stats = _render(root)

            self.assertEqual(lines[1:], ["└── link -> gone\ufffd"])
            self.assertEqual(stats, Stats(files=1))

    def test_root_label_is_printed_verbatim(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _touch(root / "a.txt")

            lines, _ = _render(root, root_label=f"{tmp}/")

            self.assertEqual(lines, [f"{tmp}/", "└── a.txt"])

    def test_repeated_walks_are_identical(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for rel in ("b/c.txt", "a/d/e.md", "f.py", "a/g"):
                _touch(root / rel)

            first = _render(root)
            second = _render(root)

            self.assertEqual(first, second)

    def test_counts_match_rendered_rows(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for rel in ("b/c.txt", "a/d/e.md", "f.py", "a/g", "a/d/h/i.txt"):
                _touch(root / rel)

            lines, stats = _render(root)

            self.assertEqual(stats.directories + stats.files, len(lines) - 1)
            dir_names = {"a", "b", "d", "h"}
            rendered_dirs = [line for line in lines[1:] if line.rsplit("── ", 1)[1] in dir_names]
            self.assertEqual(stats.directories, len(rendered_dirs))


class _FakeStat:
    def __init__(self, mode: int) -> None:
        self.st_mode = mode


class FakeFileSystem:
    """In-memory backend; missing entries raise ``OSError`` like the real one."""

    def __init__(
        self,
        dirs: dict[str, list[str]],
        modes: dict[str, int],
        links: dict[str, str] | None = None,
    ) -> None:
        self.dirs = dirs
        self.modes = modes
        self.links = links or {}
        self.listed: list[str] = []

    def list_names(self, directory: Path) -> list[str]:
        self.listed.append(str(directory))
        try:
            return list(self.dirs[str(directory)])
        except KeyError:
            raise PermissionError(13, "Permission denied", str(directory)) from None

    def lstat(self, path: Path) -> _FakeStat:
        try:
            return _FakeStat(self.modes[str(path)])
        except KeyError:
            raise FileNotFoundError(2, "No such file", str(path)) from None

    def read_link(self, path: Path) -> str:
        try:
            return self.links[str(path)]
        except KeyError:
            raise PermissionError(13, "Permission denied", str(path)) from None


DIR = stat.S_IFDIR | 0o755
REG = stat.S_IFREG | 0o644
LNK = stat.S_IFLNK | 0o777


class WalkFailureTests(unittest.TestCase):
    def _walk(self, fs: FakeFileSystem, **option_overrides) -> tuple[list[str], Stats]:
        options = TreeOptions(path=Path("/r"), **option_overrides)
        lines: list[str] = []
        stats = walk(Path("/r"), (), options, [], lines.append, fs=fs)
        return lines, stats

    def test_unreadable_subdirectory_is_listed_but_not_descended(self) -> None:
        fs = FakeFileSystem(
            dirs={"/r": ["locked", "ok.txt"]},
            modes={"/r/locked": DIR, "/r/ok.txt": REG},
        )

        lines, stats = self._walk(fs)

        self.assertEqual(lines, ["├── locked", "└── ok.txt"])
        self.assertEqual(stats, Stats(directories=1, files=1))

    def test_entry_with_unreadable_metadata_is_skipped(self) -> None:
        fs = FakeFileSystem(
            dirs={"/r": ["a.txt", "vanished", "z.txt"]},
            modes={"/r/a.txt": REG, "/r/z.txt": REG},
        )

        lines, stats = self._walk(fs)

        self.assertEqual(lines, ["├── a.txt", "└── z.txt"])
        self.assertEqual(stats, Stats(files=2))

    def test_unreadable_link_target_uses_placeholder(self) -> None:
        fs = FakeFileSystem(
            dirs={"/r": ["link"]},
            modes={"/r/link": LNK},
        )

        lines, stats = self._walk(fs)

        self.assertEqual(lines, ["└── link -> unreadable"])
        self.assertEqual(stats, Stats(files=1))

    def test_depth_guard_skips_listing_entirely(self) -> None:
        fs = FakeFileSystem(
            dirs={"/r": ["sub"], "/r/sub": ["deep.txt"]},
            modes={"/r/sub": DIR, "/r/sub/deep.txt": REG},
        )

        lines, stats = self._walk(fs, max_depth=1)

        self.assertEqual(lines, ["└── sub"])
        self.assertEqual(fs.listed, ["/r"])
        self.assertEqual(stats, Stats(directories=1))

    def test_ancestor_flags_are_not_shared_between_siblings(self) -> None:
        fs = FakeFileSystem(
            dirs={"/r": ["a", "b"], "/r/a": ["x"], "/r/b": ["y"]},
            modes={"/r/a": DIR, "/r/b": DIR, "/r/a/x": REG, "/r/b/y": REG},
        )

        lines, _ = self._walk(fs)

        self.assertEqual(lines, ["├── a", "│   └── x", "└── b", "    └── y"])

    def test_user_pattern_excludes_through_fake_backend(self) -> None:
        fs = FakeFileSystem(
            dirs={"/r": ["keep", "skip.tmp"]},
            modes={"/r/keep": REG, "/r/skip.tmp": REG},
        )
        options = TreeOptions(path=Path("/r"))
        lines: list[str] = []

        walk(Path("/r"), (), options, parse_user_patterns("*.tmp"), lines.append, fs=fs)

        self.assertEqual(lines, ["└── keep"])


if __name__ == "__main__":
    unittest.main()
