"""Unit tests for the TreeLister class."""

import io
import os

import pytest

from superls.entry_formatter import EntryFormatter
from superls.filtering.filter_config import FilterConfig
from superls.traversal.tree_lister import TreeLister


@pytest.fixture
def simple_tree(tmp_path):
    """root/{a.txt, sub/{b.log}}"""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("alpha\n")
    (root / "sub").mkdir()
    (root / "sub" / "b.log").write_text("beta\n")
    return str(root)


@pytest.fixture
def project_tree(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    (root / "README.md").write_text("# Project\nTODO: write docs\n")
    (root / "src").mkdir()
    (root / "src" / "main.py").write_text("import os\n\ndef main():\n    # TODO one\n    # TODO two\n")
    (root / "src" / "util.py").write_text("def helper():\n    pass\n")
    (root / "src" / "cache").mkdir()
    (root / "src" / "cache" / "main.pyc").write_bytes(b"\x00\x01")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "lib.js").write_text("export default {}\n")
    (root / "empty").mkdir()
    (root / "deep").mkdir()
    (root / "deep" / "er").mkdir()
    (root / "deep" / "er" / "still").mkdir()
    (root / "deep" / "er" / "still" / "trace.log").write_text("log\n")
    return str(root)


def listing(config, root, **kwargs):
    return TreeLister(config, **kwargs).get_listing(root).split("\n")


class TestScenarios:
    def test_ignored_extension_prunes_directory(self, simple_tree):
        lines = listing(FilterConfig.create(ignored_extensions=["log"]), simple_tree)
        assert lines == [f"🗂 {simple_tree}", "  📄 a.txt"]

    def test_only_extensions_gives_same_output(self, simple_tree):
        ignored = listing(FilterConfig.create(ignored_extensions=["log"]), simple_tree)
        only = listing(FilterConfig.create(desired_extensions=["txt"]), simple_tree)
        assert only == ignored

    def test_unfiltered(self, simple_tree):
        lines = listing(FilterConfig.create(), simple_tree)
        assert lines == [f"🗂 {simple_tree}", "  📄 a.txt", "  🗂 sub", "    📄 b.log"]


class TestPruning:
    def test_empty_directory_is_invisible(self, project_tree):
        lines = listing(FilterConfig.create(), project_tree)
        assert "  🗂 empty" not in lines

    def test_fully_filtered_subtree_is_invisible(self, project_tree):
        lines = listing(FilterConfig.create(ignored_extensions=["log"]), project_tree)
        assert not any("deep" in line or "still" in line or line.strip() == "🗂 er" for line in lines)

    def test_subtree_with_only_ignored_dirs_is_invisible(self, tmp_path):
        root = tmp_path / "root"
        (root / "outer" / "node_modules").mkdir(parents=True)
        (root / "outer" / "node_modules" / "x.js").write_text("x")
        (root / "keep.txt").write_text("k")
        lines = listing(FilterConfig.create(ignored_dirs=["node_modules"]), str(root))
        assert lines == [f"🗂 {root}", "  📄 keep.txt"]

    def test_pruned_root_produces_nothing(self, simple_tree):
        lister = TreeLister(FilterConfig.create(desired_extensions=["py"]))
        assert list(lister.stream_lines(simple_tree)) == []
        assert lister.get_listing(simple_tree) == ""

    def test_empty_root_produces_nothing(self, tmp_path):
        assert TreeLister(FilterConfig.create()).get_listing(str(tmp_path)) == ""

    def test_kept_directory_shows_before_children(self, project_tree):
        config = FilterConfig.create(ignored_dirs=["node_modules"], ignored_extensions=["log", "pyc"])
        lines = listing(config, project_tree)
        assert lines == [
            f"🗂 {project_tree}",
            "  📄 README.md",
            "  🗂 src",
            "    📄 main.py",
            "    📄 util.py",
        ]


class TestFiltering:
    def test_desired_extension_excludes_other_files(self, project_tree):
        lines = listing(FilterConfig.create(desired_extensions=["py"]), project_tree)
        assert lines == [f"🗂 {project_tree}", "  🗂 src", "    📄 main.py", "    📄 util.py"]

    def test_deny_overrides_allow(self, project_tree):
        lines = listing(FilterConfig.create(desired_extensions=["py", "md"], ignored_extensions=["md"]), project_tree)
        assert "  📄 README.md" not in lines
        assert "    📄 main.py" in lines

    def test_ignored_directory_is_not_descended(self, project_tree):
        lines = listing(FilterConfig.create(ignored_dirs=["src"]), project_tree)
        assert not any("main.py" in line for line in lines)

    def test_exclusion_rules(self, project_tree):
        from superls.exclusion_rules.git_rules import GitIgnoreExclusionRules

        rules = GitIgnoreExclusionRules()
        rules.add_rule("src/cache/")
        rules.add_rule("*.js")
        lines = listing(FilterConfig.create(exclusion_rules=rules), project_tree)
        assert not any("cache" in line for line in lines)
        assert not any("node_modules" in line for line in lines)
        assert "  🗂 deep" in lines


class TestOutput:
    def test_indentation_is_two_spaces_per_level(self, project_tree):
        lines = listing(FilterConfig.create(), project_tree)
        assert "        📄 trace.log" in lines
        assert "      🗂 still" in lines

    def test_children_in_name_order(self, project_tree):
        lines = listing(FilterConfig.create(), project_tree)
        top_level = [line[2:] for line in lines if line.startswith("  ") and not line.startswith("    ")]
        assert top_level == ["📄 README.md", "🗂 deep", "🗂 node_modules", "🗂 src"]

    def test_idempotent(self, project_tree):
        config = FilterConfig.create(ignored_extensions=["pyc"], pattern="TODO")
        lister = TreeLister(config)
        assert lister.get_listing(project_tree) == lister.get_listing(project_tree)

    def test_plain_by_default(self, simple_tree):
        lines = list(TreeLister(FilterConfig.create()).stream_lines(simple_tree))
        assert not any("\x1b[" in line for line in lines)

    def test_colored_entry_lines(self, simple_tree):
        lister = TreeLister(FilterConfig.create(pattern="alpha"), formatter=EntryFormatter("standard"))
        lines = list(lister.stream_lines(simple_tree))
        assert lines[0] == f"\x1b[34m🗂\x1b[0m \x1b[34m{simple_tree}\x1b[0m"
        assert lines[2] == f"{os.path.join(simple_tree, 'a.txt')}:1: alpha"

    def test_tab_in_name_kept(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "a\tb.txt").write_text("x\n")
        assert listing(FilterConfig.create(), str(root)) == [f"🗂 {root}", "  📄 a\tb.txt"]


class TestGrep:
    def test_match_line_kept_verbatim(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "Makefile.mk").write_text("all:\n\tgcc -o x x.c\x0c\n")
        lines = listing(FilterConfig.create(pattern="gcc"), str(root))
        assert lines[-1] == f"{os.path.join(str(root), 'Makefile.mk')}:2: \tgcc -o x x.c\x0c"

    def test_single_match_per_file(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "f.txt").write_text("a\nmatch1\nb\nmatch2\n")
        lines = listing(FilterConfig.create(pattern="match"), str(root))
        path = os.path.join(str(root), "f.txt")
        assert lines == [f"🗂 {root}", "  📄 f.txt", f"{path}:2: match1"]

    def test_match_follows_its_file(self, project_tree):
        lines = listing(FilterConfig.create(pattern="TODO", ignored_dirs=["node_modules"]), project_tree)
        readme = os.path.join(project_tree, "README.md")
        main = os.path.join(project_tree, "src", "main.py")
        assert lines.index(f"{readme}:2: TODO: write docs") == lines.index("  📄 README.md") + 1
        assert lines.index(f"{main}:4:     # TODO one") == lines.index("    📄 main.py") + 1
        assert not any("TODO two" in line for line in lines)

    def test_no_grep_without_pattern(self, project_tree):
        lines = listing(FilterConfig.create(), project_tree)
        assert not any(":" in line for line in lines if not line.startswith("🗂"))

    def test_unreadable_file_reports_and_continues(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (root / "a.bin").write_bytes(b"\xff\xfe\xfd\n")
        (root / "b.txt").write_text("needle\n")
        errors = io.StringIO()
        lister = TreeLister(FilterConfig.create(pattern="needle"), error_stream=errors)

        lines = lister.get_listing(str(root)).split("\n")

        assert lines == [
            f"🗂 {root}",
            "  📄 a.bin",
            "  📄 b.txt",
            f"{os.path.join(str(root), 'b.txt')}:1: needle",
        ]
        assert errors.getvalue().startswith(f"Error reading {os.path.join(str(root), 'a.bin')}: ")
        assert lister.match_count == 1

    def test_errors_go_to_stderr_by_default(self, tmp_path, capsys):
        root = tmp_path / "root"
        root.mkdir()
        (root / "a.bin").write_bytes(b"\xff\n")
        TreeLister(FilterConfig.create(pattern="x")).get_listing(str(root))
        assert "Error reading" in capsys.readouterr().err


class TestCounts:
    def test_counts(self, project_tree):
        lister = TreeLister(FilterConfig.create(pattern="TODO"))
        lister.get_listing(project_tree)
        # deep, er, still, node_modules, src, cache
        assert lister.directory_count == 6
        assert lister.file_count == 6
        assert lister.symlink_count == 0
        assert lister.match_count == 2

    def test_counts_reset_between_runs(self, project_tree):
        lister = TreeLister(FilterConfig.create())
        lister.get_listing(project_tree)
        first = (lister.directory_count, lister.file_count)
        lister.get_listing(project_tree)
        assert (lister.directory_count, lister.file_count) == first

    def test_pruned_directories_are_not_counted(self, project_tree):
        lister = TreeLister(FilterConfig.create(ignored_extensions=["log"]))
        lister.get_listing(project_tree)
        # node_modules, src, cache
        assert lister.directory_count == 3


class TestRoot:
    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TreeLister(FilterConfig.create()).get_listing(str(tmp_path / "missing"))

    def test_file_root(self, simple_tree):
        with pytest.raises(NotADirectoryError):
            TreeLister(FilterConfig.create()).get_listing(os.path.join(simple_tree, "a.txt"))

    def test_root_shown_as_given(self, simple_tree, monkeypatch):
        monkeypatch.chdir(os.path.dirname(simple_tree))
        lines = listing(FilterConfig.create(pattern="alpha"), "./root")
        assert lines[0] == "🗂 ./root"
        assert "./root/a.txt:1: alpha" in lines

    def test_path_like_root(self, simple_tree):
        from pathlib import Path

        lines = listing(FilterConfig.create(), Path(simple_tree))
        assert lines[0] == f"🗂 {simple_tree}"

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="Needs POSIX permissions as a normal user")
    def test_unlistable_directory_is_skipped_silently(self, tmp_path, capsys):
        root = tmp_path / "root"
        (root / "locked").mkdir(parents=True)
        (root / "locked" / "secret.txt").write_text("x")
        (root / "open.txt").write_text("y")
        (root / "locked").chmod(0)
        try:
            lines = listing(FilterConfig.create(), str(root))
        finally:
            (root / "locked").chmod(0o755)
        assert lines == [f"🗂 {root}", "  📄 open.txt"]
        assert capsys.readouterr().err == ""


@pytest.fixture
def tree_with_symlinks(tmp_path):
    root = tmp_path / "root"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("def main(): pass\n")
    try:
        os.symlink(root / "src", root / "build")
        os.symlink(root, root / "src" / "loop")
        has_symlinks = True
    except (OSError, NotImplementedError):
        has_symlinks = False
    return str(root), has_symlinks


class TestSymlinks:
    def test_symlinks_listed_as_leaves(self, tree_with_symlinks):
        root, has_symlinks = tree_with_symlinks
        if not has_symlinks:
            pytest.skip("Symlink creation not supported on this platform/environment")

        lister = TreeLister(FilterConfig.create())
        lines = lister.get_listing(root).split("\n")
        assert f"  🔗 build -> {os.path.join(root, 'src')}" in lines
        assert f"    🔗 loop -> {root}" in lines
        assert lister.symlink_count == 2

    def test_follow_symlinks_with_loop(self, tree_with_symlinks):
        root, has_symlinks = tree_with_symlinks
        if not has_symlinks:
            pytest.skip("Symlink creation not supported on this platform/environment")

        lines = listing(FilterConfig.create(), root, follow_symlinks=True)
        assert lines == [
            f"🗂 {root}",
            "  🗂 build",
            "    🔗 loop -> [loop detected]",
            "    📄 main.py",
            "  🗂 src",
            "    🔗 loop -> [loop detected]",
            "    📄 main.py",
        ]

    def test_symlink_leaves_filtered_by_extension(self, tree_with_symlinks):
        root, has_symlinks = tree_with_symlinks
        if not has_symlinks:
            pytest.skip("Symlink creation not supported on this platform/environment")

        lines = listing(FilterConfig.create(desired_extensions=["py"]), root)
        assert not any("🔗" in line for line in lines)
