"""Tests for lectern.build.sources — source discovery and grouping."""

from pathlib import Path

import pytest

from lectern.build.sources import discover, expand, parse_info
from lectern.errors import ConfigurationError
from lectern.routing.route import DEFAULT_API_NAME, SourceType


def _write(root: Path, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"# {name}\n")


class TestParseInfo:
    def test_extension(self) -> None:
        info = parse_info("lib/*.py")
        assert info.source_type is SourceType.DOC
        assert info.forced is False

    def test_forced_parser(self) -> None:
        info = parse_info("LICENSE:md")
        assert info.src_path == "LICENSE"
        assert info.source_type is SourceType.TEXT
        assert info.forced is True

    def test_unknown_suffix_is_part_of_path(self) -> None:
        info = parse_info("C:notes")
        assert info.src_path == "C:notes"
        assert info.forced is False

    def test_unknown_extension(self) -> None:
        assert parse_info("data.csv").source_type is None


class TestExpand:
    def test_recursive_sorted_files_only(self, tmp_path: Path) -> None:
        _write(tmp_path, "b.py", "a.py", "pkg/c.py")
        files = expand("**/*.py", tmp_path)
        assert [f.name for f in files] == ["a.py", "b.py", "c.py"]
        assert all(f.is_absolute() for f in files)


class TestDiscover:
    def test_groups_and_narratives(self, tmp_path: Path) -> None:
        _write(tmp_path, "lib/core.py", "web/client.py", "README.md", "docs/guide.html")
        sources = discover(
            ["lib/*.py", {"web": "web/*.py"}, "README.md", {"guide": ["docs/guide.html"]}],
            tmp_path,
        )
        assert list(sources.doc_groups) == [DEFAULT_API_NAME, "web"]
        assert [p.name for p in sources.doc_groups[DEFAULT_API_NAME]] == ["core.py"]
        assert [(n.name, n.source_type) for n in sources.narratives] == [
            ("readme", SourceType.TEXT),
            ("guide", SourceType.MARKUP),
        ]
        assert sources.doc_file_count == 2

    def test_default_group_always_present(self, tmp_path: Path) -> None:
        _write(tmp_path, "README.md")
        sources = discover(["README.md"], tmp_path)
        assert sources.doc_groups == {DEFAULT_API_NAME: []}

    def test_forced_parser_on_file(self, tmp_path: Path) -> None:
        _write(tmp_path, "LICENSE")
        sources = discover(["LICENSE:md"], tmp_path)
        assert [(n.name, n.source_type) for n in sources.narratives] == [("license", SourceType.TEXT)]

    def test_same_file_twice_is_queued_once(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        _write(tmp_path, "README.md", "lib/a.py")
        sources = discover(["README.md", "*.md", "lib/a.py", "lib/*.py"], tmp_path)
        assert len(sources.narratives) == 1
        assert len(sources.doc_groups[DEFAULT_API_NAME]) == 1
        assert "Duplicate ignored" in caplog.text

    def test_same_name_different_files_left_to_builder(self, tmp_path: Path) -> None:
        _write(tmp_path, "a/CHANGELOG.md", "b/changelog.md")
        sources = discover(["a/*.md", "b/*.md"], tmp_path)
        assert [n.name for n in sources.narratives] == ["changelog", "changelog"]

    def test_unsupported_files_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        _write(tmp_path, "data.csv")
        sources = discover(["*.csv"], tmp_path)
        assert sources.narratives == []
        assert "Unsupported source ignored" in caplog.text

    def test_no_match_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        discover(["missing/*.py"], tmp_path)
        assert "No files matched" in caplog.text

    def test_invalid_entry(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            discover([42], tmp_path)  # type: ignore[list-item]

    def test_invalid_group_value(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="web"):
            discover([{"web": 3}], tmp_path)
