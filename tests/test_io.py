"""Tests for atomic artifact writes."""

from pathlib import Path

import pytest

from spec_compiler.utils.io import read_yaml, write_artifacts, write_text, write_yaml


class TestAtomicWrites:
    def test_write_text_creates_parent_dirs(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "dir" / "file.md"

        write_text(target, "hello\n")

        assert target.read_text(encoding="utf-8") == "hello\n"

    def test_write_replaces_whole_file(self, tmp_path: Path) -> None:
        target = tmp_path / "file.md"
        target.write_text("a much longer original body\n", encoding="utf-8")

        write_text(target, "short\n")

        assert target.read_text(encoding="utf-8") == "short\n"

    def test_failed_batch_replaces_nothing(self, tmp_path: Path) -> None:
        first = tmp_path / "first.yaml"
        second = tmp_path / "second.yaml"
        first.write_text("original\n", encoding="utf-8")

        with pytest.raises(TypeError):
            write_artifacts({first: "updated\n", second: 123})

        assert first.read_text(encoding="utf-8") == "original\n"
        assert not second.exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["first.yaml"]

    def test_yaml_keeps_key_order(self, tmp_path: Path) -> None:
        target = tmp_path / "doc.yaml"

        write_yaml(target, {"zeta": 1, "alpha": ["yes", "no"]})

        assert target.read_text(encoding="utf-8").startswith("zeta: 1\n")
        assert read_yaml(target) == {"zeta": 1, "alpha": ["yes", "no"]}
