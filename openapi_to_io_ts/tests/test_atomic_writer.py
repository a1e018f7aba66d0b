import pytest

from openapi_to_io_ts.pipeline import AtomicWriter, OutputConfig, OutputMode, WriteError


class TestAtomicWriter:
    def test_writes_content(self, tmp_path):
        target = tmp_path / "file.ts"
        AtomicWriter().write(target, "export const A = t.string\n")
        assert target.read_text(encoding="utf-8") == "export const A = t.string\n"

    def test_creates_parent_directories(self, tmp_path):
        target = tmp_path / "src" / "generated" / "file.ts"
        AtomicWriter().write(target, "x")
        assert target.read_text() == "x"

    def test_force_mode_overwrites(self, tmp_path):
        target = tmp_path / "file.ts"
        target.write_text("old")
        AtomicWriter(OutputConfig(mode=OutputMode.FORCE)).write(target, "new")
        assert target.read_text() == "new"

    def test_error_mode_refuses_existing_file(self, tmp_path):
        target = tmp_path / "file.ts"
        target.write_text("old")
        with pytest.raises(WriteError, match="already exists"):
            AtomicWriter(OutputConfig(mode=OutputMode.ERROR_IF_EXISTS)).write(target, "new")
        assert target.read_text() == "old"

    def test_error_mode_writes_new_file(self, tmp_path):
        target = tmp_path / "file.ts"
        AtomicWriter(OutputConfig(mode=OutputMode.ERROR_IF_EXISTS)).write(target, "new")
        assert target.read_text() == "new"

    def test_non_atomic_write(self, tmp_path):
        target = tmp_path / "file.ts"
        AtomicWriter(OutputConfig(atomic_write=False)).write(target, "plain")
        assert target.read_text() == "plain"

    def test_failed_write_leaves_no_temporary_file(self, tmp_path):
        target = tmp_path / "file.ts"
        target.mkdir()
        with pytest.raises(WriteError, match="failed to save project"):
            AtomicWriter().write(target, "x")
        assert [p.name for p in tmp_path.iterdir()] == ["file.ts"]
