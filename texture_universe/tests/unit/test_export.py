"""
Unit tests for tex_io/export.py.

Acceptance criteria:
- One <hex>.png per prototype, named by fingerprint
- Written PNGs decode back to the prototype pixels
- Per-artifact failures collected, never raised, nothing rolled back
"""

import numpy as np
from PIL import Image as PILImage

from tex_core.pixel_hash import hash_tile
from tex_io.errors import ExportError
from tex_io.export import artifact_name, write_image_files


def prototypes(count, size=4):
    rng = np.random.default_rng(count)
    tiles = [rng.integers(0, 256, (size, size, 4), dtype=np.uint8) for _ in range(count)]
    return {hash_tile(t): t for t in tiles}


class TestWriteImageFiles:

    def test_writes_one_file_per_prototype(self, tmp_path):
        protos = prototypes(3)
        result = write_image_files(protos, tmp_path / "images")

        assert result.ok
        names = sorted(p.name for p in (tmp_path / "images").iterdir())
        assert names == sorted(artifact_name(fp) for fp in protos)
        assert sorted(result.written) == sorted(tmp_path / "images" / n for n in names)

    def test_png_content_matches_prototype(self, tmp_path):
        protos = prototypes(2)
        write_image_files(protos, tmp_path)
        for fingerprint, tile in protos.items():
            with PILImage.open(tmp_path / artifact_name(fingerprint)) as img:
                assert img.mode == "RGBA"
                assert np.array_equal(np.asarray(img), tile)

    def test_existing_directory_is_fine(self, tmp_path):
        (tmp_path / "images").mkdir()
        assert write_image_files(prototypes(1), tmp_path / "images").ok

    def test_empty_registry(self, tmp_path):
        result = write_image_files({}, tmp_path / "images")
        assert result.ok and result.written == []
        assert (tmp_path / "images").is_dir()

    def test_unwritable_directory_reports_every_artifact(self, tmp_path):
        blocker = tmp_path / "images"
        blocker.write_text("a file, not a directory")

        protos = prototypes(2)
        result = write_image_files(protos, blocker)

        assert not result.ok
        assert result.written == []
        assert len(result.failures) == 2
        assert all(isinstance(e, ExportError) for e in result.failures)
        assert {e.fingerprint for e in result.failures} == set(protos)

    def test_partial_failure_keeps_written_files(self, tmp_path, monkeypatch):
        protos = prototypes(3)
        failing = sorted(protos)[1]

        import tex_io.export as export

        original = export.write_tile_png

        def flaky(tile, path):
            if path.name == artifact_name(failing):
                raise OSError("disk full")
            original(tile, path)

        monkeypatch.setattr(export, "write_tile_png", flaky)
        result = write_image_files(protos, tmp_path)

        assert len(result.written) == 2
        assert [e.fingerprint for e in result.failures] == [failing]
        assert "disk full" in str(result.failures[0])
        assert all(p.exists() for p in result.written)


class TestArtifactName:

    def test_hex_without_padding(self):
        assert artifact_name(0x00AB) == "ab.png"
        assert artifact_name(0xCBF29CE484222325) == "cbf29ce484222325.png"
