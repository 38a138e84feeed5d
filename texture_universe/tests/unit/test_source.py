"""
Unit tests for tex_io/source.py.

Every load failure surfaces as a LoadError with a kind.
"""

import os

import numpy as np
import pytest
from PIL import Image as PILImage

from tex_io.errors import LoadError
from tex_io.source import describe_image, load_source_image


def write_png(path, array):
    PILImage.fromarray(array).save(path, format="PNG")
    return path


class TestLoadSourceImage:

    def test_rgba_round_trip(self, tmp_path):
        array = np.random.default_rng(1).integers(0, 256, (6, 10, 4), dtype=np.uint8)
        path = write_png(tmp_path / "src.png", array)
        loaded = load_source_image(path)
        assert loaded.shape == (6, 10, 4)
        assert np.array_equal(loaded, array)

    def test_rgb_png_is_opaque(self, tmp_path):
        array = np.random.default_rng(2).integers(0, 256, (4, 4, 3), dtype=np.uint8)
        loaded = load_source_image(write_png(tmp_path / "rgb.png", array))
        assert np.array_equal(loaded[..., :3], array)
        assert loaded[..., 3].min() == 255

    def test_accepts_str_path(self, tmp_path):
        array = np.zeros((2, 2, 4), dtype=np.uint8)
        path = write_png(tmp_path / "s.png", array)
        assert load_source_image(str(path)).shape == (2, 2, 4)

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            load_source_image(tmp_path / "nope.png")
        assert exc_info.value.kind == "not_found"
        assert "does not exist" in str(exc_info.value)

    def test_garbage_content(self, tmp_path):
        path = tmp_path / "bad.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(LoadError) as exc_info:
            load_source_image(path)
        assert exc_info.value.kind == "malformed"

    def test_truncated_png(self, tmp_path):
        array = np.random.default_rng(3).integers(0, 256, (64, 64, 4), dtype=np.uint8)
        path = write_png(tmp_path / "full.png", array)
        data = path.read_bytes()
        path.write_bytes(data[: len(data) // 2])
        with pytest.raises(LoadError) as exc_info:
            load_source_image(path)
        assert exc_info.value.kind == "malformed"

    def test_non_png_format_rejected(self, tmp_path):
        path = tmp_path / "img.bmp"
        PILImage.new("RGB", (4, 4)).save(path, format="BMP")
        with pytest.raises(LoadError) as exc_info:
            load_source_image(path)
        assert exc_info.value.kind == "malformed"

    def test_directory(self, tmp_path):
        with pytest.raises(LoadError):
            load_source_image(tmp_path)

    @pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="root can read any file")
    def test_unreadable_file(self, tmp_path):
        path = write_png(tmp_path / "locked.png", np.zeros((2, 2, 4), dtype=np.uint8))
        path.chmod(0)
        try:
            with pytest.raises(LoadError) as exc_info:
                load_source_image(path)
            assert exc_info.value.kind == "permission"
        finally:
            path.chmod(0o644)


class TestDescribeImage:

    def test_bounds(self, tmp_path):
        path = write_png(tmp_path / "b.png", np.zeros((20, 30, 4), dtype=np.uint8))
        assert describe_image(path) == "(0,0)-(30,20)"

    def test_missing(self, tmp_path):
        with pytest.raises(LoadError):
            describe_image(tmp_path / "missing.png")
