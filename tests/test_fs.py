"""Test atomic filesystem operations.

Tests for pixelcanvas.utils.fs:
    - ensure_dir creates parents
    - atomic_write_bytes leaves no tmp file behind
    - atomic_write_bytes wraps failures in RuntimeError
    - atomic_save_image writes a readable PNG
    - load_yaml roundtrip, missing file, parse error

Run:
    pytest tests/test_fs.py -v
"""

import numpy as np
import pytest
import yaml
from PIL import Image

from pixelcanvas.utils import fs


def test_ensure_dir(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    result = fs.ensure_dir(target)
    assert result == target
    assert target.is_dir()
    # Idempotent
    fs.ensure_dir(target)


def test_atomic_write_bytes(tmp_path):
    path = tmp_path / "out" / "data.bin"
    fs.atomic_write_bytes(path, b"\x00\x01\x02")
    assert path.read_bytes() == b"\x00\x01\x02"
    assert not (tmp_path / "out" / "data.bin.tmp").exists()


def test_atomic_write_bytes_overwrites(tmp_path):
    path = tmp_path / "data.bin"
    fs.atomic_write_bytes(path, b"old")
    fs.atomic_write_bytes(path, b"new")
    assert path.read_bytes() == b"new"


def test_atomic_write_bytes_failure(tmp_path):
    # Target is an existing directory, so the final rename fails
    target = tmp_path / "taken"
    target.mkdir()
    (target / "child").write_text("x")
    with pytest.raises(RuntimeError):
        fs.atomic_write_bytes(target, b"data")
    assert not (tmp_path / "taken.tmp").exists()


def test_atomic_save_image(tmp_path):
    img = np.zeros((4, 6, 3), dtype=np.uint8)
    img[1, 2] = (255, 128, 0)
    path = tmp_path / "img.png"
    fs.atomic_save_image(img, path)
    with Image.open(path) as loaded:
        assert loaded.size == (6, 4)
        assert loaded.getpixel((2, 1)) == (255, 128, 0)
    assert not (tmp_path / "img.tmp.png").exists()


def test_atomic_save_image_clips_non_uint8(tmp_path):
    img = np.full((2, 2), 300.0)
    path = tmp_path / "gray.png"
    fs.atomic_save_image(img, path)
    with Image.open(path) as loaded:
        assert loaded.getpixel((0, 0)) == 255


def test_load_yaml_roundtrip(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.safe_dump({"size": 10, "colors": ["#000000"]}))
    assert fs.load_yaml(path) == {"size": 10, "colors": ["#000000"]}


def test_load_yaml_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert fs.load_yaml(path) == {}


def test_load_yaml_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        fs.load_yaml(tmp_path / "nope.yaml")


def test_load_yaml_parse_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("size: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        fs.load_yaml(path)
