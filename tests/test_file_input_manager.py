import base64

import pytest
from PIL import Image

from cinescape.api.multimodal import file_input_manager
from cinescape.api.multimodal.file_input_manager import (
    decode_data_uri,
    describe_image,
    load_reference_image,
    save_data_uri,
)
from cinescape.core.errors import ValidationError

from conftest import png_base64


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "reference.png"
    Image.new("RGB", (32, 18), color=(40, 60, 200)).save(path, format="PNG")
    return path


@pytest.fixture
def jpeg_file(tmp_path):
    path = tmp_path / "reference.jpg"
    Image.new("RGB", (16, 9), color=(200, 60, 40)).save(path, format="JPEG")
    return path


def test_load_png_path(png_file):
    data_uri = load_reference_image(str(png_file))
    assert data_uri.startswith("data:image/png;base64,")
    assert decode_data_uri(data_uri) == png_file.read_bytes()


def test_load_jpeg_uses_extension_mime(jpeg_file):
    assert load_reference_image(str(jpeg_file)).startswith("data:image/jpeg;base64,")


def test_load_file_url(png_file):
    data_uri = load_reference_image(png_file.as_uri())
    assert data_uri.startswith("data:image/png;base64,")


def test_remote_file_url_rejected():
    with pytest.raises(ValidationError):
        load_reference_image("file://example.com/etc/image.png")


def test_data_uri_passes_through():
    data_uri = "data:image/png;base64," + png_base64()
    assert load_reference_image(data_uri) == data_uri


def test_undecodable_data_uri_rejected():
    with pytest.raises(ValidationError, match="Unreadable"):
        load_reference_image("data:image/png;base64,AAAA")


def test_invalid_base64_data_uri_rejected():
    with pytest.raises(ValidationError, match="not valid base64"):
        load_reference_image("data:image/png;base64,@@@@")


def test_raw_base64_without_paths():
    raw = png_base64()
    assert load_reference_image(raw, allow_paths=False) == raw


def test_paths_not_read_when_disallowed(png_file):
    with pytest.raises(ValidationError):
        load_reference_image(str(png_file), allow_paths=False)


def test_missing_file(tmp_path):
    with pytest.raises(ValidationError, match="not found"):
        load_reference_image(str(tmp_path / "missing.png"))


def test_empty_reference():
    with pytest.raises(ValidationError):
        load_reference_image("  ")


def test_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image")
    with pytest.raises(ValidationError, match="Unsupported file type"):
        load_reference_image(str(path))


def test_corrupt_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")
    with pytest.raises(ValidationError, match="Unreadable"):
        load_reference_image(str(path))


def test_oversized_file(png_file, monkeypatch):
    monkeypatch.setattr(file_input_manager, "MAX_FILE_SIZE_BYTES", 10)
    with pytest.raises(ValidationError, match="max size"):
        load_reference_image(str(png_file))


def test_oversized_data_uri(monkeypatch):
    monkeypatch.setattr(file_input_manager, "MAX_FILE_SIZE_BYTES", 2)
    with pytest.raises(ValidationError, match="max size"):
        load_reference_image("data:image/png;base64,AAAAAAAA")


def test_describe_image_from_path_and_bytes(png_file):
    expected = {"format": "PNG", "width": 32, "height": 18}
    assert describe_image(str(png_file)) == expected
    assert describe_image(png_file.read_bytes()) == expected


def test_decode_rejects_invalid_base64():
    with pytest.raises(ValidationError):
        decode_data_uri("data:image/png;base64,@@@@")


def test_save_data_uri(tmp_path):
    payload = b"\x89PNG fake bytes"
    data_uri = "data:image/png;base64," + base64.b64encode(payload).decode("ascii")
    target = tmp_path / "out" / "cinescape-5100x3000.png"

    written = save_data_uri(data_uri, str(target))

    assert written == str(target)
    assert target.read_bytes() == payload
