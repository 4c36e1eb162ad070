"""Tests for process_images.download module."""

import base64
import io
from unittest.mock import Mock, patch

import pytest
import requests
from PIL import Image

from process_images.download import (
    ImageFetchError,
    _looks_like_svg,
    create_placeholder,
    download_and_process,
    download_image,
    open_image,
    placeholder_width,
)


def _image_bytes(width: int, height: int, fmt: str) -> bytes:
    buffer = io.BytesIO()
    mode = "P" if fmt == "GIF" else "RGB"
    Image.new(mode, (width, height)).save(buffer, format=fmt)
    return buffer.getvalue()


def _decode_data_uri(uri: str) -> Image.Image:
    prefix = "data:image/jpeg;base64,"
    assert uri.startswith(prefix)
    return Image.open(io.BytesIO(base64.b64decode(uri[len(prefix):])))


class TestDownloadImage:
    @patch("process_images.download.requests.get")
    def test_returns_content(self, mock_get) -> None:
        mock_get.return_value = Mock(content=b"bytes", status_code=200)
        assert download_image("https://example.com/a.png") == b"bytes"

    @patch("process_images.download.requests.get")
    def test_http_error_raises_with_status(self, mock_get) -> None:
        response = Mock(status_code=403)
        response.raise_for_status.side_effect = requests.HTTPError("403")
        mock_get.return_value = response

        with pytest.raises(ImageFetchError) as exc_info:
            download_image("https://example.com/a.png")
        assert exc_info.value.status_code == 403


class TestPlaceholderWidth:
    def test_minimum_width(self) -> None:
        assert placeholder_width(1.0) == 10
        assert placeholder_width(0.5) == 10

    def test_wide_images(self) -> None:
        assert placeholder_width(4.0) == 12
        assert placeholder_width(5.9) == 17


class TestCreatePlaceholder:
    def test_returns_jpeg_data_uri_with_width(self) -> None:
        image = open_image(_image_bytes(40, 20, "PNG"))

        result = create_placeholder(image, 10)

        placeholder = _decode_data_uri(result)
        assert placeholder.format == "JPEG"
        assert placeholder.size == (10, 5)


class TestLooksLikeSvg:
    def test_detects_svg_documents(self) -> None:
        assert _looks_like_svg(b"  <svg xmlns='http://www.w3.org/2000/svg'></svg>")
        assert _looks_like_svg(b"<?xml version='1.0'?><svg></svg>")

    def test_raster_is_not_svg(self) -> None:
        assert not _looks_like_svg(_image_bytes(2, 2, "PNG"))


@patch("process_images.download.upload_image")
@patch("process_images.download.download_image")
class TestDownloadAndProcess:
    def test_builds_enrichment_fields(self, mock_download, mock_upload) -> None:
        data = _image_bytes(40, 20, "PNG")
        mock_download.return_value = data
        mock_upload.return_value = "https://res.cloudinary.com/demo/abc"

        result = download_and_process("p1", "https://example.com/a.png", "post")

        assert result["image"] == "https://res.cloudinary.com/demo/abc"
        assert result["ratio"] == 2.0
        assert _decode_data_uri(result["placeholder"]).size == (10, 5)
        mock_upload.assert_called_once_with("p1", data, False, "post", "https://example.com/a.png")

    def test_gif_is_flagged_for_passthrough(self, mock_download, mock_upload) -> None:
        data = _image_bytes(30, 30, "GIF")
        mock_download.return_value = data
        mock_upload.side_effect = lambda item_id, buf, is_gif, image_type, url: url

        result = download_and_process("p1", "https://example.com/anim.gif", "post")

        assert result["image"] == "https://example.com/anim.gif"
        assert mock_upload.call_args.args[2] is True

    def test_upload_failure_fails_routine(self, mock_download, mock_upload) -> None:
        mock_download.return_value = _image_bytes(10, 10, "PNG")
        mock_upload.side_effect = RuntimeError("upload failed")

        with pytest.raises(RuntimeError, match="upload failed"):
            download_and_process("p1", "https://example.com/a.png", "post")

    @patch("process_images.download.create_placeholder")
    def test_placeholder_failure_fails_routine(
        self, mock_placeholder, mock_download, mock_upload
    ) -> None:
        mock_download.return_value = _image_bytes(10, 10, "PNG")
        mock_upload.return_value = "https://res.cloudinary.com/demo/abc"
        mock_placeholder.side_effect = OSError("encode failed")

        with pytest.raises(OSError, match="encode failed"):
            download_and_process("p1", "https://example.com/a.png", "post")

    def test_undecodable_bytes_raise(self, mock_download, mock_upload) -> None:
        mock_download.return_value = b"not an image"

        with pytest.raises(Exception):
            download_and_process("p1", "https://example.com/a.png", "post")
        mock_upload.assert_not_called()
