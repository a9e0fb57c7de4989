"""
Unit tests for the /files handler.
"""

from minihttp.handlers.files import FileHandler
from minihttp.http.request import HTTPRequest
from minihttp.http.response import HTTPStatus


def make_request(target: str) -> HTTPRequest:
    return HTTPRequest(method="GET", target=target)


class TestFileHandler:
    """Tests for FileHandler."""

    def test_serves_file_bytes(self, files_dir):
        handler = FileHandler(str(files_dir))
        response = handler.handle(make_request("/files/blob.bin"))

        assert response.status == HTTPStatus.OK
        assert response.content_type == "application/octet-stream"
        assert response.body == bytes(range(256))
        assert b"Content-Length: 256\r\n" in response.to_bytes()

    def test_missing_file_is_not_found(self, files_dir):
        handler = FileHandler(str(files_dir))
        response = handler.handle(make_request("/files/missing.txt"))

        assert response.status == HTTPStatus.NOT_FOUND
        assert response.body == b""

    def test_missing_file_lenient(self, files_dir):
        handler = FileHandler(str(files_dir), lenient=True)
        response = handler.handle(make_request("/files/missing.txt"))

        assert response.status == HTTPStatus.OK
        assert response.content_type == "application/octet-stream"
        assert response.body == b""

    def test_files_without_name(self, files_dir):
        """The base directory itself cannot be read as a file."""
        handler = FileHandler(str(files_dir))

        assert handler.handle(make_request("/files/")).status == HTTPStatus.NOT_FOUND
        assert handler.handle(make_request("/files")).status == HTTPStatus.NOT_FOUND

    def test_no_directory_configured(self):
        handler = FileHandler(None)

        assert handler.handle(make_request("/files/hello.txt")).status == HTTPStatus.NOT_FOUND

    def test_no_directory_configured_lenient(self):
        handler = FileHandler(None, lenient=True)
        response = handler.handle(make_request("/files/hello.txt"))

        assert response.status == HTTPStatus.OK
        assert response.body == b""

    def test_path_traversal_blocked(self, tmp_path):
        public = tmp_path / "public"
        public.mkdir()
        (tmp_path / "secret.txt").write_bytes(b"secret")

        handler = FileHandler(str(public))
        response = handler.handle(make_request("/files/../secret.txt"))

        assert response.status == HTTPStatus.FORBIDDEN
        assert response.body == b""

    def test_nested_file(self, files_dir):
        (files_dir / "sub").mkdir()
        (files_dir / "sub" / "inner.txt").write_bytes(b"inner")

        handler = FileHandler(str(files_dir))
        response = handler.handle(make_request("/files/sub/inner.txt"))

        assert response.body == b"inner"

    def test_filename_with_nul_byte_is_not_found(self, files_dir):
        handler = FileHandler(str(files_dir))
        response = handler.handle(make_request("/files/hello\x00.txt"))

        assert response.status == HTTPStatus.NOT_FOUND
        assert response.body == b""

    def test_filename_with_nul_byte_lenient(self, files_dir):
        handler = FileHandler(str(files_dir), lenient=True)
        response = handler.handle(make_request("/files/a\x00b"))

        assert response.status == HTTPStatus.OK
        assert response.content_type == "application/octet-stream"
        assert response.body == b""

    def test_read_errors_from_collaborator(self, files_dir):
        def failing_read(path):
            raise PermissionError(path)

        handler = FileHandler(str(files_dir), read_bytes=failing_read)

        assert handler.handle(make_request("/files/hello.txt")).status == HTTPStatus.NOT_FOUND
