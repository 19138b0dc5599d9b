import gzip
import io
import typing
import unittest

import requests
from urllib3.response import HTTPResponse

from ab_post.converter import ResponseStream, ResponseType, convert, owns_response


def make_response(body: bytes, headers: dict[str, str] | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = 200
    response.url = "http://example.test/"
    response.raw = HTTPResponse(
        body=io.BytesIO(body),
        headers=headers or {},
        status=200,
        preload_content=False,
        decode_content=True,
    )
    return response


class TestResponseTypeResolve(unittest.TestCase):
    """测试 ResponseType.resolve"""

    def test_members_and_names(self):
        self.assertIs(ResponseType.resolve(ResponseType.TEXT), ResponseType.TEXT)
        self.assertIs(ResponseType.resolve("BYTE_ARRAY"), ResponseType.BYTE_ARRAY)
        self.assertIs(ResponseType.resolve("stream"), ResponseType.STREAM)

    def test_python_types(self):
        self.assertIs(ResponseType.resolve(str), ResponseType.TEXT)
        self.assertIs(ResponseType.resolve(bytearray), ResponseType.BYTE_ARRAY)
        self.assertIs(ResponseType.resolve(bytes), ResponseType.BYTE_STRING)
        self.assertIs(ResponseType.resolve(io.BufferedReader), ResponseType.STREAM)
        self.assertIs(ResponseType.resolve(io.IOBase), ResponseType.STREAM)
        self.assertIs(ResponseType.resolve(typing.BinaryIO), ResponseType.STREAM)

    def test_unsupported(self):
        for target in (dict, int, "xml", None, 42):
            with self.subTest(target=target):
                self.assertIsNone(ResponseType.resolve(target))


class TestConvert(unittest.TestCase):
    """测试 convert 函数"""

    def test_text(self):
        self.assertEqual(convert(ResponseType.TEXT, make_response("你好".encode("utf-8"))), "你好")

    def test_byte_array(self):
        data = convert(ResponseType.BYTE_ARRAY, make_response(b"\x00\x01\x02"))
        self.assertIsInstance(data, bytearray)
        self.assertEqual(data, bytearray(b"\x00\x01\x02"))

    def test_byte_string(self):
        data = convert(ResponseType.BYTE_STRING, make_response(b"abc"))
        self.assertIs(type(data), bytes)
        self.assertEqual(data, b"abc")

    def test_unsupported_returns_none(self):
        self.assertIsNone(convert(None, make_response(b"abc")))

    def test_gzip_content_is_decoded(self):
        response = make_response(gzip.compress(b"zipped"), {"Content-Encoding": "gzip"})
        self.assertEqual(convert(ResponseType.TEXT, response), "zipped")

    def test_invalid_utf8_raises(self):
        with self.assertRaises(UnicodeDecodeError):
            convert(ResponseType.TEXT, make_response(b"\xff\xfe"))


class TestResponseStream(unittest.TestCase):
    """测试字节流目标"""

    def test_stream_reads_lazily_and_owns_response(self):
        response = make_response(b"0123456789")
        stream = convert(ResponseType.STREAM, response)
        self.assertTrue(owns_response(stream))
        self.assertIsInstance(stream.raw, ResponseStream)
        self.assertEqual(stream.read(4), b"0123")
        self.assertEqual(stream.read(), b"456789")
        self.assertEqual(stream.read(), b"")
        stream.close()
        self.assertTrue(stream.closed)
        self.assertTrue(response.raw.closed)

    def test_stream_decodes_gzip(self):
        response = make_response(gzip.compress(b"streamed"), {"Content-Encoding": "gzip"})
        with convert(ResponseType.STREAM, response) as stream:
            self.assertEqual(stream.read(), b"streamed")

    def test_read_after_close(self):
        stream = ResponseStream(make_response(b"abc"))
        stream.close()
        with self.assertRaises(ValueError):
            stream.read()

    def test_owns_response_false_for_buffers(self):
        self.assertFalse(owns_response(b"abc"))
        self.assertFalse(owns_response(io.BufferedReader(io.BytesIO(b"abc"))))
        self.assertFalse(owns_response(None))
