"""Unit tests for the transport request descriptor and reply normalization."""

import unittest
from unittest.mock import MagicMock

import httpx

from feather.client.errors import InvalidResponse, UnknownError
from feather.client.http import Header, Method
from feather.client.httpx.transport import HttpxTransport
from feather.client.request import Request, normalize_reply


class RecordingTransport:
    transport_errors = (OSError,)

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def send(self, method, url, headers, body):
        self.calls.append((method, url, headers, body))
        if self.error is not None:
            raise self.error
        return self.reply


def _mock_transport(handler):
    return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestRequest(unittest.TestCase):
    def test_header_items_keep_order_and_duplicates(self):
        request = Request(
            url="https://api.example.com/todos",
            headers=[Header.custom("X-A", "1"), Header.authorization("t"), Header.custom("X-A", "2")],
        )
        self.assertEqual(request.header_items(), [("X-A", "1"), ("Authorization", "Bearer t"), ("X-A", "2")])

    def test_headers_stored_as_tuple(self):
        request = Request(url="https://api.example.com", headers=[Header.custom("a", "b")])
        self.assertIsInstance(request.headers, tuple)

    def test_method_from_string(self):
        self.assertIs(Request(url="https://api.example.com", method="POST").method, Method.POST)

    def test_is_immutable(self):
        request = Request(url="https://api.example.com")
        with self.assertRaises(AttributeError):
            request.url = "https://other.example.com"


class TestNormalizeReply(unittest.TestCase):
    def test_httpx_response(self):
        reply = httpx.Response(201, headers={"X-Custom": "value"}, content=b'{"a": 1}')
        response = normalize_reply(reply)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.headers["X-Custom"], "value")
        self.assertEqual(response.data, b'{"a": 1}')

    def test_empty_body_is_absent(self):
        response = normalize_reply(httpx.Response(404))
        self.assertEqual(response.status_code, 404)
        self.assertIsNone(response.data)

    def test_non_text_headers_are_dropped(self):
        reply = httpx.Response(200, headers=[(b"X-Text", b"ok"), (b"X-Binary", b"\xff\xfe")])
        response = normalize_reply(reply)
        self.assertEqual(response.headers["X-Text"], "ok")
        self.assertNotIn("X-Binary", response.headers)

    def test_repeated_headers_are_combined(self):
        reply = httpx.Response(200, headers=[("Set-Cookie", "a=1"), ("X-One", "x"), ("Set-Cookie", "b=2")])
        response = normalize_reply(reply)
        self.assertEqual(response.headers["Set-Cookie"], "a=1, b=2")
        self.assertEqual(response.headers["X-One"], "x")

    def test_mapping_headers(self):
        reply = MagicMock(spec=["status_code", "headers", "content"])
        reply.status_code = 200
        reply.headers = {"Content-Type": "application/json", "X-Count": 3}
        reply.content = b""
        response = normalize_reply(reply)
        self.assertEqual(response.headers, {"Content-Type": "application/json"})

    def test_missing_status_code_raises(self):
        with self.assertRaises(InvalidResponse):
            normalize_reply(object())

    def test_non_integer_status_code_raises(self):
        reply = MagicMock(spec=["status_code", "headers", "content"])
        reply.status_code = "200"
        with self.assertRaises(InvalidResponse):
            normalize_reply(reply)


class TestPerform(unittest.IsolatedAsyncioTestCase):
    async def test_passes_request_to_transport(self):
        transport = RecordingTransport(reply=httpx.Response(200))
        request = Request(
            url="https://api.example.com/todos",
            method=Method.PUT,
            headers=[Header.custom("X-A", "1")],
            body=b"{}",
        )
        await request.perform(transport)
        self.assertEqual(transport.calls, [("PUT", "https://api.example.com/todos", [("X-A", "1")], b"{}")])

    async def test_transport_failure_is_unknown_error(self):
        cause = ConnectionRefusedError("refused")
        transport = RecordingTransport(error=cause)
        with self.assertRaises(UnknownError) as cm:
            await Request(url="https://api.example.com").perform(transport)
        self.assertIs(cm.exception.cause, cause)
        self.assertIs(cm.exception.__cause__, cause)

    async def test_other_exceptions_propagate(self):
        transport = RecordingTransport(error=RuntimeError("bug"))
        with self.assertRaises(RuntimeError):
            await Request(url="https://api.example.com").perform(transport)

    async def test_invalid_reply(self):
        transport = RecordingTransport(reply="not a response")
        with self.assertRaises(InvalidResponse):
            await Request(url="https://api.example.com").perform(transport)

    async def test_status_codes_are_not_interpreted(self):
        for status in (200, 401, 404, 500):
            with self.subTest(status=status):
                transport = RecordingTransport(reply=httpx.Response(status))
                response = await Request(url="https://api.example.com").perform(transport)
                self.assertEqual(response.status_code, status)

    async def test_httpx_transport_sends_headers_in_order(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["headers"] = request.headers.get_list("X-A")
            seen["body"] = request.content
            return httpx.Response(200, headers={"Set-Cookie": "a=b"}, content=b"[1, 2]")

        async with _mock_transport(handler) as transport:
            request = Request(
                url="https://api.example.com/todos?page=1",
                method=Method.POST,
                headers=[Header.custom("X-A", "1"), Header.custom("X-A", "2")],
                body=b'{"title": "t"}',
            )
            response = await request.perform(transport)

        self.assertEqual(seen["method"], "POST")
        self.assertEqual(seen["url"], "https://api.example.com/todos?page=1")
        self.assertEqual(seen["headers"], ["1", "2"])
        self.assertEqual(seen["body"], b'{"title": "t"}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["Set-Cookie"], "a=b")
        self.assertEqual(response.data, b"[1, 2]")

    async def test_httpx_connect_error_is_unknown_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with _mock_transport(handler) as transport:
            with self.assertRaises(UnknownError) as cm:
                await Request(url="https://api.example.com/todos").perform(transport)
        self.assertIsInstance(cm.exception.cause, httpx.ConnectError)


if __name__ == "__main__":
    unittest.main()
