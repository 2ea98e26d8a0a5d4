#!/usr/bin/env python3
"""
Tests for ipapi/core/client.py without touching the network.
"""

import asyncio
import ipaddress
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import aiohttp
import requests

from ipapi.core import client as client_mod
from ipapi.core.client import IpApiClient
from ipapi.core.errors import ParseError, TransportError
from ipapi.core.geo import NameAndCode
from ipapi.core.geo.data import default_fields
from ipapi.utils.config_manager import ConfigManager


PAYLOAD = {
    "status": "success",
    "country": "Germany",
    "countryCode": "DE",
    "region": "HE",
    "regionName": "Hesse",
    "city": "Frankfurt am Main",
    "lat": 50.1109,
    "lon": 8.68213,
    "query": "1.2.3.4",
}


class FakeResponse:
    def __init__(self, status: int = 200, body: bytes = b"") -> None:
        self.status = status
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def read(self) -> bytes:
        return self.body


class FakeSession:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True
        return False


class ClientTestBase(unittest.TestCase):
    def setUp(self) -> None:
        self.tempdir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.tempdir.name) / "settings.json"

    def tearDown(self) -> None:
        self.tempdir.cleanup()

    def make_client(self, settings=None, session=None) -> IpApiClient:
        if settings is not None:
            self.config_path.write_text(json.dumps(settings), encoding="utf-8")
        return IpApiClient(ConfigManager(str(self.config_path)), session=session)


class BuildUrlTests(ClientTestBase):
    def test_default_url_requests_all_mapped_fields(self) -> None:
        url = self.make_client().build_url("8.8.8.8")

        self.assertTrue(url.startswith("http://ip-api.com/json/8.8.8.8?fields="))
        fields = url.split("fields=", 1)[1].split(",")
        for key in ("query", "countryCode", "regionName", "lat", "lon", "as", "reverse", "mobile", "proxy"):
            self.assertIn(key, fields)

    def test_no_target_queries_own_address(self) -> None:
        client = self.make_client({"ipapi": {"fields": []}})

        self.assertEqual("http://ip-api.com/json/", client.build_url())
        self.assertEqual("http://ip-api.com/json/", client.build_url(""))

    def test_ip_address_objects_and_ipv6(self) -> None:
        client = self.make_client({"ipapi": {"fields": "query,country"}})

        self.assertEqual(
            "http://ip-api.com/json/2001:4860:4860::8888?fields=query,country",
            client.build_url(ipaddress.ip_address("2001:4860:4860::8888")),
        )

    def test_hostname_is_quoted(self) -> None:
        client = self.make_client({"ipapi": {"fields": []}})

        self.assertEqual("http://ip-api.com/json/a%20b%2Fc", client.build_url("a b/c"))

    def test_custom_endpoint_and_lang(self) -> None:
        client = self.make_client({
            "ipapi": {"endpoint": "https://pro.ip-api.com/json", "lang": "zh-CN", "fields": ["query"]}
        })

        self.assertEqual(
            "https://pro.ip-api.com/json/1.1.1.1?fields=query&lang=zh-CN",
            client.build_url("1.1.1.1"),
        )

    def test_invalid_timeout_falls_back_to_default(self) -> None:
        for timeout in ("soon", -1, 0, None):
            with self.subTest(timeout=timeout):
                client = self.make_client({"ipapi": {"timeout": timeout}})
                self.assertEqual(10.0, client.timeout)

        self.assertEqual(2.5, self.make_client({"ipapi": {"timeout": "2.5"}}).timeout)

    def test_wrongly_typed_settings_fall_back_to_defaults(self) -> None:
        client = self.make_client({
            "ipapi": {"endpoint": 123, "fields": 5, "lang": ["zh-CN"], "user_agent": 7}
        })

        self.assertEqual("http://ip-api.com/json/", client.endpoint)
        self.assertEqual(default_fields(), client.fields)
        self.assertIsNone(client.lang)
        self.assertEqual(IpApiClient.DEFAULT_USER_AGENT, client.user_agent)
        self.assertTrue(client.build_url("1.1.1.1").startswith("http://ip-api.com/json/1.1.1.1?fields="))

    def test_non_object_section_is_ignored(self) -> None:
        client = self.make_client({"ipapi": "http://example.com/"})

        self.assertEqual("http://ip-api.com/json/", client.endpoint)


class AsyncLookupTests(ClientTestBase, unittest.IsolatedAsyncioTestCase):
    async def test_lookup_maps_response(self) -> None:
        session = FakeSession(FakeResponse(200, json.dumps(PAYLOAD).encode("utf-8")))
        client = self.make_client({"ipapi": {"user_agent": "tests/1.0"}}, session=session)

        result = await client.lookup("1.2.3.4")

        self.assertEqual("1.2.3.4", result.query)
        self.assertEqual(NameAndCode("Germany", "DE"), result.country)
        self.assertIsNone(result.zip)
        url, kwargs = session.calls[0]
        self.assertEqual(client.build_url("1.2.3.4"), url)
        self.assertEqual({"User-Agent": "tests/1.0"}, kwargs["headers"])
        self.assertEqual(10.0, kwargs["timeout"].total)

    async def test_lookup_without_session_opens_and_closes_one(self) -> None:
        session = FakeSession(FakeResponse(200, json.dumps(PAYLOAD).encode("utf-8")))
        client = self.make_client()

        with mock.patch.object(client_mod.aiohttp, "ClientSession", return_value=session):
            result = await client.lookup("1.2.3.4")

        self.assertEqual("Hesse", result.region.name)
        self.assertTrue(session.closed)

    async def test_non_200_status_raises_transport_error(self) -> None:
        session = FakeSession(FakeResponse(429, b'{"message": "too many requests"}'))
        client = self.make_client(session=session)

        with self.assertRaises(TransportError) as ctx:
            await client.lookup("1.2.3.4")
        self.assertEqual(429, ctx.exception.status)

    async def test_client_error_is_wrapped(self) -> None:
        error = aiohttp.ClientConnectionError("connection refused")
        client = self.make_client(session=FakeSession(error=error))

        with self.assertRaises(TransportError) as ctx:
            await client.lookup("1.2.3.4")
        self.assertIs(error, ctx.exception.original)
        self.assertIs(error, ctx.exception.__cause__)

    async def test_timeout_is_wrapped(self) -> None:
        client = self.make_client(session=FakeSession(error=asyncio.TimeoutError()))

        with self.assertRaises(TransportError):
            await client.lookup("1.2.3.4")

    async def test_invalid_body_raises_parse_error(self) -> None:
        for body in (b"<html>rate limited</html>", b"[]", b'{"status": "success"}'):
            with self.subTest(body=body):
                client = self.make_client(session=FakeSession(FakeResponse(200, body)))
                with self.assertRaises(ParseError):
                    await client.lookup("1.2.3.4")


class SyncLookupTests(ClientTestBase):
    def fake_response(self, status_code=200, content=b""):
        response = mock.Mock()
        response.status_code = status_code
        response.content = content
        return response

    def test_lookup_sync_maps_response(self) -> None:
        client = self.make_client({"ipapi": {"timeout": 3}})
        response = self.fake_response(content=json.dumps(PAYLOAD).encode("utf-8"))

        with mock.patch.object(client_mod.requests, "get", return_value=response) as get:
            result = client.lookup_sync("1.2.3.4")

        self.assertEqual("Frankfurt am Main", result.city)
        get.assert_called_once_with(
            client.build_url("1.2.3.4"),
            timeout=3.0,
            headers={"User-Agent": IpApiClient.DEFAULT_USER_AGENT},
        )

    def test_request_exception_is_wrapped(self) -> None:
        client = self.make_client()
        error = requests.exceptions.ConnectionError("unreachable")

        with mock.patch.object(client_mod.requests, "get", side_effect=error):
            with self.assertRaises(TransportError) as ctx:
                client.lookup_sync("1.2.3.4")
        self.assertIs(error, ctx.exception.__cause__)

    def test_non_200_status_raises_transport_error(self) -> None:
        client = self.make_client()

        with mock.patch.object(client_mod.requests, "get", return_value=self.fake_response(503)):
            with self.assertRaises(TransportError) as ctx:
                client.lookup_sync("1.2.3.4")
        self.assertEqual(503, ctx.exception.status)

    def test_missing_query_raises_parse_error(self) -> None:
        client = self.make_client()
        response = self.fake_response(content=b'{"country": "Germany"}')

        with mock.patch.object(client_mod.requests, "get", return_value=response):
            with self.assertRaises(ParseError):
                client.lookup_sync("1.2.3.4")


if __name__ == "__main__":
    unittest.main()
