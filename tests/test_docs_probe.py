"""Tests for the docs.rs build status client."""

import asyncio

import pytest

aiohttp_mod = pytest.importorskip("aiohttp")

from aiohttp import web
from aiohttp import test_utils

from cratesite.docs.probe import DocsRsProbe, ProbeError, _latest_build_succeeded


class TestLatestBuildSucceeded:
    def test_first_build_succeeded(self):
        assert _latest_build_succeeded([{"build_status": True}, {"build_status": False}]) is True

    def test_first_build_failed(self):
        assert _latest_build_succeeded([{"build_status": False}, {"build_status": True}]) is False

    def test_empty_list(self):
        assert _latest_build_succeeded([]) is False

    def test_malformed_payloads(self):
        assert _latest_build_succeeded({"build_status": True}) is False
        assert _latest_build_succeeded(["ok"]) is False
        assert _latest_build_succeeded([{"build_status": "true"}]) is False


class TestUrls:
    def test_builds_url(self):
        probe = DocsRsProbe()
        assert probe.builds_url("serde", "1.0.0") == "https://docs.rs/crate/serde/1.0.0/builds.json"

    def test_documentation_url(self):
        probe = DocsRsProbe("https://docs.example.test")
        assert probe.documentation_url("serde", "1.0.0") == "https://docs.example.test/serde/1.0.0/"


def _run_against(handler, name="serde", version="1.0.0"):
    """Start a local docs server, probe it once and return the status."""

    async def _run():
        app = web.Application()
        app.router.add_get("/crate/{name}/{version}/builds.json", handler)
        server = test_utils.TestServer(app)
        await server.start_server()
        probe = DocsRsProbe(str(server.make_url("/")), timeout=5)
        try:
            return await probe.check_build_status(name, version)
        finally:
            await probe.stop()
            await server.close()

    return asyncio.run(_run())


def test_check_build_status_success():
    seen = {}

    async def handler(request):
        seen.update(request.match_info)
        return web.json_response([{"id": 1, "build_status": True}])

    status = _run_against(handler)
    assert status.build_succeeded is True
    assert seen == {"name": "serde", "version": "1.0.0"}


def test_check_build_status_failed_build():
    async def handler(request):
        return web.json_response([{"id": 2, "build_status": False}])

    assert _run_against(handler).build_succeeded is False


def test_check_build_status_http_error():
    async def handler(request):
        return web.Response(status=404)

    with pytest.raises(ProbeError):
        _run_against(handler)


def test_check_build_status_bad_json():
    async def handler(request):
        return web.Response(text="<html>", content_type="text/html")

    with pytest.raises(ProbeError):
        _run_against(handler)
