"""Tests for the HTTP adapter and server."""

import io
import zipfile

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from debug_bundle import __version__
from debug_bundle.bundle import ZipWriter
from debug_bundle.config import BundleConfig
from debug_bundle.web import create_app, register_handler

PATH = "/debug/dump"


def _make_app(writer: ZipWriter) -> FastAPI:
    app = FastAPI()
    register_handler(app, PATH, writer)
    return app


class TestHTTPEndpoint:
    """Tests for register_handler."""

    def test_download_zip(self, make_source, read_zip):
        """GET should return a zip with one entry per source."""
        writer = ZipWriter()
        writer.register_source("test", make_source(b"test"))
        writer.register_source("foo", make_source(b"bar"))
        client = TestClient(_make_app(writer))

        resp = client.get(PATH)

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/zip"
        assert 'filename="debug.zip"' in resp.headers["content-disposition"]
        assert read_zip(resp.content) == {"test": b"test", "foo": b"bar"}

    def test_download_zip_fail(self, make_source):
        """A failing source should turn into a 500 without zip content."""
        writer = ZipWriter()
        writer.register_source("test", make_source(b"test"))
        writer.register_source("foo", make_source(b"bar"))
        client = TestClient(_make_app(writer))
        assert client.get(PATH).status_code == 200

        writer.register_source("test2", make_source(b"oh snap", should_err=True))
        resp = client.get(PATH)

        assert resp.status_code == 500
        assert resp.headers["content-type"] != "application/zip"
        assert "test2" in resp.json()["detail"]
        assert not zipfile.is_zipfile(io.BytesIO(resp.content))

    def test_only_get_is_routed(self, make_source):
        """Other methods should not trigger a build."""
        writer = ZipWriter()
        source = make_source(b"x")
        writer.register_source("x", source)
        client = TestClient(_make_app(writer))

        assert client.post(PATH).status_code == 405
        assert not source.called

    def test_each_request_builds_fresh(self, make_source):
        """Every request should run its own build."""
        writer = ZipWriter()
        source = make_source(b"x")
        writer.register_source("x", source)
        client = TestClient(_make_app(writer))

        client.get(PATH)
        client.get(PATH)
        assert source.calls == 2

    def test_mount_on_router(self, make_source, read_zip):
        """The handler should mount on an APIRouter too."""
        writer = ZipWriter()
        writer.register_source("a", make_source(b"1"))
        router = APIRouter(prefix="/internal")
        register_handler(router, "/bundle", writer)
        app = FastAPI()
        app.include_router(router)

        resp = TestClient(app).get("/internal/bundle")
        assert resp.status_code == 200
        assert read_zip(resp.content) == {"a": b"1"}


class TestServer:
    """Tests for create_app."""

    def test_health_lists_sources(self, make_source):
        """/health should report registered sources."""
        writer = ZipWriter()
        writer.register_source("a", make_source(b"1"))
        app = create_app(BundleConfig(path="/dbg"), writer=writer)

        with TestClient(app) as client:
            resp = client.get("/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["version"] == __version__
        assert body["path"] == "/dbg"
        assert body["sources"] == ["a"]

    def test_configured_path(self, make_source, read_zip):
        """The bundle route should live at the configured path."""
        writer = ZipWriter()
        writer.register_source("a", make_source(b"1"))
        app = create_app(BundleConfig(path="/dbg"), writer=writer)

        with TestClient(app) as client:
            assert client.get(PATH).status_code == 404
            resp = client.get("/dbg")

        assert resp.status_code == 200
        assert read_zip(resp.content) == {"a": b"1"}

    def test_default_sources(self, read_zip):
        """Without a writer, the default source set is served."""
        config = BundleConfig(profile_duration=0.2, sample_interval=0.01)
        with TestClient(create_app(config)) as client:
            resp = client.get(config.path)

        assert resp.status_code == 200
        assert set(read_zip(resp.content)) == {
            "cpuSource",
            "heapSource",
            "hostSource",
            "goroutineProfile",
        }
