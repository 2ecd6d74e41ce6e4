"""Tests for the HTTP surface: routes, validation and error mapping."""

from __future__ import annotations

from fastapi.testclient import TestClient

from etsyboost.api.app import create_app
from etsyboost.core.config import AppSettings, CacheConfig, ComputeConfig
from etsyboost.exceptions import UpstreamRenderFailure
from tests.conftest import MP4_BYTES, PNG_BYTES
from tests.fakes.fake_renderer import FakeRenderer


def _settings(**compute) -> AppSettings:
    return AppSettings(cache=CacheConfig(redis_url=""), compute=ComputeConfig(**compute))


def _client(renderer: FakeRenderer | None = None, **compute) -> TestClient:
    return TestClient(create_app(settings=_settings(**compute), renderer=renderer or FakeRenderer()))


def _form(**overrides) -> dict[str, str]:
    form = {"watermark_text": "© My Shop", "position": "bottom-right", "opacity": "0.5"}
    form.update(overrides)
    return form


class TestProbes:
    def test_liveness(self) -> None:
        with _client() as client:
            assert client.get("/health").json() == {"status": "ok"}
            assert client.get("/ready").json() == {"status": "ready"}

    def test_cache_health_memory_only(self) -> None:
        with _client() as client:
            resp = client.get("/api/health")
            assert resp.status_code == 200
            body = resp.json()
            assert body["status"] == "healthy"
            assert body["cache"] == "connected"
            assert body["using"] == "memory"
            assert body["error"] == "external cache not configured"
            assert "timestamp" in body


class TestGenerateTags:
    def test_returns_ranked_tags(self) -> None:
        with _client() as client:
            resp = client.post(
                "/api/generate-tags",
                json={
                    "title": "Personalized Story Book for Kids",
                    "description": "A custom story book gift for birthday",
                    "category": "Books",
                },
            )
            assert resp.status_code == 200
            body = resp.json()
            assert 0 < len(body["tags"]) <= 13
            first = body["tags"][0]
            assert set(first) == {"text", "score", "decoration"}
            scores = [t["score"] for t in body["tags"]]
            assert scores == sorted(scores, reverse=True)
            assert len(body["tips"]) == 5

    def test_repeat_request_identical(self) -> None:
        payload = {"title": "Sterling Silver Ring", "description": "Handmade ring for her", "category": "Jewelry"}
        with _client() as client:
            first = client.post("/api/generate-tags", json=payload).json()
            second = client.post("/api/generate-tags", json=payload).json()
            assert first == second

    def test_validation(self) -> None:
        with _client() as client:
            resp = client.post(
                "/api/generate-tags",
                json={"title": "abc", "description": "short", "category": "Books"},
            )
            assert resp.status_code == 422


class TestWatermark:
    def test_image_round_trip(self) -> None:
        renderer = FakeRenderer()
        with _client(renderer) as client:
            resp = client.post(
                "/api/watermark",
                files={"file": ("photo.png", PNG_BYTES, "image/png")},
                data=_form(),
            )
            assert resp.status_code == 200
            assert resp.headers["content-type"] == "image/png"
            assert resp.headers["content-disposition"] == 'attachment; filename="watermarked.png"'
            assert resp.content.startswith(PNG_BYTES)
            assert renderer.image_calls == [("© My Shop", "bottom-right", 0.5)]

    def test_second_upload_served_from_cache(self) -> None:
        renderer = FakeRenderer()
        with _client(renderer) as client:
            for _ in range(2):
                resp = client.post(
                    "/api/watermark",
                    files={"file": ("clip.mp4", MP4_BYTES, "video/mp4")},
                    data=_form(position="center"),
                )
                assert resp.status_code == 200
                assert resp.headers["content-type"] == "video/mp4"
            assert len(renderer.video_calls) == 1

    def test_declared_type_is_ignored(self) -> None:
        with _client() as client:
            resp = client.post(
                "/api/watermark",
                files={"file": ("photo.png", b"not really an image", "image/png")},
                data=_form(),
            )
            assert resp.status_code == 400
            assert resp.json() == {"error": "Invalid file type", "type": "invalid_asset"}

    def test_empty_upload(self) -> None:
        with _client() as client:
            resp = client.post(
                "/api/watermark",
                files={"file": ("empty.png", b"", "image/png")},
                data=_form(),
            )
            assert resp.status_code == 400

    def test_oversized_upload(self) -> None:
        with _client(max_upload_bytes=16) as client:
            resp = client.post(
                "/api/watermark",
                files={"file": ("photo.png", PNG_BYTES, "image/png")},
                data=_form(),
            )
            assert resp.status_code == 413

    def test_bad_form_fields(self) -> None:
        with _client() as client:
            for form in (_form(position="middle"), _form(opacity="1.5"), _form(watermark_text="")):
                resp = client.post(
                    "/api/watermark",
                    files={"file": ("photo.png", PNG_BYTES, "image/png")},
                    data=form,
                )
                assert resp.status_code == 422

    def test_render_failure_is_500(self) -> None:
        renderer = FakeRenderer(error=UpstreamRenderFailure("corrupt frame"))
        with _client(renderer) as client:
            resp = client.post(
                "/api/watermark",
                files={"file": ("photo.png", PNG_BYTES, "image/png")},
                data=_form(),
            )
            assert resp.status_code == 500
            assert resp.json()["type"] == "render_failure"

    def test_render_timeout_is_504(self) -> None:
        with _client(FakeRenderer(delay=1.0), render_timeout_seconds=0.05) as client:
            resp = client.post(
                "/api/watermark",
                files={"file": ("photo.png", PNG_BYTES, "image/png")},
                data=_form(),
            )
            assert resp.status_code == 504
            assert resp.json()["type"] == "timeout"
