"""
test_api_images.py - Images API E2E 테스트

엔드포인트:
- GET /health
- GET /
- GET /api/images
- GET /api/images/directories
- GET /api/images/download/{relative_path}
- GET /images/{relative_path}
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.app.main import app
from src.domain.constants import IMAGES_ROOT_ENV_VAR, ROOT_DIRECTORY_LABEL

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def client(sample_images_root: Path, monkeypatch):
    """GALLERY_IMAGES_ROOT를 예시 트리로 지정한 TestClient."""
    monkeypatch.setenv(IMAGES_ROOT_ENV_VAR, str(sample_images_root))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def missing_root_client(missing_images_root: Path, monkeypatch):
    monkeypatch.setenv(IMAGES_ROOT_ENV_VAR, str(missing_images_root))
    with TestClient(app) as client:
        yield client


# =============================================================================
# Tests
# =============================================================================


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestGalleryFlow:
    """목록 조회 → 미리보기 → 다운로드."""

    def test_list_preview_download(self, client):
        response = client.get("/api/images")
        assert response.status_code == 200
        assert response.headers["cache-control"] == "public, max-age=30, s-maxage=30"

        images = {i["relativePath"]: i for i in response.json()["images"]}
        assert images["a.png"]["directory"] == ROOT_DIRECTORY_LABEL
        assert images["a.png"]["size"] == 10

        preview = client.get(images["b/c.jpg"]["url"])
        assert preview.status_code == 200
        assert preview.content == b"y" * 20

        download = client.get(f"/api/images/download/{images['b/c.jpg']['relativePath']}")
        assert download.status_code == 200
        assert "attachment" in download.headers["content-disposition"]

    def test_directories(self, client):
        response = client.get("/api/images/directories")

        assert response.json()["total"] == 2

    def test_page_and_stylesheet(self, client):
        page = client.get("/")
        assert page.status_code == 200
        assert "이미지 갤러리" in page.text

        css = client.get("/static/css/style.css")
        assert css.status_code == 200

    def test_wrong_method(self, client):
        response = client.post("/api/images")

        assert response.status_code == 405


class TestMissingRoot:
    """이미지 폴더 없음 = 빈 폴더."""

    def test_empty_inventory_twice(self, missing_root_client):
        for _ in range(2):
            response = missing_root_client.get("/api/images")
            assert response.status_code == 200
            assert response.json() == {"images": []}

    def test_grid_empty_state(self, missing_root_client):
        response = missing_root_client.get("/api/images/grid")

        assert "이미지가 없습니다." in response.text
