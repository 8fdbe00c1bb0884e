"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.routes import gallery
from src.core.inventory import InventoryService
from src.core.logging import configure_logging
from src.domain.constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_IMAGES_ROOT,
    DEFAULT_URL_PREFIX,
    IMAGES_ROOT_ENV_VAR,
    ROOT_DIRECTORY_LABEL,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_CONFIG: dict[str, Any] = {
    "gallery": {
        "images_root": DEFAULT_IMAGES_ROOT,
        "url_prefix": DEFAULT_URL_PREFIX,
        "cache_ttl_seconds": DEFAULT_CACHE_TTL_SECONDS,
        "root_label": ROOT_DIRECTORY_LABEL,
    },
    "logging": {
        "level": "INFO",
    },
}


def load_config(config_path: Path | None = None) -> dict:
    """
    설정 파일 로드.

    파일이 없거나 일부 키가 빠져 있으면 DEFAULT_CONFIG 값 사용.
    """
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    data: dict[Any, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    config: dict[str, Any] = {}
    for section, defaults in DEFAULT_CONFIG.items():
        config[section] = {**defaults, **(data.get(section) or {})}
    return config


def resolve_images_root(config: dict, base_dir: Path = PROJECT_ROOT) -> Path:
    """
    이미지 루트 경로 결정.

    우선순위: 환경변수 GALLERY_IMAGES_ROOT > gallery.images_root
    상대 경로는 base_dir 기준.
    """
    raw = os.environ.get(IMAGES_ROOT_ENV_VAR) or config["gallery"]["images_root"]
    root = Path(raw)
    if not root.is_absolute():
        root = base_dir / root
    return root


def resolve_url_prefix(config: dict) -> str:
    """
    원본 파일 URL prefix 정규화.

    끝의 "/" 제거. 빈 prefix ("/")는 /health, /api 라우트를 가리므로 거부.

    Raises:
        ValueError: prefix가 비었거나 "/"로 시작하지 않음
    """
    raw = str(config["gallery"]["url_prefix"])
    prefix = raw.rstrip("/")
    if not prefix.startswith("/"):
        raise ValueError(f"gallery.url_prefix must be a path like '/images', got {raw!r}")
    return prefix


def build_inventory_service(config: dict, images_root: Path) -> InventoryService:
    """설정으로 InventoryService 생성 (프로세스당 1개)."""
    gallery_config = config["gallery"]
    return InventoryService(
        root=images_root,
        ttl_seconds=gallery_config["cache_ttl_seconds"],
        url_prefix=resolve_url_prefix(config),
        root_label=gallery_config["root_label"],
    )


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, inventory 서비스 생성
    종료 시: 정리할 리소스 없음 (캐시는 메모리에만)
    """
    # Startup
    root = resolve_images_root(config)
    app.state.config = config
    app.state.images_root = root
    app.state.inventory = build_inventory_service(config, root)
    logger.info("Serving images from %s", root)

    yield


# =============================================================================
# App Instance
# =============================================================================

config = load_config()
configure_logging(config["logging"]["level"])

app = FastAPI(
    title="Local Image Gallery",
    description="로컬 이미지 폴더 탐색 / 미리보기 / 다운로드",
    version="0.1.0",
    lifespan=lifespan,
)

# Static files (CSS)
static_dir = Path(__file__).parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


# =============================================================================
# Routes
# =============================================================================

# 페이지 라우트 (HTML)
app.include_router(gallery.router, prefix="", tags=["Gallery"])

# API 라우트
app.include_router(gallery.api_router, prefix="/api/images", tags=["Images API"])


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# 원본 파일 (descriptor.url)
app.include_router(
    gallery.files_router,
    prefix=resolve_url_prefix(config),
    tags=["Image Files"],
)


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
