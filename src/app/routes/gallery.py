"""
Gallery Routes: 이미지 목록 조회, 미리보기, 다운로드.

- GET /                                   → 갤러리 화면
- GET /api/images                         → inventory JSON (Cache-Control)
- GET /api/images/directories             → 디렉터리별 개수
- GET /api/images/grid                    → 이미지 그리드 (HTML 조각, HTMX)
- GET /api/images/download/<relative>     → 첨부 파일 다운로드
- GET /images/<relative>                  → 원본 바이트

조회 전용. 업로드/삭제/이름 변경 없음.
"""

import html
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote, urlencode

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import FileResponse, HTMLResponse

from src.app.services.gallery import (
    directory_counts,
    filter_images,
    format_file_size,
    resolve_image_path,
)
from src.core.inventory import InventoryService
from src.domain.constants import cache_control_header, get_mime_type
from src.domain.errors import ErrorCodes, GalleryError
from src.domain.schemas import ImageDescriptor

logger = logging.getLogger(__name__)

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints
files_router = APIRouter()  # 원본 파일

SCAN_ERROR_MESSAGE = "Error reading images directory"


def get_inventory_service(request: Request) -> InventoryService:
    """Request에서 InventoryService 가져오기."""
    return request.app.state.inventory


def get_images_root(request: Request) -> Path:
    """Request에서 images_root 경로 가져오기."""
    return request.app.state.images_root


def _load_inventory(service: InventoryService) -> list[ImageDescriptor]:
    """
    inventory 조회 (루트 레벨 실패 → 500).

    원문 에러는 로그에만 남기고 응답에는 코드와 고정 메시지만.
    """
    try:
        return service.get_inventory()
    except GalleryError as e:
        logger.error("%s: %s", SCAN_ERROR_MESSAGE, e)
        raise HTTPException(
            status_code=500,
            detail={"code": e.code, "message": SCAN_ERROR_MESSAGE},
        ) from e


def _file_error(e: GalleryError) -> HTTPException:
    status_code = 400 if e.code == ErrorCodes.INVALID_IMAGE_PATH else 404
    return HTTPException(
        status_code=status_code,
        detail={"code": e.code, "message": f"Image '{e.context.get('path', '')}' not available"},
    )


# =============================================================================
# Page Routes (HTML)
# =============================================================================

@router.get("/", response_class=HTMLResponse)
async def gallery_page(request: Request) -> HTMLResponse:
    """갤러리 화면."""
    return HTMLResponse(content="""
<!DOCTYPE html>
<html lang="ko">
<head>
    <meta charset="UTF-8">
    <title>이미지 갤러리</title>
    <script src="https://unpkg.com/htmx.org@1.9.10"></script>
    <link rel="stylesheet" href="/static/css/style.css">
</head>
<body>
    <div class="container">
        <header>
            <h1>🖼️ 이미지 갤러리</h1>
            <input type="search"
                   name="q"
                   placeholder="파일명 검색..."
                   hx-get="/api/images/grid"
                   hx-trigger="keyup changed delay:300ms, search"
                   hx-include="#directory-filter"
                   hx-target="#image-grid"
                   hx-swap="innerHTML">
            <input type="hidden" id="directory-filter" name="directory" value="">
        </header>

        <div id="image-grid"
             hx-get="/api/images/grid"
             hx-trigger="load"
             hx-swap="innerHTML">
            로딩 중...
        </div>
    </div>
</body>
</html>
    """)


# =============================================================================
# API Routes
# =============================================================================

@api_router.get("")
def list_images(
    request: Request,
    response: Response,
    directory: str | None = None,
    q: str | None = None,
) -> dict[str, Any]:
    """
    이미지 inventory (JSON).

    freshness window와 같은 max-age로 Cache-Control 설정.
    """
    service = get_inventory_service(request)
    images = filter_images(_load_inventory(service), directory=directory, query=q)

    response.headers["Cache-Control"] = cache_control_header(int(service.ttl_seconds))
    return {"images": [image.to_dict() for image in images]}


@api_router.api_route("", methods=["POST", "PUT", "PATCH", "DELETE"])
async def reject_mutation(request: Request) -> None:
    """조회 외 메서드는 스캔 없이 거절."""
    raise HTTPException(
        status_code=405,
        detail={"code": ErrorCodes.METHOD_NOT_ALLOWED, "message": "Method not allowed"},
        headers={"Allow": "GET"},
    )


@api_router.get("/directories")
def list_directories(request: Request, response: Response) -> dict[str, Any]:
    """디렉터리별 이미지 개수."""
    service = get_inventory_service(request)
    images = _load_inventory(service)
    counts = directory_counts(images)

    response.headers["Cache-Control"] = cache_control_header(int(service.ttl_seconds))
    return {
        "directories": [
            {"directory": name, "count": count} for name, count in counts.items()
        ],
        "total": len(images),
    }


@api_router.get("/grid", response_class=HTMLResponse)
def image_grid(
    request: Request,
    directory: str | None = None,
    q: str | None = None,
) -> HTMLResponse:
    """
    이미지 그리드 (HTML 조각).

    HTMX용 부분 렌더링. 스캔 실패 시 빈 상태 + 안내 문구.
    """
    service = get_inventory_service(request)
    try:
        images = service.get_inventory()
    except GalleryError as e:
        logger.error("%s: %s", SCAN_ERROR_MESSAGE, e)
        return HTMLResponse(
            content="<p class='empty error'>이미지 목록을 불러올 수 없습니다. 잠시 후 다시 시도하세요.</p>"
        )

    return HTMLResponse(content=render_grid(images, directory=directory, query=q))


@api_router.get("/download/{relative_path:path}")
def download_image(request: Request, relative_path: str) -> FileResponse:
    """이미지 파일 다운로드 (attachment)."""
    try:
        path = resolve_image_path(get_images_root(request), relative_path)
    except GalleryError as e:
        raise _file_error(e) from e

    return FileResponse(
        path=path,
        filename=path.name,
        media_type=get_mime_type(path.name),
    )


# =============================================================================
# File Routes
# =============================================================================

@files_router.get("/{relative_path:path}")
def image_file(request: Request, relative_path: str) -> FileResponse:
    """원본 이미지 바이트 (미리보기/썸네일용)."""
    try:
        path = resolve_image_path(get_images_root(request), relative_path)
    except GalleryError as e:
        raise _file_error(e) from e

    return FileResponse(path=path, media_type=get_mime_type(path.name))


# =============================================================================
# HTML Rendering
# =============================================================================

def render_grid(
    images: list[ImageDescriptor],
    directory: str | None = None,
    query: str | None = None,
) -> str:
    """디렉터리 필터 + 이미지 그리드 HTML."""
    counts = directory_counts(images)
    filtered = filter_images(images, directory=directory, query=query)

    # 검색창이 현재 디렉터리 필터를 함께 보내도록 hidden 필드 갱신 (OOB swap)
    html_parts = [
        "<input type='hidden' id='directory-filter' name='directory' "
        f"value='{html.escape(directory or '')}' hx-swap-oob='true'>",
        "<nav class='directories'>",
    ]
    html_parts.append(_directory_link("전체", None, len(images), not directory, query))
    for name, count in counts.items():
        html_parts.append(_directory_link(name, name, count, name == directory, query))
    html_parts.append("</nav>")

    if not filtered:
        if query:
            message = f"'{html.escape(query)}'에 해당하는 이미지가 없습니다."
        else:
            message = "이미지가 없습니다."
        html_parts.append(f"<p class='empty'>{message}</p>")
        return "".join(html_parts)

    html_parts.append(f"<p class='count'>총 {len(filtered)}개 이미지</p>")
    html_parts.append("<ul class='image-grid'>")
    for image in filtered:
        name = html.escape(image.name)
        url = html.escape(image.url)
        download_url = html.escape(f"/api/images/download/{quote(image.relative_path)}")
        html_parts.append(f"""
        <li>
            <a href="{url}" target="_blank">
                <img src="{url}" alt="{name}" loading="lazy">
            </a>
            <span class="name">{name}</span>
            <span class="directory">📁 {html.escape(image.directory)}</span>
            <span class="size">{format_file_size(image.size)}</span>
            <a class="download" href="{download_url}" download>다운로드</a>
        </li>
        """)
    html_parts.append("</ul>")

    return "".join(html_parts)


def _directory_link(
    label: str,
    directory: str | None,
    count: int,
    active: bool,
    query: str | None,
) -> str:
    params = {}
    if directory:
        params["directory"] = directory
    if query:
        params["q"] = query
    href = "/api/images/grid" + (f"?{urlencode(params)}" if params else "")
    css = "directory active" if active else "directory"
    return (
        f"<a class='{css}' hx-get='{html.escape(href)}' hx-target='#image-grid' "
        f"hx-swap='innerHTML'>{html.escape(label)} <span class='badge'>{count}</span></a>"
    )
