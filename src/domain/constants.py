"""
Domain Constants: 갤러리 전역 상수.

확장자 정책, 캐시 기본값, URL 정책 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Image Extensions (이미지 판별 정책)
# =============================================================================
# 확장자만으로 판별 (대소문자 무시, content sniffing 없음)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg")

# =============================================================================
# Inventory Defaults
# =============================================================================

DEFAULT_IMAGES_ROOT = "public/images"
DEFAULT_URL_PREFIX = "/images"
DEFAULT_CACHE_TTL_SECONDS = 30

# 루트 바로 아래 파일의 directory 값
ROOT_DIRECTORY_LABEL = "根目录"

IMAGES_ROOT_ENV_VAR = "GALLERY_IMAGES_ROOT"

# =============================================================================
# MIME Types
# =============================================================================

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}


def is_image_filename(filename: str) -> bool:
    """허용 확장자 여부 (대소문자 무시)."""
    import os

    ext = os.path.splitext(filename)[1].lower()
    return ext in IMAGE_EXTENSIONS


def get_mime_type(filename: str) -> str:
    """
    파일명에서 MIME 타입 추출.

    Args:
        filename: 파일명 (확장자 포함)

    Returns:
        MIME 타입 문자열 (알 수 없으면 octet-stream)
    """
    import os

    ext = os.path.splitext(filename)[1].lower()
    return MIME_TYPES.get(ext, "application/octet-stream")


def cache_control_header(ttl_seconds: int) -> str:
    """응답 캐시 헤더 (freshness window와 동일한 max-age)."""
    return f"public, max-age={ttl_seconds}, s-maxage={ttl_seconds}"
