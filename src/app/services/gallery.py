"""
Gallery service: inventory 필터링, 디렉터리 집계, 다운로드 경로 검증.

역할:
- 디렉터리 / 파일명 검색 필터 (inventory는 변경하지 않음)
- 디렉터리별 이미지 개수
- 다운로드 요청 경로 → 루트 안의 실제 파일 경로
"""

from pathlib import Path

from src.domain.constants import is_image_filename
from src.domain.errors import ErrorCodes, GalleryError
from src.domain.schemas import ImageDescriptor

SIZE_UNITS = ("B", "KB", "MB", "GB")


def filter_images(
    images: list[ImageDescriptor],
    directory: str | None = None,
    query: str | None = None,
) -> list[ImageDescriptor]:
    """
    inventory 필터링.

    Args:
        images: 전체 inventory
        directory: 정확히 일치해야 하는 directory 값 (빈 값이면 전체)
        query: 파일명 부분 검색어 (대소문자 무시)

    Returns:
        조건에 맞는 descriptor 목록 (입력 순서 유지)
    """
    needle = query.strip().lower() if query else ""

    return [
        image
        for image in images
        if (not directory or image.directory == directory)
        and (not needle or needle in image.name.lower())
    ]


def directory_counts(images: list[ImageDescriptor]) -> dict[str, int]:
    """디렉터리별 이미지 개수 (디렉터리 이름순)."""
    counts: dict[str, int] = {}
    for image in images:
        counts[image.directory] = counts.get(image.directory, 0) + 1
    return dict(sorted(counts.items()))


def format_file_size(size: int | None) -> str:
    """바이트 수 → 사람이 읽는 크기 (예: 1.5 KB)."""
    if not size:
        return "0 B"

    value = float(size)
    index = 0
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{value:.1f} {SIZE_UNITS[index]}"


def resolve_image_path(root: Path, relative_path: str) -> Path:
    """
    다운로드 요청 경로를 루트 안의 실제 파일로 변환.

    Args:
        root: 이미지 루트 디렉터리
        relative_path: '/' 구분 relative path

    Returns:
        존재하는 이미지 파일 경로

    Raises:
        GalleryError: INVALID_IMAGE_PATH (루트 밖), IMAGE_NOT_FOUND
    """
    parts = relative_path.replace("\\", "/").split("/")
    if not relative_path or relative_path.startswith("/") or ".." in parts:
        raise GalleryError(ErrorCodes.INVALID_IMAGE_PATH, path=relative_path)

    root_resolved = root.resolve()
    candidate = (root_resolved / relative_path).resolve()
    if not candidate.is_relative_to(root_resolved):
        raise GalleryError(ErrorCodes.INVALID_IMAGE_PATH, path=relative_path)

    if not is_image_filename(candidate.name) or not candidate.is_file():
        raise GalleryError(ErrorCodes.IMAGE_NOT_FOUND, path=relative_path)

    return candidate
