"""
Application Services.

역할:
- gallery: inventory 필터, 디렉터리 집계, 다운로드 경로 검증
"""

from .gallery import (
    directory_counts,
    filter_images,
    format_file_size,
    resolve_image_path,
)

__all__ = [
    "directory_counts",
    "filter_images",
    "format_file_size",
    "resolve_image_path",
]
