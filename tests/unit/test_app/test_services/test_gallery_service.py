"""
test_gallery.py - Gallery 서비스 유닛 테스트

검증 포인트:
1. 디렉터리 / 검색어 필터
2. 디렉터리별 개수
3. 파일 크기 표시
4. 다운로드 경로 검증 (루트 밖 접근 차단)
"""

from pathlib import Path

import pytest

from src.app.services.gallery import (
    directory_counts,
    filter_images,
    format_file_size,
    resolve_image_path,
)
from src.domain.errors import ErrorCodes, GalleryError
from src.domain.schemas import ImageDescriptor

# =============================================================================
# Fixtures
# =============================================================================


def _image(relative_path: str, size: int = 1, directory: str | None = None) -> ImageDescriptor:
    parent, _, name = relative_path.rpartition("/")
    return ImageDescriptor(
        name=name,
        relative_path=relative_path,
        url=f"/images/{relative_path}",
        directory=directory or parent or "根目录",
        size=size,
    )


@pytest.fixture
def images() -> list[ImageDescriptor]:
    return [
        _image("Sunset.PNG"),
        _image("travel/beach.jpg"),
        _image("travel/sunset-2.jpg"),
        _image("travel/2024/paris.webp"),
    ]


# =============================================================================
# filter_images
# =============================================================================

class TestFilterImages:
    """filter_images 함수 테스트."""

    def test_no_filter_returns_all(self, images):
        assert filter_images(images) == images

    def test_directory_exact_match(self, images):
        """directory는 정확히 일치 (하위 폴더 미포함)."""
        result = filter_images(images, directory="travel")

        assert [i.relative_path for i in result] == ["travel/beach.jpg", "travel/sunset-2.jpg"]

    def test_root_directory(self, images):
        result = filter_images(images, directory="根目录")

        assert [i.name for i in result] == ["Sunset.PNG"]

    def test_query_case_insensitive(self, images):
        """검색어는 파일명 부분 일치, 대소문자 무시."""
        result = filter_images(images, query="SUNSET")

        assert [i.name for i in result] == ["Sunset.PNG", "sunset-2.jpg"]

    def test_query_matches_name_not_directory(self, images):
        """디렉터리 이름은 검색 대상 아님."""
        assert filter_images(images, query="travel") == []

    def test_directory_and_query_combined(self, images):
        result = filter_images(images, directory="travel", query="sun")

        assert [i.name for i in result] == ["sunset-2.jpg"]

    def test_blank_query_ignored(self, images):
        assert filter_images(images, query="   ") == images

    def test_input_not_mutated(self, images):
        original = list(images)
        filter_images(images, directory="travel")

        assert images == original


# =============================================================================
# directory_counts
# =============================================================================

class TestDirectoryCounts:
    """directory_counts 함수 테스트."""

    def test_counts_sorted(self, images):
        counts = directory_counts(images)

        assert counts == {"travel": 2, "travel/2024": 1, "根目录": 1}
        assert list(counts) == sorted(counts)

    def test_empty(self):
        assert directory_counts([]) == {}


# =============================================================================
# format_file_size
# =============================================================================

class TestFormatFileSize:
    """format_file_size 함수 테스트."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (None, "0 B"),
            (10, "10.0 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1024 * 1024, "1.0 MB"),
            (5 * 1024 ** 3, "5.0 GB"),
            (2048 * 1024 ** 3, "2048.0 GB"),
        ],
    )
    def test_format(self, size, expected):
        assert format_file_size(size) == expected


# =============================================================================
# resolve_image_path
# =============================================================================

class TestResolveImagePath:
    """resolve_image_path 함수 테스트."""

    def test_existing_image(self, sample_images_root: Path):
        path = resolve_image_path(sample_images_root, "b/c.jpg")

        assert path == (sample_images_root / "b" / "c.jpg").resolve()

    @pytest.mark.parametrize(
        "relative_path",
        ["../secret.png", "b/../../secret.png", "/etc/passwd.png", "..\\secret.png", ""],
    )
    def test_traversal_rejected(self, sample_images_root: Path, relative_path: str):
        """루트 밖을 가리키는 경로는 INVALID_IMAGE_PATH."""
        with pytest.raises(GalleryError) as exc_info:
            resolve_image_path(sample_images_root, relative_path)

        assert exc_info.value.code == ErrorCodes.INVALID_IMAGE_PATH

    def test_symlink_escaping_root_rejected(self, sample_images_root: Path, tmp_path: Path):
        """루트 밖을 가리키는 링크도 차단."""
        outside = tmp_path / "outside.png"
        outside.write_bytes(b"secret")
        try:
            (sample_images_root / "escape.png").symlink_to(outside)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        with pytest.raises(GalleryError) as exc_info:
            resolve_image_path(sample_images_root, "escape.png")

        assert exc_info.value.code == ErrorCodes.INVALID_IMAGE_PATH

    def test_non_image_not_found(self, sample_images_root: Path):
        """이미지가 아닌 파일은 존재해도 IMAGE_NOT_FOUND."""
        with pytest.raises(GalleryError) as exc_info:
            resolve_image_path(sample_images_root, "b/notes.txt")

        assert exc_info.value.code == ErrorCodes.IMAGE_NOT_FOUND

    def test_missing_file_not_found(self, sample_images_root: Path):
        with pytest.raises(GalleryError) as exc_info:
            resolve_image_path(sample_images_root, "b/missing.png")

        assert exc_info.value.code == ErrorCodes.IMAGE_NOT_FOUND

    def test_directory_not_found(self, sample_images_root: Path):
        """폴더 이름이 이미지처럼 보여도 파일이 아니면 거절."""
        (sample_images_root / "album.png").mkdir()

        with pytest.raises(GalleryError) as exc_info:
            resolve_image_path(sample_images_root, "album.png")

        assert exc_info.value.code == ErrorCodes.IMAGE_NOT_FOUND
