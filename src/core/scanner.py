"""
Inventory scanner: 이미지 폴더 재귀 탐색

규칙:
- 확장자만으로 판별 (대소문자 무시)
- depth-first: 디렉터리 항목 방문 + 하위 폴더 재귀 후 반환
- 하위 항목 실패 → ScanSkip 기록 + 로그, 형제 항목은 계속 처리
- UTF-8이 아닌 파일명 → skip (url / JSON 표현 불가)
- 루트 없음 → 빈 결과 (에러 아님)
- 루트 읽기 실패 → GalleryError
- 읽기 전용, 캐시 없음
"""

import errno
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

from src.core.logging import SkipCallback, emit_skip, finish_scan, start_scan
from src.domain.constants import (
    DEFAULT_URL_PREFIX,
    IMAGE_EXTENSIONS,
    ROOT_DIRECTORY_LABEL,
)
from src.domain.errors import ErrorCodes, GalleryError
from src.domain.schemas import ImageDescriptor, ScanResult, SkipReason

logger = logging.getLogger(__name__)


def scan_images(
    root: Path,
    url_prefix: str = DEFAULT_URL_PREFIX,
    root_label: str = ROOT_DIRECTORY_LABEL,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
    on_skip: SkipCallback | None = None,
) -> ScanResult:
    """
    루트 아래 모든 이미지 파일 수집.

    Args:
        root: 이미지 루트 디렉터리
        url_prefix: descriptor.url 앞에 붙일 경로
        root_label: 루트 바로 아래 파일의 directory 값
        extensions: 허용 확장자 목록
        on_skip: 건너뛴 항목마다 호출되는 콜백

    Returns:
        ScanResult (images 순서는 의미 없음)

    Raises:
        GalleryError: 루트가 존재하지만 읽을 수 없음
    """
    result = ScanResult()
    start_scan(result)

    if not root.exists():
        logger.info("Images root %s does not exist, returning empty inventory", root)
        result.root_exists = False
        finish_scan(result)
        return result

    try:
        entries = _list_dir(root)
    except OSError as e:
        logger.error("Error reading images root %s: %s", root, e, exc_info=True)
        raise GalleryError(
            ErrorCodes.SCAN_ROOT_UNREADABLE,
            root=str(root),
            errno_code=e.errno,
        ) from e

    walker = _Walker(
        result=result,
        url_prefix=url_prefix.rstrip("/"),
        root_label=root_label,
        extensions=tuple(ext.lower() for ext in extensions),
        on_skip=on_skip,
    )
    walker.walk(entries, "")

    finish_scan(result)
    return result


def _list_dir(path: Path | str) -> list[os.DirEntry]:
    """디렉터리 항목 목록 (이터레이터는 즉시 닫음)."""
    with os.scandir(path) as it:
        return list(it)


def _join(rel_dir: str, name: str) -> str:
    """'/' 구분 relative path 결합."""
    return f"{rel_dir}/{name}" if rel_dir else name


def _is_utf8(name: str) -> bool:
    """surrogate escape 없이 UTF-8로 인코딩 가능한지."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _printable(path: str) -> str:
    """로그/진단용 표현 (깨진 바이트는 \\xNN)."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")


def _skip_reason(error: OSError) -> SkipReason:
    if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
        return SkipReason.PERMISSION_DENIED
    return SkipReason.UNREADABLE


class _Walker:
    """한 번의 스캔 동안의 상태 (결과, 옵션)."""

    def __init__(
        self,
        result: ScanResult,
        url_prefix: str,
        root_label: str,
        extensions: tuple[str, ...],
        on_skip: SkipCallback | None,
    ) -> None:
        self.result = result
        self.url_prefix = url_prefix
        self.root_label = root_label
        self.extensions = extensions
        self.on_skip = on_skip

    def walk(self, entries: list[os.DirEntry], rel_dir: str) -> None:
        for entry in entries:
            rel_path = _join(rel_dir, entry.name)
            if not _is_utf8(entry.name):
                # url / JSON으로 표현할 수 없는 이름 (하위 폴더 포함 skip)
                emit_skip(
                    self.result, _printable(rel_path), SkipReason.UNREADABLE,
                    message="file name is not valid UTF-8",
                    on_skip=self.on_skip,
                )
                continue
            try:
                if entry.is_symlink():
                    emit_skip(
                        self.result, rel_path, SkipReason.SYMLINK,
                        on_skip=self.on_skip,
                    )
                elif entry.is_dir(follow_symlinks=False):
                    self._walk_subdir(entry, rel_path)
                elif entry.is_file(follow_symlinks=False):
                    self._add_file(entry, rel_dir, rel_path)
            except OSError as e:
                self._skip(rel_path, e)

    def _walk_subdir(self, entry: os.DirEntry, rel_path: str) -> None:
        try:
            entries = _list_dir(entry.path)
        except OSError as e:
            self._skip(rel_path, e)
            return
        self.walk(entries, rel_path)

    def _add_file(self, entry: os.DirEntry, rel_dir: str, rel_path: str) -> None:
        if os.path.splitext(entry.name)[1].lower() not in self.extensions:
            return

        size = os.lstat(entry.path).st_size
        self.result.images.append(
            ImageDescriptor(
                name=entry.name,
                relative_path=rel_path,
                url=f"{self.url_prefix}/{quote(rel_path)}",
                directory=rel_dir or self.root_label,
                size=size,
            )
        )

    def _skip(self, rel_path: str, error: OSError) -> None:
        emit_skip(
            self.result,
            rel_path,
            _skip_reason(error),
            message=str(error),
            errno_code=error.errno,
            on_skip=self.on_skip,
        )
