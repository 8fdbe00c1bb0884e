"""
Data schemas for the gallery.

규칙:
- relative_path / url: 호스트 OS와 무관하게 항상 '/' 구분자
- relative_path: 한 번의 스캔 결과 안에서 유일
- 순서는 의미 없음 (정렬 보장 안 함)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Image Schemas
# =============================================================================

@dataclass(frozen=True)
class ImageDescriptor:
    """
    발견된 이미지 파일 하나.

    JSON 키는 프론트엔드 계약을 따름 (relativePath).
    """
    name: str  # 확장자 포함 파일명
    relative_path: str  # 루트 기준 경로, '/' 구분
    url: str  # url_prefix + relative_path (segment 단위 percent-encoding)
    directory: str  # 상위 폴더의 relative path 또는 루트 라벨
    size: int  # 스캔 시점의 바이트 수

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "name": self.name,
            "url": self.url,
            "relativePath": self.relative_path,
            "directory": self.directory,
            "size": self.size,
        }


# =============================================================================
# Scan Schemas
# =============================================================================

class SkipReason(str, Enum):
    """스캔 중 항목을 건너뛴 이유."""
    SYMLINK = "SYMLINK"                       # 심볼릭 링크 (따라가지 않음)
    PERMISSION_DENIED = "PERMISSION_DENIED"   # 권한 없음
    UNREADABLE = "UNREADABLE"                 # 기타 OSError


@dataclass
class ScanSkip:
    """
    건너뛴 항목 기록 (구조화된 진단 이벤트).

    반환값(images)과 분리되어 있어 테스트에서 skip 개수를 직접 검증 가능.
    """
    path: str  # 루트 기준 경로, '/' 구분
    reason: SkipReason
    message: str = ""
    errno_code: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "reason": self.reason.value,
            "message": self.message,
            "errno_code": self.errno_code,
        }


@dataclass
class ScanResult:
    """scan_images() 결과."""
    images: list[ImageDescriptor] = field(default_factory=list)
    skipped: list[ScanSkip] = field(default_factory=list)
    root_exists: bool = True
    started_at: str | None = None  # ISO 8601
    finished_at: str | None = None  # ISO 8601

    @property
    def skip_count(self) -> int:
        return len(self.skipped)

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "images": [image.to_dict() for image in self.images],
            "skipped": [skip.to_dict() for skip in self.skipped],
            "root_exists": self.root_exists,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


# =============================================================================
# Cache Schemas
# =============================================================================

@dataclass
class CacheEntry:
    """
    마지막으로 계산된 inventory와 계산 시각.

    timestamp는 monotonic clock 기준 (벽시계 아님).
    """
    images: list[ImageDescriptor]
    timestamp: float

    def age(self, now: float) -> float:
        return now - self.timestamp

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """freshness window 안인지 여부."""
        return self.age(now) < ttl_seconds
