"""
Cached inventory service: scanner + freshness window 캐시

규칙:
- freshness window 안이면 캐시된 inventory를 그대로 반환 (재스캔 없음)
- miss (첫 호출 또는 window 경과) → 스캔 후 (images, now) 저장
- 루트 없음 → 빈 inventory도 그대로 캐시 (window 동안 존재 재확인 없음)
- 루트 읽기 실패 → GalleryError 전파, 기존 캐시는 건드리지 않음
- 동시 miss → 락으로 직렬화, 락 획득 후 freshness 재확인 (single-flight)
"""

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

from src.core.logging import SkipCallback
from src.core.scanner import scan_images
from src.domain.constants import (
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_URL_PREFIX,
    ROOT_DIRECTORY_LABEL,
)
from src.domain.schemas import CacheEntry, ImageDescriptor, ScanResult

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Scanner = Callable[..., ScanResult]


# =============================================================================
# Cache
# =============================================================================


class InventoryCache:
    """마지막 inventory + timestamp 보관 (프로세스 수명 동안 유지)."""

    def __init__(self) -> None:
        self._entry: CacheEntry | None = None

    def get(self, now: float, ttl_seconds: float) -> list[ImageDescriptor] | None:
        """fresh한 경우에만 inventory 반환, 아니면 None."""
        entry = self._entry
        if entry is None or not entry.is_fresh(now, ttl_seconds):
            return None
        return entry.images

    def set(self, images: list[ImageDescriptor], now: float) -> None:
        self._entry = CacheEntry(images=images, timestamp=now)

    def peek(self) -> CacheEntry | None:
        """나이와 무관하게 현재 entry 반환 (stale fallback용)."""
        return self._entry

    @property
    def timestamp(self) -> float | None:
        return self._entry.timestamp if self._entry is not None else None


# =============================================================================
# Service
# =============================================================================


class InventoryService:
    """
    이미지 inventory 조회 서비스.

    요청 핸들러는 get_inventory()만 호출.
    캐시는 인스턴스 소유 (테스트마다 독립), 필요하면 주입.
    """

    def __init__(
        self,
        root: Path,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        url_prefix: str = DEFAULT_URL_PREFIX,
        root_label: str = ROOT_DIRECTORY_LABEL,
        cache: InventoryCache | None = None,
        clock: Clock = time.monotonic,
        scanner: Scanner = scan_images,
        on_skip: SkipCallback | None = None,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")

        self.root = root
        self.ttl_seconds = ttl_seconds
        self.url_prefix = url_prefix
        self.root_label = root_label
        self.cache = cache if cache is not None else InventoryCache()
        self.clock = clock
        self.scanner = scanner
        self.on_skip = on_skip
        self.last_scan: ScanResult | None = None
        self.scan_count = 0
        self._lock = threading.Lock()

    def get_inventory(self) -> list[ImageDescriptor]:
        """
        현재 inventory 반환 (캐시 또는 새 스캔).

        Returns:
            ImageDescriptor 목록

        Raises:
            GalleryError: 루트 레벨 I/O 실패 (캐시는 유지됨)
        """
        cached = self.cache.get(self.clock(), self.ttl_seconds)
        if cached is not None:
            return cached

        with self._lock:
            # 대기 중 다른 요청이 갱신했을 수 있음
            cached = self.cache.get(self.clock(), self.ttl_seconds)
            if cached is not None:
                return cached
            return self._refresh()

    def cached_inventory(self) -> list[ImageDescriptor] | None:
        """마지막으로 캐시된 inventory (stale 포함, 없으면 None)."""
        entry = self.cache.peek()
        return entry.images if entry is not None else None

    def _refresh(self) -> list[ImageDescriptor]:
        logger.debug("Inventory cache miss, scanning %s", self.root)
        result = self.scanner(
            self.root,
            url_prefix=self.url_prefix,
            root_label=self.root_label,
            on_skip=self.on_skip,
        )
        self.scan_count += 1
        self.last_scan = result
        self.cache.set(result.images, self.clock())
        return result.images
