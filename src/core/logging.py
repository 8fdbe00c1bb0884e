"""
Scan logging: skip events, logger setup

규칙:
- 건너뛴 항목은 ScanResult.skipped에 구조화된 이벤트로 남김
- 같은 이벤트를 logger warning으로도 기록 (로그 텍스트 파싱 불필요)
- 사용자에게는 원문 에러를 노출하지 않음 (로그에만)
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from src.domain.schemas import ScanResult, ScanSkip, SkipReason

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

SkipCallback = Callable[[ScanSkip], None]


def configure_logging(level: str | int = "INFO") -> None:
    """
    애플리케이션 로깅 설정.

    Args:
        level: 로그 레벨 이름 (INFO, DEBUG 등) 또는 숫자
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("src").setLevel(level)


# =============================================================================
# Scan Log
# =============================================================================


def start_scan(result: ScanResult) -> None:
    """스캔 시작 시각 기록."""
    result.started_at = datetime.now(UTC).isoformat()


def finish_scan(result: ScanResult) -> None:
    """스캔 종료 시각 기록 + 요약 로그."""
    result.finished_at = datetime.now(UTC).isoformat()
    logger.info(
        "Scan finished: %d images, %d skipped",
        len(result.images),
        result.skip_count,
    )


def emit_skip(
    result: ScanResult,
    path: str,
    reason: SkipReason,
    message: str = "",
    errno_code: int | None = None,
    on_skip: SkipCallback | None = None,
) -> ScanSkip:
    """
    건너뛴 항목 이벤트 기록.

    Args:
        result: ScanResult 인스턴스
        path: 루트 기준 경로 ('/' 구분)
        reason: 건너뛴 이유
        message: 원인 메시지 (로그/진단용)
        errno_code: OSError.errno (있으면)
        on_skip: 이벤트 구독 콜백

    Returns:
        기록된 ScanSkip
    """
    skip = ScanSkip(
        path=path,
        reason=reason,
        message=message,
        errno_code=errno_code,
    )
    result.skipped.append(skip)

    if reason is SkipReason.SYMLINK:
        logger.debug("Skipping symlink %s", path)
    else:
        logger.warning("Error reading %s (%s): %s", path, reason.value, message)

    if on_skip is not None:
        on_skip(skip)

    return skip
