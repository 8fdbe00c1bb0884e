"""
Error definitions for the gallery.

규칙:
- 이미지 폴더 없음 → 에러 아님 (빈 inventory)
- 하위 항목 읽기 실패 → 로그 + skip (에러로 올리지 않음)
- 루트 레벨 I/O 실패 → GalleryError로 명시적 실패
"""

from typing import Any


class GalleryError(Exception):
    """
    갤러리 요청 경계까지 전파되는 에러.

    하위 항목 실패는 scanner 내부에서 흡수되고,
    아래 경우에만 사용:
    - 루트 디렉터리는 존재하지만 읽을 수 없음
    - 다운로드 경로가 루트 밖을 가리킴
    - 요청한 이미지 파일 없음

    Usage:
        raise GalleryError("SCAN_ROOT_UNREADABLE", root=str(root), cause=e)
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Scan ===
    SCAN_ROOT_UNREADABLE = "SCAN_ROOT_UNREADABLE"

    # === Request ===
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_IMAGE_PATH = "INVALID_IMAGE_PATH"
    IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
