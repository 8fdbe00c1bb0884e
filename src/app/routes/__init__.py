"""
FastAPI Routes.

페이지 라우트 (HTML) + API 라우트 (JSON, HTMX 조각) + 원본 파일 라우트
"""

from . import gallery

__all__ = ["gallery"]
