"""
Core layer: 이미지 inventory 핵심 모듈.

역할:
- 이미지 폴더 재귀 스캔 (scanner)
- freshness window 캐시 (inventory)
- 스캔 skip 이벤트 기록 (logging)
"""

from .inventory import InventoryCache, InventoryService
from .logging import configure_logging, emit_skip
from .scanner import scan_images

__all__ = [
    # scanner
    "scan_images",
    # inventory
    "InventoryCache",
    "InventoryService",
    # logging
    "configure_logging",
    "emit_skip",
]
