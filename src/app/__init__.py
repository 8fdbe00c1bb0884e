"""
App layer: UI 서버 (FastAPI + HTMX).

역할:
- 갤러리 화면, inventory API, 파일 다운로드
- ⚠️ 스캔/캐시 로직 없음 (core에 위임)
"""
