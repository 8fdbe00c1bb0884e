"""
Pytest fixtures for the gallery tests.

테스트 구성:
- 정상 트리, 빈 루트, 루트 없음 케이스 분리
"""

from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Image Tree Fixtures
# =============================================================================

@pytest.fixture
def sample_images_root(tmp_path: Path) -> Generator[Path, None, None]:
    """
    예시 이미지 트리.

    포함:
    - a.png (10 bytes)
    - b/c.jpg (20 bytes)
    - b/notes.txt (제외 대상)
    """
    root = tmp_path / "images"
    (root / "b").mkdir(parents=True)

    (root / "a.png").write_bytes(b"x" * 10)
    (root / "b" / "c.jpg").write_bytes(b"y" * 20)
    (root / "b" / "notes.txt").write_text("not an image", encoding="utf-8")

    yield root


@pytest.fixture
def nested_images_root(tmp_path: Path) -> Path:
    """
    깊이 0, 1, 3에 이미지가 있는 트리.

    포함:
    - top.png
    - one/mid.gif
    - one/two/three/deep.webp
    - one/two/empty.md (제외 대상)
    """
    root = tmp_path / "nested"
    deep_dir = root / "one" / "two" / "three"
    deep_dir.mkdir(parents=True)

    (root / "top.png").write_bytes(b"top")
    (root / "one" / "mid.gif").write_bytes(b"mid!")
    (root / "one" / "two" / "empty.md").write_text("# nothing", encoding="utf-8")
    (deep_dir / "deep.webp").write_bytes(b"deep image")

    return root


@pytest.fixture
def missing_images_root(tmp_path: Path) -> Path:
    """존재하지 않는 루트."""
    return tmp_path / "does-not-exist"


class FakeClock:
    """테스트용 monotonic clock (수동으로 진행)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """수동 진행 clock."""
    return FakeClock()
