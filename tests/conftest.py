"""
Pytest fixtures for filedrop tests.

구성:
- 드롭 디렉터리는 tmp_path 사용
- 엔드포인트 탐색은 가짜 인터페이스 / 고정 엔드포인트로 대체
"""

from collections.abc import Generator
from ipaddress import ip_address
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.app.config import Settings
from src.app.main import create_app
from src.domain.schemas import ListenEndpoint, NetworkInterface

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
def drop_dir(tmp_path: Path) -> Path:
    """빈 드롭 디렉터리."""
    path = tmp_path / "drop"
    path.mkdir()
    return path


# =============================================================================
# Network Fixtures
# =============================================================================

def _fake_qr(url: str, size: int) -> str:
    return f'<svg data-url="{url}" width="{size}"></svg>'


@pytest.fixture
def fake_qr():
    """QR 렌더러 대체 (결정론적, qrcode 불필요)."""
    return _fake_qr


@pytest.fixture
def fake_interfaces() -> list[NetworkInterface]:
    """loopback / link-local / 정상 주소가 섞인 인터페이스 구성."""
    return [
        NetworkInterface(name="lo", is_up=True, addresses=("127.0.0.1", "::1")),
        NetworkInterface(
            name="wlan0",
            is_up=True,
            addresses=("192.168.1.20", "fe80::1c2b:3dff:fe4e:5f60%wlan0", "2001:db8::20"),
        ),
        NetworkInterface(name="eth0", is_up=True, addresses=("10.0.0.5",)),
        NetworkInterface(name="docker0", is_up=False, addresses=("172.17.0.1",)),
    ]


def make_endpoint(address: str, interface_name: str = "eth0", port: int = 8000) -> ListenEndpoint:
    """테스트용 ListenEndpoint."""
    addr = ip_address(address)
    url = f"http://[{addr}]:{port}" if addr.version == 6 else f"http://{addr}:{port}"
    return ListenEndpoint(
        url=url,
        is_loopback=addr.is_loopback,
        interface_name=interface_name,
        address=addr,
        qr_svg=_fake_qr(url, 200),
    )


@pytest.fixture
def sample_endpoints() -> tuple[ListenEndpoint, ...]:
    """LAN 주소 1개 + loopback 1개."""
    return (
        make_endpoint("192.168.1.20", "wlan0"),
        make_endpoint("127.0.0.1", "lo"),
    )


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def settings(drop_dir: Path) -> Settings:
    """테스트용 설정 (작은 업로드 제한)."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        drop_dir=drop_dir,
        max_upload_bytes=1024,
        chunk_size=16,
    )


@pytest.fixture
def client(
    settings: Settings,
    sample_endpoints: tuple[ListenEndpoint, ...],
) -> Generator[TestClient, None, None]:
    """FastAPI TestClient (엔드포인트 탐색 생략)."""
    app = create_app(settings, endpoints=sample_endpoints)
    with TestClient(app) as client:
        yield client
