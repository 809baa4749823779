"""
Data schemas for filedrop.

규칙:
- 모든 스키마는 생성 후 불변 (frozen)
- 요청 간 공유되는 값(ListenEndpoint)은 락 없이 읽기 전용으로 사용
"""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Any

# =============================================================================
# Network
# =============================================================================

@dataclass(frozen=True)
class NetworkInterface:
    """
    탐색 입력: 네트워크 인터페이스 스냅샷.

    addresses는 psutil이 보고한 문자열 그대로 (IPv6 zone suffix 포함 가능).
    """
    name: str
    is_up: bool
    addresses: tuple[str, ...] = ()


@dataclass(frozen=True)
class ListenEndpoint:
    """접속 가능한 주소 + 미리 렌더링된 QR 코드 (SVG 조각)."""
    url: str
    is_loopback: bool
    interface_name: str
    address: IPv4Address | IPv6Address
    qr_svg: str

    def sort_key(self) -> tuple[bool, str, int, IPv4Address | IPv6Address]:
        """non-loopback 우선 → 인터페이스명 → 주소."""
        return (self.is_loopback, self.interface_name, self.address.version, self.address)

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 (qr_svg 제외)."""
        return {
            "url": self.url,
            "is_loopback": self.is_loopback,
            "interface_name": self.interface_name,
            "address": str(self.address),
        }


# =============================================================================
# Files
# =============================================================================

@dataclass(frozen=True)
class FileEntry:
    """드롭 디렉터리의 파일 한 개 (요청마다 재계산)."""
    name: str
    size: int
    size_label: str
