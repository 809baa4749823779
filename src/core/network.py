"""
Endpoint Discovery: 네트워크 인터페이스 → 접속 URL + QR 코드.

규칙:
- link가 up인 인터페이스만 사용
- IPv4는 무조건 포함, IPv6는 link-local(fe80::/10) 제외
- loopback은 기본 제외 (include_loopback=True면 포함하되 표시만, 페이지에는 노출 안 함)
- 주소 하나의 실패가 전체 탐색을 중단시키지 않음 (로그 후 skip)
- 시작 시 한 번만 실행, 결과는 불변 tuple
"""

import io
import logging
import socket
from collections.abc import Callable, Iterable
from ipaddress import IPv4Address, IPv6Address, ip_address

import psutil
import qrcode
from qrcode.image.svg import SvgPathImage

from src.domain.constants import DEFAULT_QR_SIZE
from src.domain.schemas import ListenEndpoint, NetworkInterface

logger = logging.getLogger(__name__)

QrRenderer = Callable[[str, int], str]


# =============================================================================
# Interfaces
# =============================================================================

def list_interfaces() -> list[NetworkInterface]:
    """
    psutil로 현재 호스트의 인터페이스 스냅샷 생성.

    Returns:
        NetworkInterface 목록 (IPv4/IPv6 주소만 포함)
    """
    stats = psutil.net_if_stats()
    interfaces: list[NetworkInterface] = []

    for name, addrs in psutil.net_if_addrs().items():
        stat = stats.get(name)
        addresses = tuple(
            addr.address
            for addr in addrs
            if addr.family in (socket.AF_INET, socket.AF_INET6)
        )
        interfaces.append(
            NetworkInterface(
                name=name,
                is_up=bool(stat and stat.isup),
                addresses=addresses,
            )
        )

    return interfaces


def parse_address(raw: str) -> IPv4Address | IPv6Address:
    """
    주소 문자열 파싱 (IPv6 zone suffix '%eth0' 제거).

    Raises:
        ValueError: 파싱 불가
    """
    return ip_address(raw.split("%", 1)[0])


# =============================================================================
# URL / QR
# =============================================================================

def build_url(address: IPv4Address | IPv6Address, port: int) -> str:
    """IPv6는 대괄호 필수 (주소 자체에 ':' 포함)."""
    if address.version == 6:
        return f"http://[{address}]:{port}"
    return f"http://{address}:{port}"


def render_qr_svg(url: str, size: int = DEFAULT_QR_SIZE) -> str:
    """
    URL을 QR 코드 SVG 조각으로 렌더링.

    - 가로/세로 size (viewBox 유지 → 스케일)
    - XML 선언 제거 → HTML 안에 인라인 삽입 가능

    Args:
        url: 인코딩할 URL
        size: 표시 크기 (논리 단위)

    Returns:
        '<svg'로 시작하는 문자열
    """
    image = qrcode.make(url, image_factory=SvgPathImage)
    svg = image.get_image()
    svg.set("width", str(size))
    svg.set("height", str(size))

    buffer = io.BytesIO()
    image.save(buffer)
    document = buffer.getvalue().decode("utf-8")
    return document[document.index("<svg"):]


# =============================================================================
# Discovery
# =============================================================================

def discover_endpoints(
    port: int,
    interfaces: Iterable[NetworkInterface] | None = None,
    include_loopback: bool = False,
    qr_renderer: QrRenderer = render_qr_svg,
    qr_size: int = DEFAULT_QR_SIZE,
) -> tuple[ListenEndpoint, ...]:
    """
    접속 가능한 엔드포인트 탐색.

    Args:
        port: 서버 포트
        interfaces: 인터페이스 목록 (None이면 list_interfaces())
        include_loopback: loopback 포함 여부 (포함 시 is_loopback=True로 표시)
        qr_renderer: (url, size) → SVG 조각
        qr_size: QR 표시 크기

    Returns:
        정렬된 ListenEndpoint tuple (non-loopback → 인터페이스명 → 주소)
    """
    if interfaces is None:
        interfaces = list_interfaces()

    endpoints: list[ListenEndpoint] = []
    for interface in interfaces:
        if not interface.is_up:
            continue

        for raw in interface.addresses:
            try:
                address = parse_address(raw)
            except ValueError:
                logger.warning(
                    "Skipping unparsable address %r on %s", raw, interface.name
                )
                continue

            if address.version == 6 and address.is_link_local:
                continue
            if address.is_loopback and not include_loopback:
                continue

            url = build_url(address, port)
            try:
                qr_svg = qr_renderer(url, qr_size)
            except Exception as e:
                logger.warning(
                    "Skipping %s on %s: QR rendering failed: %s",
                    url, interface.name, e, exc_info=True,
                )
                continue

            endpoints.append(
                ListenEndpoint(
                    url=url,
                    is_loopback=address.is_loopback,
                    interface_name=interface.name,
                    address=address,
                    qr_svg=qr_svg,
                )
            )

    endpoints.sort(key=ListenEndpoint.sort_key)
    return tuple(endpoints)


def public_endpoints(endpoints: Iterable[ListenEndpoint]) -> list[ListenEndpoint]:
    """다른 기기에서 스캔할 수 있는 엔드포인트만 (loopback 제외)."""
    return [endpoint for endpoint in endpoints if not endpoint.is_loopback]
