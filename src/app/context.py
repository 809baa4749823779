"""
요청 핸들러에 주입되는 읽기 전용 상태.

전역 변수 대신 create_app()에서 명시적으로 생성해 app.state.context에 보관.
테스트에서는 엔드포인트 탐색 결과를 직접 주입할 수 있다.
"""

from dataclasses import dataclass
from pathlib import Path

from fastapi import Request

from src.app.config import Settings
from src.domain.schemas import ListenEndpoint
from src.templates.source import TemplateSource


@dataclass(frozen=True)
class AppContext:
    """프로세스 수명 동안 불변인 공유 상태."""
    settings: Settings
    drop_dir: Path
    endpoints: tuple[ListenEndpoint, ...]
    template_source: TemplateSource


def get_context(request: Request) -> AppContext:
    """Request에서 AppContext 가져오기."""
    context: AppContext = request.app.state.context
    return context
