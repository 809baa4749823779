"""
FastAPI 애플리케이션 진입점.

실행:
- CLI: filedrop --port 8000 --dir ./drop
- uvicorn: uvicorn src.app.main:create_app --factory --host 0.0.0.0
"""

import argparse
import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.config import Settings, load_settings
from src.app.context import AppContext
from src.app.routes import files
from src.core.files import prepare_drop_dir
from src.core.network import discover_endpoints
from src.domain.constants import FILES_URL_PREFIX, TEMPLATE_SOURCE_FILESYSTEM
from src.domain.schemas import ListenEndpoint
from src.templates.source import TemplateSource

logger = logging.getLogger(__name__)

Discover = Callable[[Settings], tuple[ListenEndpoint, ...]]


def discover_for_settings(settings: Settings) -> tuple[ListenEndpoint, ...]:
    """Settings 기반 엔드포인트 탐색."""
    return discover_endpoints(
        settings.port,
        include_loopback=settings.include_loopback,
        qr_size=settings.qr_size,
    )


# =============================================================================
# App Factory
# =============================================================================


def create_app(
    settings: Settings | None = None,
    endpoints: tuple[ListenEndpoint, ...] | None = None,
    discover: Discover = discover_for_settings,
) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        settings: 실행 설정 (None이면 default.yaml + 환경변수)
        endpoints: 미리 구성된 엔드포인트 (None이면 시작 시 discover 실행)
        discover: 엔드포인트 탐색 함수

    Returns:
        FastAPI 인스턴스
    """
    if settings is None:
        settings = load_settings()

    # StaticFiles mount 전에 디렉터리가 존재해야 함
    drop_dir = prepare_drop_dir(settings.resolved_drop_dir)
    template_source = TemplateSource(settings.template_source, settings.template_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        애플리케이션 생명주기 관리.

        시작 시: 엔드포인트 탐색 (한 번), AppContext 구성
        """
        # Startup
        found = endpoints if endpoints is not None else discover(settings)

        logger.info("Storing files in %s", drop_dir)
        for endpoint in found:
            logger.info("Listening at %s", endpoint.url)
        if not found:
            logger.warning("No reachable network address found")

        app.state.context = AppContext(
            settings=settings,
            drop_dir=drop_dir,
            endpoints=tuple(found),
            template_source=template_source,
        )

        yield

    app = FastAPI(
        title="filedrop",
        description="로컬 네트워크 파일 드롭",
        version="0.1.0",
        lifespan=lifespan,
    )

    # 업로드된 파일 다운로드
    app.mount(FILES_URL_PREFIX, StaticFiles(directory=drop_dir), name="files")

    app.include_router(files.router, tags=["Files"])

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """헬스 체크."""
        return {"status": "ok"}

    return app


# =============================================================================
# CLI Entry Point
# =============================================================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="filedrop",
        description="로컬 네트워크 파일 드롭 서버",
    )
    parser.add_argument("--host", help="바인드 주소 (기본: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="포트 (기본: 8000)")
    parser.add_argument("--dir", type=Path, help="드롭 디렉터리 (기본: <tempdir>/filedrop)")
    parser.add_argument(
        "--templates",
        type=Path,
        help="템플릿 문서 경로 (지정 시 요청마다 다시 읽음)",
    )
    parser.add_argument(
        "--include-loopback",
        action="store_true",
        help="loopback 주소도 시작 로그에 표시",
    )
    parser.add_argument("--log-level", help="로그 레벨 (기본: INFO)")
    return parser.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """CLI 인자 → Settings 덮어쓰기."""
    overrides: dict[str, Any] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.dir is not None:
        overrides["drop_dir"] = args.dir
    if args.templates is not None:
        overrides["template_source"] = TEMPLATE_SOURCE_FILESYSTEM
        overrides["template_path"] = args.templates
    if args.include_loopback:
        overrides["include_loopback"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> None:
    import uvicorn

    settings = apply_args(load_settings(), parse_args(argv))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
