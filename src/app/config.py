"""
설정 로드: default.yaml → 환경변수(.env 포함) → CLI 인자 순으로 덮어씀.

환경변수:
- FILEDROP_HOST, FILEDROP_PORT
- FILEDROP_DIR
- FILEDROP_TEMPLATE_SOURCE, FILEDROP_TEMPLATE_PATH
- FILEDROP_LOG_LEVEL
"""

import os
import tempfile
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from src.domain.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_HOST,
    DEFAULT_MAX_UPLOAD_BYTES,
    DEFAULT_PORT,
    DEFAULT_QR_SIZE,
    DROP_DIR_NAME,
    TEMPLATE_SOURCE_EMBEDDED,
    TEMPLATE_SOURCE_FILESYSTEM,
    TEMPLATE_SOURCES,
)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def default_drop_dir() -> Path:
    """<tempdir>/filedrop."""
    return Path(tempfile.gettempdir()) / DROP_DIR_NAME


@dataclass(frozen=True)
class Settings:
    """실행 설정 (불변)."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    drop_dir: Path | None = None
    max_upload_bytes: int | None = DEFAULT_MAX_UPLOAD_BYTES
    chunk_size: int = DEFAULT_CHUNK_SIZE
    template_source: str = TEMPLATE_SOURCE_EMBEDDED
    template_path: Path | None = None
    include_loopback: bool = False
    qr_size: int = DEFAULT_QR_SIZE
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.template_source not in TEMPLATE_SOURCES:
            raise ValueError(
                f"templates.source must be one of {TEMPLATE_SOURCES}, "
                f"got {self.template_source!r}"
            )
        if self.template_source == TEMPLATE_SOURCE_FILESYSTEM and self.template_path is None:
            raise ValueError("templates.source 'filesystem' requires templates.path")

    @property
    def resolved_drop_dir(self) -> Path:
        """drop_dir 미설정 시 기본 위치."""
        return self.drop_dir if self.drop_dir is not None else default_drop_dir()

    @classmethod
    def from_config(cls, config: dict) -> "Settings":
        """
        default.yaml 구조 → Settings.

        Args:
            config: load_config() 결과
        """
        server = config.get("server", {}) or {}
        storage = config.get("storage", {}) or {}
        templates = config.get("templates", {}) or {}
        discovery = config.get("discovery", {}) or {}
        logging_config = config.get("logging", {}) or {}

        drop_dir = storage.get("drop_dir")
        template_path = templates.get("path")

        return cls(
            host=server.get("host", DEFAULT_HOST),
            port=int(server.get("port", DEFAULT_PORT)),
            drop_dir=Path(drop_dir) if drop_dir else None,
            max_upload_bytes=storage.get("max_upload_bytes", DEFAULT_MAX_UPLOAD_BYTES),
            chunk_size=int(storage.get("chunk_size", DEFAULT_CHUNK_SIZE)),
            template_source=templates.get("source", TEMPLATE_SOURCE_EMBEDDED),
            template_path=Path(template_path) if template_path else None,
            include_loopback=bool(discovery.get("include_loopback", False)),
            qr_size=int(discovery.get("qr_size", DEFAULT_QR_SIZE)),
            log_level=str(logging_config.get("level", "INFO")).upper(),
        )

    def with_env(self, environ: dict[str, str] | None = None) -> "Settings":
        """FILEDROP_* 환경변수 적용."""
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}

        if env.get("FILEDROP_HOST"):
            overrides["host"] = env["FILEDROP_HOST"]
        if env.get("FILEDROP_PORT"):
            overrides["port"] = int(env["FILEDROP_PORT"])
        if env.get("FILEDROP_DIR"):
            overrides["drop_dir"] = Path(env["FILEDROP_DIR"])
        if env.get("FILEDROP_TEMPLATE_SOURCE"):
            overrides["template_source"] = env["FILEDROP_TEMPLATE_SOURCE"]
        if env.get("FILEDROP_TEMPLATE_PATH"):
            overrides["template_path"] = Path(env["FILEDROP_TEMPLATE_PATH"])
        if env.get("FILEDROP_LOG_LEVEL"):
            overrides["log_level"] = env["FILEDROP_LOG_LEVEL"].upper()

        return replace(self, **overrides) if overrides else self


def load_settings(config_path: Path | None = None) -> Settings:
    """default.yaml + .env + 환경변수 → Settings."""
    load_dotenv()
    return Settings.from_config(load_config(config_path)).with_env()
