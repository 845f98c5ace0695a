"""
UML 도구 웹 서버의 메인 진입점 파일입니다.
다이어그램 변환, 코드 생성, 작업 실행 기능을 HTTP API로 제공합니다.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from umltools import __version__
from umltools.config import get_settings
from umltools.api.router import api_router
from umltools.exceptions import (
    UmlToolsError,
    DiagramParseError,
    UnsupportedImporterError,
    JobParseError,
    MissingFieldError,
    InputValidationError,
)
from umltools.logging_config import configure_logging

logger = logging.getLogger(__name__)

# 요청 자체가 잘못된 경우 (400)
CLIENT_ERRORS = (
    DiagramParseError,
    UnsupportedImporterError,
    JobParseError,
    MissingFieldError,
    InputValidationError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션의 생명주기(시작과 종료)를 관리하는 함수입니다.
    """
    # 시작 시: 로그 설정
    configure_logging()
    settings = get_settings()
    logger.info(f"UML 도구가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    logger.info(f"템플릿 폴더: {settings.template_dir}, 출력 폴더: {settings.code_output_dir}")

    yield

    logger.info("UML 도구가 종료됩니다")


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. 기본 앱 정보 설정 (제목, 설명 등)
    2. CORS 설정
    3. API 라우터 연결
    """
    settings = get_settings()

    app = FastAPI(
        title="UML 도구",
        description="다이어그램을 UML 모델로 변환하고 템플릿으로 코드를 생성합니다",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 글로벌 예외 핸들러: 커스텀 예외를 구조화된 JSON 응답으로 변환
    @app.exception_handler(UmlToolsError)
    async def uml_error_handler(request: Request, exc: UmlToolsError):
        status_code = 400 if isinstance(exc, CLIENT_ERRORS) else 500
        return JSONResponse(
            status_code=status_code,
            content={
                "error_code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
                "timestamp": datetime.now().isoformat(),
            },
        )

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error_code": "ERR_INTERNAL",
                "message": "내부 서버 오류가 발생했습니다",
                "details": None,
                "timestamp": datetime.now().isoformat(),
            },
        )

    # API 라우터 포함: /api/v1 주소 아래에 모든 기능을 연결합니다.
    app.include_router(api_router, prefix="/api/v1")

    return app


# 애플리케이션 인스턴스 생성
app = create_app()


@app.get("/")
async def root():
    """
    루트 엔드포인트: 서버의 기본 정보를 반환합니다.
    """
    return {
        "name": "UML 도구",
        "version": __version__,
        "description": "다이어그램 변환 및 템플릿 코드 생성",
        "docs": "/docs",
        "api": "/api/v1",
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "umltools.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
