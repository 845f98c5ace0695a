"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.
"""

from fastapi import APIRouter

from umltools.api.endpoints import health, uml, jobs

# 메인 API 라우터 생성
api_router = APIRouter()

# 헬스 체크 엔드포인트: 서버 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 변환/생성 엔드포인트: 다이어그램 변환, 코드 생성 (/import, /export)
api_router.include_router(
    uml.router,
    tags=["uml"]
)

# 작업 엔드포인트: 작업 문서 실행 (/jobs)
api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["jobs"]
)
