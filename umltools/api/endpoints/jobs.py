"""
UML 작업(Job) 실행 API입니다.
작업 문서를 받아 임포트/익스포트 단계를 순서대로 실행하고 단계별 결과를 돌려줍니다.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from umltools.services import get_orchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


class RunJobRequest(BaseModel):
    """작업 실행 요청 (작업 문서 원문)"""
    job: str


@router.post("/run")
async def run_job(request: RunJobRequest) -> dict:
    """
    작업을 실행하는 API입니다.

    작업 문서를 해석할 수 없으면 400을 반환합니다.
    개별 단계의 실패는 결과 목록에 기록되고 요청은 200으로 끝납니다.
    """
    orchestrator = get_orchestrator()
    result = await orchestrator.run_job(request.job)

    logger.info(f"[API] 작업 완료: {result.job_name} (실패 {len(result.failures)}개)")

    return {
        **result.model_dump(mode="json", by_alias=True),
        "succeeded": result.succeeded,
    }
