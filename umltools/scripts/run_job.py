#!/usr/bin/env python3
"""UML 작업(Job) 실행 스크립트.

Usage:
    python -m umltools.scripts.run_job <job.json>

작업 문서의 임포트/익스포트 단계를 순서대로 실행하고 단계별 결과를 출력합니다.
실패한 단계가 하나라도 있으면 종료 코드 1을 반환합니다.
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path

from umltools.exceptions import UmlToolsError
from umltools.logging_config import configure_logging
from umltools.models import JobEvent, StepStatus
from umltools.services import get_orchestrator


def print_event(event: JobEvent):
    """진행 상황 출력"""
    if event.event_type == "step_start":
        print(f'  -> {event.step_name}: {event.message}')


async def main(job_path: Path) -> int:
    print('\n' + '=' * 70)
    print(f'작업 실행: {job_path}')
    print('=' * 70)

    try:
        job_text = job_path.read_text(encoding='utf-8')
    except OSError as e:
        print(f'작업 파일을 읽을 수 없습니다: {e}')
        return 1

    start = time.time()
    try:
        result = await get_orchestrator().run_job(job_text, on_progress=print_event)
    except UmlToolsError as e:
        print(f'[{e.error_code}] {e.message}')
        return 1

    print('\n' + '-' * 70)
    print(f'[결과] {result.job_name}')
    print('-' * 70)
    for step in result.results:
        mark = 'OK  ' if step.status == StepStatus.SUCCESS else 'FAIL'
        target = f' -> {step.output_uri}' if step.output_uri else ''
        print(f'  [{mark}] {step.kind.value:6} {step.step_name}{target}')
        if step.status == StepStatus.FAILED:
            print(f'         {step.message}')

    print('\n' + '=' * 70)
    print(f'완료: {len(result.results) - len(result.failures)}/{len(result.results)}개 단계 성공 '
          f'({time.time() - start:.2f}초)')
    print('=' * 70)

    return 0 if result.succeeded else 1


def run():
    parser = argparse.ArgumentParser(description='UML 작업 문서를 실행합니다.')
    parser.add_argument('job', type=Path, help='작업 문서 (JSON)')
    parser.add_argument('--log-level', default=None, help='로그 레벨 (기본: 설정값)')
    args = parser.parse_args()

    configure_logging(args.log_level)
    sys.exit(asyncio.run(main(args.job)))


if __name__ == '__main__':
    run()
