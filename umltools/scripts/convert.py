#!/usr/bin/env python3
"""다이어그램 변환 스크립트.

Usage:
    python -m umltools.scripts.convert <diagram.gliffy> [-o model.json]

다이어그램 하나를 UML 모델로 변환하여 JSON 파일로 저장합니다.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from umltools.config import get_settings
from umltools.exceptions import UmlToolsError
from umltools.layers.layer1_import import ImporterFactory
from umltools.logging_config import configure_logging
from umltools.services import get_file_storage


async def main(diagram_path: Path, output: Optional[Path], importer: Optional[str]) -> int:
    storage = get_file_storage()
    factory = ImporterFactory()

    try:
        document = await storage.read_text(diagram_path)
        if importer:
            selected = factory.get_importer(importer)
        else:
            selected = factory.detect_importer(diagram_path.name) or factory.get_importer(
                get_settings().default_importer
            )
        model = selected.import_model(document, diagram_path.stem)
        location = await storage.save_model(model, output)
    except UmlToolsError as e:
        print(f'[{e.error_code}] {e.message}')
        return 1

    print(f'모델 저장: {location}')
    print(f'  클래스 {len(model.classes)}개, 인터페이스 {len(model.interfaces)}개, '
          f'패키지 {len(model.packages)}개')
    if model.default_package:
        print(f'  기본 패키지: {model.default_package.name}')
    return 0


def run():
    parser = argparse.ArgumentParser(description='다이어그램을 UML 모델(JSON)로 변환합니다.')
    parser.add_argument('diagram', type=Path, help='다이어그램 파일')
    parser.add_argument('-o', '--output', type=Path, default=None,
                        help='저장할 모델 경로 (기본: <uml 폴더>/<이름>.json)')
    parser.add_argument('--importer', default=None, help='임포터 이름 (기본: 확장자로 선택)')
    parser.add_argument('--log-level', default=None, help='로그 레벨 (기본: 설정값)')
    args = parser.parse_args()

    configure_logging(args.log_level)
    sys.exit(asyncio.run(main(args.diagram, args.output, args.importer)))


if __name__ == '__main__':
    run()
