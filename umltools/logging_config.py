"""로그 출력 형식과 레벨을 설정합니다."""

import logging
from typing import Optional

from umltools.config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    루트 로거를 설정합니다.
    레벨을 지정하지 않으면 설정(log_level)값을 사용합니다.
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
