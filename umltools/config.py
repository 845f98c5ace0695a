from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    """

    # 경로 설정: 상대 경로는 모두 workspace_root 기준으로 해석됩니다.
    workspace_root: str = "."
    template_dir: str = "template"  # 코드 템플릿 파일 위치
    uml_output_dir: str = "generated/uml"  # 변환된 모델(JSON) 저장 위치
    code_output_dir: str = "generated"  # 생성된 코드 저장 위치

    # 임포트/작업 설정
    default_importer: str = "gliffy.Importer"
    # 작업 문서의 ${key} 파라미터를 채우는 외부 설정값 (예: {"project": {"name": "demo"}})
    job_parameters: dict = {}
    not_found_marker: str = "not-found"  # 파라미터를 찾지 못했을 때 넣는 값

    # 로그 설정
    log_level: str = "INFO"

    # 서버 설정: 서버가 실행될 주소와 포트 번호
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = ["*"]

    class Config:
        # 설정을 읽어올 파일 지정
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    """
    return Settings()
