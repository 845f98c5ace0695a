"""명령줄 스크립트 모음."""
