"""
logging.py

애플리케이션 로깅 초기화.

- 모듈별 로거는 "userregistry.<영역>" 이름으로 생성
- 포맷/레벨 설정은 앱 시작 시 한 번만 수행

"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
