"""

API 서버 실행 스크립트.

- .env / 환경 변수의 HOST, PORT, LOG_LEVEL 로 uvicorn 실행

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.run_server

"""

import uvicorn

from app.core.config import settings


def main():
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
