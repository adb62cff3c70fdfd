"""
Web 진입점

실행 방법:
    python -m web

config/secrets.yaml의 mode에 따라 운영/테스트 DB를 사용한다.
"""

import uvicorn

from core.config.loader import get_settings
from core.constants import Defaults

if __name__ == "__main__":
    # 설정 오류는 서버 기동 전에 드러나도록 먼저 로드
    get_settings()

    uvicorn.run(
        "web.app:app",
        host=Defaults.WEB_HOST,
        port=Defaults.WEB_PORT,
        log_level=Defaults.LOG_LEVEL.lower(),
        reload=False,
    )
