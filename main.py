"""
main.py - aws-inventory 실행 진입점

`aws-inventory` 콘솔 스크립트와 소스 체크아웃에서의 `python main.py` 실행을 모두 지원합니다.
"""

import sys
from pathlib import Path

# 설치 없이 실행할 때 프로젝트 루트를 import 경로에 추가
_PROJECT_ROOT = Path(__file__).resolve().parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from cli.app import cli  # noqa: E402


def main() -> None:
    """aws-inventory CLI 실행 (종료 코드는 click이 처리)"""
    cli(prog_name="aws-inventory")


if __name__ == "__main__":
    main()
