# core/auth/__init__.py
"""
AWS 인증 모듈 (core/auth)

자격 증명 획득은 boto3 표준 체인에 맡기고, 이 모듈은 세션 생성과
실행 전 자격 증명 확인(sts:GetCallerIdentity)만 담당합니다.

사용 예시:
    from core.auth import get_session, verify_identity

    session = get_session("my-profile", "ap-northeast-2")
    identity = verify_identity(session)  # 실패 시 PreconditionError

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 boto3가 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    "get_session",
    "verify_identity",
]

_IMPORT_MAPPING = {
    "get_session": (".session", "get_session"),
    "verify_identity": (".session", "verify_identity"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
