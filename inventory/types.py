"""
inventory/types.py - 인벤토리 수집 데이터 모델

probe 정의, 수집 레코드, 실행 결과 타입을 정의합니다.
모든 결과 타입은 불변이며 실행이 끝나면 폐기됩니다 (영속화 없음).

구성:
    - Category: 리소스 카테고리 (출력 그룹 순서 = 선언 순서)
    - ResourceRecord: 리소스 1건 (id + 속성)
    - ProbeSpec: probe 정의 (이름, 카테고리, fetch 함수)
    - ProbeFailure: probe 실패 정보
    - ProbeResult: probe 1회 실행 결과
    - RunReport: 한 번의 수집 실행 전체 결과
    - ProbeContext: probe에 전달되는 AWS 접근 컨텍스트
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from core.parallel import (
    ErrorCategory,
    RetryConfig,
    categorize_error,
    get_client,
    get_error_code,
    get_error_message,
)

if TYPE_CHECKING:
    import boto3

AttributeValue = Union[str, int, float, bool]


class Category(Enum):
    """리소스 카테고리

    선언 순서가 텍스트 출력의 그룹 순서입니다.
    """

    COMPUTE = "Compute"
    STORAGE = "Storage"
    NETWORKING = "Networking"
    DATABASE = "Database"
    MONITORING = "Monitoring"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> Category | None:
        """이름/값으로 카테고리 조회 (대소문자 무시)"""
        needle = value.strip().lower()
        for member in cls:
            if needle in (member.value.lower(), member.name.lower()):
                return member
        return None


def _normalize_value(value: Any) -> AttributeValue:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


@dataclass(frozen=True)
class ResourceRecord:
    """수집된 리소스 1건

    Attributes:
        id: 프로바이더가 반환한 고유 식별자
        attributes: 순서가 유지되는 속성 (CreationTime, Arn 등)
    """

    id: str
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict)

    @classmethod
    def of(cls, resource_id: Any, **attributes: Any) -> ResourceRecord:
        """AWS 응답 값으로 레코드 생성

        None 속성은 제외하고, datetime은 ISO-8601 문자열로 변환합니다.
        """
        normalized = {key: _normalize_value(value) for key, value in attributes.items() if value is not None}
        return cls(id=str(resource_id), attributes=normalized)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "attributes": dict(self.attributes)}


class ProbeContext:
    """probe에 전달되는 AWS 접근 컨텍스트

    하나의 boto3 Session을 여러 워커 스레드가 공유하므로
    client 생성은 lock으로 직렬화합니다 (Session.client는 스레드 세이프하지 않음).
    생성된 client 자체는 스레드 간 공유해도 안전합니다.

    Attributes:
        session: boto3 Session
        region: 대상 리전
        account_id: sts:GetCallerIdentity로 확인된 계정 ID
    """

    def __init__(
        self,
        session: boto3.Session,
        region: str,
        account_id: str = "",
        client_factory: Callable[..., Any] = get_client,
    ):
        self.session = session
        self.region = region
        self.account_id = account_id
        self._client_factory = client_factory
        self._lock = threading.Lock()

    def client(self, service_name: str, region_name: str | None = None) -> Any:
        """서비스별 boto3 client 생성"""
        with self._lock:
            return self._client_factory(self.session, service_name, region_name=region_name or self.region)

    def __repr__(self) -> str:
        return f"<ProbeContext account={self.account_id!r} region={self.region!r}>"


ProbeFetch = Callable[[ProbeContext], list[ResourceRecord]]


@dataclass(frozen=True)
class ProbeSpec:
    """probe 정의 (등록 후 불변)

    Attributes:
        name: 고유 식별자 (kebab-case, 예: "ec2-instances")
        category: 리소스 카테고리
        fetch: (ProbeContext) -> list[ResourceRecord] 원격 조회 함수
        label: 제목에 쓰이는 이름 (예: "EC2 Instances"), 기본값은 name
        noun: 빈 결과 문구에 쓰이는 복수 명사 (예: "EC2 instances"), 기본값은 label
        service: AWS 서비스 이름 (로깅용)
        retry: probe 단위 재시도 설정 (None이면 1회 시도)
    """

    name: str
    category: Category
    fetch: ProbeFetch = field(compare=False)
    label: str = ""
    noun: str = ""
    service: str = ""
    retry: RetryConfig | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("probe name must not be empty")
        if not isinstance(self.category, Category):
            raise TypeError(f"category must be Category, got {type(self.category).__name__}")
        if not self.label:
            object.__setattr__(self, "label", self.name)
        if not self.noun:
            object.__setattr__(self, "noun", self.label)


@dataclass(frozen=True)
class ProbeFailure:
    """probe 실패 정보

    Attributes:
        error_code: AWS 에러 코드 또는 예외 클래스명
        message: 에러 메시지
        category: 에러 카테고리
        retries: 실패 전까지 수행한 재시도 횟수
    """

    error_code: str
    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN
    retries: int = 0

    @classmethod
    def from_exception(cls, error: Exception, retries: int = 0) -> ProbeFailure:
        return cls(
            error_code=get_error_code(error),
            message=get_error_message(error),
            category=categorize_error(error),
            retries=retries,
        )

    @property
    def is_timeout(self) -> bool:
        return self.category == ErrorCategory.TIMEOUT

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "retries": self.retries,
        }


@dataclass(frozen=True)
class ProbeResult:
    """probe 1회 실행 결과

    실패한 probe는 부분 레코드를 가질 수 없습니다
    (error가 있으면 records는 비어 있음).
    """

    spec: ProbeSpec
    records: tuple[ResourceRecord, ...] = ()
    error: ProbeFailure | None = None
    duration_ms: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.records, tuple):
            object.__setattr__(self, "records", tuple(self.records))
        if self.error is not None and self.records:
            raise ValueError(f"failed probe '{self.spec.name}' must not carry records")

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def ids(self) -> list[str]:
        return [record.id for record in self.records]

    def __str__(self) -> str:
        status = "OK" if self.success else "FAIL"
        return f"[{self.spec.name}] {status} ({self.duration_ms:.0f}ms)"


@dataclass(frozen=True)
class RunReport:
    """한 번의 수집 실행 결과

    results는 레지스트리 등록 순서를 따릅니다.
    timed_out은 전체 제한 시간이 지나 미완료 probe가 남았는지 여부입니다.
    """

    results: tuple[ProbeResult, ...] = ()
    started_at: datetime | None = None
    finished_at: datetime | None = None
    account_id: str = ""
    region: str = ""
    timed_out: bool = False

    @property
    def succeeded(self) -> list[ProbeResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[ProbeResult]:
        return [r for r in self.results if not r.success]

    @property
    def record_count(self) -> int:
        return sum(len(r.records) for r in self.results)

    @property
    def duration_ms(self) -> float:
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds() * 1000

    def has_failures(self) -> bool:
        return any(not r.success for r in self.results)

    def get(self, name: str) -> ProbeResult | None:
        for result in self.results:
            if result.spec.name == name:
                return result
        return None

    def grouped(self) -> list[tuple[Category, list[ProbeResult]]]:
        """카테고리 선언 순서 → 등록 순서로 그룹핑 (결과 없는 카테고리 제외)"""
        groups: dict[Category, list[ProbeResult]] = {}
        for result in self.results:
            groups.setdefault(result.spec.category, []).append(result)
        return [(category, groups[category]) for category in Category if category in groups]

    def ordered(self) -> list[ProbeResult]:
        """출력 순서로 정렬된 결과"""
        return [result for _, results in self.grouped() for result in results]
