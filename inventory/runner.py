"""
inventory/runner.py - probe 병렬 실행기

레지스트리의 모든 probe를 ThreadPoolExecutor로 병렬 실행하고
결과를 RunReport로 모읍니다.

특징:
- 부분 실패 격리: 한 probe의 실패가 다른 probe 결과에 영향을 주지 않음
- 완전성: probe마다 정확히 하나의 ProbeResult (성공 또는 실패)
- 전체 제한 시간: 초과 시 미완료 probe를 timeout 실패로 기록하고 진행
- probe 단위 재시도: ProbeSpec.retry가 있을 때만 지수 백오프 재시도

상태: IDLE -> RUNNING -> COMPLETED (실행기 인스턴스는 1회용)

Example:
    from inventory.runner import run_inventory

    report = run_inventory(registry, ctx, max_workers=8, timeout=120)
    print(f"성공: {len(report.succeeded)}, 실패: {len(report.failed)}")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from core.config import settings
from core.exceptions import ProbeTimeoutError
from core.parallel import ErrorCategory, is_retryable

from .registry import ProbeRegistry
from .types import ProbeContext, ProbeFailure, ProbeResult, ProbeSpec, ResourceRecord, RunReport

logger = logging.getLogger(__name__)


def _clear_exception_chain(e: BaseException) -> None:
    """traceback + chained exception 메모리 누수 방지"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


class RunState(Enum):
    """실행기 상태"""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class RunnerConfig:
    """실행 설정

    Attributes:
        max_workers: 최대 동시 스레드 수 (1 ~ settings.MAX_WORKERS_LIMIT)
        timeout: 전체 실행 제한 시간 (초, None이면 무제한)
    """

    max_workers: int = field(default_factory=lambda: settings.MAX_WORKERS)
    timeout: float | None = field(default_factory=lambda: settings.RUN_TIMEOUT_SECONDS)

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > settings.MAX_WORKERS_LIMIT:
            self.max_workers = settings.MAX_WORKERS_LIMIT
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")


class InventoryRunner:
    """probe 병렬 실행기

    Example:
        runner = InventoryRunner(registry, RunnerConfig(max_workers=4, timeout=60))
        report = runner.run(ctx)

        for result in report.failed:
            print(result.spec.name, result.error)
    """

    def __init__(
        self,
        registry: ProbeRegistry,
        config: RunnerConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """초기화

        Args:
            registry: 실행할 probe 레지스트리
            config: 실행 설정 (None이면 기본값)
            sleep: 재시도 대기 함수 (테스트 주입용)
        """
        self.registry = registry
        self.config = config or RunnerConfig()
        self._sleep = sleep
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        return self._state

    def run(self, context: ProbeContext) -> RunReport:
        """모든 probe를 실행하고 RunReport 반환

        probe 예외는 모두 해당 ProbeResult에 기록되며 여기서 전파되지 않습니다.

        Raises:
            RuntimeError: 이미 실행된 실행기를 다시 실행한 경우
        """
        if self._state is not RunState.IDLE:
            raise RuntimeError(f"runner already {self._state.value}")
        self._state = RunState.RUNNING

        specs = self.registry.all()
        started_at = datetime.now(timezone.utc)
        start_time = time.monotonic()

        logger.info(
            "수집 시작: %d개 probe, max_workers=%d, timeout=%s",
            len(specs),
            self.config.max_workers,
            self.config.timeout,
        )

        settled, timed_out = self._run_all(specs, context) if specs else ({}, False)

        # 출력 결정성을 위해 등록 순서로 재정렬
        results = tuple(settled[spec.name] for spec in specs)
        report = RunReport(
            results=results,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            account_id=context.account_id,
            region=context.region,
            timed_out=timed_out,
        )
        self._state = RunState.COMPLETED

        logger.info(
            "수집 완료: 성공 %d, 실패 %d, 레코드 %d, 총 %.0fms",
            len(report.succeeded),
            len(report.failed),
            report.record_count,
            (time.monotonic() - start_time) * 1000,
        )
        return report

    def _run_all(self, specs: list[ProbeSpec], context: ProbeContext) -> tuple[dict[str, ProbeResult], bool]:
        """워커 풀에 모든 probe를 제출하고 결과 수집 (barrier)

        집계는 호출 스레드에서만 수행하므로 별도 lock이 필요 없습니다.
        """
        settled: dict[str, ProbeResult] = {}
        timed_out = False
        executor = ThreadPoolExecutor(
            max_workers=min(self.config.max_workers, len(specs)),
            thread_name_prefix="probe",
        )

        try:
            futures: dict[Future[ProbeResult], ProbeSpec] = {
                executor.submit(self._execute_single, spec, context): spec for spec in specs
            }

            try:
                for future in as_completed(futures, timeout=self.config.timeout):
                    spec = futures[future]
                    settled[spec.name] = self._settle(spec, future)
            except FuturesTimeoutError:
                timed_out = True
                for future, spec in futures.items():
                    if spec.name in settled:
                        continue
                    if future.done():
                        settled[spec.name] = self._settle(spec, future)
                    else:
                        settled[spec.name] = self._timed_out(spec)
        finally:
            # 제한 시간 초과 시 진행 중인 probe를 기다리지 않음
            executor.shutdown(wait=not timed_out, cancel_futures=True)

        return settled, timed_out

    def _settle(self, spec: ProbeSpec, future: Future[ProbeResult]) -> ProbeResult:
        try:
            return future.result()
        except Exception as e:
            # 예상치 못한 executor 에러
            logger.error("probe 실행 중 예외 [%s]: %s", spec.name, e)
            _clear_exception_chain(e)
            return ProbeResult(
                spec=spec,
                error=ProbeFailure(
                    error_code="ExecutorError",
                    message=str(e),
                    category=ErrorCategory.UNKNOWN,
                ),
            )

    def _timed_out(self, spec: ProbeSpec) -> ProbeResult:
        timeout = self.config.timeout
        if timeout is None:
            raise RuntimeError("timed out without a configured timeout")
        logger.warning("[%s] 제한 시간 %.1f초 초과", spec.name, timeout)
        return ProbeResult(
            spec=spec,
            error=ProbeFailure.from_exception(ProbeTimeoutError(spec.name, timeout)),
            duration_ms=timeout * 1000,
        )

    def _execute_single(self, spec: ProbeSpec, context: ProbeContext) -> ProbeResult:
        """단일 probe 실행 (워커 스레드 내에서 호출)

        ProbeSpec.retry가 있으면 재시도 가능한 에러(throttling, network 등)에
        한해 지수 백오프로 재시도하고, 그 외에는 1회만 시도합니다.

        Returns:
            ProbeResult: 성공 시 레코드, 실패 시 에러 정보 (레코드 없음)
        """
        start_time = time.monotonic()
        max_retries = spec.retry.max_retries if spec.retry else 0

        for attempt in range(max_retries + 1):
            try:
                records = _as_records(spec.fetch(context))
                logger.debug("[%s] %d건 수집", spec.name, len(records))
                return ProbeResult(
                    spec=spec,
                    records=records,
                    duration_ms=(time.monotonic() - start_time) * 1000,
                )

            except Exception as e:
                if spec.retry is None or not is_retryable(e) or attempt >= max_retries:
                    failure = ProbeFailure.from_exception(e, retries=attempt)
                    logger.warning("[%s] 수집 실패: %s", spec.name, failure)
                    _clear_exception_chain(e)
                    return ProbeResult(
                        spec=spec,
                        error=failure,
                        duration_ms=(time.monotonic() - start_time) * 1000,
                    )

                delay = spec.retry.get_delay(attempt)
                logger.debug("[%s] 시도 %d 실패, %.2f초 후 재시도...", spec.name, attempt + 1, delay)
                self._sleep(delay)

        # 도달하지 않음 (마지막 시도는 항상 return)
        raise AssertionError("unreachable")


def _as_records(value: object) -> tuple[ResourceRecord, ...]:
    """fetch 반환값 검증 (ResourceRecord 시퀀스만 허용)"""
    if value is None or isinstance(value, (str, bytes)):
        raise TypeError(f"probe must return a list of ResourceRecord, got {type(value).__name__}")
    records = tuple(value)  # type: ignore[call-overload]
    for record in records:
        if not isinstance(record, ResourceRecord):
            raise TypeError(f"probe returned {type(record).__name__}, expected ResourceRecord")
    return records


def run_inventory(
    registry: ProbeRegistry,
    context: ProbeContext,
    max_workers: int | None = None,
    timeout: float | None = None,
) -> RunReport:
    """수집 편의 함수

    InventoryRunner를 간단하게 사용할 수 있는 래퍼입니다.

    Args:
        registry: probe 레지스트리
        context: ProbeContext
        max_workers: 최대 동시 스레드 수 (None이면 settings)
        timeout: 전체 제한 시간 초 (None이면 settings)

    Returns:
        RunReport
    """
    config = RunnerConfig(
        max_workers=max_workers if max_workers is not None else settings.MAX_WORKERS,
        timeout=timeout if timeout is not None else settings.RUN_TIMEOUT_SECONDS,
    )
    return InventoryRunner(registry, config).run(context)
