"""
inventory/registry.py - probe 레지스트리

등록 순서가 유지되는 probe 정의 모음입니다.
등록 순서는 출력(카테고리 내 순서)에만 쓰이며 실행 순서를 보장하지 않습니다.

Example:
    registry = ProbeRegistry()

    @registry.probe("s3-buckets", Category.STORAGE, label="S3 Buckets", service="s3")
    def list_buckets(ctx):
        s3 = ctx.client("s3")
        return [ResourceRecord.of(b["Name"]) for b in s3.list_buckets()["Buckets"]]

    storage_only = registry.select(["storage"])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from core.exceptions import DuplicateNameError, ValidationError
from core.parallel import RetryConfig

from .types import Category, ProbeFetch, ProbeSpec

logger = logging.getLogger(__name__)


class ProbeRegistry:
    """등록 순서가 유지되는 ProbeSpec 모음

    같은 이름의 probe를 두 번 등록하면 DuplicateNameError가 발생합니다.
    """

    def __init__(self, specs: Iterable[ProbeSpec] = ()):
        self._specs: dict[str, ProbeSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: ProbeSpec) -> ProbeSpec:
        """probe 등록

        Raises:
            DuplicateNameError: 같은 이름이 이미 등록된 경우
        """
        if spec.name in self._specs:
            raise DuplicateNameError(spec.name)
        self._specs[spec.name] = spec
        logger.debug("probe 등록: %s (%s)", spec.name, spec.category.value)
        return spec

    def probe(
        self,
        name: str,
        category: Category,
        label: str = "",
        noun: str = "",
        service: str = "",
        retry: RetryConfig | None = None,
    ) -> Callable[[ProbeFetch], ProbeFetch]:
        """fetch 함수를 probe로 등록하는 데코레이터"""

        def decorator(fetch: ProbeFetch) -> ProbeFetch:
            self.register(
                ProbeSpec(
                    name=name,
                    category=category,
                    fetch=fetch,
                    label=label,
                    noun=noun,
                    service=service,
                    retry=retry,
                )
            )
            return fetch

        return decorator

    def all(self) -> list[ProbeSpec]:
        """등록 순서대로 전체 probe 반환"""
        return list(self._specs.values())

    def get(self, name: str) -> ProbeSpec | None:
        return self._specs.get(name)

    def names(self) -> list[str]:
        return list(self._specs)

    def select(self, selectors: Iterable[str]) -> ProbeRegistry:
        """카테고리 이름 또는 probe 이름으로 필터링한 새 레지스트리

        Args:
            selectors: "storage", "Compute", "s3-buckets" 등 (대소문자 무시)

        Returns:
            선택된 probe만 등록 순서대로 담은 ProbeRegistry

        Raises:
            ValidationError: 카테고리/probe 어느 쪽에도 해당하지 않는 값
        """
        categories: set[Category] = set()
        names: set[str] = set()
        lowered = {name.lower(): name for name in self._specs}

        for raw in selectors:
            selector = raw.strip()
            if not selector:
                continue
            category = Category.parse(selector)
            if category is not None:
                categories.add(category)
            elif selector.lower() in lowered:
                names.add(lowered[selector.lower()])
            else:
                expected = ", ".join([c.value for c in Category] + self.names())
                raise ValidationError("only", selector, expected)

        if not categories and not names:
            return ProbeRegistry(self.all())

        return ProbeRegistry(spec for spec in self.all() if spec.category in categories or spec.name in names)

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[ProbeSpec]:
        return iter(self.all())

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __repr__(self) -> str:
        return f"<ProbeRegistry probes={len(self)}>"
