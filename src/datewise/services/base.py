"""BaseService — shared foundation for all datewise services.

Every service receives a :class:`Clock` at construction time and builds
the domain components it needs from it.  Domain errors are caught at
this boundary and converted into ``ServiceError`` payloads.
"""

from __future__ import annotations

import logging
from typing import Any

from datewise.domain.clock import Clock
from datewise.domain.errors import DatewiseError
from datewise.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ConvertService(BaseService):
            def to_utc(self, value: str) -> ServiceResult:
                op = "to_utc"
                try:
                    utc = self._converter.to_utc(value)
                except DatewiseError as exc:
                    return self._failure(op, exc)
                return self._success(op, result=utc)
    """

    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    @property
    def clock(self) -> Clock:
        return self._clock

    @staticmethod
    def _success(op: str, *, warnings: list[str] | None = None, **data: Any) -> ServiceResult:
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [])

    @staticmethod
    def _failure(op: str, exc: DatewiseError) -> ServiceResult:
        logger.debug("%s failed: [%s] %s", op, exc.code, exc.message)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=exc.code,
                message=exc.message,
                detail={k: _jsonable(v) for k, v in exc.detail.items()},
            ),
        )


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(v) for v in value]
    return str(value)
