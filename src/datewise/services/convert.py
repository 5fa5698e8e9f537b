"""ConvertService — UTC/local conversion, validation and Unix timestamps."""

from __future__ import annotations

from datewise.domain.clock import Clock
from datewise.domain.converter import TimeConverter
from datewise.domain.errors import DatewiseError
from datewise.domain.instants import InstantLike
from datewise.services.base import BaseService
from datewise.services.result import ServiceResult
from datewise.services.telemetry import traced


class ConvertService(BaseService):
    """Timezone conversion operations."""

    def __init__(self, clock: Clock) -> None:
        super().__init__(clock)
        self._converter = TimeConverter(clock)

    @traced
    def to_utc(self, value: str, zone: str | None = None) -> ServiceResult:
        op = "to_utc"
        zone = zone or self._clock.zone()
        try:
            utc = self._converter.to_utc(value, zone)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, input=value, zone=zone, result=utc)

    @traced
    def to_local(self, value: InstantLike, zone: str | None = None) -> ServiceResult:
        op = "to_local"
        try:
            local = self._converter.to_local(value, zone)
            utc = self._converter.format(self._converter.parse(value))
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, utc=utc, zone=local.zone, result=local.value)

    @traced
    def now(self, zone: str | None = None) -> ServiceResult:
        op = "now"
        try:
            local = self._converter.now_local(zone)
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(
            op,
            result=self._converter.now_utc(),
            local=local.value,
            zone=local.zone,
        )

    @traced
    def check(self, value: str | None, zone: str | None = None) -> ServiceResult:
        """Describe *value*: zero sentinel, validity and position relative to now."""
        op = "check"
        zero = self._converter.is_zero(value)
        valid = self._converter.is_valid(value)
        data: dict[str, object] = {"input": value, "zero": zero, "valid": valid, "result": valid}
        if valid:
            assert value is not None
            try:
                data.update(
                    utc=self._converter.format(self._converter.parse(value)),
                    past=self._converter.is_past(value),
                    future=self._converter.is_future(value),
                    today=self._converter.is_today(value, zone),
                )
            except DatewiseError as exc:
                return self._failure(op, exc)
        return self._success(op, **data)

    @traced
    def timestamp(self, value: str) -> ServiceResult:
        """Convert between an Instant and Unix seconds, in either direction."""
        op = "timestamp"
        text = value.strip()
        try:
            if text.lstrip("-").isdigit():
                seconds = int(text)
                utc = self._converter.from_timestamp(seconds)
                return self._success(op, timestamp=seconds, utc=utc, result=utc)
            seconds = self._converter.to_timestamp(text)
            utc = self._converter.format(self._converter.parse(text))
        except DatewiseError as exc:
            return self._failure(op, exc)
        return self._success(op, timestamp=seconds, utc=utc, result=seconds)

