"""Use case to cache the last analysis result in a key-value store."""

from dataclasses import asdict
from decimal import Decimal
import json
from typing import Any

from src.application.ports.key_value_store import KeyValueStorePort
from src.domain.models import (
    AnalysisResult,
    DateRange,
    FeeBreakdown,
    KPISet,
    PeriodBucket,
    Position,
)
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_STORAGE_KEY = "portfolio-analyzer:last-result"

_KPI_COUNTERS = ("perf_pct", "unclassified_count", "fees")


def _encode(value: Any) -> str:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Unsupported value for JSON: {type(value).__name__}")


def result_to_payload(result: AnalysisResult) -> dict[str, Any]:
    """Convert a result to JSON-ready data, adding realized P&L."""
    payload = asdict(result)
    for position, raw in zip(result.positions, payload["positions"]):
        raw["realized"] = position.realized
    return payload


def _decimals(raw: dict[str, Any], skip: tuple[str, ...] = ()) -> dict:
    return {
        key: Decimal(str(value))
        for key, value in raw.items()
        if key not in skip
    }


def _bucket(raw: dict[str, Any]) -> PeriodBucket:
    return PeriodBucket(period=raw["period"], **_decimals(raw, ("period",)))


def result_from_payload(payload: dict[str, Any]) -> AnalysisResult:
    """Rebuild a result from data produced by ``result_to_payload``."""
    raw_kpis = payload["kpis"]
    kpis = KPISet(
        fees=FeeBreakdown(**_decimals(raw_kpis["fees"])),
        perf_pct=float(raw_kpis["perf_pct"]),
        unclassified_count=int(raw_kpis["unclassified_count"]),
        **_decimals(raw_kpis, _KPI_COUNTERS),
    )
    positions = [
        Position(
            symbol=raw["symbol"],
            name=raw.get("name", ""),
            buys=Decimal(str(raw["buys"])),
            sells=Decimal(str(raw["sells"])),
            dividends=Decimal(str(raw["dividends"])),
            trade_count=int(raw["trade_count"]),
        )
        for raw in payload["positions"]
    ]
    date_range = payload.get("date_range")
    return AnalysisResult(
        broker=payload["broker"],
        format=payload["format"],
        sheet_names=list(payload["sheet_names"]),
        col_mapping=dict(payload["col_mapping"]),
        unverified_columns=list(payload["unverified_columns"]),
        kpis=kpis,
        positions=positions,
        months=[_bucket(raw) for raw in payload["months"]],
        quarters=[_bucket(raw) for raw in payload["quarters"]],
        years=[_bucket(raw) for raw in payload["years"]],
        accounts=list(payload["accounts"]),
        date_range=DateRange(**date_range) if date_range else None,
    )


class CacheAnalysisResultUseCase:
    """Save, load, and clear the cached analysis result."""

    def __init__(
        self,
        store: KeyValueStorePort,
        storage_key: str = DEFAULT_STORAGE_KEY,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Key-value store port.
            storage_key: Fixed key of the cached blob.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._storage_key = storage_key
        self._logger = logger or get_app_logger()

    def save(self, result: AnalysisResult) -> None:
        """Serialize the result as JSON and store it."""
        blob = json.dumps(result_to_payload(result), default=_encode)
        self._store.set(self._storage_key, blob)
        self._logger.info(
            f"Cached analysis result under '{self._storage_key}' "
            f"({len(blob)} bytes)"
        )

    def load(self) -> AnalysisResult | None:
        """Return the cached result, or None when absent or unreadable."""
        stored = self._store.get(self._storage_key)
        if stored is None:
            return None
        try:
            return result_from_payload(json.loads(stored.value))
        except (ValueError, KeyError, TypeError, ArithmeticError) as exc:
            self._logger.warning(
                f"Ignoring unreadable cached result '{self._storage_key}': "
                f"{exc}"
            )
            return None

    def clear(self) -> None:
        """Remove the cached result."""
        self._store.delete(self._storage_key)


__all__ = [
    "CacheAnalysisResultUseCase",
    "DEFAULT_STORAGE_KEY",
    "result_to_payload",
    "result_from_payload",
]
