"""Metric comparison helpers for two simulation runs."""

from __future__ import annotations

from typing import Any


DEFAULT_SCALAR_KEYS: tuple[str, ...] = (
    "jobs_arrived",
    "jobs_completed",
    "avg_wait_time",
    "avg_turnaround_time",
    "avg_response_time",
    "dispatch_count",
    "preempt_count",
    "quantum_expiry_count",
    "event_count",
    "max_time",
)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _diff_row(left_value: float, right_value: float) -> dict[str, float]:
    delta = right_value - left_value
    delta_ratio = (delta / left_value * 100.0) if abs(left_value) > 1e-12 else 0.0
    return {"left": left_value, "right": right_value, "delta": delta, "delta_ratio_pct": delta_ratio}


def _build_scalar_rows(
    left: dict[str, Any],
    right: dict[str, Any],
    *,
    keys: tuple[str, ...],
) -> list[dict[str, Any]]:
    return [
        {"metric": key, **_diff_row(_to_float(left.get(key)), _to_float(right.get(key)))}
        for key in keys
    ]


def _build_core_rows(left: dict[str, Any], right: dict[str, Any]) -> list[dict[str, Any]]:
    left_core = left.get("core_utilization")
    right_core = right.get("core_utilization")
    left_map = left_core if isinstance(left_core, dict) else {}
    right_map = right_core if isinstance(right_core, dict) else {}
    core_keys = sorted(set(left_map) | set(right_map), key=lambda key: (len(str(key)), str(key)))
    return [
        {
            "core_index": str(core_key),
            **_diff_row(_to_float(left_map.get(core_key)), _to_float(right_map.get(core_key))),
        }
        for core_key in core_keys
    ]


def build_compare_report(
    left_metrics: dict[str, Any],
    right_metrics: dict[str, Any],
    *,
    left_label: str = "left",
    right_label: str = "right",
    scalar_keys: tuple[str, ...] = DEFAULT_SCALAR_KEYS,
) -> dict[str, Any]:
    """Build a deterministic metric diff report for two runs, e.g. two disciplines on one workload."""

    return {
        "left_label": left_label,
        "right_label": right_label,
        "scalar_metrics": _build_scalar_rows(left_metrics, right_metrics, keys=scalar_keys),
        "core_utilization": _build_core_rows(left_metrics, right_metrics),
    }


def compare_report_to_rows(report: dict[str, Any]) -> list[dict[str, Any]]:
    """Flatten compare report to CSV-friendly rows."""

    rows: list[dict[str, Any]] = []
    for item in report.get("scalar_metrics", []):
        if isinstance(item, dict):
            rows.append({"category": "scalar", **item})
    for item in report.get("core_utilization", []):
        if isinstance(item, dict):
            rows.append({"category": "core_utilization", "metric": item.get("core_index", ""), **item})
    return rows
