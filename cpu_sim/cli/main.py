"""CLI entrypoint for workload validation, simulation and comparison."""

from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Any

from cpu_sim.analysis import build_compare_report, compare_report_to_rows
from cpu_sim.core import TraceSimulator
from cpu_sim.io import ConfigError, ConfigLoader
from cpu_sim.model import WorkloadSpec


def _write_jsonl(path: str, rows: list[dict[str, Any]]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False) + "\n")


def _write_json(path: str, payload: dict[str, Any]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _write_events_csv(path: str, rows: list[dict[str, Any]]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    fieldnames = ["event_id", "seq", "correlation_id", "time", "type", "job_id", "core_index", "payload"]
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {
                    **{key: row.get(key) for key in fieldnames[:-1]},
                    "payload": json.dumps(row.get("payload", {}), ensure_ascii=False),
                }
            )


def _write_rows_csv(path: str, rows: list[dict[str, Any]]) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    fieldnames: list[str] = []
    for row in rows:
        for key in row:
            if key not in fieldnames:
                fieldnames.append(key)
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _read_json(path: str) -> dict[str, Any]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ConfigError(f"metrics file must be object: {path}")
    return payload


def _apply_overrides(loader: ConfigLoader, spec: WorkloadSpec, args: argparse.Namespace) -> WorkloadSpec:
    if args.cores is None and args.scheduler is None and args.quantum is None:
        return spec
    payload = spec.model_dump(mode="json")
    if args.cores is not None:
        payload["platform"]["core_count"] = args.cores
    if args.scheduler is not None:
        payload["scheduler"]["name"] = args.scheduler
    if args.quantum is not None:
        payload["scheduler"]["params"]["quantum"] = args.quantum
    return loader.load_data(payload)


def cmd_validate(args: argparse.Namespace) -> int:
    loader = ConfigLoader()
    try:
        spec = loader.load(args.config)
    except ConfigError as exc:
        print(f"[ERROR] {args.config}: {exc}")
        return 1
    try:
        # Scheduler name and quantum are only resolved when the driver is built.
        TraceSimulator().build(spec)
    except ValueError as exc:
        print(f"[ERROR] {args.config}: {exc}")
        return 1
    print("[OK] config validation passed")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    loader = ConfigLoader()
    try:
        spec = _apply_overrides(loader, loader.load(args.config), args)
    except ConfigError as exc:
        print(f"[ERROR] {exc}")
        return 1
    if args.until is not None and args.until <= 0:
        print("[ERROR] --until must be > 0")
        return 1

    simulator = TraceSimulator()
    try:
        simulator.build(spec)
    except ValueError as exc:
        print(f"[ERROR] {exc}")
        return 1
    simulator.run(until=args.until)

    events = [event.model_dump(mode="json") for event in simulator.events]
    metrics = simulator.metric_report()
    simulator.engine.shutdown()

    events_out = args.events_out or "artifacts/events.jsonl"
    metrics_out = args.metrics_out or "artifacts/metrics.json"
    _write_jsonl(events_out, events)
    _write_json(metrics_out, metrics)
    if args.events_csv_out:
        _write_events_csv(args.events_csv_out, events)

    print(
        f"[OK] simulation completed, scheduler={spec.scheduler.name}, "
        f"cores={spec.platform.core_count}, events={len(events)}, now={simulator.now}"
    )
    print(f"Average waiting time    : {metrics['avg_wait_time']:.2f}")
    print(f"Average turnaround time : {metrics['avg_turnaround_time']:.2f}")
    print(f"Average response time   : {metrics['avg_response_time']:.2f}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    try:
        left_metrics = _read_json(args.left_metrics)
        right_metrics = _read_json(args.right_metrics)
    except (OSError, json.JSONDecodeError, ConfigError) as exc:
        print(f"[ERROR] {exc}")
        return 1

    report = build_compare_report(
        left_metrics,
        right_metrics,
        left_label=args.left_label or "left",
        right_label=args.right_label or "right",
    )
    if args.out_json:
        _write_json(args.out_json, report)
    if args.out_csv:
        _write_rows_csv(args.out_csv, compare_report_to_rows(report))

    print(
        "[OK] metrics compare completed, "
        f"left={args.left_metrics}, right={args.right_metrics}, "
        f"json={args.out_json or '-'}, csv={args.out_csv or '-'}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cpu-sim", description="CPU scheduling simulation CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="validate workload file")
    validate_parser.add_argument("-c", "--config", required=True, help="path to workload YAML/JSON")
    validate_parser.set_defaults(func=cmd_validate)

    run_parser = subparsers.add_parser("run", help="run simulation")
    run_parser.add_argument("-c", "--config", required=True, help="path to workload YAML/JSON")
    run_parser.add_argument("--until", type=int, default=None, help="override simulation horizon")
    run_parser.add_argument("--cores", type=int, default=None, help="override platform.core_count")
    run_parser.add_argument("-s", "--scheduler", default=None, help="override scheduler.name")
    run_parser.add_argument("-q", "--quantum", type=int, default=None, help="override scheduler.params.quantum")
    run_parser.add_argument("--events-out", default=None, help="path to write JSONL events")
    run_parser.add_argument("--events-csv-out", default=None, help="path to write CSV events")
    run_parser.add_argument("--metrics-out", default=None, help="path to write metric JSON")
    run_parser.set_defaults(func=cmd_run)

    compare_parser = subparsers.add_parser("compare", help="compare two metrics json files")
    compare_parser.add_argument("--left-metrics", required=True, help="left metrics JSON path")
    compare_parser.add_argument("--right-metrics", required=True, help="right metrics JSON path")
    compare_parser.add_argument("--left-label", default="left", help="left side label")
    compare_parser.add_argument("--right-label", default="right", help="right side label")
    compare_parser.add_argument("--out-json", default=None, help="compare report JSON path")
    compare_parser.add_argument("--out-csv", default=None, help="compare rows CSV path")
    compare_parser.set_defaults(func=cmd_compare)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
