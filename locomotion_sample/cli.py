"""Command-line interface for locomotion_sample.

Run:
    python -m locomotion_sample summarize --csv Path.csv
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict

from locomotion_sample.config import DEFAULT_TZ, MAX_WINDOW_SECONDS, MIN_WINDOW_SECONDS, ReplayParams, StatsParams
from locomotion_sample.csv_io import load_track_points
from locomotion_sample.replay import replay_track
from locomotion_sample.report import summarize_samples, write_samples_csv
from locomotion_sample.segment import SampleSegment

logger = logging.getLogger(__name__)


def _params_from_args(args: argparse.Namespace) -> ReplayParams:
    return ReplayParams(
        tz_name=args.tz,
        window_seconds=args.window_seconds,
        max_filtered_accuracy_m=args.max_accuracy_m,
        moving_speed_mps=args.moving_speed_mps,
        stats=StatsParams(
            horizontal_accuracy_floor_m=args.horizontal_floor_m,
            vertical_accuracy_floor_m=args.vertical_floor_m,
        ),
    )


def _replay(args: argparse.Namespace) -> tuple[SampleSegment, ReplayParams, int]:
    params = _params_from_args(args)
    points, summary = load_track_points(args.csv)
    logger.info("读取 %s 行，解析 %s 行", summary.rows_total, summary.rows_parsed)
    return replay_track(points, params), params, len(points)


def _fmt(value: float | None, unit: str = "") -> str:
    return "-" if value is None else f"{value:.3f}{unit}"


def _cmd_summarize(args: argparse.Namespace) -> int:
    segment, params, n_points = _replay(args)
    res = summarize_samples(segment, params.stats)

    print("### 样本")
    print(f"samples={res.samples}, with_location={res.samples_with_location}, points={n_points}")
    print()

    print("### 时长 / 距离")
    print(f"duration={res.duration_hhmmss} ({res.duration_seconds:.1f}s), distance={res.distance_m:.1f}m")
    print()

    print("### 中心点")
    if res.center is not None and res.weighted_center is not None:
        print(f"center=({res.center.latitude:.7f}, {res.center.longitude:.7f})")
        print(f"weighted_center=({res.weighted_center.latitude:.7f}, {res.weighted_center.longitude:.7f})")
    else:
        print("无可用定位")
    if res.radius is not None:
        print(f"radius: mean={res.radius.mean_m:.1f}m, sd={res.radius.sd_m:.1f}m")
    print()

    print("### 海拔 / 精度")
    print(f"weighted_mean_altitude={_fmt(res.weighted_mean_altitude_m, 'm')}")
    if res.horizontal_accuracy is not None:
        print(f"horizontal_accuracy=[{res.horizontal_accuracy.min_m}, {res.horizontal_accuracy.max_m}]")
    if res.vertical_accuracy is not None:
        print(f"vertical_accuracy=[{res.vertical_accuracy.min_m}, {res.vertical_accuracy.max_m}]")
    print()

    print("### 运动状态")
    print(", ".join(f"{k}={v}" for k, v in sorted(res.moving_states.items())) or "-")

    if args.json:
        payload = asdict(res) | {"duration_hhmmss": res.duration_hhmmss}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def _cmd_export_samples(args: argparse.Namespace) -> int:
    segment, _, _ = _replay(args)
    write_samples_csv(segment, args.out)
    print(f"已导出：{args.out}（samples={len(segment)}）")
    return 0


def _add_replay_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--csv", type=str, default="Path.csv", help="输入CSV路径")
    p.add_argument("--tz", type=str, default=DEFAULT_TZ, help="时区（IANA），默认 Asia/Shanghai")
    p.add_argument(
        "--window-seconds",
        type=float,
        default=30.0,
        help=f"每个样本的时间窗长度（秒），范围 [{MIN_WINDOW_SECONDS:g}, {MAX_WINDOW_SECONDS:g}]",
    )
    p.add_argument(
        "--max-accuracy-m",
        type=float,
        default=50.0,
        help="水平精度差于该值的定位点不进入 filtered 列表（米）",
    )
    p.add_argument("--moving-speed-mps", type=float, default=0.8, help="时间窗速度不低于该值视为 moving（米/秒）")
    p.add_argument("--horizontal-floor-m", type=float, default=1.0, help="水平精度加权的下限 ε（米）")
    p.add_argument("--vertical-floor-m", type=float, default=1.0, help="垂直精度加权的下限 ε（米）")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="locomotion_sample", description="把定位轨迹聚合为运动样本并统计")
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="日志级别",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_sum = sub.add_parser("summarize", help="回放轨迹为样本并输出集合统计")
    _add_replay_args(p_sum)
    p_sum.add_argument("--json", action="store_true", help="额外输出JSON（便于后处理）")
    p_sum.set_defaults(func=_cmd_summarize)

    p_exp = sub.add_parser("export-samples", help="回放轨迹为样本并导出 samples.csv")
    _add_replay_args(p_exp)
    p_exp.add_argument("--out", type=str, default="samples.csv", help="输出CSV路径")
    p_exp.set_defaults(func=_cmd_export_samples)

    return p


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
