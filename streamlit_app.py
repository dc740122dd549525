from __future__ import annotations

from pathlib import Path

import streamlit as st

from locomotion_sample.config import DEFAULT_TZ, MAX_WINDOW_SECONDS, MIN_WINDOW_SECONDS, ReplayParams, StatsParams
from locomotion_sample.csv_io import load_track_points
from locomotion_sample.models import TrackPoint
from locomotion_sample.replay import replay_track
from locomotion_sample.report import summarize_samples
from locomotion_sample.timeutils import format_hhmmss


@st.cache_data(show_spinner=False)
def _load_points(path_csv: str, mtime: float) -> list[TrackPoint]:
    _ = mtime  # part of cache key so updated files reload automatically
    points, _summary = load_track_points(path_csv)
    return points


def _opt(value: float | None, digits: int = 1) -> str:
    return "-" if value is None else f"{value:.{digits}f}"


def main() -> None:
    st.set_page_config(page_title="运动样本：轨迹聚合统计", layout="wide")
    st.title("运动样本：按时间窗聚合轨迹并统计")

    with st.sidebar:
        st.subheader("数据与时区")
        tz_name = st.text_input("时区（IANA）", value=DEFAULT_TZ)
        path_csv = st.text_input("Path.csv 路径", value="Path.csv")

        st.subheader("回放参数")
        window_seconds = st.slider(
            "时间窗（秒）",
            min_value=float(MIN_WINDOW_SECONDS),
            max_value=float(MAX_WINDOW_SECONDS),
            value=30.0,
            step=5.0,
        )
        max_accuracy_m = st.number_input("filtered 最大水平精度（米）", value=50.0, step=5.0)
        moving_speed_mps = st.number_input("moving 速度阈值（米/秒）", value=0.8, step=0.1)

        with st.expander("高级参数（通常不用改）", expanded=False):
            h_floor = st.number_input("水平精度加权下限 ε（米）", value=1.0, min_value=0.1, step=0.5)
            v_floor = st.number_input("垂直精度加权下限 ε（米）", value=1.0, min_value=0.1, step=0.5)

    p = Path(path_csv)
    if not p.exists():
        st.info(f"找不到文件：{path_csv}。可先运行 scripts/generate_sample_path_csv.py 生成示例数据。")
        return

    params = ReplayParams(
        tz_name=tz_name,
        window_seconds=float(window_seconds),
        max_filtered_accuracy_m=float(max_accuracy_m),
        moving_speed_mps=float(moving_speed_mps),
        stats=StatsParams(horizontal_accuracy_floor_m=float(h_floor), vertical_accuracy_floor_m=float(v_floor)),
    )
    points = _load_points(path_csv, p.stat().st_mtime)
    segment = replay_track(points, params)
    res = summarize_samples(segment, params.stats)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("样本数", f"{res.samples}")
    c2.metric("总时长", format_hhmmss(res.duration_seconds))
    c3.metric("总距离（米）", f"{res.distance_m:.0f}")
    c4.metric("加权平均海拔（米）", _opt(res.weighted_mean_altitude_m))

    if res.weighted_center is not None:
        st.write(
            f"加权中心：({res.weighted_center.latitude:.7f}, {res.weighted_center.longitude:.7f})，"
            f"半径均值 {_opt(res.radius.mean_m if res.radius else None)} 米，"
            f"标准差 {_opt(res.radius.sd_m if res.radius else None)} 米"
        )
    st.write("运动状态分布：", res.moving_states)

    rows = []
    for s in segment:
        loc = s.location
        rows.append(
            {
                "time": s.timestamp.isoformat(sep=" "),
                "latitude": loc.latitude if loc else None,
                "longitude": loc.longitude if loc else None,
                "speed_mps": loc.speed_mps if loc else None,
                "course_deg": loc.course_deg if loc else None,
                "moving_state": s.moving_state.value,
                "course_variance": s.course_variance,
                "summary": str(s),
            }
        )
    st.dataframe(rows, use_container_width=True)


if __name__ == "__main__":
    main()
