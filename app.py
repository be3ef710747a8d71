"""
Incinerator Operations Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

from datetime import date

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from incinerator_dashboard.config import (
    FIELD_DISPLAY_NAMES,
    PLANT_COLORS,
    PLANT_NAMES,
    PLANTS,
)
from incinerator_dashboard.dashboard import (
    get_available_dates,
    get_dashboard_overview,
    get_range_statistics,
    get_trend_series,
)
from incinerator_dashboard.downtime import furnace_label
from incinerator_dashboard.forecast import build_trend_forecast
from incinerator_dashboard.kpis import calc_per_furnace_efficiency, classify_pit_status
from incinerator_dashboard.loaders import EXAMPLE_FORMAT, parse_text
from incinerator_dashboard.simulator import generate_downtimes, generate_plant_records
from incinerator_dashboard.transforms import build_daily_totals, build_fact_daily_plant
from incinerator_dashboard.validators import format_validation_errors, validate_date_range, validate_record

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="焚化廠營運儀表板",
    page_icon="🔥",
    layout="wide",
    initial_sidebar_state="expanded",
)

STATUS_COLORS = {
    "green": "#2ecc71",
    "yellow": "#f1c40f",
    "orange": "#f39c12",
    "red": "#e74c3c",
}

ALERT_RENDERERS = {
    "warning": st.error,
    "suggest": st.info,
    "info": st.warning,
}


# ---------------------------------------------------------------------------
# Data loading (cached)
# ---------------------------------------------------------------------------
@st.cache_data
def load_simulated_data():
    return generate_plant_records("2026-01-01", 30), generate_downtimes("2026-01-01")


if "records" not in st.session_state:
    sim_records, sim_downtimes = load_simulated_data()
    st.session_state["records"] = list(sim_records)
    st.session_state["downtimes"] = list(sim_downtimes)

records = st.session_state["records"]
downtimes = st.session_state["downtimes"]

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("焚化廠營運儀表板")
st.sidebar.markdown("每日進廠、焚化與貯坑狀態")
st.sidebar.divider()

page = st.sidebar.radio("Navigate", ["儀表板", "數據輸入", "報表"])

st.sidebar.divider()
st.sidebar.caption("Data: simulated records for 中區廠 / 南區廠 / 仁武廠 / 岡山廠")


# ---------------------------------------------------------------------------
# Helper: metric card
# ---------------------------------------------------------------------------
def metric_card(label: str, value: str, unit: str, note: str, trend: float | None, lower_is_good: bool):
    if trend is None:
        trend_str, color = "無基準", "#95a5a6"
    else:
        good = trend <= 0 if lower_is_good else trend >= 0
        trend_str = f"{trend:+.1f}%"
        color = STATUS_COLORS["green"] if good else STATUS_COLORS["red"]

    st.markdown(
        f"""
        <div style="background: linear-gradient(135deg, {color}22, {color}11);
                    border-left: 4px solid {color};
                    border-radius: 8px; padding: 16px; margin-bottom: 8px;">
            <div style="font-size: 13px; color: #888; font-weight: 600;">{label}</div>
            <div style="font-size: 28px; font-weight: 700; color: #222; margin: 4px 0;">{value} <span style="font-size: 14px; color: #888;">{unit}</span></div>
            <div style="font-size: 13px; color: #666;">
                {note} &nbsp;|&nbsp;
                <span style="color: {color}; font-weight: 600;">{trend_str}</span>
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ===========================================================================
# PAGE: Dashboard
# ===========================================================================
if page == "儀表板":
    st.title("儀表板總覽")

    available_dates = get_available_dates(records)
    if not available_dates:
        st.warning("尚無資料，請前往「數據輸入」頁面新增營運資料")
        st.stop()

    selected = st.date_input(
        "日期",
        value=date.fromisoformat(available_dates[-1]),
        min_value=date.fromisoformat(available_dates[0]),
        max_value=date.fromisoformat(available_dates[-1]),
    )
    overview = get_dashboard_overview(records, selected, downtimes)
    summary = overview["summary"]
    averages = overview["averages"]
    trends = overview["trends"]

    if not summary.plants:
        st.warning("尚無當日資料")
        st.stop()

    for alert in overview["alerts"]:
        ALERT_RENDERERS.get(alert.level, st.info)(f"**{alert.title}** {alert.description}")

    if overview["downtimes"]:
        st.subheader("停機狀態")
        for d in overview["downtimes"]:
            note = f" ({d.notes})" if d.notes else ""
            st.markdown(
                f"- **{d.downtime_type}** {d.plant_name} {furnace_label(d.furnace_number)} "
                f"→ 預計 {d.end:%m/%d %H:%M} 上線{note}"
            )

    cols = st.columns(3)
    with cols[0]:
        metric_card("總進廠量", f"{summary.total_intake:,.0f}", "噸",
                    f"avg7: {averages.avg_intake:,.0f}", trends.intake_trend, True)
    with cols[1]:
        metric_card("總焚化量", f"{summary.total_incineration:,.0f}", "噸",
                    f"avg7: {averages.avg_incineration:,.0f}", trends.incineration_trend, False)
    with cols[2]:
        metric_card("進焚比", f"{summary.intake_ratio:.1f}", "%",
                    f"avg7: {averages.avg_ratio:.1f}%", trends.ratio_trend, True)

    cols = st.columns(3)
    with cols[0]:
        metric_card("平均貯坑容量佔比", f"{summary.avg_pit_storage_pct:.1f}", "%",
                    f"avg7: {averages.avg_pit_storage_pct:.1f}%", trends.pit_storage_trend, True)
    with cols[1]:
        st.metric("總剩餘容量", f"{summary.remaining_capacity:,.0f} 噸")
    with cols[2]:
        st.metric("運轉爐數", f"{summary.furnaces_running} 座", delta=f"停機 {summary.furnaces_stopped} 座",
                  delta_color="off")

    st.divider()

    # Trend chart with projection
    st.subheader("近 7 日趨勢")
    history_records = [r for r in records if r.date and r.date <= overview["date"]]
    trend = get_trend_series(history_records)
    forecast = build_trend_forecast(build_daily_totals(build_fact_daily_plant(history_records)))

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=trend["date"], y=trend["total_intake"], name="進廠量",
                             mode="lines+markers", line=dict(color="#3498db", width=2)))
    fig.add_trace(go.Scatter(x=trend["date"], y=trend["total_incineration"], name="焚化量",
                             mode="lines+markers", line=dict(color="#e74c3c", width=2)))
    if not forecast.empty:
        fig.add_trace(go.Scatter(x=forecast["date"], y=forecast["total_intake"], name="進廠量 (預測)",
                                 mode="lines", line=dict(color="#3498db", dash="dash")))
        fig.add_trace(go.Scatter(x=forecast["date"], y=forecast["total_incineration"], name="焚化量 (預測)",
                                 mode="lines", line=dict(color="#e74c3c", dash="dash")))
    fig.update_layout(height=380, yaxis_title="噸", plot_bgcolor="rgba(0,0,0,0)")
    st.plotly_chart(fig, use_container_width=True)

    # Pit storage by plant
    st.subheader("各廠貯坑佔比")
    colors = [STATUS_COLORS[classify_pit_status(p.pit_storage_pct)] for p in summary.plants]
    fig = go.Figure(go.Bar(
        x=[p.plant_name for p in summary.plants],
        y=[p.pit_storage_pct for p in summary.plants],
        marker_color=colors,
        text=[f"{p.pit_storage_pct:.1f}%" for p in summary.plants],
        textposition="outside",
    ))
    fig.add_hline(y=100, line_dash="dash", line_color="#888")
    fig.update_layout(height=350, yaxis_title="%", plot_bgcolor="rgba(0,0,0,0)")
    st.plotly_chart(fig, use_container_width=True)

    # Plant status cards
    st.subheader("各廠營運狀態")
    cols = st.columns(len(summary.plants))
    for col, plant in zip(cols, summary.plants):
        with col:
            color = STATUS_COLORS[classify_pit_status(plant.pit_storage_pct)]
            days = f"{plant.days_to_full:.1f} 天" if plant.days_to_full is not None else "未趨近滿載"
            eff = f"{plant.per_furnace_efficiency:,.0f} 噸/爐" if plant.per_furnace_efficiency is not None else "—"
            st.markdown(
                f"<div style='border-top: 3px solid {color}; padding: 8px;'>"
                f"<b>{plant.plant_name}</b><br>"
                f"貯坑 {plant.pit_storage:,.0f}/{plant.pit_capacity:,.0f} ({plant.pit_storage_pct:.1f}%)<br>"
                f"進廠 {plant.total_intake:,.0f} / 焚化 {plant.incineration_amount:,.0f}<br>"
                f"爐數 {plant.furnace_count}/{plant.max_furnaces} · {eff}<br>"
                f"預估滿坑: {days}</div>",
                unsafe_allow_html=True,
            )


# ===========================================================================
# PAGE: Data Input
# ===========================================================================
elif page == "數據輸入":
    st.title("數據輸入")

    default_date = st.date_input("預設日期 (文字未含日期時使用)", value=date.today())
    text = st.text_area("貼上營運文字或 CSV", height=240, placeholder=EXAMPLE_FORMAT)

    with st.expander("輸入格式範例"):
        st.code(EXAMPLE_FORMAT)

    if text.strip():
        result = parse_text(text, default_date=default_date)
        if not result.records:
            st.warning("無法辨識任何資料")
        else:
            st.caption(
                f"格式: {result.fmt} · {len(result.records)} 筆 · "
                f"{len(result.complete)} 筆完整 · {len(result.incomplete)} 筆缺漏"
            )

            rows = []
            for record in result.records:
                row = {FIELD_DISPLAY_NAMES[k]: v for k, v in record.to_dict().items() if k in FIELD_DISPLAY_NAMES}
                row["狀態"] = "完整" if record.is_complete else "缺少: " + ", ".join(
                    FIELD_DISPLAY_NAMES[f] for f in record.missing_fields()
                )
                rows.append(row)
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

            invalid = [(r, validate_record(r)) for r in result.records]
            invalid = [(r, errors) for r, errors in invalid if errors]
            for record, errors in invalid:
                st.error(f"{record.plant_name or '?'} {record.date or '?'}:\n{format_validation_errors(errors)}")

            if st.button("儲存", disabled=bool(invalid)):
                st.session_state["records"] = records + result.records
                st.success(f"已新增 {len(result.records)} 筆資料")


# ===========================================================================
# PAGE: Reports
# ===========================================================================
elif page == "報表":
    st.title("報表")

    available_dates = get_available_dates(records)
    if not available_dates:
        st.warning("尚無資料，請前往「數據輸入」頁面新增營運資料")
        st.stop()

    col1, col2, col3 = st.columns(3)
    with col1:
        start = st.date_input("開始日期", value=date.fromisoformat(available_dates[0]))
    with col2:
        end = st.date_input("結束日期", value=date.fromisoformat(available_dates[-1]))
    with col3:
        plant = st.selectbox("廠區", ["all", *PLANT_NAMES])

    range_errors = validate_date_range(start.isoformat(), end.isoformat())
    if range_errors:
        st.error(format_validation_errors(range_errors))
        st.stop()

    filtered, stats = get_range_statistics(records, start.isoformat(), end.isoformat(), plant)

    cols = st.columns(4)
    cols[0].metric("總進廠量", f"{stats.total_intake:,.0f} 噸")
    cols[1].metric("總焚化量", f"{stats.total_incineration:,.0f} 噸")
    cols[2].metric("平均貯坑佔比", f"{stats.average_pit_storage:.1f}%")
    cols[3].metric("筆數", stats.record_count)

    if filtered:
        fact = build_fact_daily_plant(filtered)

        fig = go.Figure()
        for name, group in fact.groupby("plant_name"):
            fig.add_trace(go.Bar(x=group["date"], y=group["total_intake"], name=name,
                                 marker_color=PLANT_COLORS.get(name)))
        fig.update_layout(title="每日進廠量", barmode="stack", height=350,
                          yaxis_title="噸", plot_bgcolor="rgba(0,0,0,0)")
        st.plotly_chart(fig, use_container_width=True)

        # Per-furnace throughput against each plant's standard
        fact["per_furnace"] = [
            calc_per_furnace_efficiency(incineration, furnaces)
            for incineration, furnaces in zip(fact["incineration_amount"], fact["furnace_count"])
        ]
        fig = go.Figure()
        for cfg in PLANTS:
            group = fact[fact["plant_name"] == cfg.name]
            if group.empty:
                continue
            color = PLANT_COLORS.get(cfg.name)
            fig.add_trace(go.Scatter(x=group["date"], y=group["per_furnace"], name=cfg.name,
                                     mode="lines+markers", line=dict(color=color)))
            fig.add_hline(y=cfg.standard_per_furnace, line_dash="dot", line_color=color)
        fig.update_layout(title="單爐焚化量 (虛線為標準值)", height=350,
                          yaxis_title="噸/爐", plot_bgcolor="rgba(0,0,0,0)")
        st.plotly_chart(fig, use_container_width=True)

        st.dataframe(fact, use_container_width=True, hide_index=True)
    else:
        st.info("此區間無資料")
