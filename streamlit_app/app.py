"""Gut Protocol Planner — Streamlit dashboard.

Run with:
    streamlit run streamlit_app/app.py

Data lives in PROTOCOL_DATA_DIR (default ~/.gut_protocol).
"""

from __future__ import annotations

from datetime import date, datetime, time

import streamlit as st

from protocol_engine.analysis import generate_analysis
from protocol_engine.engine import ProtocolEngine
from protocol_engine.exceptions import InvalidSessionRequest
from protocol_engine.insights import aggregate_tips
from protocol_engine.models.enums import (
    AdhocType,
    DurationBucket,
    FutureEventType,
    Intensity,
    SessionStatus,
    SessionTimeBucket,
    TravelMode,
)
from protocol_engine.models.log_entry import SessionFeedback
from protocol_engine.models.trace import PhaseStatus
from protocol_store import LocalStore
from scheduler.config import DATA_DIR

from helpers import (
    ADHOC_TYPE_LABELS,
    DURATION_LABELS,
    EVENT_TYPE_COLORS,
    EVENT_TYPE_ICONS,
    INTENSITY_LABELS,
    KNOWN_DIAGNOSES,
    KNOWN_INTOLERANCES,
    SESSION_TIME_LABELS,
    THEME_COLORS,
    build_profile,
    build_regeneration_context,
    build_session_context,
    build_travel_plan,
    day_heading,
    group_events_by_day,
    risk_badge,
    split_detail,
    target_start,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Gut Protocol Planner",
    page_icon="🏃",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Cached resources
# ---------------------------------------------------------------------------


@st.cache_resource
def get_engine() -> ProtocolEngine:
    return ProtocolEngine()


@st.cache_resource
def get_store() -> LocalStore:
    return LocalStore(DATA_DIR)


engine = get_engine()
store = get_store()


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_plan(plan) -> None:
    """Render a plan: themed banner, recall line, then events grouped by day."""
    color = THEME_COLORS.get(plan.banner_theme, "#CCCCCC")
    st.markdown(
        f'<div style="background:{color};padding:12px 16px;border-radius:6px;'
        f'color:white;font-weight:600;">{plan.headline}</div>',
        unsafe_allow_html=True,
    )
    if plan.memory_context:
        st.info(plan.memory_context)

    today = date.today()
    for day, events in group_events_by_day(plan):
        st.subheader(day_heading(day, today))
        for event in events:
            icon = EVENT_TYPE_ICONS.get(event.type, "•")
            badge = risk_badge(event)
            title = f"{icon} **{event.time_markup}** — {event.label}: {event.title}"
            if badge:
                title += f"  `{badge}`"
            with st.expander(title, expanded=False):
                bar = EVENT_TYPE_COLORS.get(event.type, "#CCCCCC")
                st.markdown(
                    f'<div style="height:4px;background:{bar};margin-bottom:8px;"></div>',
                    unsafe_allow_html=True,
                )
                for line in event.details:
                    key, value = split_detail(line)
                    st.markdown(f"**{key}:** {value}" if key else value)
                st.caption(f"Status: {event.status.value}")


def _render_trace(trace) -> None:
    """Render a GenerationTrace with color-coded phase results."""
    status_icons = {
        PhaseStatus.FIRED: "🟢",
        PhaseStatus.SKIPPED: "🟠",
        PhaseStatus.NOT_APPLICABLE: "⚪",
    }
    for result in trace.phase_results:
        icon = status_icons.get(result.status, "⚪")
        st.markdown(
            f"{icon} **{result.phase_id}** — _{result.status.name}_: {result.explanation}"
        )
    if trace.dropped_stale:
        st.caption(f"{trace.dropped_stale} events older than 24h were dropped.")


# ---------------------------------------------------------------------------
# Sidebar — Athlete Profile
# ---------------------------------------------------------------------------

stored_profile = store.get_profile()

st.sidebar.title("Athlete Profile")

with st.sidebar.expander("Body", expanded=True):
    name = st.text_input("Name", value=(stored_profile.name if stored_profile else "") or "")
    weight_kg = st.number_input(
        "Weight (kg)", 30.0, 200.0,
        float(stored_profile.weight_kg if stored_profile else 70.0), step=0.5,
    )
    height_cm = st.number_input(
        "Height (cm)", 120.0, 230.0,
        float((stored_profile.height_cm if stored_profile else None) or 175.0), step=1.0,
    )
    gender = st.selectbox(
        "Gender", ["male", "female"],
        index=1 if stored_profile and stored_profile.gender.value == "female" else 0,
    )

with st.sidebar.expander("Medical", expanded=True):
    intolerances = st.multiselect(
        "Intolerances", KNOWN_INTOLERANCES,
        default=[i.name for i in stored_profile.intolerances if i.name in KNOWN_INTOLERANCES]
        if stored_profile else [],
    )
    diagnoses = st.multiselect(
        "Diagnoses", KNOWN_DIAGNOSES,
        default=[d for d in stored_profile.diagnoses if d in KNOWN_DIAGNOSES]
        if stored_profile else [],
    )

profile = build_profile(
    weight_kg=weight_kg,
    gender=gender,
    height_cm=height_cm,
    name=name,
    intolerances=intolerances,
    diagnoses=diagnoses,
    base=stored_profile,
)

if st.sidebar.button("Save Profile"):
    store.save_profile(profile)
    st.sidebar.success("Profile saved")


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------

st.title("Gut Protocol Planner")

tab_checkin, tab_active, tab_calendar, tab_history, tab_tips = st.tabs(
    ["Check-In", "Active Protocol", "Calendar", "History", "Tips"]
)

# --- Check-In ---
with tab_checkin:
    col_a, col_b = st.columns(2)
    with col_a:
        session_time = st.selectbox(
            "When is the session?", list(SessionTimeBucket),
            format_func=lambda b: SESSION_TIME_LABELS[b], index=3,
        )
        use_custom_start = st.checkbox("Set an exact start time")
        start_time = None
        if use_custom_start:
            start_day = st.date_input("Start date", value=date.today())
            start_clock = st.time_input("Start time", value=time(9, 0))
            start_time = datetime.combine(start_day, start_clock)
        intensity = st.selectbox(
            "Intensity", list(Intensity), format_func=lambda i: INTENSITY_LABELS[i], index=2,
        )
        duration = st.selectbox(
            "Duration", list(DurationBucket), format_func=lambda d: DURATION_LABELS[d], index=1,
        )
        custom_minutes = st.number_input("Custom duration (min, 0 = use bucket)", 0, 1440, 0)
    with col_b:
        gut_scale = st.slider("Gut state (1 = flare, 10 = perfect)", 1, 10, 8)
        lead_time_days = st.slider("Prep horizon (days)", 0, 14, 3)
        title = st.text_input("Session name", value="")
        is_traveling = st.checkbox("Travelling before the session")
        travel = None
        if is_traveling:
            mode = st.selectbox("Mode", [m.value for m in TravelMode])
            travel_day = st.date_input("Departure date", value=date.today(), key="travel_day")
            travel_clock = st.time_input("Departure time", value=time(7, 0), key="travel_clock")
            travel_hours = st.number_input("Travel hours", 0.0, 24.0, 2.0, step=0.5)
            travel = build_travel_plan(
                True, mode, datetime.combine(travel_day, travel_clock), travel_hours,
            )

    if st.button("Generate Protocol", type="primary"):
        now = datetime.now()
        try:
            ctx = build_session_context(
                now=now,
                session_time=session_time,
                intensity=intensity,
                duration=duration,
                gut_scale=gut_scale,
                start_time=start_time,
                custom_minutes=custom_minutes or None,
                lead_time_days=lead_time_days,
                profile=profile,
                travel=travel,
                history=store.get_logs(),
            )
        except InvalidSessionRequest as exc:
            st.error(str(exc))
        else:
            start = target_start(now, ctx)
            if store.check_conflict(start, ctx.duration_minutes):
                st.warning("This overlaps a session that is already planned.")
            plan, trace = engine.generate_with_trace(ctx)
            store.save_log(
                ctx.session_time,
                ctx.intensity,
                ctx.duration,
                ctx.gut_scale,
                plan=plan,
                travel=travel,
                title=title or None,
                target_start_time=start,
                lead_time_days=lead_time_days,
            )
            _render_plan(plan)
            with st.expander("Generation trace"):
                _render_trace(trace)

# --- Active Protocol ---
with tab_active:
    active = store.get_active_session()
    if active is None or active.plan is None:
        st.caption("No active protocol. Generate one from the Check-In tab.")
    else:
        st.header(active.title or "Active Protocol")
        _render_plan(active.plan)

        st.divider()
        st.subheader("Log Event")
        log_cols = st.columns([1, 3, 1])
        adhoc_type = log_cols[0].selectbox(
            "Type", list(AdhocType), format_func=lambda t: ADHOC_TYPE_LABELS[t], key="adhoc_type",
        )
        adhoc_detail = log_cols[1].text_input(
            "Details", placeholder="e.g. 30min Recovery Run", key="adhoc_detail",
        )
        if log_cols[2].button("Log", key="adhoc_log"):
            logged = store.log_adhoc_event(active.id, adhoc_type, adhoc_detail)
            ctx = build_regeneration_context(logged, profile, datetime.now(), store.get_logs())
            store.update_log(active.id, plan=engine.generate(ctx))
            st.rerun()

        st.divider()
        st.subheader("Finish & Feedback")
        rating = st.slider("How did it go? (1-5)", 1, 5, 3)
        gut_rating = st.slider("Gut afterwards (1-10)", 1, 10, 8)
        notes = st.text_area("Notes (what you ate, how it felt)")
        if st.button("Complete Session"):
            feedback = SessionFeedback(rating=rating, gut_rating=gut_rating, notes=notes)
            completed = store.update_log(
                active.id, status=SessionStatus.COMPLETED, feedback=feedback,
            )
            report = generate_analysis(completed, profile)
            store.update_log(active.id, analysis=report)
            st.success(f"Readiness {report.readiness} — {report.outcome}")
            st.rerun()

# --- Calendar ---
with tab_calendar:
    st.subheader("Upcoming Events")
    with st.form("add_event"):
        ev_title = st.text_input("Title", value="Race")
        ev_date = st.date_input("Date", value=date.today())
        ev_type = st.selectbox("Type", list(FutureEventType), format_func=lambda t: t.value)
        ev_intensity = st.selectbox(
            "Intensity", list(Intensity), format_func=lambda i: INTENSITY_LABELS[i], index=2,
        )
        ev_duration = st.selectbox(
            "Duration", list(DurationBucket), format_func=lambda d: DURATION_LABELS[d], index=2,
        )
        if st.form_submit_button("Add Event"):
            conflict = store.check_future_conflict(ev_date)
            if conflict:
                st.warning(conflict)
            else:
                store.save_future_event(ev_date, ev_type, ev_title, ev_intensity, ev_duration)
                st.rerun()

    for event in sorted(store.get_future_events(), key=lambda e: e.date):
        cols = st.columns([4, 1, 1])
        status = "prep generated" if event.processed else "scheduled"
        cols[0].markdown(f"**{event.title}** — {event.date.isoformat()} ({event.type.value}, {status})")
        if cols[1].button("Preview", key=f"preview_{event.id}"):
            st.session_state["preview_event"] = event.id
        if cols[2].button("Delete", key=f"delete_{event.id}"):
            store.delete_future_event(event.id)
            st.rerun()

    preview_id = st.session_state.get("preview_event")
    preview = next((e for e in store.get_future_events() if e.id == preview_id), None)
    if preview is not None:
        st.divider()
        st.subheader(f"Preview: {preview.title}")
        _render_plan(engine.preview(preview, profile))

# --- History ---
with tab_history:
    logs = store.get_logs()
    if not logs:
        st.caption("No sessions logged yet.")
    for log in logs:
        label = log.title or f"{INTENSITY_LABELS[log.intensity]} / {DURATION_LABELS[log.duration]}"
        with st.expander(f"{log.timestamp:%Y-%m-%d %H:%M} — {label} ({log.status.value})"):
            st.markdown(f"Gut state: **{log.gut_scale}**")
            if log.analysis:
                st.markdown(f"Readiness: **{log.analysis.readiness}** — {log.analysis.outcome}")
                st.markdown(f"_{log.analysis.coach_note}_")
            if log.plan:
                st.caption(f"{len(log.plan.timeline)} events, theme {log.plan.theme.value}")
            if st.button("Delete", key=f"delete_log_{log.id}"):
                store.delete_log(log.id)
                st.rerun()

# --- Tips ---
with tab_tips:
    tips = aggregate_tips(store.get_logs())
    if not tips:
        st.caption("Complete a session with feedback to collect tips.")
    for tip in tips:
        st.markdown(f"**{tip.category}** — “{tip.text}”  \n<small>{tip.date:%d/%m/%Y}</small>",
                    unsafe_allow_html=True)
