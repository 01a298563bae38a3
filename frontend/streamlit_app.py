from datetime import date

import pandas as pd
import requests
import streamlit as st

from app.core.config import load_config
from ui_kit import set_page, card, curves_to_df, measurements_to_df, overlay_measurements


set_page()

API_BASE = st.sidebar.text_input("API Base URL", value=load_config()["api"]["base_url"])

st.title("Growth Record")
st.caption("Height / weight SD scores against the 2000 national growth survey (JSPE LMS tables)")


def api_get(path: str, params=None):
    url = f"{API_BASE}{path}"
    try:
        r = requests.get(url, params=params, timeout=20)
        r.raise_for_status()
        return r.json()
    except Exception as e:
        st.error(f"GET failed: {url}\n{e}")
        return None


def api_send(method: str, path: str, payload: dict | None = None):
    url = f"{API_BASE}{path}"
    try:
        r = requests.request(method, url, json=payload, timeout=30)
        if r.status_code == 422 or r.status_code == 404:
            st.error(r.json().get("detail", r.text))
            return None
        r.raise_for_status()
        return r.json()
    except Exception as e:
        st.error(f"{method} failed: {url}\n{e}")
        return None


def ensure_session() -> str:
    sid = st.session_state.get("session_id")
    if sid:
        return sid
    out = api_send("POST", "/sessions", {"gender": "male"})
    if out is None:
        st.stop()
    st.session_state["session_id"] = out["session_id"]
    st.session_state["session"] = out
    return out["session_id"]


session_id = ensure_session()
session = st.session_state.get("session") or {}
child = session.get("child", {})

# -----------------------
# Child info
# -----------------------
st.subheader("Child")
c1, c2, c3, c4 = st.columns(4)
with c1:
    patient_id = st.text_input("Patient ID (0 if unknown)", value=child.get("patient_id", ""))
with c2:
    full_name = st.text_input("Full name", value=child.get("full_name", ""))
with c3:
    bd_raw = child.get("birth_date")
    birth_date = st.date_input("Birth date", value=date.fromisoformat(bd_raw) if bd_raw else None)
with c4:
    genders = ["male", "female"]
    gender = st.selectbox("Sex", genders, index=genders.index(child.get("gender", "male")))

patch = {
    "patient_id": patient_id,
    "full_name": full_name,
    "birth_date": birth_date.isoformat() if birth_date else None,
    "gender": gender,
}
if any(patch[k] != child.get(k) for k in patch):
    out = api_send("PATCH", f"/sessions/{session_id}/child", patch)
    if out is not None:
        st.session_state["session"] = session = out
        child = out["child"]

# -----------------------
# New measurement
# -----------------------
st.subheader("Add measurement")
with st.form("measurement"):
    m1, m2, m3 = st.columns(3)
    with m1:
        m_date = st.date_input("Measured on", value=date.today())
    with m2:
        height = st.number_input("Height (cm)", min_value=30.0, max_value=190.0, value=None, step=0.1)
    with m3:
        weight = st.number_input("Weight (kg)", min_value=0.0, max_value=100.0, value=None, step=0.1)
    submitted = st.form_submit_button("Add record", use_container_width=True)

if submitted:
    out = api_send(
        "POST",
        f"/sessions/{session_id}/measurements",
        {"date": m_date.isoformat(), "height": height, "weight": weight},
    )
    if out is not None:
        st.session_state["session"] = session = out

# -----------------------
# Results table
# -----------------------
measurements = session.get("measurements", [])
if measurements:
    st.subheader("History")
    df = measurements_to_df(measurements)
    st.dataframe(df.drop(columns=["index"]), use_container_width=True, hide_index=True)

    d1, d2 = st.columns([3, 1])
    with d1:
        to_delete = st.selectbox(
            "Delete record",
            options=[m["index"] for m in measurements],
            format_func=lambda i: f"#{i + 1}  {measurements[i]['date']}",
        )
    with d2:
        if st.button("Delete", use_container_width=True):
            out = api_send("DELETE", f"/sessions/{session_id}/measurements/{to_delete}")
            if out is not None:
                st.session_state["session"] = out
                st.rerun()

# -----------------------
# Chart
# -----------------------
if child.get("birth_date"):
    st.subheader("Growth curves")
    sex = child.get("gender", "male")
    h_curves = api_get(f"/curves/{sex}/height")
    w_curves = api_get(f"/curves/{sex}/weight")

    left, right = st.columns(2)
    with left:
        card("Length / Height (cm)", "<span class='muted small'>-2.5 SD / -3 SD: GH treatment thresholds</span>")
        st.line_chart(overlay_measurements(curves_to_df(h_curves), measurements, "height"))
    with right:
        card("Weight (kg)", "")
        st.line_chart(overlay_measurements(curves_to_df(w_curves), measurements, "weight"))

    if measurements:
        export = pd.DataFrame(measurements).drop(columns=["index"])
        st.download_button(
            "Download records (CSV)",
            data=export.to_csv(index=False).encode("utf-8"),
            file_name=session.get("chart_filename", "growth_chart.svg").replace(".svg", ".csv"),
            mime="text/csv",
        )
