import streamlit as st
import pandas as pd


def set_page():
    st.set_page_config(
        page_title="Growth Chart",
        page_icon="📈",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.markdown(
        """
        <style>
        .main { padding-top: 0.5rem; }
        .block-container { padding-top: 1.0rem; padding-bottom: 2rem; }
        .card { background: rgba(255,255,255,0.04); border: 1px solid rgba(255,255,255,0.06); border-radius: 16px; padding: 16px; }
        .muted { opacity: 0.75; }
        .small { font-size: 0.92rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def sd_badge(sd, status: str) -> str:
    if sd is None:
        return "⚪ -"
    text = f"{'+' if sd > 0 else ''}{sd:.1f} SD"
    if status == "alert":
        return f"🔴 {text}"
    if status == "caution":
        return f"🟠 {text}"
    return f"🟢 {text}"


def card(title: str, body_md: str):
    st.markdown(
        f"<div class='card'><h4 style='margin:0 0 8px 0'>{title}</h4>{body_md}</div>",
        unsafe_allow_html=True,
    )


def curves_to_df(curves_resp: dict) -> pd.DataFrame:
    """Wide frame indexed by age, one column per SD line."""
    cols = {}
    for c in (curves_resp or {}).get("curves", []):
        label = c.get("style", {}).get("label") or str(c.get("sd_level"))
        pts = c.get("points") or []
        cols[label] = pd.Series([p["value"] for p in pts], index=[round(p["age"], 2) for p in pts])
    if not cols:
        return pd.DataFrame()
    df = pd.DataFrame(cols)
    df.index.name = "age"
    return df


def measurements_to_df(measurements) -> pd.DataFrame:
    rows = []
    for m in measurements or []:
        if not isinstance(m, dict):
            continue
        rows.append(
            {
                "index": m.get("index"),
                "date": m.get("date"),
                "age": m.get("age"),
                "height": m.get("height"),
                "height_sd": sd_badge(m.get("height_sd"), m.get("height_status", "")),
                "weight": m.get("weight"),
                "weight_sd": sd_badge(m.get("weight_sd"), m.get("weight_status", "")),
            }
        )
    df = pd.DataFrame(rows)
    if len(df):
        df["age"] = df["age"].map(lambda a: f"{a:.1f} y" if a is not None else "-")
    return df


def overlay_measurements(curves_df: pd.DataFrame, measurements, field: str) -> pd.DataFrame:
    """Add the child's own values as a 'child' column on the curve frame."""
    if curves_df.empty:
        return curves_df
    df = curves_df.copy()
    pts = {
        round(m["age"], 2): m[field]
        for m in measurements or []
        if isinstance(m, dict) and m.get("age") is not None
    }
    if pts:
        child = pd.Series(pts, name="child")
        df = df.join(child, how="outer").sort_index()
        df["child"] = df["child"].interpolate(limit_area="inside")
    return df
