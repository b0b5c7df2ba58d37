# app.py
import logging
import time

import numpy as np
import plotly.graph_objects as go
import streamlit as st

from roster import RosterStatus, RosterStore
from session import WheelSession
from wheel import RandomSource, SpinStatus

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Coffee Club Wheel", page_icon="☕", layout="centered")
st.title("☕ Coffee Club Wheel")
st.caption("Who's choosing the coffee spot today?")

# =========================
# HARD-CODED APP CONSTANTS
# =========================
ROSTER_FILE = "coffee-wheel-names.json"
SEED = 0                       # 0 => random each spin
FRAMES = 90
SPIN_TIME = 3.00               # seconds, winner is committed when the wheel stops
DECEL_POWER = 2.0              # >=0. Higher = stronger late braking (2 good, try 1..4)
COLORS = ("#00d4aa", "#00a8cc")
EDGE_COLOR = "#1a365d"

WIDTH = 500
HEIGHT = 500
# =========================

# ---- Session state ----
if "wheel" not in st.session_state:
    st.session_state.wheel = WheelSession(RosterStore(ROSTER_FILE), RandomSource(SEED))
st.session_state.setdefault("spin_id", 0)
wheel: WheelSession = st.session_state.wheel

# A click during the animation interrupts the previous run before it commits.
# The spin can't be cancelled, so settle it before anything else happens.
if wheel.state.is_spinning:
    wheel.commit_spin()

slot = st.empty()
banner = st.empty()


# ---- Wheel figure (pointer at 12 o'clock) ----
def wheel_fig(segments, rotation_deg: float = 0.0) -> go.Figure:
    """
    Draw the wedges as a clockwise pie starting at the top. Rotating the
    pie by rotation_deg matches the rotation the winner was resolved with.
    """
    fig = go.Figure(
        data=[go.Pie(
            labels=[s.entrant.id for s in segments],
            values=[s.segment_angle for s in segments],
            text=[s.entrant.name for s in segments],
            textinfo="text",
            hoverinfo="text",
            sort=False,
            direction="clockwise",
            rotation=rotation_deg % 360.0,
            textfont=dict(size=16, color="white"),
            marker=dict(
                colors=[COLORS[i % 2] for i in range(len(segments))],
                line=dict(color=EDGE_COLOR, width=2),
            ),
        )]
    )
    fig.update_layout(width=WIDTH, height=HEIGHT, margin=dict(l=0, r=0, t=0, b=0), showlegend=False)

    fig.add_shape(
        type="path",
        xref="paper", yref="paper",
        path="M 0.47 1.0 L 0.53 1.0 L 0.5 0.94 Z",
        line=dict(color=EDGE_COLOR, width=1.2),
        fillcolor="white",
        layer="above"
    )
    return fig


def angle_schedule(start_rot: float, final_rot: float, total_time: float, frames: int, power: float):
    """
    Monotonic deceleration from t=0 to t=total_time with omega(t) decreasing to 0.
      theta(t) = start + Δ * (1 - (1 - t/T)^(power+1))
    """
    T = max(1e-9, total_time)
    n = max(0.0, power)
    times = np.linspace(0.0, T, frames)
    frac = 1.0 - np.power(1.0 - times / T, n + 1.0)
    return list(start_rot + (final_rot - start_rot) * frac)


# ---- Controls ----
with st.form("add_name", clear_on_submit=True):
    col_name, col_add = st.columns([3, 1])
    new_name = col_name.text_input("Name", placeholder="Enter a name...", label_visibility="collapsed")
    if col_add.form_submit_button("Add Name", use_container_width=True):
        status = wheel.add(new_name)
        if status is RosterStatus.DUPLICATE_NAME:
            st.error(f"**{new_name.strip()}** is already on the wheel.")

for entrant in wheel.roster.get_all():
    col_info, col_dec, col_rm = st.columns([6, 1, 1])
    col_info.markdown(f"**{entrant.name}** · Wins: {entrant.wins}")
    if col_dec.button("−", key=f"dec_{entrant.id}", help="Decrease wins", disabled=entrant.wins == 0):
        wheel.decrement_wins(entrant.id)
        st.rerun()
    if col_rm.button("✕", key=f"rm_{entrant.id}"):
        wheel.remove(entrant.id)
        st.rerun()

col_reset, col_spin = st.columns([1, 1])
if col_reset.button("🔄 Reset All Wins", use_container_width=True):
    wheel.reset_all()
    st.rerun()
clicked = col_spin.button("🎯 Spin the Wheel!", use_container_width=True, disabled=len(wheel.roster) == 0)

if clicked:
    st.session_state.spin_id += 1
    start_rot = wheel.state.cumulative_rotation
    resolution = wheel.request_spin()

    if resolution.status is SpinStatus.EMPTY_ROSTER:
        st.warning("Add at least one name before spinning.")
    elif resolution.status is SpinStatus.OK:
        segments = wheel.segments()
        angles = angle_schedule(start_rot, resolution.new_rotation, SPIN_TIME, FRAMES, DECEL_POWER)
        for i, rot in enumerate(angles):
            slot.plotly_chart(wheel_fig(segments, rot), use_container_width=False, key=f"spin_{st.session_state.spin_id}_{i}")
            time.sleep(SPIN_TIME / max(FRAMES, 1))

        wheel.commit_spin()
        st.rerun()

# Idle wheel
segments = wheel.segments()
if segments:
    slot.plotly_chart(wheel_fig(segments, wheel.state.cumulative_rotation), use_container_width=False, key="idle_wheel")
else:
    slot.info("Add some names to get started.")

# Result display
winner = wheel.last_winner
if winner is not None:
    banner.success(f"🎉 **{winner.name}** wins! 🎉  Time to pick a coffee spot!")
