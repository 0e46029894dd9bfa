"""Streamlit page for generating afrobeats chord progressions as MIDI files."""

from __future__ import annotations

import sys
from pathlib import Path

if __package__ in {None, ""}:  # pragma: no cover - executed by ``streamlit run``
    src_root = str(Path(__file__).resolve().parent.parent)
    if src_root not in sys.path:
        sys.path.insert(0, src_root)

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from afrobeats_midi.generator import generate_afrobeats_midi, progression_label
from afrobeats_midi.theory import ScaleInputError

DEFAULT_SCALE = "C major"
ROLE_COLOURS = {"chord": "#f59e0b", "melody": "#10b981"}


def _initialise_state() -> None:
    defaults = {
        "progression": [],
        "midi_payload": None,
        "midi_filename": None,
        "events": None,
    }
    for name, value in defaults.items():
        st.session_state.setdefault(name, value)


def _piano_roll(frame: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    if frame.empty:
        fig.add_annotation(text="No notes", showarrow=False, font=dict(color="#94a3b8", size=18))
        fig.update_layout(height=220, xaxis=dict(visible=False), yaxis=dict(visible=False))
        return fig

    for role, rows in frame.groupby("role"):
        fig.add_trace(
            go.Bar(
                x=rows["duration_ticks"],
                y=rows["midi"],
                base=rows["start_tick"],
                orientation="h",
                name=role.title(),
                marker=dict(color=ROLE_COLOURS.get(role, "#a855f7"), opacity=0.85),
                text=rows["pitch"],
                hovertemplate="Pitch: %{text}<br>Start: %{base} ticks<br>Length: %{x} ticks",
            )
        )

    fig.update_layout(
        height=340,
        bargap=0.1,
        barmode="overlay",
        xaxis_title="Ticks",
        yaxis_title="MIDI pitch",
    )
    return fig


def _generate(scale_text: str, seed: int | None) -> None:
    try:
        result = generate_afrobeats_midi(scale_text, seed=seed)
    except ScaleInputError as exc:
        st.error(str(exc))
        return

    st.session_state.progression = list(result.progression)
    st.session_state.midi_payload = result.midi.getvalue()
    st.session_state.midi_filename = result.filename
    st.session_state.events = result.track.to_dataframe()


def main() -> None:
    st.set_page_config(page_title="Afrobeats MIDI Generator", page_icon="🥁")
    _initialise_state()

    st.title("Afrobeats Chord Progression MIDI Generator")
    scale_text = st.text_input(
        "Scale",
        value=DEFAULT_SCALE,
        placeholder="Enter scale (e.g., C minor, D major)",
        key="scale_input",
    )
    seed_value = st.number_input("Seed (0 for random)", min_value=0, value=0, step=1)

    if st.button("Generate MIDI File"):
        _generate(scale_text, int(seed_value) or None)

    progression = st.session_state.progression
    if progression:
        st.markdown("**Generated Progression:**")
        st.write(progression_label(progression))

    if st.session_state.midi_payload:
        st.download_button(
            "Download MIDI",
            data=st.session_state.midi_payload,
            file_name=st.session_state.midi_filename,
            mime="audio/midi",
        )

    events = st.session_state.events
    if events is not None:
        st.plotly_chart(_piano_roll(events), use_container_width=True)
        st.dataframe(events, hide_index=True)


if __name__ == "__main__":  # pragma: no cover
    main()
