# frontend.py

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import streamlit as st

from mision_nlp.client import GeminiClient
from mision_nlp.config import configure_logging, load_settings
from mision_nlp.controller import TabController
from mision_nlp.exercises import (
    EXERCISES,
    FIELD_ANALYSIS_TYPES,
    FIELD_TEXT,
    FIELD_TWEET_COUNT,
    FIELD_USERNAME,
    MAX_TWEETS,
    MIN_TWEETS,
    Exercise,
)
from mision_nlp.errors import AppError
from mision_nlp.models import ANALYSIS_ENTITIES, ANALYSIS_TOKENS

# --- Configuration ---
settings = load_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Misión 1: Análisis de Texto y Sentimientos", page_icon="🎯",
    layout="wide", initial_sidebar_state="expanded"
)

ANALYSIS_TYPE_LABELS = {
    ANALYSIS_TOKENS: "🔤 Tokens y POS Tagging",
    ANALYSIS_ENTITIES: "🏷️ Entidades Nombradas",
}
TECH_BADGES = ["🐍 Python", "🤖 NLTK", "📊 TextBlob", "🧠 spaCy", "🌐 Flask", "⚡ Gradio", "⚛️ React", "💎 Gemini API"]


# --- Shared resources ---
@st.cache_resource
def get_client() -> GeminiClient:
    """One client for the whole process; every tab controller receives it."""
    return GeminiClient(settings)


@st.cache_resource(show_spinner="Generando logo...")
def get_logo() -> Tuple[Optional[bytes], Optional[str]]:
    client = get_client()
    if not client.configured:
        logger.error("Gemini API key not configured; skipping logo generation.")
        return None, "API Key missing"
    try:
        return client.generate_logo(), None
    except AppError as e:
        logger.error(f"Error generating logo: {e}")
        return None, "Failed to generate"


def get_controller(exercise: Exercise) -> TabController:
    key = f"controller_{exercise.key}"
    if key not in st.session_state:
        st.session_state[key] = TabController(exercise, get_client())
    return st.session_state[key]


# --- Widget <-> controller sync ---
def _widget_key(exercise: Exercise, name: str) -> str:
    return f"{exercise.key}_{name}"


def _push_inputs_to_widgets(controller: TabController) -> None:
    """Copies controller inputs into widget state. Only call before widgets render or from callbacks."""
    exercise, inputs = controller.exercise, controller.state.inputs
    for field in exercise.fields:
        if field == FIELD_ANALYSIS_TYPES:
            for analysis in ANALYSIS_TYPE_LABELS:
                st.session_state[_widget_key(exercise, f"type_{analysis}")] = analysis in inputs.analysis_types
        else:
            st.session_state[_widget_key(exercise, field)] = getattr(inputs, field)


def _read_widgets(exercise: Exercise) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for field in exercise.fields:
        if field == FIELD_ANALYSIS_TYPES:
            values[field] = frozenset(
                analysis for analysis in ANALYSIS_TYPE_LABELS
                if st.session_state.get(_widget_key(exercise, f"type_{analysis}"))
            )
        else:
            values[field] = st.session_state.get(_widget_key(exercise, field))
    return values


def _on_example(controller: TabController, label: str) -> None:
    controller.load_example(label)
    _push_inputs_to_widgets(controller)


def _on_clear(controller: TabController) -> None:
    controller.clear()
    _push_inputs_to_widgets(controller)


# --- Presentation shell ---
def render_header() -> None:
    logo, logo_error = get_logo()
    col_logo, col_title = st.columns([1, 6])
    with col_logo:
        if logo:
            st.image(logo, width=80)
        elif logo_error:
            st.caption(f"Logo Error: {logo_error}")
    with col_title:
        st.title("🎯 Misión 1: Análisis de Texto y Sentimientos")
        st.markdown("**Bootcamp IA Intermedio L2-G120-C8-IA-I-P | Jhon Fragozo**")
        st.markdown(
            "Demostración integrada de 5 ejercicios con tecnologías avanzadas de NLP e IA, "
            "ahora impulsada por Gemini."
        )
    st.markdown(" ".join(f"`{badge}`" for badge in TECH_BADGES))


def render_sidebar(client: GeminiClient) -> None:
    with st.sidebar:
        st.header("🔧 Estado del Sistema")
        if client.configured:
            st.success("Clave de API configurada")
        else:
            st.error("Falta la clave de API (GEMINI_API_KEY)")
        st.info(f"**Modelo de texto:** {client.settings.model}")
        st.info(f"**Modelo de imagen:** {client.settings.image_model}")


def render_inputs(controller: TabController) -> None:
    exercise = controller.exercise
    initialized_key = _widget_key(exercise, "initialized")
    if initialized_key not in st.session_state:
        _push_inputs_to_widgets(controller)
        st.session_state[initialized_key] = True

    for field in exercise.fields:
        key = _widget_key(exercise, field)
        if field == FIELD_TEXT:
            st.text_area("Texto:", key=key, height=160, placeholder=exercise.text_placeholder)
        elif field == FIELD_USERNAME:
            st.text_input("Usuario de Twitter/X (sin @):", key=key, placeholder="elonmusk, nasa, o cnn")
        elif field == FIELD_TWEET_COUNT:
            st.slider("Número de tweets a analizar:", MIN_TWEETS, MAX_TWEETS, key=key)
        elif field == FIELD_ANALYSIS_TYPES:
            cols = st.columns(len(ANALYSIS_TYPE_LABELS))
            for col, (analysis, label) in zip(cols, ANALYSIS_TYPE_LABELS.items()):
                col.checkbox(label, key=_widget_key(exercise, f"type_{analysis}"))

    values = _read_widgets(exercise)
    changes = {name: value for name, value in values.items() if getattr(controller.state.inputs, name) != value}
    if changes:
        controller.edit(**changes)


def render_result_panel(controller: TabController) -> None:
    state = controller.state
    if state.error:
        st.error(f"Error: {state.error}")
    elif state.result:
        st.code(state.result, language=None)
        if state.chart is not None:
            st.plotly_chart(state.chart, use_container_width=True)


def render_exercise_tab(controller: TabController) -> None:
    exercise = controller.exercise
    with st.container(border=True):
        st.subheader(exercise.title)
        st.markdown(exercise.description)
        render_inputs(controller)

        loading = controller.state.loading
        if exercise.examples:
            example_cols = st.columns(len(exercise.examples))
            for col, (label, _) in zip(example_cols, exercise.examples):
                col.button(label, key=_widget_key(exercise, f"example_{label}"), disabled=loading,
                           on_click=_on_example, args=(controller, label), use_container_width=True)

        col_analyze, col_clear = st.columns(2)
        analyze_clicked = col_analyze.button(exercise.action_label, type="primary", disabled=loading,
                                             key=_widget_key(exercise, "analyze"), use_container_width=True)
        col_clear.button("🧹 Limpiar", disabled=loading, key=_widget_key(exercise, "clear"),
                         on_click=_on_clear, args=(controller,), use_container_width=True)

        if analyze_clicked:
            with st.spinner(exercise.loading_text):
                asyncio.run(controller.analyze())

        render_result_panel(controller)


# --- Page ---
client = get_client()
render_header()
render_sidebar(client)

tabs = st.tabs([exercise.tab_label for exercise in EXERCISES])
for tab, exercise in zip(tabs, EXERCISES):
    with tab:
        render_exercise_tab(get_controller(exercise))

st.markdown("---")
st.markdown("<div style='text-align: center; color: #666; font-size: 0.9em;'>🎯 Misión 1 • Interface powered by Streamlit + Gemini</div>", unsafe_allow_html=True)
