# mision_nlp/exercises.py
"""The five demo exercises, expressed as configuration records.

Every tab runs the same prompt -> call -> format pipeline; what differs
between tabs lives here as data.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel

from . import charts, formatters, prompts
from .errors import ValidationError
from .models import (
    ANALYSIS_ENTITIES,
    ANALYSIS_TOKENS,
    AnalysisRequest,
    BatchResult,
    HybridPolarity,
    LinguisticAnalysis,
    ProfileAnalysis,
    TabInputs,
    VaderScores,
)

Validator = Callable[[TabInputs], Optional[str]]

# --- Input field keys (which widgets a tab shows) ---
FIELD_TEXT = "text"
FIELD_USERNAME = "username"
FIELD_TWEET_COUNT = "tweet_count"
FIELD_ANALYSIS_TYPES = "analysis_types"

MIN_TWEETS = 1
MAX_TWEETS = 10


@dataclass(frozen=True)
class Exercise:
    key: str
    tab_label: str
    title: str
    description: str
    action_label: str
    loading_text: str
    fields: Tuple[str, ...]
    default_inputs: TabInputs
    build_request: Callable[[TabInputs], AnalysisRequest]
    result_model: Type[BaseModel]
    formatter: Callable[[Any, TabInputs], str]
    validators: Tuple[Validator, ...] = ()
    examples: Tuple[Tuple[str, Dict[str, Any]], ...] = ()
    chart_builder: Optional[Callable[[Any, TabInputs], Any]] = None
    text_placeholder: str = ""

    def validate(self, inputs: TabInputs) -> None:
        """Raises ValidationError with the first failing check's message."""
        for check in self.validators:
            message = check(inputs)
            if message:
                raise ValidationError(message)

    def example(self, label: str) -> Dict[str, Any]:
        for example_label, changes in self.examples:
            if example_label == label:
                return dict(changes)
        raise KeyError(f"Exercise '{self.key}' has no example '{label}'.")


# --- Validators ---
def require_text(message: str) -> Validator:
    def check(inputs: TabInputs) -> Optional[str]:
        return None if inputs.text.strip() else message
    return check


def require_lines(inputs: TabInputs) -> Optional[str]:
    if not inputs.non_blank_lines():
        return "Por favor, ingresa textos para procesar (uno por línea)."
    return None


def require_username(inputs: TabInputs) -> Optional[str]:
    return None if inputs.username.strip() else "Por favor, ingresa un usuario de Twitter."


def require_tweet_count(inputs: TabInputs) -> Optional[str]:
    if not MIN_TWEETS <= inputs.tweet_count <= MAX_TWEETS:
        return f"El número de tweets debe estar entre {MIN_TWEETS} y {MAX_TWEETS}."
    return None


def require_analysis_type(inputs: TabInputs) -> Optional[str]:
    if not inputs.requested_analyses():
        return "Por favor, selecciona al menos un tipo de análisis."
    return None


EMPTY_TEXT_MESSAGE = "Por favor, ingresa un texto para analizar."

EXCEL_TEMPLATE = """Me encanta este producto, es excelente!
No estoy satisfecho con la calidad del servicio
El bootcamp fue aceptable, pero podría mejorar
¡Increíble experiencia! Definitivamente lo recomendaré
No cumple con mis expectativas, muy decepcionado
Excelente atención al cliente y productos de calidad
El curso de IA es fascinante, aprendo mucho cada día
Muy frustrante la plataforma, muchos errores técnicos"""


# --- Exercise records ---
TWITTER = Exercise(
    key="twitter",
    tab_label="🐦 Twitter/X",
    title="🐦 Demo: Análisis de Twitter/X",
    description=(
        "**Ejercicio 4:** Simulación de análisis de perfiles de Twitter/X. Conecta con Gemini "
        "para generar datos y analizarlos, simulando una conexión a la API de Twitter v2."
    ),
    action_label="🔍 Analizar Cuenta",
    loading_text="Obteniendo y analizando datos del perfil...",
    fields=(FIELD_USERNAME, FIELD_TWEET_COUNT),
    default_inputs=TabInputs(username="elonmusk", tweet_count=5),
    build_request=prompts.build_profile_request,
    result_model=ProfileAnalysis,
    formatter=formatters.format_profile_report,
    validators=(require_username, require_tweet_count),
    examples=(
        ("🚀 @elonmusk", {"username": "elonmusk"}),
        ("🛰️ @nasa", {"username": "nasa"}),
        ("📰 @cnn", {"username": "cnn"}),
    ),
    chart_builder=charts.create_tweet_sentiment_pie,
)

EXCEL = Exercise(
    key="excel",
    tab_label="📈 Excel",
    title="📈 Demo: Procesamiento de Excel",
    description=(
        "**Ejercicio 2:** Simulación de procesamiento masivo de archivos Excel. Detección "
        "automática de columnas con texto y análisis por lotes, impulsado por Gemini."
    ),
    action_label="📊 Procesar Lote",
    loading_text="Procesando lote de textos...",
    fields=(FIELD_TEXT,),
    default_inputs=TabInputs(),
    build_request=prompts.build_batch_request,
    result_model=BatchResult,
    formatter=formatters.format_batch_report,
    validators=(require_lines,),
    examples=(("📋 Cargar Plantilla", {"text": EXCEL_TEMPLATE}),),
    chart_builder=charts.create_batch_distribution_chart,
    text_placeholder="Pega aquí tus textos, uno por línea...",
)

NLTK = Exercise(
    key="nltk",
    tab_label="📊 NLTK VADER",
    title="📊 Demo: NLTK VADER Sentiment",
    description=(
        "**Ejercicio 2:** Analizador robusto usando NLTK VADER simulado por Gemini. "
        "Especialmente efectivo para textos cortos y contenido de redes sociales."
    ),
    action_label="📊 Analizar con VADER",
    loading_text="Traduciendo y analizando con VADER...",
    fields=(FIELD_TEXT,),
    default_inputs=TabInputs(),
    build_request=prompts.build_vader_request,
    result_model=VaderScores,
    formatter=formatters.format_vader_report,
    validators=(require_text(EMPTY_TEXT_MESSAGE),),
    examples=(
        ("📱 Social Media", {"text": "OMG! Este proyecto de IA está SÚPER genial! 🔥🤖 #MachineLearning #AI"}),
        ("⭐ Review", {"text": "⭐⭐⭐⭐⭐ Excelente curso, muy bien estructurado. Recomendado 100%"}),
        ("💬 Feedback", {"text": "El contenido está bien, pero podría mejorar la explicación de algunos conceptos técnicos."}),
    ),
    chart_builder=charts.create_compound_gauge,
    text_placeholder="Ejemplo: Este bootcamp de IA es INCREÍBLE! 🚀 Los ejercicios están súper bien diseñados.",
)

SPACY = Exercise(
    key="spacy",
    tab_label="🧠 spaCy",
    title="🧠 Demo: Análisis spaCy Avanzado",
    description=(
        "**Ejercicio 3:** Análisis lingüístico profundo con spaCy, simulado por Gemini. "
        "Incluye reconocimiento de entidades y análisis gramatical."
    ),
    action_label="🧠 Análisis Completo",
    loading_text="Ejecutando análisis lingüístico con spaCy...",
    fields=(FIELD_TEXT, FIELD_ANALYSIS_TYPES),
    default_inputs=TabInputs(analysis_types=frozenset({ANALYSIS_TOKENS, ANALYSIS_ENTITIES})),
    build_request=prompts.build_linguistic_request,
    result_model=LinguisticAnalysis,
    formatter=formatters.format_linguistic_report,
    validators=(require_text(EMPTY_TEXT_MESSAGE), require_analysis_type),
    examples=(
        ("👤 Personas", {"text": "Jhon Fragozo desarrolló un proyecto de análisis de sentimientos para Talento Tech en Bucaramanga."}),
        ("🏢 Empresas", {"text": "Microsoft, Google y OpenAI son líderes en inteligencia artificial y machine learning."}),
        ("📍 Lugares", {"text": "El bootcamp se desarrolla en Colombia, específicamente en Bucaramanga, Santander."}),
    ),
    text_placeholder="Ejemplo: Jhon Fragozo estudió inteligencia artificial en Talento Tech Colombia durante 2025.",
)

TEXTBLOB = Exercise(
    key="textblob",
    tab_label="🔬 TextBlob",
    title="🔬 Demo: Análisis con TextBlob",
    description=(
        "**Ejercicio 1:** Análisis de sentimientos optimizado para español usando una estrategia "
        "híbrida simulada por Gemini. Combina resultados con pesos 30% español + 70% inglés."
    ),
    action_label="🔍 Analizar Sentimiento",
    loading_text="Procesando análisis híbrido...",
    fields=(FIELD_TEXT,),
    default_inputs=TabInputs(),
    build_request=prompts.build_hybrid_request,
    result_model=HybridPolarity,
    formatter=formatters.format_hybrid_report,
    validators=(require_text(EMPTY_TEXT_MESSAGE),),
    examples=(
        ("😊 Muy Positivo", {"text": "¡Me encanta este bootcamp de IA! Los ejercicios son fascinantes y estoy aprendiendo muchísimo. Excelente calidad educativa."}),
        ("😐 Neutro", {"text": "El bootcamp de IA ha completado la primera misión. Los ejercicios cubren diferentes tecnologías y librerías."}),
        ("😞 Negativo", {"text": "No entiendo nada de este curso. Los ejercicios son demasiado complicados y confusos. Muy frustrante."}),
    ),
    text_placeholder="Ejemplo: ¡Me encanta este curso de IA! Estoy aprendiendo muchísimo y los proyectos son fascinantes.",
)

EXERCISES: Tuple[Exercise, ...] = (TWITTER, EXCEL, NLTK, SPACY, TEXTBLOB)
EXERCISES_BY_KEY: Dict[str, Exercise] = {exercise.key: exercise for exercise in EXERCISES}
