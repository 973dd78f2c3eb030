# mision_nlp/formatters.py
"""Report formatters: validated result -> multi-line Spanish report.

Formatters are pure and assume the response already passed its pydantic
model, so they never raise on that input.
"""

from collections import Counter
from enum import Enum
from typing import Dict, Iterable

from .models import (
    ANALYSIS_ENTITIES,
    ANALYSIS_TOKENS,
    BatchResult,
    HybridPolarity,
    LinguisticAnalysis,
    ProfileAnalysis,
    TabInputs,
    VaderScores,
)

# --- Constants ---
VADER_THRESHOLD = 0.05
MAX_BATCH_TEXT_LENGTH = 40


class SentimentBucket(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


# --- Helper Functions ---
def percent(count: float, total: float) -> str:
    """count/total*100 with one decimal; an empty total reads as 0.0."""
    if not total:
        return "0.0"
    return f"{count / total * 100:.1f}"


def classify_sentiment_label(label: str) -> SentimentBucket:
    """Buckets a free-text label. Anything unrecognised counts as neutral."""
    upper = (label or "").upper()
    if "POSITIVO" in upper:
        return SentimentBucket.POSITIVE
    if "NEGATIVO" in upper:
        return SentimentBucket.NEGATIVE
    return SentimentBucket.NEUTRAL


def count_buckets(labels: Iterable[str]) -> Dict[SentimentBucket, int]:
    counts = Counter(classify_sentiment_label(label) for label in labels)
    return {bucket: counts.get(bucket, 0) for bucket in SentimentBucket}


def interpret_compound(compound: float) -> str:
    if compound >= VADER_THRESHOLD:
        return "😊 POSITIVO"
    if compound <= -VADER_THRESHOLD:
        return "😞 NEGATIVO"
    return "😐 NEUTRO"


def interpret_polarity(polarity: float) -> str:
    if polarity > 0:
        return "POSITIVO"
    if polarity < 0:
        return "NEGATIVO"
    return "NEUTRO"


def shorten(text: str, limit: int = MAX_BATCH_TEXT_LENGTH) -> str:
    return text[:limit - 3] + "..." if len(text) > limit else text


# --- Formatters ---
def format_profile_report(data: ProfileAnalysis, inputs: TabInputs) -> str:
    profile, tweets = data.profile, data.tweets
    out = f"🐦 ANÁLISIS DE CUENTA: @{inputs.username} (SIMULADO)\n{'=' * 70}\n\n"

    out += "👤 INFORMACIÓN DEL PERFIL:\n"
    out += f"• Nombre: {profile.name}\n"
    out += f"• Seguidores: {profile.followers}\n"
    out += f"• Verificado: {'✅ Sí' if profile.verified else '❌ No'}\n\n"

    out += f"📊 ANÁLISIS DE {len(tweets)} TWEETS:\n{'-' * 50}\n\n"
    if not tweets:
        out += "No se encontraron tweets.\n\n"
    for index, tweet in enumerate(tweets, start=1):
        out += f"Tweet {index}:\n"
        out += f'"{tweet.content}"\n'
        out += f"📊 Sentimiento: {tweet.sentiment}\n"
        out += f"{'-' * 50}\n\n"

    counts = count_buckets(tweet.sentiment for tweet in tweets)
    out += "📈 DISTRIBUCIÓN DE SENTIMIENTOS:\n"
    out += (
        f"• {counts[SentimentBucket.POSITIVE]} Positivos | "
        f"{counts[SentimentBucket.NEUTRAL]} Neutros | "
        f"{counts[SentimentBucket.NEGATIVE]} Negativos\n"
    )
    return out


def format_batch_report(data: BatchResult, inputs: TabInputs) -> str:
    total = len(inputs.non_blank_lines())
    summary = data.summary

    out = f"📊 ANÁLISIS MASIVO DE EXCEL (GEMINI):\n{'=' * 60}\n\n"
    out += f"📈 RESUMEN ESTADÍSTICO ({total} textos analizados):\n"
    out += f"• Positivos: {summary.positive} ({percent(summary.positive, total)}%)\n"
    out += f"• Neutros:   {summary.neutral} ({percent(summary.neutral, total)}%)\n"
    out += f"• Negativos: {summary.negative} ({percent(summary.negative, total)}%)\n\n"

    out += f"📋 RESULTADOS DETALLADOS:\n{'-' * 60}\n"
    if not data.results:
        out += "No se encontraron resultados.\n"
        return out
    out += f"{'Texto'.ljust(45)}{'Sentimiento'.ljust(15)}Compound\n"
    out += f"{'-' * 45}{'-' * 15}{'-' * 10}\n"
    for item in data.results:
        out += f"{shorten(item.text).ljust(45)}{item.sentiment.ljust(15)}{item.compound:.4f}\n"
    return out


def format_vader_report(data: VaderScores, inputs: TabInputs) -> str:
    return (
        "📊 ANÁLISIS NLTK VADER (SIMULADO POR GEMINI):\n"
        f"{'=' * 47}\n\n"
        f"{interpret_compound(data.compound)}\n\n"
        f'📝 Texto original: "{inputs.text}"\n\n'
        "📈 PUNTUACIONES VADER:\n"
        f"• Negativo: {data.neg * 100:.1f}%\n"
        f"• Neutral:  {data.neu * 100:.1f}%\n"
        f"• Positivo: {data.pos * 100:.1f}%\n"
        f"• Compuesto: {data.compound:.4f}\n\n"
        "⚡ Optimizado para: Textos cortos, redes sociales, contenido informal.\n"
    )


def format_linguistic_report(data: LinguisticAnalysis, inputs: TabInputs) -> str:
    requested = set(inputs.requested_analyses())
    out = f"🧠 ANÁLISIS SPACY COMPLETO (GEMINI):\n{'=' * 50}\n\n"

    if data.tokens is not None or ANALYSIS_TOKENS in requested:
        out += f"🔤 TOKENS Y GRAMÁTICA:\n{'-' * 30}\n"
        if not data.tokens:
            out += "No se encontraron tokens.\n"
        for token in data.tokens or []:
            out += f"{token.text.ljust(15)} {token.pos.ljust(10)} {token.explanation}\n"
        out += "\n"

    if data.entidades:
        out += f"🏷️ ENTIDADES RECONOCIDAS:\n{'-' * 30}\n"
        for entity in data.entidades:
            out += f"{entity.text.ljust(20)} {entity.label.ljust(15)} {entity.explanation}\n"
    elif ANALYSIS_ENTITIES in requested:
        out += "🏷️ ENTIDADES RECONOCIDAS:\nNo se encontraron entidades nombradas.\n"
    return out


def format_hybrid_report(data: HybridPolarity, inputs: TabInputs) -> str:
    polarity_percent = (data.final_polarity + 1) / 2 * 100
    sentiment = data.final_sentiment or interpret_polarity(data.final_polarity)
    original = data.original_text or inputs.text
    return (
        "📊 RESULTADO DEL ANÁLISIS HÍBRIDO (GEMINI):\n"
        f"{'=' * 43}\n\n"
        f"🎯 SENTIMIENTO: {sentiment}\n"
        f'📝 Texto: "{original}"\n\n'
        "📈 MÉTRICAS FINALES:\n"
        f"• Polaridad: {data.final_polarity:.4f} ({polarity_percent:.1f}%)\n"
        f"• Subjetividad: {data.final_subjectivity:.4f}\n\n"
        "🔍 ANÁLISIS HÍBRIDO:\n"
        f"• Polaridad (ES): {data.spanish_polarity:.4f}\n"
        f"• Polaridad (EN): {data.english_polarity:.4f}\n"
        f'• Texto traducido: "{data.translated_text}"\n\n'
        "✅ Estrategia: 30% Español + 70% Inglés = Resultado optimizado\n"
    )
