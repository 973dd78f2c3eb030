# mision_nlp/prompts.py
"""Prompt builders: one pure function per exercise.

Each builder embeds the user's input verbatim and pairs the instruction
with the response schema the report expects. Builders do not validate;
the tab controller rejects empty input before calling them.
"""

from .models import AnalysisRequest, TabInputs
from .schema import array, boolean, number, obj, string

# --- Response schemas (one literal per exercise) ---
PROFILE_SCHEMA = obj(
    profile=obj(name=string(), followers=string(), verified=boolean()),
    tweets=array(obj(content=string(), sentiment=string())),
)

BATCH_SCHEMA = obj(
    results=array(obj(text=string(), sentiment=string(), compound=number())),
    summary=obj(positive=number(), negative=number(), neutral=number()),
)

VADER_SCHEMA = obj(neg=number(), neu=number(), pos=number(), compound=number())

LINGUISTIC_SCHEMA = obj(
    tokens=array(obj(text=string(), pos=string(), explanation=string())),
    entidades=array(obj(text=string(), label=string(), explanation=string())),
)

HYBRID_SCHEMA = obj(
    original_text=string(),
    translated_text=string(),
    spanish_polarity=number(),
    english_polarity=number(),
    final_polarity=number(),
    final_subjectivity=number(),
    final_sentiment=string(),
)


def build_profile_request(inputs: TabInputs) -> AnalysisRequest:
    instruction = (
        f"Simula un análisis de un perfil de Twitter/X. Genera datos de perfil plausibles "
        f"para el usuario @{inputs.username} (nombre, seguidores, verificado, etc.). Luego, "
        f"crea {inputs.tweet_count} tweets recientes realistas para este usuario. Finalmente, "
        f"analiza el sentimiento de cada tweet (POSITIVO, NEGATIVO, NEUTRO) y calcula un "
        f"resumen de sentimientos.\n\n"
        f"Devuelve un objeto JSON con 'profile' (con 'name', 'followers', 'verified') y "
        f"'tweets' (un array de objetos con 'content' y 'sentiment')."
    )
    return AnalysisRequest(instruction, PROFILE_SCHEMA)


def build_batch_request(inputs: TabInputs) -> AnalysisRequest:
    lines = "\n".join(inputs.non_blank_lines())
    instruction = (
        "Analiza el sentimiento de cada una de las siguientes líneas de texto. Para cada "
        "línea, clasifica el sentimiento como 'POSITIVO', 'NEGATIVO' o 'NEUTRO' y proporciona "
        "una puntuación de sentimiento 'compound' entre -1 y 1.\n\n"
        f"Textos:\n{lines}\n\n"
        "Devuelve un objeto JSON con una clave 'results' que contenga un array de objetos. "
        "Cada objeto debe tener las claves 'text', 'sentiment' y 'compound'. También, incluye "
        "una clave 'summary' con el recuento total de 'positive', 'negative' y 'neutral'."
    )
    return AnalysisRequest(instruction, BATCH_SCHEMA)


def build_vader_request(inputs: TabInputs) -> AnalysisRequest:
    instruction = (
        "Simula el analizador de sentimientos NLTK VADER. Analiza el siguiente texto y "
        "proporciona las puntuaciones de sentimiento 'neg', 'neu', 'pos' y 'compound'. El texto "
        "original está en español; tradúcelo mentalmente a inglés para un mejor análisis VADER.\n\n"
        f'Texto: "{inputs.text}"\n\n'
        "Devuelve el resultado en formato JSON."
    )
    return AnalysisRequest(instruction, VADER_SCHEMA)


def build_linguistic_request(inputs: TabInputs) -> AnalysisRequest:
    requested = ", ".join(inputs.requested_analyses())
    instruction = (
        "Realiza un análisis lingüístico avanzado al estilo de spaCy sobre el siguiente texto. "
        f"Realiza los siguientes análisis: {requested}.\n\n"
        f'Texto: "{inputs.text}"\n\n'
        "Devuelve un objeto JSON con claves para cada tipo de análisis solicitado "
        "('tokens', 'entidades').\n"
        "Para 'tokens', devuelve un array de objetos con 'text', 'pos' (Part-of-Speech tag), "
        "y 'explanation'.\n"
        "Para 'entidades', devuelve un array de objetos con 'text', 'label' (tipo de entidad), "
        "y 'explanation'."
    )
    return AnalysisRequest(instruction, LINGUISTIC_SCHEMA)


def build_hybrid_request(inputs: TabInputs) -> AnalysisRequest:
    instruction = (
        "Realiza un análisis de sentimiento híbrido del siguiente texto en español, al estilo "
        "de TextBlob. Primero, analiza el sentimiento directamente en español. Segundo, traduce "
        "el texto a inglés y analiza su sentimiento. Finalmente, combina los resultados (30% "
        "español, 70% inglés) para obtener una polaridad y subjetividad finales. Clasifica el "
        "sentimiento final en 'POSITIVO', 'NEGATIVO', o 'NEUTRO'.\n\n"
        f'Texto: "{inputs.text}"\n\n'
        "Devuelve el resultado en formato JSON."
    )
    return AnalysisRequest(instruction, HYBRID_SCHEMA)
