# mision_nlp/charts.py

from typing import Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .formatters import VADER_THRESHOLD, SentimentBucket, classify_sentiment_label, count_buckets
from .models import BatchResult, ProfileAnalysis, TabInputs, VaderScores

BUCKET_LABELS = {
    SentimentBucket.POSITIVE: "Positivos",
    SentimentBucket.NEUTRAL: "Neutros",
    SentimentBucket.NEGATIVE: "Negativos",
}
BUCKET_COLORS = {"Positivos": "#66BB6A", "Neutros": "#757575", "Negativos": "#EF5350"}


# --- Helper Functions ---
def get_compound_color_and_label(compound: float) -> Tuple[str, str]:
    """Maps a VADER compound score to a bar color and label."""
    if compound >= VADER_THRESHOLD: return "#2E7D32", "Positivo"
    elif compound <= -VADER_THRESHOLD: return "#C62828", "Negativo"
    else: return "#757575", "Neutro"


def create_compound_gauge(data: VaderScores, inputs: TabInputs) -> go.Figure:
    """Gauge chart of the compound score in [-1, 1]."""
    bar_color, _ = get_compound_color_and_label(data.compound)
    fig = go.Figure(go.Indicator(
        mode="gauge+number", value=data.compound,
        domain={'x': [0, 1], 'y': [0, 1]},
        title={'text': "Compound VADER", 'font': {'size': 20}},
        number={'font': {'size': 36}, 'valueformat': '.4f'},
        gauge={
            'axis': {'range': [-1, 1], 'tickwidth': 1, 'tickcolor': "darkblue"},
            'bar': {'color': bar_color, 'thickness': 0.75},
            'bgcolor': "white", 'borderwidth': 2, 'bordercolor': "gray",
            'steps': [
                {'range': [-1, -VADER_THRESHOLD], 'color': "#FFCDD2"},
                {'range': [-VADER_THRESHOLD, VADER_THRESHOLD], 'color': "#EEEEEE"},
                {'range': [VADER_THRESHOLD, 1], 'color': "#C8E6C9"}],
            'threshold': {'line': {'color': "black", 'width': 3}, 'thickness': 1, 'value': 0}
        }))
    fig.update_layout(height=280, margin=dict(l=30, r=30, t=50, b=30))
    return fig


def create_batch_distribution_chart(data: BatchResult, inputs: TabInputs) -> go.Figure:
    """Bar chart of the per-line compound scores, colored by bucket."""
    df = pd.DataFrame(
        [{"texto": item.text, "sentimiento": item.sentiment, "compound": item.compound}
         for item in data.results],
        columns=["texto", "sentimiento", "compound"],
    )
    if df.empty:
        fig = go.Figure()
        fig.update_layout(title='Distribución de sentimientos (sin datos)', height=300,
                          xaxis_visible=False, yaxis_visible=False)
        return fig
    df["grupo"] = [BUCKET_LABELS[classify_sentiment_label(label)] for label in df["sentimiento"]]
    df["linea"] = range(1, len(df) + 1)
    fig = px.bar(df, x="linea", y="compound", color="grupo", hover_data=["texto"],
                 color_discrete_map=BUCKET_COLORS, title="Compound por línea")
    fig.update_layout(height=350, margin=dict(l=20, r=20, t=40, b=20),
                      xaxis_title="Línea", yaxis_title="Compound", yaxis_range=[-1, 1])
    return fig


def create_tweet_sentiment_pie(data: ProfileAnalysis, inputs: TabInputs) -> go.Figure:
    counts = count_buckets(tweet.sentiment for tweet in data.tweets)
    names = [BUCKET_LABELS[bucket] for bucket in counts]
    fig = px.pie(values=list(counts.values()), names=names, hole=0.3,
                 title=f"Sentimiento de tweets de @{inputs.username}",
                 color_discrete_sequence=[BUCKET_COLORS[name] for name in names])
    fig.update_layout(height=350, margin=dict(l=20, r=20, t=40, b=20))
    return fig
