import unittest

from mision_nlp import formatters
from mision_nlp.formatters import SentimentBucket
from mision_nlp.models import (
    BatchResult,
    HybridPolarity,
    LinguisticAnalysis,
    ProfileAnalysis,
    TabInputs,
    VaderScores,
)


class HelperTests(unittest.TestCase):
    def test_percent_uses_one_decimal(self):
        self.assertEqual(formatters.percent(3, 8), "37.5")
        self.assertEqual(formatters.percent(1, 3), "33.3")
        self.assertEqual(formatters.percent(2, 0), "0.0")

    def test_classify_sentiment_label_is_case_insensitive_substring_match(self):
        self.assertEqual(formatters.classify_sentiment_label("positivo"), SentimentBucket.POSITIVE)
        self.assertEqual(formatters.classify_sentiment_label("Muy NEGATIVO 😞"), SentimentBucket.NEGATIVE)
        self.assertEqual(formatters.classify_sentiment_label("Neutro"), SentimentBucket.NEUTRAL)

    def test_unknown_labels_fall_back_to_neutral(self):
        self.assertEqual(formatters.classify_sentiment_label("mixed"), SentimentBucket.NEUTRAL)
        self.assertEqual(formatters.classify_sentiment_label(""), SentimentBucket.NEUTRAL)

    def test_shorten_cuts_long_texts(self):
        self.assertEqual(formatters.shorten("a" * 40), "a" * 40)
        self.assertEqual(formatters.shorten("a" * 41), "a" * 37 + "...")


class VaderReportTests(unittest.TestCase):
    def test_positive_scores(self):
        report = formatters.format_vader_report(
            VaderScores(neg=0.1, neu=0.6, pos=0.3, compound=0.4), TabInputs(text="Me encanta")
        )
        self.assertIn("Positivo: 30.0%", report)
        self.assertIn("Negativo: 10.0%", report)
        self.assertIn("Neutral:  60.0%", report)
        self.assertIn("Compuesto: 0.4000", report)
        self.assertIn('📝 Texto original: "Me encanta"', report)
        self.assertIn("😊 POSITIVO", report)

    def test_compound_thresholds(self):
        self.assertEqual(formatters.interpret_compound(0.05), "😊 POSITIVO")
        self.assertEqual(formatters.interpret_compound(-0.2), "😞 NEGATIVO")
        self.assertEqual(formatters.interpret_compound(-0.05), "😞 NEGATIVO")
        self.assertEqual(formatters.interpret_compound(0.0), "😐 NEUTRO")
        self.assertEqual(formatters.interpret_compound(0.049), "😐 NEUTRO")

    def test_report_label_follows_compound(self):
        negative = formatters.format_vader_report(VaderScores(compound=-0.2), TabInputs(text="x"))
        neutral = formatters.format_vader_report(VaderScores(compound=0.0), TabInputs(text="x"))
        self.assertIn("😞 NEGATIVO", negative)
        self.assertIn("😐 NEUTRO", neutral)


class BatchReportTests(unittest.TestCase):
    def setUp(self):
        self.inputs = TabInputs(text="\n".join(f"texto {i}" for i in range(8)))

    def test_summary_percentages_use_submitted_line_count(self):
        data = BatchResult.model_validate({
            "results": [{"text": "Me encanta este producto, es excelente!", "sentiment": "POSITIVO", "compound": 0.8}],
            "summary": {"positive": 3, "neutral": 1, "negative": 4},
        })
        report = formatters.format_batch_report(data, self.inputs)
        self.assertIn("RESUMEN ESTADÍSTICO (8 textos analizados)", report)
        self.assertIn("Positivos: 3 (37.5%)", report)
        self.assertIn("Neutros:   1 (12.5%)", report)
        self.assertIn("Negativos: 4 (50.0%)", report)

    def test_table_rows_are_padded_and_truncated(self):
        long_text = "El curso de IA es fascinante, aprendo mucho cada día"
        data = BatchResult.model_validate({
            "results": [{"text": long_text, "sentiment": "POSITIVO", "compound": 0.75}],
            "summary": {"positive": 1},
        })
        report = formatters.format_batch_report(data, self.inputs)
        expected_row = long_text[:37] + "..." + " " * 5 + "POSITIVO" + " " * 7 + "0.7500"
        self.assertIn(expected_row, report.splitlines())
        self.assertIn("Texto".ljust(45) + "Sentimiento".ljust(15) + "Compound", report)

    def test_empty_results_render_explicit_line(self):
        report = formatters.format_batch_report(BatchResult(), self.inputs)
        self.assertIn("No se encontraron resultados.", report)
        self.assertNotIn("Sentimiento", report)


class LinguisticReportTests(unittest.TestCase):
    def test_empty_entities_when_requested(self):
        data = LinguisticAnalysis.model_validate({
            "tokens": [{"text": "Bogotá", "pos": "PROPN", "explanation": "Nombre propio"}],
            "entidades": [],
        })
        inputs = TabInputs(text="Bogotá", analysis_types=frozenset({"tokens", "entidades"}))
        report = formatters.format_linguistic_report(data, inputs)
        self.assertIn("🏷️ ENTIDADES RECONOCIDAS:\nNo se encontraron entidades nombradas.", report)
        self.assertIn("Bogotá".ljust(15) + " " + "PROPN".ljust(10) + " Nombre propio", report)

    def test_entities_not_requested_and_absent_are_omitted(self):
        inputs = TabInputs(text="hola", analysis_types=frozenset({"tokens"}))
        report = formatters.format_linguistic_report(LinguisticAnalysis(tokens=[]), inputs)
        self.assertNotIn("ENTIDADES", report)
        self.assertIn("No se encontraron tokens.", report)

    def test_entities_are_padded(self):
        data = LinguisticAnalysis.model_validate({
            "entidades": [{"text": "Microsoft", "label": "ORG", "explanation": "Empresa"}],
        })
        inputs = TabInputs(text="Microsoft", analysis_types=frozenset({"entidades"}))
        report = formatters.format_linguistic_report(data, inputs)
        self.assertIn("Microsoft".ljust(20) + " " + "ORG".ljust(15) + " Empresa", report)
        self.assertNotIn("TOKENS", report)


class HybridReportTests(unittest.TestCase):
    def test_polarity_percentage_and_metrics(self):
        data = HybridPolarity.model_validate({
            "original_text": "Me encanta",
            "translated_text": "I love it",
            "spanish_polarity": 0.4,
            "english_polarity": 0.6,
            "final_polarity": 0.54,
            "final_subjectivity": 0.6,
            "final_sentiment": "POSITIVO",
        })
        report = formatters.format_hybrid_report(data, TabInputs(text="Me encanta"))
        self.assertIn("🎯 SENTIMIENTO: POSITIVO", report)
        self.assertIn("• Polaridad: 0.5400 (77.0%)", report)
        self.assertIn("• Subjetividad: 0.6000", report)
        self.assertIn('• Texto traducido: "I love it"', report)

    def test_missing_optional_fields_fall_back_to_input(self):
        data = HybridPolarity(final_polarity=-0.5, final_subjectivity=0.1)
        report = formatters.format_hybrid_report(data, TabInputs(text="Qué mal"))
        self.assertIn('📝 Texto: "Qué mal"', report)
        self.assertIn("🎯 SENTIMIENTO: NEGATIVO", report)
        self.assertIn("(25.0%)", report)


class ProfileReportTests(unittest.TestCase):
    def test_profile_and_distribution(self):
        data = ProfileAnalysis.model_validate({
            "profile": {"name": "NASA", "followers": 88000000, "verified": True},
            "tweets": [
                {"content": "Lanzamiento exitoso", "sentiment": "POSITIVO"},
                {"content": "Retraso por clima", "sentiment": "negativo"},
                {"content": "Transmisión a las 10", "sentiment": "NEUTRO"},
                {"content": "Hmm", "sentiment": "mixed"},
            ],
        })
        report = formatters.format_profile_report(data, TabInputs(username="nasa", tweet_count=4))
        self.assertTrue(report.startswith("🐦 ANÁLISIS DE CUENTA: @nasa (SIMULADO)\n" + "=" * 70))
        self.assertIn("• Seguidores: 88000000", report)
        self.assertIn("• Verificado: ✅ Sí", report)
        self.assertIn("📊 ANÁLISIS DE 4 TWEETS:", report)
        self.assertIn('Tweet 2:\n"Retraso por clima"\n📊 Sentimiento: negativo', report)
        self.assertIn("• 1 Positivos | 2 Neutros | 1 Negativos", report)

    def test_no_tweets(self):
        data = ProfileAnalysis.model_validate({"profile": {"name": "CNN"}})
        report = formatters.format_profile_report(data, TabInputs(username="cnn"))
        self.assertIn("No se encontraron tweets.", report)
        self.assertIn("• Verificado: ❌ No", report)
        self.assertIn("• 0 Positivos | 0 Neutros | 0 Negativos", report)


if __name__ == "__main__":
    unittest.main()
