# mision_nlp/errors.py

GENERIC_ERROR_MESSAGE = "No se pudo completar el análisis. Inténtalo de nuevo."
CREDENTIAL_ERROR_MESSAGE = (
    "Falta la clave de la API de Gemini. Configura GEMINI_API_KEY e inténtalo de nuevo."
)


class AppError(Exception):
    """Base class for failures that end one user action.

    `user_message` is what the tab shows; `str(exc)` may carry more detail
    and is only ever logged.
    """

    def __init__(self, user_message: str, detail: str = ""):
        super().__init__(detail or user_message)
        self.user_message = user_message


class ValidationError(AppError):
    """Empty or invalid user input, caught before any external call."""


class CredentialError(AppError):
    """The Gemini API key is not configured."""

    def __init__(self, detail: str = "API key missing"):
        super().__init__(CREDENTIAL_ERROR_MESSAGE, detail)


class AnalysisError(AppError):
    """The external analysis call did not produce a usable result."""

    def __init__(self, detail: str = ""):
        super().__init__(GENERIC_ERROR_MESSAGE, detail)


class TransportError(AnalysisError):
    """Network or HTTP failure talking to the Gemini API."""


class ParseError(AnalysisError):
    """The response was not JSON, or not the shape the report needs."""
