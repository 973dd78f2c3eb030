# mision_nlp/client.py

import asyncio
import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

import requests

from .config import Settings
from .errors import CredentialError, ParseError, TransportError
from .schema import SchemaDescriptor

logger = logging.getLogger(__name__)

# --- Constants ---
MAX_DETAIL_LENGTH = 500
LOGO_PROMPT = (
    "A minimalist, modern vector logo for an AI analysis application. It should combine an "
    "abstract representation of a brain or neural network with data visualization elements. "
    "Use a professional and sleek color palette with glowing purples, indigos, and cyans on a "
    "dark background. Flat design, no text."
)


class GeminiClient:
    """
    Stateless wrapper around the Gemini REST API.

    One instance is built at startup and handed to every tab controller. It
    holds nothing but immutable settings, so concurrent use from several
    tabs is safe. Each call is a single round trip: no retries, and no
    timeout beyond what the transport itself enforces.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.has_api_key

    def _endpoint(self, model: str, method: str) -> str:
        return f"{self.settings.api_base}/models/{model}:{method}"

    def _require_api_key(self) -> str:
        if not self.settings.has_api_key:
            logger.error("Gemini API key not configured (GEMINI_API_KEY / API_KEY).")
            raise CredentialError()
        return self.settings.api_key.strip()

    async def submit(self, instruction: str, schema: SchemaDescriptor) -> Any:
        """
        Sends one structured-output request and returns the parsed JSON.

        Args:
            instruction: The natural-language prompt. Must not be blank.
            schema: Expected response shape, sent as `responseSchema`.

        Returns:
            The decoded JSON value produced by the model.

        Raises:
            CredentialError: No API key is configured. Nothing is sent.
            TransportError: Network failure or non-2xx HTTP status.
            ParseError: The response holds no text, or the text is not JSON.
        """
        if not instruction or not instruction.strip():
            raise ValueError("instruction must not be empty")
        api_key = self._require_api_key()
        url = self._endpoint(self.settings.model, "generateContent")
        payload = {
            "contents": [{"role": "user", "parts": [{"text": instruction}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema.to_wire(),
            },
        }
        logger.debug(f"Submitting analysis request to {url} ({len(instruction)} chars).")
        response_data = await asyncio.to_thread(self._post, url, payload, api_key)
        text = _extract_candidate_text(response_data)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"Model output is not valid JSON: {e}. Output preview: {text[:MAX_DETAIL_LENGTH]}")
            raise ParseError(f"invalid JSON output: {e}") from e

    def generate_logo(self, prompt: str = LOGO_PROMPT) -> bytes:
        """Generates one square PNG logo with the configured Imagen model."""
        api_key = self._require_api_key()
        url = self._endpoint(self.settings.image_model, "predict")
        payload = {
            "instances": [{"prompt": prompt}],
            "parameters": {
                "sampleCount": 1,
                "aspectRatio": "1:1",
                "outputOptions": {"mimeType": "image/png"},
            },
        }
        response_data = self._post(url, payload, api_key)
        predictions = response_data.get("predictions") or []
        encoded = predictions[0].get("bytesBase64Encoded") if predictions and isinstance(predictions[0], dict) else None
        if not encoded:
            logger.error(f"Image response carried no image bytes: {str(response_data)[:MAX_DETAIL_LENGTH]}")
            raise ParseError("no image in predict response")
        try:
            return base64.b64decode(encoded)
        except (binascii.Error, ValueError) as e:
            logger.error(f"Could not decode image bytes: {e}")
            raise ParseError(f"invalid base64 image: {e}") from e

    def _post(self, url: str, payload: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}
        try:
            response = requests.post(url, headers=headers, json=payload)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else "?"
            logger.error(f"Gemini API error (HTTP {status_code}) from {url}: {_error_detail(e.response)}")
            raise TransportError(f"HTTP {status_code}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Connection error calling {url}: {e}")
            raise TransportError(str(e)) from e
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Gemini API returned a non-JSON body from {url}: {response.text[:MAX_DETAIL_LENGTH]}")
            raise ParseError(f"non-JSON HTTP body: {e}") from e
        if not isinstance(data, dict):
            logger.error(f"Unexpected Gemini API body type: {type(data).__name__}")
            raise ParseError("HTTP body is not an object")
        return data


# --- Utility / Helper Functions ---
def _error_detail(response: Optional[requests.Response]) -> str:
    if response is None:
        return "N/A"
    try:
        return response.json().get("error", {}).get("message", response.text[:MAX_DETAIL_LENGTH])
    except (ValueError, AttributeError):
        return response.text[:MAX_DETAIL_LENGTH]


def _extract_candidate_text(response_data: Dict[str, Any]) -> str:
    """Joins the text parts of the first candidate of a generateContent response."""
    candidates = response_data.get("candidates") or []
    if not candidates:
        block_reason = (response_data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            logger.error(f"Gemini blocked the prompt: {block_reason}")
            raise ParseError(f"prompt blocked: {block_reason}")
        logger.error("Gemini response has no candidates.")
        raise ParseError("no candidates")
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
    if not text.strip():
        finish_reason = candidates[0].get("finishReason", "N/A")
        logger.error(f"Gemini candidate has no text (finishReason={finish_reason}).")
        raise ParseError("empty candidate text")
    return text
