import base64
import json
import unittest
from unittest import mock

import requests

from mision_nlp import client as client_module
from mision_nlp.client import GeminiClient
from mision_nlp.config import Settings
from mision_nlp.errors import GENERIC_ERROR_MESSAGE, CredentialError, ParseError, TransportError
from mision_nlp.schema import number, obj

SCHEMA = obj(compound=number())


def _response(body=None, status_code=200, text=None):
    response = mock.Mock()
    response.status_code = status_code
    response.text = text if text is not None else json.dumps(body)
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def _candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}


class SubmitTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = GeminiClient(Settings(api_key="test-key", api_base="https://example.test/v1beta"))

    async def test_returns_parsed_json_and_sends_schema(self):
        with mock.patch.object(client_module.requests, "post", return_value=_response(_candidate('{"compound": 0.4}'))) as post:
            result = await self.client.submit("Analiza esto", SCHEMA)

        self.assertEqual(result, {"compound": 0.4})
        post.assert_called_once()
        url = post.call_args.args[0]
        self.assertEqual(url, "https://example.test/v1beta/models/gemini-2.5-flash:generateContent")
        payload = post.call_args.kwargs["json"]
        self.assertEqual(payload["contents"][0]["parts"][0]["text"], "Analiza esto")
        self.assertEqual(payload["generationConfig"]["responseMimeType"], "application/json")
        self.assertEqual(payload["generationConfig"]["responseSchema"], SCHEMA.to_wire())
        self.assertEqual(post.call_args.kwargs["headers"]["x-goog-api-key"], "test-key")

    async def test_joins_multiple_text_parts(self):
        body = {"candidates": [{"content": {"parts": [{"text": '{"compound"'}, {"text": ": -0.2}"}]}}]}
        with mock.patch.object(client_module.requests, "post", return_value=_response(body)):
            self.assertEqual(await self.client.submit("x", SCHEMA), {"compound": -0.2})

    async def test_missing_credential_makes_no_call(self):
        client = GeminiClient(Settings(api_key="  "))
        with mock.patch.object(client_module.requests, "post") as post:
            with self.assertRaises(CredentialError) as ctx:
                await client.submit("x", SCHEMA)
        post.assert_not_called()
        self.assertNotEqual(ctx.exception.user_message, GENERIC_ERROR_MESSAGE)

    async def test_network_failure_is_transport_error_with_generic_message(self):
        error = requests.exceptions.ConnectionError("connection refused by 10.0.0.1")
        with mock.patch.object(client_module.requests, "post", side_effect=error):
            with self.assertLogs("mision_nlp.client", level="ERROR") as logs, self.assertRaises(TransportError) as ctx:
                await self.client.submit("x", SCHEMA)
        self.assertEqual(ctx.exception.user_message, GENERIC_ERROR_MESSAGE)
        self.assertNotIn("10.0.0.1", ctx.exception.user_message)
        self.assertTrue(any("10.0.0.1" in line for line in logs.output))

    async def test_http_error_is_transport_error(self):
        body = {"error": {"message": "API key not valid"}}
        with mock.patch.object(client_module.requests, "post", return_value=_response(body, status_code=400)):
            with self.assertLogs("mision_nlp.client", level="ERROR") as logs, self.assertRaises(TransportError):
                await self.client.submit("x", SCHEMA)
        self.assertTrue(any("API key not valid" in line for line in logs.output))

    async def test_non_json_model_output_is_parse_error(self):
        with mock.patch.object(client_module.requests, "post", return_value=_response(_candidate("no es json"))):
            with self.assertRaises(ParseError) as ctx:
                await self.client.submit("x", SCHEMA)
        self.assertEqual(ctx.exception.user_message, GENERIC_ERROR_MESSAGE)

    async def test_blocked_prompt_is_parse_error(self):
        body = {"promptFeedback": {"blockReason": "SAFETY"}}
        with mock.patch.object(client_module.requests, "post", return_value=_response(body)):
            with self.assertRaises(ParseError):
                await self.client.submit("x", SCHEMA)

    async def test_non_json_http_body_is_parse_error(self):
        response = _response(ValueError("Expecting value"), text="<html>bad gateway</html>")
        with mock.patch.object(client_module.requests, "post", return_value=response):
            with self.assertRaises(ParseError):
                await self.client.submit("x", SCHEMA)

    async def test_blank_instruction_is_rejected(self):
        with mock.patch.object(client_module.requests, "post") as post:
            with self.assertRaises(ValueError):
                await self.client.submit("   ", SCHEMA)
        post.assert_not_called()


class GenerateLogoTests(unittest.TestCase):
    def test_decodes_first_prediction(self):
        client = GeminiClient(Settings(api_key="k"))
        body = {"predictions": [{"bytesBase64Encoded": base64.b64encode(b"PNGDATA").decode()}]}
        with mock.patch.object(client_module.requests, "post", return_value=_response(body)) as post:
            self.assertEqual(client.generate_logo(), b"PNGDATA")
        self.assertTrue(post.call_args.args[0].endswith("/models/imagen-4.0-generate-001:predict"))

    def test_empty_predictions_is_parse_error(self):
        client = GeminiClient(Settings(api_key="k"))
        with mock.patch.object(client_module.requests, "post", return_value=_response({"predictions": []})):
            with self.assertRaises(ParseError):
                client.generate_logo()

    def test_requires_credential(self):
        with self.assertRaises(CredentialError):
            GeminiClient(Settings(api_key=None)).generate_logo()


if __name__ == "__main__":
    unittest.main()
