"""Tests for the fail-soft generation client, using httpx's mock transport."""

import json

import httpx

from salesbot.schemas.chat_schema import ChatMessage
from salesbot.tools.generation import GenerationClient


def make_client(handler) -> GenerationClient:
    return GenerationClient(api_key="test-key", transport=httpx.MockTransport(handler))


class TestUnconfigured:
    def test_no_key_means_no_calls(self):
        def handler(request):
            raise AssertionError("no request expected")

        client = GenerationClient(api_key="  ", transport=httpx.MockTransport(handler))
        assert not client.is_configured()
        assert client.complete("system", "user") is None
        assert client.embed("text") is None


class TestComplete:
    def test_returns_trimmed_content(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "  Hola!  "}}]})

        client = make_client(handler)
        assert client.complete("sys", "hola") == "Hola!"
        assert seen["path"].endswith("/chat/completions")
        assert seen["auth"] == "Bearer test-key"
        assert [m["role"] for m in seen["body"]["messages"]] == ["system", "user"]

    def test_multi_turn_keeps_order(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        messages = [
            ChatMessage(role="user", content="hola"),
            ChatMessage(role="assistant", content="que tal"),
            ChatMessage(role="user", content="precio"),
        ]
        assert make_client(handler).complete_messages("sys", messages) == "ok"
        assert [m["content"] for m in seen["body"]["messages"]] == ["sys", "hola", "que tal", "precio"]

    def test_server_error_returns_none(self):
        client = make_client(lambda request: httpx.Response(500, text="boom"))
        assert client.complete("sys", "hola") is None

    def test_invalid_json_returns_none(self):
        client = make_client(lambda request: httpx.Response(200, text="not json"))
        assert client.complete("sys", "hola") is None

    def test_missing_choices_returns_none(self):
        client = make_client(lambda request: httpx.Response(200, json={"choices": []}))
        assert client.complete("sys", "hola") is None

    def test_blank_content_returns_none(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"choices": [{"message": {"content": "   "}}]})
        )
        assert client.complete("sys", "hola") is None

    def test_network_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert make_client(handler).complete("sys", "hola") is None

    def test_malformed_base_url_returns_none(self, caplog):
        client = GenerationClient(api_key="test-key", base_url="http://[::1")
        with caplog.at_level("WARNING", logger="salesbot.tools.generation"):
            assert client.complete("sys", "hola") is None
            assert client.embed("texto") is None
        assert len([r for r in caplog.records if r.levelname == "WARNING"]) == 2


class TestEmbed:
    def test_returns_vector(self):
        client = make_client(
            lambda request: httpx.Response(200, json={"data": [{"embedding": [0.5, 1, -2]}]})
        )
        assert client.embed("texto") == [0.5, 1.0, -2.0]

    def test_blank_input_skips_call(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert make_client(handler).embed("   ") is None

    def test_malformed_payload_returns_none(self):
        client = make_client(lambda request: httpx.Response(200, json={"data": [{}]}))
        assert client.embed("texto") is None
