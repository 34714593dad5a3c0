"""Tests for NebiusAdapter client lifecycle, model lookup and format selection."""

import json

import httpx
import pytest

from nebius_llm.adapters import nebius as nebius_module
from nebius_llm.adapters.base import ProviderAdapter
from nebius_llm.adapters.nebius import NebiusAdapter
from nebius_llm.catalog import NEBIUS_DEFAULT_MODEL_ID, NEBIUS_MODELS
from nebius_llm.client import NebiusClient
from nebius_llm.config import NebiusConfig
from nebius_llm.errors import ClientInitError, ConfigurationError
from nebius_llm.retry import RetryPolicy
from nebius_llm.types import Message


def _ok_stream(_: httpx.Request) -> httpx.Response:
    chunk = {"choices": [{"index": 0, "delta": {"content": "ok"}}]}
    return httpx.Response(200, content=f"data: {json.dumps(chunk)}\n\ndata: [DONE]\n\n".encode())


def _mock_http(handler=_ok_stream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestProviderAdapter:
    def test_is_abstract(self):
        with pytest.raises(TypeError):
            ProviderAdapter()  # type: ignore

    def test_name(self):
        assert NebiusAdapter(NebiusConfig()).name == "nebius"


class TestEnsureClient:
    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_key_raises_configuration_error(self, api_key):
        adapter = NebiusAdapter(NebiusConfig(api_key=api_key))
        with pytest.raises(ConfigurationError, match="API key is required"):
            adapter.ensure_client()

    async def test_create_message_without_key_fails_before_network(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return _ok_stream(request)

        adapter = NebiusAdapter(
            NebiusConfig(api_key=None),
            http_client=_mock_http(handler),
            retry_policy=RetryPolicy(max_retries=3, base_delay=0.0),
        )

        with pytest.raises(ConfigurationError):
            async for _ in adapter.create_message("sys", [Message.user("hi")]):
                pass
        assert requests == []

    def test_construction_failure_wrapped_as_client_init_error(self, monkeypatch):
        boom = RuntimeError("boom")

        def failing_client(**kwargs):
            raise boom

        monkeypatch.setattr(nebius_module, "NebiusClient", failing_client)
        adapter = NebiusAdapter(NebiusConfig(api_key="key"))

        with pytest.raises(ClientInitError, match="Error creating Nebius client: boom") as excinfo:
            adapter.ensure_client()
        assert excinfo.value.cause is boom
        assert excinfo.value.retryable is False

    def test_client_is_cached(self):
        adapter = NebiusAdapter(NebiusConfig(api_key="key"), http_client=_mock_http())
        first = adapter.ensure_client()
        assert isinstance(first, NebiusClient)
        assert adapter.ensure_client() is first

    def test_client_uses_configured_base_url(self):
        adapter = NebiusAdapter(
            NebiusConfig(api_key="key", base_url="https://example.test/v1/"),
            http_client=_mock_http(),
        )
        assert adapter.ensure_client().base_url == "https://example.test/v1"

    async def test_repeated_calls_construct_client_once(self, monkeypatch):
        constructed = []

        class CountingClient(NebiusClient):
            def __init__(self, **kwargs):
                constructed.append(kwargs)
                super().__init__(**kwargs)

        monkeypatch.setattr(nebius_module, "NebiusClient", CountingClient)
        adapter = NebiusAdapter(NebiusConfig(api_key="key"), http_client=_mock_http())

        for _ in range(3):
            events = [event async for event in adapter.create_message("sys", [])]
            assert [event.text for event in events] == ["ok"]

        assert len(constructed) == 1
        assert constructed[0]["api_key"] == "key"


class TestGetModel:
    @pytest.mark.parametrize("model_id", sorted(NEBIUS_MODELS))
    def test_known_model(self, model_id):
        model = NebiusAdapter(NebiusConfig(api_model_id=model_id)).get_model()
        assert model.id == model_id
        assert model.info is NEBIUS_MODELS[model_id]

    @pytest.mark.parametrize("model_id", [None, "", "gpt-4", "deepseek-ai/deepseek-r1"])
    def test_unknown_or_missing_falls_back_to_default(self, model_id):
        model = NebiusAdapter(NebiusConfig(api_model_id=model_id)).get_model()
        assert model.id == NEBIUS_DEFAULT_MODEL_ID
        assert model.info is NEBIUS_MODELS[NEBIUS_DEFAULT_MODEL_ID]

    def test_lookup_has_no_side_effects(self):
        adapter = NebiusAdapter(NebiusConfig(api_key="key", api_model_id="deepseek-ai/DeepSeek-V3"))
        assert adapter.get_model() == adapter.get_model()
        assert adapter.config.api_model_id == "deepseek-ai/DeepSeek-V3"


class TestFormatSelection:
    @pytest.fixture
    def recorded(self, monkeypatch):
        calls = {"r1": [], "openai": []}

        def fake_r1(messages):
            calls["r1"].append(messages)
            return [{"role": "user", "content": "folded"}]

        def fake_openai(messages):
            calls["openai"].append(messages)
            return [{"role": "user", "content": "converted"}]

        monkeypatch.setattr(nebius_module, "convert_to_r1_format", fake_r1)
        monkeypatch.setattr(nebius_module, "convert_to_openai_messages", fake_openai)
        return calls

    def test_r1_model_folds_system_prompt_into_user_turn(self, recorded):
        adapter = NebiusAdapter(NebiusConfig(api_model_id="deepseek-ai/DeepSeek-R1"))
        history = [Message.user("hi"), Message.assistant("hello")]

        result = adapter._build_messages("deepseek-ai/DeepSeek-R1", "sys", history)

        assert result == [{"role": "user", "content": "folded"}]
        assert recorded["openai"] == []
        (passed,) = recorded["r1"]
        assert passed[0] == Message.user("sys")
        assert passed[1:] == history

    def test_marker_match_is_substring_based(self, recorded):
        adapter = NebiusAdapter(NebiusConfig())
        adapter._build_messages("DeepSeek-R1", "sys", [])
        adapter._build_messages("deepseek-ai/DeepSeek-R1-fast", "sys", [])
        assert len(recorded["r1"]) == 2

    def test_other_model_uses_system_message_and_converted_history(self, recorded):
        adapter = NebiusAdapter(NebiusConfig())
        history = [Message.user("hi")]

        result = adapter._build_messages("gpt-4", "sys", history)

        assert result == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "converted"},
        ]
        assert recorded["r1"] == []
        assert recorded["openai"] == [history]

    async def test_create_message_routes_on_resolved_model(self, recorded):
        adapter = NebiusAdapter(
            NebiusConfig(api_key="key", api_model_id="deepseek-ai/DeepSeek-R1-fast"),
            http_client=_mock_http(),
        )
        [event async for event in adapter.create_message("sys", [])]

        assert len(recorded["r1"]) == 1
        assert recorded["openai"] == []

    async def test_empty_prompt_and_history_pass_through(self, recorded):
        adapter = NebiusAdapter(NebiusConfig(api_key="key"), http_client=_mock_http())
        events = [event async for event in adapter.create_message("", [])]

        assert [event.text for event in events] == ["ok"]
        assert recorded["openai"] == [[]]


class TestClose:
    async def test_closed_adapter_rejects_new_messages(self):
        adapter = NebiusAdapter(NebiusConfig(api_key="key"), http_client=_mock_http())
        [event async for event in adapter.create_message("sys", [])]

        await adapter.close()

        with pytest.raises(ConfigurationError, match="closed"):
            adapter.ensure_client()
        with pytest.raises(ConfigurationError, match="closed"):
            async for _ in adapter.create_message("sys", []):
                pass

    async def test_close_before_first_use(self):
        adapter = NebiusAdapter(NebiusConfig(api_key="key"))
        await adapter.close()

        with pytest.raises(ConfigurationError):
            adapter.ensure_client()

    async def test_close_owned_client_closes_http_connection(self):
        adapter = NebiusAdapter(NebiusConfig(api_key="key"))
        client = adapter.ensure_client()

        await adapter.close()

        assert client._client.is_closed is True
