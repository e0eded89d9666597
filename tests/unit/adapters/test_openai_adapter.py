import pytest
from unittest.mock import AsyncMock, Mock, patch

from workspace_assistant.adapters.openai_adapter import DEFAULT_CHAT_MODEL, OpenAIAdapter

# Fixtures


@pytest.fixture
def mock_openai():
    with patch("workspace_assistant.adapters.openai_adapter.AsyncOpenAI") as mock:
        mock.return_value.chat.completions.create = AsyncMock()
        yield mock


@pytest.fixture
def adapter(mock_openai):
    return OpenAIAdapter(api_key="test-key")

# Helpers for creating mock completions


def create_tool_call(call_id: str, name: str, arguments: str):
    call = Mock()
    call.id = call_id
    call.function.name = name
    call.function.arguments = arguments
    return call


def create_completion(content=None, tool_calls=None, finish_reason="stop", usage=True):
    completion = Mock()
    choice = Mock()
    choice.message.content = content
    choice.message.tool_calls = tool_calls
    choice.finish_reason = finish_reason
    completion.choices = [choice]
    if usage:
        completion.usage.prompt_tokens = 10
        completion.usage.completion_tokens = 5
        completion.usage.total_tokens = 15
    else:
        completion.usage = None
    return completion

# Tests


def test_default_model(adapter):
    assert adapter.text_model == DEFAULT_CHAT_MODEL == "gpt-4o-mini"
    assert adapter.logfire is False


def test_model_override(mock_openai):
    assert OpenAIAdapter(api_key="k", model="gpt-4o").text_model == "gpt-4o"


@pytest.mark.asyncio
async def test_chat_text_turn(adapter, mock_openai):
    mock_openai.return_value.chat.completions.create.return_value = create_completion(
        content="Hello!"
    )

    turn = await adapter.chat([{"role": "user", "content": "Hi"}], temperature=0.7)

    assert turn.text == "Hello!"
    assert turn.tool_calls == []
    assert turn.finish_reason == "stop"
    assert turn.usage == {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}

    kwargs = mock_openai.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.7
    assert "tools" not in kwargs


@pytest.mark.asyncio
async def test_chat_tool_calls(adapter, mock_openai):
    mock_openai.return_value.chat.completions.create.return_value = create_completion(
        tool_calls=[
            create_tool_call("call_1", "runGmailTool", '{"instruction": "send"}'),
            create_tool_call("call_2", "getMyCards", "not json"),
        ],
        finish_reason="tool_calls",
        usage=False,
    )
    tools = [{"type": "function", "function": {"name": "runGmailTool"}}]

    turn = await adapter.chat([{"role": "user", "content": "x"}], tools=tools)

    assert turn.text == ""
    assert [(c.id, c.name, c.arguments) for c in turn.tool_calls] == [
        ("call_1", "runGmailTool", {"instruction": "send"}),
        ("call_2", "getMyCards", {}),
    ]
    assert turn.usage == {}
    kwargs = mock_openai.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["tools"] == tools
    assert "temperature" not in kwargs


@pytest.mark.asyncio
async def test_chat_errors_propagate(adapter, mock_openai):
    mock_openai.return_value.chat.completions.create.side_effect = Exception(
        "Rate limit reached"
    )
    with pytest.raises(Exception, match="Rate limit reached"):
        await adapter.chat([{"role": "user", "content": "x"}])


def test_logfire_instrumentation(mock_openai):
    with patch("workspace_assistant.adapters.openai_adapter.logfire") as mock_logfire:
        adapter = OpenAIAdapter(api_key="k", logfire_api_key="lf-key")
    mock_logfire.configure.assert_called_once_with(token="lf-key")
    mock_logfire.instrument_openai.assert_called_once_with(adapter.client)
    assert adapter.logfire is True


def test_logfire_failure_is_tolerated(mock_openai):
    with patch("workspace_assistant.adapters.openai_adapter.logfire") as mock_logfire:
        mock_logfire.configure.side_effect = RuntimeError("bad token")
        adapter = OpenAIAdapter(api_key="k", logfire_api_key="lf-key")
    assert adapter.logfire is False
