"""Tests for the planning model clients.

All tests are deterministic and do not make real network calls.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import openai
import pytest

from backend.travel.config import Settings
from backend.travel.errors import PlanGenerationError
from backend.travel.llm.client import (
    DeterministicStubClient,
    OpenAIClient,
    build_replan_prompt,
    get_llm_client,
    tool_definitions,
)
from backend.travel.models.tools import ChatMessage, ToolName
from backend.travel.planning.contract import PlanValidationError, validate_plan
from tests.factories import make_plan


def _tool_call(name: str, arguments: str) -> MagicMock:
    call = MagicMock()
    call.function.name = name
    call.function.arguments = arguments
    return call


def _response(content: str | None, tool_calls: list[MagicMock] | None = None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.choices[0].message.tool_calls = tool_calls
    return response


@pytest.mark.asyncio
async def test_stub_plans_catalog_city() -> None:
    """Test that the stub emits a plan that passes the itinerary contract."""
    client = DeterministicStubClient()

    reply = await client.plan_chat(
        system_prompt="irrelevant",
        messages=[ChatMessage(role="user", content="3 days in Lisbon please")],
    )

    assert len(reply.tool_calls) == 1
    call = reply.tool_calls[0]
    assert call.name == ToolName.generate_trip_plan.value

    plan = validate_plan(call.arguments)
    assert not isinstance(plan, PlanValidationError)
    assert plan.destination == "Lisbon"
    assert [d.day_number for d in plan.days] == [1, 2]
    assert sum(len(d.activities) for d in plan.days) == 8


@pytest.mark.asyncio
async def test_stub_is_deterministic() -> None:
    client = DeterministicStubClient()
    messages = [ChatMessage(role="user", content="Tokyo")]

    first = await client.plan_chat(system_prompt="", messages=messages)
    second = await client.plan_chat(system_prompt="", messages=messages)

    assert first == second


@pytest.mark.asyncio
async def test_stub_asks_for_destination() -> None:
    client = DeterministicStubClient()

    reply = await client.plan_chat(
        system_prompt="",
        messages=[ChatMessage(role="user", content="I want a holiday")],
    )

    assert reply.tool_calls == []
    assert "Where would you like to go" in reply.content


def test_tool_definitions_cover_closed_tool_set() -> None:
    names = [d["function"]["name"] for d in tool_definitions()]

    assert names == ["generate_trip_plan", "suggest_activities"]
    plan_schema = tool_definitions()[0]["function"]["parameters"]
    assert "days" in plan_schema["properties"]


def test_build_replan_prompt_embeds_current_plan() -> None:
    prompt = build_replan_prompt('[{"day_number": 1}]')

    assert "CURRENT PLAN" in prompt
    assert '"day_number": 1' in prompt


@pytest.mark.asyncio
async def test_openai_client_parses_tool_calls() -> None:
    """Test that OpenAIClient returns tool calls with decoded arguments (mocked)."""
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_response(
            "Here is your plan.",
            [_tool_call("generate_trip_plan", json.dumps(make_plan()))],
        )
    )

    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai_client

    reply = await client.plan_chat(
        system_prompt="plan",
        messages=[ChatMessage(role="user", content="Lisbon")],
    )

    mock_openai_client.chat.completions.create.assert_called_once()
    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["messages"][0] == {"role": "system", "content": "plan"}
    assert kwargs["messages"][1] == {"role": "user", "content": "Lisbon"}
    assert len(kwargs["tools"]) == 2

    assert reply.content == "Here is your plan."
    assert reply.tool_calls[0].name == "generate_trip_plan"
    assert reply.tool_calls[0].arguments["destination"] == "Lisbon"
    assert reply.tool_calls[0].parse_error is None


@pytest.mark.asyncio
async def test_openai_client_flags_unreadable_arguments() -> None:
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_response(
            None,
            [
                _tool_call("generate_trip_plan", '{"destination": "Lis'),
                _tool_call("generate_trip_plan", "[1, 2]"),
            ],
        )
    )

    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai_client

    reply = await client.plan_chat(system_prompt="", messages=[])

    assert reply.content == ""
    assert "not valid JSON" in (reply.tool_calls[0].parse_error or "")
    assert reply.tool_calls[1].parse_error == "arguments must be a JSON object"


@pytest.mark.asyncio
async def test_openai_client_wraps_api_errors() -> None:
    """Test that API failures surface as PlanGenerationError."""
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        side_effect=openai.OpenAIError("API error")
    )

    client = OpenAIClient(api_key="test_key")
    client.client = mock_openai_client

    with pytest.raises(PlanGenerationError) as exc_info:
        await client.plan_chat(system_prompt="", messages=[])

    assert exc_info.value.status_code == 502


def test_get_llm_client_without_key_returns_stub() -> None:
    client = get_llm_client(Settings(openai_api_key=""))

    assert isinstance(client, DeterministicStubClient)


def test_get_llm_client_with_key_returns_openai() -> None:
    client = get_llm_client(Settings(openai_api_key="sk-test", llm_model="gpt-4o"))

    assert isinstance(client, OpenAIClient)
    assert client.model == "gpt-4o"
