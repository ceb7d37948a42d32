"""LLM client for conversational trip planning with OpenAI function calling.

Security: Reads API key from settings only, never hardcoded.
Provides a deterministic stub when no key is present for testing.
"""

import json
import logging
from typing import Any, Protocol

import openai
from openai import AsyncOpenAI

from backend.travel.config import Settings, get_settings
from backend.travel.errors import PlanGenerationError
from backend.travel.models.tools import (
    ChatMessage,
    ModelReply,
    RawToolCall,
    SuggestActivitiesArgs,
    ToolName,
)
from backend.travel.models.trip import TripPlan
from backend.travel.planning.suggestions import match_city, suggestions_for

logger = logging.getLogger(__name__)

TRAVEL_SYSTEM_PROMPT = """You are a travel planner for solo travelers. You help create detailed, practical travel plans.

Your personality: friendly, knowledgeable, concise. You speak like a well-traveled friend, not a generic chatbot.

CONVERSATION FLOW:
1. User describes their trip idea (destination, duration, budget)
2. You ask UP TO 3 follow-up questions, one at a time:
   - Travel style (relaxed/adventurous/cultural/mix)
   - Accommodation preference (hostel/budget hotel/mid-range/luxury)
   - Must-sees or must-avoids
3. Once you have enough context, generate the full trip plan

IMPORTANT RULES:
- Always respond in the same language the user writes in
- Keep follow-up questions short and specific
- When generating a plan, use the generate_trip_plan tool
- Be realistic about costs: use actual price ranges for the destination
- Number days from 1 without gaps
- Every activity needs a time_slot (morning, afternoon or evening) and a cost_category
  (food, activity, transport, shopping or other)
- Include a mix of popular and off-the-beaten-path suggestions
- Account for travel time between locations"""

REPLAN_SYSTEM_PROMPT = """You are a travel planner. The user has an existing trip plan and wants to modify part of it.

RULES:
- Only modify the specific day or activity the user mentions
- Keep the rest of the plan intact
- Respond in the same language the user writes in
- Use the generate_trip_plan tool with the COMPLETE plan (all days), with your modifications applied
- Explain briefly what you changed and why"""


def build_replan_prompt(days_json: str) -> str:
    """Replan prompt with the current itinerary attached."""
    return f"{REPLAN_SYSTEM_PROMPT}\n\nCURRENT PLAN:\n{days_json}"


def tool_definitions() -> list[dict[str, Any]]:
    """OpenAI function definitions for the closed tool set."""
    return [
        {
            "type": "function",
            "function": {
                "name": ToolName.generate_trip_plan.value,
                "description": (
                    "Generate a complete trip plan with daily activities and accommodations. "
                    "Call this when you have enough information to create the plan."
                ),
                "parameters": TripPlan.model_json_schema(),
            },
        },
        {
            "type": "function",
            "function": {
                "name": ToolName.suggest_activities.value,
                "description": "List curated activity ideas for a destination.",
                "parameters": SuggestActivitiesArgs.model_json_schema(),
            },
        },
    ]


class LLMClient(Protocol):
    """Protocol for LLM client implementations."""

    async def plan_chat(
        self,
        *,
        system_prompt: str,
        messages: list[ChatMessage],
    ) -> ModelReply:
        """Run one model turn over the conversation.

        Args:
            system_prompt: Instructions for the planning model
            messages: Conversation so far, oldest first

        Returns:
            Assistant text plus any tool calls, arguments not yet validated

        Raises:
            PlanGenerationError: If the model could not be reached
        """
        ...


class DeterministicStubClient:
    """Deterministic stub client for testing (no API key required).

    Plans a two-day trip from the suggestion catalog when the latest user
    message names a catalog city, and asks for a destination otherwise.
    """

    async def plan_chat(
        self,
        *,
        system_prompt: str,
        messages: list[ChatMessage],
    ) -> ModelReply:
        """Generate deterministic stub reply."""
        latest = next((m.content for m in reversed(messages) if m.role == "user"), "")
        city = match_city(latest)
        if city is None:
            return ModelReply(content="Where would you like to go? Tell me the city and how many days.")

        seeds = suggestions_for(city)
        days = []
        for day_number, chunk in enumerate((seeds[:4], seeds[4:]), start=1):
            days.append(
                {
                    "day_number": day_number,
                    "title": f"{city.capitalize()} day {day_number}",
                    "activities": [
                        seed.to_activity().model_dump(mode="json") for seed in chunk
                    ],
                }
            )

        plan = {"title": f"Trip to {city.capitalize()}", "destination": city.capitalize(), "days": days}
        return ModelReply(
            content=f"Here is a two-day plan for {city.capitalize()}.",
            tool_calls=[RawToolCall(name=ToolName.generate_trip_plan.value, arguments=plan)],
        )


def _parse_tool_call(name: str, raw_arguments: str) -> RawToolCall:
    try:
        arguments = json.loads(raw_arguments or "{}")
    except json.JSONDecodeError as e:
        return RawToolCall(name=name, parse_error=f"arguments are not valid JSON: {e.msg}")

    if not isinstance(arguments, dict):
        return RawToolCall(name=name, parse_error="arguments must be a JSON object")
    return RawToolCall(name=name, arguments=arguments)


class OpenAIClient:
    """OpenAI-backed LLM client for real planning conversations."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        max_tokens: int = 4000,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from settings)
            model: Model name to use (default: gpt-4o-mini for cost efficiency)
            timeout: Request timeout in seconds
            max_tokens: Completion token cap; full plans are long
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self.model = model
        self.max_tokens = max_tokens

    def _build_messages(
        self, system_prompt: str, messages: list[ChatMessage]
    ) -> list[dict[str, str]]:
        payload = [{"role": "system", "content": system_prompt}]
        payload.extend({"role": m.role, "content": m.content} for m in messages)
        return payload

    async def plan_chat(
        self,
        *,
        system_prompt: str,
        messages: list[ChatMessage],
    ) -> ModelReply:
        """Call the chat completions API with the planning tools attached."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=self._build_messages(system_prompt, messages),  # type: ignore[arg-type]
                tools=tool_definitions(),  # type: ignore[arg-type]
                temperature=0.7,
                max_tokens=self.max_tokens,
            )
        except openai.OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise PlanGenerationError("The planning model is unavailable") from e

        message = response.choices[0].message
        tool_calls = [
            _parse_tool_call(call.function.name, call.function.arguments)
            for call in (message.tool_calls or [])
        ]

        if len(tool_calls) > 0:
            logger.info(
                "Model returned tool calls",
                extra={"structured": {"tools": [c.name for c in tool_calls]}},
            )

        return ModelReply(content=message.content or "", tool_calls=tool_calls)


def get_llm_client(settings: Settings | None = None) -> LLMClient:
    """Factory function to get appropriate LLM client based on config.

    Returns:
        OpenAIClient if API key is configured, DeterministicStubClient otherwise
    """
    settings = settings or get_settings()
    api_key = settings.openai_api_key

    if api_key and api_key.get_secret_value():
        logger.info("Using OpenAI client for planning")
        return OpenAIClient(
            api_key=api_key.get_secret_value(),
            model=settings.llm_model,
            timeout=settings.llm_timeout_seconds,
            max_tokens=settings.llm_max_tokens,
        )
    else:
        logger.warning("No OpenAI API key configured, using deterministic stub client")
        return DeterministicStubClient()
