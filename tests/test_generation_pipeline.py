"""Tests for the structured generation operation and the assistant facade."""

import asyncio
import json

import pytest

from core.domain.errors import DecodeError, FailureKind, GenerationFailedError, ProviderError
from core.domain.models import (
    AppointmentRequest,
    EventRequest,
    EventResponse,
    GenerationOutcome,
    MenuRequest,
    MenuResponse,
)
from core.domain.schemas import APPOINTMENT_SCHEMA, EVENT_SCHEMA, MENU_SCHEMA, SEASONAL_SCHEMA
from core.services.generation_pipeline import (
    APPOINTMENT_TASK,
    EVENT_TASK,
    MENU_TASK,
    SEASONAL_TASK,
    MarketingAssistant,
    run_structured,
)
from core.services.prompt_builder import system_instruction_for

MENU_REPLY = {
    "menuDescription": "x",
    "socialMediaCaption": "y",
    "imageSuggestion": "z",
    "nutritionalInfo": "n",
    "promotionalOffer": "p",
}


@pytest.fixture
def menu_request():
    return MenuRequest(ingredients="mushrooms, truffle oil", dishType="Main Course", language="English")


class TestTasks:
    def test_task_tables(self):
        assert MENU_TASK.schema is MENU_SCHEMA
        assert APPOINTMENT_TASK.schema is APPOINTMENT_SCHEMA
        assert EVENT_TASK.schema is EVENT_SCHEMA
        assert SEASONAL_TASK.schema is SEASONAL_SCHEMA
        assert EVENT_TASK.response_type is EventResponse
        assert MENU_TASK.system_instruction == system_instruction_for(MENU_TASK.domain)


class TestRunStructured:
    @pytest.mark.asyncio
    async def test_menu_scenario(self, make_generator, menu_request):
        generator = make_generator(outcome=GenerationOutcome.success(json.dumps(MENU_REPLY)))

        result = await run_structured(generator, MENU_TASK, menu_request)

        assert isinstance(result, MenuResponse)
        assert result.to_wire() == MENU_REPLY
        call = generator.calls[0]
        assert "Ingredients: mushrooms, truffle oil" in call["prompt"].splitlines()
        assert "Language: English" in call["prompt"].splitlines()
        assert call["schema"] is MENU_SCHEMA
        assert call["system_instruction"] == MENU_TASK.system_instruction
        assert call["model"] is None

    @pytest.mark.asyncio
    async def test_provider_failure_surfaces_typed_error(self, make_generator, menu_request):
        error = ProviderError("quota exceeded", kind=FailureKind.RATE_LIMIT, status_code=429, retry_after=3)
        generator = make_generator(outcome=GenerationOutcome.failure(error))

        with pytest.raises(GenerationFailedError) as excinfo:
            await run_structured(generator, MENU_TASK, menu_request)

        assert excinfo.value.kind is FailureKind.RATE_LIMIT
        assert excinfo.value.cause is error
        assert excinfo.value.domain == "menu"
        assert len(generator.calls) == 1

    @pytest.mark.asyncio
    async def test_malformed_reply_yields_blank_response(self, make_generator, menu_request):
        generator = make_generator(outcome=GenerationOutcome.success("I cannot help with that."))

        result = await run_structured(generator, MENU_TASK, menu_request)

        assert result == MenuResponse()

    @pytest.mark.asyncio
    async def test_strict_mode_raises_decode_error(self, make_generator, menu_request):
        generator = make_generator(outcome=GenerationOutcome.success("I cannot help with that."))

        with pytest.raises(DecodeError):
            await run_structured(generator, MENU_TASK, menu_request, strict=True)


class TestMarketingAssistant:
    @pytest.mark.asyncio
    async def test_seasonal_suggestion(self, make_generator):
        reply = {"dishName": "Pumpkin Risotto", "ingredients": "pumpkin, arborio", "description": "Autumn."}
        generator = make_generator(outcome=GenerationOutcome.success(json.dumps(reply)))

        result = await MarketingAssistant(generator).generate_seasonal_suggestion()

        assert result.dish_name == "Pumpkin Risotto"
        assert generator.calls[0]["schema"] is SEASONAL_SCHEMA

    @pytest.mark.asyncio
    async def test_appointment_uses_model_selector(self, make_generator):
        generator = make_generator(outcome=GenerationOutcome.success('{"sentimentAnalysis": "Neutral"}'))
        request = AppointmentRequest(businessType="Dental Clinic", service="Cleaning", time="Mon 9am", language="French")

        result = await MarketingAssistant(generator, model="gemini-2.5-pro").generate_appointment_content(request)

        assert result.sentiment_analysis == "Neutral"
        assert result.booking_response == ""
        assert generator.calls[0]["model"] == "gemini-2.5-pro"
        assert "Customer Message Context (if any): None" in generator.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_event_with_empty_arrays(self, make_generator):
        reply = {
            "socialMediaCaption": "c",
            "bannerText": "b",
            "imageSuggestion": "i",
            "hashtags": [],
            "engagementQuestions": [],
            "videoScriptConcept": "v",
        }
        generator = make_generator(outcome=GenerationOutcome.success(json.dumps(reply)))
        request = EventRequest(eventName="Fair", eventType="Market", dateTime="Sun", location="Park")

        result = await MarketingAssistant(generator).generate_event_content(request)

        assert result.hashtags == ()
        assert result.engagement_questions == ()

    @pytest.mark.asyncio
    async def test_independent_requests_can_run_as_tasks(self, make_generator, menu_request):
        generator = make_generator(outcome=GenerationOutcome.success(json.dumps(MENU_REPLY)))
        assistant = MarketingAssistant(generator)

        first = asyncio.create_task(assistant.generate_menu_content(menu_request))
        second = asyncio.create_task(assistant.generate_seasonal_suggestion())
        menu, seasonal = await asyncio.gather(first, second)

        assert menu.menu_description == "x"
        assert seasonal.dish_name == ""
        assert len(generator.calls) == 2

    @pytest.mark.asyncio
    async def test_visual_uses_image_suggestion(self, make_generator, png_asset):
        generator = make_generator(image=png_asset)

        image = await MarketingAssistant(generator).generate_visual("A glowing truffle pasta")

        assert image == png_asset
        assert generator.image_prompts == ["A glowing truffle pasta"]
        assert generator.calls == []


class TestGenerationOutcome:
    def test_exactly_one_of_text_or_error(self):
        with pytest.raises(ValueError):
            GenerationOutcome()
        with pytest.raises(ValueError):
            GenerationOutcome(text="{}", error=ProviderError("x"))

    def test_empty_text_is_success(self):
        assert GenerationOutcome.success("").ok
