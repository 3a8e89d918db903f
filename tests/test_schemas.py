"""Tests for the output schema registry."""

import pytest
from pydantic import ValidationError

from core.domain.models import AppointmentResponse, EventResponse, MenuResponse, SeasonalDishSuggestion
from core.domain.schemas import (
    APPOINTMENT_SCHEMA,
    EVENT_SCHEMA,
    MENU_SCHEMA,
    SCHEMAS,
    SEASONAL_SCHEMA,
    Domain,
    FieldKind,
    get_schema,
)

RESPONSE_TYPES = {
    Domain.MENU: MenuResponse,
    Domain.APPOINTMENT: AppointmentResponse,
    Domain.EVENT: EventResponse,
    Domain.SEASONAL: SeasonalDishSuggestion,
}


class TestSchemaRegistry:
    """Field names, kinds and required-ness per domain."""

    def test_every_domain_has_a_schema(self):
        assert set(SCHEMAS) == set(Domain)
        assert get_schema(Domain.EVENT) is EVENT_SCHEMA

    def test_menu_fields(self):
        assert list(MENU_SCHEMA.properties) == [
            "menuDescription",
            "socialMediaCaption",
            "imageSuggestion",
            "nutritionalInfo",
            "promotionalOffer",
        ]

    def test_appointment_fields(self):
        assert list(APPOINTMENT_SCHEMA.properties) == [
            "bookingResponse",
            "reminderMessage",
            "reschedulingOption",
            "upsellSuggestion",
            "sentimentAnalysis",
        ]

    def test_event_array_fields(self):
        kinds = {name: field.kind for name, field in EVENT_SCHEMA.properties.items()}
        assert kinds["hashtags"] is FieldKind.STRING_ARRAY
        assert kinds["engagementQuestions"] is FieldKind.STRING_ARRAY
        assert [n for n, k in kinds.items() if k is FieldKind.STRING] == [
            "socialMediaCaption",
            "bannerText",
            "imageSuggestion",
            "videoScriptConcept",
        ]

    def test_seasonal_fields(self):
        assert list(SEASONAL_SCHEMA.properties) == ["dishName", "ingredients", "description"]

    @pytest.mark.parametrize("domain", list(Domain))
    def test_all_fields_required(self, domain):
        schema = get_schema(domain)
        assert schema.required_fields == list(schema.properties)

    @pytest.mark.parametrize("domain", list(Domain))
    def test_decoder_reads_only_required_fields(self, domain):
        """The response model's wire names match the schema's required fields."""

        response_type = RESPONSE_TYPES[domain]
        wire_names = {field.alias or name for name, field in response_type.model_fields.items()}
        assert wire_names == set(get_schema(domain).required_fields)


class TestJsonSchema:
    """Rendering of the contract sent as `response_format`."""

    def test_event_json_schema(self):
        rendered = EVENT_SCHEMA.to_json_schema()

        assert rendered["type"] == "object"
        assert rendered["additionalProperties"] is False
        assert rendered["required"] == list(EVENT_SCHEMA.properties)
        assert rendered["properties"]["hashtags"] == {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of trending/relevant hashtags.",
        }
        assert rendered["properties"]["bannerText"]["type"] == "string"

    def test_schemas_are_immutable(self):
        with pytest.raises(ValidationError):
            MENU_SCHEMA.name = "other"
