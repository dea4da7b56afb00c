"""Tests for mapping configuration shape checks."""

import pytest

from src.transform.config_validation import (
    ValidationError,
    configured_entity_slugs,
    validate_event_configuration,
)
from src.utils.file_io import list_event_configs, load_event_config


class TestShippedConfigurations:
    """The configurations in samples/ must pass validation."""

    @pytest.mark.parametrize("event_name", ["CustomerChanged", "OrderChanged"])
    def test_sample_is_valid(self, samples_dir, event_name):
        """Test shipped mapping configurations are well-formed."""
        config = load_event_config(event_name, samples_dir)
        result = validate_event_configuration(config)

        assert result.is_valid, result.errors
        assert result.config is config

    def test_every_sample_listed(self, samples_dir):
        """Test that both sample events are discovered."""
        assert list_event_configs(samples_dir) == ["CustomerChanged", "OrderChanged"]

    def test_configured_entity_slugs(self, customer_config):
        """Test entity schema listing."""
        assert configured_entity_slugs(customer_config) == [
            "contact",
            "account",
            "billing_account",
        ]


class TestRootValidation:
    """Tests for the configuration root."""

    def test_minimal_config_valid(self, minimal_config):
        """Test smallest valid configuration."""
        assert validate_event_configuration(minimal_config).is_valid

    def test_non_object_root(self):
        """Test a list root is rejected."""
        result = validate_event_configuration([])

        assert not result.is_valid
        assert result.config is None

    @pytest.mark.parametrize("config", [{}, {"entities": []}, {"entities": {}}])
    def test_entities_required(self, config):
        """Test entities must be a non-empty list."""
        result = validate_event_configuration(config)

        assert result.errors == ["entities: must be a non-empty list"]

    def test_raise_on_error(self):
        """Test raising when requested."""
        with pytest.raises(ValidationError) as exc_info:
            validate_event_configuration({}, raise_on_error=True)

        assert exc_info.value.errors == ["entities: must be a non-empty list"]


class TestEntityValidation:
    """Tests for entity blocks."""

    def test_missing_schema_and_unique_ids(self):
        """Test entity_schema and unique_ids are required."""
        config = {"entities": [{"fields": []}]}
        result = validate_event_configuration(config)

        assert "entities[0].entity_schema: required" in result.errors
        assert "entities[0].unique_ids: must be a non-empty list" in result.errors

    def test_fields_must_be_list(self):
        """Test fields type check."""
        config = {
            "entities": [
                {"entity_schema": "order", "unique_ids": ["external_id"], "fields": {}}
            ]
        }
        result = validate_event_configuration(config)

        assert result.errors == ["entities[0].fields: must be a list"]


class TestFieldValidation:
    """Tests for field mappings."""

    def _config_with_field(self, mapping):
        return {
            "entities": [
                {
                    "entity_schema": "contact",
                    "unique_ids": ["external_id"],
                    "fields": [mapping],
                }
            ]
        }

    def test_attribute_required(self):
        """Test a field mapping without attribute."""
        result = validate_event_configuration(self._config_with_field({"field": "id"}))

        assert result.errors == ["entities[0].fields[0].attribute: required"]

    def test_source_required(self):
        """Test a field mapping without a value source."""
        result = validate_event_configuration(
            self._config_with_field({"attribute": "external_id"})
        )

        assert len(result.errors) == 1
        assert "needs one of" in result.errors[0]

    def test_single_source_only(self):
        """Test a field mapping with two sources."""
        result = validate_event_configuration(
            self._config_with_field(
                {"attribute": "status", "field": "status", "constant": "active"}
            )
        )

        assert result.errors == [
            "entities[0].fields[0]: has multiple sources (field, constant)"
        ]

    def test_jsonata_expression_accepted(self):
        """Test JSONata sources are accepted without evaluation."""
        result = validate_event_configuration(
            self._config_with_field(
                {"attribute": "status", "jsonataExpression": "$lowercase(status"}
            )
        )

        assert result.is_valid


class TestRelationValidation:
    """Tests for relation blocks."""

    def _config_with_relations(self, relations):
        return {
            "entities": [
                {
                    "entity_schema": "order",
                    "unique_ids": ["external_id"],
                    "fields": [{"attribute": "customer", "relations": relations}],
                }
            ]
        }

    def test_valid_relation(self):
        """Test a well-formed _set relation."""
        relations = {
            "operation": "_set",
            "items": [
                {
                    "entity_schema": "contact",
                    "unique_ids": [{"attribute": "external_id", "field": "customer.id"}],
                }
            ],
        }

        assert validate_event_configuration(self._config_with_relations(relations)).is_valid

    def test_unknown_operation(self):
        """Test unsupported relation operations."""
        relations = {
            "operation": "_replace",
            "items": [{"entity_schema": "contact", "unique_ids": ["external_id"]}],
        }
        result = validate_event_configuration(self._config_with_relations(relations))

        assert len(result.errors) == 1
        assert "relations.operation" in result.errors[0]

    def test_items_required(self):
        """Test relation items must be a non-empty list."""
        result = validate_event_configuration(
            self._config_with_relations({"operation": "_append", "items": []})
        )

        assert result.errors == [
            "entities[0].fields[0].relations.items: must be a non-empty list"
        ]

    def test_item_fields_required(self):
        """Test relation item entity_schema and unique_ids."""
        result = validate_event_configuration(
            self._config_with_relations({"operation": "_set", "items": [{}]})
        )

        assert result.errors == [
            "entities[0].fields[0].relations.items[0].entity_schema: required",
            "entities[0].fields[0].relations.items[0].unique_ids: must be a non-empty list",
        ]
