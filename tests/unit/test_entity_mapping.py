"""Unit tests for EntityMapping."""

from __future__ import annotations

import pytest

from entity_query.core.exceptions import MappingError
from entity_query.mapping.entity import EntityMapping


@pytest.fixture
def order_mapping() -> EntityMapping:
    return EntityMapping(
        entity_name="Order",
        table_name="order",
        attribute_to_column={
            "id": "order_id",
            "customerId": "order_customer_id",
            "total": "order_total",
        },
        primary_key_attributes=("id",),
        auto_generated_columns={"order_id": "id"},
    )


class TestEntityMapping:
    def test_attribute_lists(self, order_mapping: EntityMapping) -> None:
        assert order_mapping.attributes == ["id", "customerId", "total"]
        assert order_mapping.auto_generated_attributes == ["id"]
        assert order_mapping.insertable_attributes == ["customerId", "total"]
        assert order_mapping.non_key_attributes == ["customerId", "total"]

    def test_column_for(self, order_mapping: EntityMapping) -> None:
        assert order_mapping.column_for("total") == "order_total"

    def test_column_for_unknown(self, order_mapping: EntityMapping) -> None:
        with pytest.raises(MappingError, match="attribute 'nope' of the entity 'Order'"):
            order_mapping.column_for("nope")

    def test_attribute_for_is_case_insensitive(self, order_mapping: EntityMapping) -> None:
        assert order_mapping.attribute_for("ORDER_TOTAL") == "total"

    def test_attribute_for_unknown(self, order_mapping: EntityMapping) -> None:
        with pytest.raises(MappingError, match="column 'nope'"):
            order_mapping.attribute_for("nope")

    def test_is_read_only(self, order_mapping: EntityMapping) -> None:
        with pytest.raises(TypeError):
            order_mapping.attribute_to_column["x"] = "y"  # type: ignore[index]

    def test_primary_key_must_be_mapped(self) -> None:
        with pytest.raises(MappingError, match="unmapped attributes"):
            EntityMapping("Order", "order", {"total": "order_total"}, ("id",))

    def test_auto_generated_column_must_be_mapped(self) -> None:
        with pytest.raises(MappingError, match="unmapped attributes"):
            EntityMapping(
                "Order",
                "order",
                {"total": "order_total"},
                auto_generated_columns={"order_id": "id"},
            )
