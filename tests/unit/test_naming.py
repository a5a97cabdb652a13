"""Unit tests for naming conventions."""

from __future__ import annotations

import pytest

from entity_query.mapping.naming import (
    attribute_name_for_column,
    column_name_for_attribute,
    entity_name_for_table,
    snake_case,
    table_name_for_entity,
)


class TestNaming:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("OrderLine", "order_line"), ("customerId", "customer_id"), ("id", "id"), ("A1b", "a1b")],
    )
    def test_snake_case(self, name: str, expected: str) -> None:
        assert snake_case(name) == expected

    def test_entity_name_for_table(self) -> None:
        assert entity_name_for_table("user_account") == "UserAccount"
        assert entity_name_for_table("order") == "Order"

    def test_table_name_for_entity(self) -> None:
        assert table_name_for_entity("UserAccount") == "user_account"

    def test_attribute_name_strips_table_prefix(self) -> None:
        assert attribute_name_for_column("user_account_first_name", "user_account") == "firstName"
        assert attribute_name_for_column("order_id", "order") == "id"

    def test_attribute_name_without_prefix(self) -> None:
        assert attribute_name_for_column("created_at", "order") == "createdAt"

    def test_column_equal_to_prefix_is_kept(self) -> None:
        assert attribute_name_for_column("order_", "order") == "order"

    def test_column_name_for_attribute(self) -> None:
        assert column_name_for_attribute("firstName", "user_account") == "user_account_first_name"

    def test_conventions_are_inverse(self) -> None:
        column = column_name_for_attribute("customerId", "order")
        assert attribute_name_for_column(column, "order") == "customerId"
