"""Unit tests for InsertStatement, UpdateStatement and DeleteStatement."""

from __future__ import annotations

import pytest

from entity_query.core.exceptions import MappingError
from entity_query.source import EntitySource


class TestInsertStatement:
    def test_explicit_attributes(self, source: EntitySource) -> None:
        statement = source.insert_into("Order", "customerId", "total").values(42, 19.99)
        sql, args = statement.generate()
        assert sql == "INSERT INTO order (order_customer_id, order_total) VALUES (?, ?)"
        assert args == [42, 19.99]

    def test_attribute_list(self, source: EntitySource) -> None:
        statement = source.insert_into("Order", ["total", "customerId"])
        assert statement.attributes == ["total", "customerId"]

    def test_qualified_attributes(self, source: EntitySource) -> None:
        statement = source.insert_into("Order", "Order.total").values(1.0)
        assert statement.sql == "INSERT INTO order (order_total) VALUES (?)"

    def test_default_skips_auto_generated(self, source: EntitySource) -> None:
        statement = source.insert_into("Order")
        assert statement.attributes == ["customerId", "total"]
        assert statement.sql == "INSERT INTO order (order_customer_id, order_total)"

    def test_unknown_attribute(self, source: EntitySource) -> None:
        with pytest.raises(MappingError, match="'discount'"):
            source.insert_into("Order", "discount").generate()

    def test_unknown_class_fails_at_construction(self, source: EntitySource) -> None:
        with pytest.raises(MappingError):
            source.insert_into("Invoice")

    def test_execute_returns_affected_count(self, source: EntitySource, stub_driver) -> None:
        stub_driver.affected = 2
        count = source.insert_into("Order").values(1, 1.0).values(2, 2.0).execute()
        assert count == 2
        assert stub_driver.calls[0][0] == "insert"
        assert stub_driver.calls[0][2] == [1, 1.0, 2, 2.0]


class TestUpdateStatement:
    def test_set_where(self, source: EntitySource) -> None:
        sql, args = source.update("Order").set("total", 5.0).where("id = ?", 7).generate()
        assert sql == "UPDATE order SET order_total = ? WHERE order_id = ?"
        assert args == [5.0, 7]

    def test_arguments_follow_sql_order(self, source: EntitySource) -> None:
        statement = source.update("Order").where("id = ?", 7).set("total", 5.0)
        assert statement.args == [5.0, 7]

    def test_order_by_and_limit(self, source: EntitySource) -> None:
        sql = (
            source.update("Order")
            .set("total", 0)
            .where("customerId = ?", 42)
            .order_by_asc("id")
            .limit(1)
            .sql
        )
        assert sql == (
            "UPDATE order SET order_total = ? WHERE order_customer_id = ? "
            "ORDER BY order_id ASC LIMIT 1"
        )

    def test_several_tables(self, source: EntitySource) -> None:
        sql = (
            source.update("Order", "Customer")
            .set("Order.total", 0)
            .where("Order.customerId = Customer.id")
            .and_where("Customer.name = ?", "bob")
            .sql
        )
        assert sql == (
            "UPDATE order, customer SET order.order_total = ? "
            "WHERE order.order_customer_id = customer.customer_id "
            "AND customer.customer_name = ?"
        )

    def test_execute(self, source: EntitySource, stub_driver) -> None:
        assert source.update("Order").set("total", 1).execute() == 1
        assert stub_driver.calls == [("update", "UPDATE order SET order_total = ?", [1])]


class TestDeleteStatement:
    def test_delete(self, source: EntitySource) -> None:
        sql, args = source.delete_from("Order").where("id = ?", 7).limit(1).generate()
        assert sql == "DELETE FROM order WHERE order_id = ? LIMIT 1"
        assert args == [7]

    def test_order_by(self, source: EntitySource) -> None:
        sql = source.delete_from(["Order"]).order_by_desc("total").limit(5).sql
        assert sql == "DELETE FROM order ORDER BY order_total DESC LIMIT 5"

    def test_str(self, source: EntitySource) -> None:
        assert str(source.delete_from("Order").where("id = ?", 7)) == (
            "DELETE FROM order WHERE order_id = ? [ 7 ]"
        )

    def test_execute(self, source: EntitySource, stub_driver) -> None:
        stub_driver.affected = 0
        assert source.delete_from("Order").where("id = ?", 7).execute() == 0
        assert stub_driver.calls[0][0] == "delete"
