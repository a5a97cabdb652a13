"""Unit tests for SelectStatement."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from entity_query.core.exceptions import (
    AmbiguousAttributeError,
    BadCountError,
    ColumnMismatchError,
    MappingError,
)
from entity_query.source import EntitySource

ORDER_COLUMNS = 'order_id AS "id", order_customer_id AS "customerId", order_total AS "total"'
QUALIFIED_COLUMNS = (
    'order.order_id AS "Order.id", '
    'order.order_customer_id AS "Order.customerId", '
    'order.order_total AS "Order.total", '
    'customer.customer_id AS "Customer.id", '
    'customer.customer_name AS "Customer.name"'
)


@dataclass
class Order:
    id: int | None = None
    customer_id: int = 0
    total: float = 0.0


class TestSelectGeneration:
    def test_star_with_one_class(self, source: EntitySource) -> None:
        sql, args = source.select("*").from_("Order").where("id = ?", 7).generate()
        assert sql == f"SELECT {ORDER_COLUMNS} FROM order WHERE order_id = ?"
        assert args == [7]

    def test_empty_select_list_defaults_to_star(self, source: EntitySource) -> None:
        assert source.select().from_("Order").sql == f"SELECT {ORDER_COLUMNS} FROM order"

    def test_star_with_several_classes(self, source: EntitySource) -> None:
        statement = (
            source.select()
            .from_("Order")
            .join("Customer")
            .on("Order.customerId = Customer.id")
        )
        assert statement.sql == (
            f"SELECT {QUALIFIED_COLUMNS} FROM order "
            "JOIN customer ON order.order_customer_id = customer.customer_id"
        )

    def test_star_with_two_from_classes(self, source: EntitySource) -> None:
        sql = source.select().from_("Order", "Customer").sql
        assert sql == f"SELECT {QUALIFIED_COLUMNS} FROM order, customer"

    def test_from_accepts_a_list(self, source: EntitySource) -> None:
        assert source.select().from_(["Order", "Customer"]).sql == (
            source.select().from_("Order", "Customer").sql
        )

    def test_qualifier_star_expands_one_class(self, source: EntitySource) -> None:
        sql = source.select("Customer.*").from_("Order").join("Customer").sql
        assert sql == (
            'SELECT customer.customer_id AS "Customer.id", '
            'customer.customer_name AS "Customer.name" FROM order JOIN customer'
        )

    def test_attributes_are_labelled(self, source: EntitySource) -> None:
        sql = source.select("id", "total").from_("Order").sql
        assert sql == 'SELECT order_id AS "id", order_total AS "total" FROM order'

    def test_select_accepts_a_list(self, source: EntitySource) -> None:
        sql = source.select(["id", "total"]).from_("Order").sql
        assert sql == 'SELECT order_id AS "id", order_total AS "total" FROM order'

    def test_explicit_alias_is_quoted(self, source: EntitySource) -> None:
        sql = source.select("MAX(total) AS best").from_("Order").sql
        assert sql == 'SELECT MAX(order_total) AS "best" FROM order'

    def test_count_star_is_untouched(self, source: EntitySource) -> None:
        sql = source.select("COUNT(*) AS n").from_("Order").sql
        assert sql == 'SELECT COUNT(*) AS "n" FROM order'

    def test_class_alias(self, source: EntitySource) -> None:
        sql = source.select("o.total").from_("Order AS o").where("o.id = ?", 1).sql
        assert sql == 'SELECT o.order_total AS "o.total" FROM order AS o WHERE o.order_id = ?'

    def test_bare_attribute_unique_across_classes_is_qualified(
        self, source: EntitySource
    ) -> None:
        sql = source.select("name").from_("Order").join("Customer").sql
        assert sql == 'SELECT customer.customer_name AS "name" FROM order JOIN customer'

    def test_ambiguous_attribute_raises(self, source: EntitySource) -> None:
        statement = source.select("id").from_("Order").join("Customer")
        with pytest.raises(AmbiguousAttributeError, match="'id'"):
            statement.generate()

    def test_unknown_class_raises(self, source: EntitySource) -> None:
        with pytest.raises(MappingError):
            source.select().from_("Invoice").generate()

    def test_attribute_inside_another_is_not_rewritten(self, source: EntitySource) -> None:
        sql = source.select("id").from_("Order").where("totalDue = ? AND total > ?", 1, 2).sql
        assert sql.endswith("WHERE totalDue = ? AND order_total > ?")

    def test_string_literals_are_not_rewritten(self, source: EntitySource) -> None:
        sql = source.select("id").from_("Order").where("total = 'total'").sql
        assert sql.endswith("WHERE order_total = 'total'")

    def test_clause_order(self, source: EntitySource) -> None:
        statement = (
            source.select("id")
            .limit(10, 20)
            .order_by_desc("total")
            .where("customerId = ?", 42)
            .from_("Order")
        )
        assert statement.sql == (
            'SELECT order_id AS "id" FROM order WHERE order_customer_id = ? '
            "ORDER BY order_total DESC LIMIT 20, 10"
        )

    def test_join_arguments_precede_where_arguments(self, source: EntitySource) -> None:
        statement = (
            source.select("Order.id")
            .from_("Order")
            .where("Order.total > ?", 5)
            .left_join("Customer")
            .on("Order.customerId = Customer.id")
            .and_on("Customer.name = ?", "bob")
        )
        sql, args = statement.generate()
        assert sql == (
            'SELECT order.order_id AS "Order.id" FROM order '
            "LEFT JOIN customer ON order.order_customer_id = customer.customer_id "
            "AND customer.customer_name = ? WHERE order.order_total > ?"
        )
        assert args == ["bob", 5]

    def test_generate_is_idempotent(self, source: EntitySource) -> None:
        statement = source.select().from_("Order").where("id = ?", 3)
        assert statement.generate() == statement.generate()

    def test_str_shows_sql_and_arguments(self, source: EntitySource) -> None:
        statement = source.select("id").from_("Order").where("id = ? OR total > ?", 3, 1.5)
        assert str(statement) == (
            'SELECT order_id AS "id" FROM order WHERE order_id = ? OR order_total > ? [ 3, 1.5 ]'
        )


class TestSelectExecution:
    def test_execute_passes_sql_and_args(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [{"id": 7, "customerId": 42, "total": 19.99}]
        rows = source.select("*").from_("Order").where("id = ?", 7).execute()
        assert rows == [{"id": 7, "customerId": 42, "total": 19.99}]
        kind, sql, args = stub_driver.calls[0]
        assert kind == "select"
        assert sql.startswith("SELECT order_id")
        assert args == [7]

    def test_get_results_aliases_execute(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [{"id": 1}, {"id": 2}]
        assert source.select("id").from_("Order").get_results() == [{"id": 1}, {"id": 2}]

    def test_get_one_result(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [{"id": 7, "customerId": 42, "total": 19.99}]
        row = source.select("*").from_("Order").where("id = ?", 7).get_one_result()
        assert row == {"id": 7, "customerId": 42, "total": 19.99}

    @pytest.mark.parametrize("count", [0, 2])
    def test_get_one_result_bad_count(
        self, source: EntitySource, stub_driver, count: int
    ) -> None:
        stub_driver.rows = [{"id": i} for i in range(count)]
        with pytest.raises(BadCountError, match=rf"invalid result quantity \({count}\)"):
            source.select("id").from_("Order").get_one_result()

    def test_get_objects(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [
            {"id": 1, "customerId": 42, "total": 10.0},
            {"id": 2, "customerId": 43, "total": 20.0},
        ]
        orders = source.select().from_("Order").get_objects(Order)
        assert orders == [Order(1, 42, 10.0), Order(2, 43, 20.0)]

    def test_get_objects_indexed(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [
            {"id": 5, "customerId": 42, "total": 10.0},
            {"id": 9, "customerId": 43, "total": 20.0},
        ]
        orders = source.select().from_("Order").get_objects(Order, "id")
        assert list(orders) == [5, 9]
        assert orders[9].customer_id == 43

    def test_get_objects_from_qualified_rows(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [
            {
                "Order.id": 1,
                "Order.customerId": 42,
                "Order.total": 10.0,
                "Customer.id": 42,
                "Customer.name": "bob",
            }
        ]
        orders = source.select().from_("Order").join("Customer").get_objects(Order)
        assert orders == [Order(1, 42, 10.0)]

    def test_get_one_object(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [{"id": 1, "customerId": 42, "total": 10.0}]
        assert source.select().from_("Order").get_one_object(Order) == Order(1, 42, 10.0)

    def test_get_one_object_bad_count(self, source: EntitySource, stub_driver) -> None:
        with pytest.raises(BadCountError, match="invalid object quantity"):
            source.select().from_("Order").get_one_object(Order)

    def test_get_objects_from_aliased_rows(self, source: EntitySource, stub_driver) -> None:
        stub_driver.rows = [
            {"o.id": 1, "o.customerId": 42, "o.total": 10.0, "c.id": 42, "c.name": "bob"},
            {"o.id": 2, "o.customerId": 43, "o.total": 20.0, "c.id": 43, "c.name": "eve"},
        ]
        orders = (
            source.select()
            .from_("Order AS o")
            .join("Customer AS c")
            .on("o.customerId = c.id")
            .get_objects(Order)
        )
        assert orders == [Order(1, 42, 10.0), Order(2, 43, 20.0)]

    def test_get_objects_self_join_uses_first_qualifier(
        self, source: EntitySource, stub_driver
    ) -> None:
        stub_driver.rows = [
            {"a.id": 1, "a.customerId": 5, "a.total": 1.0,
             "b.id": 2, "b.customerId": 5, "b.total": 2.0},
        ]  # fmt: skip
        orders = (
            source.select()
            .from_("Order AS a")
            .join("Order AS b")
            .on("a.customerId = b.customerId")
            .get_objects(Order)
        )
        assert orders == [Order(1, 5, 1.0)]

    def test_get_objects_without_matching_columns(
        self, source: EntitySource, stub_driver
    ) -> None:
        stub_driver.rows = [{"Customer.id": 42, "Customer.name": "bob"}]
        statement = source.select("Customer.*").from_("Order").join("Customer")
        with pytest.raises(ColumnMismatchError, match="Cannot map to Order"):
            statement.get_objects(Order)
