"""
Example 01: Statement Builders

This example demonstrates building and running SELECT, INSERT, UPDATE and
DELETE statements against attribute names instead of column names.
"""

from entity_query import ConnectionConfig, EntitySource, MappingConfig
import tempfile
import sqlite3
from pathlib import Path


SCHEMAS = {
    "Customer": {
        "attributes": {
            "id": {"primary": True, "auto_increment": True},
            "firstName": {},
            "city": {},
        }
    },
    "Invoice": {
        "attributes": {
            "id": {"primary": True, "auto_increment": True},
            "customerId": {},
            "total": {},
        }
    },
}


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE customer (
            customer_id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_first_name TEXT NOT NULL,
            customer_city TEXT
        )
    """)
    conn.execute("""
        CREATE TABLE invoice (
            invoice_id INTEGER PRIMARY KEY AUTOINCREMENT,
            invoice_customer_id INTEGER NOT NULL,
            invoice_total REAL NOT NULL
        )
    """)
    conn.commit()
    conn.close()

    source = EntitySource.from_config(
        ConnectionConfig(driver="sqlite", database=db_path),
        MappingConfig(strategy="declarative", schemas=SCHEMAS),
    )

    print("=== Statement Builders ===\n")

    # INSERT: one VALUES group per call
    insert = source.insert_into("Customer", "firstName", "city")
    insert.values("Alice", "Paris").values("Bob", "Lyon")
    print(f"insert: {insert}")
    print(f"inserted rows: {insert.execute()}\n")

    source.insert_into("Invoice").values(1, 120.0).values(1, 35.5).values(2, 80.0).execute()

    # SELECT with a join: attributes are qualified by class name
    select = (
        source.select("Customer.firstName AS name", "SUM(Invoice.total) AS spent")
        .from_("Customer")
        .join("Invoice")
        .on("Invoice.customerId = Customer.id")
        .where("Customer.city = ?", "Paris")
        .order_by_desc("Customer.id")
        .limit(10)
    )
    print(f"select: {select}")
    for row in select.execute():
        print(f"  - {row['name']} spent {row['spent']}")
    print()

    # SELECT * is expanded into labelled columns
    print(f"one result: {source.select().from_('Customer').where('id = ?', 2).get_one_result()}\n")

    # UPDATE with a derived assignment
    update = source.update("Invoice").set("total", 1.1, "total * ?").where("customerId = ?", 2)
    print(f"update: {update}")
    print(f"updated rows: {update.execute()}\n")

    # DELETE
    delete = source.delete_from("Invoice").where("total < ?", 50)
    print(f"delete: {delete}")
    print(f"deleted rows: {delete.execute()}\n")

    # Clean up
    source.driver.connection_manager.close_pool()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
