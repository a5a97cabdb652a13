"""
Example 02: Entity CRUD

This example demonstrates insert_one, select_one, update_one and delete_one
on dataclass and Pydantic entities, and the Repository wrapper.
"""

from entity_query import BadCountError, ConnectionConfig, EntitySource, MappingConfig, Repository
from dataclasses import dataclass
from pydantic import BaseModel
from typing import Optional
import json
import tempfile
import sqlite3
from pathlib import Path


@dataclass
class Invoice:
    """Invoice entity"""
    id: Optional[int] = None
    customer_id: int = 0
    total: float = 0.0


class Customer(BaseModel):
    """Customer entity"""
    id: Optional[int] = None
    first_name: str = ""


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute(
        "CREATE TABLE customer (customer_id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "customer_first_name TEXT NOT NULL)"
    )
    conn.execute(
        "CREATE TABLE invoice (invoice_id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "invoice_customer_id INTEGER NOT NULL, invoice_total REAL NOT NULL)"
    )
    conn.commit()
    conn.close()

    # One JSON schema document per entity
    schema_dir = Path(tempfile.mkdtemp())
    (schema_dir / "Customer.json").write_text(json.dumps({
        "attributes": {"id": {"primary": True, "auto_increment": True}, "firstName": {}}
    }))
    (schema_dir / "Invoice.json").write_text(json.dumps({
        "attributes": {
            "id": {"primary": True, "auto_increment": True},
            "customerId": {},
            "total": {},
        }
    }))

    source = EntitySource.from_config(
        ConnectionConfig(driver="sqlite", database=db_path),
        MappingConfig(strategy="declarative", schema_path=schema_dir),
    )

    print("=== Entity CRUD ===\n")

    customer = Customer(first_name="Alice")
    source.insert_one(customer)
    print(f"inserted customer: {customer}")

    invoice = Invoice(customer_id=customer.id, total=42.0)
    source.insert_one(invoice)
    print(f"inserted invoice: {invoice}")

    loaded = Invoice(id=invoice.id)
    source.select_one(loaded)
    print(f"selected invoice: {loaded}")

    loaded.total = 50.0
    source.update_one(loaded)
    print(f"updated invoice: {source.select().from_('Invoice').get_objects(Invoice)}\n")

    # Repository wrapper
    invoices = Repository(source, Invoice)
    invoices.add(Invoice(customer_id=customer.id, total=9.5))
    print("all invoices by total:")
    for item in invoices.find_all(order_by="total"):
        print(f"  - #{item.id}: {item.total}")

    invoices.remove(loaded)
    try:
        invoices.get(id=loaded.id)
    except BadCountError as e:
        print(f"\nafter remove: {e}")

    # Clean up
    source.driver.connection_manager.close_pool()
    Path(db_path).unlink()
    for file in schema_dir.glob("*.json"):
        file.unlink()
    schema_dir.rmdir()


if __name__ == "__main__":
    main()
