"""
Example: Basic store usage without the HTTP API.

This example shows how to use the SemanticStore directly for
adding, searching, updating and deleting records.
"""

from semantic_store import SemanticStore, StoreConfig
from semantic_store.core.config import TableConfig
from semantic_store.core.utils import format_similarity


def main():
    config = StoreConfig(
        table_name="example_records",
        table=TableConfig(mode="ephemeral"),
    )

    store = SemanticStore.open(config)

    print("=== Adding records ===")
    milk = store.add("buy milk")
    bread = store.add("buy bread")
    store.add("renew car insurance")

    for record in store.list_records():
        print(f"{record.id}: {record.text}")

    print("\n=== Searching for similar records ===")
    for hit in store.search("dairy products"):
        print(f"{format_similarity(hit.distance):>7}  {hit.record.text}")

    print("\n=== Updating and deleting ===")
    store.update(milk.id, "buy oat milk")
    store.delete(bread.id)
    for record in store.list_records():
        print(f"{record.id}: {record.text}")

    print("\n=== Store Statistics ===")
    for key, value in store.stats().items():
        print(f"{key}: {value}")

    store.close()


if __name__ == "__main__":
    main()
