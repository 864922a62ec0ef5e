import asyncio

from semantic_store import StoreConfig, StoreService
from semantic_store.core.config import EmbeddingConfig, TableConfig


def example_persistent_store():
    config = StoreConfig(
        table_name="notes",
        missing_update_policy="reject",
        table=TableConfig(mode="persistent", path="./data/notes_db"),
        embedding=EmbeddingConfig(model_name="all-MiniLM-L6-v2", device="cpu"),
    )

    service = StoreService(config=config)
    service.add_ready_listener(lambda: print("store ready"))
    service.add_failure_listener(lambda msg: print(f"store failed: {msg}"))

    async def run():
        await service.initialize()
        added = await service.add("call the plumber about the kitchen sink")
        print(added)
        results = await service.search("house repairs", start_date="2024-01-01")
        print(results)
        service.close()

    asyncio.run(run())


def example_env_store():
    """Configuration read from SEMANTIC_STORE_TABLE_* / SEMANTIC_STORE_EMBEDDING_* variables."""
    service = StoreService(config=StoreConfig())

    async def run():
        if await service.initialize():
            print(await service.list_records())
        service.close()

    asyncio.run(run())


if __name__ == "__main__":
    example_persistent_store()
