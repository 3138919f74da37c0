"""
MongoDB connection for the rule engine services.

Indexes cover the lookups the services make:
    - bookings      : paid bookings per customer, live status reads
    - customers     : live customer reads
    - team_members  : active members per team
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from bookdesk.utils.logger import Logger
from .settings import settings

logger = Logger("bookdesk.database")

INDEXES: dict[str, list[list[tuple[str, int]]]] = {
    "bookings": [
        [("customer_id", 1), ("payment_status", 1), ("is_deleted", 1)],
        [("status", 1), ("is_deleted", 1)],
    ],
    "customers": [
        [("is_deleted", 1)],
    ],
    "team_members": [
        [("team_id", 1), ("left_at", 1)],
    ],
}


class DatabaseManager:
    """Process-wide database handle shared by every service."""

    _instance = None
    _client: AsyncIOMotorClient | None = None
    _database: AsyncIOMotorDatabase | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def connect(self) -> None:
        if self._database is not None:
            return
        if not settings.mongodb_atlas_uri:
            raise RuntimeError("MONGODB_ATLAS_URI is not configured")

        client = AsyncIOMotorClient(settings.mongodb_atlas_uri)
        try:
            await client.admin.command("ping")
        except Exception as e:
            client.close()
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

        self._client = client
        self._database = client[settings.database_name]
        logger.info(f"Connected to MongoDB [{settings.database_name}]")
        await self.ensure_indexes()

    def bind(self, database: AsyncIOMotorDatabase) -> None:
        """Use an already-open database instead of connecting from settings."""
        self._client = None
        self._database = database

    async def ensure_indexes(self) -> None:
        for collection, indexes in INDEXES.items():
            for keys in indexes:
                await self.database[collection].create_index(keys, background=True)
        logger.debug(f"Indexes ensured on {sorted(INDEXES)}")

    def close(self) -> None:
        if self._client:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._database = None

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._database

    @property
    def is_connected(self) -> bool:
        return self._database is not None


# ── Module-level singleton ──────────────────────────────────────
db_manager = DatabaseManager()


async def get_database() -> AsyncIOMotorDatabase:
    """Return the shared database, connecting on first use."""
    if not db_manager.is_connected:
        await db_manager.connect()
    return db_manager.database
