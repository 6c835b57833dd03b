from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from splitledger.core.config import settings
from splitledger.core.logging_config import get_logger

logger = get_logger("db.mongo")

class MongoDatabase:
    """MongoDB connection manager."""
    
    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    # Stored datetimes come back timezone-aware (UTC)
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL, tz_aware=True)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]
    
    await create_indexes(mongodb.db)
    logger.info("Connected to MongoDB", extra={"database": settings.DATABASE_NAME})

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
        mongodb.client = None
        mongodb.db = None
        logger.info("Disconnected from MongoDB")

async def create_indexes(db: AsyncIOMotorDatabase):
    """Create database indexes."""
    # Registration order
    await db["profiles"].create_index("seq")
    
    # Balance lookups filter by participant
    await db["expenses"].create_index("participants")

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db
