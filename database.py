"""
Optional MongoDB handle.

`db` is None unless both DATABASE_URL and DATABASE_NAME are set; callers fall
back to the in-memory stores in that case.
"""

import logging

from pymongo import MongoClient

from config import settings

logger = logging.getLogger(__name__)

db = None

if settings.database_configured:
    try:
        _client = MongoClient(settings.database_url, serverSelectionTimeoutMS=5000)
        db = _client[settings.database_name]
        logger.info(f"MongoDB configured: database={settings.database_name}")
    except Exception as e:
        logger.error(f"MongoDB client could not be created: {e}")
        db = None
