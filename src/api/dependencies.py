import os

from fastapi import Depends, HTTPException, Request

from adapter.external.google_userinfo import GoogleUserInfoAdapter
from adapter.mongodb.connection import MongoConnection
from adapter.mongodb.user_repository import MongoUserRepository
from port.identity_provider import IdentityProvider
from port.user_repository import UserRepository

GOOGLE_VERIFY_ACCESS_TOKEN = os.getenv("GOOGLE_VERIFY_ACCESS_TOKEN", "false").lower() in ("1", "true", "yes")


def get_mongo_connection(request: Request) -> MongoConnection:
    """Connection owned by the application lifespan."""
    return request.app.state.mongo


def get_user_repo(connection: MongoConnection = Depends(get_mongo_connection)) -> UserRepository:
    """Get the Mongo user repository, raising 500 if the store is unavailable."""
    db = connection.get_database()
    if db is None:
        raise HTTPException(status_code=500, detail="Database unavailable")
    return MongoUserRepository(db)


def get_identity_provider() -> IdentityProvider | None:
    if not GOOGLE_VERIFY_ACCESS_TOKEN:
        return None
    return GoogleUserInfoAdapter()
