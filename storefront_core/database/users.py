"""
Database access methods for users
"""
from typing import Optional

from tinydb import Query

from storefront_core.data_model.user import User
from storefront_core.database.database import table


def get_by_id(user_id: str) -> Optional[User]:
    with table("users") as users:
        if doc := users.get(Query().id == user_id):
            return User(**doc)
    return None


def insert(user: User) -> None:
    with table("users") as users:
        users.insert(user.dict())


def update(user: User) -> None:
    with table("users") as users:
        users.update(user.dict(), Query().id == user.id)
