"""
Demo session persistence. There is no authentication: "logging in" just
stores who is using the device so bookings carry a customer identity.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from storage import KeyValueStore, USER_KEY, IS_LOGGED_IN_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    email: str
    name: str
    phone: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"email": self.email, "name": self.name, "phone": self.phone}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> User:
        return cls(email=data.get("email", ""), name=data.get("name", ""), phone=data.get("phone", ""))


class Session:

    def __init__(self, store: KeyValueStore):
        self.store = store

    def login(self, email: str, name: str, phone: str = "") -> User:
        user = User(email=email, name=name, phone=phone)
        self.store.put(USER_KEY, user.to_dict())
        self.store.put(IS_LOGGED_IN_KEY, "true")
        logger.info("Session opened for %s", email)
        return user

    def logout(self) -> None:
        self.store.remove(USER_KEY)
        self.store.remove(IS_LOGGED_IN_KEY)

    def current_user(self) -> Optional[User]:
        raw = self.store.get(USER_KEY)
        return User.from_dict(raw) if raw else None

    def is_logged_in(self) -> bool:
        return self.store.get(IS_LOGGED_IN_KEY) == "true"
