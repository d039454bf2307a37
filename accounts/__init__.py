from .session import Session, User

__all__ = ["Session", "User"]
