from app.models.connection_request import ConnectionRequest
from app.models.conversation import Conversation
from app.models.message import Message
from app.models.user import User, UserLookup

__all__ = [
    "ConnectionRequest",
    "Conversation",
    "Message",
    "User",
    "UserLookup",
]
