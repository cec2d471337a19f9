from app.services.conversation_list_projector import ConversationListProjector
from app.services.conversation_store import ConversationStore
from app.services.request_broker import RequestBroker
from app.services.translation_service import TranslationService
from app.services.user_directory_service import UserDirectoryService
from app.services.user_service import UserService

__all__ = [
    "ConversationListProjector",
    "ConversationStore",
    "RequestBroker",
    "TranslationService",
    "UserDirectoryService",
    "UserService",
]
