"""
Request broker: the handshake that turns two unconnected users into a conversation.

At most one request or conversation exists per unordered pair of users. The
pair is stored canonically (pair_low, pair_high) and guarded by a unique
constraint, so a racing duplicate insert fails in the store and surfaces as
AlreadyConnectedError rather than creating a second row.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from app.core.app_state import state
from app.core.snapshot_hub import (
    SnapshotHub,
    user_conversations_topic,
    user_requests_topic,
)
from app.exceptions import (
    AlreadyConnectedError,
    AmbiguousTargetError,
    InvalidDecisionError,
    NotAuthorizedError,
    NotFoundError,
    SelfTargetError,
)
from app.infra.logging_config import get_logger
from app.models.connection_request import ConnectionRequest
from app.models.conversation import Conversation
from app.models.user import User, UserLookup
from app.schemas.connection_request import RequestDecision
from app.services.user_directory_service import UserDirectoryService
from app.utils.store_guard import is_unique_violation, store_guard
from app.utils.timestamps import utcnow

logger = get_logger("request_broker")

ACCEPTED_MESSAGE = "Chat request accepted!"


def canonical_pair(uid_a: str, uid_b: str) -> Tuple[str, str]:
    """Order-insensitive key for a pair of users."""
    return (uid_a, uid_b) if uid_a < uid_b else (uid_b, uid_a)


def participant_detail(user: User) -> dict:
    return {
        "display_name": user.display_name,
        "photo_url": user.photo_url,
        "texting_id": user.texting_id,
    }


class RequestBroker:
    """send_request / respond / cancel plus the incoming and outgoing views."""

    def __init__(
        self,
        db: Session,
        directory: Optional[UserDirectoryService] = None,
        hub: Optional[SnapshotHub] = None,
    ) -> None:
        self.db = db
        self._directory = directory or UserDirectoryService(db)
        self._hub = hub or state.hub

    def get_request(self, request_id: UUID) -> Optional[ConnectionRequest]:
        return (
            self.db.query(ConnectionRequest)
            .filter(ConnectionRequest.id == request_id)
            .first()
        )

    def resolve_target(self, target_selector: str) -> UserLookup:
        """Exact texting-ID or display-name match that identifies exactly one user."""
        selector = target_selector.strip()
        if not selector:
            raise NotFoundError()
        matches = self._directory.resolve_exact(selector)
        if not matches:
            raise NotFoundError()
        if len(matches) > 1:
            raise AmbiguousTargetError()
        return matches[0]

    def is_connected(self, uid_a: str, uid_b: str) -> bool:
        """True if a request (either direction) or a conversation exists for the pair."""
        low, high = canonical_pair(uid_a, uid_b)
        request = (
            self.db.query(ConnectionRequest.id)
            .filter(
                ConnectionRequest.pair_low == low,
                ConnectionRequest.pair_high == high,
                ConnectionRequest.status.in_(("pending", "accepted")),
            )
            .first()
        )
        if request is not None:
            return True
        conversation = (
            self.db.query(Conversation.id)
            .filter(Conversation.pair_low == low, Conversation.pair_high == high)
            .first()
        )
        return conversation is not None

    def send_request(self, from_uid: str, target_selector: str) -> ConnectionRequest:
        """
        Create a pending request from from_uid to the user the selector names.

        Raises:
            NotFoundError: nobody matches the selector.
            AmbiguousTargetError: more than one user matches.
            SelfTargetError: the selector names the sender.
            AlreadyConnectedError: a request or conversation exists for the pair.
            BackendUnavailableError: the store failed.
        """
        with store_guard(self.db, "send_request"):
            target = self.resolve_target(target_selector)
            if target.uid == from_uid:
                raise SelfTargetError()
            if self.is_connected(from_uid, target.uid):
                raise AlreadyConnectedError()
            low, high = canonical_pair(from_uid, target.uid)
            request = ConnectionRequest(
                from_uid=from_uid,
                to_uid=target.uid,
                status="pending",
                pair_low=low,
                pair_high=high,
            )
            self.db.add(request)
            try:
                self.db.commit()
            except IntegrityError as e:
                if not is_unique_violation(e):
                    raise
                # Lost a race with another request for the same pair
                self.db.rollback()
                raise AlreadyConnectedError() from e
            self.db.refresh(request)
        logger.info(
            "Request %s sent from %s to %s", request.id, from_uid, request.to_uid
        )
        self._hub.publish(user_requests_topic(from_uid), user_requests_topic(target.uid))
        return request

    def respond(
        self,
        request_id: UUID,
        responder_uid: str,
        decision: RequestDecision,
    ) -> Optional[Conversation]:
        """
        Accept or deny a request addressed to responder_uid.

        Acceptance creates the conversation and deletes the request in one
        transaction; either both happen or neither does. Returns the new
        conversation on acceptance, None on denial.
        """
        if decision not in ("accepted", "denied"):
            raise InvalidDecisionError()
        with store_guard(self.db, "respond"):
            request = self.get_request(request_id)
            if request is None:
                raise NotFoundError("Request not found")
            if request.to_uid != responder_uid:
                raise NotAuthorizedError()
            from_uid = request.from_uid
            if decision == "accepted":
                conversation = self._accept(request)
            else:
                self.db.delete(request)
                self.db.commit()
                conversation = None
        logger.info("Request %s %s by %s", request_id, decision, responder_uid)
        topics = [user_requests_topic(from_uid), user_requests_topic(responder_uid)]
        if conversation is not None:
            topics += [
                user_conversations_topic(from_uid),
                user_conversations_topic(responder_uid),
            ]
        self._hub.publish(*topics)
        return conversation

    def cancel(self, request_id: UUID, caller_uid: str) -> bool:
        """
        Withdraw a pending request. Only the sender may cancel.
        Returns False when the request is already gone.
        """
        with store_guard(self.db, "cancel"):
            request = self.get_request(request_id)
            if request is None:
                return False
            if request.from_uid != caller_uid or request.status != "pending":
                raise NotAuthorizedError()
            to_uid = request.to_uid
            self.db.delete(request)
            self.db.commit()
        logger.info("Request %s cancelled by %s", request_id, caller_uid)
        self._hub.publish(user_requests_topic(caller_uid), user_requests_topic(to_uid))
        return True

    def incoming_query(self, uid: str) -> Query[ConnectionRequest]:
        """Pending requests addressed to uid, oldest first."""
        return (
            self.db.query(ConnectionRequest)
            .filter(
                ConnectionRequest.to_uid == uid,
                ConnectionRequest.status == "pending",
            )
            .order_by(ConnectionRequest.created_at.asc())
        )

    def outgoing_query(self, uid: str) -> Query[ConnectionRequest]:
        """Requests sent by uid that have not been accepted, oldest first."""
        return (
            self.db.query(ConnectionRequest)
            .filter(
                ConnectionRequest.from_uid == uid,
                ConnectionRequest.status != "accepted",
            )
            .order_by(ConnectionRequest.created_at.asc())
        )

    def list_incoming(self, uid: str) -> List[Tuple[ConnectionRequest, UserLookup]]:
        """Incoming requests with the sender's lookup record; senders without one are skipped."""
        with store_guard(self.db, "list_incoming"):
            requests = self.incoming_query(uid).all()
            senders = self._directory.get_many([r.from_uid for r in requests])
        return [(r, senders[r.from_uid]) for r in requests if r.from_uid in senders]

    def list_outgoing(self, uid: str) -> List[Tuple[ConnectionRequest, UserLookup]]:
        """Outgoing requests with the recipient's lookup record."""
        with store_guard(self.db, "list_outgoing"):
            requests = self.outgoing_query(uid).all()
            recipients = self._directory.get_many([r.to_uid for r in requests])
        return [(r, recipients[r.to_uid]) for r in requests if r.to_uid in recipients]

    def _accept(self, request: ConnectionRequest) -> Conversation:
        users = {
            u.uid: u
            for u in self.db.query(User)
            .filter(User.uid.in_((request.from_uid, request.to_uid)))
            .all()
        }
        if request.from_uid not in users or request.to_uid not in users:
            raise NotFoundError("Could not find user profiles.")
        conversation = Conversation(
            participants=[request.from_uid, request.to_uid],
            pair_low=request.pair_low,
            pair_high=request.pair_high,
            participant_details={
                uid: participant_detail(user) for uid, user in users.items()
            },
            last_message=ACCEPTED_MESSAGE,
            last_message_sender_id=request.to_uid,
            last_message_timestamp=utcnow(),
        )
        self.db.add(conversation)
        self.db.delete(request)
        try:
            self.db.commit()
        except IntegrityError as e:
            if not is_unique_violation(e):
                raise
            self.db.rollback()
            raise AlreadyConnectedError() from e
        self.db.refresh(conversation)
        return conversation

