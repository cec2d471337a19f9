"""Read-only lookups against the public user_lookups records."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.user import UserLookup


class UserDirectoryService:
    """Exact-match resolution and public prefix search over user_lookups."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_uid(self, uid: str) -> Optional[UserLookup]:
        return self.db.query(UserLookup).filter(UserLookup.uid == uid).first()

    def get_many(self, uids: List[str]) -> dict[str, UserLookup]:
        """Fetch lookup records for several uids at once, keyed by uid."""
        if not uids:
            return {}
        rows = self.db.query(UserLookup).filter(UserLookup.uid.in_(uids)).all()
        return {row.uid: row for row in rows}

    def find_by_texting_id(self, texting_id: str) -> List[UserLookup]:
        return self.db.query(UserLookup).filter(UserLookup.texting_id == texting_id).all()

    def find_by_display_name(self, display_name: str) -> List[UserLookup]:
        return (
            self.db.query(UserLookup)
            .filter(UserLookup.display_name == display_name)
            .all()
        )

    def resolve_exact(self, selector: str) -> List[UserLookup]:
        """
        Union of exact texting-ID and exact display-name matches, deduplicated by uid.
        Order: texting-ID matches first.
        """
        seen: dict[str, UserLookup] = {}
        for row in [
            *self.find_by_texting_id(selector),
            *self.find_by_display_name(selector),
        ]:
            seen.setdefault(row.uid, row)
        return list(seen.values())

    def search_public(
        self,
        prefix: str,
        exclude_uid: Optional[str] = None,
        scan_limit: Optional[int] = None,
        result_limit: Optional[int] = None,
    ) -> List[UserLookup]:
        """
        Display names starting with prefix (case-sensitive, like the index scan),
        keeping only public users other than exclude_uid.
        """
        prefix = prefix.strip()
        if not prefix:
            return []
        settings = get_settings()
        scan_limit = scan_limit or settings.user_search_scan_limit
        result_limit = result_limit or settings.user_search_result_limit
        candidates = (
            self.db.query(UserLookup)
            .filter(UserLookup.display_name >= prefix)
            .filter(UserLookup.display_name < prefix + "\uffff")
            .order_by(UserLookup.display_name)
            .limit(scan_limit)
            .all()
        )
        results = [
            row
            for row in candidates
            if row.visibility == "public" and row.uid != exclude_uid
        ]
        return results[:result_limit]
