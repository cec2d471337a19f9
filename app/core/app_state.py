from app.config import get_settings
from app.core.content_filter import ContentFilter, build_content_filter
from app.core.snapshot_hub import SnapshotHub


class AppState:
    def __init__(self) -> None:
        self.hub = SnapshotHub()
        self.content_filter: ContentFilter = build_content_filter(
            get_settings().extra_filter_words
        )


state = AppState()
