from app.models.subscription import Subscription
from app.models.user import User
from app.models.video import Video
from app.models.watch_history import WatchHistoryEntry

__all__ = [
    "Subscription",
    "User",
    "Video",
    "WatchHistoryEntry",
]
