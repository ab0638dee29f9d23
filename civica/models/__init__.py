from civica.models.user import User
from civica.models.debate import Debate
from civica.models.comment import Comment
from civica.models.engagement import Flag
from civica.models.notification import Notification

__all__ = ["User", "Debate", "Comment", "Flag", "Notification"]
