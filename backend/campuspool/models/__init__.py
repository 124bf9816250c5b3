"""ORM Models — one table per aggregate: users, profiles, carpool requests,
conversations, messages.

Importing this package registers every table on Base.metadata.
"""

from campuspool.models.user import User
from campuspool.models.profile import Profile
from campuspool.models.carpool_request import CarpoolRequest
from campuspool.models.conversation import Conversation
from campuspool.models.message import Message

__all__ = ["User", "Profile", "CarpoolRequest", "Conversation", "Message"]
