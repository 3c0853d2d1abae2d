from .user import User, UserRole
from .room_type import RoomType, RoomTypeStatus
from .room_listing import RoomListing, ApprovalStatus
