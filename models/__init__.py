from .db import db
from .user import User, Role, user_roles
from .audit_log import AuditLog
from .session import Session
from .walker import Walker, WalkerAvailability, WalkerAddon
from .dog import Dog
from .booking import Booking, BookingDog, BookingAddon
from .subscription import UserSubscription
from .review import Review
