from .health import health_bp
from .auth import auth_bp
from .admin import admin_bp
from .audit_logs import audit_bp
from .booking import booking_bp
from .walkers import walker_bp
from .addons import addon_bp
from .dogs import dog_bp
from .reviews import review_bp
from .subscriptions import subscription_bp

ALL_BLUEPRINTS = (
    health_bp,
    auth_bp,
    admin_bp,
    audit_bp,
    booking_bp,
    walker_bp,
    addon_bp,
    dog_bp,
    review_bp,
    subscription_bp,
)
