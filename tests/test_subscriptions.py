from datetime import datetime, timedelta

import pytest

from models.subscription import UserSubscription
from services import subscriptions
from services.errors import NotFound, ValidationError
from tests.factories import make_subscription, make_user


def test_toggle_subscribes_then_unsubscribes(app):
    user = make_user()

    sub = subscriptions.toggle_subscription(user.id)
    assert sub.is_active()
    assert sub.discount_percent == 10
    assert subscriptions.active_discount_percent(user.id) == 10

    sub = subscriptions.toggle_subscription(user.id)
    assert sub.active_until is None
    assert subscriptions.active_discount_percent(user.id) is None
    assert UserSubscription.query.filter_by(user_id=user.id).count() == 1


def test_toggle_renews_expired_subscription(app):
    user = make_user()
    make_subscription(user, percent=20, days=-3)

    sub = subscriptions.toggle_subscription(user.id)

    assert sub.is_active()
    assert sub.discount_percent == 10


def test_admin_grant_overwrites_existing_row(app):
    user = make_user()
    make_subscription(user, percent=10)

    sub = subscriptions.grant_subscription(user.id, 35, 3)

    assert sub.discount_percent == 35
    assert sub.source == subscriptions.SOURCE_ADMIN
    assert sub.active_until > datetime.utcnow() + timedelta(days=88)
    assert UserSubscription.query.filter_by(user_id=user.id).count() == 1


@pytest.mark.parametrize("percent,months", [(0, 1), (101, 1), ("10", 1), (10, 0), (10, None)])
def test_grant_validates_input(app, percent, months):
    with pytest.raises(ValidationError):
        subscriptions.grant_subscription(make_user().id, percent, months)


def test_revoke(app):
    user = make_user()
    make_subscription(user, percent=10)

    subscriptions.revoke_subscription(user.id)

    assert subscriptions.active_discount_percent(user.id) is None
    with pytest.raises(NotFound):
        subscriptions.revoke_subscription(make_user().id)
