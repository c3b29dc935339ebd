import pytest

from models.booking import ACCEPTED, DONE
from models.review import Review
from services import reviews
from services.errors import Conflict, Forbidden, ValidationError
from tests.factories import make_booking, make_dog, make_user, make_walker


@pytest.fixture
def done_booking(app):
    owner = make_user(full_name="Olive Owner")
    walker = make_walker()
    return make_booking(owner, walker, [make_dog(owner)], status=DONE)


def test_owner_reviews_done_walk(done_booking):
    review = reviews.submit_review(done_booking.user_id, done_booking.id, 5, "  Great walk ")

    assert review.walker_id == done_booking.walker_id
    assert review.rating == 5
    assert review.comment == "Great walk"


def test_second_review_of_same_booking_conflicts(done_booking):
    reviews.submit_review(done_booking.user_id, done_booking.id, 4)

    with pytest.raises(Conflict):
        reviews.submit_review(done_booking.user_id, done_booking.id, 1)
    assert Review.query.count() == 1


def test_walk_that_is_not_done_cannot_be_reviewed(app):
    owner = make_user()
    booking = make_booking(owner, make_walker(), [make_dog(owner)], status=ACCEPTED)

    with pytest.raises(Forbidden):
        reviews.submit_review(owner.id, booking.id, 5)


def test_only_the_owner_can_review(done_booking):
    with pytest.raises(Forbidden):
        reviews.submit_review(make_user().id, done_booking.id, 5)
    with pytest.raises(Forbidden):
        reviews.submit_review(done_booking.user_id, 9999, 5)


@pytest.mark.parametrize("rating", [0, 6, "5", 4.5, True, None])
def test_rating_must_be_integer_one_to_five(done_booking, rating):
    with pytest.raises(ValidationError):
        reviews.submit_review(done_booking.user_id, done_booking.id, rating)


def test_walker_reviews_average(app):
    owner = make_user(full_name="Olive Owner")
    walker = make_walker()
    dog = make_dog(owner)
    for rating in (5, 4, 4):
        booking = make_booking(owner, walker, [dog], status=DONE)
        reviews.submit_review(owner.id, booking.id, rating)

    average, rows = reviews.walker_reviews(walker.id)

    assert average == 4.33
    assert len(rows) == 3
    assert rows[0]["user_name"] == "Olive Owner"


def test_walker_without_reviews_averages_zero(app):
    assert reviews.walker_reviews(make_walker().id) == (0.0, [])
