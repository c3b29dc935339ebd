from flask import Blueprint, request, jsonify, g

from models import db
from models.booking import BookingDog
from models.dog import Dog
from utils.auth_context import login_required

dog_bp = Blueprint("dogs", __name__, url_prefix="/dogs")


@dog_bp.get("")
@login_required
def list_dogs():
    return jsonify([d.to_dict() for d in g.user.dogs]), 200


@dog_bp.post("")
@login_required
def create_dog():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    breed = (data.get("breed") or "").strip()
    age = data.get("age")

    if not name or not breed or age is None:
        return jsonify(error="Missing fields"), 400
    if isinstance(age, bool) or not isinstance(age, int) or age < 0:
        return jsonify(error="age must be a non-negative integer"), 400

    dog = Dog(user_id=g.user.id, name=name[:80], breed=breed[:80], age=age,
              notes=(data.get("notes") or "").strip() or None)
    db.session.add(dog)
    db.session.commit()
    return jsonify(id=dog.id), 201


@dog_bp.delete("/<int:dog_id>")
@login_required
def delete_dog(dog_id: int):
    dog = Dog.query.filter_by(id=dog_id, user_id=g.user.id).first()
    if not dog:
        return jsonify(error="Dog not found"), 404

    if BookingDog.query.filter_by(dog_id=dog.id).first():
        return jsonify(error="Dog has bookings. Cancel/delete bookings first."), 409

    db.session.delete(dog)
    db.session.commit()
    return jsonify(success=True), 200
