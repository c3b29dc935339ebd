import logging

import click
from flask import Flask, jsonify
from flask_migrate import Migrate

from config import Config
from models import db
from models.db import use_immediate_transactions
from models.user import User, Role
from routes import ALL_BLUEPRINTS
from security.csrf import csrf_protect
from services.conflicts import validate_mode
from services.errors import ServiceError
from utils.auth_context import load_current_user
from utils.seed import ADMIN, seed_roles


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # fail at startup, not on the first booking
    validate_mode(app.config["BOOKING_CONFLICT_MODE"])

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger("services").setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Register routes
    for bp in ALL_BLUEPRINTS:
        app.register_blueprint(bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    with app.app_context():
        # before the first connection is made
        use_immediate_transactions(db.engine)
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()
        # Seed default roles at startup (safe & idempotent)
        seed_roles()

    @app.before_request
    def _load_user():
        load_current_user()

    app.before_request(csrf_protect)

    @app.errorhandler(ServiceError)
    def _service_error(exc: ServiceError):
        if exc.status_code >= 500:
            app.logger.error("Request failed: %s", exc.message)
        return jsonify(error=exc.message), exc.status_code

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app


def register_cli(app):
    @app.cli.command("make-admin")
    @click.argument("email")
    def make_admin(email):
        """Grant ADMIN to an existing user by email (bootstrap)."""
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            click.echo("User not found")
            return

        admin_role = Role.query.filter_by(name=ADMIN).first()
        if not admin_role:
            admin_role = Role(name=ADMIN)
            db.session.add(admin_role)

        if admin_role not in user.roles:
            user.roles.append(admin_role)
        db.session.commit()

        click.echo(f"{user.email} promoted to ADMIN")

    @app.cli.command("seed-roles")
    def seed_roles_command():
        """Create the OWNER, WALKER and ADMIN roles if missing."""
        seed_roles()
        click.echo("Roles seeded")


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
