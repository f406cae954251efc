import logging

import click
from flask import Flask, jsonify

from config.config import Config
from extensions import db, login_manager, migrate

# Route Imports
from routes.auth_routes import auth_bp
from routes.admin_routes import admin_bp
from routes.faculty_routes import faculty_bp
from routes.student_routes import student_bp

from models.user import User
from services.batch_service import split_batches
from services.exceptions import AuthenticationError, PortalError
from utils.seed_data import seed_admin


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


def register_error_handlers(app):
    @app.errorhandler(PortalError)
    def handle_portal_error(error):
        return jsonify(error.to_dict()), error.status_code


def register_commands(app):
    @app.cli.command("seed-admin")
    @click.option("--username", required=True)
    @click.option("--password", required=True)
    @click.option("--name", default="Administrator")
    def seed_admin_command(username, password, name):
        """Create the first admin account."""
        _, created = seed_admin(username, password, name=name)
        click.echo(f"Admin {username} {'created' if created else 'already exists'}")

    @app.cli.command("assign-batches")
    @click.option("--extra-to", default=None, help="Batch-1 or Batch-2; receives the odd student.")
    def assign_batches_command(extra_to):
        """Split every semester/section roster into Batch-1 and Batch-2."""
        summary = split_batches(extra_to or app.config["BATCH_EXTRA_TO"])
        for row in summary:
            click.echo(
                f"Semester {row['semester']} | Section {row['section']} -> "
                f"total {row['total']} | Batch-1: {row['Batch-1']}, Batch-2: {row['Batch-2']}"
            )
        click.echo(f"Done dividing batches for {len(summary)} section(s)")


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        raise AuthenticationError("Login required")

    register_error_handlers(app)
    register_commands(app)

    # Register Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(faculty_bp)
    app.register_blueprint(student_bp)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
