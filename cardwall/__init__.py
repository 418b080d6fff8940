import os
import logging

import click
from flask import Flask, jsonify
from werkzeug.security import generate_password_hash

from cardwall.config import config_by_name
from cardwall.extensions import db, migrate, login_manager, limiter


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)

    # --- Import models so Alembic can discover them ---
    with app.app_context():
        from cardwall import models  # noqa: F401

    # --- Register blueprints ---
    from cardwall.blueprints.cards import cards_bp

    app.register_blueprint(cards_bp)

    # --- Error handlers ---
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    @app.cli.command("seed-demo")
    @click.option("--username", default="demo", help="Demo user name")
    @click.option("--password", default="demo123", help="Demo user password")
    def seed_demo(username, password):
        """Create a demo user, board, two lists, and a few cards.

        Usage:
            flask seed-demo
            flask seed-demo --username alice --password s3cret
        """
        from cardwall.models.board import Board, BoardList
        from cardwall.models.user import User
        from cardwall.services import card_service, color_service, comment_service

        # --- 1. Demo user ---
        user = User.query.filter_by(username=username).first()
        if user:
            click.echo(f"Demo user already exists: {username}")
        else:
            user = User(
                username=username,
                email=f"{username}@cardwall.local",
                password_hash=generate_password_hash(password),
            )
            db.session.add(user)
            db.session.flush()
            click.echo(f"Created demo user: {username}")

        # --- 2. Board with two lists ---
        todo = BoardList(title="To do")
        done = BoardList(title="Done")
        board = Board(title="Demo board", lists=[todo, done])
        db.session.add(board)
        db.session.flush()

        # --- 3. Cards ---
        first = card_service.create_card(todo.id, {"text": "Write the release notes"})
        card_service.create_card(todo.id, {"text": "Tag the release"})
        card_service.create_card(done.id, {"text": "Fix the flaky move test"})
        color_service.add_color(first["id"], 1)
        comment_service.add_comment(first["id"], user.id, "Draft is in the wiki.")

        db.session.commit()

        click.echo("")
        click.echo("=" * 60)
        click.echo("Seed data created successfully!")
        click.echo("=" * 60)
        click.echo(f"  User:   {username} / {password}")
        click.echo(f"  Board:  {board.title} (id: {board.id})")
        click.echo(f"  Lists:  {todo.id} (To do), {done.id} (Done)")
        click.echo(f"  Card:   {first['link']}")
        click.echo("=" * 60)

    @app.cli.command("show-list")
    @click.argument("list_id")
    def show_list(list_id):
        """Print the live cards of a list in display order.

        Usage:
            flask show-list <list_id>
        """
        from cardwall.errors import NotFound
        from cardwall.services import card_service, ordering_service

        try:
            card_ids = ordering_service.list_card_ids(list_id)
        except NotFound as e:
            raise click.ClickException(str(e))

        if not card_ids:
            click.echo("(empty)")
        for index, card_id in enumerate(card_ids):
            card = card_service.get_live_card(card_id)
            click.echo(f"{index:>3}  {card.id}  {card.text}")
