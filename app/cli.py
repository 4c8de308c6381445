import os
from decimal import Decimal

import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate

from models import db
from models.catalog import Category, Product


DEMO_CATALOG = {
    ("Electronics", "Gadgets and accessories"): [
        ("Wireless Headphones", "Over-ear, 30h battery", "49.99", 25, True),
        ("USB-C Charger", "65W fast charger", "29.99", 40, True),
    ],
    ("Home", "Everyday home essentials"): [
        ("Ceramic Mug", "350ml, dishwasher safe", "12.50", 60, False),
        ("Desk Lamp", "Dimmable LED lamp", "34.00", 15, True),
    ],
    ("Outdoors", "Gear for the outdoors"): [
        ("Water Bottle", "Insulated steel, 750ml", "19.95", 80, True),
        ("Trail Backpack", "28L daypack", "79.00", 0, False),
    ],
}


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


def seed_catalog() -> int:
    """Insert the demo catalog unless products already exist; return products added."""
    if Product.query.count() > 0:
        return 0
    added = 0
    for (name, description), products in DEMO_CATALOG.items():
        category = Category(name=name, description=description)
        db.session.add(category)
        db.session.flush()
        for title, blurb, price, stock, featured in products:
            db.session.add(
                Product(
                    category_id=category.id,
                    name=title,
                    description=blurb,
                    price=Decimal(price),
                    stock=stock,
                    featured=featured,
                )
            )
            added += 1
    db.session.commit()
    return added


@click.command("seed-catalog")
@with_appcontext
def seed_catalog_command():
    """Load demo categories and products into an empty catalog."""
    added = seed_catalog()
    if not added:
        click.echo("Catalog already has products, skipping seed.")
    else:
        click.echo(f"Seeded {added} products.")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed_catalog_command)
