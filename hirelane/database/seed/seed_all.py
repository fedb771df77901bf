from flask.cli import with_appcontext
from hirelane.database.seed.seed_tenant import seed as seed_tenant
from hirelane.database.seed.seed_jobs import seed as seed_jobs
from hirelane.database.seed.seed_candidates import seed as seed_candidates
from hirelane.extensions import db

import click

@click.command("seed-all")
@with_appcontext
def seed_all():
    """Create tables and run all database seeders."""
    click.echo("🌱 Seeding database...")
    db.create_all()
    tenant = seed_tenant()
    seed_jobs(tenant)
    seed_candidates(tenant)
    click.echo("✅ All seeders completed!")
