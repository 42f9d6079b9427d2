# farmsouk/database.py
import click
from flask import current_app
from flask.cli import with_appcontext

from . import db
from .models import Product, ProductStatusEnum, ProductSourceEnum, new_public_id

SEED_PRODUCTS = [
    {
        'slug': 'mouton-sardi-premium', 'title_fr': 'Mouton Sardi premium', 'title_ar': 'خروف سردي ممتاز',
        'category': 'moutons', 'city': 'Settat', 'price_mad': 4200, 'weight_kg': 55, 'age_months': 14,
        'gender': 'male', 'certified': True, 'delivery': True,
        'images': ['https://images.unsplash.com/photo-1484557985045-edf25e08da73'],
        'description_fr': "Bélier Sardi élevé en plein air, nourri à l'orge et au foin.",
        'description_ar': 'كبش سردي مربى في الهواء الطلق ومغذى بالشعير والتبن.'
    },
    {
        'slug': 'belier-timahdite', 'title_fr': 'Bélier Timahdite', 'title_ar': 'كبش تمحضيت',
        'category': 'moutons', 'city': 'Azrou', 'price_mad': 3600, 'weight_kg': 48, 'age_months': 12,
        'gender': 'male', 'certified': False, 'delivery': True,
        'images': ['https://images.unsplash.com/photo-1533415648777-407b626eb0fa'],
        'description_fr': "Race du Moyen Atlas, robuste et bien conformée.",
        'description_ar': 'سلالة الأطلس المتوسط، قوية وجيدة البنية.'
    },
    {
        'slug': 'chevre-draa', 'title_fr': 'Chèvre du Draa', 'title_ar': 'ماعز درعة',
        'category': 'chevres', 'city': 'Zagora', 'price_mad': 1500, 'weight_kg': 30, 'age_months': 18,
        'gender': 'female', 'certified': False, 'delivery': False,
        'images': ['https://images.unsplash.com/photo-1524024973431-2ad916746881'],
        'description_fr': "Chèvre laitière adaptée aux oasis du sud.",
        'description_ar': 'ماعز حلوب متأقلمة مع واحات الجنوب.'
    },
    {
        'slug': 'veau-holstein', 'title_fr': 'Veau Holstein', 'title_ar': 'عجل هولشتاين',
        'category': 'bovins', 'city': 'Fès', 'price_mad': 14000, 'weight_kg': 210, 'age_months': 8,
        'gender': 'male', 'certified': True, 'delivery': True,
        'images': ['https://images.unsplash.com/photo-1546445317-29f4545e9d53'],
        'description_fr': "Veau sevré, vacciné, issu d'un élevage laitier de la région de Fès.",
        'description_ar': 'عجل مفطوم وملقح من ضيعة للحليب بجهة فاس.'
    },
]


def populate_seed_catalog(session=None):
    """
    Inserts the seed catalog: pre-approved rows with no seller attached.
    Does nothing if seed rows are already present. Returns the number inserted.
    """
    session = session or db.session
    if session.query(Product.id).filter_by(source=ProductSourceEnum.SEED).first():
        current_app.logger.info("Seed products already present. Skipping catalog seeding.")
        return 0

    for data in SEED_PRODUCTS:
        session.add(Product(
            id=new_public_id('prd'),
            status=ProductStatusEnum.APPROVED,
            source=ProductSourceEnum.SEED,
            farmer_id=None,
            is_active=True,
            **data
        ))
    try:
        session.commit()
    except Exception as e:
        session.rollback()
        current_app.logger.error(f"Error committing seed catalog: {e}", exc_info=True)
        raise
    current_app.logger.info(f"{len(SEED_PRODUCTS)} seed products inserted.")
    return len(SEED_PRODUCTS)


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Creates all tables for the configured store."""
    db.create_all()
    click.echo('Database tables created.')


@click.command('seed-db')
@with_appcontext
def seed_db_command():
    """Seeds the catalog with pre-approved products."""
    inserted = populate_seed_catalog()
    click.echo(f'Seed catalog: {inserted} product(s) inserted.')


def register_db_commands(app):
    """Registers database-related CLI commands."""
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_db_command)
