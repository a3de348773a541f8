import click
from flask.cli import with_appcontext

from tunebox import queries
from tunebox.errors import NotFound
from tunebox.init import db
from tunebox.models import MusicianRole


@click.command('init-db')
@with_appcontext
def init_db():
    """Створює таблиці бази даних."""
    db.create_all()
    click.echo('database initialized')


@click.command('set-musician')
@click.argument('username')
@click.option('--revoke', is_flag=True, help='Повернути роль звичайного користувача.')
@with_appcontext
def set_musician(username, revoke):
    """Надає користувачеві роль музиканта (або відкликає її)."""
    role = MusicianRole.REGULAR if revoke else MusicianRole.MUSICIAN
    try:
        queries.set_musician_role(username, role)
    except NotFound as e:
        raise click.ClickException(e.message)
    db.session.commit()
    click.echo(f'{username}: {role.name.lower()}')


def init_app(app):
    app.cli.add_command(init_db)
    app.cli.add_command(set_musician)
