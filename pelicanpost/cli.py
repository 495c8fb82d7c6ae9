import logging
import re

import click

from pelicanpost.config import Settings
from pelicanpost.files import get_file_status, is_post_file, parse_file, toggle_file, update_file
from pelicanpost.metadata import LIST_FIELDS, Metadata, dump_yaml
from pelicanpost.post import PostMetadata
from pelicanpost.templates import DEFAULT_TEMPLATES, UnknownTemplateError, create_post, get_template


_KEY_RE = re.compile(r'[A-Za-z]+')


def log_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _require_post(path: str):
    if not is_post_file(path):
        raise click.ClickException(f'{path} is not a Pelican post (no metadata header found)')


def _parse_assignments(assignments: tuple[str, ...]) -> Metadata:
    partial = {}
    for assignment in assignments:
        key, sep, value = assignment.partition('=')
        if not sep or not _KEY_RE.fullmatch(key):
            raise click.BadParameter(f'expected KEY=VALUE with a letters-only key, got {assignment!r}')
        if '\n' in value or '\r' in value:
            raise click.BadParameter(f'header values must fit on one line, got {assignment!r}')
        key = key.lower()
        value = value.strip()
        if not value:
            partial[key] = None
        elif key in LIST_FIELDS:
            partial[key] = [item.strip() for item in value.split(',')]
        else:
            partial[key] = value
    return partial


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """Manage the metadata header of Pelican blog posts."""
    settings = Settings.from_env()
    logging.basicConfig(level=log_level(settings.log_level))
    ctx.obj = settings


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--yaml', 'as_yaml', is_flag=True, help='Print the metadata as YAML.')
def show(path: str, as_yaml: bool):
    """Print the metadata of a post."""
    _require_post(path)
    metadata = parse_file(path).metadata
    if as_yaml:
        click.echo(dump_yaml(metadata), nl=False)
        return
    for key, value in metadata.items():
        if isinstance(value, list):
            value = ', '.join(value)
        click.echo(f'{key}: {value}')


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
def status(path: str):
    """Print the status of a post (draft when not set)."""
    _require_post(path)
    click.echo(get_file_status(path))


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
def toggle(path: str):
    """Flip a post between draft and published."""
    _require_post(path)
    try:
        new_status = toggle_file(path)
    except OSError as e:
        raise click.ClickException(str(e)) from e
    click.echo(new_status)


@main.command(name='set')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.argument('assignments', nargs=-1, required=True)
def set_fields(path: str, assignments: tuple[str, ...]):
    """Set metadata fields, e.g. `set post.md title="New title" tags=a,b`.

    An empty value removes the field.
    """
    _require_post(path)
    partial = _parse_assignments(assignments)
    try:
        update_file(path, partial)
    except OSError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument('title')
@click.option('--template', '-t', 'template_name', default=DEFAULT_TEMPLATES[0].name, show_default=True)
@click.option('--slug', '-s', default=None, help='Defaults to the slugified title.')
@click.option('--date', '-d', default=None, help='Defaults to today (YYYY-MM-DD).')
@click.option('--content-dir', '-c', default=None, help='Overrides PELICANPOST_CONTENT_DIR.')
@click.pass_obj
def new(settings: Settings, title: str, template_name: str, slug: str | None, date: str | None, content_dir: str | None):
    """Create a new post from a template and print its path."""
    try:
        template = get_template(template_name)
    except UnknownTemplateError as e:
        names = ', '.join(t.name for t in DEFAULT_TEMPLATES)
        raise click.BadParameter(f'unknown template {template_name!r} (available: {names})') from e
    try:
        path = create_post(content_dir or settings.content_dir, template, title, slug=slug, date=date)
    except FileExistsError as e:
        raise click.ClickException(f'Post already exists: {e.filename}') from e
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    click.echo(path)


@main.command()
def templates():
    """List the available post templates."""
    for template in DEFAULT_TEMPLATES:
        click.echo(f'{template.name}: {template.description}')


@main.command(name='commit-message')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def commit_message(settings: Settings, path: str):
    """Print the commit message for publishing a post."""
    _require_post(path)
    title = PostMetadata(parse_file(path).metadata).title or 'Untitled Post'
    click.echo(settings.commit_message(title))


if __name__ == '__main__':
    main()
