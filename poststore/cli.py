"""Command-line interface for poststore.

This module defines the CLI commands using the Click framework. Commands run
against the project in the current directory, reading poststore.yaml when
present.

Commands:
- ids: List post ids.
- list: List posts newest first.
- show: Render one post to HTML.
- new: Create a new post file interactively.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .collections import PostCollection
from .config import load_config
from .errors import NotFoundError, PostStoreError, StorageError
from .store import PostStore
from .utils import slugify


@click.group()
@click.version_option(version=__version__, prog_name="poststore")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Poststore markdown post store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print route parameters as JSON")
def ids(as_json: bool):
    """List post ids."""
    store = _open_store()
    if as_json:
        params = _run(store.route_params)
        click.echo(json.dumps(params, indent=2))
        return
    for post_id in sorted(_run(store.list_post_ids)):
        click.echo(post_id)


@cli.command(name="list")
@click.option("--json", "as_json", is_flag=True, help="Print posts as JSON")
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    required=False,
    help="Only show the newest N posts",
)
def list_posts(as_json: bool, limit: int | None):
    """List posts, newest first."""
    store = _open_store()
    posts = PostCollection(_run(store.list_posts_sorted_by_date_desc))
    if limit is not None:
        posts = posts.latest(limit)
    if as_json:
        click.echo(json.dumps([p.to_dict() for p in posts], indent=2, default=str))
        return
    for post in posts:
        click.echo(f"{post.date}  {post.id}  {post.title}")


@cli.command()
@click.argument("post_id")
@click.option("--json", "as_json", is_flag=True, help="Print metadata and HTML as JSON")
def show(post_id: str, as_json: bool):
    """Render a post to HTML."""
    store = _open_store()
    post = _run(store.get_post_data, post_id)
    if as_json:
        click.echo(json.dumps(post.to_dict(), indent=2, default=str))
        return
    click.echo(post.content_html, nl=False)


@cli.command()
def new():
    """Create a new post file interactively."""
    project_root = Path.cwd()
    config = _run(load_config, project_root)
    content_dir = project_root / config["content_dir"]
    extension = config["extensions"][0]

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    title = title.strip()

    post_id = questionary.text(
        "Post id (file name without extension):",
        default=slugify(title),
        validate=lambda x: len(slugify(x)) > 0 or "Post id cannot be empty",
        style=_questionary_style(),
    ).ask()
    if post_id is None:
        raise click.Abort()
    post_id = slugify(post_id)

    published = questionary.text(
        "Date (YYYY-MM-DD):",
        default=date.today().isoformat(),
        validate=_validate_date,
        style=_questionary_style(),
    ).ask()
    if published is None:
        raise click.Abort()

    if content_dir.exists():
        existing = _run(PostStore(content_dir, extensions=config["extensions"]).list_post_ids)
        if post_id in existing:
            raise click.ClickException(f"A post with id '{post_id}' already exists")

    target_path = content_dir / f"{post_id}{extension}"
    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {target_path.relative_to(project_root)}"
        )

    content_dir.mkdir(parents=True, exist_ok=True)
    header = yaml.safe_dump(
        {"title": title, "date": published.strip()}, allow_unicode=True, sort_keys=False
    )
    frontmatter = f"---\n{header}---\n\n"
    target_path.write_text(frontmatter, encoding="utf-8")
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _open_store() -> PostStore:
    """Create a store for the project in the current directory."""
    return _run(PostStore.from_config, Path.cwd())


def _run(func, *args):
    """Call a store operation, reporting store errors and exiting with status 1."""
    try:
        return func(*args)
    except NotFoundError as exc:
        click.echo(click.style(f"Post not found: {exc.post_id}", fg="red", bold=True), err=True)
    except StorageError as exc:
        click.echo(click.style("Content error:", fg="red", bold=True), err=True)
        if exc.path is not None:
            click.echo(click.style(f"  File: {exc.path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
    except PostStoreError as exc:
        click.echo(click.style(str(exc), fg="red", bold=True), err=True)
    raise SystemExit(1)


def _validate_date(value: str) -> bool | str:
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        return "Use the YYYY-MM-DD format"
    return True


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
