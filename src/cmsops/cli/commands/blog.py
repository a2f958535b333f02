"""Commands for blog post publication."""

from __future__ import annotations

import typer

from cmsops.cli.common.context import AppContext, build_context
from cmsops.cli.common.exits import exit_from_api_error, warn_exit
from cmsops.cli.common.options import IdArg, SearchOpt, WordsOpt
from cmsops.cli.common.output import out
from cmsops.core.config import Settings
from cmsops.core.errors import ApiError
from cmsops.core.resources import BlogStatus, list_blogs, set_blog_status
from cmsops.core.table import RecordTable
from cmsops.core.views import get_view

app = typer.Typer(
    help="Publish, draft and archive blog posts.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@app.callback()
def _init(ctx: typer.Context):
    """Initialize backend context."""
    appctx = build_context(ctx.find_object(Settings))
    ctx.call_on_close(appctx.client.close)
    ctx.obj = appctx
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command("list")
def list_posts(
    ctx: typer.Context,
    status: BlogStatus | None = typer.Option(
        None, "--status", help="Only show posts in this status"
    ),
    search: str = SearchOpt,
    words: int = WordsOpt,
):
    """List blog posts, optionally by status."""
    appctx: AppContext = ctx.obj
    try:
        with out.status("Loading blog posts..."):
            posts = list_blogs(appctx.client, status)
    except ApiError as exc:
        exit_from_api_error(exc)

    view = get_view("blog")
    table = RecordTable(
        view.columns, view.to_records(posts), base_url=view.base_url, word_limit=words
    )
    table.search(search)

    if not table.records:
        warn_exit("No blog posts found", code=0)

    title = f"Blog posts ({status.value})" if status else "Blog posts"
    out.record_table(table, title=title)


@app.command("status")
def change_status(
    ctx: typer.Context,
    record_id: str = IdArg,
    status: BlogStatus = typer.Argument(..., help="draft, published or archived"),
):
    """Move a blog post to draft, published or archived."""
    appctx: AppContext = ctx.obj
    try:
        with out.status("Updating blog post..."):
            set_blog_status(appctx.client, record_id, status)
    except ApiError as exc:
        exit_from_api_error(exc)
    out.success(f"Blog post {record_id} is now {status.value}")
