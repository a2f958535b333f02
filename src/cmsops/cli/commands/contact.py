"""Commands for processing contact form submissions."""

import typer

from cmsops.cli.common.context import AppContext, build_context
from cmsops.cli.common.exits import exit_from_api_error
from cmsops.cli.common.options import IdArg
from cmsops.cli.common.output import out
from cmsops.core.config import Settings
from cmsops.core.errors import ApiError
from cmsops.core.resources import mark_contact_read, mark_contact_replied

app = typer.Typer(
    help="Process contact submissions.",
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


@app.command("mark-read")
def mark_read(ctx: typer.Context, record_id: str = IdArg):
    """Mark a contact submission as read."""
    appctx: AppContext = ctx.obj
    try:
        with out.status("Updating submission..."):
            mark_contact_read(appctx.adapter("contact"), record_id)
    except ApiError as exc:
        exit_from_api_error(exc)
    out.success("Marked as read")


@app.command("mark-replied")
def mark_replied(ctx: typer.Context, record_id: str = IdArg):
    """Mark a contact submission as replied."""
    appctx: AppContext = ctx.obj
    try:
        with out.status("Updating submission..."):
            mark_contact_replied(appctx.adapter("contact"), record_id)
    except ApiError as exc:
        exit_from_api_error(exc)
    out.success("Marked as replied")
