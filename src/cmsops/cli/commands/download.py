"""Commands for managing download categories."""

import typer

from cmsops.cli.common.context import AppContext, build_context
from cmsops.cli.common.exits import exit_from_api_error, ok_exit
from cmsops.cli.common.options import ConfirmOpt, IdArg
from cmsops.cli.common.output import out
from cmsops.core.config import Settings
from cmsops.core.errors import ApiError
from cmsops.core.resources import delete_download_category, list_download_categories

app = typer.Typer(
    help="Manage download categories.",
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


@app.command("categories")
def categories(ctx: typer.Context):
    """List download categories (built-in defaults when the backend has none)."""
    appctx: AppContext = ctx.obj
    try:
        with out.status("Loading categories..."):
            found = list_download_categories(appctx.client)
    except ApiError as exc:
        exit_from_api_error(exc)

    out.header("Download categories")
    for category in found:
        cid = category.get("_id") or category.get("id")
        out.kv({str(cid): category.get("name", "")})


@app.command("delete-category")
def delete_category(ctx: typer.Context, category_id: str = IdArg, confirm: bool = ConfirmOpt):
    """Delete a download category."""
    appctx: AppContext = ctx.obj
    if confirm and not out.confirm(f"Delete download category {category_id}?"):
        ok_exit("Cancelled")

    try:
        with out.status("Deleting category..."):
            delete_download_category(appctx.client, category_id)
    except ApiError as exc:
        exit_from_api_error(exc)
    out.success(f"Category {category_id} deleted")
