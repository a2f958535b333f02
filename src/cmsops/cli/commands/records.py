"""Commands for listing and editing website content records."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import typer

from cmsops.cli.common.context import AppContext, build_context
from cmsops.cli.common.exits import (
    die,
    exit_from_api_error,
    exit_from_exc,
    ok_exit,
    warn_exit,
)
from cmsops.cli.common.fields import build_payload
from cmsops.cli.common.options import (
    ConfirmOpt,
    FieldOpt,
    IdArg,
    ImageOpt,
    PickOpt,
    ResourceArg,
    SearchOpt,
    WordsOpt,
)
from cmsops.cli.common.output import out
from cmsops.cli.tui import select_record
from cmsops.core.config import Settings
from cmsops.core.errors import ApiError
from cmsops.core.resources import ResourceAdapter, normalize_blog
from cmsops.core.table import RecordTable
from cmsops.core.uploads import UploadFile, UploadRejected, upload_asset
from cmsops.core.views import get_view, resolve_route

app = typer.Typer(
    help="List, show, add, update and delete content records.",
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


def _adapter_or_exit(appctx: AppContext, resource: str) -> ResourceAdapter:
    """Resolve a resource adapter and turn unknown names into CLI input errors."""
    try:
        return appctx.adapter(resource)
    except ValueError as exc:
        die(str(exc), code=2)


def show_document(title: str, doc: dict[str, Any]) -> None:
    """Print one backend document as key/value lines."""
    out.header(title)
    out.kv({k: v for k, v in doc.items() if k != "__v"})


def make_navigator(appctx: AppContext) -> Callable[[str], None]:
    """Return a navigate callback that opens the detail view behind a route."""

    def navigate(route: str) -> None:
        resolved = resolve_route(route)
        if resolved is None:
            die(f"No detail view for route '{route}'.", code=1)
        view, doc_id = resolved
        adapter = appctx.adapter(view.resource)
        try:
            with out.status("Loading record..."):
                doc = adapter.get(doc_id)
        except ApiError as exc:
            exit_from_api_error(exc)
        show_document(f"{adapter.endpoints.title} › {doc_id}", doc)

    return navigate


def _with_upload(
    appctx: AppContext,
    adapter: ResourceAdapter,
    payload: dict[str, Any],
    image: Path | None,
) -> dict[str, Any]:
    """Upload the given file (if any) and store its URL in the resource's image field."""
    if image is None:
        return payload
    field = adapter.endpoints.image_field
    if not field:
        die(f"Resource '{adapter.endpoints.name}' has no image field.", code=2)
    try:
        with out.status("Uploading file..."):
            url = upload_asset(UploadFile.from_path(image), appctx.settings)
    except OSError as exc:
        exit_from_exc(exc, message=f"Could not read {image}: {exc}", code=2)
    except UploadRejected as exc:
        die(str(exc), code=2)
    except ApiError as exc:
        exit_from_api_error(exc)
    return {**payload, field: url}


@app.command("list")
def list_records(
    ctx: typer.Context,
    resource: str = ResourceArg,
    search: str = SearchOpt,
    words: int = WordsOpt,
    pick: bool = PickOpt,
):
    """
    Show a resource as a searchable table.
    """
    appctx: AppContext = ctx.obj
    adapter = _adapter_or_exit(appctx, resource)
    view = get_view(adapter.endpoints.name)

    try:
        with out.status(f"Loading {adapter.endpoints.title.lower()}..."):
            docs = adapter.list_all()
    except ApiError as exc:
        exit_from_api_error(exc)

    if adapter.endpoints.name == "blog":
        docs = [normalize_blog(d) for d in docs]

    table = RecordTable(
        view.columns,
        view.to_records(docs),
        base_url=view.base_url,
        word_limit=words,
        navigate=make_navigator(appctx),
    )
    table.search(search)

    if not table.records:
        warn_exit("No records found", code=0)

    out.record_table(table, title=adapter.endpoints.title)

    if pick:
        record = select_record(table)
        if record is None:
            ok_exit("Nothing selected")
        table.activate(record)


@app.command()
def show(ctx: typer.Context, resource: str = ResourceArg, record_id: str = IdArg):
    """Show a single record."""
    appctx: AppContext = ctx.obj
    adapter = _adapter_or_exit(appctx, resource)
    try:
        with out.status("Loading record..."):
            doc = adapter.get(record_id)
    except ApiError as exc:
        exit_from_api_error(exc)
    show_document(f"{adapter.endpoints.title} › {record_id}", doc)


@app.command()
def add(
    ctx: typer.Context,
    resource: str = ResourceArg,
    field: list[str] = FieldOpt,
    image: Path | None = ImageOpt,
):
    """Create a record from --field key=value pairs (and an optional upload)."""
    appctx: AppContext = ctx.obj
    adapter = _adapter_or_exit(appctx, resource)
    try:
        payload = build_payload(field, require=image is None)
    except ValueError as exc:
        die(str(exc), code=2)

    payload = _with_upload(appctx, adapter, payload, image)

    try:
        with out.status("Saving record..."):
            created = adapter.create(payload)
    except ApiError as exc:
        exit_from_api_error(exc)
    except ValueError as exc:
        die(str(exc), code=2)

    out.success(f"{adapter.endpoints.title}: record created")
    if isinstance(created, dict):
        show_document("Created", created)


@app.command()
def update(
    ctx: typer.Context,
    resource: str = ResourceArg,
    record_id: str = IdArg,
    field: list[str] = FieldOpt,
    image: Path | None = ImageOpt,
):
    """Update a record from --field key=value pairs (and an optional upload)."""
    appctx: AppContext = ctx.obj
    adapter = _adapter_or_exit(appctx, resource)
    try:
        payload = build_payload(field, require=image is None)
    except ValueError as exc:
        die(str(exc), code=2)

    payload = _with_upload(appctx, adapter, payload, image)

    try:
        with out.status("Saving record..."):
            adapter.update(record_id, payload)
    except ApiError as exc:
        exit_from_api_error(exc)
    except ValueError as exc:
        die(str(exc), code=2)

    out.success(f"{adapter.endpoints.title}: record {record_id} updated")


@app.command()
def delete(
    ctx: typer.Context,
    resource: str = ResourceArg,
    record_id: str = IdArg,
    confirm: bool = ConfirmOpt,
):
    """Delete a record."""
    appctx: AppContext = ctx.obj
    adapter = _adapter_or_exit(appctx, resource)

    if confirm and not out.confirm(f"Delete {resource} record {record_id}?"):
        ok_exit("Cancelled")

    try:
        with out.status("Deleting record..."):
            adapter.delete(record_id)
    except ApiError as exc:
        exit_from_api_error(exc)
    except ValueError as exc:
        die(str(exc), code=2)

    out.success(f"{adapter.endpoints.title}: record {record_id} deleted")

