"""Command for uploading images and PDFs to the asset host."""

from pathlib import Path

import typer

from cmsops.cli.common.exits import die, exit_from_api_error, exit_from_exc
from cmsops.cli.common.output import out
from cmsops.core.config import Settings
from cmsops.core.errors import ApiError
from cmsops.core.uploads import UploadFile, UploadRejected, upload_asset


def upload(
    ctx: typer.Context,
    path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Image or PDF file"
    ),
):
    """Upload an image (max 5MB) or PDF (max 10MB) and print its URL."""
    settings = ctx.find_object(Settings) or Settings.from_env()
    try:
        with out.status(f"Uploading {path.name}..."):
            url = upload_asset(UploadFile.from_path(path), settings)
    except OSError as exc:
        exit_from_exc(exc, message=f"Could not read {path}: {exc}", code=2)
    except UploadRejected as exc:
        die(str(exc), code=2)
    except ApiError as exc:
        exit_from_api_error(exc)

    out.success("Upload complete")
    out.kv({"url": url})
