"""CLI application for the school website content dashboard."""

import typer

from cmsops.cli.commands.blog import app as blog_app
from cmsops.cli.commands.contact import app as contact_app
from cmsops.cli.commands.download import app as download_app
from cmsops.cli.commands.records import app as records_app
from cmsops.cli.commands.upload import upload
from cmsops.cli.common.options import VerboseOpt
from cmsops.core.config import Settings
from cmsops.core.logs import configure_logging

app = typer.Typer(
    help="cms-ops - website content management console",
    no_args_is_help=True,
)


@app.callback()
def _main(ctx: typer.Context, verbose: bool = VerboseOpt):
    """Resolve settings and configure logging before any command runs."""
    settings = Settings.from_env()
    ctx.obj = settings
    configure_logging("DEBUG" if verbose else settings.log_level)


app.add_typer(records_app, name="records", help="Browse and edit content records.")
app.add_typer(contact_app, name="contact")
app.add_typer(blog_app, name="blog")
app.add_typer(download_app, name="download")
app.command("upload")(upload)


if __name__ == "__main__":
    app()
