"""Common CLI options for the CLI."""

import typer

from cmsops.core.table import DEFAULT_WORD_LIMIT

ResourceArg = typer.Argument(
    ...,
    help="Resource name (membership, partner, contact, blog, ...)",
)

IdArg = typer.Argument(..., help="Record id")

SearchOpt = typer.Option(
    "",
    "--search",
    "-s",
    help="Case-insensitive text filter applied to every column",
)

WordsOpt = typer.Option(
    DEFAULT_WORD_LIMIT,
    "--words",
    min=1,
    help="Truncate text cells after this many words",
)

PickOpt = typer.Option(
    False,
    "--pick",
    help="Pick a row interactively and open its detail view",
)

FieldOpt = typer.Option(
    [],
    "--field",
    "-f",
    help="Field value (key=value). This is reusable.",
    show_default=False,
)

ImageOpt = typer.Option(
    None,
    "--image",
    help="Image or PDF file to upload and attach to the record",
    exists=True,
    dir_okay=False,
    readable=True,
)

ConfirmOpt = typer.Option(
    True,
    "--confirm/--no-confirm",
    help="Ask for confirmation before deleting",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log every backend request and response",
)
