"""JSON import command."""

import click
from finrecon.domain.json_import import JSONImportService


@click.command("import")
@click.argument("json_file", type=click.Path(exists=True))
@click.pass_context
def import_json(ctx, json_file: str):
    """Import transactions and budgets from a JSON file.

    The file holds a list of transaction records, or an object with
    "transactions" and "budgets" lists.
    """
    db = ctx.obj["db"]
    service = JSONImportService(db)

    try:
        result = service.import_json(json_file_path=json_file)
        click.echo("\nImport complete:")
        click.echo(f"  Imported: {result['transactions']} transactions")
        click.echo(f"  Imported: {result['budgets']} budgets")
        if result["errors"]:
            click.echo(f"  Errors: {len(result['errors'])}")
            for error in result["errors"]:
                click.echo(f"    {error}", err=True)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_json)
