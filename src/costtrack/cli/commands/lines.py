"""Production line configuration commands."""

import click
from costtrack.cli.data_context import build_services, load_store_or_exit
from costtrack.cli.filters import filter_options, resolve_filter_state
from costtrack.domain.production_lines import ProductionLineService
from costtrack.utils.amount_parser import format_currency


@click.group()
def lines_group():
    """Manage which machines count as production lines."""
    pass


@lines_group.command("list")
@click.pass_context
def list_lines(ctx):
    """List the configured production lines."""
    service = ProductionLineService(ctx.obj["config_store"], load_store_or_exit(ctx, required=False))

    machines = service.get_production_lines()
    if not machines:
        click.echo("No production lines configured. Use 'lines set' to choose machines.")
        return

    click.echo("\nProduction lines:")
    for machine in machines:
        click.echo(f"  {machine}")


@lines_group.command("candidates")
@click.pass_context
def list_candidates(ctx):
    """List every machine in the ledger, marking production lines."""
    service = ProductionLineService(ctx.obj["config_store"], load_store_or_exit(ctx))

    machines = service.get_machines()
    if not machines:
        click.echo("No machines found.")
        return

    configured = set(service.get_production_lines())
    for machine in machines:
        marker = "[x]" if machine in configured else "[ ]"
        click.echo(f"{marker} {machine}")


@lines_group.command("set")
@click.argument("machines", nargs=-1, required=True)
@click.pass_context
def set_lines(ctx, machines: tuple[str, ...]):
    """Replace the production lines with MACHINES."""
    service = ProductionLineService(ctx.obj["config_store"], load_store_or_exit(ctx, required=False))

    saved = service.save(list(machines))
    click.echo(f"Saved {len(saved)} production line{'s' if len(saved) != 1 else ''}.")


@lines_group.command("clear")
@click.pass_context
def clear_lines(ctx):
    """Remove every production line."""
    service = ProductionLineService(ctx.obj["config_store"], load_store_or_exit(ctx, required=False))
    service.save([])
    click.echo("Cleared production lines.")


@lines_group.command("summary")
@filter_options
@click.pass_context
def lines_summary(ctx, **filter_args):
    """Show spending per production line."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    service, _ = build_services(ctx, store, state)

    rows = service.get_production_line_aggregation()
    if not rows:
        click.echo("No production line records found.")
        return

    click.echo("\nProduction Line Spending:")
    click.echo("-" * 100)
    click.echo(f"{'Machine':<30} {'Department':<25} {'Sections':>8} {'Count':>8} {'Total':>20}")
    click.echo("-" * 100)
    for row in rows:
        click.echo(
            f"{row['machine']:<30} {row['department']:<25} {row['sections']:>8} "
            f"{row['count']:>8} {format_currency(row['total']):>20}"
        )


def register_commands(cli):
    """Register production line commands with main CLI."""
    cli.add_command(lines_group, name="lines")
