"""Hierarchy and machine detail commands."""

import click
from costtrack.cli.data_context import build_services, load_store_or_exit
from costtrack.cli.filters import filter_options, resolve_filter_state
from costtrack.utils.amount_parser import format_currency
from costtrack.utils.date_parser import format_date

# Use 4 spaces per indent level
INDENT_SIZE = 4


def _echo_node(name: str, total: float, indent: int) -> None:
    indent_str = " " * (INDENT_SIZE * indent)
    # Amounts move right as indent increases
    name_width = 50 - (INDENT_SIZE * indent)
    amount_width = 20 + (INDENT_SIZE * indent)
    click.echo(f"{indent_str}{name:<{name_width}} {format_currency(total):>{amount_width}}")


def _by_total(nodes: dict) -> list:
    """Sort child nodes by total (descending), then by name for ties."""
    return sorted(nodes.items(), key=lambda item: (-item[1]["total"], item[0]))


@click.command("hierarchy")
@click.option(
    "--production-lines",
    is_flag=True,
    help="Show machine > section for configured production lines only",
)
@filter_options
@click.pass_context
def hierarchy(ctx, production_lines: bool, **filter_args):
    """Show spending as department > section > machine."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    service, _ = build_services(ctx, store, state)

    if production_lines:
        tree = service.get_production_line_hierarchy()
        if not tree:
            click.echo("No production line records found. Use 'lines set' to choose machines.")
            return

        click.echo("\nProduction Lines:")
        click.echo("-" * 80)
        for machine, node in _by_total(tree):
            _echo_node(f"{machine} ({node['department']})", node["total"], 0)
            for section, section_node in _by_total(node["sections"]):
                _echo_node(section, section_node["total"], 1)
        return

    tree = service.get_hierarchy()
    if not tree:
        click.echo("No records found.")
        return

    click.echo("\nSpending Hierarchy:")
    click.echo("-" * 80)
    for i, (department, node) in enumerate(_by_total(tree)):
        if i > 0:
            click.echo()
        _echo_node(department, node["total"], 0)
        for section, section_node in _by_total(node["sections"]):
            _echo_node(section, section_node["total"], 1)
            for machine, machine_node in _by_total(section_node["machines"]):
                _echo_node(machine, machine_node["total"], 2)

    click.echo("-" * 80)
    total = sum(node["total"] for node in tree.values())
    click.echo(f"{'TOTAL':<50} {format_currency(total):>20}")


@click.command("machine")
@click.argument("name")
@filter_options
@click.pass_context
def machine(ctx, name: str, **filter_args):
    """Show spending detail for one machine."""
    state = resolve_filter_state(ctx, **filter_args)
    store = load_store_or_exit(ctx)
    service, production_lines = build_services(ctx, store, state)

    data = service.get_machine_data(name)
    if data is None:
        click.echo(f"No records found for machine '{name}'.")
        return

    click.echo(f"\nMachine: {data['name']}")
    click.echo(f"  Department: {data['department']}")
    click.echo(f"  Section: {data['section']}")
    click.echo(f"  Production line: {'yes' if production_lines.is_production_line(name) else 'no'}")
    click.echo(f"  Total: {format_currency(data['total'])}")
    click.echo(f"  Records: {data['count']}")
    click.echo("-" * 80)
    for record in data["records"]:
        click.echo(
            f"{format_date(record.date):<14} {record.item_description[:44]:<44} "
            f"{format_currency(record.issued_value):>20}"
        )


def register_commands(cli):
    """Register hierarchy commands with main CLI."""
    cli.add_command(hierarchy)
    cli.add_command(machine)
