"""Audit log commands."""

import click
from troopfund.cli.account_resolution import principal_or_exit
from troopfund.cli.error_handling import handle_domain_error
from troopfund.domain.audit import AuditService
from troopfund.domain.errors import DomainError


@click.group()
def audit_group():
    """View the audit log (admin only)."""
    pass


@audit_group.command("list")
@click.option("--limit", type=int, default=100, show_default=True, help="Maximum entries to show")
@click.pass_context
def list_audit(ctx, limit: int):
    """List audit entries, newest first."""
    principal = principal_or_exit(ctx)
    service = AuditService(ctx.obj["db"])

    try:
        entries = service.list_entries(principal, limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No audit entries found.")
        return

    for entry in entries:
        actor = entry.principal_id if entry.principal_id is not None else "-"
        click.echo(
            f"{entry.created_at:%Y-%m-%d %H:%M:%S} | user {actor} | "
            f"{entry.action_type} | {entry.details}"
        )


def register_commands(cli):
    """Register audit commands with main CLI."""
    cli.add_command(audit_group, name="audit")
