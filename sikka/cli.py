"""Sikka API Client CLI Interface"""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Optional

import click
from pydantic import SecretStr

from sikka.auth.credentials import SikkaAppCredentials
from sikka.client import SikkaClient
from sikka.config import get_settings
from sikka.errors import SikkaError
from sikka.logger import create_console_logger, set_logger
from sikka.resources.practices import list_authorized_practices


def _run(action: Callable[[SikkaClient], Awaitable[Any]]) -> Any:
    """Authenticate a client from settings and run ``action`` with it."""

    async def runner() -> Any:
        async with SikkaClient.from_settings() as client:
            await client.authenticate()
            return await action(client)

    try:
        return asyncio.run(runner())
    except ValueError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)
    except SikkaError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)


def _cell(value: Any, show_secrets: bool) -> Any:
    if show_secrets and isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


def _echo_records(
    records: list,
    output_json: bool,
    columns: tuple[str, ...],
    show_secrets: bool = False,
) -> None:
    if output_json:
        rows = []
        for record in records:
            row = record.model_dump(mode="json")
            if show_secrets:
                row.update({name: _cell(value, True) for name, value in record})
            rows.append(row)
        click.echo(json.dumps(rows, indent=2, default=str))
        return

    if not records:
        click.echo("No records found.")
        return

    for record in records:
        click.echo(
            "  ".join(
                str(_cell(getattr(record, col, None), show_secrets) or "-")
                for col in columns
            )
        )
    click.echo(f"\n{len(records)} record(s)")


json_option = click.option("--json", "output_json", is_flag=True, help="Output as JSON")
limit_option = click.option("--limit", "-l", type=int, default=None, help="Page size")
offset_option = click.option("--offset", type=int, default=None, help="Page offset")


@click.group()
@click.version_option(version="0.1.0", prog_name="sikka")
@click.option("--debug", is_flag=True, help="Log requests to stderr")
def cli(debug: bool):
    """Sikka ONE API - practice management data from the command line."""
    level = "DEBUG" if debug else get_settings().log_level
    if level:
        set_logger(create_console_logger(level))


@cli.command()
def status():
    """Authenticate with the configured office and show the key expiry."""

    async def action(client: SikkaClient):
        return client.expires_at

    expires_at = _run(action)
    click.echo("✅ Authenticated with Sikka")
    click.echo(f"   Request key expires at {expires_at.isoformat()}")


@cli.command()
@click.option(
    "--show-secrets",
    is_flag=True,
    help="Print office secret keys in clear text (masked by default)",
)
@json_option
def practices(show_secrets: bool, output_json: bool):
    """
    List practices that authorized the application (app credentials only).

    Secret keys are masked unless --show-secrets is given.
    """
    settings = get_settings()
    if not settings.app_id or not settings.app_key.get_secret_value():
        click.echo("❌ Configuration error: set SIKKA_APP_ID and SIKKA_APP_KEY", err=True)
        sys.exit(1)

    credentials = SikkaAppCredentials(app_id=settings.app_id, app_key=settings.app_key)
    try:
        records = asyncio.run(list_authorized_practices(credentials, settings.base_url))
    except SikkaError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    columns = ("office_id", "practice_id", "practice_name")
    if show_secrets:
        columns += ("secret_key",)
    _echo_records(records, output_json, columns, show_secrets=show_secrets)


@cli.command()
@click.option("--firstname", type=str, default=None)
@click.option("--lastname", type=str, default=None)
@click.option("--birthdate", type=str, default=None, help="yyyy-MM-dd")
@click.option("--patient-id", type=str, default=None)
@limit_option
@offset_option
@json_option
def patients(
    firstname: Optional[str],
    lastname: Optional[str],
    birthdate: Optional[str],
    patient_id: Optional[str],
    limit: Optional[int],
    offset: Optional[int],
    output_json: bool,
):
    """Search patients."""

    async def action(client: SikkaClient):
        return await client.patients.list(
            firstname=firstname,
            lastname=lastname,
            birthdate=birthdate,
            patient_id=patient_id,
            limit=limit,
            offset=offset,
        )

    _echo_records(_run(action), output_json, ("patient_id", "firstname", "lastname", "birthdate"))


@cli.command()
@click.option("--patient-id", type=str, default=None)
@click.option("--claim-id", type=str, default=None)
@click.option("--status", "claim_status", type=str, default=None)
@click.option("--start-date", type=str, default=None, help="yyyy-MM-dd")
@click.option("--end-date", type=str, default=None, help="yyyy-MM-dd")
@limit_option
@offset_option
@json_option
def claims(
    patient_id: Optional[str],
    claim_id: Optional[str],
    claim_status: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    limit: Optional[int],
    offset: Optional[int],
    output_json: bool,
):
    """Search claims."""

    async def action(client: SikkaClient):
        return await client.claims.list(
            patient_id=patient_id,
            claim_id=claim_id,
            status=claim_status,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )

    _echo_records(
        _run(action),
        output_json,
        ("claim_sr_no", "patient_id", "claim_status", "total_billed_amount"),
    )


@cli.command()
@click.option("--claim", "claim_sr_no", type=str, default=None, help="Claim serial number")
@click.option("--patient-id", type=str, default=None)
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["Procedure", "Payment"]),
    default=None,
)
@click.option(
    "--procedures-only",
    is_flag=True,
    help="Only procedure line items of --claim (filtered locally)",
)
@limit_option
@offset_option
@json_option
def transactions(
    claim_sr_no: Optional[str],
    patient_id: Optional[str],
    transaction_type: Optional[str],
    procedures_only: bool,
    limit: Optional[int],
    offset: Optional[int],
    output_json: bool,
):
    """List claim transactions."""
    if procedures_only and not claim_sr_no:
        raise click.UsageError("--procedures-only requires --claim")

    async def action(client: SikkaClient):
        if procedures_only:
            return await client.transactions.list_procedures(claim_sr_no)
        return await client.transactions.list(
            claim_sr_no=claim_sr_no,
            patient_id=patient_id,
            transaction_type=transaction_type,
            limit=limit,
            offset=offset,
        )

    _echo_records(
        _run(action),
        output_json,
        ("transaction_sr_no", "transaction_type", "procedure_code", "amount"),
    )


@cli.command("payment-types")
@click.option("--insurance", is_flag=True, help="Insurance payment types only")
@click.option("--adjustment", is_flag=True, help="Credit adjustment types only")
@click.option("--debit-adjustment", is_flag=True, help="Debit adjustment types only")
@limit_option
@offset_option
@json_option
def payment_types(
    insurance: bool,
    adjustment: bool,
    debit_adjustment: bool,
    limit: Optional[int],
    offset: Optional[int],
    output_json: bool,
):
    """List payment and adjustment types of the practice."""

    async def action(client: SikkaClient):
        return await client.payment_types.list(
            is_insurance_type=insurance,
            is_adjustment_type=adjustment,
            is_debit_adjustment_type=debit_adjustment,
            limit=limit,
            offset=offset,
        )

    _echo_records(_run(action), output_json, ("code", "description"))


if __name__ == "__main__":
    cli()
