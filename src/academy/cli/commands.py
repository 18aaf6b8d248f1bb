"""CLI commands for the academy client.

Commands:
- login / logout: manage the stored session
- users, payments, years, codes: list backend data
- activate: redeem an activation code
- upload: upload a file with a live progress bar
- serve: run the same-origin proxy
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import httpx
import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from academy.api.errors import ApiError, HTTPError
from academy.api.http import ApiClient
from academy.api.resources.academic_years import AcademicYearClient
from academy.api.resources.activation_codes import ActivationCodeClient, code_status
from academy.api.resources.payments import PaymentClient, to_display_item
from academy.api.resources.users import UserClient
from academy.api.uploads import FileUploadClient
from academy.auth.client import AuthClient
from academy.auth.logout import LogoutController, LogoutState
from academy.auth.token_store import TokenStore
from academy.config.app_config import AppConfig, load_app_config
from academy.models.activation_code import CodeFilters
from academy.models.payment import PaymentFilters
from academy.models.upload import UploadCompleted, UploadProgress
from academy.models.user import UserFilters
from academy.utils.formatting import format_currency, format_date, format_file_size

T = TypeVar("T")

app = typer.Typer(
    name="academy",
    help="Command-line client for the academy learning platform.",
    no_args_is_help=True,
)

console = Console()

# Backend transport override (tests install an httpx.MockTransport)
_transport: httpx.AsyncBaseTransport | None = None


class RoleChoice(str, Enum):
    student = "student"
    teacher = "teacher"
    admin = "admin"
    support = "support"


class PaymentStatusChoice(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


def _token_store(config: AppConfig) -> TokenStore:
    return TokenStore(Path(config.auth.token_file))


def _api_client(config: AppConfig, store: TokenStore) -> ApiClient:
    return ApiClient(config.api, token_provider=store.get_token, transport=_transport)


def _error_text(error: ApiError) -> str:
    if isinstance(error, HTTPError):
        return f"{error} ({error.message})"
    return str(error)


def _run(call: Callable[[ApiClient, TokenStore], Awaitable[T]]) -> T:
    """Run one async backend interaction, exiting with code 1 on API errors."""
    config = load_app_config()
    store = _token_store(config)

    async def main() -> T:
        async with _api_client(config, store) as api:
            return await call(api, store)

    try:
        return asyncio.run(main())
    except ApiError as e:
        console.print(f"[red]✗ {_error_text(e)}[/red]")
        raise typer.Exit(code=1)


# =============================================================================
# SESSION
# =============================================================================


@app.command()
def login(
    email: str = typer.Argument(..., help="Account email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Account password"
    ),
) -> None:
    """Sign in and store the session token."""

    async def call(api: ApiClient, store: TokenStore):
        return await AuthClient(api, store).login(email, password)

    auth = _run(call)
    console.print(f"[green]✓ Signed in as {auth.user.display_name}[/green]")
    console.print(f"  [dim]role:[/dim]  {auth.user.role}")
    console.print(f"  [dim]email:[/dim] {auth.user.email}")


@app.command()
def logout() -> None:
    """Sign out. Local credentials are cleared even if the backend fails."""
    config = load_app_config()
    store = _token_store(config)

    async def main() -> LogoutController:
        async with _api_client(config, store) as api:
            controller = LogoutController(
                logout_call=AuthClient(api, store).logout,
                store=store,
                navigate=lambda route: console.print(f"  [dim]next:[/dim] {route}"),
                config=config.auth,
            )
            console.print("[blue]Logging out...[/blue]")
            await controller.logout()
            return controller

    controller = asyncio.run(main())
    color = "green" if controller.state is LogoutState.SUCCESS else "yellow"
    console.print(f"[{color}]✓ {controller.message}[/{color}]")


# =============================================================================
# LISTINGS
# =============================================================================


@app.command()
def users(
    role: RoleChoice | None = typer.Option(None, "--role", "-r", help="Filter by role"),
    search: str | None = typer.Option(None, "--search", "-s", help="Search name or email"),
    page: int = typer.Option(1, "--page", help="Page number"),
    limit: int = typer.Option(20, "--limit", help="Rows per page"),
) -> None:
    """List platform users."""
    from rich.table import Table

    filters = UserFilters(role=role.value if role else None, search=search, page=page, limit=limit)

    async def call(api: ApiClient, store: TokenStore):
        return await UserClient(api).list(filters)

    result = _run(call)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Role", justify="center")
    table.add_column("Active", justify="center")

    for user in result.items:
        active = "[green]✓[/green]" if user.is_active else "[red]✗[/red]"
        table.add_row(user.display_name, user.email, user.role, active)

    console.print(table)
    if result.pagination:
        p = result.pagination
        console.print(f"[dim]Page {p.page}/{p.total_pages} · {p.total_items} users[/dim]")


@app.command()
def payments(
    status: PaymentStatusChoice | None = typer.Option(None, "--status", help="Filter by review status"),
    search: str | None = typer.Option(None, "--search", "-s", help="Search student"),
    page: int = typer.Option(1, "--page", help="Page number"),
) -> None:
    """List payments with their review status."""
    from rich.table import Table

    filters = PaymentFilters(status=status.value if status else None, search=search, page=page)

    async def call(api: ApiClient, store: TokenStore):
        return await PaymentClient(api).list(filters)

    result = _run(call)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Student", style="cyan")
    table.add_column("Target")
    table.add_column("Amount", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("Created")

    for payment in result.items:
        row = to_display_item(payment)
        created = format_date(row.created_at, long_month=False) if row.created_at else ""
        table.add_row(
            row.student_name,
            f"{row.plan_type}: {row.target_name}",
            format_currency(row.amount, row.currency),
            row.status_label,
            created,
        )

    console.print(table)


@app.command()
def years() -> None:
    """List academic years; the current one is highlighted."""
    from rich.table import Table

    async def call(api: ApiClient, store: TokenStore):
        return await AcademicYearClient(api).get_all()

    result = _run(call)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Current", justify="center")

    for year in result:
        current = "[green]●[/green]" if year.is_current else ""
        table.add_row(
            year.display_name or year.name,
            year.start_date or "",
            year.end_date or "",
            current,
        )

    console.print(table)


@app.command()
def codes(
    active: bool | None = typer.Option(None, "--active/--inactive", help="Filter by state"),
    search: str | None = typer.Option(None, "--search", "-s", help="Search code or name"),
    page: int = typer.Option(1, "--page", help="Page number"),
) -> None:
    """List activation codes with their usage."""
    from rich.table import Table

    filters = CodeFilters(is_active=active, search=search, page=page)

    async def call(api: ApiClient, store: TokenStore):
        return await ActivationCodeClient(api).list(filters)

    result = _run(call)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Code", style="cyan")
    table.add_column("Uses", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("Status", justify="center")

    for code in result.items:
        status = code_status(code)
        table.add_row(
            code.code,
            f"{code.current_uses}/{code.max_uses}",
            f"{code.usage_percentage:.0f}%",
            status.label,
        )

    console.print(table)


@app.command()
def activate(
    code: str = typer.Argument(..., help="Activation code (LMS-XXXXXXXX-XXXXXXXX)"),
) -> None:
    """Redeem an activation code for the signed-in student."""
    from academy.api.resources.activation_codes import validate_code_format

    check = validate_code_format(code)
    if not check.is_valid:
        for error in check.errors:
            console.print(f"[red]✗ {error}[/red]")
        raise typer.Exit(code=1)

    async def call(api: ApiClient, store: TokenStore):
        return await ActivationCodeClient(api).activate(code)

    result = _run(call)
    console.print(f"[green]✓ {result.message or 'Code activated'}[/green]")


# =============================================================================
# UPLOAD
# =============================================================================


@app.command()
def upload(
    file: str = typer.Argument(..., help="File to upload"),
    kind: str = typer.Option("document", "--kind", "-k", help="image, video, document, receipt"),
) -> None:
    """Upload a file and show its progress."""
    file_path = Path(file).expanduser().resolve()

    async def call(api: ApiClient, store: TokenStore) -> UploadCompleted | None:
        completed = None
        with Progress(
            TextColumn("[blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(file_path.name, total=100)
            async for event in FileUploadClient(api).upload(file_path, kind):
                if isinstance(event, UploadProgress):
                    progress.update(task, completed=event.percent)
                else:
                    completed = event
        return completed

    completed = _run(call)

    if completed is None:
        console.print("[red]✗ Upload finished without a result[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Uploaded {completed.file_name}[/green]")
    console.print(f"  [dim]url:[/dim]  {completed.url}")
    console.print(f"  [dim]size:[/dim] {format_file_size(completed.file_size)}")


# =============================================================================
# PROXY SERVER
# =============================================================================


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Run the same-origin proxy in front of the backend."""
    import uvicorn

    from academy.web.api import create_app

    config = load_app_config()
    console.print(f"[blue]Proxying /api → {config.proxy.backend_url}[/blue]")
    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    app()
