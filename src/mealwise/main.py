"""
Mealwise - CLI Entry Point.

Usage:
    mealwise serve           Start the API server
    mealwise health          Check configuration
    mealwise db              Check database tables
    mealwise week            Show the current week-start
    mealwise --help          Show help
"""

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="mealwise",
    help="Mealwise - Weekly family meal planning from what your household actually eats.",
    add_completion=False,
)
console = Console()

TABLES = [
    "households",
    "user_households",
    "household_settings",
    "meals",
    "household_meals",
    "foods",
    "household_foods",
    "weekly_plans",
    "shopping_lists",
]


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all LLM prompts to prompt_logs/"),
) -> None:
    """Start the API server."""
    import os

    import uvicorn

    from mealwise.config import settings
    from mealwise.llm.prompt_logger import enable_prompt_logging, get_session_log_dir

    if log_prompts:
        # Read again by the prompt logger when --reload spawns a new process
        os.environ["MEALWISE_LOG_PROMPTS"] = "1"
        enable_prompt_logging(True)
        console.print(f"[dim]Prompt logging enabled: {get_session_log_dir()}[/dim]")

    # Hosting platforms set PORT
    actual_port = int(os.environ.get("PORT", port))

    console.print("\n[bold green]Mealwise API[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "mealwise.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from mealwise.config import get_settings

    console.print("\n[bold]Mealwise Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.mealwise_env}")
        console.print(f"   Log level: {settings.log_level}")

        if settings.openai_api_key.startswith("sk-"):
            console.print("[green]OK[/green] OpenAI API key configured")
        else:
            console.print("[yellow]WARN[/yellow] OpenAI API key may be invalid")

        if settings.supabase_url.startswith("https://"):
            console.print("[green]OK[/green] Supabase URL configured")
        else:
            console.print("[red]FAIL[/red] Supabase URL missing or invalid")

        if settings.supabase_service_role_key:
            console.print("[green]OK[/green] Supabase service role key configured")
        else:
            console.print("[red]FAIL[/red] Supabase service role key missing")

        console.print("\n[green]All checks passed![/green]")

    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)


@app.command()
def db() -> None:
    """Check database connection and table row counts."""
    from mealwise.db.client import get_service_client

    console.print("\n[bold]Database Connection Check[/bold]\n")

    try:
        client = get_service_client()
        console.print("[green]OK[/green] Connected to Supabase")
    except Exception as e:
        console.print(f"\n[red]FAIL Database connection failed: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Table Status")
    table.add_column("Table")
    table.add_column("Rows", justify="right")
    table.add_column("Status")

    failed = False
    for name in TABLES:
        try:
            result = client.table(name).select("*", count="exact").limit(0).execute()
            count = result.count if result.count is not None else "?"
            table.add_row(name, str(count), "[green]OK[/green]")
        except Exception as e:
            failed = True
            table.add_row(name, "-", f"[red]FAIL[/red] {e}")

    console.print(table)
    if failed:
        raise typer.Exit(1)
    console.print("\n[green]Database check complete![/green]")


@app.command()
def week(
    date: str = typer.Argument(None, help="Any date in the week (YYYY-MM-DD), default today"),
    shift: int = typer.Option(0, "--shift", "-s", help="Weeks to move forward (negative for past)"),
) -> None:
    """Show the week-start (Monday) plans are stored under."""
    from mealwise.errors import PlannerError
    from mealwise.planning.days import get_week_start, parse_week_start, shift_week

    try:
        week_start = parse_week_start(date) if date else get_week_start()
    except PlannerError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)

    if shift:
        week_start = shift_week(week_start, shift)

    console.print(week_start)


@app.command()
def version() -> None:
    """Show version information."""
    from mealwise import __version__

    console.print(f"Mealwise version {__version__}")


if __name__ == "__main__":
    app()
