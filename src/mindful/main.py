"""
MindfulAI - CLI Entry Point.

Usage:
    mindful onboard          Walk through onboarding in the terminal
    mindful symptoms         List selectable symptoms
    mindful serve            Run the web API
    mindful health           Check configuration
    mindful --help           Show help
"""

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="mindful",
    help="MindfulAI Therapy - onboarding and account setup.",
    add_completion=False,
)
console = Console()


@app.command()
def symptoms() -> None:
    """List the symptoms offered during onboarding."""
    from onboarding.catalog import DEFAULT_CATALOG

    table = Table(title="Symptoms")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for entry in DEFAULT_CATALOG:
        table.add_row(entry.id, entry.label, entry.description)
    console.print(table)


def _pick_symptoms(session) -> None:
    """Toggle loop for the symptoms step."""
    from onboarding import content

    while True:
        console.print(f"\n[bold]{content.SYMPTOMS_HEADING}[/bold] [dim]{content.SYMPTOMS_BODY}[/dim]")
        entries = list(session.catalog)
        for i, entry in enumerate(entries, start=1):
            mark = "[green]✔[/green]" if entry.id in session.selection else " "
            console.print(f"  {mark} {i}. [bold]{entry.label}[/bold] - {entry.description}")

        choice = console.input(
            "\nNumber to toggle, [bold]c[/bold] to continue, [bold]b[/bold] to go back: "
        ).strip().lower()

        if choice == "b":
            session.back()
            return
        if choice == "c":
            if not session.advance():
                console.print("[yellow]Select at least one symptom to continue.[/yellow]")
                continue
            return
        if choice.isdigit() and 1 <= int(choice) <= len(entries):
            session.toggle_symptom(entries[int(choice) - 1].id)
        else:
            console.print("[red]Unrecognised choice.[/red]")


def _account_form(session) -> bool:
    """
    One pass of the account step.

    Returns True once signed in, False if the user went back.
    """
    from onboarding import content
    from onboarding.forms import AuthMode

    form = session.auth.state
    heading, body = content.form_heading(form.mode)
    console.print(f"\n[bold]{heading}[/bold]\n[dim]{body}[/dim]")
    if form.last_error:
        console.print(f"[red]{form.last_error}[/red]")

    action = console.input(
        f"[bold]s[/bold] {content.submit_label(form.mode)}, "
        f"[bold]m[/bold] {content.mode_switch_label(form.mode)}, "
        f"[bold]b[/bold] {content.BACK_ACTION}: "
    ).strip().lower()

    if action == "b":
        session.back()
        return False
    if action == "m":
        session.toggle_mode()
        return False
    if action != "s":
        console.print("[red]Unrecognised choice.[/red]")
        return False

    fields = {}
    if form.mode == AuthMode.SIGN_UP:
        fields["name"] = console.input("Full Name: ")
    fields["email"] = console.input("Email Address: ")
    fields["password"] = console.input(f"Password ({content.password_placeholder(form.mode)}): ", password=True)

    with console.status(content.submit_label(form.mode, submitting=True)):
        result = asyncio.run(session.submit(fields))

    if result.ok and form.notice:
        console.print(f"[green]{form.notice}[/green]")
    return form.authenticated


@app.command()
def onboard() -> None:
    """Walk through welcome, symptom selection and account setup."""
    from mindful.config import settings
    from mindful.logging_setup import configure_logging
    from onboarding import content
    from onboarding.gateway import SupabaseIdentityGateway
    from onboarding.session import OnboardingSession
    from onboarding.state import OnboardingStep

    configure_logging(settings.log_level)

    if not settings.supabase_configured:
        console.print("[red]❌ SUPABASE_URL and SUPABASE_ANON_KEY must be set.[/red]")
        raise typer.Exit(1)

    session = OnboardingSession(SupabaseIdentityGateway())

    try:
        while True:
            if session.step == OnboardingStep.WELCOME:
                console.print(
                    Panel.fit(
                        f"[bold blue]{content.WELCOME_HEADING}[/bold blue]\n{content.WELCOME_BODY}",
                        title=content.APP_TITLE,
                        border_style="blue",
                    )
                )
                console.input(f"[dim]Press Enter to {content.WELCOME_ACTION.lower()}...[/dim]")
                session.advance()

            elif session.step == OnboardingStep.SYMPTOMS:
                _pick_symptoms(session)

            else:
                console.print(
                    Panel(content.DISCLAIMER, title=content.DISCLAIMER_TITLE, border_style="yellow")
                )
                if _account_form(session):
                    break

    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[dim]Onboarding interrupted. Nothing was saved.[/dim]")
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the onboarding web API."""
    import uvicorn

    uvicorn.run("mindful.web.app:build_app", factory=True, host=host, port=port, reload=reload)


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from mindful.config import get_settings

    console.print("\n[bold]MindfulAI Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("✅ Configuration loaded")
        console.print(f"   Environment: {settings.mindful_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Profiles table: {settings.profiles_table}")
    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)

    if settings.supabase_url.startswith("https://"):
        console.print("✅ Supabase URL configured")
    else:
        console.print("❌ Supabase URL missing or invalid")
        raise typer.Exit(1)

    if settings.supabase_anon_key:
        console.print("✅ Supabase anon key configured")
    else:
        console.print("❌ Supabase anon key missing")
        raise typer.Exit(1)

    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from mindful import __version__

    console.print(f"MindfulAI version {__version__}")


if __name__ == "__main__":
    app()
