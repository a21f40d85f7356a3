"""`--status` output: what is stored, never the secrets themselves"""

from rich.console import Console
from rich.table import Table

from spotify_oauth import TokenStorage


def show_token_status(storage: TokenStorage, console: Console):
    status = storage.get_status()

    table = Table(title="Token Status Details", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    if not status["has_tokens"]:
        table.add_row("Credential", "[yellow]none stored[/yellow]")
    else:
        state = "[red]refresh needed[/red]" if status["is_expired"] else "[green]valid[/green]"
        table.add_row("Credential", state)
        table.add_row("Expires At", status["expires_at"])
        table.add_row("Time Until Expiry", status["time_until_expiry"])

    table.add_row("Token File", str(storage.token_file))
    console.print(table)
