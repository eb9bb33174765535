import json
import typer
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from slipscan.categorization import learn_category_preference
from slipscan.domain.enums import TransactionType
from slipscan.logging_setup import configure_logging
from slipscan.parsers.chat import ChatParser
from slipscan.services.scan_service import ScanService
from slipscan.sources import load_text

app = typer.Typer(
    name="slipscan",
    help="Turn payment slips and statements into transactions",
    add_completion=False,
)

console = Console()

class State:
    verbose: bool = False
    service: Optional[ScanService] = None


state = State()


def _load_preferences(path: Optional[Path]) -> Dict[str, str]:
    """Read a receiver -> category JSON file; a missing file means no preferences"""
    if path is None or not path.exists():
        return {}

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Preferences file must hold a JSON object: {path}")
    return {str(k): str(v) for k, v in data.items()}


def _amount_markup(txn) -> str:
    if txn.type == TransactionType.INCOME:
        return f"[green]+฿{txn.amount:,.2f}[/green]"
    return f"[red]-฿{txn.amount:,.2f}[/red]"


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    )
):
    """
    Slipscan - Read slips, statements and quick notes into transactions.
    """
    configure_logging("DEBUG" if verbose else None)

    if state.service is None:
        state.service = ScanService()

    state.verbose = verbose

@app.command(name="scan")
def scan(
    files: List[Path] = typer.Argument(
        ...,
        help="OCR text (.txt) or statement (.pdf) files, scanned in order",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    preferences_path: Optional[Path] = typer.Option(
        None,
        "--preferences", "-p",
        help="JSON file of learned receiver -> category choices",
    ),
):
    """
    Scan documents and preview the transactions found.

    Examples:
        slipscan scan slip.txt
        slipscan scan slip1.txt slip2.txt --preferences prefs.json
        slipscan scan statement.pdf
    """
    try:
        preferences = _load_preferences(preferences_path)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Scanning documents...", total=None)

            texts = [load_text(path) for path in files]
            summary = state.service.scan_many(texts, preferences=preferences)

            progress.update(task, completed=True)

        table = Table(title="Scan results")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Date", style="cyan", no_wrap=True)
        table.add_column("Note", style="white", max_width=40)
        table.add_column("Category", style="magenta", no_wrap=True)
        table.add_column("Amount", justify="right", no_wrap=True)
        table.add_column("Status", justify="center", no_wrap=True)

        row_num = 0
        for result in summary.results:
            duplicate_ids = {t.id for t in result.duplicates}
            for txn in result.transactions:
                row_num += 1
                status = "[yellow]DUP[/yellow]" if txn.id in duplicate_ids else "[green]NEW[/green]"
                table.add_row(
                    str(row_num),
                    txn.date,
                    txn.note[:40],
                    txn.category,
                    _amount_markup(txn),
                    status,
                )

        console.print(table)
        console.print(Panel.fit(
            f"[bold]Transactions:[/bold] {summary.count}\n"
            f"[bold]Total:[/bold] ฿{summary.total:,.2f}\n"
            f"[bold]Possible duplicates:[/bold] {summary.duplicate_count}",
            title="Summary",
            border_style="cyan",
        ))

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


@app.command(name="note")
def note(
    sentence: str = typer.Argument(..., help='Quick entry, e.g. "กินข้าว 60 บาท"'),
):
    """
    Parse a quick typed entry into a transaction.

    Examples:
        slipscan note "กินข้าว 60 บาท"
        slipscan note "เงินเดือนเข้า 20000"
    """
    txn = ChatParser(state.service.categorization_engine).parse_sentence(sentence)

    if txn is None:
        console.print('[yellow]No amount found. Try something like "ค่าอาหาร 50".[/yellow]')
        raise typer.Exit(code=1)

    kind = "Income" if txn.type == TransactionType.INCOME else "Expense"
    console.print(Panel.fit(
        f"[bold]{kind}[/bold] {_amount_markup(txn)}\n"
        f"Category: {txn.category}\n"
        f"Note: {txn.note}\n"
        f"Date: {txn.date}",
        border_style="green" if txn.type == TransactionType.INCOME else "red",
    ))


@app.command(name="learn")
def learn(
    receiver: str = typer.Argument(..., help="Receiver name exactly as scanned"),
    category: str = typer.Argument(..., help="Category to use for this receiver"),
    preferences_path: Path = typer.Option(
        ...,
        "--preferences", "-p",
        help="JSON file of learned receiver -> category choices",
    ),
):
    """
    Remember a category for a receiver.

    Examples:
        slipscan learn "ร้านป้าแดง" "อาหารและเครื่องดื่ม" -p prefs.json
    """
    try:
        preferences = _load_preferences(preferences_path)
        updated = learn_category_preference(preferences, receiver, category)

        if updated == preferences:
            console.print(f"[yellow]Nothing learned for '{receiver}'[/yellow]")
            return

        preferences_path.parent.mkdir(parents=True, exist_ok=True)
        with open(preferences_path, "w", encoding="utf-8") as f:
            json.dump(updated, f, ensure_ascii=False, indent=2)

        console.print(f"[green]✓[/green] {receiver} → {category}")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if state.verbose:
            console.print_exception()
        raise typer.Exit(code=1)


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
