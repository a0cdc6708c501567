"""Console output for per-page progress and the end-of-run summary."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from pharmacy_receipts.models.receipt import PageOutcome, PageResult, RunningTotal

console = Console()

RULE = "=" * 45


def page_line(result: PageResult, verbose: bool = False) -> None:
    """Print the outcome for one page."""
    name = escape(result.page.name)
    if result.outcome == PageOutcome.FOUND:
        console.print(f"  [green]✓[/green] Found Patient Pays amount: ${result.amount}")
    elif result.outcome == PageOutcome.FAILED:
        console.print(
            f"  [red]Error: Failed to process {name} with OCR API[/red] "
            f"[dim]({escape(result.error)})[/dim]",
            soft_wrap=True,
        )
    else:
        console.print(f"  [yellow]✗[/yellow] No 'Patient Pays' amount found in {name}")
        if verbose:
            text = result.text.strip() or "<no text recognized>"
            console.print(f"[dim]OCR Text: {escape(text)}[/dim]")


def summary_report(total: RunningTotal) -> None:
    """Print pages processed and the total, rounded to cents."""
    console.print()
    console.print(RULE)
    console.print("[bold]SUMMARY[/bold]")
    console.print(RULE)
    console.print(f"Pages processed: {total.pages}")
    console.print(f"Amounts found: {total.matched}")
    if total.failed:
        console.print(f"[red]Pages failed: {total.failed}[/red]")
    console.print(f"Total 'Patient Pays' amount: ${total.display_amount()}")
    console.print()
    console.print("💡 TIP: Save this amount for your insurance reimbursement claim")
