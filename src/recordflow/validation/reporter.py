"""
Console reporter for validation results.

Formats validation results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from recordflow.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_results(self, results: list[ValidationResult]) -> None:
        """
        Print validation results as a formatted table.

        Args:
            results: List of validation results to display.
        """
        table = Table(title="Validation Results", show_header=True)
        table.add_column("Resource", style="cyan", no_wrap=True)
        table.add_column("Format", style="blue")
        table.add_column("Schema", style="blue")
        table.add_column("Status", justify="center")
        table.add_column("Records", justify="right")

        for result in results:
            record_count = (
                str(result.record_count) if result.record_count is not None else "-"
            )
            table.add_row(
                result.resource,
                result.format_name,
                result.schema_name or "(layout)",
                self._format_status(result),
                record_count,
            )

        self.console.print(table)
        self._print_summary(results)
        self._print_detailed_errors(results)

    def _format_status(self, result: ValidationResult) -> str:
        """Format validation status with color."""
        if not result.exists:
            return "[yellow]MISSING[/yellow]"
        if result.ok:
            return "[green]✓ PASS[/green]"
        return "[red]✗ FAIL[/red]"

    def _print_summary(self, results: list[ValidationResult]) -> None:
        """Print summary counts."""
        passed = sum(1 for r in results if r.ok)
        missing = sum(1 for r in results if not r.exists)
        failed = len(results) - passed - missing

        self.console.print()
        self.console.print(
            f"[bold]Summary:[/bold] [green]{passed} passed[/green], "
            f"[red]{failed} failed[/red], [yellow]{missing} missing[/yellow]"
        )

    def _print_detailed_errors(self, results: list[ValidationResult]) -> None:
        """Print error details for failed documents."""
        failures = [r for r in results if r.error_message]
        if not failures:
            return

        self.console.print()
        self.console.print("[bold red]Errors:[/bold red]")
        for result in failures:
            self.console.print(f"  [cyan]{result.resource}[/cyan]: {result.error_message}")
