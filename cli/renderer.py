"""
Response Renderer - terminal output for projects, recommendations and results
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from cli.session import SessionContext


SUITABILITY_STYLES = {"high": "green", "medium": "yellow", "low": "red"}


class Renderer:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def status(self, session: SessionContext) -> None:
        if not session.is_authenticated:
            self.console.print("[yellow]Not logged in[/yellow]")
            return

        table = Table(show_header=False, box=ROUNDED)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        user = session.current_user or {}
        table.add_row("User", f"{user.get('full_name') or '-'} <{user.get('email')}>")
        project = session.current_project
        table.add_row("Project", f"{project['title']} ({project['id']})" if project else "-")
        table.add_row("Selected methods", ", ".join(session.selected_methods) or "-")
        analysis = session.current_analysis
        table.add_row("Last analysis", f"{analysis.get('selected_method')} ({analysis.get('id')})" if analysis else "-")
        self.console.print(table)

    def projects(self, projects: List[Dict[str, Any]], current_id: Optional[str] = None) -> None:
        if not projects:
            self.console.print("[dim]Belum ada proyek.[/dim]")
            return

        table = Table(title="Proyek Penelitian", box=ROUNDED)
        table.add_column("", width=1)
        table.add_column("ID", style="dim")
        table.add_column("Judul", style="bold")
        table.add_column("Jenis")
        table.add_column("Status")
        for project in projects:
            marker = "*" if current_id and project.get("id") == current_id else ""
            table.add_row(
                marker,
                str(project.get("id")),
                project.get("title") or "",
                project.get("research_type") or "",
                project.get("status") or "",
            )
        self.console.print(table)

    def recommendations(self, recommendations: List[Dict[str, Any]]) -> None:
        if not recommendations:
            self.console.print("[dim]Tidak ada rekomendasi untuk jenis penelitian ini.[/dim]")
            return

        table = Table(title="Rekomendasi Metode Analisis", box=ROUNDED)
        table.add_column("#", justify="right")
        table.add_column("Metode", style="cyan")
        table.add_column("Nama", style="bold")
        table.add_column("Kesesuaian")
        table.add_column("Alasan")
        for index, rec in enumerate(recommendations, start=1):
            style = SUITABILITY_STYLES.get(rec.get("suitability"), "white")
            table.add_row(
                str(index),
                rec.get("method", ""),
                rec.get("name", ""),
                f"[{style}]{rec.get('suitability', '')}[/{style}]",
                rec.get("reason", ""),
            )
        self.console.print(table)

    def analysis(self, analysis: Dict[str, Any]) -> None:
        results = analysis.get("results") or {}
        summary = results.get("summary") or {}

        table = Table(show_header=True, box=ROUNDED)
        table.add_column("Statistik", style="bold")
        table.add_column("Nilai", justify="right")
        for key, value in summary.items():
            table.add_row(str(key), str(value))

        self.console.print(Panel(
            analysis.get("interpretation") or "",
            title=f"[bold]{analysis.get('selected_method')}[/bold]",
            subtitle=str(analysis.get("completed_at") or ""),
            box=ROUNDED,
        ))
        if summary:
            self.console.print(table)

    def upload(self, upload: Dict[str, Any]) -> None:
        summary = upload.get("data_summary") or {}
        self.console.print(
            f"[bold]{upload.get('file_name')}[/bold]: "
            f"{summary.get('rows', 0)} baris, {summary.get('columns', 0)} kolom"
        )
        types = summary.get("column_types") or {}
        missing = summary.get("missing_count") or {}
        table = Table(box=ROUNDED)
        table.add_column("Kolom", style="bold")
        table.add_column("Tipe")
        table.add_column("Kosong", justify="right")
        for name in summary.get("column_names") or []:
            table.add_row(name, types.get(name, ""), str(missing.get(name, 0)))
        self.console.print(table)
