"""
Ficha Técnica CLI.

Command-line interface for common operations: running the API, creating
tables and the first administrator, and costing recipes from a terminal.
"""

import json
import sys
from pathlib import Path

import httpx
import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from rest_api.models import Base, RecipeSheet, User
from rest_api.services.domain import RecipeSheetService
from shared.infrastructure.db import SessionLocal, engine
from shared.security.password import hash_password
from shared.utils.catalog_schemas import CostPreviewRequest
from shared.utils.exceptions import AppException

app = typer.Typer(
    name="ficha",
    help="Ficha Técnica cost management CLI",
    add_completion=False,
)
console = Console()

API_VERSION = "1.0.0"


def _money(value: float) -> str:
    return f"R$ {value:,.2f}"


# =============================================================================
# Server and database
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API with uvicorn."""
    import uvicorn

    uvicorn.run("rest_api.main:app", host=host, port=port, reload=reload)


@app.command()
def db_init():
    """Create missing tables."""
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Could not create tables: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Tables ready[/green]")


@app.command()
def create_admin(
    email: str = typer.Argument(..., help="Administrator email"),
    nome: str = typer.Option("Administrador", help="Display name"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create an active, verified administrator account."""
    email = email.strip().lower()
    with SessionLocal() as db:
        if db.scalar(select(User).where(User.email == email)) is not None:
            console.print(f"[red]✗ User {email} already exists[/red]")
            raise typer.Exit(1)

        user = User(
            nome=nome,
            email=email,
            password=hash_password(password),
            admin=True,
            is_active=True,
            email_verificado=True,
        )
        db.add(user)
        db.commit()
        console.print(f"[green]✓ Administrator {email} created (id {user.id})[/green]")


# =============================================================================
# Costing
# =============================================================================

@app.command()
def calcular(
    arquivo: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON with the sheet inputs"),
):
    """
    Cost a recipe without saving it.

    The file holds the same body as POST /api/fichas/calcular.
    """
    try:
        body = CostPreviewRequest.model_validate(json.loads(arquivo.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, PydanticValidationError) as e:
        console.print(f"[red]✗ Invalid input file: {e}[/red]")
        raise typer.Exit(1)

    with SessionLocal() as db:
        try:
            result = RecipeSheetService(db).preview(body)
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    lines = Table(title="Ingredientes")
    lines.add_column("Nome", style="cyan")
    lines.add_column("Tipo")
    lines.add_column("Quantidade", justify="right")
    lines.add_column("Custo", justify="right", style="green")
    for line in result.ingredientes:
        lines.add_row(line.nome, line.tipo, f"{line.quantidade_usada:g} {line.unidade}", _money(line.custo_calculado))
    console.print(lines)

    totals = Table(title="Custos")
    totals.add_column("Item", style="cyan")
    totals.add_column("Valor", justify="right", style="green")
    details = result.detalhes_custos
    totals.add_row("Ingredientes", _money(details.ingredientes))
    totals.add_row("Gás/energia", _money(details.gas_energia))
    totals.add_row("Embalagem", _money(details.embalagem))
    totals.add_row("Mão de obra", _money(details.mao_obra))
    totals.add_row("Outros", _money(details.outros))
    totals.add_row("Custo total", _money(result.custo_total))
    totals.add_row("Custo por unidade", _money(result.custo_por_unidade))
    totals.add_row("Preço sugerido", _money(result.preco_venda_sugerido))
    console.print(totals)


@app.command()
def recalcular(
    incluir_inativas: bool = typer.Option(False, "--all", help="Also refresh inactive sheets"),
):
    """Refresh every recipe sheet from current ingredient and mix prices."""
    table = Table(title="Fichas recalculadas")
    table.add_column("Ficha", style="cyan")
    table.add_column("Antes", justify="right")
    table.add_column("Depois", justify="right", style="green")

    failures = 0
    with SessionLocal() as db:
        query = select(RecipeSheet.id, RecipeSheet.nome_receita, RecipeSheet.custo_total)
        if not incluir_inativas:
            query = query.where(RecipeSheet.is_active.is_(True))
        rows = db.execute(query.order_by(RecipeSheet.nome_receita)).all()

        service = RecipeSheetService(db)
        for sheet_id, nome, before in rows:
            try:
                after = service.recalculate(sheet_id, user_id=None, user_email=None).custo_total
            except AppException as e:
                failures += 1
                table.add_row(nome, _money(before), f"[red]{e.detail}[/red]")
                continue
            table.add_row(nome, _money(before), _money(after))

    console.print(table)
    if failures:
        console.print(f"[yellow]{failures} ficha(s) não recalculada(s)[/yellow]")
        raise typer.Exit(1)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8000", help="API base URL"),
):
    """Check API and database health."""
    table = Table(title="Service Health")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    healthy = True
    with httpx.Client(base_url=url, timeout=5.0) as client:
        for name, path in (("REST API", "/api/health"), ("Database", "/api/health/detailed")):
            try:
                response = client.get(path)
            except httpx.HTTPError as e:
                healthy = False
                table.add_row(name, f"✗ {type(e).__name__}", "-")
                continue
            elapsed = response.elapsed.total_seconds() * 1000
            if response.status_code == 200:
                table.add_row(name, "✓ Healthy", f"{elapsed:.0f}ms")
            else:
                healthy = False
                table.add_row(name, f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")

    console.print(table)
    if not healthy:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Ficha Técnica Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", API_VERSION)
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
