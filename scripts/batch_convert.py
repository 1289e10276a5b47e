# scripts/batch_convert.py
from pathlib import Path
import typer

from rich.console import Console
from rich.table import Table

from snpcodec.config import load_config
from snpcodec.errors import TouchstoneError
from snpcodec.io.touchstone import load_touchstone, save_touchstone
from snpcodec.logging_setup import setup_logging

app = typer.Typer()

@app.command()
def main(
    data_dir: Path = typer.Argument(Path("data/raw")),
    out_dir: Path = typer.Option(Path("data/converted")),
    cfg_path: Path = typer.Option(Path("config/base.yaml")),
    recursive: bool = typer.Option(False),
):
    console = Console()
    cfg = load_config(cfg_path if cfg_path.exists() else None)
    setup_logging(cfg.logging.level)

    pattern = "*.s*p"
    files = sorted(data_dir.rglob(pattern) if recursive else data_dir.glob(pattern))
    if not files:
        console.print(f"[red]No hay archivos .sNp en {data_dir}[/red]")
        return

    console.print(f"[cyan]Convirtiendo {len(files)} archivos desde {data_dir} ...[/cyan]")

    table = Table(title="📊 Resumen de conversión", header_style="bold magenta")
    for col in ("file", "ports", "points", "format", "status"):
        table.add_column(col)

    for fpath in files:
        try:
            ts = load_touchstone(fpath)
            dst = out_dir / fpath.relative_to(data_dir)
            save_touchstone(ts, dst, cfg.writer)
            fmt = cfg.writer.format or ts.format
            table.add_row(fpath.name, str(ts.nports), str(len(ts.frequency)), fmt, "✅")
        except TouchstoneError as e:
            table.add_row(fpath.name, "-", "-", "-", f"[red]❌ {e}[/red]")

    console.print()
    console.print(table)
    console.print(f"\n📁 Archivos guardados en: [cyan]{out_dir}[/cyan]")

if __name__ == "__main__":
    app()
