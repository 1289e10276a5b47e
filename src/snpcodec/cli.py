import typer
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from pydantic import ValidationError

from snpcodec.config import WriterCfg, load_config
from snpcodec.errors import TouchstoneError
from snpcodec.io.touchstone import load_touchstone, save_touchstone, to_dataframe
from snpcodec.logging_setup import setup_logging
from snpcodec.rf.formats import mag_phase

app = typer.Typer(help="Lectura / escritura de archivos Touchstone (.sNp)")
console = Console()


@app.callback()
def _main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING ..."),
):
    # --log-level manda sobre logging.level del YAML (ver convert)
    ctx.obj = {"log_level": log_level}
    setup_logging(log_level)


def _load(path: Path, ports: Optional[int]):
    if not path.exists():
        typer.echo(f"❌ El archivo {path} no existe.")
        raise typer.Exit(code=1)
    try:
        return load_touchstone(path, ports)
    except TouchstoneError as e:
        typer.echo(f"❌ {path.name}: {e}")
        raise typer.Exit(code=2)


@app.command()
def info(
    path: Path = typer.Argument(..., help="Archivo .sNp"),
    ports: Optional[int] = typer.Option(None, help="Número de puertos (por defecto, según la extensión)"),
):
    """
    Muestra un resumen del archivo: cabecera, puntos de frecuencia y |diagonal|.
    """
    ts = _load(path, ports)
    f = ts.frequency

    table = Table(title=f"📡 {path.name}", show_header=False, header_style="bold magenta", padding=(0, 1))
    table.add_row("Puertos", str(ts.nports))
    table.add_row("Parámetro", ts.parameter)
    table.add_row("Formato", ts.format)
    table.add_row("Resistencia", str(ts.resistance))
    table.add_row("Puntos", str(len(f)))
    table.add_row("Rango", f"{f.start:g} – {f.stop:g} {f.unit}")
    table.add_row("Comentarios", str(len(ts.comments)))
    for i in range(1, ts.nports + 1):
        mag, _ = mag_phase(ts.element(i, i))
        table.add_row(f"max |{ts.parameter}{i}{i}|", f"{mag.max():.4g}")

    console.print(table)


@app.command()
def convert(
    ctx: typer.Context,
    src: Path = typer.Argument(..., help="Archivo .sNp de entrada"),
    dst: Path = typer.Argument(..., help="Archivo .sNp de salida"),
    cfg: Optional[Path] = typer.Option(None, help="Archivo de configuración YAML"),
    format: Optional[str] = typer.Option(None, "--format", help="RI, MA o DB"),
    unit: Optional[str] = typer.Option(None, "--unit", help="Hz, kHz, MHz o GHz"),
    ports: Optional[int] = typer.Option(None, help="Número de puertos (por defecto, según la extensión)"),
):
    """
    Reescribe el archivo en otro formato numérico y/o unidad de frecuencia.
    """
    cfg_obj = load_config(cfg)
    if not (ctx.obj or {}).get("log_level"):
        setup_logging(cfg_obj.logging.level)

    overrides = {k: v for k, v in {"format": format, "unit": unit}.items() if v is not None}
    try:
        writer = WriterCfg.model_validate({**cfg_obj.writer.model_dump(), **overrides})
    except ValidationError as e:
        typer.echo(f"❌ Opciones de escritura inválidas: {e}")
        raise typer.Exit(code=2)

    ts = _load(src, ports)
    try:
        out = save_touchstone(ts, dst, writer)
    except TouchstoneError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=2)

    typer.echo(f"💾 Guardado en: {out}")


@app.command()
def export(
    src: Path = typer.Argument(..., help="Archivo .sNp de entrada"),
    out: Optional[Path] = typer.Option(None, help="CSV de salida (por defecto, junto al archivo)"),
    format: Optional[str] = typer.Option(None, "--format", help="RI, MA o DB"),
    ports: Optional[int] = typer.Option(None, help="Número de puertos"),
):
    """
    Exporta los datos a CSV, dos columnas por elemento de la matriz.
    """
    ts = _load(src, ports)
    try:
        df = to_dataframe(ts, format)
    except TouchstoneError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=2)

    csv_path = out or src.with_suffix(".csv")
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(csv_path, index=False)
    typer.echo(f"💾 Resultados guardados en: {csv_path}")


if __name__ == "__main__":
    app()
