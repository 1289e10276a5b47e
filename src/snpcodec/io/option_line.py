
import logging
import math
from dataclasses import dataclass
from numbers import Real

from snpcodec.errors import TouchstoneConfigError, TouchstoneParseError, describe
from snpcodec.io.frames import strip_comment
from snpcodec.rf.formats import normalize_format
from snpcodec.rf.frequency import normalize_unit

log = logging.getLogger(__name__)

# Tipos de parámetros de red: S, Y, Z, G (híbridos g) y H (híbridos h)
PARAMETERS = ("S", "Y", "Z", "G", "H")

DEFAULT_UNIT = "GHz"
DEFAULT_PARAMETER = "S"
DEFAULT_FORMAT = "MA"
DEFAULT_RESISTANCE = 50.0


def normalize_parameter(token) -> str | None:
    if not isinstance(token, str):
        return None
    p = token.upper()
    return p if p in PARAMETERS else None


def _is_finite_real(x) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool) and math.isfinite(x)


def validate_resistance(value):
    """
    Valida una resistencia de referencia asignada a mano.

    Formas válidas: un número finito (todos los puertos) o una secuencia no
    vacía de números finitos (uno por puerto). Devuelve float o list[float].
    """
    if _is_finite_real(value):
        return float(value)
    items = value.tolist() if hasattr(value, "tolist") and getattr(value, "ndim", 0) == 1 else value
    if isinstance(items, (list, tuple)) and items and all(_is_finite_real(v) for v in items):
        return [float(v) for v in items]
    raise TouchstoneConfigError(f"Unknown Touchstone impedance: {describe(value)}")


def format_real(x: float) -> str:
    return f"{x:.12g}"


@dataclass
class OptionLine:
    """Contenido de la línea '# <unidad> <parámetro> <formato> R <r...>'."""
    unit: str = DEFAULT_UNIT
    parameter: str = DEFAULT_PARAMETER
    format: str = DEFAULT_FORMAT
    resistance: float | list[float] = DEFAULT_RESISTANCE

    def to_text(self) -> str:
        if isinstance(self.resistance, list):
            r = " ".join(format_real(v) for v in self.resistance)
        else:
            r = format_real(self.resistance)
        return f"# {self.unit} {self.parameter} {self.format} R {r}"


def find_option_line(lines: list[str]) -> str:
    """Localiza la única línea de opciones; cero o varias es un error."""
    options = [line for line in lines if line.startswith("#")]
    if not options:
        raise TouchstoneParseError('Unable to find the option line starting with "#"')
    if len(options) > 1:
        raise TouchstoneParseError(
            f'Only one option line starting with "#" is supported, but found {len(options)} lines'
        )
    return options[0]


def parse_resistance(tokens: list[str]) -> float | list[float]:
    """
    Convierte los tokens 'R v1 [v2 ...]' en resistencia.

    Si algo no encaja se informa el resto completo de la línea, no solo
    el primer token erróneo.
    """
    err = TouchstoneParseError(f"Uknown Touchstone impedance: {' '.join(tokens)}")
    if len(tokens) < 2 or tokens[0].upper() != "R":
        raise err
    values = []
    for tok in tokens[1:]:
        try:
            v = float(tok)
        except ValueError:
            raise err from None
        if not math.isfinite(v):
            raise err
        values.append(v)
    return values[0] if len(values) == 1 else values


def parse_option_line(line: str) -> OptionLine:
    """
    Analiza la línea de opciones en orden fijo de gramática:
    unidad, parámetro, formato y cláusula R, todos opcionales.
    """
    tokens = strip_comment(line).strip()[1:].split()
    opt = OptionLine()

    # ================== CAMPOS POSICIONALES ==================
    pos = 0
    if pos < len(tokens) and normalize_unit(tokens[pos]):
        opt.unit = normalize_unit(tokens[pos])
        pos += 1
    if pos < len(tokens) and normalize_parameter(tokens[pos]):
        opt.parameter = normalize_parameter(tokens[pos])
        pos += 1
    if pos < len(tokens) and normalize_format(tokens[pos]):
        opt.format = normalize_format(tokens[pos])
        pos += 1

    # ================== RESISTENCIA ==================
    rest = tokens[pos:]
    if rest:
        opt.resistance = parse_resistance(rest)

    log.debug("Línea de opciones: %s", opt)
    return opt
