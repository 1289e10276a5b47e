import logging
from numbers import Integral, Real

import numpy as np

from snpcodec.errors import TouchstoneConfigError, TouchstoneError, describe
from snpcodec.io.frames import frames_to_matrix, matrix_to_lines, split_frames, tokenize
from snpcodec.io.option_line import (
    DEFAULT_FORMAT,
    DEFAULT_PARAMETER,
    DEFAULT_RESISTANCE,
    OptionLine,
    find_option_line,
    normalize_parameter,
    parse_option_line,
    validate_resistance,
)
from snpcodec.rf.formats import normalize_format
from snpcodec.rf.frequency import Frequency

log = logging.getLogger(__name__)


class Touchstone:
    """
    Documento Touchstone 1.0/1.1 (.sNp): lectura y escritura.

    Estado:
        • comments   : list[str]               – líneas '!' en orden de aparición
        • format     : 'RI' | 'MA' | 'DB' | None
        • parameter  : 'S' | 'Y' | 'Z' | 'G' | 'H' | None
        • resistance : float | list[float]     – 50 por defecto
        • nports     : int | None
        • frequency  : Frequency | None
        • matrix     : np.ndarray (N, N, F) complejo, [salida][entrada][frecuencia]

    Los campos se validan en cada asignación; un valor inválido lanza
    TouchstoneConfigError y deja el estado anterior intacto.
    """

    def __init__(self):
        self.comments: list[str] = []
        self._format: str | None = None
        self._parameter: str | None = None
        self._resistance: float | list[float] = DEFAULT_RESISTANCE
        self._nports: int | None = None
        self._frequency: Frequency | None = None
        self._matrix: np.ndarray | None = None

    # ------------------------------------------------------- propiedades
    @property
    def format(self) -> str | None:
        return self._format

    @format.setter
    def format(self, value):
        if value is None:
            self._format = None
            return
        fmt = normalize_format(value)
        if fmt is None:
            raise TouchstoneConfigError(f"Unknown Touchstone format: {describe(value)}")
        self._format = fmt

    @property
    def parameter(self) -> str | None:
        return self._parameter

    @parameter.setter
    def parameter(self, value):
        if value is None:
            self._parameter = None
            return
        p = normalize_parameter(value)
        if p is None:
            # 'paramter' se mantiene: hay herramientas que comparan este texto
            raise TouchstoneConfigError(f"Unknown Touchstone paramter: {describe(value)}")
        self._parameter = p

    @property
    def resistance(self) -> float | list[float]:
        # copia: modificar la lista devuelta no debe saltarse la validación
        r = self._resistance
        return list(r) if isinstance(r, list) else r

    @resistance.setter
    def resistance(self, value):
        # a diferencia de format/parameter, None no limpia el campo
        self._resistance = validate_resistance(value)

    impedance = resistance

    @property
    def nports(self) -> int | None:
        return self._nports

    @nports.setter
    def nports(self, value):
        if value is None:
            self._nports = None
            return
        ok = (
            isinstance(value, Real)
            and not isinstance(value, bool)
            and (isinstance(value, Integral) or float(value).is_integer())
            and value > 0
        )
        if not ok:
            raise TouchstoneConfigError(f"Unknown ports number: {describe(value)}")
        self._nports = int(value)

    @property
    def frequency(self) -> Frequency | None:
        return self._frequency.copy() if self._frequency is not None else None

    @property
    def matrix(self) -> np.ndarray | None:
        return self._matrix

    # ------------------------------------------------------- datos
    def _check_resistance_ports(self):
        r = self._resistance
        if isinstance(r, list) and len(r) != self._nports:
            raise TouchstoneError(
                f"Touchstone invalid impedance number: {len(r)}, which should be {self._nports}"
            )

    def set_data(self, frequency: Frequency, matrix) -> None:
        """
        Asocia frecuencias y matriz (N, N, F). Requiere nports ya definido.
        Una matriz mal dimensionada es un error de programación (ValueError).
        """
        if self._nports is None:
            raise ValueError("nports must be set before binding the matrix")
        matrix = np.asarray(matrix, dtype=complex)
        expected = (self._nports, self._nports, len(frequency))
        if matrix.shape != expected:
            raise ValueError(f"matrix shape {matrix.shape} does not match {expected}")
        self._check_resistance_ports()
        self._frequency = frequency
        self._matrix = matrix

    @classmethod
    def from_matrix(
        cls,
        frequency: Frequency,
        matrix,
        format: str = DEFAULT_FORMAT,
        parameter: str = DEFAULT_PARAMETER,
        resistance=DEFAULT_RESISTANCE,
        comments=None,
    ) -> "Touchstone":
        ts = cls()
        ts.comments = list(comments or [])
        ts.format = format
        ts.parameter = parameter
        ts.resistance = resistance
        ts.nports = np.shape(matrix)[0]
        ts.set_data(frequency, matrix)
        return ts

    def element(self, out_port: int, in_port: int) -> np.ndarray:
        """Traza del elemento (salida, entrada) con índices base 1, p.ej. (2, 1) → S21."""
        if self._matrix is None:
            raise TouchstoneError("Touchstone has no data")
        if not (1 <= out_port <= self._nports and 1 <= in_port <= self._nports):
            raise IndexError(f"Port pair ({out_port}, {in_port}) out of range for {self._nports} ports")
        return self._matrix[out_port - 1, in_port - 1, :]

    def copy(self) -> "Touchstone":
        ts = Touchstone()
        ts.comments = list(self.comments)
        ts._format = self._format
        ts._parameter = self._parameter
        r = self._resistance
        ts._resistance = list(r) if isinstance(r, list) else r
        ts._nports = self._nports
        ts._frequency = self._frequency.copy() if self._frequency is not None else None
        ts._matrix = self._matrix.copy() if self._matrix is not None else None
        return ts

    # ------------------------------------------------------- lectura
    def read_text(self, text: str, nports) -> "Touchstone":
        """
        Rellena el documento a partir del texto de un archivo .sNp.

        Los campos de cabecera se fijan antes de validar el bloque de datos:
        si éste falla, el documento queda parcialmente poblado para
        facilitar el diagnóstico.
        """
        comments, header, data = [], [], []
        for raw in text.splitlines():
            line = raw.strip()
            if not line:
                continue
            if line.startswith("!"):
                comments.append(line[1:].strip())
            elif line.startswith("#"):
                header.append(line)
            else:
                data.append(line)

        # ================== CABECERA ==================
        self.comments = comments
        opt = parse_option_line(find_option_line(header))
        self.parameter = opt.parameter
        self.format = opt.format
        self.resistance = opt.resistance
        self._frequency = Frequency(opt.unit)
        self._matrix = None
        self.nports = nports
        if self._nports is None:
            raise TouchstoneConfigError(f"Unknown ports number: {describe(nports)}")

        # ================== DATOS ==================
        frames = split_frames(tokenize(data), self._nports)
        matrix = frames_to_matrix(frames[:, 1:], self._nports, self._format)
        self.set_data(Frequency(opt.unit, frames[:, 0]), matrix)
        log.debug(
            "Touchstone leído: %d puertos, %d puntos (%s %s)",
            self._nports, len(self._frequency), self._parameter, self._format,
        )
        return self

    parse = read_text

    # ------------------------------------------------------- escritura
    def option_line(self) -> OptionLine:
        unit = self._frequency.unit if self._frequency is not None else "GHz"
        return OptionLine(
            unit=unit,
            parameter=self._parameter or DEFAULT_PARAMETER,
            format=self._format or DEFAULT_FORMAT,
            resistance=self.resistance,
        )

    def to_text(
        self,
        format: str | None = None,
        unit: str | None = None,
        frequency_spec: str = "{:.12g}",
        value_spec: str = "{:.9g}",
        write_comments: bool = True,
    ) -> str:
        """
        Serializa el documento. `format` y `unit` permiten reexpresar los
        mismos datos en otra representación; el documento no se modifica.
        """
        if self._nports is None or self._matrix is None:
            raise TouchstoneError("Touchstone has no data to serialize")
        self._check_resistance_ports()

        opt = self.option_line()
        if format is not None:
            fmt = normalize_format(format)
            if fmt is None:
                raise TouchstoneConfigError(f"Unknown Touchstone format: {describe(format)}")
            opt.format = fmt
        freq = self._frequency if unit is None else self._frequency.to_unit(unit)
        opt.unit = freq.unit

        out = []
        if write_comments:
            out += [f"! {c}" if c else "!" for c in self.comments]
        out.append(opt.to_text())
        out += matrix_to_lines(freq.value, self._matrix, opt.format, frequency_spec, value_spec)
        return "\n".join(out) + "\n"

    serialize = to_text

    def __repr__(self) -> str:
        n_freq = len(self._frequency) if self._frequency is not None else 0
        unit = self._frequency.unit if self._frequency is not None else "—"
        return (
            f"<Touchstone {self._nports or '?'}-port · {n_freq}pts · "
            f"{self._parameter or '?'} {self._format or '?'} · unit={unit}>"
        )


def parse(text: str, nports) -> Touchstone:
    """Analiza `text` en un documento nuevo e independiente."""
    return Touchstone().read_text(text, nports)


def serialize(doc: Touchstone, **kwargs) -> str:
    return doc.to_text(**kwargs)
