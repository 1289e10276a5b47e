
from dataclasses import dataclass, field
import numpy as np

from snpcodec.errors import TouchstoneConfigError

# Factores de escala a Hz de las unidades admitidas por Touchstone 1.x
FREQ_UNITS = {
    "Hz": 1.0,
    "kHz": 1e3,
    "MHz": 1e6,
    "GHz": 1e9,
}

_LOOKUP = {k.lower(): k for k in FREQ_UNITS}


def normalize_unit(token: str) -> str | None:
    """Devuelve la unidad canónica ('Hz', 'kHz', ...) o None si no es una unidad."""
    if not isinstance(token, str):
        return None
    return _LOOKUP.get(token.lower())


@dataclass
class Frequency:
    """
    Puntos de frecuencia de un documento: unidad + valores en esa unidad.
    Los valores se guardan tal cual aparecen en el archivo (sin reescalar).
    """
    unit: str = "GHz"
    value: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __post_init__(self):
        unit = normalize_unit(self.unit)
        if unit is None:
            raise TouchstoneConfigError(f"Unknown frequency unit: {self.unit}")
        self.unit = unit
        self.value = np.asarray(self.value, dtype=float).reshape(-1)

    def __len__(self) -> int:
        return self.value.shape[0]

    @property
    def multiplier(self) -> float:
        return FREQ_UNITS[self.unit]

    @property
    def f_hz(self) -> np.ndarray:
        return self.value * self.multiplier

    @property
    def start(self) -> float:
        return float(self.value[0]) if len(self) else float("nan")

    @property
    def stop(self) -> float:
        return float(self.value[-1]) if len(self) else float("nan")

    def to_unit(self, unit: str) -> "Frequency":
        target = normalize_unit(unit)
        if target is None:
            raise TouchstoneConfigError(f"Unknown frequency unit: {unit}")
        return Frequency(target, self.f_hz / FREQ_UNITS[target])

    def copy(self) -> "Frequency":
        return Frequency(self.unit, self.value.copy())
