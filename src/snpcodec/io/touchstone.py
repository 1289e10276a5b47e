
import logging
import re
from pathlib import Path

import numpy as np
import pandas as pd
import skrf as rf

from snpcodec.config import WriterCfg
from snpcodec.errors import TouchstoneConfigError, TouchstoneError, describe
from snpcodec.model import Touchstone
from snpcodec.rf.formats import complex_to_pair, normalize_format
from snpcodec.rf.frequency import Frequency

log = logging.getLogger(__name__)

_EXT_RE = re.compile(r"\.s(\d+)p$", re.IGNORECASE)

_PAIR_LABELS = {"RI": ("re", "im"), "MA": ("mag", "ang"), "DB": ("db", "ang")}


def ports_from_path(path: Path) -> int:
    """Número de puertos a partir de la extensión .sNp (p.ej. .s2p → 2)."""
    m = _EXT_RE.search(Path(path).name)
    if not m or int(m.group(1)) < 1:
        raise TouchstoneError(f"Unable to infer ports number from file name: {Path(path).name}")
    return int(m.group(1))


def load_touchstone(path: Path, nports: int | None = None) -> Touchstone:
    path = Path(path)
    if nports is None:
        nports = ports_from_path(path)
    text = path.read_text(encoding="utf-8", errors="replace")
    log.debug("Leyendo %s (%d puertos)", path, nports)
    return Touchstone().read_text(text, nports)


def save_touchstone(ts: Touchstone, path: Path, cfg: WriterCfg | None = None) -> Path:
    cfg = cfg or WriterCfg()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = ts.to_text(
        format=cfg.format,
        unit=cfg.unit,
        frequency_spec=cfg.frequency_spec,
        value_spec=cfg.value_spec,
        write_comments=cfg.write_comments,
    )
    path.write_text(text, encoding="utf-8")
    log.debug("Escrito %s", path)
    return path


# ------------------------------------------------------- scikit-rf
def to_network(ts: Touchstone) -> rf.Network:
    """
    Documento S → skrf.Network. Y/Z/G/H no se convierten: sería cálculo
    eléctrico, no representación.
    """
    if ts.matrix is None:
        raise TouchstoneError("Touchstone has no data")
    if (ts.parameter or "S") != "S":
        raise TouchstoneError(f"Only S-parameters can be converted to a Network, got {ts.parameter}")
    freq = rf.Frequency.from_f(ts.frequency.value, unit=ts.frequency.unit)
    s = np.moveaxis(ts.matrix, 2, 0)  # (N,N,F) → (F,N,N)
    z0 = np.broadcast_to(np.asarray(ts.resistance, dtype=float), (len(freq), ts.nports)).copy()
    ntw = rf.Network(frequency=freq, s=s, z0=z0)
    ntw.comments = "\n".join(ts.comments)
    return ntw


def from_network(ntw: rf.Network, fmt: str = "RI") -> Touchstone:
    z0 = np.real(np.asarray(ntw.z0)).reshape(-1, ntw.number_of_ports)[0]
    resistance = float(z0[0]) if np.allclose(z0, z0[0]) else [float(v) for v in z0]
    comments = [c.strip() for c in (ntw.comments or "").splitlines() if c.strip()]
    unit = ntw.frequency.unit or "Hz"
    return Touchstone.from_matrix(
        Frequency(unit, ntw.frequency.f_scaled),
        np.moveaxis(ntw.s, 0, 2),
        format=fmt,
        parameter="S",
        resistance=resistance,
        comments=comments,
    )


# ------------------------------------------------------- pandas
def to_dataframe(ts: Touchstone, fmt: str | None = None) -> pd.DataFrame:
    """Tabla ancha: frecuencia + dos columnas por elemento (p.ej. S21_db, S21_ang)."""
    if ts.matrix is None:
        raise TouchstoneError("Touchstone has no data")
    raw = fmt or ts.format or "MA"
    fmt = normalize_format(raw)
    if fmt is None:
        raise TouchstoneConfigError(f"Unknown Touchstone format: {describe(raw)}")
    la, lb = _PAIR_LABELS[fmt]
    p = ts.parameter or "S"
    a, b = complex_to_pair(ts.matrix, fmt)

    cols = {f"f[{ts.frequency.unit}]": ts.frequency.value}
    for i in range(ts.nports):
        for j in range(ts.nports):
            cols[f"{p}{i + 1}{j + 1}_{la}"] = a[i, j, :]
            cols[f"{p}{i + 1}{j + 1}_{lb}"] = b[i, j, :]
    return pd.DataFrame(cols)
