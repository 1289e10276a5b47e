#tests/conftest.py
"""
Fixtures comunes: redes sintéticas de scikit-rf escritas a disco.
"""

from pathlib import Path

import numpy as np
import pytest
import skrf as rf


def make_network(nports: int, npoints: int = 5, seed: int = 0) -> rf.Network:
    rng = np.random.default_rng(seed)
    freq = rf.Frequency(1, 3, npoints, unit="GHz")
    s = 0.3 * (rng.normal(size=(npoints, nports, nports)) + 1j * rng.normal(size=(npoints, nports, nports)))
    return rf.Network(frequency=freq, s=s, z0=50, name=f"dut{nports}")


@pytest.fixture()
def snp_file(tmp_path: Path):
    """Devuelve una función que escribe un .sNp con scikit-rf y retorna (ruta, red)."""
    def _write(nports: int, form: str = "ri"):
        ntw = make_network(nports)
        p = tmp_path / f"dut{nports}.s{nports}p"
        ntw.write_touchstone(str(p.with_suffix("")), form=form)
        return p, ntw
    return _write
