
import numpy as np
import pytest
from snpcodec.rf.formats import FORMATS, complex_to_pair, normalize_format, pair_to_complex

def test_pair_to_complex_known_values():
    assert pair_to_complex(0.5, -0.25, "RI") == pytest.approx(0.5 - 0.25j)
    assert pair_to_complex(2.0, 90.0, "MA") == pytest.approx(2j)
    # 20 dB → |z| = 10
    assert pair_to_complex(20.0, 180.0, "DB") == pytest.approx(-10)

def test_complex_to_pair_known_values():
    a, b = complex_to_pair(-1j, "MA")
    assert (a, b) == pytest.approx((1.0, -90.0))
    a, b = complex_to_pair(0.1 + 0j, "DB")
    assert (a, b) == pytest.approx((-20.0, 0.0))
    a, b = complex_to_pair(3 - 4j, "RI")
    assert (a, b) == pytest.approx((3.0, -4.0))

@pytest.mark.parametrize("fmt", FORMATS)
def test_format_roundtrip(fmt):
    rng = np.random.default_rng(7)
    z = rng.normal(size=(3, 3, 11)) + 1j * rng.normal(size=(3, 3, 11))
    a, b = complex_to_pair(z, fmt)
    assert np.allclose(pair_to_complex(a, b, fmt), z, atol=1e-12)

def test_db_zero_magnitude():
    a, b = complex_to_pair(np.array([0j]), "DB")
    assert np.isneginf(a[0])
    # -inf dB vuelve a magnitud 0
    assert pair_to_complex(a, b, "DB")[0] == 0

def test_normalize_format():
    assert normalize_format("ma") == "MA"
    assert normalize_format("xx") is None
    assert normalize_format(0) is None
