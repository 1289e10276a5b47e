
import numpy as np

# RI: A + jB | MA: A·e^{jB°} | DB: 10^(A/20)·e^{jB°}
FORMATS = ("RI", "MA", "DB")


def normalize_format(token) -> str | None:
    if not isinstance(token, str):
        return None
    fmt = token.upper()
    return fmt if fmt in FORMATS else None


def pair_to_complex(a, b, fmt: str) -> np.ndarray:
    """
    Convierte pares (a, b) leídos del archivo en números complejos.

    Admite escalares o arrays de igual forma. El ángulo (MA/DB) está en grados.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    if fmt == "RI":
        return a + 1j * b
    if fmt == "MA":
        mag = a
    elif fmt == "DB":
        mag = 10 ** (a / 20)
    else:
        raise ValueError(f"Unknown Touchstone format: {fmt}")
    ang = np.deg2rad(b)
    return mag * (np.cos(ang) + 1j * np.sin(ang))


def complex_to_pair(z, fmt: str) -> tuple[np.ndarray, np.ndarray]:
    """Operación inversa: complejo → (a, b) según el formato."""
    z = np.asarray(z, dtype=complex)
    if fmt == "RI":
        return z.real, z.imag
    ang = np.angle(z, deg=True)
    if fmt == "MA":
        return np.abs(z), ang
    if fmt == "DB":
        # |z| = 0 → -inf dB, igual que log10(0)
        with np.errstate(divide="ignore"):
            return 20 * np.log10(np.abs(z)), ang
    raise ValueError(f"Unknown Touchstone format: {fmt}")


def mag_phase(s: np.ndarray):
    return np.abs(s), np.angle(s, deg=True)
