
import numpy as np

from snpcodec.errors import TouchstoneParseError
from snpcodec.rf.formats import complex_to_pair, pair_to_complex

# Máximo de pares (a, b) por línea al escribir redes de 3 o más puertos
PAIRS_PER_LINE = 4


def strip_comment(line: str) -> str:
    """Quita la anotación '!' al final de una línea de datos."""
    return line.split("!", 1)[0]


def tokenize(lines: list[str]) -> np.ndarray:
    """
    Aplana todas las líneas de datos en un único flujo de números.
    Los saltos de línea físicos no tienen significado.
    """
    tokens = [tok for line in lines for tok in strip_comment(line).split()]
    values = np.empty(len(tokens), dtype=float)
    for k, tok in enumerate(tokens):
        try:
            values[k] = float(tok)
        except ValueError:
            raise TouchstoneParseError(f"Touchstone invalid data value: {tok}") from None
    return values


def frame_size(nports: int) -> int:
    # frecuencia + un par por cada combinación de puertos
    return 1 + 2 * nports ** 2


def split_frames(tokens: np.ndarray, nports: int) -> np.ndarray:
    """Corta el flujo en tramas (F, frame_size); una trama por frecuencia."""
    size = frame_size(nports)
    count = len(tokens)
    if count == 0 or count % size:
        raise TouchstoneParseError(
            f"Touchstone invalid data number: {count}, which should be multiple of {size}"
        )
    return np.asarray(tokens, dtype=float).reshape(-1, size)


def pair_order(nports: int) -> list[tuple[int, int]]:
    """
    Coordenadas (salida, entrada), base 0, de cada par dentro de la trama.

    2 puertos: orden por columnas 11 21 12 22 (excepción histórica).
    Resto: orden por filas 11 12 ... 1N 21 ... NN.
    """
    if nports == 2:
        return [(0, 0), (1, 0), (0, 1), (1, 1)]
    return [(i, j) for i in range(nports) for j in range(nports)]


def frames_to_matrix(values: np.ndarray, nports: int, fmt: str) -> np.ndarray:
    """
    values: (F, 2·N²) sin la columna de frecuencia.
    Devuelve la matriz [salida][entrada][frecuencia] de complejos.
    """
    values = np.asarray(values, dtype=float)
    z = pair_to_complex(values[:, 0::2], values[:, 1::2], fmt)  # (F, N²)
    matrix = np.empty((nports, nports, values.shape[0]), dtype=complex)
    for k, (i, j) in enumerate(pair_order(nports)):
        matrix[i, j, :] = z[:, k]
    return matrix


def matrix_to_lines(
    freq: np.ndarray,
    matrix: np.ndarray,
    fmt: str,
    frequency_spec: str = "{:.12g}",
    value_spec: str = "{:.9g}",
) -> list[str]:
    """
    Genera las líneas del bloque de datos.

    1 y 2 puertos: una línea por frecuencia. 3 o más: una fila de la
    matriz por línea, partida cada PAIRS_PER_LINE pares, con sangría en
    las líneas de continuación.
    """
    nports = matrix.shape[0]
    a, b = complex_to_pair(matrix, fmt)
    freq_txt = [frequency_spec.format(f) for f in freq]
    indent = " " * max(len(t) for t in freq_txt) if freq_txt else ""

    def pair(i, j, k):
        return f"{value_spec.format(a[i, j, k])} {value_spec.format(b[i, j, k])}"

    lines = []
    for k, f_txt in enumerate(freq_txt):
        if nports <= 2:
            lines.append(" ".join([f_txt] + [pair(i, j, k) for i, j in pair_order(nports)]))
            continue
        first = True
        for i in range(nports):
            for start in range(0, nports, PAIRS_PER_LINE):
                chunk = [pair(i, j, k) for j in range(start, min(start + PAIRS_PER_LINE, nports))]
                head = f_txt.ljust(len(indent)) if first else indent
                lines.append(head + " " + " ".join(chunk))
                first = False
    return lines
