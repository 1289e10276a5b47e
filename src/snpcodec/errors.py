
class TouchstoneError(ValueError):
    """Error base del códec Touchstone; el mensaje es el diagnóstico literal."""


class TouchstoneConfigError(TouchstoneError):
    """Asignación inválida a un campo del documento."""


class TouchstoneParseError(TouchstoneError):
    """Fallo al consumir el texto de un archivo .sNp."""


def describe(value) -> str:
    """Convierte el valor ofensivo en texto para el diagnóstico.

    Las secuencias se unen con ',' (una vacía da ''); el resto usa str().
    """
    if isinstance(value, (list, tuple)):
        return ",".join(describe(v) for v in value)
    if hasattr(value, "tolist") and getattr(value, "ndim", 0) > 0:
        return describe(value.tolist())
    return str(value)
