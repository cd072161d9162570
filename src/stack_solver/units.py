CM = float
KG = float


def parse_float(value: str) -> float:
    text = value.strip()
    if not text:
        raise ValueError("empty input")
    text = text.replace(",", ".")
    return float(text)


def format_dimension(value: float) -> str:
    """Print ``40.0`` as ``40`` and ``40.5`` as ``40.5``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
