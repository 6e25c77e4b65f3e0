import math

MM = float
KG = float

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


def parse_float(value) -> float:
    if isinstance(value, bool):
        raise ValueError("boolean is not a dimension")
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip()
        if not text:
            raise ValueError("empty input")
        result = float(text.replace(",", "."))
    if not math.isfinite(result):
        raise ValueError(f"not a finite number: {value!r}")
    return result


def parse_bool(value) -> bool:
    """Interpret request flags such as ``"true"``, ``1`` or ``"0"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def format_float(value: float, ndigits: int = 2) -> str:
    return f"{value:.{ndigits}f}"
