from __future__ import annotations
from typing import List, TextIO, Tuple


def read_points(stream: TextIO) -> List[Tuple[float, float]]:
    """
    Читає точки «x y» з текстового потоку. Числа розділені будь-якими
    пробілами (пара може переноситись на наступний рядок), `#` — коментар.
    """
    values: List[float] = []
    for lineno, line in enumerate(stream, start=1):
        for tok in line.split("#", 1)[0].split():
            try:
                values.append(float(tok))
            except ValueError:
                raise ValueError(f"line {lineno}: not a number: {tok!r}") from None
    if len(values) % 2:
        raise ValueError(f"odd number of coordinates ({len(values)}): last point has no y")
    return [(values[i], values[i + 1]) for i in range(0, len(values), 2)]


def load_points(path: str) -> List[Tuple[float, float]]:
    with open(path, "r", encoding="utf-8") as f:
        return read_points(f)
