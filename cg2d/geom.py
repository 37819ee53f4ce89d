from __future__ import annotations
from dataclasses import dataclass
from math import isfinite
from typing import Iterable, Optional, Tuple

EPS = 1e-10  # обережний епс для перевірок


class InvalidDomainError(ValueError):
    """Період домену має нульову/від'ємну або нескінченну ширину чи висоту."""


@dataclass(frozen=True)
class Pt:
    x: float
    y: float
    z: float = 0.0
    def __iter__(self):
        yield self.x; yield self.y; yield self.z


@dataclass(frozen=True, order=True)
class Offset:
    """
    Періодичний зсув копії вершини: на скільки періодів домену (по x та y)
    вона зміщена відносно базового представника. Лише цілі числа — тому
    Offset безпечно використовувати як частину ключа словника.
    """
    x: int = 0
    y: int = 0

    def __add__(self, other: Offset) -> Offset:
        return Offset(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Offset) -> Offset:
        return Offset(self.x - other.x, self.y - other.y)


def domain_extent(domain) -> Tuple[float, float]:
    """(width, height) будь-якого об'єкта з xmin/xmax/ymin/ymax; кидає InvalidDomainError."""
    width = domain.xmax - domain.xmin
    height = domain.ymax - domain.ymin
    if not (isfinite(width) and isfinite(height)) or width <= 0 or height <= 0:
        raise InvalidDomainError(
            f"invalid periodic domain [{domain.xmin}, {domain.xmax}] x [{domain.ymin}, {domain.ymax}]"
        )
    return width, height


@dataclass(frozen=True)
class Domain:
    """Фундаментальна комірка періодичного домену [xmin, xmax) x [ymin, ymax)."""
    xmin: float = 0.0
    xmax: float = 1.0
    ymin: float = 0.0
    ymax: float = 1.0

    def __post_init__(self):
        domain_extent(self)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def contains(self, x: float, y: float) -> bool:
        return self.xmin <= x < self.xmax and self.ymin <= y < self.ymax

    def translate(self, p: Pt, offset: Offset) -> Pt:
        # z завжди 0: сітка двовимірна
        return Pt(p.x + offset.x * self.width, p.y + offset.y * self.height, 0.0)


def sub(a: Pt, b: Pt) -> Pt:
    return Pt(a.x - b.x, a.y - b.y, a.z - b.z)

def cross2(a: Pt, b: Pt) -> float:
    return a.x*b.y - a.y*b.x

def unique_points(points: Iterable[Tuple[float, float]], scale: float = 1e9,
                  domain: Optional[Domain] = None) -> list[Pt]:
    """
    Груба дедуплікація з квантуванням (стабільніше для float).
    `scale=1e9` ≈ EPS=1e-9 на координату. Порядок першої появи зберігається.
    З domain ключ береться за модулем періоду: x ≈ xmax збігається з x = xmin.
    """
    if domain is not None:
        px, py = int(round(domain.width*scale)), int(round(domain.height*scale))
    seen: dict[Tuple[int, int], Pt] = {}
    for x, y in points:
        if domain is None:
            key = (int(round(x*scale)), int(round(y*scale)))
        else:
            key = (int(round((x - domain.xmin)*scale)) % px, int(round((y - domain.ymin)*scale)) % py)
        if key not in seen:
            seen[key] = Pt(float(x), float(y))
    return list(seen.values())
