from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Hashable, List, Tuple

import numpy as np
import structlog

from .geom import Pt, Offset, domain_extent
from .periodic import TriangulationProvider

logger = structlog.get_logger()

Cell = Tuple[int, int, int]


@dataclass(frozen=True)
class Mesh:
    """
    Дискретна трикутна сітка:
      points — унікальні точки (z = 0) у порядку призначення ID;
      cells  — трійки індексів у points, порядок вершин як у грані-джерелі.
    """
    points: Tuple[Pt, ...] = ()
    cells: Tuple[Cell, ...] = ()

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_cells(self) -> int:
        return len(self.cells)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """(N, 3) float64 координати і (M, 3) int64 індекси."""
        pts = np.array([(p.x, p.y, p.z) for p in self.points], dtype=np.float64).reshape(-1, 3)
        cells = np.array(self.cells, dtype=np.int64).reshape(-1, 3)
        return pts, cells


def extract(tri: TriangulationProvider, domain=None) -> Mesh:
    """
    Перетворює періодичну тріангуляцію на сітку без дублікатів.

    Кожна вершина грані ідентифікується парою (вершина, зсув); ID видаються
    в порядку першої появи при обході finite_faces() і локальних індексів 0,1,2.
    Точка копії = базова точка + (offset.x * width, offset.y * height).

    domain за замовчуванням — tri.domain. Некоректний домен -> InvalidDomainError
    ще до обходу граней.
    """
    dom = tri.domain if domain is None else domain
    width, height = domain_extent(dom)

    ids: Dict[Tuple[Hashable, Offset], int] = {}
    points: List[Pt] = []
    cells: List[Cell] = []

    for face in tri.finite_faces():
        tri_ids = []
        for i in range(3):
            v = tri.vertex(face, i)
            off = tri.offset(face, i)
            vid = ids.get((v, off))
            if vid is None:
                base = tri.point(v)
                vid = len(points)
                ids[(v, off)] = vid
                points.append(Pt(base.x + off.x * width, base.y + off.y * height, 0.0))
                logger.debug("Mesh point", id=vid, x=points[vid].x, y=points[vid].y)
            tri_ids.append(vid)
        cells.append((tri_ids[0], tri_ids[1], tri_ids[2]))

    logger.info("Mesh extracted", points=len(points), cells=len(cells))
    return Mesh(tuple(points), tuple(cells))


triangulation_to_mesh = extract
