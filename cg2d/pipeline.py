from __future__ import annotations
from typing import Iterable, List, Optional, Set, Tuple

import structlog

from .geom import Domain, Offset, Pt, unique_points
from .periodic import PeriodicTriangulation2

logger = structlog.get_logger()

# копії точок зі зсувами {-1,0,1,2}^2: канонічні грані (зсуви в {0,1}) лежать
# щонайменше на період від межі опуклої оболонки плитки
TILE_RANGE = range(-1, 3)

FaceKey = Tuple[Tuple[int, int, int], ...]


def _canonical_key(verts: List[Tuple[int, Offset]]) -> FaceKey:
    """Ключ грані, незалежний від порядку обходу вершин."""
    return tuple(sorted((v, o.x, o.y) for v, o in verts))


def periodic_delaunay(
    points: Iterable[Tuple[float, float]],
    domain: Optional[Domain] = None,
    backend: str = "scipy",
) -> PeriodicTriangulation2:
    """
    Періодична тріангуляція Делоне на торі, заданому domain:
      - перевіряє, що всі точки лежать у [xmin, xmax) x [ymin, ymax);
      - прибирає дублікати точок, зокрема ті, що збігаються лише через період;
      - тріангулює 16 копій множини точок через SciPy Delaunay (Qhull);
      - залишає кожну періодичну грань рівно один раз (копію з min зсувом (0, 0)).

    Повертає PeriodicTriangulation2 зі зшитими сусідами.
    """
    domain = domain if domain is not None else Domain()
    raw = list(points)
    for x, y in raw:
        if not domain.contains(x, y):
            raise ValueError(f"point ({x}, {y}) lies outside the periodic domain")
    pts: List[Pt] = unique_points(raw, domain=domain)

    tri = PeriodicTriangulation2(domain, pts)
    if not pts:
        return tri

    if backend.lower() != "scipy":
        raise ValueError(f"Unknown backend: {backend}")

    try:
        import numpy as np
        from scipy.spatial import Delaunay
    except ImportError as e:
        raise RuntimeError(
            "backend='scipy' requires SciPy; install scipy or use another backend."
        ) from e

    shifts = [Offset(i, j) for j in TILE_RANGE for i in TILE_RANGE]
    n = len(pts)
    arr = np.array(
        [(p.x + s.x * domain.width, p.y + s.y * domain.height) for s in shifts for p in pts],
        dtype=float,
    )
    # без QJ: джитер зсунув би копії по-різному і зламав періодичність
    dela = Delaunay(arr)

    seen: Set[FaceKey] = set()
    for simplex in dela.simplices:
        verts = [(int(k) % n, shifts[int(k) // n]) for k in simplex]
        if min(o.x for _, o in verts) != 0 or min(o.y for _, o in verts) != 0:
            continue
        key = _canonical_key(verts)
        if key in seen:
            continue
        seen.add(key)
        (v0, o0), (v1, o1), (v2, o2) = verts
        tri.add_face(v0, v1, v2, o0, o1, o2)

    tri.link_neighbors()
    logger.info("Periodic Delaunay built",
                vertices=tri.number_of_vertices(),
                faces=tri.number_of_faces(),
                one_sheet=tri.is_1_sheeted())
    return tri
