# cg2d/periodic.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Set, Tuple

import structlog

from .geom import Pt, Offset, Domain, EPS
from .predicates import orient2d, incircle

logger = structlog.get_logger()

EdgeKey = Tuple[int, int, int, int]  # (a, b, dx, dy): ребро a -> b, де b зсунута на (dx, dy) відносно a


class TriangulationProvider(Protocol):
    """
    Мінімум, який екстрактор вимагає від періодичної тріангуляції.
    Дескриптори граней і вершин — непрозорі хешовані значення.
    """
    @property
    def domain(self) -> Domain: ...

    def finite_faces(self) -> Iterable[Hashable]: ...

    def vertex(self, face, i: int) -> Hashable: ...

    def offset(self, face, i: int) -> Offset: ...

    def point(self, vertex) -> Pt: ...


@dataclass
class Face:
    """
    Трикутник періодичної тріангуляції.
    v[i] — вершина, off[i] — її періодичний зсув у цій грані.
    nbr[i] — сусід через ребро, протилежне v[i] (індекс грані, або -1).
    """
    v: Tuple[int, int, int]
    off: Tuple[Offset, Offset, Offset]
    nbr: List[int] = field(default_factory=lambda: [-1, -1, -1])

    def edge(self, i: int) -> Tuple[Tuple[int, Offset], Tuple[int, Offset]]:
        j, k = (i + 1) % 3, (i + 2) % 3
        return (self.v[j], self.off[j]), (self.v[k], self.off[k])


def _edge_key(a: int, oa: Offset, b: int, ob: Offset) -> EdgeKey:
    """Ключ ребра, незалежний від напрямку обходу та від спільного зсуву обох кінців."""
    d = ob - oa
    return min((a, b, d.x, d.y), (b, a, -d.x, -d.y))


class PeriodicTriangulation2:
    """
    Періодична 2D тріангуляція на торі:
      - points: базові точки вершин (у фундаментальному домені)
      - faces: масив Face (CCW, зсуви нормалізовані так, що min по грані = (0, 0))
      - edgemap: ключ ребра -> [(face_id, local_edge_idx), ...]
    """
    def __init__(self, domain: Optional[Domain] = None, points: Iterable[Pt] = ()):
        self._domain = domain if domain is not None else Domain()
        self.points: List[Pt] = list(points)
        self.faces: List[Face] = []
        self.edgemap: Dict[EdgeKey, List[Tuple[int, int]]] = {}

    @property
    def domain(self) -> Domain:
        return self._domain

    def add_vertex(self, p: Pt) -> int:
        self.points.append(p)
        return len(self.points) - 1

    def add_face(self, v0: int, v1: int, v2: int,
                 o0: Offset = Offset(), o1: Offset = Offset(), o2: Offset = Offset()) -> int:
        verts = (v0, v1, v2)
        m = Offset(min(o0.x, o1.x, o2.x), min(o0.y, o1.y, o2.y))
        offs = (o0 - m, o1 - m, o2 - m)
        # зорієнтуємо грань проти годинникової стрілки (у зсунутих координатах)
        a, b, c = (self._domain.translate(self.points[v], o) for v, o in zip(verts, offs))
        if orient2d(a, b, c) < 0:
            verts = (v0, v2, v1)
            offs = (offs[0], offs[2], offs[1])

        fid = len(self.faces)
        face = Face(verts, offs)
        self.faces.append(face)
        for i in range(3):
            (p, op), (q, oq) = face.edge(i)
            self.edgemap.setdefault(_edge_key(p, op, q, oq), []).append((fid, i))
        return fid

    def link_neighbors(self) -> None:
        """Переприв'язати nbr для всіх граней за edgemap."""
        for face in self.faces:
            face.nbr = [-1, -1, -1]
        for lst in self.edgemap.values():
            if len(lst) == 2:
                (fa, ea), (fb, eb) = lst
                self.faces[fa].nbr[ea] = fb
                self.faces[fb].nbr[eb] = fa

    # ---------- інтерфейс провайдера ----------
    def finite_faces(self) -> Iterator[int]:
        yield from range(len(self.faces))

    def vertex(self, face: int, i: int) -> int:
        return self.faces[face].v[i]

    def offset(self, face: int, i: int) -> Offset:
        return self.faces[face].off[i]

    def point(self, vertex: int) -> Pt:
        return self.points[vertex]

    # ---------- корисні операції ----------
    def number_of_vertices(self) -> int:
        return len(self.points)

    def number_of_faces(self) -> int:
        return len(self.faces)

    def edges(self) -> List[EdgeKey]:
        return list(self.edgemap)

    def neighbor(self, face: int, i: int) -> int:
        return self.faces[face].nbr[i]

    def face_points(self, face: int) -> Tuple[Pt, Pt, Pt]:
        f = self.faces[face]
        a, b, c = (self._domain.translate(self.points[v], o) for v, o in zip(f.v, f.off))
        return a, b, c

    def incident_vertices(self, vertex: int) -> List[Tuple[int, Offset]]:
        """Сусіди вершини як (вершина, зсув відносно копії vertex із нульовим зсувом)."""
        out: Set[Tuple[int, Offset]] = set()
        for f in self.faces:
            for i in range(3):
                if f.v[i] != vertex:
                    continue
                for j in range(3):
                    if j != i:
                        out.add((f.v[j], f.off[j] - f.off[i]))
        return sorted(out)

    def is_1_sheeted(self) -> bool:
        """
        Чи коректна тріангуляція в одному листі накриття:
        жодна грань не містить дві копії однієї вершини, і кожне ребро
        має рівно дві інцидентні грані.
        """
        if any(len(set(f.v)) != 3 for f in self.faces):
            return False
        return all(len(lst) == 2 for lst in self.edgemap.values())

    def convert_to_9_sheeted_covering(self) -> SheetedCovering:
        logger.info("Converting to 9-sheeted covering", faces=len(self.faces))
        return SheetedCovering(self, 3, 3)

    # ---------- валідація ----------
    def _mirror_point(self, fid: int, i: int) -> Optional[Pt]:
        """Вершина сусіда через ребро i, протилежна цьому ребру, у системі координат грані fid."""
        nb = self.faces[fid].nbr[i]
        if nb < 0:
            return None
        (a, oa), (b, ob) = self.faces[fid].edge(i)
        g = self.faces[nb]
        for j in range(3):
            (c, oc), (d, od) = g.edge(j)
            if c == b and d == a and od - oc == oa - ob:
                t = oa - od
            elif c == a and d == b and od - oc == ob - oa:
                t = oa - oc
            else:
                continue
            return self._domain.translate(self.points[g.v[j]], g.off[j] + t)
        return None

    def validate(self, eps: float = EPS) -> dict:
        """
        Швидка перевірка коректності:
          - орієнтація кожної грані позитивна;
          - кожне ребро має рівно 2 інцидентні грані;
          - сусідства симетричні;
          - властивість Делоне (вершина сусіда не всередині описаного кола).
        Повертає словник з діагностикою.
        """
        bad_orientation = [fid for fid in range(len(self.faces))
                           if orient2d(*self.face_points(fid)) <= 0]
        bad_edge_multiplicity = [(key, len(lst)) for key, lst in self.edgemap.items() if len(lst) != 2]

        bad_neighbors: list[tuple[int, int, str]] = []
        non_delaunay: list[tuple[int, int]] = []
        for fid, f in enumerate(self.faces):
            for i in range(3):
                nb = f.nbr[i]
                if nb == -1:
                    bad_neighbors.append((fid, i, "missing_neighbor"))
                    continue
                if fid not in self.faces[nb].nbr:
                    bad_neighbors.append((fid, i, f"no_backlink_to_{nb}"))
                    continue
                q = self._mirror_point(fid, i)
                if q is not None and incircle(*self.face_points(fid), q) > eps:
                    non_delaunay.append((fid, i))

        return {
            "faces": len(self.faces),
            "bad_orientation": bad_orientation,
            "bad_edge_multiplicity": bad_edge_multiplicity,   # [(edge_key, count != 2), ...]
            "bad_neighbors": bad_neighbors,                   # [(fid, i, reason), ...]
            "non_delaunay": non_delaunay,                     # [(fid, i), ...]
        }


class SheetedCovering:
    """
    Накриття з nx*ny листів поверх періодичної тріангуляції: ті самі вершини,
    а кожна грань повторена зі зсувом (i, j), 0 <= i < nx, 0 <= j < ny.
    Сам є провайдером, тож екстрактор дає розгорнутий nx x ny фрагмент сітки.
    """
    def __init__(self, tri: PeriodicTriangulation2, nx: int = 3, ny: int = 3):
        if nx < 1 or ny < 1:
            raise ValueError(f"covering must have at least one sheet per axis, got {nx}x{ny}")
        self.tri = tri
        self.nx = nx
        self.ny = ny

    @property
    def domain(self) -> Domain:
        return self.tri.domain

    def finite_faces(self) -> Iterator[Tuple[int, Offset]]:
        for j in range(self.ny):
            for i in range(self.nx):
                shift = Offset(i, j)
                for f in self.tri.finite_faces():
                    yield (f, shift)

    def vertex(self, face: Tuple[int, Offset], i: int) -> int:
        return self.tri.vertex(face[0], i)

    def offset(self, face: Tuple[int, Offset], i: int) -> Offset:
        return self.tri.offset(face[0], i) + face[1]

    def point(self, vertex: int) -> Pt:
        return self.tri.point(vertex)

    def number_of_faces(self) -> int:
        return self.nx * self.ny * self.tri.number_of_faces()
