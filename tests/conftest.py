"""Shared fixtures for cg2d tests."""

import numpy as np
import pytest

from cg2d.geom import Domain, Offset, Pt
from cg2d.periodic import PeriodicTriangulation2
from cg2d.pipeline import periodic_delaunay


class ListTriangulation:
    """Minimal provider: faces given directly as [(handle, Offset), ...] triples."""

    def __init__(self, domain, points, faces):
        self.domain = domain
        self.points = points
        self.faces = faces

    def finite_faces(self):
        return range(len(self.faces))

    def vertex(self, face, i):
        return self.faces[face][i][0]

    def offset(self, face, i):
        return self.faces[face][i][1]

    def point(self, vertex):
        return self.points[vertex]


@pytest.fixture
def domain2():
    return Domain(0.0, 2.0, 0.0, 2.0)


@pytest.fixture
def corner_points():
    return {"a": Pt(0.0, 0.0), "b": Pt(1.0, 0.0), "c": Pt(0.0, 1.0)}


@pytest.fixture
def single_face(domain2, corner_points):
    """One face over (0,0), (1,0), (0,1), all with zero offset."""
    zero = Offset(0, 0)
    return ListTriangulation(domain2, corner_points, [[("a", zero), ("b", zero), ("c", zero)]])


@pytest.fixture
def shifted_faces(domain2, corner_points):
    """Two faces; the second uses the (0,0) vertex through offset (1,0)."""
    zero, east = Offset(0, 0), Offset(1, 0)
    return ListTriangulation(domain2, corner_points, [
        [("a", zero), ("b", zero), ("c", zero)],
        [("a", east), ("b", zero), ("c", zero)],
    ])


@pytest.fixture
def empty_triangulation(domain2):
    return PeriodicTriangulation2(domain2)


@pytest.fixture
def random_points():
    rng = np.random.default_rng(7)
    return [(float(x), float(y)) for x, y in rng.random((40, 2))]


@pytest.fixture
def random_triangulation(random_points):
    return periodic_delaunay(random_points, Domain())


@pytest.fixture
def points_file(tmp_path, random_points):
    path = tmp_path / "points.cin"
    path.write_text("\n".join(f"{x!r} {y!r}" for x, y in random_points) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def list_triangulation():
    return ListTriangulation
