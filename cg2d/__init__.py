"""
cg2d — мінімальна бібліотека для періодичних 2D тріангуляцій.
Зараз: періодична Делоне (SciPy backend) -> сітка без дублікатів (вершина, зсув) -> VTU.
"""

__version__ = "0.1.0"

from cg2d.geom import Pt, Offset, Domain, InvalidDomainError, EPS, unique_points
from cg2d.predicates import orient2d, incircle
from cg2d.periodic import PeriodicTriangulation2, SheetedCovering, TriangulationProvider
from cg2d.pipeline import periodic_delaunay
from cg2d.extract import Mesh, extract, triangulation_to_mesh
from cg2d.vtu import VTK_TRIANGLE, vtu_document, write_vtu, write_mesh_vtu, read_vtu

__all__ = [
    "Pt", "Offset", "Domain", "InvalidDomainError", "EPS", "unique_points",
    "orient2d", "incircle",
    "PeriodicTriangulation2", "SheetedCovering", "TriangulationProvider",
    "periodic_delaunay",
    "Mesh", "extract", "triangulation_to_mesh",
    "VTK_TRIANGLE", "vtu_document", "write_vtu", "write_mesh_vtu", "read_vtu",
    "__version__",
]
