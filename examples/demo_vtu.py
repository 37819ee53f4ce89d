# examples/demo_vtu.py
from cg2d.extract import extract
from cg2d.geom import Domain, Offset, Pt
from cg2d.periodic import PeriodicTriangulation2
from cg2d.vtu import vtu_document

if __name__ == "__main__":
    # один трикутник, одна вершина з копією через період по x
    tri = PeriodicTriangulation2(Domain(0, 2, 0, 2), [Pt(0, 0), Pt(1, 0), Pt(0, 1)])
    tri.add_face(0, 1, 2)
    tri.add_face(1, 0, 2, Offset(0, 0), Offset(1, 0), Offset(0, 0))

    mesh = extract(tri)
    print("POINTS:", mesh.points)
    print("CELLS:", mesh.cells)
    print(vtu_document(mesh.points, mesh.cells))
