# examples/main.py
from __future__ import annotations

import random

from cg2d.extract import extract
from cg2d.geom import Domain
from cg2d.log import configure_logging
from cg2d.pipeline import periodic_delaunay
from cg2d.vtu import write_vtu


def generate_random_points(n: int, domain: Domain, seed: int = 1):
    """n випадкових точок у фундаментальному домені."""
    rnd = random.Random(seed)
    return [
        (domain.xmin + rnd.random() * domain.width, domain.ymin + rnd.random() * domain.height)
        for _ in range(n)
    ]


def main():
    configure_logging("INFO")

    # --- 1) Вхідні дані ---
    domain = Domain(0.0, 2.0, 0.0, 1.0)
    points = generate_random_points(40, domain)

    # --- 2) Періодична Делоне ---
    tri = periodic_delaunay(points, domain)
    print(f"Вершини:  {tri.number_of_vertices()}")
    print(f"Грані:    {tri.number_of_faces()}")
    print(f"Ребра:    {len(tri.edges())}")

    # --- 3) Валідація ---
    print("VALIDATION:", tri.validate())

    # --- 4) periodic_triangulation.vtu — один лист ---
    mesh = extract(tri, domain)
    write_vtu(mesh.points, mesh.cells, "periodic_triangulation.vtu")
    print("periodic_triangulation.vtu записано (відкривай у ParaView).")

    # --- 5) periodic_triangulation_9.vtu — 9-листове накриття ---
    mesh9 = extract(tri.convert_to_9_sheeted_covering(), domain)
    write_vtu(mesh9.points, mesh9.cells, "periodic_triangulation_9.vtu")
    print(f"periodic_triangulation_9.vtu записано ({mesh9.n_points} точок, {mesh9.n_cells} трикутників).")


if __name__ == "__main__":
    main()
