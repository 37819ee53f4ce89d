from __future__ import annotations
import argparse
from typing import List, Optional

import structlog

from .config import Settings
from .extract import extract
from .geom import Domain
from .io import load_points
from .log import configure_logging
from .pipeline import periodic_delaunay
from .vtu import read_vtu, write_vtu

logger = structlog.get_logger()


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cg2d",
        description="Periodic 2D Delaunay triangulation exported as a VTU unstructured grid",
    )
    parser.add_argument("input", nargs="?", default=settings.input_path,
                        help="points file with 'x y' pairs (default: %(default)s)")
    parser.add_argument("-o", "--output", default=settings.output_path,
                        help="VTU file to write (default: %(default)s)")
    parser.add_argument("--domain", nargs=4, type=float, metavar=("XMIN", "XMAX", "YMIN", "YMAX"),
                        default=[settings.xmin, settings.xmax, settings.ymin, settings.ymax],
                        help="fundamental periodic cell")
    parser.add_argument("--sheets", type=int, choices=(1, 9), default=settings.sheets,
                        help="export a single sheet or the 9-sheeted covering")
    parser.add_argument("--stats", action="store_true", help="print triangulation statistics and validation")
    parser.add_argument("--check", action="store_true", help="read the written VTU back and compare counts")
    parser.add_argument("--log-level", type=str.upper, default=settings.log_level,
                        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))
    parser.add_argument("--log-format", choices=("plain", "json"), default=settings.log_format)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    try:
        domain = Domain(*args.domain)
        points = load_points(args.input)
        tri = periodic_delaunay(points, domain)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Cannot build triangulation", input=args.input, error=str(e))
        return 1

    report = tri.validate()
    if args.stats:
        print(f"Vertices: {tri.number_of_vertices()}")
        print(f"Faces:    {tri.number_of_faces()}")
        print(f"Edges:    {len(tri.edges())}")
        print(f"1-sheet:  {tri.is_1_sheeted()}")
        print("VALIDATION:", report)
        print("Adjacency list (vertex neighbors):")
        for v in range(tri.number_of_vertices()):
            nbrs = ", ".join(f"{w}@({o.x},{o.y})" for w, o in tri.incident_vertices(v))
            print(f"  [{v}] {tri.point(v).x} {tri.point(v).y} connects to: {nbrs}")

    if report["bad_edge_multiplicity"]:
        logger.error("Triangulation is not a valid torus", input=args.input,
                     bad_edges=len(report["bad_edge_multiplicity"]))
        return 1

    provider = tri.convert_to_9_sheeted_covering() if args.sheets == 9 else tri
    mesh = extract(provider, domain)

    if not write_vtu(mesh.points, mesh.cells, args.output):
        return 1
    print(f"Wrote {mesh.n_points} points and {mesh.n_cells} triangles to {args.output}")

    if args.check:
        back = read_vtu(args.output)
        if (back.n_points, back.n_cells) != (mesh.n_points, mesh.n_cells):
            logger.error("VTU check failed", expected=(mesh.n_points, mesh.n_cells),
                         got=(back.n_points, back.n_cells))
            return 1
    return 0
