"""
VTK XML UnstructuredGrid (.vtu) для трикутних сіток, ASCII.

Порядок блоків фіксований: Points, потім Cells (connectivity, offsets, types).
"""
from __future__ import annotations
import os
import tempfile
import xml.etree.ElementTree as ET
from contextlib import suppress
from typing import Iterable, List, Sequence, Tuple, Union

import structlog

from .extract import Mesh
from .geom import Pt

logger = structlog.get_logger()

VTK_TRIANGLE = 5
PathLike = Union[str, "os.PathLike[str]"]


def _fmt(x: float) -> str:
    # repr — найкоротший запис, що читається назад без втрат
    return repr(float(x))


def vtu_document(points: Sequence[Iterable[float]], cells: Sequence[Tuple[int, int, int]]) -> str:
    """
    Повертає весь VTU-документ як рядок. Лічильники в заголовку беруться
    з довжин points/cells до запису будь-якого блоку.
    Індекси не перевіряються: cells мають посилатися на points.
    """
    n_points, n_cells = len(points), len(cells)
    lines = [
        '<?xml version="1.0"?>',
        '<VTKFile type="UnstructuredGrid" version="0.1" byte_order="LittleEndian">',
        '  <UnstructuredGrid>',
        f'    <Piece NumberOfPoints="{n_points}" NumberOfCells="{n_cells}">',
        '      <Points>',
        '        <DataArray type="Float64" NumberOfComponents="3" format="ascii">',
    ]
    for p in points:
        x, y, z = p
        lines.append(f"          {_fmt(x)} {_fmt(y)} {_fmt(z)}")
    lines += [
        '        </DataArray>',
        '      </Points>',
        '      <Cells>',
        '        <DataArray type="Int32" Name="connectivity" format="ascii">',
    ]
    for a, b, c in cells:
        lines.append(f"          {a} {b} {c}")
    lines += [
        '        </DataArray>',
        '        <DataArray type="Int32" Name="offsets" format="ascii">',
    ]
    for i in range(n_cells):
        lines.append(f"          {3 * (i + 1)}")
    lines += [
        '        </DataArray>',
        '        <DataArray type="UInt8" Name="types" format="ascii">',
    ]
    lines += [f"          {VTK_TRIANGLE}"] * n_cells
    lines += [
        '        </DataArray>',
        '      </Cells>',
        '    </Piece>',
        '  </UnstructuredGrid>',
        '</VTKFile>',
    ]
    return "\n".join(lines) + "\n"


def write_vtu(points: Sequence[Iterable[float]], cells: Sequence[Tuple[int, int, int]], path: PathLike) -> bool:
    """
    Записує сітку у path. Документ спершу пишеться у тимчасовий файл поруч
    і атомарно перейменовується, тож недописаного файлу з хибними
    лічильниками не лишається. Символьне посилання в path розкривається:
    перезаписується файл, на який воно вказує. Повертає False, якщо path недоступний.
    """
    doc = vtu_document(points, cells)
    path = os.fspath(path)
    target = os.path.realpath(path)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{os.path.basename(target)}.", suffix=".tmp",
            dir=os.path.dirname(target),
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(doc)
        os.chmod(tmp_name, 0o644)  # mkstemp створює 0600
        os.replace(tmp_name, target)
    except OSError as e:
        logger.error("VTU export failed", path=path, error=str(e))
        if tmp_name is not None:
            with suppress(FileNotFoundError):
                os.remove(tmp_name)
        return False

    logger.info("VTU written", path=path, points=len(points), cells=len(cells))
    return True


def write_mesh_vtu(mesh: Mesh, path: PathLike) -> bool:
    return write_vtu(mesh.points, mesh.cells, path)


# ---------- читання ----------
def _values(el, conv) -> list:
    if el is None:
        raise ValueError("missing DataArray")
    try:
        return [conv(tok) for tok in (el.text or "").split()]
    except ValueError as e:
        raise ValueError(f"bad value in DataArray {el.get('Name', '')!r}: {e}") from e


def read_vtu(path: PathLike) -> Mesh:
    """Читає трикутну VTU-сітку (ASCII), записану write_vtu або сумісну."""
    try:
        root = ET.parse(os.fspath(path)).getroot()
    except ET.ParseError as e:
        raise ValueError(f"not a well-formed VTU document: {e}") from e
    if root.tag != "VTKFile" or root.get("type") != "UnstructuredGrid":
        raise ValueError("not an UnstructuredGrid VTKFile")
    piece = root.find("UnstructuredGrid/Piece")
    if piece is None:
        raise ValueError("missing Piece element")
    n_points = int(piece.get("NumberOfPoints", "0"))
    n_cells = int(piece.get("NumberOfCells", "0"))

    coords = _values(piece.find("Points/DataArray"), float)
    arrays = {da.get("Name"): da for da in piece.findall("Cells/DataArray")}
    conn = _values(arrays.get("connectivity"), int)
    offsets = _values(arrays.get("offsets"), int)
    types = _values(arrays.get("types"), int)

    if len(coords) != 3 * n_points:
        raise ValueError(f"expected {n_points} points, got {len(coords) / 3:g}")
    if len(offsets) != n_cells or len(types) != n_cells:
        raise ValueError(f"expected {n_cells} offsets and types")
    if offsets != [3 * (i + 1) for i in range(n_cells)] or len(conn) != 3 * n_cells:
        raise ValueError("only triangle cells are supported")
    if any(t != VTK_TRIANGLE for t in types):
        raise ValueError("only triangle cells are supported")

    points: List[Pt] = [Pt(*coords[i:i + 3]) for i in range(0, len(coords), 3)]
    cells = [(conn[i], conn[i + 1], conn[i + 2]) for i in range(0, len(conn), 3)]
    return Mesh(tuple(points), tuple(cells))
