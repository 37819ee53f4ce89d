# cg2d/predicates.py
from __future__ import annotations
from typing import List
from .geom import Pt, sub, cross2

def orient2d(a: Pt, b: Pt, c: Pt) -> float:
    """>0 якщо a,b,c проти годинникової стрілки, <0 — за, 0 — колінеарні."""
    return cross2(sub(b, a), sub(c, a))

# ---------- інструмент для детермінанта ----------
def _det(m: List[List[float]]) -> float:
    """Детермінант через Гауса з частковим вибором опорного елемента (float)."""
    n = len(m)
    a = [row[:] for row in m]
    det = 1.0
    for i in range(n):
        # півот
        piv = i
        maxv = abs(a[i][i])
        for r in range(i+1, n):
            v = abs(a[r][i])
            if v > maxv:
                maxv = v; piv = r
        if maxv == 0.0:
            return 0.0
        if piv != i:
            a[i], a[piv] = a[piv], a[i]
            det = -det
        det *= a[i][i]
        inv = 1.0 / a[i][i]
        for r in range(i+1, n):
            factor = a[r][i] * inv
            if factor != 0.0:
                for c in range(i, n):
                    a[r][c] -= factor * a[i][c]
    return det

def incircle(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    """
    Знак тесту «чи лежить d всередині кола через a,b,c?».
    Повертає:
      >0  якщо d всередині кола,
      <0  якщо зовні,
       0  якщо на колі або a,b,c колінеарні.
    Знак не залежить від орієнтації (a,b,c): множимо на sign(orient2d(a,b,c)).
    """
    def row(p: Pt) -> list[float]:
        # зсув до d — менше втрат точності на великих координатах
        dx, dy = p.x - d.x, p.y - d.y
        return [dx, dy, dx*dx + dy*dy]

    val = _det([row(a), row(b), row(c)])
    ori = orient2d(a, b, c)
    if ori > 0:
        return val
    elif ori < 0:
        return -val
    return 0.0
