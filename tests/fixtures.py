"""Мини‑родословные и фейковый решатель для юнит‑тестов."""
import numpy as np
import pandas as pd

from pedkit import SolverResult

pedigree = pd.DataFrame(
    [
        {"id": "G1", "mother_id": None, "father_id": None},
        {"id": "P1", "mother_id": "G1", "father_id": None},
        {"id": "P2", "mother_id": "G1", "father_id": None},
        {"id": "A",  "mother_id": "P1", "father_id": None},
        {"id": "B",  "mother_id": "P2", "father_id": None},
    ]
)

# коды 1…10, родители раньше потомков; 7 и 10 – инбредные
canonical = pd.DataFrame(
    {
        "self": [1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
        "dad":  [0, 0, 1, 1, 3, 3, 5, 0, 7, 7],
        "mum":  [0, 0, 2, 0, 4, 2, 6, 0, 8, 6],
    }
)

# без строк основателей 1, 2, 8: неполная, но в остальном правильная
incomplete = canonical[~canonical["self"].isin([1, 2, 8])].reset_index(drop=True)

MAP = {1: 40, 2: 17, 3: 93, 4: 8, 5: 61, 6: 25, 7: 70, 8: 12, 9: 55, 10: 31}


def scrambled(df: pd.DataFrame) -> pd.DataFrame:
    """Коды через MAP, строки в обратном порядке."""
    out = df.apply(lambda col: col.map(lambda v: MAP.get(v, 0)))
    return out.iloc[::-1].reset_index(drop=True)


def additive_matrix(view) -> np.ndarray:
    """Табличный метод A по каноническим тройкам (0 – неизвестный родитель)."""
    n = len(view)
    A = np.zeros((n, n), dtype=np.float64)
    for s, a, b in view:
        i, mi, fi = s - 1, a - 1, b - 1
        if a == 0 and b == 0:
            A[i, i] = 1.0
        elif a == 0 or b == 0:
            parent = mi if a else fi
            A[i, i] = 1.0
            for j in range(i):
                A[i, j] = 0.5 * A[parent, j]
                A[j, i] = A[i, j]
        else:
            for j in range(i):
                A[i, j] = 0.5 * (A[mi, j] + A[fi, j])
                A[j, i] = A[i, j]
            A[i, i] = 1.0 + 0.5 * A[mi, fi]
    return A


def fake_solver(data: pd.DataFrame, view) -> SolverResult:
    """Вместо REML: инбридинг из A и средний фенотип по особи."""
    residual = float(np.var(data["y"]))
    if view is None:
        return SolverResult({"residual": residual})
    A = additive_matrix(view)
    n = len(view)
    means = data.groupby("self")["y"].mean()
    ranef = pd.DataFrame(
        {
            "inbreeding": np.diag(A) - 1.0,
            "mean_y": [means.get(code, np.nan) for code in range(1, n + 1)],
        },
        index=pd.RangeIndex(1, n + 1, name="code"),
    )
    return SolverResult({"genetic": float(np.mean(np.diag(A))), "residual": residual}, ranef)
