import logging

import numpy as np
import torch
from joblib import Parallel, delayed
from tqdm import tqdm

from . import python_backend
from . import numba_backend
from .reference import p_var

logger = logging.getLogger(__name__)

BACKENDS = ('python', 'numba')

# intervals of up to four edges are optimal once short intervals are checked
MAX_LSI = 4


def _as_sequence(x, backend):
    if isinstance(x, torch.Tensor):
        x = x.detach().cpu().numpy()
    x = np.asarray(x, dtype=np.float64)
    assert x.ndim == 1, "input should be a 1-D sequence of shape (length,)"
    if backend == 'numba':
        return np.ascontiguousarray(x)
    return [float(v) for v in x]


def _check_backend(backend):
    if backend not in BACKENDS:
        raise ValueError(f"unknown backend {backend!r}, expected one of {BACKENDS}")


def _check_LSI(LSI):
    if not 1 <= LSI <= MAX_LSI:
        raise ValueError(f"initial interval length LSI={LSI!r} should be between 1 and {MAX_LSI}")


# ===========================================================================================================
# p-variation of a single sequence
# ===========================================================================================================
def p_var_points(x, p, backend='python', LSI=4):
    """Input:
              - x: 1-D sequence of reals (list, numpy array or torch tensor) of length n
              - p: exponent, p >= 1 (not checked)
       Output:
              - namedtuple p_var(value, points) with the p-variation of x and the
                increasing indices of a subsequence realising it
    """
    _check_backend(backend)
    _check_LSI(LSI)
    x = _as_sequence(x, backend)
    n = len(x)

    # short special cases
    if n <= 2:
        if n <= 1:
            return p_var(value=0.0, points=list(range(n)))
        return p_var(value=float(python_backend.pvar_diff(x[0] - x[1], p)), points=[0, 1])

    if backend == 'numba':
        nxt, weight = numba_backend.p_var_links(x, float(p), int(LSI))
        value = numba_backend.accumulate(nxt, weight)
        points = numba_backend.chain_points(nxt).tolist()
    else:
        links = python_backend.p_var_links(x, p, LSI)
        value = python_backend.accumulate(links)
        points = links.points()
    return p_var(value=float(value), points=points)


def pvar(x, p, backend='python', LSI=4):
    """p-variation of the real sequence x"""
    return p_var_points(x, p, backend=backend, LSI=LSI).value


# ===========================================================================================================
# Wrapper
# ===========================================================================================================
class PVar():
    """Wrapper of the p-variation V_p(x) = sup sum_j |x[i_j] - x[i_{j-1}]|^p of real sequences"""

    def __init__(self, p, backend='python', LSI=4, n_jobs=1, verbose=False):
        _check_backend(backend)
        _check_LSI(LSI)
        self.p = p
        self.backend = backend
        self.LSI = LSI
        self.n_jobs = n_jobs
        self.verbose = verbose

    def compute(self, x):
        """Input:
                  - x: 1-D sequence of length n
           Output:
                  - p-variation of x
        """
        return pvar(x, self.p, backend=self.backend, LSI=self.LSI)

    def compute_points(self, x):
        """Input:
                  - x: 1-D sequence of length n
           Output:
                  - namedtuple p_var(value, points)
        """
        return p_var_points(x, self.p, backend=self.backend, LSI=self.LSI)

    def compute_batch(self, X):
        """Input:
                  - X: torch tensor or numpy array of shape (batch, length), or a list of 1-D sequences
           Output:
                  - vector of p-variations of shape (batch,), a torch tensor on X's device if X is a tensor
        """
        if isinstance(X, torch.Tensor):
            assert X.dim() == 2, "batch input should be of shape (batch, length)"
            rows = X.detach().cpu().numpy()
        elif isinstance(X, np.ndarray):
            assert X.ndim == 2, "batch input should be of shape (batch, length)"
            rows = X
        else:
            rows = list(X)

        logger.debug("computing %s-variation of %d sequences with the %s backend on %s jobs",
                     self.p, len(rows), self.backend, self.n_jobs)

        values = Parallel(n_jobs=self.n_jobs)(delayed(pvar)(x, self.p, self.backend, self.LSI)
                                              for x in tqdm(rows, disable=not self.verbose))
        values = np.array(values, dtype=np.float64)

        if isinstance(X, torch.Tensor):
            dtype = X.dtype if X.is_floating_point() else torch.float64
            return torch.tensor(values, dtype=dtype, device=X.device)
        return values
