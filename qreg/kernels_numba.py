# qreg/kernels_numba.py
import numpy as np
from numba import njit, prange, set_num_threads, get_num_threads

# ---------- low-level kernels (Numba JIT) ----------
# Same contracts as kernels_serial; outer loops are split across threads
# wherever each iteration writes a disjoint slice of `out`.

@njit(parallel=True, fastmath=True)
def _kron_kernel(A, B, out):
    p = A.shape[0]
    q = B.shape[0]
    for i in prange(p):
        for j in range(p):
            a = A[i, j]
            for k in range(q):
                for l in range(q):
                    out[i*q + k, j*q + l] = a * B[k, l]

@njit(parallel=True, fastmath=True)
def _kron_vec_kernel(psi, q, out):
    for i in prange(out.shape[0]):
        out[i] = psi[i >> 1] * q[i & 1]

@njit(parallel=True, fastmath=True)
def _matmul_kernel(A, B, out):
    N = A.shape[0]
    for i in prange(N):
        for j in range(N):
            acc = 0j
            for k in range(N):
                acc += A[i, k] * B[k, j]
            out[i, j] = acc

@njit(parallel=True, fastmath=True)
def _matvec_kernel(M, psi, out):
    N = M.shape[0]
    for i in prange(N):
        acc = 0j
        for j in range(N):
            acc += M[i, j] * psi[j]
        out[i] = acc

@njit(parallel=True, fastmath=True)
def _add_kernel(A, B, out):
    N = A.shape[0]
    for i in prange(N):
        for j in range(N):
            out[i, j] = A[i, j] + B[i, j]

@njit(parallel=True, fastmath=True)
def _scale_kernel(M, c):
    N = M.shape[0]
    for i in prange(N):
        for j in range(N):
            M[i, j] = M[i, j] * c

@njit(fastmath=True)
def _conj_transpose_kernel(M):
    N = M.shape[0]
    for i in range(N):
        M[i, i] = np.conj(M[i, i])
        for j in range(i + 1, N):
            a = M[i, j]
            M[i, j] = np.conj(M[j, i])
            M[j, i] = np.conj(a)

@njit(parallel=True, fastmath=True)
def _marginal_kernel(psi, n, squared, out):
    N = psi.shape[0]
    # one thread per qubit row; each row only touches out[i, :]
    for i in prange(n):
        divider = N >> (i + 1)
        for j in range(N):
            w = abs(psi[j])
            if squared:
                w = w * w
            if (j // divider) % 2 == 0:
                out[i, 0] += w
            else:
                out[i, 1] += w

# ---------- user-facing helpers ----------

def set_threads(n: int):
    set_num_threads(n)

def get_threads() -> int:
    return get_num_threads()

def kron(A: np.ndarray, B: np.ndarray, out: np.ndarray):
    _kron_kernel(A, B.astype(A.dtype, copy=False), out)

def kron_vec(psi: np.ndarray, q: np.ndarray, out: np.ndarray):
    _kron_vec_kernel(psi, q.astype(psi.dtype, copy=False), out)

def matmul(A: np.ndarray, B: np.ndarray, out: np.ndarray):
    _matmul_kernel(A, B.astype(A.dtype, copy=False), out)

def matvec(M: np.ndarray, psi: np.ndarray, out: np.ndarray):
    _matvec_kernel(M.astype(psi.dtype, copy=False), psi, out)

def add(A: np.ndarray, B: np.ndarray, out: np.ndarray):
    _add_kernel(A, B.astype(A.dtype, copy=False), out)

def scale_inplace(M: np.ndarray, c):
    _scale_kernel(M, M.dtype.type(c))

def conj_transpose_inplace(M: np.ndarray):
    _conj_transpose_kernel(M)

def marginal_sums(psi: np.ndarray, n: int, squared: bool, out: np.ndarray):
    _marginal_kernel(psi, n, squared, out)
