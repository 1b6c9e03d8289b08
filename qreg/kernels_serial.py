# qreg/kernels_serial.py
import numpy as np

# Plain-Python index loops. Every kernel writes into a caller-allocated `out`
# of the right shape and dtype; inputs are never modified unless the name
# says "inplace".

def kron(A: np.ndarray, B: np.ndarray, out: np.ndarray):
    """Kronecker product: out[i*q+k, j*q+l] = A[i,j] * B[k,l]."""
    p = A.shape[0]
    q = B.shape[0]
    for i in range(p):
        for j in range(p):
            a = A[i, j]
            for k in range(q):
                for l in range(q):
                    out[i*q + k, j*q + l] = a * B[k, l]

def kron_vec(psi: np.ndarray, q: np.ndarray, out: np.ndarray):
    """Append one qubit: out[i] = psi[i // 2] * q[i % 2]."""
    for i in range(out.shape[0]):
        out[i] = psi[i >> 1] * q[i & 1]

def matmul(A: np.ndarray, B: np.ndarray, out: np.ndarray):
    N = A.shape[0]
    for i in range(N):
        for j in range(N):
            acc = out.dtype.type(0)
            for k in range(N):
                acc += A[i, k] * B[k, j]
            out[i, j] = acc

def matvec(M: np.ndarray, psi: np.ndarray, out: np.ndarray):
    """out[i] = sum_j M[i,j] * psi[j] (dense, O(N^2))."""
    N = M.shape[0]
    for i in range(N):
        acc = out.dtype.type(0)
        for j in range(N):
            acc += M[i, j] * psi[j]
        out[i] = acc

def add(A: np.ndarray, B: np.ndarray, out: np.ndarray):
    N = A.shape[0]
    for i in range(N):
        for j in range(N):
            out[i, j] = A[i, j] + B[i, j]

def scale_inplace(M: np.ndarray, c):
    N = M.shape[0]
    for i in range(N):
        for j in range(N):
            M[i, j] = M[i, j] * c

def conj_transpose_inplace(M: np.ndarray):
    N = M.shape[0]
    for i in range(N):
        M[i, i] = np.conj(M[i, i])
        for j in range(i + 1, N):
            a = M[i, j]
            M[i, j] = np.conj(M[j, i])
            M[j, i] = np.conj(a)

def marginal_sums(psi: np.ndarray, n: int, squared: bool, out: np.ndarray):
    """
    Per-qubit weights of the two halves (qubit 0 is the most significant bit).
    out has shape (n, 2), float. Basis j feeds column 0 of row i when
    (j // (N >> (i+1))) is even.
    """
    N = psi.shape[0]
    for i in range(n):
        divider = N >> (i + 1)
        for j in range(N):
            w = abs(psi[j])
            if squared:
                w = w * w
            if (j // divider) % 2 == 0:
                out[i, 0] += w
            else:
                out[i, 1] += w
