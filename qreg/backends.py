# qreg/backends.py
import logging
import os

logger = logging.getLogger(__name__)

BACKENDS = ("serial", "numba")

_default = "serial"


def get_default() -> str:
    return _default


def set_default(name: str):
    """Change the process-wide backend used when callers pass backend=None."""
    global _default
    if name not in BACKENDS:
        raise NotImplementedError(f"Unknown backend: {name}")
    _default = name


def configure_from_env():
    """Apply QREG_BACKEND if it is set; an unknown name fails here, not at first use."""
    name = os.environ.get("QREG_BACKEND")
    if name:
        set_default(name)


def load(name=None):
    """Return the kernel module for `name` (or the configured default)."""
    name = name or _default
    if name == "serial":
        from . import kernels_serial as kernels
    elif name == "numba":
        try:
            from . import kernels_numba as kernels
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
    else:
        raise NotImplementedError(f"Unknown backend: {name}")
    logger.debug("using %s kernels", name)
    return kernels


configure_from_env()
