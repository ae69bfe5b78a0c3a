"""
Backend selection and management.

Provides a unified interface for CPU (NumPy) and GPU (PyTorch on CUDA or
Apple MPS) kernels, plus the process-wide default used by ``densela.ops``.
"""

from typing import Optional, Union
import warnings

from .base import BackendBase
from .precision_detector import (
    detect_gpu_capabilities,
    resolve_fp64,
    GPUCapabilities
)

# CPU backend needs only NumPy
try:
    from .cpu_backend import CPUBackend
    CPU_AVAILABLE = True
except ImportError:
    CPU_AVAILABLE = False
    warnings.warn("CPU backend unavailable - installation error!")

# PyTorch backend (NVIDIA CUDA or Apple MPS)
try:
    import torch  # noqa: F401
    from .gpu_backend import PyTorchBackend
    PYTORCH_AVAILABLE = True
except ImportError:
    PYTORCH_AVAILABLE = False

VALID_BACKENDS = ('auto', 'cpu', 'gpu', 'pytorch', 'mps')

_default_backend: Optional[BackendBase] = None


def get_backend(backend: str = 'auto', use_fp64: Optional[bool] = None) -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str
        Backend selection:
        - 'auto': GPU if one is present and PyTorch is installed, else CPU
        - 'cpu': CPU with NumPy (native precision)
        - 'gpu': Any available GPU (PyTorch CUDA or MPS)
        - 'pytorch': Force PyTorch CUDA (NVIDIA only)
        - 'mps': Force PyTorch MPS (Apple Silicon only)

    use_fp64 : bool or None
        GPU kernel precision preference:
        - None or False: FP32
        - True: FP64 (CUDA only; 'auto' falls back to the CPU elsewhere)

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend.name
    'cpu'
    """

    if backend == 'auto':
        caps = detect_gpu_capabilities()
        if caps.has_gpu and PYTORCH_AVAILABLE:
            if use_fp64 and not caps.supports_fp64:
                return _cpu_backend()
            return PyTorchBackend(use_fp64=bool(use_fp64))

        return _cpu_backend()

    elif backend == 'cpu':
        return _cpu_backend()

    elif backend == 'gpu':
        caps = detect_gpu_capabilities()

        if not caps.has_gpu:
            raise ValueError(
                "No GPU detected.\n"
                "Options:\n"
                "  - Use backend='cpu'\n"
                "  - Install PyTorch with CUDA for NVIDIA\n"
                "  - Install PyTorch with MPS for Apple Silicon"
            )
        if not PYTORCH_AVAILABLE:
            raise RuntimeError(
                f"{caps.gpu_name} detected but PyTorch unavailable.\n"
                "Install: pip install torch"
            )
        return PyTorchBackend(use_fp64=resolve_fp64(caps, use_fp64))

    elif backend == 'pytorch':
        caps = detect_gpu_capabilities()
        if not PYTORCH_AVAILABLE or caps.gpu_type != 'nvidia':
            raise RuntimeError(
                "PyTorch CUDA backend unavailable.\n"
                "Requires an NVIDIA GPU and: pip install torch"
            )
        return PyTorchBackend(device='cuda', use_fp64=resolve_fp64(caps, use_fp64))

    elif backend == 'mps':
        caps = detect_gpu_capabilities()
        if not PYTORCH_AVAILABLE or caps.gpu_type != 'mps':
            raise RuntimeError(
                "MPS backend unavailable.\n"
                "Requires Apple Silicon and PyTorch with MPS support"
            )
        return PyTorchBackend(device='mps', use_fp64=resolve_fp64(caps, use_fp64))

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: {', '.join(repr(b) for b in VALID_BACKENDS)}"
        )


def _cpu_backend() -> BackendBase:
    if not CPU_AVAILABLE:
        raise RuntimeError("CPU backend unavailable!")
    return CPUBackend()


def set_default_backend(backend: Union[str, BackendBase] = 'cpu',
                        use_fp64: Optional[bool] = None) -> BackendBase:
    """
    Set the backend ``densela.ops`` uses when no ``backend=`` is given.

    Accepts a backend name (resolved with ``get_backend``) or an instance.
    Returns the backend now in effect.
    """
    global _default_backend
    if isinstance(backend, BackendBase):
        _default_backend = backend
    else:
        _default_backend = get_backend(backend, use_fp64=use_fp64)
    return _default_backend


def get_default_backend() -> BackendBase:
    """Current default backend (CPU until ``set_default_backend`` is called)."""
    global _default_backend
    if _default_backend is None:
        _default_backend = _cpu_backend()
    return _default_backend


def list_available_backends() -> list:
    """List names of available backends."""
    backends = []
    if CPU_AVAILABLE:
        backends.append('cpu')
    if PYTORCH_AVAILABLE:
        caps = detect_gpu_capabilities()
        if caps.gpu_type == 'nvidia':
            backends.append('pytorch')
        elif caps.gpu_type == 'mps':
            backends.append('mps')
    return backends


def print_backend_info():
    """Print detailed backend information (diagnostic)."""
    caps = detect_gpu_capabilities()

    print("densela Backend Status")
    print("=" * 50)
    print(f"\nAvailable Backends:")
    print(f"  CPU (NumPy):         {'✓' if CPU_AVAILABLE else '✗'}")
    print(f"  PyTorch (CUDA/MPS):  {'✓' if PYTORCH_AVAILABLE else '✗'}")

    print(f"\nHardware Detection:")
    if caps.has_gpu:
        print(f"  GPU Type: {caps.gpu_type}")
        print(f"  GPU Name: {caps.gpu_name}")
        print(f"  FP64 Kernels: {'yes' if caps.supports_fp64 else 'no'}")
    else:
        print(f"  No GPU detected")

    print(f"\nDefault Backend:")
    print(f"  {get_default_backend().name}")

    print(f"\nRecommended Backend:")
    try:
        backend = get_backend('auto')
        print(f"  {backend.name}")
    except (RuntimeError, ValueError) as e:
        print(f"  Error: {e}")


__all__ = [
    'get_backend',
    'set_default_backend',
    'get_default_backend',
    'list_available_backends',
    'print_backend_info',
    'BackendBase',
    'GPUCapabilities',
    'detect_gpu_capabilities',
    'CPU_AVAILABLE',
    'PYTORCH_AVAILABLE',
]


if __name__ == "__main__":
    print_backend_info()
