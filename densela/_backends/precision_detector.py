"""
GPU detection for backend selection.

Only answers what ``get_backend`` needs: is there a GPU, which kind, and
can its kernels run in float64.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GPUCapabilities:
    """What the PyTorch backend can run on this machine."""
    has_gpu: bool
    gpu_type: str        # 'nvidia', 'mps' or 'none'
    gpu_name: str
    supports_fp64: bool  # False on Apple Metal


def detect_gpu_capabilities() -> GPUCapabilities:
    """Probe CUDA, then MPS; report no GPU when PyTorch is missing."""
    try:
        import torch
    except ImportError:
        return GPUCapabilities(False, 'none', 'CPU only', True)

    if torch.cuda.is_available():
        return GPUCapabilities(True, 'nvidia', torch.cuda.get_device_name(0), True)

    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return GPUCapabilities(True, 'mps', 'Apple Metal GPU', False)

    return GPUCapabilities(False, 'none', 'CPU only', True)


def resolve_fp64(capabilities: GPUCapabilities, use_fp64: Optional[bool]) -> bool:
    """
    Kernel precision for a GPU backend.

    ``None`` means FP32, the fast path on every GPU. An explicit FP64
    request on hardware without FP64 raises RuntimeError.
    """
    if not use_fp64:
        return False
    if not capabilities.supports_fp64:
        raise RuntimeError(
            f"FP64 requested but not supported on {capabilities.gpu_name}. "
            f"Use FP32 (use_fp64=False) or get_backend('cpu')."
        )
    return True
