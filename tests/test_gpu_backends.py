"""
Test GPU backend implementations.

Validates that GPU kernels agree with the CPU reference and that results
come back in the operands' NumPy precision.
"""

import pytest
import numpy as np

# Check if PyTorch is available
try:
    import torch
    TORCH_AVAILABLE = torch.cuda.is_available() or (
        hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
    )
except ImportError:
    TORCH_AVAILABLE = False


@pytest.mark.skipif(not TORCH_AVAILABLE, reason="PyTorch GPU not available")
class TestGPUBackends:
    """Test PyTorch backend kernels."""

    def test_backend_creation(self):
        """Test that GPU backend can be created."""
        from densela._backends.gpu_backend import PyTorchBackend

        backend = PyTorchBackend()
        assert backend.name.startswith("pytorch")
        assert backend.precision == "fp32"

        info = backend.get_device_info()
        assert info['backend'] == 'gpu'
        assert info['precision'] == 'fp32'
        print(f"\n✓ GPU Backend: {info['device']}")

    def test_rejects_cpu_device(self):
        from densela._backends.gpu_backend import PyTorchBackend

        with pytest.raises(ValueError, match="requires a GPU device"):
            PyTorchBackend(device='cpu')

    def test_kernels_match_cpu(self):
        """Each kernel agrees with the NumPy reference."""
        from densela._backends import get_backend
        from densela._backends.gpu_backend import PyTorchBackend

        cpu = get_backend('cpu')
        gpu = PyTorchBackend()

        np.random.seed(42)
        a = np.random.randn(3)
        b = np.random.randn(3)
        m = np.random.randn(3, 3)

        for name in ('add', 'subtract', 'cross', 'matmul'):
            lhs = (m, a) if name == 'matmul' else (a, b)
            np.testing.assert_allclose(
                getattr(gpu, name)(*lhs), getattr(cpu, name)(*lhs),
                rtol=1e-5, atol=1e-5, err_msg=f"{name} mismatch"
            )

        np.testing.assert_allclose(gpu.scale(2.5, a), cpu.scale(2.5, a), rtol=1e-5)
        assert gpu.dot(a, b) == pytest.approx(cpu.dot(a, b), rel=1e-5, abs=1e-5)
        assert gpu.norm(a) == pytest.approx(cpu.norm(a), rel=1e-5)
        np.testing.assert_array_equal(gpu.transpose(m), cpu.transpose(m))

    def test_results_keep_numpy_dtype(self):
        """FP32 kernels still return float64 arrays for float64 operands."""
        from densela._backends.gpu_backend import PyTorchBackend

        gpu = PyTorchBackend()
        a = np.ones(3, dtype=np.float64)
        assert gpu.add(a, a).dtype == np.float64
        assert gpu.scale(2.0, a.astype(np.float32)).dtype == np.float32

    def test_ops_with_gpu_backend(self):
        """Named operations accept the GPU backend explicitly."""
        from densela import Matrix3, Vector3, multiply, normalized, norm
        from densela._backends.gpu_backend import PyTorchBackend

        gpu = PyTorchBackend()
        v = Vector3([3.0, 0.0, 4.0])
        assert norm(v, backend=gpu) == pytest.approx(5.0)
        assert norm(normalized(v, backend=gpu)) == pytest.approx(1.0, abs=1e-6)
        result = multiply(Matrix3.identity(), v, backend=gpu)
        assert isinstance(result, Vector3)
        np.testing.assert_allclose(result.to_numpy(), v.to_numpy())

    def test_norm_extremes_in_fp32(self):
        """Tiny and huge FP32 magnitudes keep a finite, nonzero norm."""
        from densela._backends.gpu_backend import PyTorchBackend

        gpu = PyTorchBackend()
        tiny = np.array([1e-30, 0.0, 0.0], dtype=np.float32)
        huge = np.array([1e20, 1e20, 0.0], dtype=np.float32)
        assert gpu.norm(tiny) == pytest.approx(1e-30, rel=1e-5, abs=0)
        assert gpu.norm(huge) == pytest.approx(np.sqrt(2.0) * 1e20, rel=1e-5)
        assert gpu.norm(np.zeros(3, dtype=np.float32)) == 0.0
