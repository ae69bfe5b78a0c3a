"""
Test backend selection, the default backend and the CPU kernels.

GPU-specific checks live in test_gpu_backends.py and are skipped without
the hardware.
"""

import pytest
import numpy as np

import densela
from densela import Vector3, Matrix3, dot, multiply, norm
from densela._backends import (
    PYTORCH_AVAILABLE,
    BackendBase,
    get_backend,
    get_default_backend,
    list_available_backends,
    print_backend_info,
    set_default_backend,
)
from densela._backends.cpu_backend import CPUBackend
from densela._backends.precision_detector import (
    GPUCapabilities,
    detect_gpu_capabilities,
    resolve_fp64,
)


GPU_CAPS = detect_gpu_capabilities()
HAS_NVIDIA = GPU_CAPS.gpu_type == 'nvidia' and PYTORCH_AVAILABLE
HAS_APPLE = GPU_CAPS.gpu_type == 'mps' and PYTORCH_AVAILABLE

METAL = GPUCapabilities(True, 'mps', 'Apple Metal GPU', False)
CUDA = GPUCapabilities(True, 'nvidia', 'Some CUDA card', True)


@pytest.fixture
def restore_default_backend():
    previous = get_default_backend()
    yield
    set_default_backend(previous)


class TestSelection:
    """Test hardware detection and backend lookup by name."""

    def test_capabilities_are_consistent(self):
        assert GPU_CAPS.gpu_type in ('nvidia', 'mps', 'none')
        assert GPU_CAPS.has_gpu == (GPU_CAPS.gpu_type != 'none')
        if GPU_CAPS.gpu_type == 'mps':
            assert not GPU_CAPS.supports_fp64

    def test_cpu_always_listed(self):
        backends = list_available_backends()
        assert backends[0] == 'cpu'
        assert ('pytorch' in backends) == HAS_NVIDIA
        assert ('mps' in backends) == HAS_APPLE

    def test_cpu_by_name(self):
        backend = get_backend('cpu')
        assert isinstance(backend, CPUBackend)
        assert backend.get_device_info()['backend'] == 'cpu'

    def test_auto_returns_a_backend(self):
        assert isinstance(get_backend('auto'), BackendBase)

    def test_auto_fp64_without_gpu_support_uses_cpu(self):
        if not GPU_CAPS.has_gpu or not GPU_CAPS.supports_fp64:
            assert get_backend('auto', use_fp64=True).name == 'cpu'

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            get_backend('tpu')

    @pytest.mark.skipif(GPU_CAPS.has_gpu, reason="Machine has a GPU")
    def test_gpu_requested_without_gpu(self):
        with pytest.raises(ValueError, match="No GPU detected"):
            get_backend('gpu')

    @pytest.mark.skipif(HAS_NVIDIA, reason="Machine has a CUDA GPU")
    def test_cuda_requested_without_cuda(self):
        with pytest.raises(RuntimeError):
            get_backend('pytorch')

    @pytest.mark.skipif(HAS_APPLE, reason="Machine has an Apple GPU")
    def test_mps_requested_without_apple_gpu(self):
        with pytest.raises(RuntimeError):
            get_backend('mps')

    def test_backend_report(self, capsys):
        print_backend_info()
        out = capsys.readouterr().out
        assert 'Backend Status' in out
        assert 'Default Backend' in out


class TestResolveFP64:
    """Test GPU kernel precision resolution."""

    @pytest.mark.parametrize("use_fp64", [None, False])
    def test_fp32_by_default(self, use_fp64):
        assert resolve_fp64(CUDA, use_fp64) is False
        assert resolve_fp64(METAL, use_fp64) is False

    def test_fp64_where_supported(self):
        assert resolve_fp64(CUDA, True) is True

    def test_fp64_on_metal(self):
        with pytest.raises(RuntimeError, match="not supported on Apple Metal GPU"):
            resolve_fp64(METAL, True)


class TestCPUBackend:
    """Test raw NumPy kernels."""

    def test_kernels(self):
        backend = CPUBackend()
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([4.0, 5.0, 6.0])

        np.testing.assert_array_equal(backend.add(a, b), [5.0, 7.0, 9.0])
        np.testing.assert_array_equal(backend.subtract(a, b), [-3.0, -3.0, -3.0])
        np.testing.assert_array_equal(backend.scale(2.0, a), [2.0, 4.0, 6.0])
        np.testing.assert_array_equal(backend.cross(a, b), [-3.0, 6.0, -3.0])
        assert backend.dot(a, b) == 32.0
        assert backend.norm(np.array([3.0, 4.0])) == 5.0

        m = np.arange(6, dtype=np.float64).reshape(2, 3)
        np.testing.assert_array_equal(backend.transpose(m), m.T)
        np.testing.assert_array_equal(backend.matmul(m, a), m @ a)

    def test_keeps_float32(self):
        backend = CPUBackend()
        a = np.ones(3, dtype=np.float32)
        assert backend.add(a, a).dtype == np.float32
        assert backend.scale(0.1, a).dtype == np.float32
        assert backend.matmul(np.eye(3, dtype=np.float32), a).dtype == np.float32

    def test_promotes_mixed_precision(self):
        backend = CPUBackend()
        a = np.ones(3, dtype=np.float32)
        b = np.ones(3, dtype=np.float64)
        assert backend.add(a, b).dtype == np.float64
        assert backend.cross(a, b).dtype == np.float64

    def test_float32_norm_does_not_underflow(self):
        a = np.array([1e-30, 0.0, 0.0], dtype=np.float32)
        assert CPUBackend().norm(a) == pytest.approx(1e-30, rel=1e-6, abs=0)

    def test_float32_norm_does_not_overflow(self):
        a = np.array([1e20, 1e20, 0.0], dtype=np.float32)
        assert CPUBackend().norm(a) == pytest.approx(np.sqrt(2.0) * 1e20, rel=1e-6)


class TestDefaultBackend:
    """Test process-wide default backend configuration."""

    def test_default_backend_exists(self):
        assert isinstance(get_default_backend(), BackendBase)

    def test_set_default_by_name(self, restore_default_backend):
        backend = set_default_backend('cpu')
        assert get_default_backend() is backend
        assert backend.name == 'cpu'

    def test_set_default_by_instance(self, restore_default_backend):
        backend = CPUBackend()
        set_default_backend(backend)
        assert get_default_backend() is backend

    def test_explicit_backend_argument(self):
        backend = CPUBackend()
        a = Vector3([1.0, 2.0, 2.0])
        assert norm(a, backend=backend) == 3.0
        assert dot(a, a, backend=backend) == 9.0
        assert multiply(Matrix3.identity(), a, backend=backend) == a

    def test_package_exports(self):
        assert densela.get_default_backend is get_default_backend


@pytest.mark.skipif(not HAS_APPLE, reason="Apple Silicon not available")
def test_mps_rejects_fp64():
    with pytest.raises(RuntimeError, match="not supported"):
        get_backend('mps', use_fp64=True)
