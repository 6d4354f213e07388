import ctypes
from typing import Any, List, Dict
import math
import torch

from .harness import BenchBase


class FFTRowsBench(BenchBase):
    def __init__(self, device="cuda"):
        super().__init__(
            name="Row-wise Fast Fourier Transform",
            atol=1e-03,
            rtol=1e-03,
            device=device,
        )

    def reference_impl(self, matrix: torch.Tensor, sign: float, N: int, axis: int = -1):
        """
        Ground truth with torch.fft along `axis`, written back in place.
        sign=-1 is the inverse direction without the 1/N scaling.
        """
        assert matrix.dim() == 2
        assert matrix.shape[axis] == N
        assert matrix.dtype == torch.complex64

        if sign > 0:
            ref = torch.fft.fft(matrix, dim=axis)
        else:
            ref = torch.fft.ifft(matrix, dim=axis, norm="forward")
        matrix.copy_(ref)

    def get_solve_signature(self) -> Dict[str, tuple]:
        return {
            "matrix": (ctypes.POINTER(ctypes.c_float), "inout"),  # rows x cols complex64
            "sign": (ctypes.c_float, "in"),
            "N": (ctypes.c_int, "in"),
            "axis": (ctypes.c_int, "in"),
        }

    def _matrix(self, rows, cols):
        return torch.randn((rows, cols), device=self.device, dtype=torch.complex64)

    def generate_example_test(self) -> Dict[str, Any]:
        # all ones -> DC spike [4, 0, 0, 0]
        matrix = torch.ones((1, 4), device=self.device, dtype=torch.complex64)
        return {"matrix": matrix, "sign": 1.0, "N": 4, "axis": -1}

    def generate_functional_test(self) -> List[Dict[str, Any]]:
        cases: List[Dict[str, Any]] = []

        # 1. Impulse, flat spectrum
        N = 8
        impulse = torch.zeros((2, N), device=self.device, dtype=torch.complex64)
        impulse[:, 0] = 1.0
        cases.append({"matrix": impulse, "sign": 1.0, "N": N, "axis": -1})

        # 2. Single-frequency sinusoid per row
        N = 16
        k = 3
        n = torch.arange(N, device=self.device, dtype=torch.float32)
        phase = 2.0 * math.pi * k * n / N
        tone = torch.complex(torch.cos(phase), torch.sin(phase)).repeat(4, 1)
        cases.append({"matrix": tone, "sign": 1.0, "N": N, "axis": -1})

        # 3. Random rows
        N = 256
        cases.append({"matrix": self._matrix(8, N), "sign": 1.0, "N": N, "axis": -1})

        # 4. Inverse direction, unnormalized
        N = 64
        cases.append({"matrix": self._matrix(3, N), "sign": -1.0, "N": N, "axis": -1})

        # 5. Columns through the strided convention
        N = 32
        cases.append({"matrix": self._matrix(N, 5), "sign": 1.0, "N": N, "axis": 0})

        # 6. Length-1 rows are returned unchanged
        cases.append({"matrix": self._matrix(6, 1), "sign": -1.0, "N": 1, "axis": -1})

        return cases

    def generate_performance_test(self) -> Dict[str, Any]:
        # one reciprocal-space grid worth of rows
        N = 1024
        return {"matrix": self._matrix(4096, N), "sign": 1.0, "N": N, "axis": -1}


if __name__ == "__main__":
    benchmark = FFTRowsBench()
    benchmark.check_env()

    from rowfft.fft_triton import solve as solve_triton

    benchmark.verify_and_bench(solve_fn=solve_triton)
