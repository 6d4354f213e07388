import logging

import torch
import triton
import triton.language as tl

from . import _config
from .plan import make_plan

logger = logging.getLogger(__name__)

# Per-program scratch layout, in units of N float32 values:
# [w_re, w_im, data0_re, data0_im, data1_re, data1_im]
SCRATCH_SLOTS = 6


@triton.jit
def complex_mul(a_re, a_im, b_re, b_im):
    return a_re * b_re - a_im * b_im, a_re * b_im + a_im * b_re


@triton.jit
def twiddle(lane, sign, N: tl.constexpr):
    # w[i] = exp(-sign * 2*pi*i/N), not normalized for the inverse direction
    angle = -sign * (lane.to(tl.float32) * (6.283185307179586 / N))
    return tl.cos(angle), tl.sin(angle)


@triton.jit
def fft_rows_kernel(
    matrix_ptr, scratch_ptr,
    sign,
    row_stride, elem_stride,
    N: tl.constexpr, LOG_N: tl.constexpr, SLOTS: tl.constexpr,
):
    """
    One program transforms one row of an interleaved complex64 matrix in place.

    Every lane of the program owns one sample. The twiddle table and the two
    staging buffers live in this program's slice of ``scratch_ptr`` (``SLOTS``
    runs of N floats) and are synchronized with full work-group barriers; no
    lane skips a stage.

    stride arguments are in float32 units of the ``view_as_real`` matrix, so a
    column transform is launched with the two strides swapped.
    """
    # 64-bit offsets, scratch and matrix may exceed 2**31 floats
    row = tl.program_id(0).to(tl.int64)
    lane = tl.arange(0, N)

    arena = scratch_ptr + row * (SLOTS * N)
    w_re_ptr = arena
    w_im_ptr = arena + N

    # twiddle table, one factor per lane
    w_re, w_im = twiddle(lane, sign, N)
    tl.store(w_re_ptr + lane, w_re)
    tl.store(w_im_ptr + lane, w_im)

    # stage the row into data0
    x_ptr = matrix_ptr + row * row_stride + lane.to(tl.int64) * elem_stride
    tl.store(arena + 2 * N + lane, tl.load(x_ptr))
    tl.store(arena + 3 * N + lane, tl.load(x_ptr + 1))
    tl.debug_barrier()

    # Stockham radix-2: stage s merges sub-transforms of length 2**s,
    # data0/data1 swap roles by stage parity
    for stage in tl.static_range(LOG_N):
        span = 1 << stage
        src = arena + 2 * N + (stage % 2) * (2 * N)
        dst = arena + 2 * N + ((stage + 1) % 2) * (2 * N)

        pos = lane % span
        j = (lane // (2 * span)) * span + pos
        a_re = tl.load(src + j)
        a_im = tl.load(src + N + j)
        b_re = tl.load(src + j + N // 2)
        b_im = tl.load(src + N + j + N // 2)

        tw = pos * (N // (2 * span))
        t_re, t_im = complex_mul(b_re, b_im, tl.load(w_re_ptr + tw), tl.load(w_im_ptr + tw))

        upper = (lane // span) % 2 == 0
        tl.store(dst + lane, tl.where(upper, a_re + t_re, a_re - t_re))
        tl.store(dst + N + lane, tl.where(upper, a_im + t_im, a_im - t_im))
        tl.debug_barrier()

    # natural order, lane i holds output bin i
    out = arena + 2 * N + (LOG_N % 2) * (2 * N)
    tl.store(x_ptr, tl.load(out + lane))
    tl.store(x_ptr + 1, tl.load(out + N + lane))


def _transform_length(matrix: torch.Tensor, axis: int) -> int:
    if matrix.dim() != 2:
        raise ValueError(f"expected a 2-D matrix, got shape {tuple(matrix.shape)}")
    if axis not in (-2, -1, 0, 1):
        raise ValueError(f"axis must be one of -2, -1, 0, 1, got {axis}")
    return matrix.shape[axis]


def _axis_strides(matrix: torch.Tensor, axis: int):
    _transform_length(matrix, axis)
    if matrix.dtype != torch.complex64:
        raise TypeError(f"expected a complex64 matrix, got {matrix.dtype}")
    if matrix.is_conj():
        raise ValueError("conjugate views are not transformed in place, "
                         "call resolve_conj() on the matrix first")
    ri = torch.view_as_real(matrix)
    s_row, s_col, _ = ri.stride()
    if axis in (-1, 1):
        return ri, matrix.shape[0], s_row, s_col
    return ri, matrix.shape[1], s_col, s_row


# matrix is a complex64 tensor on the GPU, transformed in place along `axis`
def solve(matrix: torch.Tensor, sign: float, N: int, axis: int = -1):
    plan = make_plan(N)
    ri, num_rows, row_stride, elem_stride = _axis_strides(matrix, axis)
    if matrix.shape[axis] != N:
        raise ValueError(f"transform axis has length {matrix.shape[axis]}, plan is for N={N}")
    if num_rows == 0:
        return

    scratch = torch.empty((num_rows, SCRATCH_SLOTS, N), device=matrix.device, dtype=torch.float32)

    if "LAUNCH" in _config.ROWFFT_LOGS:
        logger.debug("launching row FFT: N=%d rows=%d sign=%s axis=%d num_warps=%d",
                     N, num_rows, sign, axis, plan.num_warps)

    grid = (num_rows, )
    fft_rows_kernel[grid](
        ri, scratch,
        float(sign),
        row_stride, elem_stride,
        N=N, LOG_N=plan.log_length, SLOTS=SCRATCH_SLOTS,
        num_warps=plan.num_warps,
    )


def fft_rows(matrix: torch.Tensor, axis: int = -1) -> torch.Tensor:
    solve(matrix, 1.0, _transform_length(matrix, axis), axis)
    return matrix


def ifft_rows(matrix: torch.Tensor, axis: int = -1, normalize: bool = True) -> torch.Tensor:
    """Inverse direction; the 1/N scaling is a separate pass after the kernel."""
    n = _transform_length(matrix, axis)
    solve(matrix, -1.0, n, axis)
    if normalize:
        matrix.div_(n)
    return matrix
