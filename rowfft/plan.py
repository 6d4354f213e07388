"""
Specialization of the row FFT for a fixed transform length.

A plan is the loop-free stage sequence of a radix-2 Stockham autosort FFT:
every stage reads one staging buffer and writes the other, each lane produces
exactly one output sample, and the result comes out in natural order. The
Triton kernel in ``fft_triton`` unrolls the same sequence with ``N`` and
``LOG_N`` as compile-time constants; the plan is what the host checks and
reasons about before a variant is compiled.

The kernel does not read the plan at run time. ``ButterflyStage.lane_op``
restates its index arithmetic (partners ``j`` and ``j + N/2``, twiddle
``(j % span) * twiddle_step``, subtract on odd ``lane // span``) and is the
host-side reference any change to ``fft_rows_kernel`` has to keep matching.
"""

import functools
import logging
from typing import List, NamedTuple

from . import _config
from ._exception import UnsupportedLengthError

logger = logging.getLogger(__name__)


class LaneOp(NamedTuple):
    # dst[lane] = src[a] +/- w[twiddle] * src[b]
    a: int
    b: int
    twiddle: int
    subtract: bool


class ButterflyStage(NamedTuple):
    index: int
    span: int           # length of the sub-transforms merged by this stage
    half: int           # offset between the two partners, always N / 2
    twiddle_step: int   # N / (2 * span)
    src: int            # staging buffer read (0 or 1)
    dst: int            # staging buffer written

    def lane_op(self, lane: int) -> LaneOp:
        pos = lane % self.span
        j = (lane // (2 * self.span)) * self.span + pos
        subtract = (lane // self.span) % 2 == 1
        return LaneOp(j, j + self.half, pos * self.twiddle_step, subtract)


class FFTPlan(NamedTuple):
    length: int
    log_length: int
    stages: List[ButterflyStage]

    @property
    def output_buffer(self) -> int:
        """Staging buffer holding the transformed row after the last stage."""
        return self.log_length % 2

    @property
    def num_warps(self) -> int:
        if _config.ROWFFT_NUM_WARPS is not None:
            return _config.ROWFFT_NUM_WARPS
        return min(8, max(1, self.length // 32))

    def schedule(self, stage: int, lane: int) -> LaneOp:
        if not 0 <= lane < self.length:
            raise IndexError(f"lane {lane} out of range for N={self.length}")
        return self.stages[stage].lane_op(lane)


def check_length(n, max_length=None):
    if max_length is None:
        max_length = _config.ROWFFT_MAX_LENGTH
    if isinstance(n, bool) or not isinstance(n, int):
        raise UnsupportedLengthError(n, "length must be an integer")
    if n < 1:
        raise UnsupportedLengthError(n, "length must be positive")
    if n & (n - 1) != 0:
        raise UnsupportedLengthError(n, "only power-of-two lengths have a butterfly sequence")
    if n > max_length:
        raise UnsupportedLengthError(
            n, f"exceeds ROWFFT_MAX_LENGTH={max_length} lanes per work-group")


@functools.lru_cache(maxsize=None, typed=True)
def make_plan(n: int, max_length: int = None) -> FFTPlan:
    check_length(n, max_length)
    log_n = n.bit_length() - 1
    stages = []
    for s in range(log_n):
        span = 1 << s
        stages.append(ButterflyStage(
            index=s,
            span=span,
            half=n // 2,
            twiddle_step=n // (2 * span),
            src=s % 2,
            dst=(s + 1) % 2,
        ))
    plan = FFTPlan(n, log_n, stages)
    if "PLAN" in _config.ROWFFT_LOGS:
        logger.debug("specialized row FFT: N=%d, %d stages, output in data%d",
                     n, log_n, plan.output_buffer)
    return plan
