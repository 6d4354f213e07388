from ._exception import RowFFTError, UnsupportedLengthError
from .plan import ButterflyStage, FFTPlan, LaneOp, make_plan
from .fft_triton import fft_rows, ifft_rows, solve

__all__ = [
    "RowFFTError", "UnsupportedLengthError",
    "ButterflyStage", "FFTPlan", "LaneOp", "make_plan",
    "fft_rows", "ifft_rows", "solve",
]
