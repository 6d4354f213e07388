class RowFFTError(Exception):
    pass


class UnsupportedLengthError(RowFFTError, ValueError):
    """No butterfly sequence can be specialized for the requested length."""

    def __init__(self, length, reason):
        super().__init__(f"cannot specialize a row FFT for N={length}: {reason}")
        self.length = length
