import os

import pytest
import torch

# kernels fall back to Triton's interpreter on machines without a GPU;
# must be set before rowfft (and the @triton.jit decorators) are imported
if not torch.cuda.is_available():
    os.environ.setdefault("TRITON_INTERPRET", "1")

DEVICE = "cuda" if torch.cuda.is_available() else "cpu"


def length_id(n):
    return f"N{n}"


@pytest.fixture
def device():
    return DEVICE


@pytest.fixture
def rng():
    gen = torch.Generator().manual_seed(0)

    def make(rows, cols):
        re = torch.randn((rows, cols), generator=gen)
        im = torch.randn((rows, cols), generator=gen)
        return torch.complex(re, im).to(DEVICE)
    return make
