#!/usr/bin/env python3

import os
import subprocess

import colorama
import torch
import triton

from .. import _config

GPU_QUERY = ["nvidia-smi", "--query-gpu=name,driver_version,memory.total",
             "--format=csv,noheader"]


def query_gpu():
    """First visible GPU as reported by nvidia-smi, or an ``error`` entry."""
    try:
        result = subprocess.run(GPU_QUERY, capture_output=True, text=True, timeout=5)
    except FileNotFoundError:
        return {"error": "nvidia-smi not found"}
    except subprocess.TimeoutExpired:
        return {"error": "nvidia-smi timed out"}

    if result.returncode != 0:
        return {"error": result.stderr.strip() or f"nvidia-smi exit code {result.returncode}"}

    fields = [f.strip() for f in result.stdout.strip().split("\n")[0].split(",")]
    if len(fields) != 3:
        return {"error": f"cannot parse nvidia-smi output {result.stdout.strip()!r}"}
    name, driver, memory = fields
    return {"device": name, "driver": driver, "memory": memory}


def kernel_backend():
    if os.environ.get("TRITON_INTERPRET", "0") == "1":
        return "triton interpreter (CPU)"
    if torch.cuda.is_available():
        return f"cuda ({torch.cuda.get_device_name(0)})"
    return None


def check_env():
    """Sections of facts that decide where and how row FFTs will run."""
    return {
        "gpu": query_gpu(),
        "stack": {
            "torch": torch.__version__,
            "torch_cuda": torch.version.cuda,
            "triton": triton.__version__,
            "backend": kernel_backend(),
        },
        "rowfft": {
            "max_length": _config.ROWFFT_MAX_LENGTH,
            "num_warps": _config.ROWFFT_NUM_WARPS or "auto",
            "logs": ",".join(_config.ROWFFT_LOGS) or "off",
        },
    }


def print_env(env: dict):
    colorama.init(autoreset=True)
    ok = colorama.Fore.GREEN + "✔" + colorama.Style.RESET_ALL
    bad = colorama.Fore.RED + "✘" + colorama.Style.RESET_ALL

    print(colorama.Style.BRIGHT + " rowfft environment ".center(60, "="))
    for section, facts in env.items():
        print(colorama.Style.BRIGHT + f"[{section}]")
        width = max((len(k) for k in facts), default=0)
        for key, value in facts.items():
            # None and error entries are what keeps kernels from launching
            mark = bad if value is None or key == "error" else ok
            print(f"  {key:<{width}} : {mark} {'unavailable' if value is None else value}")
    print(colorama.Style.BRIGHT + "=" * 60 + "\n")


if __name__ == "__main__":
    print_env(check_env())
