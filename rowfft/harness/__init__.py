from .base import BenchBase
from .check_env import check_env, print_env

__all__ = ["BenchBase", "check_env", "print_env"]
