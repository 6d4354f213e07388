import os

# Comma separated string for selective debug logging,
# values are case in-sensitive
ROWFFT_LOG_KEYS = {"PLAN", "LAUNCH"}


def parse_rowfft_logs_env():
    env = os.environ.get("ROWFFT_LOGS", "")
    ret = []
    for x in env.split(","):
        x = x.upper().strip()
        if len(x) == 0:
            continue
        if x not in ROWFFT_LOG_KEYS:
            raise RuntimeError(f"Unexpected value {x} in ROWFFT_LOGS, "
                               f"supported values are {ROWFFT_LOG_KEYS}")
        ret.append(x)
    return ret


def parse_int_env(name, default):
    value = os.environ.get(name, "").strip()
    if value == "":
        return default
    try:
        ret = int(value)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {value!r}") from None
    if ret < 1:
        raise RuntimeError(f"{name} must be positive, got {ret}")
    return ret


ROWFFT_LOGS = parse_rowfft_logs_env()

ROWFFT_MAX_LENGTH = parse_int_env("ROWFFT_MAX_LENGTH", 8192)

# None lets the plan pick a width from N
ROWFFT_NUM_WARPS = parse_int_env("ROWFFT_NUM_WARPS", None)
