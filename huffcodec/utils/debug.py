import os
import sys

# Debug logging controlled by environment variable HUFFCODEC_DEBUG
_DEBUG = os.environ.get("HUFFCODEC_DEBUG", "").lower() in {"1", "true", "yes"}


def dbg(tag: str, msg: str) -> None:
    if _DEBUG:
        print(f"[{tag}] {msg}", file=sys.stderr)
