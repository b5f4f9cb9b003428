import re

# ASCII word characters, dots and hyphens survive; everything else becomes "_".
_UNSAFE = re.compile(r"[^\w.\-]", re.ASCII)

def sanitize(value: str = "") -> str:
    return _UNSAFE.sub("_", value or "")
