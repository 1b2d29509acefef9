import re
from typing import List, Set

from .run_logs import decode_log_payload

MAX_ERROR_LINES = 50
TAIL_CHARS = 2000

# Applied in this order; a later pattern never reorders an earlier group.
ERROR_PATTERNS = (
    re.compile(r"Error:[^\r\n]+", re.IGNORECASE),
    re.compile(r"ERROR:[^\r\n]+", re.IGNORECASE),
    re.compile(r"Failed:[^\r\n]+", re.IGNORECASE),
    re.compile(r"FAILED:[^\r\n]+", re.IGNORECASE),
    re.compile(r"\[error\][^\r\n]+", re.IGNORECASE),
    re.compile(r"fatal:[^\r\n]+", re.IGNORECASE),
)

def find_error_lines(log_text: str) -> List[str]:
    lines: List[str] = []
    seen: Set[int] = set()
    for pattern in ERROR_PATTERNS:
        for match in pattern.finditer(log_text):
            # Error:/ERROR: (and Failed:/FAILED:) hit the same span once case is ignored
            if match.start() in seen:
                continue
            seen.add(match.start())
            lines.append(match.group(0))
    return lines

def extract_error_excerpt(log_text: str) -> str:
    """Reduce raw log text to the lines most likely to explain the failure.

    Every pattern is applied to the whole text and its matches are kept in
    document order; groups are concatenated in pattern order and capped at
    MAX_ERROR_LINES. With no match at all the last TAIL_CHARS characters are
    returned instead.
    """
    lines = find_error_lines(log_text)
    if lines:
        print(f"[extract] {len(lines)} error lines found, keeping {min(len(lines), MAX_ERROR_LINES)}")
        return "\n".join(lines[:MAX_ERROR_LINES])

    print("[extract] no error markers found; returning log tail")
    return log_text[-TAIL_CHARS:]

def extract_errors_from_logs(data: bytes) -> str:
    return extract_error_excerpt(decode_log_payload(data))
