from typing import Optional

UNPARSEABLE_LOG = "Unable to parse log content"
ZIP_MAGIC = b"PK\x03\x04"

def is_zip_archive(data: bytes) -> bool:
    return data[:4] == ZIP_MAGIC

async def fetch_raw_logs(gh, owner: str, repo: str, run_id: int, timeout: Optional[float] = None) -> bytes:
    """Download the run's log archive exactly as GitHub serves it.

    The payload is a zip container; it is returned untouched and nothing here
    unpacks it.
    """
    data = await gh.get_run_logs(owner, repo, run_id, timeout=timeout)
    kind = "zip archive" if is_zip_archive(data) else "raw payload"
    print(f"[logs] {owner}/{repo} run {run_id}: downloaded {len(data)} bytes ({kind})")
    return data

def decode_log_payload(data: bytes) -> str:
    # Archives are not unpacked, so a zip (or anything else that is not
    # UTF-8 text) is reported as unparseable rather than mis-decoded.
    if is_zip_archive(data):
        print("[logs] payload is a zip archive; unpacking is not supported")
        return UNPARSEABLE_LOG
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        print("[logs] payload is not valid UTF-8")
        return UNPARSEABLE_LOG
    return text.lstrip("\ufeff")
