import json
from typing import Dict, Tuple


FORMATS = ("txt", "json", "csv", "tsv", "ndjson")


def serialize_payload(value: str, fmt: str, meta: Dict) -> Tuple[bytes, str]:
    fmt = fmt.lower().strip()
    if fmt == "txt":
        return value.encode("utf-8"), "text/plain"
    if fmt == "json":
        payload = dict(meta)
        payload["value"] = value
        return (
            json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8"),
            "application/json",
        )
    if fmt in {"csv", "tsv"}:
        sep = "," if fmt == "csv" else "\t"
        header = ["digits", "workers", "terms", "working_bits", "final_bits", "elapsed", "value"]
        row = [str(meta.get(h)) for h in header[:-1]] + [value]
        out = sep.join(header) + "\n" + sep.join(row) + "\n"
        mime = "text/csv" if fmt == "csv" else "text/tab-separated-values"
        return out.encode("utf-8"), mime
    if fmt == "ndjson":
        payload = dict(meta)
        payload["value"] = value
        out = json.dumps(payload, ensure_ascii=False, separators=(",", ":")) + "\n"
        return out.encode("utf-8"), "application/x-ndjson"
    raise ValueError(f"unsupported format: {fmt}")
