import csv
import json
import re
from typing import Tuple

from .constants import spigot_fractional_digits


def extract_fractional_digits(display: str) -> str:
    if "." not in display:
        return ""
    return display.split(".", 1)[1]


def count_correct_digits(display: str) -> int:
    fractional = extract_fractional_digits(display)
    expected = spigot_fractional_digits(len(fractional))
    count = 0
    for a, b in zip(fractional, expected):
        if a != b:
            break
        count += 1
    return count


def verify_fractional_digits(fractional_digits: str, samples: int, tolerance: int = 1) -> Tuple[bool, str]:
    samples = min(int(samples), len(fractional_digits))
    if samples <= 0:
        return True, "verification skipped"
    checked = max(0, samples - int(tolerance))
    expected = spigot_fractional_digits(checked)
    actual = fractional_digits[:checked]
    return expected == actual, f"pi spigot ({checked} digits)"


def _scan_fractional_digits(text: str, samples: int) -> str:
    out = []
    seen_dot = False
    for ch in text:
        if not seen_dot:
            if ch == ".":
                seen_dot = True
            continue
        if not re.match(r"[0-9]", ch):
            break
        out.append(ch)
        if len(out) >= samples:
            break
    return "".join(out)


def read_result_value(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    stripped = text.strip()
    if stripped.startswith("{"):
        payload = json.loads(stripped.splitlines()[0])
        if "value" not in payload:
            raise ValueError("missing value field")
        return str(payload["value"])
    lines = stripped.splitlines()
    if lines and lines[0].split("\t")[-1] == "value":
        sep = "\t"
    elif lines and lines[0].split(",")[-1] == "value":
        sep = ","
    else:
        return text
    if len(lines) < 2:
        raise ValueError("missing data row")
    row = next(csv.reader([lines[1]], delimiter=sep))
    return row[-1]


def read_fractional_digits_from_file(path: str, samples: int) -> str:
    samples = int(samples)
    if samples <= 0:
        return ""
    return _scan_fractional_digits(read_result_value(path), samples)
