import csv
import json
import os
import re
from dataclasses import asdict
from datetime import datetime, timezone

from check_updates import VERDICT_FIELDS
from office_versions import format_version


def sanitize_filename(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "_", name or "unknown")


def _reason(v) -> str:
    if v.expected_build is None:
        return f"no latest build published for channel {v.channel!r}"
    if v.is_latest_version is None:
        return f"cannot compare {v.observed_build} with {v.expected_build}"
    if v.is_latest_version:
        return f"{v.observed_build} >= {v.expected_build}"
    return f"{v.observed_build} < {v.expected_build}"


def write_verdict_reports(verdicts, out_dir="office_update_reports"):
    """
    verdicts: iterable of check_updates.Verdict
    out_dir:  output directory for per-computer JSON files

    Returns a small summary dict.
    """
    os.makedirs(out_dir, exist_ok=True)
    checked_at = datetime.now(timezone.utc).isoformat()

    summary = {"total": 0, "up_to_date": 0, "outdated": 0, "unknown": 0}
    for v in verdicts:
        payload = asdict(v)
        payload["computer_id"] = None if v.computer_id is None else str(v.computer_id)
        payload["reason"] = _reason(v)
        payload["checked_at"] = checked_at

        fname = sanitize_filename(v.computer_name) + ".json"
        with open(os.path.join(out_dir, fname), "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        summary["total"] += 1
        if v.requires_update is None:
            summary["unknown"] += 1
        elif v.requires_update:
            summary["outdated"] += 1
        else:
            summary["up_to_date"] += 1

    print(f"[OK] wrote {summary['total']} report(s) to {out_dir}")
    return summary


def write_verdict_csv(verdicts, path):
    outdir = os.path.dirname(os.path.abspath(path)) or "."
    os.makedirs(outdir, exist_ok=True)
    n = 0
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=VERDICT_FIELDS)
        writer.writeheader()
        for v in verdicts:
            writer.writerow(asdict(v))
            n += 1
    print(f"[OK] wrote {path} ({n} verdict(s))")
    return n


def _release_json(rel) -> dict:
    doc = asdict(rel)
    for key, value in doc.items():
        if isinstance(value, datetime):
            doc[key] = value.isoformat()
        elif isinstance(value, tuple):
            doc[key] = format_version(value)
    return doc


def write_catalog_snapshot(catalog, path):
    """Atomically write the scraped catalog as a JSON array."""
    outdir = os.path.dirname(os.path.abspath(path)) or "."
    os.makedirs(outdir, exist_ok=True)
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        json.dump([_release_json(r) for r in catalog], f, indent=2, ensure_ascii=False)
    os.replace(tmp, path)
    print(f"[OK] wrote {path}")
