import sys

from fetch_from_elastic import get_elastic_installs
from check_updates import UpdateChecker
from create_json import write_verdict_reports, write_verdict_csv, write_catalog_snapshot
from office_errors import OfficeCheckError
from office_config import OFFICE_CHANNEL, OUT_DIR, CSV_OUT, SNAPSHOT_OUT


def main():
    checker = UpdateChecker()
    try:
        rows = get_elastic_installs()
        verdicts = list(checker.evaluate(OFFICE_CHANNEL, rows))
    except OfficeCheckError as e:
        print(f"[ERR] {e}", file=sys.stderr)
        return 1

    print(f"Channel: {OFFICE_CHANNEL}")
    if checker.skipped:
        print(f"[WARN] {len(checker.skipped)} observation(s) skipped as invalid", file=sys.stderr)

    if SNAPSHOT_OUT:
        write_catalog_snapshot(checker.catalog, SNAPSHOT_OUT)
    summary = write_verdict_reports(verdicts, out_dir=OUT_DIR)
    if CSV_OUT:
        write_verdict_csv(verdicts, CSV_OUT)
    print("Summary:", summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
