import logging
import os
import sys

from speccheck import backends, config, harness, report, vectorfile
from speccheck.errors import ConstructionError, EncodingError, FormatError
from speccheck.vectors import generate_test_vectors

logger = logging.getLogger("speccheck")


def _write_vector_files(vectors):
    os.makedirs(config.OUTPUT_DIR, exist_ok=True)
    vectorfile.write_json(config.output_path(config.JSON_FILE_NAME), vectors)
    vectorfile.write_text(config.output_path(config.TEXT_FILE_NAME), vectors)


def main(argv=None) -> int:
    args = config.parse_cli_arguments(argv)

    stored = getattr(args, "vectors", None)
    if stored:
        try:
            vectors = vectorfile.load_json(stored)
        except (EncodingError, OSError) as e:
            print(f"reading vector file failed: {e}", file=sys.stderr)
            return 1
        logger.info("loaded %d vectors from %s", len(vectors), stored)
    else:
        try:
            vectors = generate_test_vectors()
            if args.command == "generate" or not args.no_files:
                _write_vector_files(vectors)
        except (ConstructionError, EncodingError) as e:
            print(f"vector generation failed: {e}", file=sys.stderr)
            return 1

    if args.command == "generate":
        logger.info("wrote %d vectors to %s", len(vectors), config.OUTPUT_DIR)
        return 0

    selected = backends.default_backends()
    if args.backends:
        known = {b.name for b in selected}
        unknown = [name for name in args.backends if name not in known]
        if unknown:
            print(f"unknown backends {unknown}, available: {sorted(known)}", file=sys.stderr)
            return 2
        selected = [b for b in selected if b.name in args.backends]

    matrix = harness.run_all(vectors, selected)
    for error in matrix.errors.values():
        print(f"harness: {error}", file=sys.stderr)

    try:
        if args.no_files:
            table = report.format_table(matrix)
        else:
            table = report.write_report(config.output_path(config.REPORT_FILE_NAME), matrix)
    except FormatError as e:
        # rejected or failed vectors are the measured result, not a failure of the tool
        print(f"report formatting failed: {e}", file=sys.stderr)
        return 0

    print(table, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
