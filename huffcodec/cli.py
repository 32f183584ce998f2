"""
Command-line front end.

    huffcodec compress   [INPUT] [OUTPUT]
    huffcodec decompress [INPUT] [OUTPUT]
    huffcodec batch  --input-root DIR --output-root DIR
    huffcodec report --input-root DIR --output-root DIR [--report-dir DIR]

Missing file names for compress/decompress are asked for on the terminal.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from huffcodec.errors import FormatError, IOUnavailable
from huffcodec.pipeline import CodecConfig, compress_file, decompress_file, run_batch_on_folder


def _prompt(name: Optional[str], label: str) -> Path:
    if name:
        return Path(name)
    return Path(input(f"Enter the {label} file name: ").strip())


def _run_file_command(args: argparse.Namespace) -> int:
    input_path = _prompt(args.input, "input")
    output_path = _prompt(args.output, "output")

    if not input_path.is_file():
        print("Error opening input file!", file=sys.stderr)
        return 1

    try:
        if args.command == "compress":
            packed = compress_file(input_path, output_path)
            print("File compressed successfully!")
            print(
                f"  {packed.symbol_total} bytes -> {output_path.stat().st_size} bytes "
                f"({len(packed.codes)} symbols, {packed.padding_bits} padding bits)"
            )
        else:
            data = decompress_file(input_path, output_path)
            print("File decompressed successfully!")
            print(f"  {len(data)} bytes written to {output_path}")
    except IOUnavailable as exc:
        if exc.action == "write":
            print("Error opening output file!", file=sys.stderr)
        else:
            print("Error opening input file!", file=sys.stderr)
        print(f"  {exc}", file=sys.stderr)
        return 1
    except FormatError as exc:
        print(f"Invalid compressed file: {exc}", file=sys.stderr)
        return 1
    return 0


def _run_batch(args: argparse.Namespace) -> int:
    cfg = CodecConfig(verify_roundtrip=not args.no_verify)
    rows = run_batch_on_folder(Path(args.input_root), Path(args.output_root), cfg=cfg)
    failed = [row for row in rows if row["status"] != "ok" or row["roundtrip_ok"] is False]
    print(f"Processed {len(rows)} files, {len(failed)} failed.")
    return 1 if failed else 0


def _run_report(args: argparse.Namespace) -> int:
    from huffcodec.reporting.report import generate_report

    output_root = Path(args.output_root)
    report_dir = Path(args.report_dir) if args.report_dir else output_root / "report"
    formats = [fmt.strip() for fmt in args.formats.split(",") if fmt.strip()]
    cfg = CodecConfig(report_formats=tuple(formats), baseline=args.baseline)
    generate_report(
        input_root=Path(args.input_root),
        output_root=output_root,
        report_dir=report_dir,
        cfg=cfg,
    )
    print(f"Report written to {report_dir}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="huffcodec", description="Huffman file compressor.")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("compress", "Compress a single file."),
        ("decompress", "Decompress a file produced by `compress`."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("input", nargs="?", help="Source file (prompted if omitted).")
        cmd.add_argument("output", nargs="?", help="Destination file (prompted if omitted).")

    batch = sub.add_parser("batch", help="Compress every file below a folder.")
    batch.add_argument("--input-root", required=True)
    batch.add_argument("--output-root", required=True)
    batch.add_argument(
        "--no-verify",
        action="store_true",
        help="skip decompressing each file again after compression",
    )

    report = sub.add_parser("report", help="Summarise a batch run as CSV/JSON.")
    report.add_argument("--input-root", required=True)
    report.add_argument("--output-root", required=True)
    report.add_argument("--report-dir", default="")
    report.add_argument("--formats", default="csv,json")
    report.add_argument("--baseline", default="dahuffman", choices=["dahuffman", "none"])
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command in ("compress", "decompress"):
        return _run_file_command(args)
    if args.command == "batch":
        return _run_batch(args)
    return _run_report(args)


if __name__ == "__main__":
    sys.exit(main())
