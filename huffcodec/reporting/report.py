from __future__ import annotations

import csv
import json
import statistics
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from dahuffman import HuffmanCodec

from huffcodec.encoding_schemes import CompressedFile, decompress
from huffcodec.errors import FormatError
from huffcodec.pipeline.config import CodecConfig
from huffcodec.utils.batch import compressed_output_path, decoded_output_path

REPORT_COLUMNS = [
    "input_path",
    "status",
    "original_size_bytes",
    "compressed_size_bytes",
    "compression_ratio",
    "distinct_symbols",
    "encoded_bits",
    "padding_bits",
    "body_size_bytes",
    "baseline_body_bytes",
    "roundtrip_ok",
]


def baseline_body_size(data: bytes, baseline: str = "dahuffman") -> Optional[int]:
    """
    Payload size the baseline coder produces for `data` (code table excluded).

    dahuffman appends its own end-of-file symbol, so its payload can be a
    few bits longer than ours for the same distribution.
    """
    if baseline.lower() == "none":
        return None
    if baseline.lower() != "dahuffman":
        raise ValueError(f"Unsupported baseline: {baseline}")
    if not data:
        return 0
    codec = HuffmanCodec.from_data(data)
    return len(codec.encode(data))


def _iter_files(root: Path) -> Iterable[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


def _format_csv_value(value: object) -> object:
    if value is None:
        return ""
    return value


def _file_row(
    input_file: Path,
    input_root: Path,
    output_root: Path,
    cfg: CodecConfig,
) -> Dict[str, object]:
    rel_path = input_file.relative_to(input_root)
    original = input_file.read_bytes()
    row: Dict[str, object] = {
        "input_path": str(rel_path),
        "status": "ok",
        "original_size_bytes": len(original),
        "baseline_body_bytes": baseline_body_size(original, cfg.baseline),
    }

    compressed_path = compressed_output_path(rel_path, output_root, cfg)
    if not compressed_path.exists():
        row["status"] = "missing_compressed"
        return row

    blob = compressed_path.read_bytes()
    row["compressed_size_bytes"] = len(blob)
    row["compression_ratio"] = round(len(original) / len(blob), 4) if blob else None

    try:
        packed = CompressedFile.from_bytes(blob)
        decoded = decompress(packed)
    except FormatError as exc:
        row["status"] = f"format_error: {exc}"
        row["roundtrip_ok"] = False
        return row

    row["distinct_symbols"] = len(packed.codes)
    row["encoded_bits"] = packed.total_bits
    row["padding_bits"] = packed.padding_bits
    row["body_size_bytes"] = len(packed.body)
    row["roundtrip_ok"] = decoded == original

    decoded_path = decoded_output_path(rel_path, output_root, cfg)
    if decoded_path.exists() and decoded_path.read_bytes() != original:
        row["status"] = "decoded_mismatch"
        row["roundtrip_ok"] = False
    return row


def generate_report(
    input_root: Path,
    output_root: Path,
    report_dir: Path,
    formats: Sequence[str] | None = None,
    cfg: CodecConfig | None = None,
) -> Dict[str, object]:
    """
    Compare every input file with its batch outputs and write the report.

    `formats` defaults to `cfg.report_formats`.
    """
    if cfg is None:
        cfg = CodecConfig()
    if formats is None:
        formats = cfg.report_formats

    input_root = input_root.resolve()
    output_root = output_root.resolve()
    report_dir = report_dir.resolve()

    rows: List[Dict[str, object]] = [
        _file_row(input_file, input_root, output_root, cfg)
        for input_file in _iter_files(input_root)
    ]

    ratios = [r["compression_ratio"] for r in rows if r.get("compression_ratio")]
    success_count = sum(1 for r in rows if r.get("roundtrip_ok"))
    summary = {
        "total_files": len(rows),
        "compressed_present": sum(1 for r in rows if r.get("compressed_size_bytes") is not None),
        "success_count": success_count,
        "success_rate": (success_count / len(rows)) if rows else 0.0,
        "total_original_bytes": sum(r["original_size_bytes"] for r in rows),
        "total_compressed_bytes": sum(r.get("compressed_size_bytes") or 0 for r in rows),
        "mean_compression_ratio": statistics.mean(ratios) if ratios else 0.0,
    }

    meta = {
        "input_root": str(input_root),
        "output_root": str(output_root),
        "report_dir": str(report_dir),
        "baseline": cfg.baseline,
        "generated_at_utc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }

    report_dir.mkdir(parents=True, exist_ok=True)
    formats = [fmt.lower() for fmt in formats]

    if "csv" in formats:
        csv_path = report_dir / "report.csv"
        with csv_path.open("w", newline="", encoding="utf-8") as csv_file:
            writer = csv.DictWriter(csv_file, fieldnames=REPORT_COLUMNS)
            writer.writeheader()
            for row in rows:
                writer.writerow({k: _format_csv_value(row.get(k)) for k in REPORT_COLUMNS})

    if "json" in formats:
        json_path = report_dir / "report.json"
        report_payload = {"meta": meta, "summary": summary, "files": rows}
        json_path.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")

    return {"meta": meta, "summary": summary, "files": rows}

