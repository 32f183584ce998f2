import os
import sys
from pathlib import Path
from typing import Dict, List

from huffcodec.errors import FormatError, IOUnavailable
from huffcodec.pipeline.config import CodecConfig
from huffcodec.pipeline.runner import compress_file, decompress_file
from huffcodec.utils.file_utils import (
    add_suffix_to_top_level,
    compressed_filename,
    decompressed_filename,
)


def compressed_output_path(rel_path: Path, output_root: Path, cfg: CodecConfig) -> Path:
    rel_dir = add_suffix_to_top_level(rel_path.parent, "_compressed")
    return output_root / "out_compressed" / rel_dir / compressed_filename(
        Path(rel_path.name), cfg.compressed_suffix
    ).name


def decoded_output_path(rel_path: Path, output_root: Path, cfg: CodecConfig) -> Path:
    rel_dir = add_suffix_to_top_level(rel_path.parent, "_decoded")
    return output_root / "out_decoded" / rel_dir / decompressed_filename(
        Path(rel_path.name), "", cfg.decoded_suffix
    ).name


def run_batch_on_folder(
    input_root: Path,
    output_root: Path,
    cfg: CodecConfig | None = None,
) -> List[Dict[str, object]]:
    """
    Compress every file below `input_root` into `output_root`.

    With `cfg.verify_roundtrip` each compressed file is decompressed again
    into a sibling `out_decoded` tree. Returns one result row per file.
    """
    if cfg is None:
        cfg = CodecConfig()

    input_root = input_root.resolve()
    output_root = output_root.resolve()

    rows: List[Dict[str, object]] = []
    for root, dirs, files in os.walk(input_root):
        dirs.sort()
        root_path = Path(root)
        for filename in sorted(files):
            in_path = root_path / filename
            print("Processing:", in_path)
            rows.append(process_file(in_path, in_path.relative_to(input_root), output_root, cfg))
    return rows


def process_file(
    in_path: Path,
    rel_path: Path,
    output_root: Path,
    cfg: CodecConfig,
) -> Dict[str, object]:
    compressed_path = compressed_output_path(rel_path, output_root, cfg)
    row: Dict[str, object] = {
        "input_path": str(rel_path),
        "compressed_path": str(compressed_path),
        "decoded_path": None,
        "status": "ok",
        "original_size_bytes": None,
        "compressed_size_bytes": None,
        "roundtrip_ok": None,
    }

    try:
        packed = compress_file(in_path, compressed_path)
        row["original_size_bytes"] = packed.symbol_total
        row["compressed_size_bytes"] = compressed_path.stat().st_size

        if cfg.verify_roundtrip:
            decoded_path = decoded_output_path(rel_path, output_root, cfg)
            decoded = decompress_file(compressed_path, decoded_path)
            row["decoded_path"] = str(decoded_path)
            row["roundtrip_ok"] = decoded == in_path.read_bytes()
    except (IOUnavailable, FormatError) as exc:
        print(f"[warn] {in_path}: {exc}", file=sys.stderr)
        row["status"] = f"failed: {exc}"

    return row
