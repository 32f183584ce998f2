from pathlib import Path

from huffcodec.encoding_schemes import CompressedFile, compress, decompress
from huffcodec.errors import IOUnavailable


def _read_source(path: Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise IOUnavailable(
            f"cannot read input file {path}: {exc.strerror or exc}", path=path, action="read"
        ) from exc


def _write_destination(path: Path, data: bytes) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        raise IOUnavailable(
            f"cannot write output file {path}: {exc.strerror or exc}", path=path, action="write"
        ) from exc


def compress_file(input_path: Path, output_path: Path) -> CompressedFile:
    """
    Compress one file on disk.
    Returns the CompressedFile that was written.
    """
    data = _read_source(input_path)
    packed = compress(data)
    _write_destination(output_path, packed.to_bytes())
    return packed


def decompress_file(input_path: Path, output_path: Path) -> bytes:
    """
    Decompress one file on disk.

    FormatError propagates before anything is written.
    """
    blob = _read_source(input_path)
    data = decompress(blob)
    _write_destination(output_path, data)
    return data
