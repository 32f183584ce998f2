from pathlib import Path


def add_suffix_to_top_level(rel_path: Path, suffix: str) -> Path:
    """
    Add a suffix to the top-level directory name of a relative path.

    Example:
        'logs/2024/app.log' + '_compressed' -> 'logs_compressed/2024/app.log'
    """
    parts = list(rel_path.parts)
    if not parts:
        return Path()
    parts[0] = parts[0] + suffix
    return Path(*parts)


def suffix_filename(path: Path, suffix: str) -> Path:
    """
    Add a suffix before the file extension.

    Example:
        report.txt + '_decoded' -> report_decoded.txt
        Makefile   + '_decoded' -> Makefile_decoded
    """
    if path.suffix:
        return path.with_name(path.stem + suffix + path.suffix)
    return path.with_name(path.name + suffix)


def compressed_filename(path: Path, compressed_suffix: str = ".huf") -> Path:
    """report.txt -> report.txt.huf"""
    return path.with_name(path.name + compressed_suffix)


def decompressed_filename(
    path: Path,
    compressed_suffix: str = ".huf",
    decoded_suffix: str = "_decoded",
) -> Path:
    """
    Name for the decompressed copy of a compressed file.

    Example:
        report.txt.huf -> report_decoded.txt
        blob.bin       -> blob_decoded.bin
    """
    if compressed_suffix and path.name.endswith(compressed_suffix) and path.name != compressed_suffix:
        path = path.with_name(path.name[:-len(compressed_suffix)])
    return suffix_filename(path, decoded_suffix)
