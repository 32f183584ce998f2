from huffcodec.pipeline.config import CodecConfig
from huffcodec.pipeline.runner import compress_file, decompress_file


def run_batch_on_folder(*args, **kwargs):
    # Lazy import so importing `huffcodec.pipeline` doesn't pull in the batch
    # runner unless batch execution is actually requested.
    from huffcodec.utils.batch import run_batch_on_folder as _run_batch_on_folder

    return _run_batch_on_folder(*args, **kwargs)


__all__ = [
    "CodecConfig",
    "compress_file",
    "decompress_file",
    "run_batch_on_folder",
]
