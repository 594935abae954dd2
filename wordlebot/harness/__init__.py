from .core import LocalOracle, run_case, run_batch
from .io import read_words, write_csv, write_manifest

__all__ = ["LocalOracle", "run_case", "run_batch", "read_words", "write_csv", "write_manifest"]
