"""Utility functions for file handling and logging."""

from .file_utils import (
    check_fasta_chromosomes,
    write_differences_csv,
    write_chromosome_summary
)
from .logging_utils import (
    setup_logging,
    get_logger,
    log_run_summary
)

__all__ = [
    'check_fasta_chromosomes',
    'write_differences_csv',
    'write_chromosome_summary',
    'setup_logging',
    'get_logger',
    'log_run_summary'
]
