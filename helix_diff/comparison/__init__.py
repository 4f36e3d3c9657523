"""Sex classification, telomere trimming and per-chromosome comparison."""

from .sex import SexChromosome, classify_sex
from .telomere import find_data_range, TELOMERE_SEQ
from .comparator import (
    ComparisonResult,
    compare,
    compare_detailed,
    compare_parallel,
    compare_chromosome
)

__all__ = [
    'SexChromosome',
    'classify_sex',
    'find_data_range',
    'TELOMERE_SEQ',
    'ComparisonResult',
    'compare',
    'compare_detailed',
    'compare_parallel',
    'compare_chromosome'
]
