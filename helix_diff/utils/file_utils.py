import pysam
import logging
import click
import pandas as pd
from pathlib import Path
from typing import Dict, Iterable, List

from ..helix.streams import NUM_CHROMOSOMES

DIFFERENCE_COLUMNS = ["chromosome", "a_start", "a_end", "b_start", "b_end", "a_length", "b_length"]


def check_fasta_chromosomes(fasta_path: str) -> List[str]:
    """Make sure a FASTA file opens and holds one record per chromosome; return the record names."""
    logger = logging.getLogger()

    try:
        with pysam.FastaFile(str(fasta_path)) as fasta:
            references = list(fasta.references)
            lengths = list(fasta.lengths)
    except Exception as e:
        logger.error(f"Failed to open or index FASTA file {fasta_path}: {e}")
        raise click.Abort()

    if len(references) != NUM_CHROMOSOMES:
        logger.error(
            f"{fasta_path} holds {len(references)} records, but a sample needs exactly {NUM_CHROMOSOMES}:"
        )
        for name, length in zip(references, lengths):
            logger.error(f"  > {name} ({length:,} bases)")
        raise click.Abort()

    empty = [name for name, length in zip(references, lengths) if length == 0]
    if empty:
        logger.warning(f"Empty records in {fasta_path}: {', '.join(empty)}")

    return references


def write_differences_csv(differences: Iterable, output_csv: Path) -> pd.DataFrame:
    """Save differences (anything with as_row()) as CSV, one row per divergent region."""
    df = pd.DataFrame([d.as_row() for d in differences], columns=DIFFERENCE_COLUMNS)
    df.to_csv(output_csv, index=False)
    logging.getLogger(__name__).info(f"{len(df):,} differences saved to {output_csv}")
    return df


def write_chromosome_summary(rows: List[Dict], output_csv: Path) -> pd.DataFrame:
    df = pd.DataFrame(rows)
    df.to_csv(output_csv, index=False)
    logging.getLogger(__name__).info(f"Chromosome summary saved to {output_csv}")
    return df
