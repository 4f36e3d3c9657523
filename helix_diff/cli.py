import time
import click
from pathlib import Path
from .config import Config
from .exceptions import HelixDiffError
from .utils.logging_utils import *
from .utils.file_utils import check_fasta_chromosomes, write_differences_csv, write_chromosome_summary
from .helix.fasta import FastaPerson, DEFAULT_CHUNK_SIZE
from .helix.streams import NUM_CHROMOSOMES
from .comparison.comparator import compare_detailed, compare_parallel
from .comparison.sex import SEX_CHROMOSOME_IDX, classify_sex
from .comparison.telomere import find_data_range


logger = get_logger(__name__)

# FASTA holds one base per character
FASTA_PACKED_SIZE = 1


@click.group()
def cli():
    """Compare two genomic samples and report where their DNA differs."""
    pass

@cli.command("compare")
@click.option('--a', 'fasta_a', required=True, help='FASTA file of the first sample (23 records)')
@click.option('--b', 'fasta_b', required=True, help='FASTA file of the second sample (23 records)')
@click.option('--out', required=True, help='Output directory')
@click.option('--threads', default=1, type=int, help='Number of chromosomes compared in parallel')
@click.option('--window', default=4096, type=int, help='Bases compared per fast-path window')
@click.option('--align-window', default=512, type=int, help='Bases per sample aligned around a divergence')
@click.option('--resync', default=16, type=int, help='Identical bases needed to resynchronise after a divergence')
@click.option('--anchor-search', default=1 << 16, type=int,
              help='Bases per sample searched for a resync anchor after a long insertion or deletion')
@click.option('--chunk-size', default=DEFAULT_CHUNK_SIZE, type=int, help='Bases read from the FASTA per request')
def compare_samples(fasta_a: str, fasta_b: str, out: str, threads: int, window: int,
                    align_window: int, resync: int, anchor_search: int, chunk_size: int):
    """Trim telomeres, compare both samples chromosome by chromosome and write differences.csv."""
    collector = setup_logging(Path(out) / "compare.log")
    check_fasta_chromosomes(fasta_a)
    check_fasta_chromosomes(fasta_b)

    try:
        start_time = time.time()
        logger.info(f"Command:\n{format_command()}")
        log_worker_info(threads, NUM_CHROMOSOMES)

        config = Config(
            packed_size=FASTA_PACKED_SIZE,
            window_size=window,
            align_window=align_window,
            resync_length=resync,
            anchor_search=anchor_search,
            threads=threads,
            output_dir=out
        )
        person_a = FastaPerson(fasta_a, chunk_size=chunk_size)
        person_b = FastaPerson(fasta_b, chunk_size=chunk_size)

        log_step("Step 1 Comparing chromosomes")
        if threads > 1:
            result = compare_parallel(person_a, person_b, config)
        else:
            result = compare_detailed(person_a, person_b, config)

        log_step("Step 2 Writing results")
        differences_csv = Path(out) / "differences.csv"
        write_differences_csv(result.differences, differences_csv)
        if result.errors:
            error_log = Path(out) / "chromosome_errors.log"
            with open(error_log, "w") as f:
                for _, error in sorted(result.errors.items()):
                    f.write(f"{error}\n")
            logger.warning(f"{len(result.errors)} chromosome(s) failed, see {error_log}")

        stats = {
            "Differences": f"{len(result.differences):,}",
            "Divergent bases (first sample)": f"{sum(d.person_a.length for d in result.differences):,}",
            "Divergent bases (second sample)": f"{sum(d.person_b.length for d in result.differences):,}",
            "Skipped chromosomes": ", ".join(str(i) for i in result.skipped) or "none",
            "Failed chromosomes": ", ".join(str(i) for i in sorted(result.errors)) or "none",
        }

        log_step("Summary")
        log_run_summary(format_command(), start_time, stats, collector)

    except (HelixDiffError, ValueError) as e:
        logger.error(f"Error in compare: {str(e)}")
        raise click.Abort()


@cli.command("inspect")
@click.option('--fasta', required=True, help='FASTA file of one sample')
@click.option('--out', required=True, help='Output directory')
@click.option('--chunk-size', default=DEFAULT_CHUNK_SIZE, type=int, help='Bases read from the FASTA per request')
def inspect_sample(fasta: str, out: str, chunk_size: int):
    """Report each chromosome's length, informative range and the sex call in chromosomes.csv."""
    collector = setup_logging(Path(out) / "inspect.log")
    references = check_fasta_chromosomes(fasta)

    try:
        start_time = time.time()
        person = FastaPerson(fasta, chunk_size=chunk_size)
        rows = []
        for chromosome_idx, name in enumerate(references):
            helix = person.chromosome(chromosome_idx)
            start, end = find_data_range(helix, FASTA_PACKED_SIZE)
            sex = classify_sex(helix, FASTA_PACKED_SIZE).value if chromosome_idx == SEX_CHROMOSOME_IDX else ""
            rows.append({
                "chromosome": chromosome_idx,
                "name": name,
                "length": helix.size(),
                "data_start": start,
                "data_end": end,
                "informative_length": max(0, end - start),
                "sex": sex,
            })
            helix.close()
        write_chromosome_summary(rows, Path(out) / "chromosomes.csv")

        stats = {
            "Chromosomes": len(rows),
            "Informative bases": f"{sum(row['informative_length'] for row in rows):,}",
            "Sex chromosome": rows[SEX_CHROMOSOME_IDX]["sex"],
        }
        log_run_summary(format_command(), start_time, stats, collector)
    except HelixDiffError as e:
        logger.error(f"Error in inspect: {str(e)}")
        raise click.Abort()
