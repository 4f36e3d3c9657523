from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tqdm import tqdm

from .sex import SEX_CHROMOSOME_IDX, SexChromosome, classify_sex
from .telomere import find_data_range
from ..alignment.differencer import SequenceDifferencer
from ..alignment.records import Difference
from ..config import Config
from ..exceptions import AlignmentError, ChromosomeError, InvalidInputError, StreamFaultError
from ..helix.streams import NUM_CHROMOSOMES, HelixStream, Person
from ..utils.logging_utils import get_logger, log_progress

logger = get_logger(__name__)


@dataclass
class ComparisonResult:
    differences: List[Difference] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    errors: Dict[int, ChromosomeError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_persons(person_a: Person, person_b: Person) -> None:
    counts = (person_a.chromosomes(), person_b.chromosomes())
    if counts != (NUM_CHROMOSOMES, NUM_CHROMOSOMES):
        raise InvalidInputError(
            f"chromosome data does not match expected size: expected {NUM_CHROMOSOMES} per sample, "
            f"got {counts[0]} and {counts[1]}"
        )


def sex_chromosomes_comparable(helix_a: HelixStream, helix_b: HelixStream, packed_size: int) -> bool:
    a_sex = classify_sex(helix_a, packed_size)
    b_sex = classify_sex(helix_b, packed_size)
    if a_sex != b_sex or a_sex is SexChromosome.UNKNOWN:
        logger.info(
            f"Skipping sex chromosome: first sample {a_sex.value}, second sample {b_sex.value}"
        )
        return False
    return True


def compare_chromosome(chromosome_idx: int, helix_a: HelixStream, helix_b: HelixStream,
                       config: Config, differencer: SequenceDifferencer = None) -> List[Difference]:
    """
    Trim both chromosomes and return their differences.
    The caller decides whether the chromosome is comparable at all.
    """
    differencer = differencer or SequenceDifferencer(config)
    range_a = find_data_range(helix_a, config.packed_size)
    range_b = find_data_range(helix_b, config.packed_size)
    logger.debug(f"Chromosome {chromosome_idx}: informative ranges {range_a} and {range_b}")
    return list(differencer.differences(chromosome_idx, helix_a, range_a, helix_b, range_b))


def _chromosome_task(chromosome_idx: int, person_a: Person, person_b: Person,
                     config: Config) -> Optional[List[Difference]]:
    """Differences of one chromosome, or None when the sex rule skips it."""
    # Streams are created inside the task and never leave it
    try:
        helix_a = person_a.chromosome(chromosome_idx)
        helix_b = person_b.chromosome(chromosome_idx)
        if chromosome_idx == SEX_CHROMOSOME_IDX:
            if not sex_chromosomes_comparable(helix_a, helix_b, config.packed_size):
                return None
        return compare_chromosome(chromosome_idx, helix_a, helix_b, config)
    except AlignmentError as e:
        raise AlignmentError(str(e), chromosome_idx=chromosome_idx) from e
    except Exception as e:
        raise StreamFaultError(str(e), chromosome_idx=chromosome_idx) from e


def compare_detailed(person_a: Person, person_b: Person, config: Config = None) -> ComparisonResult:
    """
    Compare two samples chromosome by chromosome, in order.
    Any stream or alignment failure aborts the whole comparison.
    """
    config = config or Config()
    validate_persons(person_a, person_b)

    result = ComparisonResult()
    for chromosome_idx in range(NUM_CHROMOSOMES):
        differences = _chromosome_task(chromosome_idx, person_a, person_b, config)
        if differences is None:
            result.skipped.append(chromosome_idx)
        else:
            result.differences.extend(differences)
    logger.info(f"Comparison finished: {len(result.differences):,} differences")
    return result


def compare(person_a: Person, person_b: Person, config: Config = None) -> List[Difference]:
    """Ordered list of differences between two samples."""
    return compare_detailed(person_a, person_b, config).differences


def compare_parallel(person_a: Person, person_b: Person, config: Config = None) -> ComparisonResult:
    """
    Compare chromosomes concurrently, one task per chromosome.

    Each task returns its own list; lists are merged by chromosome index once
    all tasks are done. A failing chromosome is recorded in `errors` and the
    other chromosomes are still reported.
    """
    config = config or Config()
    validate_persons(person_a, person_b)

    per_chromosome = {}
    result = ComparisonResult()
    logger.info(f"Comparing {NUM_CHROMOSOMES} chromosomes with {config.threads} worker(s)")

    with ThreadPoolExecutor(max_workers=config.threads) as executor, tqdm(
        total=NUM_CHROMOSOMES,
        desc="Comparing chromosomes",
        unit="chromosome"
    ) as pbar:
        futures = {
            executor.submit(_chromosome_task, idx, person_a, person_b, config): idx
            for idx in range(NUM_CHROMOSOMES)
        }
        for future in as_completed(futures):
            chromosome_idx = futures[future]
            try:
                differences = future.result()
                if differences is None:
                    result.skipped.append(chromosome_idx)
                else:
                    per_chromosome[chromosome_idx] = differences
            except ChromosomeError as e:
                logger.error(f"Comparison failed for chromosome {chromosome_idx}: {str(e)}")
                result.errors[chromosome_idx] = e
            finally:
                pbar.update(1)
        log_progress(pbar, logger)

    for chromosome_idx in sorted(per_chromosome):
        result.differences.extend(per_chromosome[chromosome_idx])
    result.skipped.sort()
    logger.info(
        f"Comparison finished: {len(result.differences):,} differences, "
        f"{len(result.errors)} failed chromosome(s)"
    )
    return result
