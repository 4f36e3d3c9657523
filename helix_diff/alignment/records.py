from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Subsection:
    """[start, end) base indices of a divergent region in one sample"""
    start: int
    end: int

    def __post_init__(self):
        if not 0 <= self.start <= self.end:
            raise ValueError(f"Invalid subsection [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Difference:
    """One divergent region of a chromosome, located in both samples"""
    chromosome_idx: int
    person_a: Subsection
    person_b: Subsection

    def __str__(self):
        return (
            f"Chromosome {self.chromosome_idx}"
            f" | first sample: [{self.person_a.start}, {self.person_a.end}]"
            f" second sample: [{self.person_b.start}, {self.person_b.end}]"
        )

    def as_row(self) -> Dict[str, int]:
        return {
            "chromosome": self.chromosome_idx,
            "a_start": self.person_a.start,
            "a_end": self.person_a.end,
            "b_start": self.person_b.start,
            "b_end": self.person_b.end,
            "a_length": self.person_a.length,
            "b_length": self.person_b.length,
        }
