import os
from dataclasses import dataclass
from typing import Optional

from .helix.bases import PACKED_SIZE

@dataclass
class Config:
    """Configuration for a comparison run"""
    packed_size: int = PACKED_SIZE
    window_size: int = 4096
    align_window: int = 512
    resync_length: int = 16
    # Largest window per side searched for an anchor after a long indel
    anchor_search: int = 1 << 16
    match_score: float = 2
    mismatch_score: float = -1
    open_gap_score: float = -2
    extend_gap_score: float = -0.5
    threads: int = 1
    output_dir: Optional[str] = None

    def __post_init__(self):
        """Validate sizes and create output directory"""
        for name in ("packed_size", "window_size", "align_window", "resync_length",
                     "anchor_search", "threads"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.resync_length > self.align_window:
            raise ValueError(
                f"resync_length ({self.resync_length}) must not exceed align_window ({self.align_window})"
            )
        if self.anchor_search < self.align_window:
            raise ValueError(
                f"anchor_search ({self.anchor_search}) must be at least align_window ({self.align_window})"
            )
        if self.output_dir:
            os.makedirs(self.output_dir, exist_ok=True)
