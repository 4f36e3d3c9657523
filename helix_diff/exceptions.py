from typing import Optional


class HelixDiffError(Exception):
    """Base exception for the package"""
    pass

class InvalidInputError(HelixDiffError):
    """Raised when a sample or its sequence data is invalid"""
    pass

class ChromosomeError(HelixDiffError):
    """Base for failures tied to one chromosome of a comparison"""
    def __init__(self, message: str, chromosome_idx: Optional[int] = None):
        self.chromosome_idx = chromosome_idx
        if chromosome_idx is not None:
            message = f"chromosome {chromosome_idx}: {message}"
        super().__init__(message)

class StreamFaultError(ChromosomeError):
    """Raised when a helix stream fails to seek or read"""
    pass

class AlignmentError(ChromosomeError):
    """Raised when a divergent window cannot be aligned"""
    pass
