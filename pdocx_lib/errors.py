# --- pdocx_lib/errors.py ---
"""
pdocx_lib/errors.py: Exception hierarchy for document reconstruction failures.
"""


class ReconstructionError(Exception):
    """
    Base class for all failures raised while reconstructing a document.
    Every error identifies the page it happened on (when known) and a short
    failure kind, so callers can report a single descriptive message.
    """

    kind = "reconstruction failure"

    def __init__(self, message, page_num=None):
        super().__init__(message)
        self.page_num = page_num
        self.detail = message

    def __str__(self):
        if self.page_num is None:
            return f"{self.kind}: {self.detail}"
        return f"Page {self.page_num}: {self.kind}: {self.detail}"


class ExtractionError(ReconstructionError):
    """The page text extractor could not produce fragments for a page."""

    kind = "extraction failure"


class MalformedFragmentError(ReconstructionError):
    """A fragment is missing required numeric fields or has non-finite ones."""

    kind = "malformed fragment"


class ReconstructionCancelled(ReconstructionError):
    """Processing was cancelled between two pages."""

    kind = "cancelled"
