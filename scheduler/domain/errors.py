from ..config import MIN_QUALITY, MAX_QUALITY


class InvalidQualityError(ValueError):
    """Raised when a review quality falls outside the 0-5 scale."""

    def __init__(self, quality):
        self.quality = quality
        super().__init__(
            f"quality must be a whole number between {MIN_QUALITY} and {MAX_QUALITY}, got {quality!r}"
        )
