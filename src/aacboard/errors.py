"""Error taxonomy for aacboard."""


class AacBoardError(Exception):
    """Base class for all aacboard errors."""


class DocumentError(AacBoardError):
    """A board document could not be parsed into a board IR."""


class ValidationError(AacBoardError):
    """A board failed validation and cannot be exported."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        summary = self.errors[0] if self.errors else "Board is not valid"
        if len(self.errors) > 1:
            summary += f" (and {len(self.errors) - 1} more)"
        super().__init__(summary)


class SchemaError(AacBoardError):
    """The canonical record failed its structural check (a converter defect)."""


class AssetError(AacBoardError):
    """A binary asset could not be fetched."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"{url}: {reason}")


class PackagingError(AacBoardError):
    """Archive construction failed; no archive was produced."""

    def __init__(self, target: str, reason: str):
        self.target = target
        super().__init__(f"{target}: {reason}")


class BoardLoadingError(AacBoardError):
    """A mutation was attempted on a board whose content is still loading."""
