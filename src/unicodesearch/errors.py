#errors.py


class UnicodeSearchError(Exception):
    """Base class for errors that abort an ETL run or a browse session."""


class InputMissingError(UnicodeSearchError):
    """A required ETL input file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Required input file not found: {path}")
        self.path = path


class DatasetFetchError(UnicodeSearchError):
    """The dataset could not be fetched or decoded."""


class InputFetchError(UnicodeSearchError):
    """An ETL input could not be downloaded or decoded."""
