from typing import List, Optional


class CatalogError(Exception):
    """Base class for all catalog errors. None of them are fatal to the app."""


class DatasetLoadError(CatalogError):
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load dataset from {source}: {reason}")


class RecordValidationError(CatalogError):
    def __init__(self, record_kind: str, missing_fields: Optional[List[str]] = None, detail: Optional[str] = None):
        self.record_kind = record_kind
        self.missing_fields = missing_fields or []
        self.detail = detail
        if self.missing_fields:
            message = f"Please fill in all required fields ({', '.join(self.missing_fields)})."
        else:
            message = detail or f"Invalid {record_kind}."
        super().__init__(message)


class SubmissionError(CatalogError):
    pass
