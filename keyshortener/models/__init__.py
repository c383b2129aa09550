from keyshortener.models.url_record_model import AllocationOutcome, AllocationResult, UrlRecordModel


__all__ = [
    'AllocationOutcome',
    'AllocationResult',
    'UrlRecordModel',
]
