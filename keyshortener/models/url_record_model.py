from dataclasses import dataclass
from enum import Enum


class AllocationOutcome(Enum):
    """Outcome of a short key allocation.

    Attributes:
        CREATED:
            A new mapping was written to the key store.
        ALREADY_EXISTS:
            The URL was already mapped to the derived key; nothing was written.
    """

    CREATED = 'created'
    ALREADY_EXISTS = 'already_exists'


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a short key to original URL mapping.

    Attributes:
        key (str):
            The 10-character short key identifying the mapping.
        target (str):
            The original long URL that the short key redirects to.

    Example:
        >>> record = UrlRecordModel(key='3fGh_0aZk9', target='https://example.com/article/123')
        >>> record.target
        'https://example.com/article/123'
    """

    key: str
    target: str


@dataclass(frozen=True)
class AllocationResult:
    """Result of `ShortKeyService.allocate()`.

    Attributes:
        key (str):
            Short key now mapped to the target URL.
        target (str):
            The original URL which was submitted.
        outcome (AllocationOutcome):
            Whether the mapping was created by this call or already present.
    """

    key: str
    target: str
    outcome: AllocationOutcome

    @property
    def created(self) -> bool:
        return self.outcome is AllocationOutcome.CREATED

    def record(self) -> UrlRecordModel:
        return UrlRecordModel(key=self.key, target=self.target)
