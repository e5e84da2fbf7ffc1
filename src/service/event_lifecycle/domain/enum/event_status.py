from enum import StrEnum


class EventStatus(StrEnum):
    """Event lifecycle status. Values are the stored/wire strings."""

    AWAITING_APPROVAL = 'AwaitingApproval'
    UNDER_REVIEW = 'UnderReview'
    APPROVED = 'Approved'
    PUBLISHED = 'Published'
    CANCELLED = 'Cancelled'
    DELETED = 'Deleted'  # Logical deletion; records are never removed
