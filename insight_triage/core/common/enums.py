# File: insight_triage/core/common/enums.py

from enum import Enum, unique
from typing import List

from insight_triage.core.errors import InvalidLabelError


class WireEnum(str, Enum):
    """
    Closed label set whose member values are the exact strings used on the
    wire (local store payloads and classification provider responses).
    """

    @classmethod
    def from_wire(cls, value):
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        raise InvalidLabelError(
            f"Invalid {cls.__name__.lower()} {value!r}. Expected one of: {cls.wire_values()}"
        )

    @classmethod
    def wire_values(cls) -> List[str]:
        return [member.value for member in cls]


@unique
class Sentiment(WireEnum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


@unique
class Topic(WireEnum):
    CAMPAIGN = "Campaign"
    SHIPPING = "Shipping"
    PRICE = "Price"
    PRODUCT_QUALITY = "Product Quality"
    CUSTOMER_SERVICE = "Customer Service"
    GENERAL = "General"


@unique
class Collection(str, Enum):
    """Storage keys of the two insight collections."""
    STAGED = "stagedInsights"
    PROCESSED = "processedInsights"
