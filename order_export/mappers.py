from .schemas import Condition

# --- Condition Tables ---
# Amazon condition text -> upload vocabulary.
CONDITION_MAP = {
    "New": Condition.NEW,
    "Used - Like New": Condition.USED_LIKE_NEW,
    "Used - Very Good": Condition.USED_VERY_GOOD,
    "Used - Good": Condition.USED_GOOD,
    "Used - Acceptable": Condition.USED_ACCEPTABLE,
}

# Listings never claim better than Very Good, whatever Amazon graded the buy.
CAPPED_CONDITION_MAP = {
    **CONDITION_MAP,
    "New": Condition.USED_VERY_GOOD,
    "Used - Like New": Condition.USED_VERY_GOOD,
}

DEFAULT_CONDITION = Condition.USED_GOOD

# --- Status Table ---
STATUS_MAP = {
    "Cancelled": "Closed",
}

DEFAULT_STATUS = "For Sale"


def map_condition(amazon_condition: str, capped: bool = False) -> Condition:
    table = CAPPED_CONDITION_MAP if capped else CONDITION_MAP
    return table.get((amazon_condition or "").strip(), DEFAULT_CONDITION)


def map_status(amazon_status: str) -> str:
    return STATUS_MAP.get((amazon_status or "").strip(), DEFAULT_STATUS)
