import re

# Brazilian landline or mobile: DDD + optional 9 + 8 digits
BR_PHONE_PATTERN = re.compile(r"^\(?(\d{2})\)?\s?9?\d{4}-?\d{4}$")


def digits_only(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def is_valid_br_phone(value: str) -> bool:
    return bool(BR_PHONE_PATTERN.match(digits_only(value)))
