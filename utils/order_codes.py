import re
import secrets
import string

ORDER_CODE_ALPHABET = string.digits + string.ascii_uppercase
ORDER_CODE_LENGTH = 8

_ORDER_CODE_RE = re.compile(rf"^[0-9A-Z]{{{ORDER_CODE_LENGTH}}}$")


def generate_order_code() -> str:
    return "".join(secrets.choice(ORDER_CODE_ALPHABET) for _ in range(ORDER_CODE_LENGTH))


def normalize_order_code(code: str) -> str:
    """Codes are stored uppercase; lookups accept any case and stray spaces."""
    return code.strip().upper()


def is_valid_order_code(code: str) -> bool:
    return bool(_ORDER_CODE_RE.match(code))
