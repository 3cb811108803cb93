"""Human-facing order numbers.

Format: ``ORD-<epoch millis>-<user fragment>-<random hex>``. The random part
makes two orders in the same millisecond for the same user distinct; storage
still enforces uniqueness.
"""

import re
import secrets
import time

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def generate_order_number(user_id) -> str:
    millis = int(time.time() * 1000)
    fragment = _NON_ALNUM.sub("", str(user_id))[:8].upper() or "GUEST"
    return f"ORD-{millis}-{fragment}-{secrets.token_hex(3).upper()}"
