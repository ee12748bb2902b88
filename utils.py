# utils.py
import re
import unicodedata


def is_missing(val):
    if val is None:
        return True
    if isinstance(val, str):
        return not val.strip()
    return False


def clean_text(val) -> str:
    """Collapse whitespace (incl. non-breaking spaces) and strip."""
    if is_missing(val):
        return ""
    s = unicodedata.normalize("NFKC", str(val))
    return re.sub(r"\s+", " ", s).strip()


def lower_text(val) -> str:
    return clean_text(val).lower()


def join_name(*parts) -> str:
    return " ".join(clean_text(p) for p in parts if not is_missing(p))
