import re
import unicodedata

_SEPARATOR_RE = re.compile(r"[\W_]+")

FALLBACK_SLUG = "recipe"


def slugify(name: str) -> str:
    """Return the lowercase, URL-safe key for a recipe name.

    Runs of anything other than letters and digits collapse into a single
    ``-``. Accents are dropped from Latin letters, while other scripts are
    kept as they are (``"Борщ"`` gives ``"борщ"``). Different names can share
    a slug (``"Tomato Soup"`` and ``"tomato  soup!"`` both give
    ``"tomato-soup"``); a name without letters or digits gives
    :data:`FALLBACK_SLUG`.
    """

    kept = []
    for char in unicodedata.normalize("NFKD", name):
        # Drop marks on ASCII bases only; "й" and "ご" recompose below.
        if unicodedata.combining(char) and kept and kept[-1].isascii():
            continue
        kept.append(char)

    folded = unicodedata.normalize("NFKC", "".join(kept)).lower()
    slug = _SEPARATOR_RE.sub("-", folded).strip("-")
    return slug or FALLBACK_SLUG


__all__ = ["FALLBACK_SLUG", "slugify"]
