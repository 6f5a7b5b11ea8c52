"""URL slugs for products and categories."""

import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text) -> str:
    """Lower-case ``text`` and collapse every non-alphanumeric run into one hyphen.

    Leading and trailing hyphens are stripped, so ``"Wireless Mouse!!"``
    becomes ``"wireless-mouse"``.
    """
    return _NON_ALPHANUMERIC.sub("-", str(text).lower()).strip("-")
