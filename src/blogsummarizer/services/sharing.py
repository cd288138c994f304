"""Share links for summaries.

The token is only embedded in the URL; nothing stores or checks it, so the
link grants no access by itself.
"""

import random
import string
import time
from uuid import UUID

from blogsummarizer.config import get_settings

_BASE36 = string.digits + string.ascii_lowercase


def generate_share_token(summary_id: UUID | str, now_ms: int | None = None) -> str:
    """Build ``{id}_{epoch_millis}_{9 random base36 chars}``."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"{summary_id}_{timestamp}_{suffix}"


def build_share_url(summary_id: UUID | str, site_url: str | None = None) -> str:
    """Public URL for a summary with a fresh share token."""
    base = (site_url or get_settings().site_url).rstrip("/")
    token = generate_share_token(summary_id)
    return f"{base}/shared/{summary_id}?token={token}"
