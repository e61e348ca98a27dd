"""Share parameters - The (seed code, rank) pair that reproduces a generated level.

A generated level is fully reproducible from its seed code and rank, so this
pair is the only state that crosses a save file or a shareable link:
- build_share_url: "<base>?seed=K7Q2&rank=red"
- build_share_message: link plus a one-line human summary
- parse_share_params: query string -> ShareParams (or None without a seed)
"""

import logging
from dataclasses import dataclass
from urllib.parse import parse_qs, quote, urlsplit

from piste_planner.model.level import Rank

logger = logging.getLogger(__name__)

RANK_EMOJI = {
    Rank.GREEN: "🟢",
    Rank.BLUE: "🔵",
    Rank.RED: "🔴",
    Rank.BLACK: "⚫",
}


@dataclass(frozen=True)
class ShareParams:
    """Seed code and rank parsed from a share link.

    Attributes:
        seed_code: Upper-cased seed code (decode with code_to_seed)
        rank: Rank to generate for
    """

    seed_code: str
    rank: Rank


def build_share_url(base_url: str, seed_code: str, rank: Rank) -> str:
    return f"{base_url}?seed={quote(seed_code, safe='')}&rank={quote(rank.value, safe='')}"


def build_share_message(base_url: str, seed_code: str, rank: Rank, piste_name: str) -> str:
    """Share link followed by a summary line, for messaging apps."""
    url = build_share_url(base_url=base_url, seed_code=seed_code, rank=rank)
    return f"{url}\n🏔️ {piste_name} - {RANK_EMOJI[rank]} {rank.value.capitalize()} [{seed_code}]"


def parse_share_params(query: str) -> ShareParams | None:
    """Parse seed and rank from a query string or full URL.

    Args:
        query: "seed=K7Q2&rank=red", "?seed=..." or a complete URL

    Returns:
        ShareParams, or None when no seed is present. An unknown or missing
        rank falls back to green.
    """
    if "://" in query:
        query = urlsplit(query).query
    params = parse_qs(query.lstrip("?"))
    seeds = params.get("seed")
    if not seeds or not seeds[0]:
        return None

    rank_value = params.get("rank", [""])[0]
    try:
        rank = Rank(rank_value)
    except ValueError:
        logger.debug(f"Unknown rank {rank_value!r} in share link, using green")
        rank = Rank.GREEN
    return ShareParams(seed_code=seeds[0].upper(), rank=rank)
