"""Daily movie pick for a match.

Both partners of a match must see the same "movie of the day" without the
server storing the choice, so the pick is a pure function of the match id,
the UTC calendar date and the set of unwatched favorites.
"""
import unicodedata
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Sequence

INT32_MIN = -(2 ** 31)
UINT32_MASK = 0xFFFFFFFF


def to_int32(value: int) -> int:
    """Wrap an arbitrary integer to a signed 32-bit value (two's complement)."""
    value &= UINT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _utf16_code_units(text: str) -> Iterable[int]:
    encoded = text.encode("utf-16-le")
    for i in range(0, len(encoded), 2):
        yield encoded[i] | (encoded[i + 1] << 8)


def string_hash(text: str) -> int:
    """Rolling ``h = (h << 5) - h + c`` hash truncated to int32 after every step.

    Characters are consumed as UTF-16 code units so non-BMP characters hash
    the same way deployed clients hash them.
    """
    h = 0
    for code_unit in _utf16_code_units(text):
        h = to_int32(((h << 5) - h) + code_unit)
    return h


def utc_today(now: Optional[datetime] = None) -> date:
    """UTC calendar date of ``now`` (defaults to the current instant)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).date()


def build_seed(match_id: str, day: date) -> str:
    # month is zero-based (January == 0) to keep existing matches on the same pick
    return f"{match_id}-{day.year}-{day.month - 1}-{day.day}"


def build_candidate_ids(
    favorites_a: Iterable[int],
    favorites_b: Iterable[int],
    watched: Iterable[int],
) -> List[int]:
    """Movies favorited by either partner and not yet watched together, ascending."""
    candidates = set(favorites_a) | set(favorites_b)
    candidates -= set(watched)
    return sorted(candidates)


def select_index(seed_hash: int, count: int) -> int:
    if count <= 0:
        raise ValueError("count must be positive")
    # abs(INT32_MIN) stays positive here, unlike a fixed-width abs
    return abs(seed_hash) % count


def select_daily_movie_id(candidate_ids: Iterable[int], match_id: str, day: date) -> int:
    """Pick one movie id for ``match_id`` on ``day``.

    The result depends only on the arguments. Callers must ensure the
    candidate set is not empty.
    """
    ordered = sorted(set(candidate_ids))
    if not ordered:
        raise ValueError("candidate set is empty")
    index = select_index(string_hash(build_seed(match_id, day)), len(ordered))
    return ordered[index]


def _title_key(title: Optional[str]) -> str:
    # accent- and case-insensitive, independent of the process locale
    normalized = unicodedata.normalize("NFKD", title or "")
    stripped = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return stripped.casefold()


def filter_and_sort_movies(
    movies: Sequence,
    genre: Optional[str] = None,
    min_rating: Optional[float] = None,
    sort_by: Optional[str] = None,
) -> list:
    """Filter and order resolved movies for the common-movies listing.

    ``movies`` is expected in ascending id order so ties stay deterministic.
    """
    result = list(movies)

    # 0 means "no minimum", so unrated movies stay listed
    if min_rating:
        result = [m for m in result if m.rating is not None and m.rating >= min_rating]

    if genre:
        result = [m for m in result if genre in m.genre_names]

    if sort_by == "rating":
        result.sort(key=lambda m: m.rating or 0, reverse=True)
    elif sort_by == "release_date":
        dated = [m for m in result if m.release_date is not None]
        undated = [m for m in result if m.release_date is None]
        dated.sort(key=lambda m: m.release_date, reverse=True)
        result = dated + undated
    else:
        result.sort(key=lambda m: _title_key(m.title))

    return result
