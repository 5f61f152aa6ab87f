"""Scoring and selection of cached entries.

Given a requested parameter set, every fresh stored entry is scored field
by field:

- No fuzzy spec: values must be equal (score += 1)
- ExactURL: normalized URLs must be equal (score += 1)
- MoreIsBetter: stored >= requested (score += 1); stored > requested makes
  the match fuzzy
- CosineSimilarity: embedding similarity >= threshold (score += similarity);
  similarity < 1 makes the match fuzzy

Any failing field rejects the whole candidate. The best-scoring usable
candidate wins; ties keep the earliest-inserted entry.
"""

from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import numpy as np
import structlog

from fuzzy_cache.dto import CosineSimilarity, ExactURL, FuzzyFieldSpec, MoreIsBetter
from fuzzy_cache.entities import CacheEntry, CacheHitKind, CacheHitMeta, MatchResult, ScoreResult

log = structlog.get_logger(__name__)

EmbedFn = Callable[[str, str], Awaitable[Sequence[float]]]


DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


def normalize_url(raw: str, spec: ExactURL) -> str:
    """Normalize a URL string for comparison.

    Lowercases scheme and host, drops the scheme's default port (and an
    empty one), turns an empty path into "/", and drops the fragment when
    ``spec.exclude_hash`` is set. Opaque URLs such as ``mailto:x`` only get
    their scheme lowercased and fragment handled. Anything without a scheme
    is returned unmodified.

    Not a full WHATWG implementation: percent-encoding, IDNA hosts and
    dot segments in the path are left as written.

    Args:
        raw: The URL as supplied by the caller
        spec: The ExactURL rule for the field

    Returns:
        The normalized URL, or ``raw`` on parse failure
    """
    try:
        parts = urlsplit(raw)
        port = parts.port  # raises ValueError for a malformed port
    except ValueError:
        return raw

    if not parts.scheme:
        return raw

    scheme = parts.scheme.lower()
    fragment = "" if spec.exclude_hash else parts.fragment

    if not parts.netloc:
        return urlunsplit((scheme, "", parts.path, parts.query, fragment))

    userinfo, at, host = parts.netloc.rpartition("@")
    if host.endswith(":") or (port is not None and DEFAULT_PORTS.get(scheme) == port):
        host = host.rpartition(":")[0]
    netloc = f"{userinfo}{at}{host.lower()}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, fragment))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_spec_type(spec: FuzzyFieldSpec, value: Any) -> bool:
    """Whether ``value`` is the kind of value ``spec`` can compare."""
    if isinstance(spec, MoreIsBetter):
        return _is_number(value)
    return isinstance(value, str)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors: (a·b) / (|a| |b|).

    Vectors of different length are compared over the shorter length.

    Returns:
        Similarity in [-1, 1]; exactly 0.0 if either vector has zero magnitude
    """
    length = min(len(a), len(b))
    vec_a = np.asarray(a, dtype=np.float64)[:length]
    vec_b = np.asarray(b, dtype=np.float64)[:length]

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(vec_a, vec_b) / (norm_a * norm_b))


async def score_entry(
    requested: Mapping[str, Any],
    cached: Mapping[str, Any],
    fuzzy_params: Mapping[str, FuzzyFieldSpec | None],
    embed: EmbedFn,
) -> ScoreResult:
    """Score a cached parameter set against the requested one.

    Fields are visited in the iteration order of ``requested``. Embedding
    failures, and values of the wrong type for their fuzzy spec, reject the
    candidate instead of propagating.

    Args:
        requested: Parameters of the incoming call
        cached: Parameters stored with the candidate entry
        fuzzy_params: Per-field fuzzy rules
        embed: Memoized ``(text, model) -> vector`` lookup

    Returns:
        ScoreResult; ``ok`` is False if any field disqualified the candidate
    """
    score = 0.0
    exact = True

    for name, req in requested.items():
        if name not in cached:
            return ScoreResult.rejected()
        prev = cached[name]
        spec = fuzzy_params.get(name)

        if spec is None:
            if req != prev:
                return ScoreResult.rejected()
            score += 1
            continue

        if not (_has_spec_type(spec, req) and _has_spec_type(spec, prev)):
            log.debug("match.type_mismatch", field=name, spec=spec.type)
            return ScoreResult.rejected()

        if isinstance(spec, ExactURL):
            if normalize_url(req, spec) != normalize_url(prev, spec):
                return ScoreResult.rejected()
            score += 1
            continue

        if isinstance(spec, MoreIsBetter):
            if prev < req:
                return ScoreResult.rejected()
            if prev != req:
                exact = False
            score += 1
            continue

        if isinstance(spec, CosineSimilarity):
            try:
                req_vector = await embed(req, spec.model)
                prev_vector = await embed(prev, spec.model)
            except Exception as e:
                log.debug("match.embedding_failed", field=name, model=spec.model, error=str(e))
                return ScoreResult.rejected()

            similarity = cosine_similarity(req_vector, prev_vector)
            if similarity < spec.threshold:
                return ScoreResult.rejected()
            if similarity < 1:
                exact = False
            score += similarity
            continue

        raise TypeError(f"Unsupported fuzzy spec for field {name!r}: {spec!r}")

    return ScoreResult(ok=True, score=score, exact=exact)


async def match_best_entry(
    *,
    now: float,
    ttl: float,
    params: Mapping[str, Any],
    entries: Iterable[CacheEntry],
    fuzzy_params: Mapping[str, FuzzyFieldSpec | None] | None,
    embed: EmbedFn,
) -> MatchResult | None:
    """Find the best usable cached entry for ``params``.

    Entries older than ``ttl`` (``now - created_at > ttl``) are skipped.
    Among usable candidates the strictly highest score wins, so on a tie
    the earliest entry is kept.

    Args:
        now: Current time in epoch milliseconds
        ttl: Maximum entry age in milliseconds
        params: Parameters of the incoming call
        entries: Stored entries in insertion order
        fuzzy_params: Per-field fuzzy rules (None means all exact)
        embed: Memoized ``(text, model) -> vector`` lookup

    Returns:
        MatchResult, or None for a cache miss
    """
    fuzzy = fuzzy_params or {}
    fresh = [entry for entry in entries if now - entry.created_at <= ttl]

    best_entry: CacheEntry | None = None
    best: ScoreResult | None = None

    for entry in fresh:
        scored = await score_entry(params, entry.params, fuzzy, embed)
        if not scored.ok:
            continue
        if best is None or scored.score > best.score:
            best_entry = entry
            best = scored

    if best_entry is None or best is None:
        return None

    kind = CacheHitKind.EXACT if best.exact else CacheHitKind.FUZZY
    return MatchResult(entry=best_entry, hit_meta=CacheHitMeta(kind=kind, score=best.score))
