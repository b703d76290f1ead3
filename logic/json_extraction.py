"""Best-effort recovery of JSON values from free-form generator output.

The text generator is asked for JSON but may wrap it in prose or markdown
fences, stop mid-object, leave trailing commas or drop quotes. ``extract_json``
runs an ordered tuple of strategies and returns the first value of the expected
shape. The last strategy cannot fail, so callers always receive a value.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Literal, Optional, Tuple

logger = logging.getLogger(__name__)

ExpectedShape = Literal["object", "array"]

FALLBACK_CLASSIFICATION = {
    "category": "top",
    "color": "black",
    "material": "cotton",
    "style": "casual",
    "confidence": 0.5,
}
FALLBACK_RECOMMENDATION = {
    "outfitId": "outfit_1",
    "top": "",
    "bottom": "",
    "score": 0,
    "reasoning": "No recommendation could be recovered from the response",
    "confidence": 0,
}

_OPENERS = {"object": "{", "array": "["}
_CLOSERS = {"{": "}", "[": "]"}
_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_][\w\-]*)(\s*:)")
_BARE_VALUE = re.compile(r":(\s*)([^\s\"{\[\],:][^,}\]]*?)(\s*)(?=[,}\]]|$)")
_LITERAL_VALUE = re.compile(r"-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?|true|false|null")

_PARSE_ERRORS = (ValueError, TypeError, RecursionError)


@dataclass
class _Frame:
    opener: str
    state: str = "key"
    entry_start: int = 0
    key_start: Optional[int] = None


def strip_fences(text: str) -> str:
    """Remove markdown code fences, with or without a ``json`` tag."""

    return _FENCE.sub("", text).strip()


def _loads(text: str, shape: ExpectedShape) -> Any:
    value = json.loads(text)
    expected = dict if shape == "object" else list
    if not isinstance(value, expected):
        raise ValueError(f"expected {shape}, got {type(value).__name__}")
    return value


def _candidate_spans(text: str, shape: ExpectedShape) -> List[str]:
    """Widest span from the first opener to the last closer, then to the first closer."""

    opener = _OPENERS[shape]
    closer = _CLOSERS[opener]
    start = text.find(opener)
    if start == -1:
        return []
    last = text.rfind(closer)
    if last < start:
        return []
    spans = [text[start : last + 1]]
    first = text.find(closer, start)
    if first != last:
        spans.append(text[start : first + 1])
    return spans


def _outside_strings(text: str, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to every segment that is not a string literal."""

    parts: List[str] = []
    position = 0
    for match in _STRING_LITERAL.finditer(text):
        parts.append(transform(text[position : match.start()]))
        parts.append(match.group(0))
        position = match.end()
    parts.append(transform(text[position:]))
    return "".join(parts)


def _close_structure(text: str) -> str:
    """Close an open string, drop a dangling key, and append missing closers."""

    stack: List[_Frame] = []
    in_string = False
    string_is_key = False
    escaped = False

    for index, char in enumerate(text):
        frame = stack[-1] if stack else None
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
                if string_is_key and frame is not None:
                    frame.state = "colon"
            continue
        if char.isspace():
            continue
        if frame is not None and frame.opener == "{" and frame.state == "value":
            frame.state = "after"
            frame.key_start = None
        if char == '"':
            in_string = True
            string_is_key = frame is not None and frame.opener == "{" and frame.state == "key"
            if string_is_key:
                frame.key_start = frame.entry_start
        elif char in _CLOSERS:
            stack.append(_Frame(opener=char, entry_start=index + 1))
        elif char in "}]":
            if frame is not None and _CLOSERS[frame.opener] == char:
                stack.pop()
        elif char == ",":
            if frame is not None and frame.opener == "{":
                frame.state = "key"
                frame.entry_start = index
                frame.key_start = None
        elif char == ":":
            if frame is not None and frame.state == "colon":
                frame.state = "value"
        elif frame is not None and frame.opener == "{" and frame.state == "key":
            frame.state = "bare"

    frame = stack[-1] if stack else None
    if in_string and not string_is_key:
        if escaped:
            text = text[:-1]
        text += '"'
    elif frame is not None and frame.key_start is not None and (in_string or frame.state in ("colon", "value")):
        text = text[: frame.key_start]
    return text + "".join(_CLOSERS[frame.opener] for frame in reversed(stack))


def _quote_bare_value(match: "re.Match[str]") -> str:
    value = match.group(2).strip()
    if _LITERAL_VALUE.fullmatch(value):
        return match.group(0)
    return f":{match.group(1)}{json.dumps(value)}{match.group(3)}"


def repair_json(text: str, aggressive: bool = False) -> str:
    """Apply the structural repair pass used by the repair strategies."""

    repaired = _close_structure(text.strip())
    repaired = _outside_strings(repaired, lambda segment: _TRAILING_COMMA.sub(r"\1", segment))
    repaired = _outside_strings(repaired, lambda segment: _BARE_KEY.sub(r'\1"\2"\3', segment))
    if aggressive:
        repaired = _outside_strings(repaired, lambda segment: _BARE_VALUE.sub(_quote_bare_value, segment))
    return repaired


def parse_direct(text: str, shape: ExpectedShape) -> Any:
    return _loads(text.strip(), shape)


def parse_markdown(text: str, shape: ExpectedShape) -> Any:
    return _loads(strip_fences(text), shape)


def parse_regex(text: str, shape: ExpectedShape) -> Any:
    cleaned = strip_fences(text)
    for span in _candidate_spans(cleaned, shape):
        try:
            return _loads(span, shape)
        except _PARSE_ERRORS:
            continue
    raise ValueError(f"no parseable {shape} span found")


def parse_repaired(text: str, shape: ExpectedShape) -> Any:
    cleaned = strip_fences(text)
    candidates = _candidate_spans(cleaned, shape)[:1]
    start = cleaned.find(_OPENERS[shape])
    if start != -1:
        candidates.append(cleaned[start:])
    for candidate in candidates:
        try:
            return _loads(repair_json(candidate), shape)
        except _PARSE_ERRORS:
            continue
    raise ValueError(f"no repairable {shape} found")


def parse_aggressive(text: str, shape: ExpectedShape) -> Any:
    cleaned = strip_fences(text)
    openers = [index for index in (cleaned.find("{"), cleaned.find("[")) if index != -1]
    if not openers:
        raise ValueError("no opening brace or bracket")
    trimmed = cleaned[min(openers) :]
    last_closer = max(trimmed.rfind("}"), trimmed.rfind("]"))
    if last_closer > 0:
        trimmed = trimmed[: last_closer + 1]
    if shape == "array" and not trimmed.startswith("["):
        trimmed = f"[{trimmed}]"
    return _loads(repair_json(trimmed, aggressive=True), shape)


def fallback_value(text: str, shape: ExpectedShape) -> Any:
    if shape == "object":
        return copy.deepcopy(FALLBACK_CLASSIFICATION)
    return [copy.deepcopy(FALLBACK_RECOMMENDATION)]


STRATEGIES: Tuple[Tuple[str, Callable[[str, ExpectedShape], Any]], ...] = (
    ("direct", parse_direct),
    ("markdown", parse_markdown),
    ("regex", parse_regex),
    ("repair", parse_repaired),
    ("aggressive_repair", parse_aggressive),
    ("fallback", fallback_value),
)


@dataclass
class ExtractionResult:
    value: Any
    strategy: str
    failures: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.strategy == "fallback"


def extract_json_with_strategy(text: Any, expected_shape: ExpectedShape = "object") -> ExtractionResult:
    """Run the strategies in order and report which one produced the value."""

    if expected_shape not in _OPENERS:
        raise ValueError(f"expected_shape must be 'object' or 'array', got {expected_shape!r}")
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    text = "" if text is None else str(text)

    failures: List[Tuple[str, str]] = []
    for name, strategy in STRATEGIES:
        try:
            value = strategy(text, expected_shape)
        except _PARSE_ERRORS as exc:
            logger.debug("JSON strategy %s failed: %s", name, exc)
            failures.append((name, str(exc)))
            continue
        if value is None:
            failures.append((name, "no value"))
            continue
        if name == "fallback":
            logger.warning("All JSON strategies failed; using %s fallback", expected_shape)
        else:
            logger.info("JSON strategy %s succeeded", name)
        return ExtractionResult(value=value, strategy=name, failures=failures)
    # The fallback strategy always returns a value.
    raise AssertionError("unreachable")


def extract_json(text: Any, expected_shape: ExpectedShape = "object") -> Any:
    """Return a JSON value of ``expected_shape`` recovered from ``text``; never ``None``."""

    return extract_json_with_strategy(text, expected_shape).value


__all__ = [
    "ExpectedShape",
    "ExtractionResult",
    "FALLBACK_CLASSIFICATION",
    "FALLBACK_RECOMMENDATION",
    "STRATEGIES",
    "extract_json",
    "extract_json_with_strategy",
    "repair_json",
    "strip_fences",
]
