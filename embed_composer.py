# embed_composer.py
"""
Turns the raw text of an embed-builder form into an EmbedSpec.

Pure and synchronous: no Discord objects, no I/O, no logging. The caller
supplies the actor for the footer and decides how to deliver the result.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

UTC = timezone.utc

DEFAULT_COLOR = 0x5865F2  # Discord blurple
ZERO_WIDTH_SPACE = "\u200b"

_HEX_COLOR = re.compile(r"#[0-9A-F]{6}", re.IGNORECASE)


class InvalidColorError(ValueError):
    """Color input was given but is not a #RRGGBB hex string."""

    def __init__(self, value: str):
        super().__init__(f"Invalid hex color '{value}'. Expected #RRGGBB.")
        self.value = value


@dataclass(frozen=True)
class EmbedInputs:
    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    author: Optional[str] = None
    fields: Optional[str] = None


@dataclass(frozen=True)
class Actor:
    display_name: str
    avatar_url: Optional[str] = None


@dataclass(frozen=True)
class EmbedAuthor:
    name: str
    url: Optional[str] = None
    icon_url: Optional[str] = None


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class EmbedFooter:
    text: str
    icon_url: Optional[str] = None


@dataclass(frozen=True)
class EmbedSpec:
    description: str
    color: int
    footer: EmbedFooter
    timestamp: datetime
    title: Optional[str] = None
    author: Optional[EmbedAuthor] = None
    fields: Tuple[EmbedField, ...] = field(default_factory=tuple)


# ---------- Helpers ----------
def split_segments(raw: str, arity: int = 3) -> Tuple[Optional[str], ...]:
    """
    Split a pipe-delimited string into exactly `arity` segments.
    Missing segments are None, anything past `arity` is dropped.
    """
    parts = raw.split("|")[:arity]
    return tuple(parts) + (None,) * (arity - len(parts))


def blank_to_none(s: Optional[str]) -> Optional[str]:
    if s is None:
        return None
    s = s.strip()
    return s or None


def placeholder_if_blank(s: Optional[str]) -> str:
    """Embed fields must never render empty; blank text becomes a zero-width space."""
    return blank_to_none(s) or ZERO_WIDTH_SPACE


def parse_color(color_str: Optional[str]) -> int:
    if not color_str:
        return DEFAULT_COLOR
    if not _HEX_COLOR.fullmatch(color_str):
        raise InvalidColorError(color_str)
    return int(color_str[1:], 16)


def parse_author(author_str: Optional[str]) -> Optional[EmbedAuthor]:
    if not author_str or not author_str.strip():
        return None
    name, url, icon_url = split_segments(author_str)
    name = blank_to_none(name)
    if name is None:
        return None
    return EmbedAuthor(name=name, url=blank_to_none(url), icon_url=blank_to_none(icon_url))


def parse_field(line: str) -> EmbedField:
    name, value, inline = split_segments(line)
    return EmbedField(
        name=placeholder_if_blank(name),
        value=placeholder_if_blank(value),
        inline=(inline or "").strip().lower() == "true",
    )


def parse_fields(fields_str: Optional[str]) -> Tuple[EmbedField, ...]:
    if not fields_str or not fields_str.strip():
        return ()
    return tuple(parse_field(line) for line in fields_str.split("\n"))


# ========== Composer ==========
def compose(inputs: EmbedInputs, actor: Actor, now: Optional[datetime] = None) -> EmbedSpec:
    """
    Build an EmbedSpec from raw form inputs.

    Raises InvalidColorError before anything else is built when the color
    input is present but malformed. Malformed author/field text is defaulted,
    never rejected.
    """
    color = parse_color(inputs.color)

    return EmbedSpec(
        title=inputs.title or None,
        description=inputs.description or "",
        color=color,
        author=parse_author(inputs.author),
        fields=parse_fields(inputs.fields),
        footer=EmbedFooter(text=f"Created by {actor.display_name}", icon_url=actor.avatar_url),
        timestamp=now or datetime.now(UTC),
    )
