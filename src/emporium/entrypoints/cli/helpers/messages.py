"""Status lines for the EMPORIUM CLI.

Messages go to stderr so stdout stays clean for tables and piped output.
Each kind of message has an emoji glyph and an ASCII fallback for terminals
whose encoding cannot represent the emoji.
"""

import click

# kind -> (emoji, ascii fallback, color)
_STYLES = {
    "warn": ("⚠️", "[!]", "yellow"),  # pragma: no mutate
    "success": ("✅", "[OK]", "green"),  # pragma: no mutate
    "error": ("❌", "[X]", "red"),  # pragma: no mutate
}


def _supports_character(character: str) -> bool:
    """Return True if `character` can be encoded on stderr."""
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """The marker for a message kind ('warn', 'success' or 'error')."""
    emoji, fallback, _ = _STYLES[kind]
    return emoji if _supports_character(emoji) else fallback


def _emit(kind: str, msg: str) -> None:
    color = _STYLES[kind][2]
    click.secho(f"{glyph(kind)}  {msg}", fg=color, bold=True, err=True)


def warn(msg: str) -> None:
    """Emit a yellow warning line, e.g. ``⚠️  This will modify your database.``"""
    _emit("warn", msg)


def success(msg: str) -> None:
    """Emit a green success line, e.g. ``✅  Upgrade complete!``"""
    _emit("success", msg)


def error(msg: str) -> None:
    """Emit a red error line, e.g. ``❌  Cannot connect to database``"""
    _emit("error", msg)
