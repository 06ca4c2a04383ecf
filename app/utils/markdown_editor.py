"""Markdown insertion helper behind the blog editor toolbar.

Pure string splicing around a textarea selection; nothing is parsed.
"""
import re
from dataclasses import dataclass

_HEADING_MARKER = re.compile(r"^#{1,6}\s*")


@dataclass(frozen=True)
class EditResult:
    text: str
    cursor: int


# action -> (prefix, suffix, new_line)
ACTIONS: dict[str, tuple[str, str, bool]] = {
    "bold": ("**", "**", False),
    "italic": ("*", "*", False),
    "underline": ("<u>", "</u>", False),
    "numbered_list": ("1. ", "", False),
    "bullet_list": ("- ", "", False),
    "quote": ("> ", "", False),
    "link": ("[", "](url)", False),
    "image": ("![", "](image_url)", False),
}
for _level in range(1, 7):
    ACTIONS[f"heading{_level}"] = ("#" * _level + " ", "", True)


def insert_markdown(
    text: str,
    selection_start: int,
    selection_end: int,
    prefix: str,
    suffix: str = "",
    new_line: bool = False,
) -> EditResult:
    """Wrap the selection in ``prefix``/``suffix`` and return the new text and caret.

    With ``new_line`` the whole line holding the selection is rewritten as
    ``prefix + line`` after removing any heading marker already on it.
    """
    start = max(0, min(selection_start, len(text)))
    end = max(start, min(selection_end, len(text)))

    if new_line:
        line_start = text.rfind("\n", 0, start) + 1 if start > 0 else 0
        line_end = text.find("\n", end)
        if line_end == -1:
            line_end = len(text)
        clean_line = _HEADING_MARKER.sub("", text[line_start:line_end], count=1)
        new_text = text[:line_start] + prefix + clean_line + text[line_end:]
        return EditResult(text=new_text, cursor=start + len(prefix))

    selected = text[start:end]
    new_text = text[:start] + prefix + selected + suffix + text[end:]
    return EditResult(text=new_text, cursor=start + len(prefix) + len(selected) + len(suffix))


def apply_action(text: str, selection_start: int, selection_end: int, action: str) -> EditResult:
    """Run a named toolbar action (``bold``, ``heading2``, ``link`` ...)."""
    try:
        prefix, suffix, new_line = ACTIONS[action]
    except KeyError:
        raise ValueError(f"Unknown editor action: {action}") from None
    return insert_markdown(text, selection_start, selection_end, prefix, suffix, new_line)
