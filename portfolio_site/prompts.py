"""Small terminal prompt helpers used by the content manager."""

from typing import Callable, Optional


class Cancelled(Exception):
    """Raised when the user hits Ctrl-D / Ctrl-C at a prompt."""


def _read(message: str) -> str:
    try:
        return input(message)
    except (EOFError, KeyboardInterrupt):
        print()
        raise Cancelled()


def ask_text(message: str, initial: str = "",
             validate: Optional[Callable[[str], object]] = None) -> str:
    """
    Ask for a line of text. Enter keeps `initial`, a single "-" clears it.
    `validate` returns True when the value is acceptable, otherwise an error message.
    """
    suffix = f" [{initial}]" if initial else ""
    while True:
        value = _read(f"? {message}{suffix}: ").strip()
        if not value:
            value = initial or ""
        elif value == "-":
            value = ""
        if validate is None:
            return value
        result = validate(value)
        if result is True:
            return value
        print(f"  ! {result}")


def ask_confirm(message: str, initial: bool = False) -> bool:
    hint = "Y/n" if initial else "y/N"
    while True:
        value = _read(f"? {message} ({hint}): ").strip().lower()
        if not value:
            return initial
        if value in ("y", "yes"):
            return True
        if value in ("n", "no"):
            return False
        print("  ! Please answer yes or no")


def ask_select(message: str, choices: list[tuple[str, object]], initial: int = 0):
    """Numbered menu; returns the value of the chosen (title, value) pair."""
    print(f"? {message}")
    for i, (title, _) in enumerate(choices, 1):
        marker = ">" if i - 1 == initial else " "
        print(f"  {marker} {i}. {title}")
    while True:
        value = _read(f"  Choice [{initial + 1}]: ").strip()
        if not value:
            return choices[initial][1]
        if value.isdigit() and 1 <= int(value) <= len(choices):
            return choices[int(value) - 1][1]
        print(f"  ! Enter a number between 1 and {len(choices)}")


def ask_autocomplete(message: str, choices: list[tuple[str, object]]):
    """Filter choices by substring, then pick one. Returns None when nothing matches."""
    query = _read(f"? {message} (type to filter, Enter for all): ").strip().lower()
    matches = [c for c in choices if query in c[0].lower()]
    if not matches:
        print("  ! No match")
        return None
    if len(matches) == 1:
        print(f"  → {matches[0][0]}")
        return matches[0][1]
    return ask_select(message, matches)


def ask_multiline(initial_text: str = "", terminator: str = "::done") -> str:
    """Paste mode: read lines until the terminator. Empty input keeps initial_text."""
    print(f"Paste your text below. Type {terminator} on its own line to finish.\n"
          f"(Leave empty then type {terminator} to keep current text.)\n")
    lines = []
    while True:
        try:
            line = input()
        except EOFError:
            break
        except KeyboardInterrupt:
            print()
            raise Cancelled()
        if line.strip() == terminator:
            break
        lines.append(line)
    joined = "\n".join(lines).rstrip()
    return joined if joined else (initial_text or "")


def ask_description(initial_text: str = "") -> str:
    mode = ask_select("Description input mode", [
        ("Paste multi-line (type ::done on its own line to finish)", "paste"),
        ("Single line", "single"),
    ])
    if mode == "single":
        return ask_text("Description", initial_text) or initial_text or ""
    return ask_multiline(initial_text)
