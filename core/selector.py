"""Interactive multi-select prompt for search results."""

import os
from dataclasses import dataclass
from typing import Any

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.layout.containers import Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.styles import Style as PromptStyle

from .models import PackageCandidate
from .reconcile import semver_delta

DEFAULT_MESSAGE = "Select packages to install/upgrade"


@dataclass
class Choice:
    """A single row of the selection list."""

    label: str
    candidate: PackageCandidate
    disabled: bool = False


def build_choices(candidates: list[PackageCandidate]) -> list[Choice]:
    """Turn ordered candidates into prompt rows; installed packages are disabled."""
    choices = []
    for pkg in candidates:
        if pkg.is_installed:
            label = f"{pkg.name} ({pkg.latest_version}) - Already Installed"
            choices.append(Choice(label=label, candidate=pkg, disabled=True))
        elif pkg.is_upgrade:
            label = f"{pkg.name} (current: {pkg.locked_version}) -> Upgrade to {pkg.latest_version}"
            delta = semver_delta(pkg.locked_version, pkg.latest_version)
            if delta != "unknown":
                label += f" [{delta}]"
            choices.append(Choice(label=label, candidate=pkg))
        else:
            choices.append(Choice(label=f"{pkg.name} ({pkg.latest_version})", candidate=pkg))
    return choices


class SelectionState:
    """Cursor and checked rows of the selection list."""

    def __init__(self, choices: list[Choice]):
        self.choices = choices
        self.cursor = 0
        self.checked: set[int] = set()

    def move(self, step: int) -> None:
        if self.choices:
            self.cursor = (self.cursor + step) % len(self.choices)

    def toggle(self) -> None:
        if not self.choices or self.choices[self.cursor].disabled:
            return
        self.checked ^= {self.cursor}

    def toggle_all(self) -> None:
        enabled = {i for i, choice in enumerate(self.choices) if not choice.disabled}
        if enabled <= self.checked:
            self.checked -= enabled
        else:
            self.checked |= enabled

    def selected(self) -> list[PackageCandidate]:
        return [choice.candidate for i, choice in enumerate(self.choices) if i in self.checked]


def prompt_selection(choices: list[Choice], message: str = DEFAULT_MESSAGE) -> list[PackageCandidate]:
    """Show a scrollable checkbox list and return the checked candidates.

    Up/down move, space toggles, ``a`` toggles all, enter confirms.
    Ctrl-C or Esc cancels and selects nothing.
    """
    if not choices:
        return []

    state = SelectionState(choices)
    try:
        terminal_height = os.get_terminal_size().lines
    except OSError:
        terminal_height = 25
    max_visible = max(5, terminal_height - 4)
    start_index = 0

    bindings = KeyBindings()

    def _scroll() -> None:
        nonlocal start_index
        if state.cursor < start_index:
            start_index = state.cursor
        elif state.cursor >= start_index + max_visible:
            start_index = state.cursor - max_visible + 1

    @bindings.add("up")
    def _(event: KeyPressEvent) -> None:
        state.move(-1)
        _scroll()

    @bindings.add("down")
    def _(event: KeyPressEvent) -> None:
        state.move(1)
        _scroll()

    @bindings.add("space")
    def _(event: KeyPressEvent) -> None:
        state.toggle()

    @bindings.add("a")
    def _(event: KeyPressEvent) -> None:
        state.toggle_all()

    @bindings.add("enter")
    def _(event: KeyPressEvent) -> None:
        event.app.exit(result=state.selected())

    @bindings.add("c-c")
    @bindings.add("escape")
    def _(event: KeyPressEvent) -> None:
        event.app.exit(result=[])

    def get_prompt_tokens() -> FormattedText:
        tokens = [("class:question", f"{message} (space to toggle, a for all, enter to confirm)\n")]

        end_index = min(start_index + max_visible, len(choices))
        if start_index > 0:
            tokens.append(("class:indicator", "  ... (more above) ...\n"))

        for i in range(start_index, end_index):
            choice = choices[i]
            pointer = ">" if i == state.cursor else " "
            if choice.disabled:
                tokens.append(("class:disabled", f"{pointer} - {choice.label}\n"))
                continue
            mark = "[x]" if i in state.checked else "[ ]"
            style = "class:selected" if i == state.cursor else ""
            tokens.append((style, f"{pointer} {mark} {choice.label}\n"))

        if end_index < len(choices):
            tokens.append(("class:indicator", "  ... (more below) ...\n"))

        return FormattedText(tokens)

    style = PromptStyle.from_dict(
        {
            "question": "bold",
            "selected": "bg:#696969 #ffffff",
            "disabled": "fg:gray italic",
            "indicator": "fg:gray",
        }
    )

    layout = Layout(
        container=Window(
            content=FormattedTextControl(
                text=get_prompt_tokens,
                focusable=True,
                key_bindings=bindings,
            )
        )
    )

    app: Application[Any] = Application(
        layout=layout,
        key_bindings=bindings,
        style=style,
        full_screen=False,
    )

    try:
        result = app.run()
    except (KeyboardInterrupt, EOFError):
        return []
    return result or []
