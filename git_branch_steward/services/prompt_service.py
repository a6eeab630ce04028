"""User decisions: confirmations, branch choices and free text."""

from typing import Iterable, List, Optional, Protocol, Sequence

from rich.console import Console
from rich.prompt import Confirm

from git_branch_steward.logging_config import get_logger
from git_branch_steward.services.branch_selector import paginate

logger = get_logger(__name__)


class DecisionProvider(Protocol):
    def confirm(self, message: str, default: bool = False) -> bool:
        ...

    def select(self, message: str, candidates: Sequence[str]) -> Optional[str]:
        ...

    def ask_text(self, message: str, default: Optional[str] = None) -> Optional[str]:
        ...


class ConsoleDecisionProvider:
    """Line-oriented prompts on the terminal."""

    def __init__(self, console: Optional[Console] = None, page_size: int = 10):
        self.console = console or Console()
        self.page_size = page_size

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def select(self, message: str, candidates: Sequence[str]) -> Optional[str]:
        """Numbered, paged list. Returns None when the user cancels."""
        if not candidates:
            return None

        page_index = 0
        while True:
            view = paginate(candidates, self.page_size, page_index)
            self.console.print(f"\n[bold]{message}[/bold]")
            for index, name in view.items:
                self.console.print(f"  [cyan]{index + 1:>3}[/cyan]  {name}")
            if view.page_count > 1:
                self.console.print(
                    f"[dim]Page {view.page_index + 1}/{view.page_count} "
                    f"(n: next, p: previous)[/dim]"
                )

            response = self.console.input("Select a branch number (Enter to cancel): ").strip().lower()
            if response in ("", "q"):
                return None
            if response == "n" and view.has_next:
                page_index += 1
                continue
            if response == "p" and view.has_previous:
                page_index -= 1
                continue
            if response.isdigit() and 1 <= int(response) <= len(candidates):
                return candidates[int(response) - 1]
            self.console.print(f"[yellow]'{response}' is not a valid choice[/yellow]")

    def ask_text(self, message: str, default: Optional[str] = None) -> Optional[str]:
        suffix = f" [{default}]" if default else ""
        response = self.console.input(f"{message}{suffix}: ").strip()
        return response or default


class ScriptedDecisionProvider:
    """Answers from a script, for tests and non-interactive runs.

    Confirmations pop from `confirmations`, selections from `selections`
    (each either a branch name or None), texts from `texts`. An exhausted
    script answers with the prompt's default, no selection, or no text.
    """

    def __init__(
        self,
        confirmations: Iterable[bool] = (),
        selections: Iterable[Optional[str]] = (),
        texts: Iterable[Optional[str]] = (),
    ):
        self.confirmations: List[bool] = list(confirmations)
        self.selections: List[Optional[str]] = list(selections)
        self.texts: List[Optional[str]] = list(texts)
        self.asked: List[str] = []

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(message)
        if not self.confirmations:
            logger.debug(f"No scripted answer for '{message}', using default {default}")
            return default
        return self.confirmations.pop(0)

    def select(self, message: str, candidates: Sequence[str]) -> Optional[str]:
        self.asked.append(message)
        if not self.selections:
            return None
        choice = self.selections.pop(0)
        if choice is not None and choice not in candidates:
            logger.debug(f"Scripted choice '{choice}' is not among the candidates")
            return None
        return choice

    def ask_text(self, message: str, default: Optional[str] = None) -> Optional[str]:
        self.asked.append(message)
        if not self.texts:
            return default
        return self.texts.pop(0)
