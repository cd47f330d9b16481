"""Interactive CLI application."""
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from pccs_tutor.advisor import analyze_season, encode_image, get_design_tip, match_mood
from pccs_tutor.db import init_db, DEFAULT_DB_PATH
from pccs_tutor.errors import AdvisoryError
from pccs_tutor.models import ColorEntry, Settings
from pccs_tutor.palette import HUES, TONES, derive_color, tone_row
from pccs_tutor.quiz import POINTS_PER_CORRECT, QuizSession
from pccs_tutor.settings import (
    SqliteSettingsStore, SettingsStore, load_build_defaults, mask_key,
    reset_settings, resolve_settings, save_settings,
)

console = Console()

EXIT_WORDS = ("q", "quit", "menu")


class SessionExitRequested(Exception):
    """Raised when the user leaves a running drill."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def swatch(card: ColorEntry, width: int = 6) -> Text:
    return Text(" " * width, style=f"on {card.hex}")


def show_welcome():
    console.print(Panel(
        "[bold]PCCS Tone Trainer[/bold]\n[dim]12 tones x 12 hues[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("reference", "Tone chart"),
        ("quiz", "Guess-the-tone flashcards"),
        ("mood", "Match a mood to a tone (AI)"),
        ("season", "Seasonal color analysis of a photo (AI)"),
        ("settings", "API endpoint, key and model"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def history_dots(history: tuple[bool, ...]) -> str:
    return " ".join("[green]●[/green]" if ok else "[red]●[/red]" for ok in history)


def show_design_tip(store: SettingsStore, card: ColorEntry) -> None:
    with console.status("Asking for design advice..."):
        try:
            tip = get_design_tip(resolve_settings(store), card)
        except AdvisoryError as e:
            console.print(f"[red]{e}[/red]")
            return
    console.print(Panel(tip, title="AI design tip", border_style="magenta"))


def run_quiz_session(session: QuizSession, store: SettingsStore, max_cards: int | None = None) -> None:
    shown = 0
    while max_cards is None or shown < max_cards:
        card = session.current_card
        options = session.options()
        console.print(
            f"\nCard {session.index + 1}/{len(session.deck)}  "
            f"Score [bold]{session.score}[/bold]  Streak [bold]{session.streak}[/bold]  "
            f"Best {session.best_streak}  {history_dots(session.history)}"
        )
        console.print(Panel(swatch(card, 24), title=card.hue_name, border_style="cyan"))
        for i, tone in enumerate(options, 1):
            console.print(f"  [cyan]{i})[/cyan] {tone.label}")
        choices = [str(i) for i in range(1, len(options) + 1)]
        answer = session_prompt("Which tone?", choices=choices + ["q"])
        result = session.submit_answer(options[int(answer) - 1].id)
        if result.is_correct:
            console.print(f"[green]Correct![/green] +{POINTS_PER_CORRECT}  ({card.tone_label}: {card.description})")
        else:
            console.print(f"[red]Incorrect.[/red] This is [green]{card.tone_label}[/green] ({card.description})")
        while session_prompt("[dim]Enter for next card, t for a design tip[/dim]", default="").strip().lower() == "t":
            show_design_tip(store, card)
        session.advance()
        shown += 1


def cmd_quiz(store: SettingsStore):
    console.print("\n[bold]Tone Quiz[/bold] [dim](q to leave)[/dim]")
    session = QuizSession.new()
    try:
        run_quiz_session(session, store)
    except SessionExitRequested:
        pass
    console.print(f"[bold]Score: {session.score}  Best streak: {session.best_streak}[/bold]\n")


def cmd_reference():
    console.print("[dim]Tone = saturation and lightness combined. Memorize the feel of each row.[/dim]")
    table = Table(title="PCCS Tone Chart")
    table.add_column("Tone", style="cyan")
    for hue in HUES:
        table.add_column(str(hue.id), justify="center")
    table.add_column("Feel", style="dim")
    for tone in TONES:
        table.add_row(tone.label, *[swatch(c, 3) for c in tone_row(tone)], tone.description)
    console.print(table)


def cmd_mood(store: SettingsStore):
    description = Prompt.ask("Describe a mood or scene (e.g. 'rainy afternoon in Taipei')").strip()
    if not description:
        return
    with console.status("Matching..."):
        try:
            result = match_mood(resolve_settings(store), description)
        except AdvisoryError as e:
            console.print(f"[red]{e}[/red]")
            return
    row = Text()
    for hue in HUES[::2]:
        row.append_text(swatch(derive_color(result.tone, hue)))
        row.append(" ")
    console.print(Panel(
        Text.assemble((result.tone.label, "bold"), "\n", row, "\n\n", result.reasoning),
        title="Matched tone", border_style="magenta",
    ))


def cmd_season(store: SettingsStore):
    file_path = Prompt.ask("Photo path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    try:
        image_url = encode_image(file_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return
    with console.status("Analyzing..."):
        try:
            result = analyze_season(resolve_settings(store), image_url)
        except AdvisoryError as e:
            console.print(f"[red]Analysis failed: {e}[/red]")
            return
    console.print(Panel(
        f"[bold]{result.season}[/bold]  (confidence: {result.confidence})\n"
        f"Undertone {result.undertone} | Contrast {result.contrast} | {result.primary_feature}\n\n"
        f"{result.reasoning}",
        title="Seasonal analysis", border_style="magenta",
    ))
    table = Table(title="Best colors")
    table.add_column("")
    table.add_column("Color", style="cyan")
    table.add_column("Hex")
    table.add_column("Why")
    for color in result.palette:
        table.add_row(Text("   ", style=f"on {color.hex}"), color.name, color.hex, color.reason)
    console.print(table)
    avoid = ", ".join(f"{c.name} ({c.hex})" for c in result.worst_colors)
    console.print(f"[red]Avoid:[/red] {avoid}")
    console.print(f"\n{result.fashion_advice}")


def show_settings(store: SettingsStore):
    current = resolve_settings(store)
    table = Table(title="Effective settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Base URL", current.base_url)
    table.add_row("API key", mask_key(current.api_key))
    table.add_row("Model", current.model)
    console.print(table)
    console.print("[dim]Environment variables (PCCS_BASE_URL, PCCS_API_KEY, PCCS_MODEL) apply "
                  "unless overridden here.[/dim]")


def cmd_settings(store: SettingsStore):
    show_settings(store)
    action = Prompt.ask("Action", choices=["edit", "reset", "back"], default="back")
    if action == "edit":
        current = resolve_settings(store)
        updated = Settings(
            base_url=Prompt.ask("Base URL", default=current.base_url),
            api_key=Prompt.ask("API key (Enter keeps current)", password=True, default="") or current.api_key,
            model=Prompt.ask("Model", default=current.model),
        )
        save_settings(store, updated)
        console.print("[green]Settings saved.[/green]")
    elif action == "reset":
        reset_settings(store)
        console.print("[green]Settings reset to environment defaults.[/green]")
        show_settings(store)


def setup_logging():
    level = os.environ.get("PCCS_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def main():
    setup_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    store = SqliteSettingsStore(db_path)
    if not resolve_settings(store, load_build_defaults()).api_key:
        console.print("[dim]No API key configured; AI features are disabled until you add one in 'settings'.[/dim]")

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="quiz").strip().lower()
        try:
            if choice == "reference":
                cmd_reference()
            elif choice == "quiz":
                cmd_quiz(store)
            elif choice == "mood":
                cmd_mood(store)
            elif choice == "season":
                cmd_season(store)
            elif choice == "settings":
                cmd_settings(store)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Keep practicing![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
