from __future__ import annotations

from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from myagenda.engine import CommandResult, Engine
from myagenda.model import DIMENSIONS, Event
from myagenda.navigator import NEXT, PREVIOUS

Prompt = Callable[[str], str]


class Session:
    """
    Menu-driven front end for one engine.

    All state lives in the engine; this class only reads queries,
    sends commands and prints.
    """

    def __init__(self, engine: Engine, console: Optional[Console] = None, prompt: Optional[Prompt] = None):
        self.engine = engine
        self.console = console or Console()
        # Prompts are plain text; "[n]" etc. must not be read as markup
        self._prompt_fn = prompt or (lambda msg: self.console.input(escape(msg)))
        self._unsubscribe = engine.subscribe(self._on_change)

    def close(self) -> None:
        self._unsubscribe()

    def _println(self, msg: str = "") -> None:
        self.console.print(msg)

    def _prompt(self, msg: str) -> str:
        return self._prompt_fn(msg)

    def _on_change(self, engine: Engine) -> None:
        visible = len(engine.get_visible_events())
        self._println(f"[dim]Visible events: {visible}/{len(engine.catalog)}[/]")

    def _report(self, result: CommandResult) -> None:
        if result.error is not None:
            self._println(f"[red]{result.error}[/]")
        elif not result.changed:
            self._println("Nothing changed.")

    # ------------------------------------------------------------------

    def _pick_dimension(self) -> Optional[str]:
        for i, dim in enumerate(DIMENSIONS, start=1):
            self._println(f"{i}) {dim}")
        pick = self._prompt("Dimension number [blank = back]: ").strip()
        if not pick:
            return None
        if not pick.isdigit() or not (1 <= int(pick) <= len(DIMENSIONS)):
            self._println("Out of range.")
            return None
        return DIMENSIONS[int(pick) - 1]

    def _show_filter(self, dim: str) -> None:
        table = Table(title=dim, box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("On")
        table.add_column("Value")
        for i, fv in enumerate(self.engine.get_filter(dim), start=1):
            label = escape(fv.value) if fv.value else "[italic]Unknown[/]"
            if fv.color:
                label = f"[{fv.color}]■[/] {label}"
            table.add_row(str(i), "x" if fv.is_selected else "", label)
        self.console.print(table)

    def flow_toggle_value(self) -> None:
        dim = self._pick_dimension()
        if dim is None:
            return
        values = self.engine.get_filter(dim)
        self._show_filter(dim)
        pick = self._prompt("Value number to toggle [blank = back]: ").strip()
        if not pick:
            return
        if not pick.isdigit() or not (1 <= int(pick) <= len(values)):
            self._println("Out of range.")
            return
        fv = values[int(pick) - 1]
        self._report(self.engine.set_filter_value(dim, fv.value, not fv.is_selected))

    def flow_all_none(self) -> None:
        dim = self._pick_dimension()
        if dim is None:
            return
        answer = self._prompt("[a]ll or [n]one: ").strip().lower()
        if answer not in ("a", "n"):
            self._println("Invalid choice.")
            return
        self._report(self.engine.set_all_filter_values(dim, answer == "a"))

    def flow_search(self) -> None:
        current = self.engine.filter_state.search_text
        text = self._prompt(f"Search text [{current}] ('-' clears): ").strip()
        if text == "-":
            text = ""
        elif not text:
            return
        self._report(self.engine.set_search_text(text))

    def flow_color_by(self) -> None:
        dim = self._pick_dimension()
        if dim is None:
            return
        self._report(self.engine.set_color_by(dim))
        self._show_filter(dim)

    def flow_toggle_interest(self) -> None:
        ev = self.engine.selected_event
        if ev is None:
            self._println("No event selected. Use next/previous first.")
            return
        self._report(self.engine.toggle_interested())
        state = "interested" if self.engine.is_interested(ev.id) else "not interested"
        self._println(f"{escape(ev.title or ev.id)}: {state}")

    def flow_navigate(self, direction: int) -> None:
        result = self.engine.navigate(direction)
        if result.error is not None:
            self._println(f"[red]{result.error}[/]")
            return
        ev = self.engine.selected_event
        if ev is None or ev not in self.engine.navigable_events():
            self._println("No events in view.")
            return
        self._show_event(ev)

    def _event_row(self, ev: Event) -> list[str]:
        color = self.engine.color_of(ev)
        title = escape(ev.title or ev.id)
        if color:
            title = f"[{color}]■[/] {title}"
        return [
            f"{ev.start:%a %m-%d %H:%M}-{ev.end:%H:%M}",
            "★" if self.engine.is_interested(ev.id) else "",
            escape(ev.abbreviation),
            title,
            escape(ev.location),
        ]

    def _show_event(self, ev: Event) -> None:
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("When", f"{ev.start:%A %Y-%m-%d %H:%M}-{ev.end:%H:%M}")
        table.add_row("Title", escape(ev.title))
        if ev.abbreviation:
            table.add_row("Code", escape(ev.abbreviation))
        table.add_row("Location", escape(ev.location) or "Unknown")
        table.add_row("Type", escape(ev.type) or "Unknown")
        table.add_row("Topic", escape(ev.topic) or "Unknown")
        table.add_row("Interested", "yes" if self.engine.is_interested(ev.id) else "no")
        self.console.print(table)
        if ev.abstract:
            self._println(escape(ev.abstract))

    def flow_list(self) -> None:
        events = self.engine.navigable_events()
        if not events:
            self._println("No events in view.")
            return
        selected = self.engine.selected_event
        table = Table(title=f"Visible events ({len(events)})", box=box.SIMPLE)
        for col in ("When", "", "Code", "Title", "Location"):
            table.add_column(col)
        for ev in events:
            style = "reverse" if selected is not None and ev.id == selected.id else None
            table.add_row(*self._event_row(ev), style=style)
        self.console.print(table)

    # ------------------------------------------------------------------

    def _print_header(self) -> None:
        fs = self.engine.filter_state
        self._println("\n=== MyAgenda (interactive) ===")
        self._println(
            f"Visible: {len(self.engine.get_visible_events())}/{len(self.engine.catalog)}"
            f" | search='{escape(fs.search_text)}' | color by: {fs.color_by}"
            f" | always show interested: {'on' if fs.always_show_interested else 'off'}"
            f" | hide not interested: {'on' if fs.hide_not_interested else 'off'}"
        )

    def run(self) -> None:
        """
        Interactive menu loop.
        """
        while True:
            self._print_header()

            choice = self._prompt(
                "\n[1] Toggle a filter value\n"
                "[2] All / none for a filter\n"
                "[3] Search\n"
                "[4] Color by\n"
                "[5] Always show interested (on/off)\n"
                "[6] Hide not interested (on/off)\n"
                "[n] Next event   [p] Previous event\n"
                "[i] Toggle interest on selected event\n"
                "[l] List visible events\n"
                "[0] Exit\n"
                "Select: "
            ).strip().lower()

            if choice == "0":
                self._println("Bye.")
                return

            if choice == "1":
                self.flow_toggle_value()
            elif choice == "2":
                self.flow_all_none()
            elif choice == "3":
                self.flow_search()
            elif choice == "4":
                self.flow_color_by()
            elif choice == "5":
                fs = self.engine.filter_state
                self._report(self.engine.set_always_show_interested(not fs.always_show_interested))
            elif choice == "6":
                fs = self.engine.filter_state
                self._report(self.engine.set_hide_not_interested(not fs.hide_not_interested))
            elif choice == "n":
                self.flow_navigate(NEXT)
            elif choice == "p":
                self.flow_navigate(PREVIOUS)
            elif choice == "i":
                self.flow_toggle_interest()
            elif choice == "l":
                self.flow_list()
            else:
                self._println("Invalid choice.")


def run_interactive(engine: Engine, console: Optional[Console] = None, prompt: Optional[Prompt] = None) -> None:
    session = Session(engine, console=console, prompt=prompt)
    try:
        session.run()
    finally:
        session.close()
