"""
cli.py - command line demo/inspection tool for the completion engine
Features:
- Loads a phrase corpus and/or word list through the same service the editor uses
- One-shot --query mode, or an interactive prompt with live suggestions
- /stats, /reset, /save, /quit commands
- Uses Rich for tables and formatting
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich import box

from aac_autocompleter.core.corpus_loader import CorpusLoader
from aac_autocompleter.service import SuggestionService
from aac_autocompleter.utils.config_manager import Config
from aac_autocompleter.utils.logger_utils import setup_logging
from aac_autocompleter.utils.model_store import save_autocompleter, save_markov

console = Console()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="aac-autocomplete", description="Predictive text completion demo")
    p.add_argument("--config", help="JSON config file")
    p.add_argument("--corpus", help="phrase corpus (one record per line)")
    p.add_argument("--words", help="word-frequency list (most frequent first)")
    p.add_argument("--order", type=int, help="markov chain order")
    p.add_argument("--limit", type=int, help="max suggestions")
    p.add_argument("--query", help="answer one query and exit")
    p.add_argument("--history", action="append", default=[], help="conversation message (repeatable)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def config_from_args(args: argparse.Namespace) -> Config:
    cfg = Config(args.config)
    if args.corpus:
        cfg.set("phrase_corpus", args.corpus, persist=False)
    if args.words:
        cfg.set("word_list", args.words, persist=False)
    if args.order:
        cfg.set("markov_order", args.order, persist=False)
    if args.limit:
        cfg.set("max_suggestions", args.limit, persist=False)
    return cfg


class CLI:
    """Interactive loop around a SuggestionService."""

    def __init__(self, service: SuggestionService, history: Optional[List[str]] = None):
        self.service = service
        self.history: List[str] = list(history or [])
        self.running = True

    def render(self, text: str) -> List[str]:
        # trailing spaces are meaningful (next-word mode), so no strip here
        out = self.service.suggest(text, self.history)
        if not out:
            console.print("[dim]No suggestions[/dim]")
            return out
        table = Table(box=box.SIMPLE, show_header=True)
        table.add_column("#", style="bold")
        table.add_column("suggestion", style="green")
        for i, s in enumerate(out, 1):
            table.add_row(str(i), s)
        console.print(table)
        return out

    def run(self) -> None:
        console.rule("[bold magenta]AAC Autocompleter[/bold magenta]")
        console.print("[cyan]Type text; end it with a space for next-word prediction.[/cyan]")
        console.print("Commands: /quit /stats /reset /save <dir> /say <message>\n")

        while self.running:
            try:
                # console.input keeps trailing spaces, Prompt.ask strips them
                fragment = console.input("[green]You[/green]: ")
                if not fragment:
                    continue
                if fragment.startswith("/"):
                    self._handle_command(fragment)
                    continue
                self.render(fragment)
            except (EOFError, KeyboardInterrupt):
                self.running = False

    # COMMAND HANDLING ---------------------------------------------------------
    def _handle_command(self, cmd: str) -> None:
        name, _, arg = cmd.partition(" ")
        if name == "/quit":
            self.running = False
        elif name == "/stats":
            self._show_stats()
        elif name == "/reset":
            self.service.autocompleter.reset()
            self.service.markov.reset()
            self.history.clear()
            console.print("[yellow]models cleared[/yellow]")
        elif name == "/save":
            target = arg.strip() or "data"
            save_autocompleter(self.service.autocompleter, f"{target}/autocompleter.json")
            save_markov(self.service.markov, f"{target}/markov.json")
            console.print(f"[green]saved to {target}/[/green]")
        elif name == "/say":
            if arg.strip():
                self.history.append(arg.strip())
        else:
            console.print(f"[red]Unknown command:[/red] {cmd}")

    def _show_stats(self) -> None:
        table = Table(title="engine", box=box.SIMPLE)
        table.add_column("metric")
        table.add_column("value", justify="right")
        for k, v in self.service.get_stats().items():
            table.add_row(k, str(v))
        ac = self.service.autocompleter
        if ac.is_ready():
            for k, v in ac.get_stats().items():
                table.add_row(k, f"{v:.2f}" if isinstance(v, float) else str(v))
        table.add_row("markov_vocabulary", str(self.service.markov.vocabulary_size()))
        console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    cfg = config_from_args(args)
    service = SuggestionService(loader=CorpusLoader(min_word_length=int(cfg.get("min_word_length"))), config=cfg)
    asyncio.run(service.initialize())

    cli = CLI(service, history=args.history)
    if args.query is not None:
        for s in service.suggest(args.query, cli.history):
            console.print(s)
        return 0
    cli.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
