from __future__ import annotations

import os
import sys

from rich.console import Console
from rich.markup import escape
from rich.text import Text

console = Console()
err_console = Console(stderr=True)


def plain_enabled() -> bool:
    return os.getenv("GRAMMARBUILD_PLAIN", "0") == "1"


def _emit(markup: str, plain: str, *, err: bool = False) -> None:
    if plain_enabled():
        print(plain, file=sys.stderr if err else sys.stdout, flush=True)
        return
    (err_console if err else console).print(markup, highlight=False)


def building(label: str) -> None:
    _emit(f"⏳ Building [bold]{escape(label)}[/bold]", f"⏳ Building {label}")


def finished(label: str) -> None:
    _emit(
        f"✅ [green]Finished building[/green] [bold]{escape(label)}[/bold]",
        f"✅ Finished building {label}",
    )


def failed(label: str, detail: str) -> None:
    header = f"🔥 Failed to build {label}:"
    if plain_enabled():
        _emit(header, f"{header}\n{detail}", err=True)
        return
    err_console.print(Text(header, style="bold red"))
    err_console.print(Text(detail, style="red"))


def copied(name: str) -> None:
    _emit(f"✅ [green]Copied[/green] {escape(name)}", f"✅ Copied {name}")


def summary(succeeded: int, total: int) -> None:
    style = "bold green" if succeeded == total else "bold red"
    line = f"{succeeded}/{total} tasks succeeded"
    _emit(f"[{style}]{line}[/{style}]", line)


def relocated(count: int, out_dir: str) -> None:
    line = f"Moved {count} artifact(s) into {out_dir}"
    _emit(f"[cyan]{escape(line)}[/cyan]", line)


def skipped_relocation() -> None:
    line = "Build failed; artifacts were not moved into the output directory"
    _emit(f"[bold yellow]{line}[/bold yellow]", line, err=True)
