## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# linebasic — A line-numbered BASIC in the classic home-computer style.
#

import sys
import time
from pathlib import Path
from dataclasses import dataclass

import click

from . import types as T
from .formatting import write_without_ansi
from .streams import ConsoleIO
from .storage import FileStorage
from .runtime import Runtime


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool


class BasicRunner:
    def __init__(self, config: RuntimeConfig, interactive: bool | None = None):
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.io = ConsoleIO(interactive=interactive, plain=self.plain)
        self.runtime = Runtime(self.io, storage=FileStorage(Path.cwd()), verbosity=config.verbose)
        self.start = time.time()

    def run_source(self, source: str, filename: str) -> None:
        """Load a saved listing and RUN it; INPUT statements read from stdin."""
        interp = self.runtime.interpreter
        interp.load_listing(source)
        if self.io.error_count > 0 and not self.ignore:
            return
        if len(interp.program) == 0:
            print(f"\033[33mNothing to run in `{filename}`.\033[0m", file=sys.stderr)
            return
        interp.execute_direct(T.Run())
        self.runtime.interpret_input(until_stopped=True)

    def interpret_stdin(self) -> None:
        self.runtime.interpret_input()

    def repl(self) -> None:
        print('linebasic - Line-numbered BASIC; type BYE or Ctrl+D to exit.')
        self.runtime.interpret_input()

    def finalize(self) -> int:
        sys.stdout.flush()
        if self.stats_enabled:
            elapsed_time = time.time() - self.start
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m", file=sys.stderr)
            print(f"step\t\033[97m{self.runtime.interpreter.steps:,}\033[0m", file=sys.stderr)
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m", file=sys.stderr)
        return 1 if self.io.error_count > 0 and not self.ignore else 0


@click.group(invoke_without_command=True)
@click.option('--verbose', '-v', default=0, count=True, help='Trace every executed line (twice to show assigned variables).')
@click.option('--ignore', '-i', is_flag=True, help='Exit with success even if errors were reported.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain)


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = BasicRunner(ctx.obj['config'], interactive=False)
    runner.run_source(script.read(), script.name or '<STDIN>')
    ctx.exit(runner.finalize())


@cli.command('run-stdin')
@click.pass_context
def run_stdin(ctx: click.Context) -> None:
    runner = BasicRunner(ctx.obj['config'], interactive=False)
    runner.interpret_stdin()
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = BasicRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in ('--ignore', '--stats', '--plain', '-i', '-p') or t.startswith('-v') or t == '--verbose']
    r = [t for t in a if t not in g]

    if len(r) == 0:
        # No args: if stdin has data, treat it as typed lines, else REPL.
        cmd, tail = ('run-stdin', []) if not sys.stdin.isatty() else ('run-repl', [])
    elif r[0] in cli.commands:
        cmd, tail = r[0], r[1:]
    elif len(r) == 1 and (r[0] == '-' or Path(r[0]).exists()):
        cmd, tail = 'run-file', r
    else:
        raise SystemExit(f"Expected a BASIC file, `-`, or one of: {', '.join(sorted(cli.commands))}.")

    cli.main(args=[*g, cmd, *tail], prog_name='linebasic')


if __name__ == "__main__":
    main()
