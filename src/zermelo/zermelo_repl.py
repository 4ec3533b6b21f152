import io
import json
import traceback
from typing import Any

from zermelo.emitters.py_emitter import MACHINE, PythonEmitter
from zermelo.zermelo_cli import parse_source
from zermelo.zermelo_constants import BACKSLASH, LBRACKET, RBRACKET, SLASH
from zermelo.zermelo_lexer import CharacterStream, Lexer
from zermelo.zermelo_runtime import Machine, ZSet
from zermelo.zermelo_uimap import MappingError, UserInterfaceMapper

_OPENERS = {LBRACKET, SLASH}
_CLOSERS = {RBRACKET, BACKSLASH}


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def block_depth(src: str, uimap: UserInterfaceMapper | None = None) -> int:
    """Number of loop and character-test blocks left open in `src`.

    Returns 0 when `src` does not lex, so the parser gets to report the error.
    """
    depth = 0
    try:
        for tok in Lexer(CharacterStream(src), uimap).tokenize():
            if tok.type in _OPENERS:
                depth += 1
            elif tok.type in _CLOSERS:
                depth -= 1
    except SyntaxError:
        return 0
    return depth


def handle_sugar_command(src: str, uimap: UserInterfaceMapper) -> bool:
    """Handle `sugar`, `sugar diff`, `sugar load PATH` and `sugar {json}`.

    Returns False if `src` is not a sugar command.
    """
    src = src.strip()
    if not src.lower().startswith("sugar"):
        return False
    command = src[5:].strip()
    if command == "":
        print(uimap.report(verbose=True))
        return True
    if command.lower() == "diff":
        added = uimap.session_diff()
        if not added:
            print("[sugar] >>> No aliases beyond the defaults.")
        for alias, sym in sorted(added.items()):
            print(f"{alias:>12} → {sym}")
        return True
    try:
        if command.lower().startswith("load "):
            path = command[5:].strip().strip('"').strip("'")
            uimap.load_from_json(path)
            print(f"[ok] >>> Sugar aliases loaded from {path}.")
        else:
            uimap.configure(json.loads(command))
            print("[ok] >>> Sugar aliases updated.")
    except MappingError as e:
        print("[error] >>> Failed to configure sugar aliases:")
        print(e)
        for conflict in e.conflicts:
            print(" -", conflict)
    except ValueError as e:
        print("[error] >>> Sugar configuration must be a JSON object or list:")
        print(e)
    return True


def run_entry(
    src: str,
    env_globals: dict[str, Any],
    uimap: UserInterfaceMapper,
    verbose: bool = False,
) -> None:
    """Parse one REPL entry and execute it against the session's machine."""
    program = parse_source(src, uimap)
    emitter = PythonEmitter()
    for stmt in program.children:
        emitter._visit(stmt)
    code = emitter.get_output()
    if verbose:
        print(f"[py] >>>\n{code}")
    if code.strip():
        exec(code, env_globals)  # nosec B102


def start_repl(
    verbose: bool = False,
    uimap: UserInterfaceMapper | None = None,
    machine: Machine | None = None,
) -> None:
    print("Zermelo REPL. Type 'exit' or 'quit' to leave.")
    if uimap is None:
        uimap = UserInterfaceMapper.from_env()
    if machine is None:
        machine = Machine()
    env_globals: dict[str, Any] = {MACHINE: machine, "ZSet": ZSet, "Machine": Machine}

    while True:
        try:
            src_lines: list[str] = []
            while True:
                prompt = ">>> " if not src_lines else "... "
                line = input(prompt)
                if line.strip() in ("exit", "quit") and not src_lines:
                    print("Exiting Zermelo REPL.")
                    return
                src_lines.append(line)
                if block_depth("\n".join(src_lines), uimap) <= 0:
                    break
            src = "\n".join(src_lines).strip()
            if not src or src.startswith("#"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            if src.lower() == "state":
                print(f"[state] >>> {machine!r}")
                continue
            if handle_sugar_command(src, uimap):
                continue

            try:
                run_entry(src, env_globals, uimap, verbose)
            except Exception:
                print_traceback()

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Zermelo REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
