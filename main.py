"""
Lox Programming Language - Main Entry Point
A tree-walking interpreter for a small dynamically-typed scripting language
"""

import sys
import argparse
from pathlib import Path
from typing import Optional
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from lox import LoxSession, create_session
from printer import pretty_print
from scanning import KEYWORDS
from utilities import stringify


VERSION = "pylox 0.1.0"

# Exit codes (sysexits.h)
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='pylox',
      description='Lox - a small dynamically-typed scripting language',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.lox            # Run a Lox script
  %(prog)s -i                    # Interactive mode
  %(prog)s -i script.lox         # Run a script, then keep its globals in the REPL
  %(prog)s --parse script.lox    # Parse and show the AST
  %(prog)s --tokens script.lox   # Scan and show the tokens
  %(prog)s --debug script.lox    # Run with stage traces on stderr
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Lox script file to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help="Start interactive mode (after running the script, if given)"
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show the AST (for debugging)'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Scan file and show the tokens (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def read_script(script_path: str) -> Optional[str]:
  """Read a script file, printing a hint and returning None on failure"""
  try:
    return Path(script_path).read_text(encoding='utf-8')
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found", file=sys.stderr)
    print("  Hint: Check the file path and make sure the file exists", file=sys.stderr)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'", file=sys.stderr)
    print("  Hint: Make sure you have read permissions for this file", file=sys.stderr)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}", file=sys.stderr)
    print("  Hint: Make sure the file is a text file with UTF-8 encoding", file=sys.stderr)
  return None


def show_tokens(session: LoxSession, source: str) -> None:
  for token in session.tokenize(source):
    print(token)


def show_ast(session: LoxSession, source: str) -> None:
  statements = session.parse(source)
  if statements:
    print(pretty_print(statements))


def inspect_file(script_path: str, tokens: bool, debug: bool = False) -> int:
  """Scan or parse a Lox script file and print the result"""
  source = read_script(script_path)
  if source is None:
    return EX_NOINPUT

  session = create_session(debug=debug)
  session.reporter.begin(source)
  if tokens:
    show_tokens(session, source)
  else:
    show_ast(session, source)

  return EX_DATAERR if session.had_syntax_error else 0


def run_script_file(script_path: str, debug: bool = False) -> int:
  """Run a Lox script file, returning the process exit code"""
  source = read_script(script_path)
  if source is None:
    return EX_NOINPUT

  session = create_session(debug=debug)
  session.run(source)

  if session.had_syntax_error:
    return EX_DATAERR
  if session.had_runtime_error:
    return EX_SOFTWARE
  return 0


def setup_readline() -> None:
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser("~/.lox_history")
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = sorted(KEYWORDS) + [":tokens", ":parse", ":env", ":help", "exit"]

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(readline.write_history_file, history_file)


def show_repl_help() -> None:
  print("REPL Commands:")
  print("  :tokens <source>  - Show scanned tokens")
  print("  :parse <source>   - Show parsed AST")
  print("  :env              - Show current global bindings")
  print("  :help             - Show this help")
  print("  exit              - Exit REPL")
  print()
  print("Language features:")
  print("  var x = 5;                          - Variable declaration")
  print("  x = x + 1;                          - Assignment")
  print("  print \"a\" + \"b\";                    - Print a value")
  print("  { var y = x; print y; }             - Block with its own scope")
  print("  if (x > 1) print x; else print 0;   - Conditional")
  print("  for (var i = 0; i < 3; i = i + 1) print i;")


def show_env(session: LoxSession) -> None:
  print("Current environment:")
  bindings = list(session.interpreter.globals.visible_bindings())
  if not bindings:
    print("  (no user-defined bindings)")
    return
  for name, value in bindings:
    val_str = stringify(value)
    if len(val_str) > 60:
      val_str = val_str[:57] + "..."
    print(f"  {name} = {val_str}")


def run_interactive_mode(debug: bool = False, session: Optional[LoxSession] = None) -> None:
  """Run Lox in interactive mode; each line is run against the same globals"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if READLINE_AVAILABLE:
    print("Readline enabled: Use ↑/↓ for history, Tab for completion")
  if debug:
    print("Debug mode enabled")
  print()

  setup_readline()
  if session is None:
    session = create_session(debug=debug)

  while True:
    try:
      code = input("> ")
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    command = code.strip()
    if command == "exit":
      break
    if not command:
      continue

    if command.startswith(":tokens "):
      session.reporter.begin(command[8:])
      show_tokens(session, command[8:])
    elif command.startswith(":parse "):
      session.reporter.begin(command[7:])
      show_ast(session, command[7:])
    elif command == ":env":
      show_env(session)
    elif command == ":help":
      show_repl_help()
    else:
      # Errors are reported by the session and never end the REPL
      session.run(code)


def main() -> None:
  """Main entry point for Lox"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args()

  if args.script and (args.parse or args.tokens):
    sys.exit(inspect_file(args.script, args.tokens, debug=args.debug))

  if args.script and not args.interactive:
    sys.exit(run_script_file(args.script, debug=args.debug))

  session = create_session(debug=args.debug)
  if args.script:
    # -i with a script: run it first, then continue with its globals
    source = read_script(args.script)
    if source is None:
      sys.exit(EX_NOINPUT)
    session.run(source)

  run_interactive_mode(debug=args.debug, session=session)


if __name__ == "__main__":
  main()
