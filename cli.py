import sys
import traceback

from bytecode import disassemble
from compiler import compile_source
from errors import StackCalcError
from lexer import tokenize
from postfix import infix_to_postfix
from vm import VM, STACK_MAX


USAGE = """Usage:
  stackcalc [repl]
  stackcalc eval "<expr>"
  stackcalc parse "<expr>"
  stackcalc build "<expr>"
  stackcalc run <file>
  (optional) --debug to show Python traceback
  (optional) --trace to show each VM step
  (optional) --stack N to set the evaluation stack depth (default 64)"""


def run_cycle(text, max_stack=STACK_MAX, trace=False, out=None):
    # one compile-execute cycle: fresh pool, program and VM every time
    program = compile_source(text)
    vm = VM(program, max_stack=max_stack, out=out, trace=trace)
    return vm.run()


def report(e, debug=False):
    if debug:
        traceback.print_exc()
    else:
        print(str(e))


def cmd_parse(text, debug=False):
    try:
        tokens = tokenize(text)
        postfix = infix_to_postfix(tokens)
    except StackCalcError as e:
        report(e, debug)
        return 1

    print("TOKENS:")
    print("  " + " ".join(repr(t) for t in tokens))
    print("POSTFIX:")
    print("  " + " ".join(repr(t) for t in postfix))
    return 0


def cmd_build(text, debug=False):
    try:
        program = compile_source(text)
    except StackCalcError as e:
        report(e, debug)
        return 1

    print("CONSTS:")
    for i, c in enumerate(program.pool):
        print(f"  [{i}] {c!r}")

    print("\nINSTRUCTIONS:")
    for line in disassemble(program):
        print(f"  {line}")
    return 0


def cmd_eval(text, max_stack=STACK_MAX, trace=False, debug=False):
    try:
        run_cycle(text, max_stack=max_stack, trace=trace)
    except StackCalcError as e:
        report(e, debug)
        return 1
    return 0


def cmd_run(path, max_stack=STACK_MAX, trace=False, debug=False):
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        report(e, debug)
        return 1

    status = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            run_cycle(line, max_stack=max_stack, trace=trace)
        except StackCalcError as e:
            if debug:
                traceback.print_exc()
            else:
                print(f"line {lineno}: {e}")
            status = 1
    return status


def cmd_repl(max_stack=STACK_MAX, trace=False, debug=False):
    print("stackcalc REPL. Type :q to quit.")

    while True:
        try:
            line = input("calc> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if stripped in (":q", ":quit", "quit", "exit"):
            break
        if not stripped:
            continue

        try:
            run_cycle(line, max_stack=max_stack, trace=trace)
        except StackCalcError as e:
            report(e, debug)
    return 0


def _take_option(argv, name):
    # removes "--name VALUE" from argv and returns VALUE (or None)
    if name not in argv:
        return None
    i = argv.index(name)
    if i + 1 >= len(argv):
        raise ValueError(f"{name} expects a value")
    value = argv[i + 1]
    del argv[i : i + 2]
    return value


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)

    debug = False
    if "--debug" in argv:
        debug = True
        argv.remove("--debug")

    trace = False
    if "--trace" in argv:
        trace = True
        argv.remove("--trace")

    max_stack = STACK_MAX
    try:
        stack_opt = _take_option(argv, "--stack")
        if stack_opt is not None:
            max_stack = int(stack_opt)
            if max_stack < 1:
                raise ValueError("--stack must be at least 1")
    except ValueError as e:
        print(str(e))
        print(USAGE)
        return 1

    cmd = argv[0] if argv else "repl"
    rest = argv[1:]

    if cmd == "repl":
        if rest:
            print(USAGE)
            return 1
        return cmd_repl(max_stack=max_stack, trace=trace, debug=debug)

    if cmd not in ("eval", "parse", "build", "run"):
        print(f"Unknown command: {cmd}")
        print(USAGE)
        return 1

    if len(rest) != 1:
        print(USAGE)
        return 1
    arg = rest[0]

    if cmd == "eval":
        return cmd_eval(arg, max_stack=max_stack, trace=trace, debug=debug)
    if cmd == "parse":
        return cmd_parse(arg, debug=debug)
    if cmd == "build":
        return cmd_build(arg, debug=debug)
    return cmd_run(arg, max_stack=max_stack, trace=trace, debug=debug)


if __name__ == "__main__":
    sys.exit(main())
