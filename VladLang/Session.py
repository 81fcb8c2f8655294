"""
Session driver for Vlad transcripts.

A transcript is a sequence of units. An input unit starts with a ``#>> `` line
and continues over ``#/> `` lines; it is answered by exactly one output line:

    #<# function x_cos: (real) -> real      accepted definition
    #<< 0.438791281                         value of a statement
    #<! ArithmeticError: division by zero   failed unit

Any other line is ignored, so a documented transcript can be run again as is,
or checked against the outputs it records.
"""
import logging
import sys
from collections import namedtuple

from .AST import FunctionNode
from .Config import get_log_level
from .Errors import UndefinedFunctionError, VladError
from .Evaluator import Evaluator
from .Numbers import render
from .Parser import parse_text
from .Registry import FunctionRegistry, signature
from .SemanticAnalysis import SemanticChecker

logger = logging.getLogger(__name__)

INPUT_MARKER = '#>>'
CONTINUATION_MARKER = '#/>'
TYPE_PREFIX = '#<# '
VALUE_PREFIX = '#<< '
ERROR_PREFIX = '#<! '
OUTPUT_PREFIXES = (TYPE_PREFIX, VALUE_PREFIX, ERROR_PREFIX)

Mismatch = namedtuple('Mismatch', ['line', 'source', 'expected', 'actual'])


class TranscriptUnit:
    def __init__(self, first_line, line):
        self.lines = [first_line]
        self.line = line
        self.expected = None

    @property
    def source(self):
        return '\n'.join(self.lines)

    def input_lines(self):
        head, *rest = self.lines
        return [f"{INPUT_MARKER} {head}"] + [f"{CONTINUATION_MARKER} {line}" for line in rest]


def _content(line, marker):
    if line.startswith(marker + ' '):
        return line[len(marker) + 1:]
    if line.rstrip() == marker:
        return ''
    return None


def read_units(text):
    units = []
    current = None
    accepting_input = False
    for number, line in enumerate(text.splitlines(), 1):
        content = _content(line, INPUT_MARKER)
        if content is not None:
            current = TranscriptUnit(content, number)
            units.append(current)
            accepting_input = True
            continue

        content = _content(line, CONTINUATION_MARKER)
        if content is not None:
            if accepting_input:
                current.lines.append(content)
            else:
                logger.warning("line %d: continuation outside of an input unit ignored", number)
            continue

        accepting_input = False
        if current is not None and current.expected is None and line.startswith(OUTPUT_PREFIXES):
            current.expected = line.rstrip()
    return units


class Session:
    """
    One interpreter session: a registry that grows as definitions are
    accepted, with the checker and evaluator sharing it.
    """
    def __init__(self, registry=None):
        self.registry = registry if registry is not None else FunctionRegistry()
        self.checker = SemanticChecker(self.registry)
        self.evaluator = Evaluator(self.registry)

    def execute(self, source):
        """Run one unit; returns the registered definition or the statement's value."""
        unit = parse_text(source)
        if isinstance(unit, FunctionNode):
            try:
                self.checker.check(unit)
            except UndefinedFunctionError as e:
                # callees may be defined later; checked again on first call
                logger.info("deferring check of '%s': %s", unit.name, e.message)
            return self.registry.define(unit)
        self.checker.check(unit)
        value = self.evaluator.evaluate(unit, {})
        logger.debug("evaluated %r to %s", source, value)
        return value

    def run_unit(self, source):
        try:
            result = self.execute(source)
        except VladError as e:
            logger.warning("unit failed: %s", e)
            return ERROR_PREFIX, str(e)
        if isinstance(result, FunctionNode):
            return TYPE_PREFIX, signature(result)
        return VALUE_PREFIX, render(result)

    def run_transcript(self, text):
        out = []
        for unit in read_units(text):
            out.extend(unit.input_lines())
            prefix, content = self.run_unit(unit.source)
            out.append(prefix + content)
        return ''.join(line + '\n' for line in out)

    def check_transcript(self, text):
        mismatches = []
        for unit in read_units(text):
            prefix, content = self.run_unit(unit.source)
            actual = prefix + content
            if unit.expected != actual:
                mismatches.append(Mismatch(unit.line, unit.source, unit.expected, actual))
        return mismatches


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    check = '--check' in argv
    paths = [arg for arg in argv if arg != '--check']
    if len(paths) > 1 or any(arg.startswith('-') for arg in paths):
        print("Usage: python -m VladLang [--check] [transcript]", file=sys.stderr)
        return 2

    if paths:
        try:
            with open(paths[0], 'r', encoding='utf-8') as f:
                text = f.read()
        except FileNotFoundError:
            print(f"Error: File '{paths[0]}' not found.", file=sys.stderr)
            return 1
    else:
        text = sys.stdin.read()

    session = Session()
    if check:
        mismatches = session.check_transcript(text)
        for mismatch in mismatches:
            print(f"line {mismatch.line}: expected {mismatch.expected!r}, got {mismatch.actual!r}")
        return 1 if mismatches else 0

    sys.stdout.write(session.run_transcript(text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
