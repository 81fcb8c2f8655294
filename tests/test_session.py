import pytest

from VladLang.Session import Session, main, read_units

SCENARIOS = """\
# Worked examples
#>> fn x_cos(x: real) -> real { x * cos(x) }
#<# function x_cos: (real) -> real
#>> x_cos(0.5)
#<< 0.438791281

#>> fn abs(x:real) -> real {
#/>     if x < 0 { -x } else { x }
#/> }
#<# function abs: (real) -> real
#>> abs(-3)
#<< 3
#>> abs(3)
#<< 3

#>> 5 / 0
#<! ArithmeticError: division by zero
#>> fn double(x: integer) -> integer { 2 * x }
#<# function double: (integer) -> integer
#>> double(-4)
#<< -8
"""


def test_scenario_function_definition_and_call(run):
    assert run("fn x_cos(x: real) -> real { x * cos(x) }") == "#<# function x_cos: (real) -> real"
    assert run("x_cos(0.5)") == "#<< 0.438791281"


def test_scenario_user_abs(run):
    assert run("fn abs(x:real) -> real { if x < 0 { -x } else { x } }") == "#<# function abs: (real) -> real"
    assert run("abs(-3)") == "#<< 3"
    assert run("abs(3)") == "#<< 3"


def test_scenario_division_by_zero_leaves_session_usable(session, run):
    assert run("5 / 0") == "#<! ArithmeticError: division by zero"
    assert len(session.registry) == 0
    assert run("fn inc(x: natural) -> natural { x + 1 }") == "#<# function inc: (natural) -> natural"
    assert run("inc(41)") == "#<< 42"


def test_scenario_bad_calls_produce_type_errors(session, run):
    run("fn x_cos(x: real) -> real { x * cos(x) }")
    wrong_count = run("x_cos(1, 2)")
    assert wrong_count.startswith("#<! TypeError: arity mismatch: 'x_cos' takes 1 arguments, got 2")
    wrong_type = run("x_cos(true)")
    assert wrong_type == (
        "#<! TypeError: argument type mismatch: argument 1 of 'x_cos' expects real, got bool at line 1, column 7"
    )


@pytest.mark.parametrize(
    "source,expected",
    [
        ("fn f(x: real, n: natural, xs: list<rational>) -> bool { x > n }",
         "function f: (real, natural, list<rational>) -> bool"),
        ("fn zero() -> integer { 0 }", "function zero: () -> integer"),
        ("fn id(z: complex) -> complex { z }", "function id: (complex) -> complex"),
    ]
)
def test_signature_round_trip(run, source, expected):
    assert run(source) == "#<# " + expected


def test_duplicate_definition_is_rejected(session, run):
    run("fn f(x: real) -> real { x }")
    assert run("fn f(x: real) -> real { 2 * x }") == "#<! NameError: duplicate definition of function 'f'"
    assert run("f(3)") == "#<< 3"


def test_failed_definition_does_not_register(session, run):
    assert run("fn g(x: real) -> bool { x }").startswith("#<! TypeError: return type mismatch")
    assert 'g' not in session.registry
    assert run("g(1)").startswith("#<! NameError: undefined function 'g'")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 @ 2", "#<! LexError: unexpected character '@' at line 1, column 3"),
        ("1 +", "#<! ParseError: expected expression, found end of input at line 1, column 4"),
        ("y", "#<! NameError: undefined variable 'y' at line 1, column 1"),
    ]
)
def test_front_end_errors_become_error_units(run, source, expected):
    assert run(source) == expected


def test_call_depth_limit_is_reported(monkeypatch):
    monkeypatch.setenv("VLAD_MAX_CALL_DEPTH", "3")
    session = Session()
    session.run_unit("fn fact(n: natural) -> natural { if n = 0 { 1 } else { n * fact(n - 1) } }")
    assert session.run_unit("fact(10)") == ("#<! ", "RecursionError: maximum call depth 3 exceeded in 'fact'")


def test_read_units_groups_continuations_and_expected_output():
    units = read_units(SCENARIOS)
    assert len(units) == 8
    abs_unit = units[2]
    assert abs_unit.line == 7
    assert abs_unit.source == "fn abs(x:real) -> real {\n    if x < 0 { -x } else { x }\n}"
    assert abs_unit.expected == "#<# function abs: (real) -> real"


def test_run_transcript_emits_one_output_per_unit(session):
    source = "#>> fn sq(x: real) -> real {\n#/>   x * x\n#/> }\n#>> sq(3)\n#>> 1 / 0\n"
    assert session.run_transcript(source) == (
        "#>> fn sq(x: real) -> real {\n"
        "#/>   x * x\n"
        "#/> }\n"
        "#<# function sq: (real) -> real\n"
        "#>> sq(3)\n"
        "#<< 9\n"
        "#>> 1 / 0\n"
        "#<! ArithmeticError: division by zero\n"
    )


def test_documented_transcript_checks_clean(session):
    assert session.check_transcript(SCENARIOS) == []


def test_check_transcript_reports_mismatches(session):
    mismatches = session.check_transcript("#>> 1 + 1\n#<< 3\n#>> 2 * 2\n")
    assert [(m.line, m.expected, m.actual) for m in mismatches] == [
        (1, "#<< 3", "#<< 2"),
        (3, None, "#<< 4"),
    ]


def test_main_runs_and_checks_a_transcript_file(tmp_path, capsys):
    path = tmp_path / "scenarios.vlad"
    path.write_text(SCENARIOS, encoding="utf-8")

    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "#<< 0.438791281\n" in out
    assert "#<! ArithmeticError: division by zero\n" in out

    assert main(["--check", str(path)]) == 0
    assert capsys.readouterr().out == ""


def test_main_check_fails_on_mismatch(tmp_path, capsys):
    path = tmp_path / "wrong.vlad"
    path.write_text("#>> 2 + 2\n#<< 5\n", encoding="utf-8")
    assert main(["--check", str(path)]) == 1
    assert "line 1: expected '#<< 5', got '#<< 4'" in capsys.readouterr().out


def test_main_missing_file(capsys):
    assert main(["/nonexistent/transcript.vlad"]) == 1
    assert "not found" in capsys.readouterr().err


def test_mutual_recursion_across_definitions(session, run):
    assert run("fn is_even(n: natural) -> bool { if n = 0 { true } else { is_odd(n - 1) } }") == (
        "#<# function is_even: (natural) -> bool"
    )
    assert not session.registry.lookup('is_even').checked
    assert run("fn is_odd(n: natural) -> bool { if n = 0 { false } else { is_even(n - 1) } }") == (
        "#<# function is_odd: (natural) -> bool"
    )
    assert run("is_even(10)") == "#<< true"
    assert run("is_odd(7)") == "#<< true"
    assert run("is_even(7)") == "#<< false"
    assert session.registry.lookup('is_even').checked


def test_missing_callee_is_reported_when_called(session, run):
    run("fn twice(x: real) -> real { helper(helper(x)) }")
    assert run("twice(1)") == (
        "#<! NameError: undefined function 'helper' in function 'twice' at line 1, column 29"
    )
    run("fn helper(x: real, y: real) -> real { x + y }")
    assert run("twice(1)").startswith("#<! TypeError: arity mismatch: 'helper' takes 2 arguments, got 1")


def test_deferred_definition_still_checks_its_signature(run):
    assert run("fn bad(x: real, x: real) -> real { missing(x) }") == (
        "#<! NameError: duplicate argument name 'x' in function 'bad' at line 1, column 1"
    )


def test_default_call_depth_allows_deep_recursion(run):
    run("fn total(n: natural) -> natural { if n = 0 { 0 } else { n + total(n - 1) } }")
    assert run("total(150)") == "#<< 11325"
    assert run("total(999)") == "#<< 499500"
    assert run("total(1000)") == "#<! RecursionError: maximum call depth 1000 exceeded in 'total'"


def test_deep_nesting_fails_one_unit_only(session):
    deep = "(" * 20000 + "1" + ")" * 20000
    prefix, content = session.run_unit(deep)
    assert prefix == "#<! "
    assert content.startswith("ParseError: nesting too deep at line 1, column ")

    out = session.run_transcript(f"#>> {deep}\n#>> 2 * 3\n")
    assert out.endswith("#>> 2 * 3\n#<< 6\n")


def test_main_rejects_unknown_options(capsys):
    assert main(["--help"]) == 2
    assert "Usage:" in capsys.readouterr().err


def test_registry_membership_tracks_accepted_definitions(session, run):
    run("fn one() -> natural { 1 }")
    run("fn one() -> natural { 2 }")
    assert 'one' in session.registry
    assert len(session.registry) == 1
    assert session.registry.lookup('one').body[0].text == "1"
