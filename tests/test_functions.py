from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    LoxArityMismatch,
    LoxBool,
    LoxFunction,
    LoxNotCallable,
    run_partial,
    run_program,
    run_runtime_case,
    run_script,
)

SCENARIOS = [
    pytest.param(
        dedent(
            """\
            fun makeCounter() {
              var i = 0;
              fun count() {
                i = i + 1;
                print i;
              }

              return count;
            }

            var counter = makeCounter();
            counter();
            counter();
        """
        ),
        ["1", "2"],
        None,
        id="closure-counter-shares-binding",
    ),
    pytest.param(
        dedent(
            """\
            fun count(n) {
              if (n > 1) count(n - 1);
              print n;
            }

            count(3);
        """
        ),
        ["1", "2", "3"],
        None,
        id="recursion-post-order",
    ),
    pytest.param(
        dedent(
            """\
            var d = 4;
            fun bob() {
                print d;
                d = 5;
                print d;
            }

            bob();
            print d;
        """
        ),
        ["4", "5", "5"],
        None,
        id="global-mutation-visible-after-call",
    ),
    pytest.param(
        dedent(
            """\
            fun makeCounter() {
              var i = 0;
              fun count() {
                i = i + 1;
                return i;
              }
              return count;
            }

            var a = makeCounter();
            var b = makeCounter();
            a();
            a();
            print a();
            print b();
        """
        ),
        ["3", "1"],
        None,
        id="separate-activations-separate-state",
    ),
    pytest.param(
        dedent(
            """\
            fun pair() {
              var n = 0;
              fun inc() { n = n + 1; }
              fun get() { return n; }
              inc();
              inc();
              return get;
            }
            print pair()();
        """
        ),
        ["2"],
        None,
        id="sibling-closures-share-frame",
    ),
    pytest.param(
        dedent(
            """\
            fun outer() {
              fun early() { return later(); }
              fun later() { return "later"; }
              return early();
            }
            print outer();
        """
        ),
        ["later"],
        None,
        id="sibling-declared-later-is-visible",
    ),
    pytest.param(
        dedent(
            """\
            var x = "global";
            fun show() { print x; }
            fun shadow() {
              var x = "local";
              show();
            }
            shadow();
        """
        ),
        ["global"],
        None,
        id="lexical-not-dynamic-scope",
    ),
    pytest.param(
        dedent(
            """\
            fun make() {
              var value = "before";
              fun read() { return value; }
              value = "after";
              return read;
            }
            print make()();
        """
        ),
        ["after"],
        None,
        id="closure-sees-later-mutation",
    ),
    pytest.param(
        dedent(
            """\
            fun fib(n) {
              if (n < 2) return n;
              return fib(n - 1) + fib(n - 2);
            }
            print fib(15);
        """
        ),
        ["610"],
        None,
        id="fib",
    ),
    pytest.param(
        dedent(
            """\
            fun depth(n) {
              {
                while (true) {
                  if (n > 0) return depth(n - 1) + 1;
                  return 0;
                }
              }
            }
            print depth(150);
        """
        ),
        ["150"],
        None,
        id="deep-recursion-through-nested-blocks",
    ),
    pytest.param(
        dedent(
            """\
            fun add(a, b, c) { return a + b + c; }
            print add(1, 2, 3);
        """
        ),
        ["6"],
        None,
        id="multiple-params",
    ),
    pytest.param(
        dedent(
            """\
            fun nothing() {}
            print nothing();
        """
        ),
        ["nil"],
        None,
        id="no-return-is-nil",
    ),
    pytest.param(
        dedent(
            """\
            fun bare() { return; }
            print bare();
        """
        ),
        ["nil"],
        None,
        id="bare-return-is-nil",
    ),
    pytest.param(
        dedent(
            """\
            fun hello() {}
            var alias = hello;
            print hello;
            print alias;
            print clock;
        """
        ),
        ["<fn hello>", "<fn hello>", "<native fn>"],
        None,
        id="callable-rendering",
    ),
    pytest.param(
        dedent(
            """\
            fun f(a) { a = a + 1; return a; }
            var x = 1;
            print f(x);
            print x;
        """
        ),
        ["2", "1"],
        None,
        id="params-are-local",
    ),
    pytest.param(
        dedent(
            """\
            fun twice(f, x) { return f(f(x)); }
            fun inc(n) { return n + 1; }
            print twice(inc, 5);
        """
        ),
        ["7"],
        None,
        id="functions-as-arguments",
    ),
    pytest.param(
        '"text"();',
        None,
        LoxNotCallable,
        id="string-not-callable",
    ),
    pytest.param(
        "var n = nil; n();",
        None,
        LoxNotCallable,
        id="nil-not-callable",
    ),
]


@pytest.mark.parametrize("source, expected_output, expected_exc", SCENARIOS)
def test_functions(source: str, expected_output, expected_exc) -> None:
    run_runtime_case(source, expected_output, expected_exc)


@pytest.mark.parametrize(
    "call, got",
    [
        pytest.param("one();", 0, id="too-few"),
        pytest.param('one(1, 2);', 2, id="too-many"),
    ],
)
def test_arity_mismatch_runs_no_body(call: str, got: int) -> None:
    source = dedent(
        """\
        var touched = false;
        fun one(a) {
          touched = true;
          print "body";
        }
        print "before";
        """
    ) + call

    lines, exc = run_partial(source, LoxArityMismatch)

    assert lines == ["before"]
    assert exc.expected == 1
    assert exc.got == got


def test_arity_mismatch_on_native() -> None:
    _, exc = run_partial("clock(1);", LoxArityMismatch)

    assert exc.expected == 0
    assert exc.got == 1


def test_arity_checked_before_body_mutates_globals() -> None:
    _, interp = run_script("var touched = false; fun one(a) { touched = true; }")

    with pytest.raises(LoxArityMismatch):
        run_program("one();", interpreter=interp)

    assert interp.globals.get("touched") == LoxBool(False)


def test_function_value_captures_declaring_frame() -> None:
    _, interp = run_script("fun top() {}")
    fn = interp.globals.get("top")

    assert isinstance(fn, LoxFunction)
    assert fn.closure is interp.globals
    assert fn.params == ()


def test_recursive_activations_get_fresh_frames() -> None:
    source = dedent(
        """\
        fun depth(n) {
          var local = n;
          if (n > 0) depth(n - 1);
          print local;
        }
        depth(2);
        """
    )
    lines, _ = run_script(source)

    assert lines == ["0", "1", "2"]


def test_call_depth_resets_after_run() -> None:
    _, interp = run_script("fun f(n) { if (n > 0) return f(n - 1); return n; } f(10);")

    assert interp.call_depth == 0
