"""End-to-end purity verdicts on hand-built callables.

Each case mirrors a PHP closure; the source is given in the case id.
"""

import json

import pytest

from inlinecheck import PurityAnalyzer, is_pure
from inlinecheck.application.reporters import ConsoleReporter, JSONReporter
from inlinecheck.domain.model.nodes import (
    Assign,
    AssignOp,
    BinaryOperator,
    CastKind,
    Closure,
    Global,
    If,
    OtherStmt,
    PropertyFetch,
    Static,
    StaticVar,
    UnaryOp,
    UnaryOperator,
)
from tests.factories import (
    cast,
    concat,
    dim,
    lit,
    make_closure,
    mul,
    param,
    plus,
    ret,
    stmt,
    use,
    var,
)


class TestScenarios:
    """The six reference scenarios."""

    def test_scalar_addition_is_pure(self) -> None:
        # function (int $a, int $b) { return $a + $b; }
        closure = make_closure(
            ret(plus(var("a"), var("b"))), params=(param("a", "int"), param("b", "int"))
        )
        assert is_pure(closure) is True

    def test_by_ref_parameter_is_impure(self) -> None:
        # function (&$a) { }
        assert is_pure(make_closure(params=(param("a", by_ref=True),))) is False

    def test_array_element_is_pure(self) -> None:
        # function (array $a) { return $a['k']; }
        closure = make_closure(ret(dim(var("a"), "k")), params=(param("a", "array"),))
        assert is_pure(closure) is True

    def test_unknown_element_is_impure(self) -> None:
        # function ($a) { return $a['k']; }
        closure = make_closure(ret(dim(var("a"), "k")), params=(param("a"),))
        assert is_pure(closure) is False

    def test_global_is_impure(self) -> None:
        # function () { global $g; }
        assert is_pure(make_closure(Global((var("g"),)))) is False

    def test_object_to_string_is_impure(self) -> None:
        # function (\Obj $a) { return (string) $a; }
        closure = make_closure(
            ret(cast(CastKind.STRING, var("a"))), params=(param("a", "\\Obj"),)
        )
        assert is_pure(closure) is False


PURE_CALLABLES = {
    "function () {}": make_closure(),
    "function ($foo, $bar) {}": make_closure(params=(param("foo"), param("bar"))),
    "function () use ($baz) {}": make_closure(uses=(use("baz"),)),
    "function () { return 'baz'; }": make_closure(ret(lit("baz"))),
    "function () { return 1 + 1; }": make_closure(ret(plus(lit(1), lit(1)))),
    "function ($returned) { return $returned; }": make_closure(
        ret(var("returned")), params=(param("returned"),)
    ),
    "function ($a, $b) { return $a + $b; }": make_closure(
        ret(plus(var("a"), var("b"))), params=(param("a"), param("b"))
    ),
    "function () use ($baz) { return $baz; }": make_closure(
        ret(var("baz")), uses=(use("baz"),)
    ),
    "function (string $foo) { return (string) $foo; }": make_closure(
        ret(cast(CastKind.STRING, var("foo"))), params=(param("foo", "string"),)
    ),
    "function (int $foo) { return (int) $foo; }": make_closure(
        ret(cast(CastKind.INT, var("foo"))), params=(param("foo", "int"),)
    ),
    "function ($foo) { return (int) $foo; }": make_closure(
        ret(cast(CastKind.INT, var("foo"))), params=(param("foo"),)
    ),
    "function ($foo) { return (array) $foo; }": make_closure(
        ret(cast(CastKind.ARRAY, var("foo"))), params=(param("foo"),)
    ),
    "function (\\stdClass $foo) { return (array) $foo; }": make_closure(
        ret(cast(CastKind.ARRAY, var("foo"))), params=(param("foo", "\\stdClass"),)
    ),
    "function (string $foo) { return $foo . 'bar'; }": make_closure(
        ret(concat(var("foo"), lit("bar"))), params=(param("foo", "string"),)
    ),
    "function (int $foo) { return $foo . 'bar'; }": make_closure(
        ret(concat(var("foo"), lit("bar"))), params=(param("foo", "int"),)
    ),
    "function (int $foo) { return $foo * 2; }": make_closure(
        ret(mul(var("foo"), lit(2))), params=(param("foo", "int"),)
    ),
    "function (string $foo) { return $foo * 2; }": make_closure(
        ret(mul(var("foo"), lit(2))), params=(param("foo", "string"),)
    ),
    "function ($foo) { return $foo * 2; }": make_closure(
        ret(mul(var("foo"), lit(2))), params=(param("foo"),)
    ),
    "function (\\stdClass $foo) { return $foo * 2; }": make_closure(
        ret(mul(var("foo"), lit(2))), params=(param("foo", "\\stdClass"),)
    ),
    "function (int $n) { $n *= 2; return $n; }": make_closure(
        stmt(AssignOp(BinaryOperator.MUL, var("n"), lit(2))),
        ret(var("n")),
        params=(param("n", "int"),),
    ),
    "function () { return function () { global $g; }; }": make_closure(
        ret(make_closure(Global((var("g"),))))
    ),
    "function (int $a) { if ($a) { return -$a; } return 0; }": make_closure(
        If(var("a"), (ret(UnaryOp(UnaryOperator.MINUS, var("a"))),)),
        ret(lit(0)),
        params=(param("a", "int"),),
    ),
}

IMPURE_CALLABLES = {
    "function (&$foo, &$bar) {}": make_closure(
        params=(param("foo", by_ref=True), param("bar", by_ref=True))
    ),
    "function (&$foo, &$bar) use ($baz) {}": make_closure(
        params=(param("foo", by_ref=True), param("bar", by_ref=True)), uses=(use("baz"),)
    ),
    "function () use (&$baz) { return $baz; }": make_closure(
        ret(var("baz")), uses=(use("baz", by_ref=True),)
    ),
    "function & (&$baz) { return $baz; }": make_closure(
        ret(var("baz")), params=(param("baz", by_ref=True),), by_ref=True
    ),
    "function (&$baz) { $baz = 'foo'; }": make_closure(
        stmt(Assign(var("baz"), lit("foo"))), params=(param("baz", by_ref=True),)
    ),
    "function () use (&$baz) { $baz = 'foo'; }": make_closure(
        stmt(Assign(var("baz"), lit("foo"))), uses=(use("baz", by_ref=True),)
    ),
    "function ($foo) { return (string) $foo; }": make_closure(
        ret(cast(CastKind.STRING, var("foo"))), params=(param("foo"),)
    ),
    "function (\\stdClass $foo) { return (string) $foo; }": make_closure(
        ret(cast(CastKind.STRING, var("foo"))), params=(param("foo", "\\stdClass"),)
    ),
    "function ($foo) { return $foo . 'bar'; }": make_closure(
        ret(concat(var("foo"), lit("bar"))), params=(param("foo"),)
    ),
    "function (\\stdClass $foo) { return $foo . 'bar'; }": make_closure(
        ret(concat(var("foo"), lit("bar"))), params=(param("foo", "\\stdClass"),)
    ),
    "function ($foo) { return $foo->bar; }": make_closure(
        ret(PropertyFetch(var("foo"), "bar")), params=(param("foo"),)
    ),
    "function () { static $calls = 0; }": make_closure(Static((StaticVar("calls", lit(0)),))),
    "function () { return $GLOBALS['x']; }": make_closure(ret(dim(var("GLOBALS"), "x"))),
    "function () { return $_GET['q']; }": make_closure(ret(dim(var("_GET"), "q"))),
    "function (string $s) { echo $s; }": make_closure(
        OtherStmt("Echo", (var("s"),)), params=(param("s", "string"),)
    ),
    "function ($o) { if ($o) { return $o->x; } }": make_closure(
        If(var("o"), (ret(PropertyFetch(var("o"), "x")),)), params=(param("o"),)
    ),
}


class TestPureCallables:
    """Callables whose calls may be inlined."""

    @pytest.mark.parametrize(
        "closure", list(PURE_CALLABLES.values()), ids=list(PURE_CALLABLES)
    )
    def test_pure(self, closure: Closure) -> None:
        assert is_pure(closure) is True


class TestImpureCallables:
    """Callables whose calls must not be inlined."""

    @pytest.mark.parametrize(
        "closure", list(IMPURE_CALLABLES.values()), ids=list(IMPURE_CALLABLES)
    )
    def test_impure(self, closure: Closure) -> None:
        assert is_pure(closure) is False


class TestReporting:
    """Analyzer output rendered by the reporters."""

    def test_json_report_of_reference_callables(self) -> None:
        analyzer = PurityAnalyzer()
        reports = {
            label: analyzer.analyze(closure)
            for label, closure in (PURE_CALLABLES | IMPURE_CALLABLES).items()
        }

        data = json.loads(JSONReporter().report(reports))

        assert data["summary"] == {
            "total": len(PURE_CALLABLES) + len(IMPURE_CALLABLES),
            "pure": len(PURE_CALLABLES),
            "impure": len(IMPURE_CALLABLES),
        }

    def test_console_report_explains_verdict(self) -> None:
        closure = make_closure(ret(PropertyFetch(var("foo"), "bar")), params=(param("foo"),))
        output = ConsoleReporter().report({"getBar": PurityAnalyzer().analyze(closure)})
        assert "getBar" in output
        assert "$foo in PropertyFetch" in output
