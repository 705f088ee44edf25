"""Tests for domain/model/nodes.py."""

import pytest

from inlinecheck.domain.exceptions import InlineCheckError, InvalidNodeError
from inlinecheck.domain.model.nodes import (
    ArrayDimFetch,
    Assign,
    AssignOp,
    BinaryOp,
    BinaryOperator,
    ClassDef,
    Closure,
    Expr,
    FuncCall,
    FunctionDef,
    Global,
    If,
    Literal,
    Name,
    New,
    OtherExpr,
    OtherStmt,
    Param,
    Return,
    Static,
    StaticVar,
    Stmt,
    UnaryOp,
    UnaryOperator,
    Variable,
    iter_child_nodes,
)
from tests.factories import lit, param, ret, var


class TestVariable:
    """Tests for Variable node."""

    def test_literal_name(self) -> None:
        variable = Variable("foo")
        assert variable.name == "foo"
        assert variable.is_dynamic is False

    def test_computed_name_is_dynamic(self) -> None:
        variable = Variable(Variable("name"))
        assert variable.is_dynamic is True

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="variable name must not be empty"):
            Variable("")

    def test_wrong_name_kind_raises(self) -> None:
        with pytest.raises(InvalidNodeError, match=r"Variable\.name must be str or Expr, got int"):
            Variable(42)  # type: ignore[arg-type]

    def test_structural_equality(self) -> None:
        assert Variable("a") == Variable("a")
        assert Variable("a") is not Variable("a")

    def test_is_frozen(self) -> None:
        variable = Variable("a")
        with pytest.raises(AttributeError):
            variable.name = "b"  # type: ignore[misc]


class TestInvalidNodeError:
    """Tests for InvalidNodeError raised by node validation."""

    def test_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            Return(expr="not an expr")  # type: ignore[arg-type]

    def test_is_inline_check_error(self) -> None:
        with pytest.raises(InlineCheckError):
            Assign(var=var("a"), expr=Param("b"))  # type: ignore[arg-type]

    def test_attributes(self) -> None:
        with pytest.raises(InvalidNodeError) as exc_info:
            Global(vars=(StaticVar("a"),))  # type: ignore[arg-type]
        assert exc_info.value.node_kind == "Global"
        assert exc_info.value.field == "vars"
        assert exc_info.value.got is StaticVar

    def test_tuple_field_rejects_list(self) -> None:
        with pytest.raises(InvalidNodeError, match=r"FuncCall\.args must be tuple, got list"):
            FuncCall(Name("f"), [var("a")])  # type: ignore[arg-type]


class TestAssignOp:
    """Tests for AssignOp operator validation."""

    def test_compound_operator_accepted(self) -> None:
        node = AssignOp(BinaryOperator.CONCAT, var("a"), lit("b"))
        assert node.op is BinaryOperator.CONCAT

    def test_comparison_operator_raises(self) -> None:
        with pytest.raises(ValueError, match="has no compound assignment form"):
            AssignOp(BinaryOperator.IDENTICAL, var("a"), var("b"))


class TestParam:
    """Tests for Param validation."""

    def test_defaults(self) -> None:
        p = Param("a")
        assert p.declared_type is None
        assert p.by_ref is False
        assert p.variadic is False
        assert p.default is None

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="parameter name must not be empty"):
            Param("")

    def test_empty_type_raises(self) -> None:
        with pytest.raises(ValueError, match="declared_type must be non-empty"):
            Param("a", declared_type="")

    def test_variadic_with_default_raises(self) -> None:
        with pytest.raises(ValueError, match="variadic parameter cannot have a default"):
            Param("a", variadic=True, default=lit(1))


class TestDefinitions:
    """Tests for callable and class definitions."""

    def test_function_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="function name must not be empty"):
            FunctionDef("")

    def test_closure_rejects_non_param(self) -> None:
        with pytest.raises(InvalidNodeError, match=r"Closure\.params must be Param"):
            Closure(params=(var("a"),))  # type: ignore[arg-type]

    def test_anonymous_class(self) -> None:
        assert ClassDef().name is None

    def test_class_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="class name must be non-empty"):
            ClassDef(name="")

    def test_new_accepts_anonymous_class(self) -> None:
        node = New(ClassDef())
        assert isinstance(node.class_, ClassDef)


class TestUnaryOp:
    """Tests for UnaryOp."""

    def test_operator_required(self) -> None:
        with pytest.raises(InvalidNodeError):
            UnaryOp(BinaryOperator.MINUS, var("a"))  # type: ignore[arg-type]

    def test_operand_must_be_expression(self) -> None:
        with pytest.raises(InvalidNodeError):
            UnaryOp(UnaryOperator.MINUS, ret())  # type: ignore[arg-type]


class TestIf:
    """Tests for If."""

    def test_defaults(self) -> None:
        node = If(var("a"))
        assert node.stmts == ()
        assert node.else_stmts == ()

    def test_condition_must_be_expression(self) -> None:
        with pytest.raises(InvalidNodeError):
            If(ret())  # type: ignore[arg-type]

    def test_branch_rejects_expression(self) -> None:
        with pytest.raises(InvalidNodeError):
            If(var("a"), else_stmts=(var("b"),))  # type: ignore[arg-type]


class TestUnmodeledConstructs:
    """Tests for OtherExpr and OtherStmt."""

    def test_expression_keeps_children(self) -> None:
        node = OtherExpr("Ternary", (var("a"), lit(1), var("b")))
        assert node.kind == "Ternary"
        assert isinstance(node, Expr)

    def test_statement_accepts_mixed_children(self) -> None:
        node = OtherStmt("Foreach", (var("items"), var("item"), ret(var("item"))))
        assert isinstance(node, Stmt)

    def test_empty_kind_raises(self) -> None:
        with pytest.raises(ValueError, match="expression kind must not be empty"):
            OtherExpr("")
        with pytest.raises(ValueError, match="statement kind must not be empty"):
            OtherStmt("")

    def test_children_must_be_nodes(self) -> None:
        with pytest.raises(InvalidNodeError):
            OtherStmt("Echo", ("$a",))  # type: ignore[arg-type]

    def test_nests_inside_modeled_nodes(self) -> None:
        node = Return(OtherExpr("Isset", (var("a"),)))
        assert node.expr == OtherExpr("Isset", (var("a"),))


class TestIterChildNodes:
    """Tests for iter_child_nodes."""

    def test_field_order(self) -> None:
        node = BinaryOp(BinaryOperator.PLUS, var("a"), var("b"))
        assert list(iter_child_nodes(node)) == [var("a"), var("b")]

    def test_flattens_tuples(self) -> None:
        node = FuncCall(Name("f"), (var("a"), lit(1)))
        assert list(iter_child_nodes(node)) == [Name("f"), var("a"), lit(1)]

    def test_skips_optional_none(self) -> None:
        assert list(iter_child_nodes(ArrayDimFetch(var("a")))) == [var("a")]
        assert list(iter_child_nodes(ret())) == []

    def test_skips_scalar_fields(self) -> None:
        assert list(iter_child_nodes(Literal("x"))) == []
        assert list(iter_child_nodes(Variable("x"))) == []

    def test_closure_children(self) -> None:
        closure = Closure(params=(param("a"),), stmts=(ret(var("a")),))
        assert list(iter_child_nodes(closure)) == [param("a"), ret(var("a"))]

    def test_static_declaration_children(self) -> None:
        node = Static((StaticVar("a", lit(1)),))
        assert list(iter_child_nodes(node)) == [StaticVar("a", lit(1))]

    def test_if_children(self) -> None:
        node = If(var("c"), (ret(var("a")),), (ret(var("b")),))
        assert list(iter_child_nodes(node)) == [var("c"), ret(var("a")), ret(var("b"))]

    def test_unmodeled_construct_children(self) -> None:
        node = OtherStmt("Echo", (var("a"), lit("x")))
        assert list(iter_child_nodes(node)) == [var("a"), lit("x")]
