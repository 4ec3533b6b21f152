"""
Translates Zermelo AST nodes into executable Python code.

This module defines the `PythonEmitter` class, responsible for converting Zermelo
abstract syntax trees (ASTs) into Python source that drives a
`zermelo.zermelo_runtime.Machine`. It is used by the `Transpiler` during the
backend phase of Zermelo's compilation process.

Supported Features:
    - Expressions: integer literals, the `%` variable, set literals
    - Statements: membership flip, character output, set operations,
      complement, increment, character input
    - Control flow: predicate loops (`while`) and character tests (`if`)

Behavior:
    - Emits structured Python code with proper indentation.
    - `program` nodes get a prelude importing the runtime and creating `machine`.
    - Maintains a code buffer (`lines`) which can be retrieved using `get_output()`.

Raises:
    - `NotImplementedError`: If an unrecognized AST kind has no corresponding emitter.

Example output for `* 3 ⊆ {1, 2, 3} [ :: ]`:

    from zermelo.zermelo_runtime import Machine, ZSet

    machine = Machine()
    machine.flip(3)
    while machine.holds('SUBSET', ZSet.of(1, 2, 3)):
        machine.increment()
"""

from zermelo.zermelo_ast import ASTNode

MACHINE = "machine"
PRELUDE = [
    "from zermelo.zermelo_runtime import Machine, ZSet",
    "",
    f"{MACHINE} = Machine()",
]


class PythonEmitter:
    """Emits Python code from Zermelo AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted Python code.
        indent (int): Current indentation level for emitted code blocks.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_line(self, code: str) -> None:
        self.lines.append(f"{self.indent_str()}{code}")

    def emit_block(self, header: str, body: tuple[ASTNode, ...]) -> None:
        self.emit_line(header)
        self.indent += 1
        if not body:
            self.emit_line("pass")
        for stmt in body:
            self._visit(stmt)
        self.indent -= 1

    # Expressions

    def emit_integer(self, node: ASTNode) -> str:
        try:
            return str(node.value)
        except ValueError:
            # past the decimal conversion limit; hex has none
            return hex(node.value)

    def emit_variable(self, node: ASTNode) -> str:
        return f"{MACHINE}.var"

    def emit_set(self, node: ASTNode) -> str:
        """
        Emits a set literal as a `ZSet.of(...)` call.

        Parameters
        ----------
        node : ASTNode
            A set node whose children are `integer` or `variable` nodes.
        """
        elements = ", ".join(self.emit_expr(e) for e in node.children)
        return f"ZSet.of({elements})"

    def emit_expr(self, node: ASTNode) -> str:
        """
        Dispatches expression emission based on node kind.

        Raises
        ------
        NotImplementedError
            If the node is not an expression or set literal.
        """
        if node.kind == "integer":
            return self.emit_integer(node)
        if node.kind == "variable":
            return self.emit_variable(node)
        if node.kind == "set":
            return self.emit_set(node)
        raise NotImplementedError(f"PythonEmitter: {node.kind} is not an expression")

    # Statements

    def emit_program(self, node: ASTNode) -> None:
        """
        Emits the runtime prelude followed by every top-level statement.

        Parameters
        ----------
        node : ASTNode
            The root `program` node.
        """
        self.lines.extend(PRELUDE)
        for stmt in node.children:
            self._visit(stmt)

    def emit_flip(self, node: ASTNode) -> None:
        self.emit_line(f"{MACHINE}.flip({self.emit_expr(node.children[0])})")

    def emit_print_char(self, node: ASTNode) -> None:
        self.emit_line(f"{MACHINE}.put({node.value!r})")

    def emit_set_op(self, node: ASTNode) -> None:
        """
        Emits a set operation against the implicit current set.

        Parameters
        ----------
        node : ASTNode
            A set_op node with the operator tag in `value` and the right operand
            as its only child.
        """
        operand = self.emit_expr(node.children[0])
        self.emit_line(f"{MACHINE}.apply({node.value!r}, {operand})")

    def emit_loop(self, node: ASTNode) -> None:
        """
        Emits a `while` loop re-evaluating the guard set on each iteration.

        Parameters
        ----------
        node : ASTNode
            A loop node with the predicate tag in `value`, the guard set as the
            first child and the body after it.
        """
        guard = self.emit_expr(node.guard)
        self.emit_block(f"while {MACHINE}.holds({node.value!r}, {guard}):", node.body)

    def emit_if_char(self, node: ASTNode) -> None:
        self.emit_block(f"if {MACHINE}.matches({node.value!r}):", node.body)

    def emit_complement(self, node: ASTNode) -> None:
        self.emit_line(f"{MACHINE}.complement()")

    def emit_increment(self, node: ASTNode) -> None:
        self.emit_line(f"{MACHINE}.increment()")

    def emit_input_char(self, node: ASTNode) -> None:
        self.emit_line(f"{MACHINE}.read()")

    def _visit(self, node: ASTNode) -> None:
        """
        Dispatches a statement node to the appropriate emit method.

        Raises
        ------
        NotImplementedError
            If no emitter is defined for the node kind.
        """
        meth = getattr(self, f"emit_{node.kind}", None)
        if not meth or node.kind in ("integer", "variable", "set"):
            raise NotImplementedError(f"PythonEmitter: no emitter for {node.kind}")
        meth(node)
