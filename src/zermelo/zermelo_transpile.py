"""
Provides the `Transpiler` class and emitter interface for converting Zermelo ASTs into code.

Classes and Features:
    - Emitter (Protocol): Interface for all backend emitters. Requires `__init__` and `get_output`.
    - Transpiler: Uses the emitter registered for the selected target (e.g., "py")
      and dispatches the `program` node to the corresponding `emit_*` method.

Example:
    >>> transpiler = Transpiler("py")
    >>> output_code = transpiler.transpile(program_node)

Raises:
    ValueError: If the target language is not supported.
    TypeError: If the AST is not an ASTNode.
    NotImplementedError: If the emitter lacks an `emit_*` method for a node kind.
"""

from typing import Protocol

from zermelo.emitters.py_emitter import PythonEmitter
from zermelo.zermelo_ast import ASTNode


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all Zermelo language emitters.

    Methods:
        __init__(): Initializes the emitter.
        get_output(): Returns the complete emitted code as a string.
    """

    def __init__(self) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""


class Transpiler:
    """Dispatches Zermelo AST nodes to the appropriate target language emitter.

    Attributes:
        emitter (Emitter): The selected emitter instance for the output target.
    """

    def __init__(self, target: str) -> None:
        """Initializes the transpiler with the desired output target.

        Args:
            target: The desired output language ("py" or "python").

        Raises:
            ValueError: If the target language is not supported.
        """
        emitters: dict[str, EmitterType] = {
            "py": PythonEmitter,
            "python": PythonEmitter,
        }
        target = target.lower()
        if target not in emitters:
            raise ValueError(f"Unknown transpilation target: {target!r}")
        self.emitter: Emitter = emitters[target]()

    def transpile(self, ast: ASTNode) -> str:
        """Transpiles a parsed program into source code for the selected target.

        Args:
            ast: The `program` node returned by `Parser.parse()`.

        Returns:
            The emitted source code as a string.

        Raises:
            TypeError: If `ast` is not an ASTNode.
        """
        if not isinstance(ast, ASTNode):
            raise TypeError("Transpiler input must be an ASTNode instance.")
        self._visit(ast)
        return self.emitter.get_output()

    def _visit(self, node: ASTNode) -> None:
        """Invokes the appropriate emit method on the emitter for a given AST node.

        Raises:
            NotImplementedError: If the emitter does not support the node kind.
        """
        method_name = f"emit_{node.kind}"
        if hasattr(self.emitter, method_name):
            emit_method = getattr(self.emitter, method_name)
            emit_method(node)
        else:
            raise NotImplementedError(f"No emitter method for node kind '{node.kind}'")
