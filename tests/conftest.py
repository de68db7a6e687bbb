"""Shared pytest fixtures for docgen-mcp test suite.

This module provides hand-built syntax trees shaped like the tree-sitter
Java and Kotlin grammars, so pipeline tests do not depend on a parser.
"""

# Add project root to path for imports
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from docgen_mcp.models.syntax import SyntaxNode  # noqa: E402


def make_node(
    kind: str,
    text: str = "",
    children: Optional[List[SyntaxNode]] = None,
    field_name: Optional[str] = None,
    named: bool = True,
    language: str = "java",
) -> SyntaxNode:
    """Build a SyntaxNode with its children's parent links wired."""
    return SyntaxNode(
        kind=kind,
        language=language,
        text=text,
        end_byte=len(text),
        field_name=field_name,
        named=named,
        children=children or [],
    )


def token(text: str, language: str = "java") -> SyntaxNode:
    return make_node(text, text, named=False, language=language)


# ============================================================================
# Java Trees
# ============================================================================

def build_java_parameter(type_text: str, name: Optional[str]) -> SyntaxNode:
    children = [make_node("integral_type" if type_text == "int" else "type_identifier", type_text, field_name="type")]
    if name is not None:
        children.append(make_node("identifier", name, field_name="name"))
    return make_node("formal_parameter", f"{type_text} {name or ''}".strip(), children)


def build_java_method(
    name: str = "add",
    parameters: Optional[List[tuple]] = None,
    return_type: Optional[str] = "int",
    kind: str = "method_declaration",
) -> Dict[str, SyntaxNode]:
    """Build ``public int add(int a, int b) { return a + b; }`` inside a class.

    Returns:
        dict of interesting nodes: program, class_body, method, cursor, params
    """
    if parameters is None:
        parameters = [("int", "a"), ("int", "b")]

    param_children: List[SyntaxNode] = [token("(")]
    for i, (type_text, param_name) in enumerate(parameters):
        if i:
            param_children.append(token(","))
        param_children.append(build_java_parameter(type_text, param_name))
    param_children.append(token(")"))
    params_text = "(" + ", ".join(f"{t} {n or ''}".strip() for t, n in parameters) + ")"
    formal = make_node("formal_parameters", params_text, param_children, field_name="parameters")

    cursor = make_node("identifier", "a")
    body = make_node(
        "block",
        "{ return a + b; }",
        [
            token("{"),
            make_node("return_statement", "return a + b;", [
                token("return"),
                make_node("binary_expression", "a + b", [cursor, token("+"), make_node("identifier", "b")]),
                token(";"),
            ]),
            token("}"),
        ],
        field_name="body",
    )

    method_children: List[SyntaxNode] = [make_node("modifiers", "public", [token("public")])]
    if return_type is not None:
        method_children.append(make_node("integral_type", return_type, field_name="type"))
    method_children.append(make_node("identifier", name, field_name="name"))
    method_children.extend([formal, body])

    signature_text = f"public {return_type + ' ' if return_type else ''}{name}{params_text} {{ return a + b; }}"
    method = make_node(kind, signature_text, method_children)

    class_body = make_node("class_body", "{ ... }", [token("{"), method, token("}")], field_name="body")
    class_decl = make_node("class_declaration", "public class Calculator { ... }", [
        make_node("modifiers", "public", [token("public")]),
        token("class"),
        make_node("identifier", "Calculator", field_name="name"),
        class_body,
    ])
    program = make_node("program", class_decl.text, [class_decl])

    return {
        "program": program,
        "class_declaration": class_decl,
        "class_name": class_decl.children[2],
        "class_body": class_body,
        "method": method,
        "body": body,
        "cursor": cursor,
        "formal_parameters": formal,
    }


# ============================================================================
# Kotlin Trees
# ============================================================================

def build_kotlin_function(
    name: str = "greet",
    parameters: Optional[List[tuple]] = None,
    return_type: Optional[str] = "String",
) -> Dict[str, SyntaxNode]:
    """Build ``fun greet(name: String): String = name`` at file scope."""
    if parameters is None:
        parameters = [("name", "String")]

    def k(kind: str, text: str = "", children: Optional[List[SyntaxNode]] = None, named: bool = True) -> SyntaxNode:
        return make_node(kind, text, children, named=named, language="kotlin")

    param_children: List[SyntaxNode] = [k("(", "(", named=False)]
    for i, (param_name, type_text) in enumerate(parameters):
        if i:
            param_children.append(k(",", ",", named=False))
        param_children.append(k("parameter", f"{param_name}: {type_text}", [
            k("simple_identifier", param_name),
            k(":", ":", named=False),
            k("user_type", type_text, [k("type_identifier", type_text)]),
        ]))
    param_children.append(k(")", ")", named=False))
    params_text = "(" + ", ".join(f"{n}: {t}" for n, t in parameters) + ")"

    cursor = k("simple_identifier", "name")
    function_children: List[SyntaxNode] = [
        k("fun", "fun", named=False),
        k("simple_identifier", name),
        k("function_value_parameters", params_text, param_children),
    ]
    if return_type is not None:
        function_children.append(k(":", ":", named=False))
        function_children.append(k("user_type", return_type, [k("type_identifier", return_type)]))
    function_children.append(k("function_body", "= name", [k("=", "=", named=False), cursor]))

    function = k(
        "function_declaration",
        f"fun {name}{params_text}{': ' + return_type if return_type else ''} = name",
        function_children,
    )
    source_file = k("source_file", function.text, [function])
    return {"source_file": source_file, "function": function, "cursor": cursor}


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def java_tree() -> Dict[str, SyntaxNode]:
    """Java class with one ``int add(int a, int b)`` method."""
    return build_java_method()


@pytest.fixture
def kotlin_tree() -> Dict[str, SyntaxNode]:
    """Kotlin file with one ``greet(name: String): String`` function."""
    return build_kotlin_function()


@pytest.fixture
def java_source() -> str:
    return (
        "public class Calculator {\n"
        "    public int add(int a, int b) {\n"
        "        return a + b;\n"
        "    }\n"
        "}\n"
    )


@pytest.fixture
def kotlin_source() -> str:
    return (
        "fun greet(name: String): String {\n"
        "    return name\n"
        "}\n"
    )


# Factory Fixtures

@pytest.fixture
def java_tree_factory():
    """Factory building Java method trees with custom name, parameters and return type."""
    return build_java_method


@pytest.fixture
def kotlin_tree_factory():
    """Factory building Kotlin function trees with custom name, parameters and return type."""
    return build_kotlin_function


@pytest.fixture
def node_factory():
    """Factory building bare SyntaxNodes."""
    return make_node
