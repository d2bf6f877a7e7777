from tree_sitter import Node

# Node kinds that each open one more path through a function. The function
# declaration itself supplies the baseline path. `else if` is a nested
# if_statement, and for_statement covers every loop form including range.
# Switch and select defaults are both parsed as default_case.
BRANCH_NODE_TYPES = frozenset({
    'function_declaration',
    'method_declaration',
    'if_statement',
    'for_statement',
    'expression_case',
    'type_case',
    'default_case',
    'communication_case',
})

LOGICAL_OPERATORS = frozenset({'&&', '||'})


def complexity(func_node: Node) -> int:
    """
    Calculate the cyclomatic complexity of a function or method declaration.

    Every node in the subtree is visited once, including the bodies of
    closures, so branches inside a func literal count towards the function
    that contains it.
    """
    total = 0
    stack = [func_node]
    while stack:
        node = stack.pop()
        if node.type in BRANCH_NODE_TYPES:
            total += 1
        elif node.type == 'binary_expression' and _is_logical(node):
            total += 1
        stack.extend(node.children)
    return total


def _is_logical(node: Node) -> bool:
    operator = node.child_by_field_name('operator')
    return operator is not None and operator.type in LOGICAL_OPERATORS
