from typing import List, Optional

from tree_sitter import Node

from gocyclo.config import BAD_RECEIVER, FUNCTION_NODE_TYPES
from gocyclo.models import Measurement, Position
from gocyclo.services.complexity import complexity
from gocyclo.services.go_parser import ParsedFile


def build_measurements(parsed: ParsedFile) -> List[Measurement]:
    """
    Build one Measurement per top-level function or method, in declaration
    order. Types, vars, consts and imports are skipped.
    """
    results = []
    for decl in parsed.root.children:
        if decl.type not in FUNCTION_NODE_TYPES:
            continue
        results.append(
            Measurement(
                package_name=parsed.package_name,
                function_name=function_name(decl),
                complexity=complexity(decl),
                position=Position(
                    filename=parsed.filename,
                    line=decl.start_point.row + 1,
                    column=decl.start_point.column + 1,
                ),
            )
        )
    return results


def function_name(node: Node) -> str:
    """
    Name of a function, or "(T).Name" / "(*T).Name" for a method.
    """
    name = node.child_by_field_name('name').text.decode('utf-8')
    receiver = node.child_by_field_name('receiver')
    if receiver is not None:
        recv_type = _first_receiver_type(receiver)
        if recv_type is not None:
            return f"({receiver_string(recv_type)}).{name}"
    return name


def _first_receiver_type(receiver: Node) -> Optional[Node]:
    for param in receiver.named_children:
        if param.type in {'parameter_declaration', 'variadic_parameter_declaration'}:
            return param.child_by_field_name('type')
    return None


def receiver_string(recv: Optional[Node]) -> str:
    """Render a receiver type as "T", "*T", or BADRECV for anything else."""
    if recv is None:
        return BAD_RECEIVER
    if recv.type == 'type_identifier':
        return recv.text.decode('utf-8')
    if recv.type == 'pointer_type':
        inner = recv.named_children[0] if recv.named_children else None
        return "*" + receiver_string(inner)
    return BAD_RECEIVER
