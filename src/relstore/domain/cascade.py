"""Delete closure computation."""

from typing import Callable, Iterable

Row = tuple[str, int]
ChildrenOf = Callable[[str, int], Iterable[Row]]


def delete_closure(entity_type: str, entity_id: int, children_of: ChildrenOf) -> list[Row]:
    """Collect every row a delete of (entity_type, entity_id) must remove.

    The walk is depth-first and the result is in post-order: each row comes
    after all of its dependents, with the root last, so executing the list in
    order never leaves a child pointing at a removed parent.

    Args:
        entity_type: Type of the row being deleted
        entity_id: Id of the row being deleted
        children_of: Returns the dependent rows of a given row

    Returns:
        List of (entity_type, id) pairs, root last
    """
    result: list[Row] = []
    seen: set[Row] = set()

    def visit(row: Row) -> None:
        if row in seen:
            return
        seen.add(row)
        for child in children_of(*row):
            visit(child)
        result.append(row)

    visit((entity_type, entity_id))
    return result
