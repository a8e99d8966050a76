"""Association gates: pre-commit hooks that can veto an association change.

A gate is a named predicate ``(owner, candidate, existing_count) -> bool``
where ``owner`` is the owner entity, ``candidate`` the child being added or
removed (a field mapping on add, the child entity on remove) and
``existing_count`` the owner's current number of children through the
association. Gates return ``False`` to deny; they never raise to abort.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

from relstore.domain.errors import GatingDenied
from relstore.utils.logging import get_logger

logger = get_logger("gates")

GatePredicate = Callable[[Any, Any, int], bool]
Observer = Callable[[str, Any, Any], None]


@dataclass(frozen=True)
class Gate:
    """Named allow/deny predicate."""

    name: str
    predicate: GatePredicate
    reason: Optional[str] = None


class GateChain:
    """Ordered gates evaluated with short-circuit on the first deny."""

    def __init__(self, gates: Iterable[Gate] = ()):
        self._gates: list[Gate] = list(gates)

    def add(self, gate: Gate) -> "GateChain":
        self._gates.append(gate)
        return self

    def __iter__(self) -> Iterator[Gate]:
        return iter(self._gates)

    def __len__(self) -> int:
        return len(self._gates)

    def evaluate(
        self,
        owner_type: str,
        owner: Any,
        association: str,
        candidate: Any,
        existing_count: int,
    ) -> Optional[GatingDenied]:
        """Run the chain.

        Returns:
            None when every gate allows, otherwise the denial from the first
            gate that rejected the change.
        """
        for gate in self._gates:
            if not gate.predicate(owner, candidate, existing_count):
                logger.info(
                    "%s %s.%s change denied by %s",
                    owner_type,
                    owner.id,
                    association,
                    gate.name,
                )
                return GatingDenied(
                    gate=gate.name,
                    owner_type=owner_type,
                    owner_id=owner.id,
                    association=association,
                    reason=gate.reason,
                )
        return None


def credit_limit(threshold: int) -> Gate:
    """Gate that denies once the owner already holds ``threshold`` children."""

    def within_limit(owner: Any, candidate: Any, existing_count: int) -> bool:
        return existing_count < threshold

    return Gate(
        name="check_credit_limit",
        predicate=within_limit,
        reason=f"limit of {threshold} reached",
    )


def log_addition(association: str, owner: Any, child: Any) -> None:
    logger.info("Added %s %s to %s %s", association, child.id, type(owner).__name__, owner.id)


def log_removal(association: str, owner: Any, child: Any) -> None:
    logger.info("Removed %s %s from %s %s", association, child.id, type(owner).__name__, owner.id)
