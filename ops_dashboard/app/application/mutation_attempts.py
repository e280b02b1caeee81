from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MutationState:
    in_flight: set[str] = field(default_factory=set)


def mutation_key(action: str, row_id: str) -> str:
    return f"{action}:{row_id}"


def begin_mutation(state: MutationState, operation: str) -> bool:
    if operation in state.in_flight:
        return False
    state.in_flight.add(operation)
    return True


def end_mutation(state: MutationState, operation: str) -> None:
    state.in_flight.discard(operation)
