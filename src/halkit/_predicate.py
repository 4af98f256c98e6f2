"""Endpoint match predicates.

An endpoint matches an href when every condition it declares holds:

    path template  ->  SinglePredicate(PathInput(), PathTemplateMatcher(...))
    required query ->  SinglePredicate(QueryParamInput(name), ExactMatcher(value))

The conditions are joined with And. Optional (placeholder) query parameters
contribute no condition at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from halkit._types import DataInput, InputMatcher


@dataclass(frozen=True, slots=True)
class SinglePredicate[Ctx]:
    """One condition: pull a value out of the context and test it.

    A value the input cannot find (None) fails the condition; the matcher
    is not consulted. This is how an absent required query parameter turns
    into a non-match.
    """

    input: DataInput[Ctx]
    matcher: InputMatcher

    def evaluate(self, ctx: Ctx) -> bool:
        value = self.input.get(ctx)
        return value is not None and self.matcher.matches(value)


@dataclass(frozen=True, slots=True)
class And[Ctx]:
    """Every condition must hold; stops at the first failure.

    With no conditions it holds for any context.
    """

    predicates: tuple[Predicate[Ctx], ...]

    def evaluate(self, ctx: Ctx) -> bool:
        for p in self.predicates:
            if not p.evaluate(ctx):
                return False
        return True


type Predicate[Ctx] = SinglePredicate[Ctx] | And[Ctx]


def and_predicate[Ctx](
    predicates: list[Predicate[Ctx]], catch_all: Predicate[Ctx]
) -> Predicate[Ctx]:
    """Join conditions into the smallest equivalent predicate.

    No conditions gives catch_all, a single condition is returned as is,
    and anything more is wrapped in And.
    """
    match predicates:
        case []:
            return catch_all
        case [only]:
            return only
        case _:
            return And(tuple(predicates))
