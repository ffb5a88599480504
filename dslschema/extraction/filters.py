"""Member inclusion policies.

A MemberFilter decides whether a declared member is looked at by the
extractor. Filters compose with all_of / any_of / negate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from dslschema.extraction.descriptors import (
    FunctionDescriptor,
    HiddenInDslTag,
    RestrictedTag,
)
from dslschema.extraction.protocols import MemberFilter


@dataclass(frozen=True)
class PredicateMemberFilter:
    """MemberFilter backed by a plain predicate."""

    predicate: Callable[[FunctionDescriptor], bool]
    description: str = ""

    def should_include_member(self, member: FunctionDescriptor) -> bool:
        return self.predicate(member)


def member_filter(
    predicate: Callable[[FunctionDescriptor], bool], description: str = ""
) -> MemberFilter:
    """Wrap a predicate as a MemberFilter."""
    return PredicateMemberFilter(predicate, description or getattr(predicate, "__name__", ""))


def all_of(*filters: MemberFilter) -> MemberFilter:
    return member_filter(
        lambda member: all(f.should_include_member(member) for f in filters),
        "all_of",
    )


def any_of(*filters: MemberFilter) -> MemberFilter:
    return member_filter(
        lambda member: any(f.should_include_member(member) for f in filters),
        "any_of",
    )


def negate(inner: MemberFilter) -> MemberFilter:
    return member_filter(lambda member: not inner.should_include_member(member), "negate")


is_public = member_filter(lambda member: member.is_public, "is_public")

# Default policy: only members explicitly opted in to the restricted language.
is_public_and_restricted = member_filter(
    lambda member: member.is_public and member.has_tag(RestrictedTag),
    "is_public_and_restricted",
)

is_public_and_not_hidden = member_filter(
    lambda member: member.is_public and not member.has_tag(HiddenInDslTag),
    "is_public_and_not_hidden",
)
