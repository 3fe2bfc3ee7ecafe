"""Branch / Condition / CompiledTemplate.

A Condition is built branch by branch while the parser walks the template,
then validated once. Validation is cached against a structural hash of the
condition, so repeated apply() calls do not re-check the structure.
A structural hash of 0 means "incomplete" and is never trusted as a cache hit.
"""

import re
from dataclasses import dataclass, field

from condfmt.core.types import Operand, Operator, PointerRef, RangeLiteral
from condfmt.errors import TemplateSyntaxError

# target_pointer of the '*' branch
ELSE_POINTER = -1

PLACEHOLDER_PATTERN = re.compile(r'\{(0|[1-9][0-9]*)\}')


@dataclass
class Branch:
    """One conditional clause: {target} op operand : result."""

    target_pointer: int | None = None
    operator: Operator | None = None
    negate: bool = False
    operand: Operand | None = None
    result: str | None = None

    @property
    def is_else(self) -> bool:
        return self.target_pointer == ELSE_POINTER

    @property
    def is_complete(self) -> bool:
        if self.is_else:
            return bool(self.result)
        return (
            self.target_pointer is not None
            and self.target_pointer >= 0
            and self.operator is not None
            and self.operand is not None
            and bool(self.result)
        )

    def structural_hash(self) -> int:
        """Order-sensitive fingerprint; 0 if the branch is incomplete."""
        if not self.is_complete:
            return 0
        return hash((
            self.target_pointer,
            self.operator,
            self.negate,
            self.operand,
            self.result,
        ))

    def __str__(self) -> str:
        if self.is_else:
            return f'Branch[else, result: "{self.result}"]'
        op = self.operator.symbol if self.operator else None
        return (f'Branch[obj: {self.target_pointer}, op: {op}, negate: {self.negate}, '
                f'against: {self.operand}, result: "{self.result}"]')


@dataclass(eq=False)
class Condition:
    """
    An ordered list of branches plus a mandatory else branch.

    `prefix` is the plain text that preceded the condition in the template.
    Branch order is first-match priority.
    """

    prefix: str = ""
    branches: list[Branch] = field(default_factory=list)
    else_branch: Branch | None = None

    # Hash recorded by the last successful validate(); 0 = not validated
    _validated_hash: int = field(default=0, init=False, repr=False)

    def structural_hash(self) -> int:
        if self.else_branch is None or self.prefix is None:
            return 0

        branch_hashes = []
        for branch in self.branches:
            h = branch.structural_hash()
            if h == 0:
                return 0
            branch_hashes.append(h)

        return hash((tuple(branch_hashes), hash(self.else_branch.result), hash(self.prefix)))

    @property
    def is_validated(self) -> bool:
        h = self.structural_hash()
        return h != 0 and h == self._validated_hash

    def validate(self) -> None:
        """
        Check structural completeness, or raise TemplateSyntaxError.

        Skipped when nothing changed since the last successful validation.
        """
        if self.is_validated:
            return

        self._validated_hash = 0

        if self.prefix is None:
            self.prefix = ""

        if not self.branches:
            raise TemplateSyntaxError("missing conditional branches")

        if self.else_branch is None:
            raise TemplateSyntaxError("missing else branch")

        if not self.else_branch.result:
            raise TemplateSyntaxError("missing result at the else branch")

        for i, branch in enumerate(self.branches):
            if branch.target_pointer is None or branch.target_pointer < 0:
                raise TemplateSyntaxError(f"missing target obj pointer at branch {i}",
                                          details={'branch': i})
            if branch.operator is None:
                raise TemplateSyntaxError(f"missing comparison operator at branch {i}",
                                          details={'branch': i})
            if branch.operand is None:
                raise TemplateSyntaxError(f"missing against obj at branch {i}",
                                          details={'branch': i})
            if not branch.result:
                raise TemplateSyntaxError(f"missing result at branch {i}",
                                          details={'branch': i})
            if (branch.operator == Operator.RANGE) != isinstance(branch.operand, RangeLiteral):
                raise TemplateSyntaxError(f"range operand requires the range operator at branch {i}",
                                          details={'branch': i})

        # Recompute: prefix may have been normalized above
        self._validated_hash = self.structural_hash()

    def pointers(self) -> set[int]:
        """Argument indices this condition's branches read."""
        indices = set()
        for branch in self.branches:
            if branch.target_pointer is not None and branch.target_pointer >= 0:
                indices.add(branch.target_pointer)
            if isinstance(branch.operand, PointerRef):
                indices.add(branch.operand.index)
        return indices

    def __str__(self) -> str:
        self.validate()
        branches = ", ".join(str(b) for b in self.branches) or "none"
        return f'Condition: {{ branches: ({branches}); elseBranch: {self.else_branch}; pre: "{self.prefix}"}}'


@dataclass(frozen=True)
class CompiledTemplate:
    """Parsed template, ready for repeated rendering."""

    source: str
    conditions: tuple[Condition, ...]
    tail: str

    @property
    def placeholders(self) -> list[int]:
        """Sorted argument indices this template can reference."""
        indices = set()
        texts = [self.tail]
        for condition in self.conditions:
            indices |= condition.pointers()
            texts.append(condition.prefix)
            texts.extend(b.result for b in condition.branches)
            texts.append(condition.else_branch.result)
        for text in texts:
            indices.update(int(m) for m in PLACEHOLDER_PATTERN.findall(text))
        return sorted(indices)

    def format(self, *args) -> str:
        from condfmt.renderer import render
        return render(self, *args)

    def __str__(self) -> str:
        return f"CompiledTemplate({self.source!r}, conditions={len(self.conditions)})"
