from __future__ import annotations

from dataclasses import dataclass, field


# One spreadsheet row keyed by header. Values are always trimmed strings.
Record = dict[str, str]


@dataclass(frozen=True)
class ConditionSet:
    requested_tags: tuple[str, ...] = ()
    weekday_tags: tuple[str, ...] = ()
    free_words: tuple[str, ...] = ()
    drugstore_only: bool = False


@dataclass(frozen=True)
class SearchResult:
    result: list[Record] = field(default_factory=list)
    conditions: ConditionSet = field(default_factory=ConditionSet)

    @property
    def requested_tags(self) -> tuple[str, ...]:
        return self.conditions.requested_tags

    @property
    def free_words(self) -> tuple[str, ...]:
        return self.conditions.free_words

    def __len__(self) -> int:
        return len(self.result)
