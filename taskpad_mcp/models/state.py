"""Transient view state for the task list."""

from pydantic import BaseModel, ConfigDict

from taskpad_mcp.enums import SearchMode, SortKey, StatusFilter


class UIState(BaseModel):
    """Immutable snapshot of filter, sort, selection and edit state.

    Never mutated in place; the reducers in ``taskpad_mcp.core.view`` return
    updated copies.
    """

    model_config = ConfigDict(frozen=True)

    filter: StatusFilter = StatusFilter.ALL
    search_query: str = ""
    sort_by: SortKey = SortKey.DATE
    search_mode: SearchMode = SearchMode.AND
    selected: frozenset[int] = frozenset()
    expanded: frozenset[int] = frozenset()
    editing_id: int | None = None
